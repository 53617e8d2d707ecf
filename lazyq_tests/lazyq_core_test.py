import itertools
import suite
from dgen import from_schema
from lazyq import P, H, from_range, empty, Enumerable, HashableEnumerable, InvalidArgumentError

test = suite.test
assert_that = suite.assert_that
assert_equal = suite.assert_equal
assert_raises = suite.assert_raises

# test data schemas
person_schema = {
    'id': {'_qen_provider': 'sequence'},
    'name': 'word',
    'age': ('pyint', {'min_value': 18, 'max_value': 65}),
    'department': {'_qen_provider': 'choice', 'from': ['eng', 'sales', 'hr', 'marketing']},
}

# helper data
numbers = P(range(1, 11))  # 1 through 10


def counting(source):
    """wrap source so every upstream pull is recorded"""
    pulled = []
    return source.util.side_effect(pulled.append), pulled


# --- where ---

@test("where filters elements correctly")
def test_where_basic():
    evens = numbers.where(lambda x: x % 2 == 0).to.list()
    assert_equal(evens, [2, 4, 6, 8, 10], "should filter even numbers")


@test("where calls the predicate once per element, in order")
def test_where_predicate_once():
    seen = []
    result = P([3, 1, 4, 1, 5]).where(lambda x: seen.append(x) or x > 2).to.list()
    assert_equal(result, [3, 4, 5])
    assert_equal(seen, [3, 1, 4, 1, 5])


@test("where with complex predicate on generated records")
def test_where_complex():
    people = from_schema(person_schema, seed=42).take(30)
    senior_eng = people.where(lambda p: p['department'] == 'eng' and p['age'] > 40).to.list()
    for person in senior_eng:
        assert_that(person['department'] == 'eng', "all should be engineers")
        assert_that(person['age'] > 40, "all should be over 40")


@test("where handles empty result")
def test_where_empty_result():
    assert_equal(numbers.where(lambda x: x > 100).to.list(), [], "should return empty list for no matches")


# --- select ---

@test("select, select_with_index and select_many project lazily")
def test_select_family():
    assert_equal(P([1, 2, 3]).select(lambda x: x * x).to.list(), [1, 4, 9])
    assert_equal(P(['a', 'b']).select_with_index(lambda x, i: f"{i}:{x}").to.list(), ['0:a', '1:b'])
    nested = P([[1, 2], [], None, [3]])
    assert_equal(nested.select_many(lambda x: x).to.list(), [1, 2, 3], "empty and None inner sequences are skipped")


@test("select_many pulls the next outer element only when the inner one is done")
def test_select_many_lazy():
    source, pulled = counting(P([[1, 2], [3, 4]]))
    e = source.select_many(lambda x: x).get_enumerator()
    e.pull()
    e.pull()
    assert_equal(len(pulled), 1, "second inner list must not be fetched yet")


# --- take / skip ---

@test("take stops pulling after count items")
def test_take_stops_pulling():
    source, pulled = counting(P(itertools.count()))
    e = source.take(3).get_enumerator()
    assert_equal(list(e), [0, 1, 2])
    assert_equal(pulled, [0, 1, 2], "take must not pull a fourth element")
    assert_equal(e.pull(), (None, False))
    assert_equal(len(pulled), 3)


@test("take edge cases")
def test_take_edges():
    source, pulled = counting(numbers)
    assert_equal(source.take(0).to.list(), [])
    assert_equal(pulled, [], "take(0) pulls nothing")
    assert_equal(numbers.take(-1).to.list(), [], "negative count degrades to empty")
    assert_equal(P([1, 2, 3]).take(10).to.list(), [1, 2, 3])


@test("skip still pulls the skipped elements")
def test_skip_pulls():
    source, pulled = counting(P([1, 2, 3, 4]))
    assert_equal(source.skip(2).to.list(), [3, 4])
    assert_equal(pulled, [1, 2, 3, 4])


@test("skip edge cases")
def test_skip_edges():
    assert_equal(numbers.skip(0).to.list(), list(range(1, 11)))
    assert_equal(numbers.skip(-1).to.list(), [], "negative count degrades to empty")
    assert_equal(P([1, 2, 3]).skip(10).to.list(), [])


@test("skip of take has the expected length at the boundaries")
def test_skip_take_composition():
    data = list(range(10))
    for n in (0, 3, 10, 12):
        for m in (0, 4, 20):
            expected = max(0, min(n + m, len(data)) - n)
            actual = P(data).take(n + m).skip(n).to.count()
            assert_equal(actual, expected, f"skip(take(a, {n}+{m}), {n})")


# --- take_while / skip_while ---

@test("take_while stops for good at the first failure")
def test_take_while():
    seen = []
    result = P([1, 2, 5, 1]).take_while(lambda x: seen.append(x) or x < 3).to.list()
    assert_equal(result, [1, 2])
    assert_equal(seen, [1, 2, 5], "the predicate is not called after the failure")


@test("skip_while evaluates the predicate only until the first failure")
def test_skip_while():
    seen = []
    result = P([1, 2, 5, 1, 0]).skip_while(lambda x: seen.append(x) or x < 3).to.list()
    assert_equal(result, [5, 1, 0])
    assert_equal(seen, [1, 2, 5])


# --- concat and friends ---

@test("concat yields all of the first sequence, then the second")
def test_concat():
    a, b = [1, 2], [3, 4, 5]
    result = P(a).concat(b).to.list()
    assert_equal(result, a + b)
    assert_equal(len(result), len(a) + len(b))
    assert_equal(P([1, 2]).concat(None).to.list(), [1, 2], "None is empty")
    assert_equal(empty().concat([1]).to.list(), [1])


@test("concat does not touch the second sequence early")
def test_concat_lazy():
    second, pulled = counting(P([3, 4]))
    assert_equal(P([1, 2]).concat(second).take(2).to.list(), [1, 2])
    assert_equal(pulled, [], "second sequence should not be pulled")


@test("append, prepend, default_if_empty and of_type")
def test_small_operators():
    assert_equal(P([1, 2]).append(3).prepend(0).to.list(), [0, 1, 2, 3])
    assert_equal(empty().default_if_empty(7).to.list(), [7])
    assert_equal(P([1]).default_if_empty(7).to.list(), [1])
    assert_equal(P([1, 'a', 2.5, 'b']).of_type(str).to.list(), ['a', 'b'])


# --- capability tiers ---

@test("type-preserving operators keep the hashable tier")
def test_tier_preserved():
    seq = from_range(0, 5).where(lambda x: x > 1).skip(1).take(2).concat([9])
    assert_that(isinstance(seq, HashableEnumerable), "stateless operators keep the tier")
    assert_equal(seq.set.distinct().to.list(), [3, 4, 9])


@test("select drops to the base tier; as_hashable lifts it back")
def test_tier_select():
    projected = from_range(0, 3).select(lambda x: x * 2)
    assert_that(type(projected) is Enumerable, "select cannot know the new element type")
    assert_that(not hasattr(projected, 'set'), "set operators are not available on the base tier")
    assert_that(not hasattr(P([1]), 'window'), "window operators are not available on the base tier")
    assert_equal(projected.as_hashable().set.distinct().to.list(), [0, 2, 4])
    assert_that(type(H([1]).as_enumerable()) is Enumerable, "as_enumerable drops the tier")


# --- construction-time validation ---

@test("non-callable arguments fail at construction time")
def test_invalid_arguments():
    error = assert_raises(InvalidArgumentError, lambda: numbers.where(None))
    assert_that(isinstance(error, TypeError), "invalid arguments are also TypeErrors")
    assert_equal(error.operator, 'where')
    assert_raises(TypeError, lambda: numbers.select(3))
    assert_raises(TypeError, lambda: numbers.take_while('x'))


# --- scenario ---

@test("union, where, skip and take compose into the documented result")
def test_pipeline_scenario():
    a = H([10, 20, 60, 70])
    b = [30, 40, 80, 90, 100]
    result = a.set.union(b).where(lambda x: x > 50).skip(3).take(2).to.list()
    assert_equal(result, [90, 100])


@test("infinite generated records work with short-circuiting pipelines")
def test_infinite_records():
    people = from_schema(person_schema, seed=7).stream()
    first_five_ids = people.select(lambda p: p['id']).take(5).to.list()
    assert_equal(first_five_ids, [1, 2, 3, 4, 5])


if __name__ == "__main__":
    suite.main("lazyq core operations test suite")
