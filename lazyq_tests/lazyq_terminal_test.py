import itertools
import numpy as np
import pandas as pd
import suite
from collections import namedtuple
from lazyq import P, H, from_range, empty, Enumerable, InvalidArgumentError

test = suite.test
assert_that = suite.assert_that
assert_equal = suite.assert_equal
assert_raises = suite.assert_raises

Person = namedtuple('Person', ['name', 'age', 'city'])

sample_people = [
    Person('alice', 25, 'nyc'),
    Person('bob', 30, 'la'),
    Person('charlie', 25, 'nyc'),
    Person('diana', 35, 'chicago'),
    Person('eve', 28, 'la')
]

sample_numbers = [1, 2, 3, 4, 5, 6, 7, 8, 9, 10]


def counting(source):
    pulled = []
    return source.util.side_effect(pulled.append), pulled


# --- collections ---

@test("list, tuple and set conversions")
def test_collections():
    assert_equal(P(sample_numbers).to.list(), sample_numbers)
    assert_equal(P(sample_numbers).to.tuple(), tuple(sample_numbers))
    assert_equal(P([1, 2, 2, 3]).to.set(), {1, 2, 3})


@test("dict conversion with key and value selectors")
def test_to_dict():
    by_name = P(sample_people).to.dict(lambda p: p.name)
    assert_equal(len(by_name), 5)
    assert_equal(by_name['bob'], sample_people[1])
    ages = P(sample_people).to.dict(lambda p: p.name, lambda p: p.age)
    assert_equal(ages['diana'], 35)
    by_city = P(sample_people).to.dict(lambda p: p.city, lambda p: p.name)
    assert_equal(by_city['nyc'], 'charlie', "a repeated key keeps the last value")


@test("array conversion creates numpy array")
def test_to_array():
    result = P(sample_numbers).to.array()
    assert_that(isinstance(result, np.ndarray), f"should return ndarray: {type(result)}")
    assert_that(np.array_equal(result, np.array(sample_numbers)), f"array conversion failed: {result}")
    assert_equal(P(sample_numbers).to.array(dtype=float).dtype, np.dtype(float))


@test("pandas series and dataframe conversions")
def test_to_pandas():
    series = P(sample_numbers).to.pandas(name='n')
    assert_that(isinstance(series, pd.Series), "should return a series")
    assert_equal(series.name, 'n')
    assert_equal(int(series.sum()), 55)

    frame = P(sample_people).select(lambda p: p._asdict()).to.df()
    assert_that(isinstance(frame, pd.DataFrame), "should return a dataframe")
    assert_equal(list(frame.columns), ['name', 'age', 'city'])
    assert_equal(len(frame), 5)


@test("collection conversions of nil and empty sequences")
def test_collections_empty():
    nil = Enumerable()
    assert_equal(nil.to.list(), [])
    assert_equal(nil.to.dict(lambda x: x), {})
    assert_equal(len(nil.to.array()), 0)
    assert_equal(len(nil.to.pandas()), 0)
    assert_that(empty().to.df().empty, "empty dataframe expected")


# --- folds ---

@test("count, sum and average")
def test_folds():
    assert_equal(P(sample_numbers).to.count(), 10)
    assert_equal(P(sample_numbers).to.count(lambda x: x % 2 == 0), 5)
    assert_equal(P(sample_numbers).to.sum(), 55)
    assert_equal(P(sample_people).to.sum(lambda p: p.age), 143)
    assert_equal(P([1, 2, 3, 4]).to.average(), 2.5)
    assert_equal(empty().to.count(), 0)
    assert_equal(empty().to.sum(), 0)
    assert_equal(empty().to.average(), None, "average of nothing is None")


@test("aggregate with and without seed")
def test_aggregate():
    assert_equal(P([1, 2, 3, 4]).to.aggregate(lambda acc, x: acc * x), 24)
    assert_equal(P(['b', 'c']).to.aggregate(lambda acc, x: acc + x, 'a'), 'abc')
    assert_equal(empty().to.aggregate(lambda acc, x: acc + x), None)
    assert_equal(empty().to.aggregate(lambda acc, x: acc + x, 10), 10)


@test("for_each runs the action once per element, in order")
def test_for_each():
    seen = []
    assert_equal(P([3, 1, 2]).to.for_each(seen.append), None)
    assert_equal(seen, [3, 1, 2])


# --- short-circuiting ---

@test("any and all stop at the first decisive element")
def test_any_all_short_circuit():
    source, pulled = counting(P(itertools.count()))
    assert_that(source.to.any(lambda x: x > 2), "an element above 2 exists")
    assert_equal(pulled, [0, 1, 2, 3])

    source, pulled = counting(P(itertools.count()))
    assert_that(not source.to.all(lambda x: x < 2), "not every element is below 2")
    assert_equal(pulled, [0, 1, 2])


@test("any, all and contains on empty input")
def test_any_all_empty():
    assert_that(not empty().to.any(), "empty has no elements")
    assert_that(empty().to.all(lambda x: False), "all is vacuously true")
    assert_that(P([None]).to.any(), "a None element still counts")
    assert_that(H([1, 2, 3]).to.contains(2), "2 is present")
    assert_that(not empty().to.contains(2), "nothing is present in empty")


@test("first and last with defaults")
def test_first_last():
    assert_equal(P(sample_numbers).to.first(), 1)
    assert_equal(P(sample_numbers).to.first(lambda x: x > 4), 5)
    assert_equal(P(sample_numbers).to.last(), 10)
    assert_equal(P(sample_numbers).to.last(lambda x: x < 4), 3)
    assert_equal(empty().to.first(), None)
    assert_equal(empty().to.first(default=-1), -1)
    assert_equal(P(sample_numbers).to.last(lambda x: x > 99, default=-1), -1)


@test("try_first and try_last tell a None element from absence")
def test_try_first_last():
    assert_equal(P([None, 1]).to.try_first(), (None, True))
    assert_equal(empty().to.try_first(), (None, False))
    assert_equal(P([1, None]).to.try_last(), (None, True))
    assert_equal(empty().to.try_last(), (None, False))


@test("first stops pulling after the first match")
def test_first_short_circuit():
    source, pulled = counting(from_range(0, 100))
    assert_equal(source.to.first(lambda x: x == 3), 3)
    assert_equal(pulled, [0, 1, 2, 3])


@test("element_at returns the element or a default")
def test_element_at():
    assert_equal(P(['a', 'b', 'c']).to.element_at(1), 'b')
    assert_equal(P(['a']).to.element_at(5, 'z'), 'z')
    assert_equal(P(['a']).to.element_at(-1, 'z'), 'z')


# --- argument validation ---

@test("terminal operations reject non-callable predicates and selectors before pulling")
def test_terminal_invalid_arguments():
    source, pulled = counting(P(sample_numbers))
    calls = [
        lambda: source.to.count(5),
        lambda: source.to.sum('age'),
        lambda: source.to.average(1),
        lambda: source.to.any(True),
        lambda: source.to.first(3),
        lambda: source.to.try_first(3),
        lambda: source.to.last('x'),
        lambda: source.to.try_last('x'),
        lambda: source.to.dict(lambda x: x, 'v'),
    ]
    for call in calls:
        assert_raises(InvalidArgumentError, call)
    assert_equal(pulled, [], "nothing is pulled when an argument is rejected")


if __name__ == "__main__":
    suite.main("lazyq terminal operations test suite")
