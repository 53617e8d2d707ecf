from __future__ import annotations
import typing
from ..types import *
from ..errors import ensure_callable
from ..protocol import Enumerator, EmptyEnumerator, Operator, SliceEnumerator, enumerator_of

if typing.TYPE_CHECKING:
    from ..enumerable import Enumerable

# --- operator nodes ---

class _WhereEnumerator(Operator[T]):
    def __init__(self, upstream: Enumerator[T], predicate: Predicate[T]):
        super().__init__(upstream)
        self._predicate = predicate

    def _advance(self) -> Pulled[T]:
        while True:
            item, ok = self._upstream.pull()
            if not ok:
                return None, False
            if self._predicate(item):
                return item, True


class _SelectEnumerator(Operator[U]):
    def __init__(self, upstream: Enumerator[T], selector: Selector[T, U]):
        super().__init__(upstream)
        self._selector = selector

    def _advance(self) -> Pulled[U]:
        item, ok = self._upstream.pull()
        if not ok:
            return None, False
        return self._selector(item), True


class _SelectWithIndexEnumerator(Operator[U]):
    def __init__(self, upstream: Enumerator[T], selector: Callable[[T, int], U]):
        super().__init__(upstream)
        self._selector = selector
        self._index = 0

    def _advance(self) -> Pulled[U]:
        item, ok = self._upstream.pull()
        if not ok:
            return None, False
        result = self._selector(item, self._index)
        self._index += 1
        return result, True


class _SelectManyEnumerator(Operator[U]):
    """flattens; holds at most one pending inner enumerator"""
    def __init__(self, upstream: Enumerator[T], selector: Selector[T, Iterable[U]]):
        super().__init__(upstream)
        self._selector = selector
        self._inner: Enumerator[U] = EmptyEnumerator()

    def _advance(self) -> Pulled[U]:
        while True:
            item, ok = self._inner.pull()
            if ok:
                return item, True
            outer, ok = self._upstream.pull()
            if not ok:
                return None, False
            self._inner = enumerator_of(self._selector(outer))

    def _release(self) -> None:
        super()._release()
        self._inner = EmptyEnumerator()


class _TakeEnumerator(Operator[T]):
    def __init__(self, upstream: Enumerator[T], count: int):
        super().__init__(upstream)
        self._remaining = count

    def _advance(self) -> Pulled[T]:
        # once count items are out, stop without touching upstream again
        if self._remaining <= 0:
            return None, False
        item, ok = self._upstream.pull()
        if not ok:
            return None, False
        self._remaining -= 1
        return item, True


class _SkipEnumerator(Operator[T]):
    def __init__(self, upstream: Enumerator[T], count: int):
        super().__init__(upstream)
        self._remaining = count

    def _advance(self) -> Pulled[T]:
        while self._remaining > 0:
            _, ok = self._upstream.pull()
            if not ok:
                return None, False
            self._remaining -= 1
        return self._upstream.pull()


class _TakeWhileEnumerator(Operator[T]):
    def __init__(self, upstream: Enumerator[T], predicate: Predicate[T]):
        super().__init__(upstream)
        self._predicate = predicate

    def _advance(self) -> Pulled[T]:
        item, ok = self._upstream.pull()
        if not ok or not self._predicate(item):
            return None, False
        return item, True


class _SkipWhileEnumerator(Operator[T]):
    def __init__(self, upstream: Enumerator[T], predicate: Predicate[T]):
        super().__init__(upstream)
        self._predicate: Optional[Predicate[T]] = predicate

    def _advance(self) -> Pulled[T]:
        while self._predicate is not None:
            item, ok = self._upstream.pull()
            if not ok:
                return None, False
            if not self._predicate(item):
                # the predicate is never consulted again
                self._predicate = None
                return item, True
        return self._upstream.pull()


class _ConcatEnumerator(Enumerator[T]):
    def __init__(self, first: Optional[Enumerator[T]], second: Optional[Enumerator[T]]):
        super().__init__()
        self._first: Enumerator[T] = first if first is not None else EmptyEnumerator()
        self._second: Enumerator[T] = second if second is not None else EmptyEnumerator()
        self._on_second = False

    def _advance(self) -> Pulled[T]:
        if not self._on_second:
            item, ok = self._first.pull()
            if ok:
                return item, True
            self._on_second = True
            self._first = EmptyEnumerator()
        return self._second.pull()

    def _release(self) -> None:
        self._first = EmptyEnumerator()
        self._second = EmptyEnumerator()


class _DefaultIfEmptyEnumerator(Operator[T]):
    def __init__(self, upstream: Enumerator[T], default_value: T):
        super().__init__(upstream)
        self._default_value = default_value
        self._produced = False

    def _advance(self) -> Pulled[T]:
        item, ok = self._upstream.pull()
        if ok:
            self._produced = True
            return item, True
        if not self._produced:
            self._produced = True
            return self._default_value, True
        return None, False

# --- operations mixin ---

class _CoreOperations(Generic[T]):
    def where(self: 'Enumerable[T]', predicate: Predicate[T]) -> 'Enumerable[T]':
        """filter elements based on a predicate"""
        ensure_callable('where', 'predicate', predicate)
        return self._derive(lambda: _WhereEnumerator(self.get_enumerator(), predicate))

    def select(self: 'Enumerable[T]', selector: Selector[T, U]) -> 'Enumerable[U]':
        """project each element to a new form. always returns a base-tier enumerable"""
        from ..enumerable import Enumerable
        ensure_callable('select', 'selector', selector)
        return Enumerable(lambda: _SelectEnumerator(self.get_enumerator(), selector))

    def select_with_index(self: 'Enumerable[T]', selector: Callable[[T, int], U]) -> 'Enumerable[U]':
        """project each element to a new form, using the element's index"""
        from ..enumerable import Enumerable
        ensure_callable('select_with_index', 'selector', selector)
        return Enumerable(lambda: _SelectWithIndexEnumerator(self.get_enumerator(), selector))

    def select_many(self: 'Enumerable[T]', selector: Selector[T, Iterable[U]]) -> 'Enumerable[U]':
        """project and flatten sequences. a None inner sequence counts as empty"""
        from ..enumerable import Enumerable
        ensure_callable('select_many', 'selector', selector)
        return Enumerable(lambda: _SelectManyEnumerator(self.get_enumerator(), selector))

    def take(self: 'Enumerable[T]', count: int) -> 'Enumerable[T]':
        """take the first 'count' elements. negative count is empty"""
        if count < 0:
            return self._derive(None)
        return self._derive(lambda: _TakeEnumerator(self.get_enumerator(), count))

    def skip(self: 'Enumerable[T]', count: int) -> 'Enumerable[T]':
        """
        skip the first 'count' elements. skipped elements are still pulled,
        so upstream side effects happen for them. negative count is empty
        """
        if count < 0:
            return self._derive(None)
        return self._derive(lambda: _SkipEnumerator(self.get_enumerator(), count))

    def take_while(self: 'Enumerable[T]', predicate: Predicate[T]) -> 'Enumerable[T]':
        """take elements while predicate is true; stops for good at the first failure"""
        ensure_callable('take_while', 'predicate', predicate)
        return self._derive(lambda: _TakeWhileEnumerator(self.get_enumerator(), predicate))

    def skip_while(self: 'Enumerable[T]', predicate: Predicate[T]) -> 'Enumerable[T]':
        """skip elements while predicate is true, then pass everything through"""
        ensure_callable('skip_while', 'predicate', predicate)
        return self._derive(lambda: _SkipWhileEnumerator(self.get_enumerator(), predicate))

    def concat(self: 'Enumerable[T]', other: Optional[Iterable[T]]) -> 'Enumerable[T]':
        """all elements of this sequence, then all elements of other"""
        return self._derive(lambda: _ConcatEnumerator(self.get_enumerator(), enumerator_of(other)))

    def append(self: 'Enumerable[T]', element: T) -> 'Enumerable[T]':
        """appends a value to the end of the sequence"""
        return self._derive(lambda: _ConcatEnumerator(self.get_enumerator(), SliceEnumerator((element,))))

    def prepend(self: 'Enumerable[T]', element: T) -> 'Enumerable[T]':
        """adds a value to the beginning of the sequence"""
        return self._derive(lambda: _ConcatEnumerator(SliceEnumerator((element,)), self.get_enumerator()))

    def default_if_empty(self: 'Enumerable[T]', default_value: T) -> 'Enumerable[T]':
        """returns the elements of a sequence, or a default value in a singleton sequence if it is empty"""
        return self._derive(lambda: _DefaultIfEmptyEnumerator(self.get_enumerator(), default_value))

    def of_type(self: 'Enumerable[T]', type_filter: Type[U]) -> 'Enumerable[U]':
        """filters the elements of a sequence based on a specified type"""
        return self.where(lambda item: isinstance(item, type_filter))
