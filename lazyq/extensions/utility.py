from __future__ import annotations
import typing
from ..types import *
from ..errors import ensure_callable
from ..protocol import Enumerator, EmptyEnumerator, Operator

if typing.TYPE_CHECKING:
    from ..enumerable import Enumerable


class _TapEnumerator(Operator[T]):
    def __init__(self, upstream: Enumerator[T], action: Action[T]):
        super().__init__(upstream)
        self._action = action

    def _advance(self) -> Pulled[T]:
        item, ok = self._upstream.pull()
        if ok:
            self._action(item)
        return item, ok


class _MemoCache(Generic[T]):
    """
    shared by every traversal of a memoized enumerable. the source is pulled
    at most once per element; traversals replay the cached prefix first.
    """
    def __init__(self, source_func: Callable[[], Enumerator[T]]):
        self._source_func = source_func
        self._source: Optional[Enumerator[T]] = None
        self._items: List[T] = []
        self._is_fully_enumerated = False

    def item_at(self, index: int) -> Pulled[T]:
        while index >= len(self._items):
            if self._is_fully_enumerated:
                return None, False
            if self._source is None:
                self._source = self._source_func()
            item, ok = self._source.pull()
            if not ok:
                self._is_fully_enumerated = True
                self._source = EmptyEnumerator()
                return None, False
            self._items.append(item)
        return self._items[index], True


class _MemoEnumerator(Enumerator[T]):
    def __init__(self, cache: _MemoCache[T]):
        super().__init__()
        self._cache = cache
        self._index = 0

    def _advance(self) -> Pulled[T]:
        item, ok = self._cache.item_at(self._index)
        if ok:
            self._index += 1
        return item, ok


class UtilityAccessor(Generic[T]):
    def __init__(self, enumerable_instance: 'Enumerable[T]'):
        self._enumerable = enumerable_instance

    def side_effect(self, action: Action[T]) -> 'Enumerable[T]':
        """
        performs a side-effect action for each element as it passes through the sequence
        without modifying it. lazy: the action runs when the element is pulled, once per pull.
        example: .where(...).util.side_effect(print).select(...)
        """
        ensure_callable('side_effect', 'action', action)
        source = self._enumerable
        return source._derive(lambda: _TapEnumerator(source.get_enumerator(), action))

    def memoize(self) -> 'Enumerable[T]':
        """
        returns an enumerable that caches elements as they are first pulled.
        this operation is LAZY and makes one-shot sources (iterators, channels)
        replayable. the cache holds every element pulled so far.
        """
        source = self._enumerable
        cache = _MemoCache(source.get_enumerator)
        return source._derive(lambda: _MemoEnumerator(cache))

    def pipe(self, func: Callable[..., U], *args, **kwargs) -> U:
        """
        pipes the enumerable object into an external function. enables custom, chainable operations.
        example: .util.pipe(my_custom_operator, window=3)
        """
        return func(self._enumerable, *args, **kwargs)

    def apply_if(self, condition: bool, operation: Callable[['Enumerable[T]'], 'Enumerable[T]']) -> 'Enumerable[T]':
        """conditionally apply operation based on boolean condition"""
        return operation(self._enumerable) if condition else self._enumerable
