from __future__ import annotations
import logging
import typing
from ..types import *
from ..config import config
from ..errors import ensure_callable
from ..protocol import Enumerator, EmptyEnumerator, Operator, enumerator_of
from .core import _ConcatEnumerator

if typing.TYPE_CHECKING:
    from ..enumerable import HashableEnumerable

logger = logging.getLogger(__name__)


class _BufferWatch:
    """
    the sets below grow with the number of distinct elements and are never
    trimmed during a traversal. log once if one gets suspiciously large.
    """
    _buffer_warned = False

    def _watch(self, buffer: Set[Any]) -> None:
        threshold = config.buffer_warning_threshold
        if self._buffer_warned or threshold <= 0 or len(buffer) < threshold:
            return
        self._buffer_warned = True
        logger.warning(f"{type(self).__name__} is buffering {len(buffer)} distinct elements; "
                       f"set operators hold every distinct element until the traversal ends")


class _DistinctEnumerator(Operator[H], _BufferWatch):
    def __init__(self, upstream: Enumerator[H], key_selector: Optional[KeySelector[H, K]] = None):
        super().__init__(upstream)
        self._key_selector = key_selector
        self._seen: Optional[Set[Any]] = None

    def _advance(self) -> Pulled[H]:
        if self._seen is None:
            self._seen = set()
        while True:
            item, ok = self._upstream.pull()
            if not ok:
                return None, False
            key = item if self._key_selector is None else self._key_selector(item)
            if key in self._seen:
                continue
            self._seen.add(key)
            self._watch(self._seen)
            return item, True

    def _release(self) -> None:
        super()._release()
        self._seen = None


class _UnionEnumerator(_DistinctEnumerator[H]):
    """distinct over first-then-second"""
    def __init__(self, first: Enumerator[H], second: Enumerator[H]):
        super().__init__(_ConcatEnumerator(first, second))


class _ExceptEnumerator(Operator[H], _BufferWatch):
    """
    the second sequence is drained into a lookup set on the first pull, not before.
    elements of the first sequence are not deduplicated against each other.
    """
    def __init__(self, first: Enumerator[H], second: Enumerator[H]):
        super().__init__(first)
        self._second: Enumerator[H] = second
        self._lookup: Optional[Set[H]] = None

    def _load(self) -> None:
        self._lookup = set(self._second)
        self._second = EmptyEnumerator()
        self._watch(self._lookup)

    def _advance(self) -> Pulled[H]:
        if self._lookup is None:
            self._load()
        while True:
            item, ok = self._upstream.pull()
            if not ok:
                return None, False
            if item not in self._lookup:
                return item, True

    def _release(self) -> None:
        super()._release()
        self._second = EmptyEnumerator()
        self._lookup = None


class _IntersectEnumerator(_ExceptEnumerator[H]):
    """
    yields each distinct element of the first sequence found in the second, once.
    a yielded element leaves the lookup set, so repeats in the first sequence miss.
    """
    def _advance(self) -> Pulled[H]:
        if self._lookup is None:
            self._load()
        while True:
            item, ok = self._upstream.pull()
            if not ok:
                return None, False
            if item in self._lookup:
                self._lookup.discard(item)
                return item, True


class SetAccessor(Generic[H]):
    """
    deduplication and set algebra. every operator here buffers: distinct and union
    remember every element they yield, except_ and intersect materialize the
    second sequence. none of them is safe on high-cardinality infinite input.
    """
    def __init__(self, enumerable_instance: 'HashableEnumerable[H]'):
        self._enumerable = enumerable_instance

    def distinct(self, key_selector: Optional[KeySelector[H, K]] = None) -> 'HashableEnumerable[H]':
        """return distinct elements. preserves order of first appearance."""
        if key_selector is not None:
            ensure_callable('distinct', 'key_selector', key_selector)
        source = self._enumerable
        return source._derive(lambda: _DistinctEnumerator(source.get_enumerator(), key_selector))

    def union(self, other: Optional[Iterable[H]]) -> 'HashableEnumerable[H]':
        """return the order-preserving union of two sequences (distinct elements)."""
        source = self._enumerable
        return source._derive(lambda: _UnionEnumerator(source.get_enumerator(), enumerator_of(other)))

    def except_(self, other: Optional[Iterable[H]]) -> 'HashableEnumerable[H]':
        """
        return elements from the first sequence not in the second (set difference).
        duplicates in the first sequence are kept.
        """
        source = self._enumerable
        return source._derive(lambda: _ExceptEnumerator(source.get_enumerator(), enumerator_of(other)))

    def intersect(self, other: Optional[Iterable[H]]) -> 'HashableEnumerable[H]':
        """return the distinct, order-preserving intersection of two sequences."""
        source = self._enumerable
        return source._derive(lambda: _IntersectEnumerator(source.get_enumerator(), enumerator_of(other)))
