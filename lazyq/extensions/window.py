from __future__ import annotations
import typing
from ..types import *
from ..protocol import Enumerator, EmptyEnumerator, Operator

if typing.TYPE_CHECKING:
    from ..enumerable import HashableEnumerable


class _RingBuffer(Generic[T]):
    """fixed-capacity circular buffer over preallocated slots with modular cursors."""

    def __init__(self, capacity: int):
        self._slots: List[Optional[T]] = [None] * capacity
        self._head = 0  # oldest retained element
        self._size = 0

    @property
    def capacity(self) -> int: return len(self._slots)

    @property
    def is_full(self) -> bool: return self._size == len(self._slots)

    def __len__(self) -> int:
        return self._size

    def push(self, item: T) -> Pulled[T]:
        """store item as the newest element; when full, overwrite and return the oldest."""
        capacity = len(self._slots)
        if self._size < capacity:
            self._slots[(self._head + self._size) % capacity] = item
            self._size += 1
            return None, False
        evicted = self._slots[self._head]
        self._slots[self._head] = item
        self._head = (self._head + 1) % capacity
        return evicted, True

    def pop(self) -> Pulled[T]:
        """remove and return the oldest element."""
        if self._size == 0:
            return None, False
        item = self._slots[self._head]
        self._slots[self._head] = None
        self._head = (self._head + 1) % len(self._slots)
        self._size -= 1
        return item, True


class _SkipLastEnumerator(Operator[H]):
    """upstream delayed by count elements; the last count elements never come out"""
    def __init__(self, upstream: Enumerator[H], count: int):
        super().__init__(upstream)
        self._count = count
        self._window: Optional[_RingBuffer[H]] = None

    def _advance(self) -> Pulled[H]:
        if self._window is None:
            self._window = _RingBuffer(self._count)
        while True:
            item, ok = self._upstream.pull()
            if not ok:
                return None, False
            evicted, was_full = self._window.push(item)
            if was_full:
                return evicted, True

    def _release(self) -> None:
        super()._release()
        self._window = None


class _TakeLastEnumerator(Operator[H]):
    """drains upstream on the first pull, keeping only the newest count elements"""
    def __init__(self, upstream: Enumerator[H], count: int):
        super().__init__(upstream)
        self._count = count
        self._window: Optional[_RingBuffer[H]] = None

    def _advance(self) -> Pulled[H]:
        if self._window is None:
            self._window = _RingBuffer(self._count)
            for item in self._upstream:
                self._window.push(item)
            self._upstream = EmptyEnumerator()
        return self._window.pop()

    def _release(self) -> None:
        super()._release()
        self._window = None


class WindowAccessor(Generic[H]):
    """operators bounded by a trailing window of the most recent elements."""
    def __init__(self, enumerable_instance: 'HashableEnumerable[H]'):
        self._enumerable = enumerable_instance

    def skip_last(self, count: int) -> 'HashableEnumerable[H]':
        """
        all but the last 'count' elements. lazy: an element comes out as soon as
        'count' newer elements have been seen. negative count is empty.
        """
        source = self._enumerable
        if count < 0:
            return source._derive(None)
        if count == 0:
            return source._derive(source.get_enumerator)
        return source._derive(lambda: _SkipLastEnumerator(source.get_enumerator(), count))

    def take_last(self, count: int) -> 'HashableEnumerable[H]':
        """
        the last 'count' elements in original order. NOT lazy: the first pull drains
        the whole upstream, since the tail is unknown until the end. never use on
        infinite sequences. non-positive count is empty.
        """
        source = self._enumerable
        if count <= 0:
            return source._derive(None)
        return source._derive(lambda: _TakeLastEnumerator(source.get_enumerator(), count))
