"""
the enumeration protocol.

every source and operator is an Enumerator: a state-holding object with a single
pull() operation. laziness comes only from *when* pull() is called; nothing runs
in the background. once pull() has reported the end of the sequence it keeps
reporting it, so a finished pipeline can never be resurrected.
"""
from __future__ import annotations
from abc import ABC, abstractmethod
from collections.abc import Sequence
from .types import *


class Enumerator(ABC, Generic[T]):
    """single-pass, pull-driven producer of a typed sequence."""

    def __init__(self):
        self._finished = False

    def pull(self) -> Pulled[T]:
        """return (item, True) for the next element, or (None, False) at the end."""
        if self._finished:
            return None, False
        item, ok = self._advance()
        if not ok:
            self._finished = True
            self._release()
            return None, False
        return item, True

    @property
    def finished(self) -> bool:
        return self._finished

    @abstractmethod
    def _advance(self) -> Pulled[T]:
        """produce the next element. never called again after it reports the end."""
        pass

    def _release(self) -> None:
        """drop upstream nodes and buffers once the sequence has ended."""
        pass

    # --- python iterator adapter ---

    def __iter__(self) -> Iterator[T]:
        return self

    def __next__(self) -> T:
        item, ok = self.pull()
        if not ok:
            raise StopIteration
        return item


class EmptyEnumerator(Enumerator[Any]):
    """the nil sentinel: ends on the first pull."""

    def _advance(self) -> Pulled[Any]:
        return None, False

    def __repr__(self) -> str:
        return "EmptyEnumerator()"


class Operator(Enumerator[T]):
    """
    an enumerator that exclusively owns one upstream enumerator.
    a missing (None) upstream is treated as empty.
    """

    def __init__(self, upstream: Optional[Enumerator[Any]]):
        super().__init__()
        self._upstream: Enumerator[Any] = upstream if upstream is not None else EmptyEnumerator()

    def _release(self) -> None:
        self._upstream = EmptyEnumerator()


# --- sources ---

class SliceEnumerator(Enumerator[T]):
    """walks a fixed sequence with an index cursor."""

    def __init__(self, items: Sequence[T]):
        super().__init__()
        self._items = items
        self._index = 0

    def _advance(self) -> Pulled[T]:
        if self._index >= len(self._items):
            return None, False
        item = self._items[self._index]
        self._index += 1
        return item, True

    def _release(self) -> None:
        self._items = ()


class IteratorEnumerator(Enumerator[T]):
    """adapts any python iterable. one-shot if the iterable is an iterator."""

    def __init__(self, iterable: Iterable[T]):
        super().__init__()
        self._iterator = iter(iterable)

    def _advance(self) -> Pulled[T]:
        try:
            return next(self._iterator), True
        except StopIteration:
            return None, False

    def _release(self) -> None:
        self._iterator = iter(())


class RangeEnumerator(Enumerator[int]):
    """start, start + 1, ... for count elements. non-positive count is empty."""

    def __init__(self, start: int, count: int):
        super().__init__()
        self._current = start
        self._remaining = max(count, 0)

    def _advance(self) -> Pulled[int]:
        if self._remaining <= 0:
            return None, False
        item = self._current
        self._current += 1
        self._remaining -= 1
        return item, True


class RepeatEnumerator(Enumerator[T]):
    """the same value, count times. non-positive count is empty."""

    def __init__(self, value: T, count: int):
        super().__init__()
        self._value = value
        self._remaining = max(count, 0)

    def _advance(self) -> Pulled[T]:
        if self._remaining <= 0:
            return None, False
        self._remaining -= 1
        return self._value, True

    def _release(self) -> None:
        self._value = None


class GenerateEnumerator(Enumerator[T]):
    """calls a zero-argument function once per pull, count times."""

    def __init__(self, generator_func: Callable[[], T], count: int):
        super().__init__()
        self._generator_func = generator_func
        self._remaining = max(count, 0)

    def _advance(self) -> Pulled[T]:
        if self._remaining <= 0:
            return None, False
        self._remaining -= 1
        return self._generator_func(), True

    def _release(self) -> None:
        self._generator_func = None


def enumerator_of(source: Any) -> Enumerator[Any]:
    """
    turn None, an enumerable, an enumerator or any python iterable into an enumerator.
    None becomes the empty sentinel. enumerables hand out a fresh enumerator.
    """
    if source is None:
        return EmptyEnumerator()
    if isinstance(source, Enumerator):
        return source
    get_enumerator = getattr(source, 'get_enumerator', None)
    if callable(get_enumerator):
        return get_enumerator()
    if isinstance(source, Sequence):
        return SliceEnumerator(source)
    return IteratorEnumerator(source)
