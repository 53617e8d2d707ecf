from __future__ import annotations

from abc import ABC, abstractmethod
from .types import *
from .protocol import Enumerator, EmptyEnumerator

# --- core functionality ---
from .extensions.core import _CoreOperations

# --- accessors ---
from .extensions.set import SetAccessor
from .extensions.window import WindowAccessor
from .extensions.terminal import TerminalAccessor
from .extensions.utility import UtilityAccessor

# --- abstract base class ---

class IEnumerable(ABC, Generic[T]):
    @abstractmethod
    def get_enumerator(self) -> Enumerator[T]:
        """start a new traversal and return its enumerator"""
        pass

# --- base enumerable implementation ---

class _BaseEnumerable(IEnumerable[T]):
    def __init__(self, enumerator_func: Optional[Callable[[], Enumerator[T]]] = None):
        """init with a function that builds a fresh enumerator chain when called. None is the nil enumerable."""
        self._enumerator_func = enumerator_func

    def get_enumerator(self) -> Enumerator[T]:
        """build the operator chain for one traversal. nothing is pulled yet."""
        if self._enumerator_func is None:
            return EmptyEnumerator()
        enumerator = self._enumerator_func()
        return enumerator if enumerator is not None else EmptyEnumerator()

    def _derive(self, enumerator_func: Optional[Callable[[], Enumerator[T]]]) -> 'Enumerable[T]':
        """wrap a new chain in an enumerable of the same capability tier"""
        return type(self)(enumerator_func)

    @property
    def is_nil(self) -> bool:
        return self._enumerator_func is None

    def __iter__(self) -> Iterator[T]:
        return self.get_enumerator()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({'nil' if self.is_nil else 'lazy'})"

# --- main enumerable class ---

class Enumerable(
    _BaseEnumerable[T],
    _CoreOperations[T]
):
    """
    a lazy, pull-based, linq-style sequence. operators only build the chain;
    elements move when a terminal operation under .to starts pulling.
    """
    def __init__(self, enumerator_func: Optional[Callable[[], Enumerator[T]]] = None):
        super().__init__(enumerator_func)
        # --- initialize accessors ---
        self.to = TerminalAccessor(self)
        self.util = UtilityAccessor(self)

    def as_hashable(self) -> 'HashableEnumerable[Any]':
        """
        declares the elements hashable, unlocking .set and .window.
        this is a promise about the data, not a check: unhashable items fail when buffered.
        """
        return HashableEnumerable(self._enumerator_func)

# --- hashable enumerable class ---

class HashableEnumerable(Enumerable[H]):
    """enumerable whose elements support equality and hashing; adds the buffering operators."""
    def __init__(self, enumerator_func: Optional[Callable[[], Enumerator[H]]] = None):
        super().__init__(enumerator_func)
        self.set = SetAccessor(self)
        self.window = WindowAccessor(self)

    def as_enumerable(self) -> 'Enumerable[H]':
        """drop back to the base tier"""
        return Enumerable(self._enumerator_func)
