from typing import (
    TypeVar, Generic, Callable, Iterator, Iterable, Hashable, Any, Optional, Union,
    Dict, List, Tuple, Set, Type
)

T = TypeVar('T')
U = TypeVar('U')
K = TypeVar('K')
V = TypeVar('V')
H = TypeVar('H', bound=Hashable)

Predicate = Callable[[T], bool]
Selector = Callable[[T], U]
KeySelector = Callable[[T], K]
Accumulator = Callable[[U, T], U]
Action = Callable[[T], Any]

# the result of a single pull: (item, True) or (None, False) at end-of-sequence
Pulled = Tuple[Optional[T], bool]
