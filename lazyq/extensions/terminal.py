from __future__ import annotations
import typing
import numpy as np
import pandas as pd
from ..types import *
from ..errors import ensure_callable

if typing.TYPE_CHECKING:
    from ..enumerable import Enumerable
    from ..channel import Channel

# distinguishes "no seed given" from a seed of None
_NO_SEED = object()


class TerminalAccessor(Generic[T]):
    """
    terminal operations: each one pulls the sequence until it has its answer.
    none of them raises on an empty or nil sequence; 'maybe present' results
    come back as a default value or an (item, found) pair.
    """
    def __init__(self, enumerable_instance: 'Enumerable[T]'):
        self._enumerable = enumerable_instance

    # --- collections ---

    def list(self) -> List[T]:
        """convert to list"""
        return list(self._enumerable.get_enumerator())

    def tuple(self) -> Tuple[T, ...]:
        """convert to tuple"""
        return tuple(self._enumerable.get_enumerator())

    def set(self) -> Set[T]:
        """convert to set"""
        return set(self._enumerable.get_enumerator())

    def dict(self, key_selector: KeySelector[T, K],
             value_selector: Optional[Selector[T, V]] = None) -> Dict[K, V]:
        """convert to dictionary. a repeated key keeps the last value"""
        ensure_callable('dict', 'key_selector', key_selector)
        if value_selector is not None: ensure_callable('dict', 'value_selector', value_selector)
        val_sel = value_selector if value_selector else lambda item: item
        return {key_selector(item): val_sel(item) for item in self._enumerable.get_enumerator()}

    def array(self, dtype: Any = None) -> np.ndarray:
        """convert to numpy array"""
        return np.array(self.list(), dtype=dtype)

    def pandas(self, name: Optional[str] = None) -> pd.Series:
        """convert to pandas series"""
        data = self.list()
        # an empty series defaults to object dtype; say so explicitly
        return pd.Series(data, name=name, dtype=None if data else object)

    def df(self, columns: Optional[List[str]] = None) -> pd.DataFrame:
        """convert to pandas dataframe"""
        return pd.DataFrame(self.list(), columns=columns)

    # --- folds ---

    def count(self, predicate: Optional[Predicate[T]] = None) -> int:
        """count elements"""
        if predicate is not None: ensure_callable('count', 'predicate', predicate)
        enumerator = self._enumerable.get_enumerator()
        if predicate is None: return sum(1 for _ in enumerator)
        return sum(1 for x in enumerator if predicate(x))

    def sum(self, selector: Optional[Selector[T, Any]] = None) -> Any:
        """sum of the elements (or of selector over them); 0 when empty"""
        if selector is not None: ensure_callable('sum', 'selector', selector)
        total = 0
        for item in self._enumerable.get_enumerator():
            total += selector(item) if selector else item
        return total

    def average(self, selector: Optional[Selector[T, Any]] = None) -> Optional[float]:
        """arithmetic mean; None when empty"""
        if selector is not None: ensure_callable('average', 'selector', selector)
        total, count = 0, 0
        for item in self._enumerable.get_enumerator():
            total += selector(item) if selector else item
            count += 1
        return total / count if count else None

    def aggregate(self, accumulator: Accumulator[T, T], seed: Any = _NO_SEED) -> Any:
        """
        applies accumulator over the sequence. without a seed the first element
        starts the fold; an empty sequence then gives None
        """
        ensure_callable('aggregate', 'accumulator', accumulator)
        enumerator = self._enumerable.get_enumerator()
        if seed is _NO_SEED:
            seed, ok = enumerator.pull()
            if not ok: return None
        result = seed
        for item in enumerator:
            result = accumulator(result, item)
        return result

    def for_each(self, action: Action[T]) -> None:
        """run action once per element, in order"""
        ensure_callable('for_each', 'action', action)
        for item in self._enumerable.get_enumerator():
            action(item)

    # --- short-circuiting ---

    def any(self, predicate: Optional[Predicate[T]] = None) -> bool:
        """check if any element satisfies condition. stops at the first match"""
        _, found = self.try_first(predicate)
        return found

    def all(self, predicate: Predicate[T]) -> bool:
        """check if all elements satisfy condition. stops at the first failure; true when empty"""
        ensure_callable('all', 'predicate', predicate)
        return all(predicate(x) for x in self._enumerable.get_enumerator())

    def contains(self, value: T) -> bool:
        """check if the sequence holds an element equal to value"""
        return any(x == value for x in self._enumerable.get_enumerator())

    def try_first(self, predicate: Optional[Predicate[T]] = None) -> Pulled[T]:
        """(first matching element, True), or (None, False)"""
        if predicate is not None: ensure_callable('first', 'predicate', predicate)
        enumerator = self._enumerable.get_enumerator()
        if predicate is None:
            return enumerator.pull()
        for item in enumerator:
            if predicate(item): return item, True
        return None, False

    def first(self, predicate: Optional[Predicate[T]] = None, default: Optional[T] = None) -> Optional[T]:
        """first (matching) element, or default"""
        item, found = self.try_first(predicate)
        return item if found else default

    def try_last(self, predicate: Optional[Predicate[T]] = None) -> Pulled[T]:
        """(last matching element, True), or (None, False). pulls the whole sequence"""
        if predicate is not None: ensure_callable('last', 'predicate', predicate)
        last, found = None, False
        for item in self._enumerable.get_enumerator():
            if predicate is None or predicate(item):
                last, found = item, True
        return last, found

    def last(self, predicate: Optional[Predicate[T]] = None, default: Optional[T] = None) -> Optional[T]:
        """last (matching) element, or default"""
        item, found = self.try_last(predicate)
        return item if found else default

    def element_at(self, index: int, default: Optional[T] = None) -> Optional[T]:
        """element at a zero-based position, or default when out of range"""
        if index < 0: return default
        for position, item in enumerate(self._enumerable.get_enumerator()):
            if position == index: return item
        return default

    # --- bridge ---

    def channel(self, capacity: Optional[int] = None) -> 'Channel[T]':
        """
        start a background thread that pulls this sequence into a new channel and
        closes it at the end. the channel must be drained, or the thread stays blocked
        """
        from ..channel import Channel, start_producer
        channel = Channel(capacity)
        start_producer(self._enumerable, channel)
        return channel
