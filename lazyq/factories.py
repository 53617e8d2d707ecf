import typing
from .types import *
from .protocol import (
    RangeEnumerator, RepeatEnumerator, GenerateEnumerator, enumerator_of
)

if typing.TYPE_CHECKING:
    from .enumerable import Enumerable, HashableEnumerable
    from .channel import Channel

def from_iterable(data: Optional[Iterable[T]]) -> 'Enumerable[T]':
    """
    create enumerable from iterable. sequences are re-read on every traversal;
    iterators and generators are consumed by the first one. None is empty
    """
    from .enumerable import Enumerable
    if data is None:
        return Enumerable()
    return Enumerable(lambda: enumerator_of(data))

def from_hashable(data: Optional[Iterable[H]]) -> 'HashableEnumerable[H]':
    """create enumerable of hashable elements, with set and window operators"""
    from .enumerable import HashableEnumerable
    if data is None:
        return HashableEnumerable()
    return HashableEnumerable(lambda: enumerator_of(data))

def from_range(start: int, count: int) -> 'HashableEnumerable[int]':
    """create enumerable of count ascending integers. negative count is empty"""
    from .enumerable import HashableEnumerable
    if count < 0:
        return HashableEnumerable()
    return HashableEnumerable(lambda: RangeEnumerator(start, count))

def repeat(item: T, count: int) -> 'Enumerable[T]':
    """create enumerable with repeated item. negative count is empty"""
    from .enumerable import Enumerable
    if count < 0:
        return Enumerable()
    return Enumerable(lambda: RepeatEnumerator(item, count))

def empty() -> 'HashableEnumerable[Any]':
    """create empty enumerable. usable with every operator"""
    from .enumerable import HashableEnumerable
    return HashableEnumerable()

def generate(generator_func: Callable[[], T], count: int) -> 'Enumerable[T]':
    """generate sequence using a function, called once per pulled element"""
    from .enumerable import Enumerable
    from .errors import ensure_callable
    ensure_callable('generate', 'generator_func', generator_func)
    if count < 0:
        return Enumerable()
    return Enumerable(lambda: GenerateEnumerator(generator_func, count))

def from_channel(channel: Optional['Channel[T]']) -> 'Enumerable[T]':
    """
    create enumerable that receives from a channel until it is closed.
    not restartable: a second traversal continues where the first stopped
    """
    from .enumerable import Enumerable
    from .channel import ChannelEnumerator
    if channel is None:
        return Enumerable()
    return Enumerable(lambda: ChannelEnumerator(channel))

# --- aliases ---
P = from_iterable
H = from_hashable
