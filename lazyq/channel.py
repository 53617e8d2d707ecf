"""
the bridge between pipelines and concurrent producers/consumers.

a Channel is a closable fifo hand-off guarded by a threading.Condition. start_producer()
pulls an enumerable to completion on a background thread and posts every element into
a channel; ChannelEnumerator exposes a channel as an ordinary pull source.

there is no cancellation. a consumer that stops receiving leaves the producer
thread blocked on a full channel for the life of the process, so callers must
either drain the channel or accept the leaked thread.
"""
from __future__ import annotations
import logging
import queue
import threading
from collections import deque
from .types import *
from .config import config
from .errors import ChannelClosedError
from .protocol import Enumerator, enumerator_of

logger = logging.getLogger(__name__)


class Channel(Generic[T]):
    """
    fifo hand-off with close semantics. capacity <= 0 means unbounded.
    send() blocks while the channel is full; receive() blocks until an item
    arrives or the channel is closed and drained. close() never blocks.
    a channel has a single producing side: send() and close() must not race.
    """

    def __init__(self, capacity: Optional[int] = None):
        self.capacity = config.channel_capacity if capacity is None else capacity
        self._items: deque = deque()
        self._cond = threading.Condition()
        self._closed = False
        # set by start_producer when the pipeline feeding this channel raised
        self.error: Optional[BaseException] = None
        self.producer: Optional[threading.Thread] = None

    @property
    def closed(self) -> bool:
        return self._closed

    def _full(self) -> bool:
        return 0 < self.capacity <= len(self._items)

    def send(self, item: T) -> None:
        """post an item, blocking while the channel is full."""
        with self._cond:
            while self._full() and not self._closed:
                self._cond.wait()
            if self._closed:
                raise ChannelClosedError("send on closed channel")
            self._items.append(item)
            self._cond.notify_all()

    def close(self) -> None:
        """mark the end of the stream. closing twice is a no-op."""
        with self._cond:
            if self._closed:
                return
            self._closed = True
            self._cond.notify_all()

    def receive(self, timeout: Optional[float] = None) -> Pulled[T]:
        """
        return (item, True) for the next item or (None, False) once closed and drained.
        with a timeout, raises queue.Empty if nothing arrives in time.
        """
        with self._cond:
            if not self._cond.wait_for(lambda: self._items or self._closed, timeout=timeout):
                raise queue.Empty
            if not self._items:
                return None, False
            item = self._items.popleft()
            self._cond.notify_all()
            return item, True

    def __iter__(self) -> 'ChannelEnumerator[T]':
        return ChannelEnumerator(self)

    def __repr__(self) -> str:
        return f"Channel(capacity={self.capacity}, closed={self._closed})"


class ChannelEnumerator(Enumerator[T]):
    """pull source over a channel. ends when the channel is closed and drained."""

    def __init__(self, channel: Optional[Channel[T]]):
        super().__init__()
        self._channel = channel

    def _advance(self) -> Pulled[T]:
        if self._channel is None:
            return None, False
        return self._channel.receive()

    def _release(self) -> None:
        self._channel = None


def start_producer(source: Any, channel: Channel[T]) -> threading.Thread:
    """
    pull source to completion on a background thread, sending every element into
    channel. the channel is closed however the pipeline ends; if the pipeline
    raised, the exception is logged and kept on channel.error.
    """
    # build the chain here so a bad source fails on the caller's thread
    enumerator = enumerator_of(source)

    def pump():
        sent = 0
        try:
            for item in enumerator:
                channel.send(item)
                sent += 1
        except Exception as e:
            channel.error = e
            logger.error(f"producer failed after sending {sent} items: {e}", exc_info=True)
        finally:
            channel.close()
            logger.debug(f"producer closed {channel!r} after sending {sent} items")

    thread = threading.Thread(target=pump, name=config.producer_thread_name, daemon=config.daemon_producers)
    channel.producer = thread
    thread.start()
    logger.debug(f"started producer thread '{thread.name}' for {channel!r}")
    return thread
