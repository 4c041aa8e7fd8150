"""Unbuffered rendezvous channel for handing items to the consumer.

Thread Safety:
One producer thread sends, one or more consumer threads receive. All
state is guarded by a single Condition. At most one item is in flight:
send() returns only after a receiver has taken its item.

"""

from __future__ import annotations

import threading

from scanr.errors import ChannelClosedError, ScanCancelled
from scanr.items import Item


class ItemChannel:
    """Zero-capacity handoff between the producer and the consumer.

    Usage:
        Producer thread:
            channel.send(item)   # blocks until received
            channel.close()
        Consumer thread:
            item = channel.receive()   # None once closed and empty

    """

    __slots__ = ("_cond", "_slot", "_closed", "_cancelled", "_sent", "_received")

    def __init__(self) -> None:
        self._cond = threading.Condition()
        self._slot: Item | None = None
        self._closed = False
        self._cancelled = False
        self._sent = 0
        self._received = 0

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def sent(self) -> int:
        """Number of items handed off so far."""
        return self._sent

    @property
    def received(self) -> int:
        """Number of items taken by receivers so far."""
        return self._received

    def send(self, item: Item) -> None:
        """Offer item and block until a receiver takes it.

        Raises:
            ScanCancelled: The consumer cancelled before or while waiting.
            ChannelClosedError: The channel was already closed.
        """
        with self._cond:
            if self._cancelled:
                raise ScanCancelled("scan cancelled by consumer")
            if self._closed:
                raise ChannelClosedError("send on closed channel")
            self._slot = item
            self._cond.notify_all()
            while self._slot is item and not self._cancelled:
                self._cond.wait()
            if self._slot is item:
                # Cancelled before anyone took it
                self._slot = None
                raise ScanCancelled("scan cancelled by consumer")
            self._sent += 1

    def receive(self, timeout: float | None = None) -> Item | None:
        """Take the next item, blocking until one is offered.

        Args:
            timeout: Seconds to wait; None waits until an item or closure.

        Returns:
            The item, or None once the channel is closed and empty.

        Raises:
            TimeoutError: Nothing arrived within timeout.
        """
        with self._cond:
            ready = self._cond.wait_for(
                lambda: self._slot is not None or self._closed, timeout
            )
            if not ready:
                raise TimeoutError(f"no item received within {timeout}s")
            item = self._slot
            if item is None:
                return None
            self._slot = None
            self._received += 1
            self._cond.notify_all()
            return item

    def close(self) -> None:
        """Mark the stream finished. Pending receivers wake with None."""
        with self._cond:
            self._closed = True
            self._cond.notify_all()

    def cancel(self) -> None:
        """Ask the producer to stop at its current or next send."""
        with self._cond:
            self._cancelled = True
            self._cond.notify_all()
