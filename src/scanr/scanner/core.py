"""State-machine scanner with a blocking item handoff.

A Scanner runs a chain of state functions over one input. Each state
function consumes runes through the cursor and accept primitives, emits
zero or more items, and returns the next state function (or None to
stop). Emission blocks until the consumer takes the item, so the driver
runs on its own producer thread while the consumer pulls with
next_item(), iterates, or drains.

Thread Safety:
Scanner instances are single-use. Create one per input string.
Cursor state is touched only by the producer thread; the consumer
touches only the channel.

"""

from __future__ import annotations

import threading
from collections.abc import Callable, Iterator
from types import TracebackType
from typing import TypeAlias, Union

from scanr.config import ScanConfig, get_scan_config
from scanr.errors import (
    ChannelClosedError,
    ScanCancelled,
    ScanFailedError,
    ScannerStateError,
)
from scanr.items import Item, ItemType
from scanr.scanner.accept import AcceptMixin
from scanr.scanner.channel import ItemChannel
from scanr.scanner.cursor import CursorMixin
from scanr.utils.logger import get_logger

logger = get_logger(__name__)

StateFn: TypeAlias = Callable[["Scanner"], Union["StateFn", None]]


class HomeMarker:
    """Marker for "return to the scanner's home state"."""

    _instance: HomeMarker | None = None

    def __new__(cls) -> HomeMarker:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "HOME"


HOME = HomeMarker()


class Scanner(
    # Rune navigation (position, width, emission start)
    CursorMixin,
    # Generic consumption (accept_one_of, accept_run, ...)
    AcceptMixin,
):
    """Runs state functions over an input and hands items to a consumer.

    Usage:
            >>> from scanr.states import scan_tokens
            >>> with Scanner(scan_tokens).start("www.example.com\\n") as s:
            ...     for item in s:
            ...         print(item)
        Item(HOSTNAME, 'www.example.com', 0)
        Item(NEWLINE, '\\n', 15)
        Item(EOF, '', 16)

    The start state runs first. Recognizers that finish return HOME,
    which resolves to the home state (the start state unless another is
    given), so one recognizer can be composed into different grammars.

    Every consumer must either read until the stream ends, drain(), or
    cancel(); otherwise the producer thread stays blocked on its next
    emission. The context manager does this on exit.

    """

    __slots__ = (
        "_input",
        "_input_len",  # Cached len(input)
        "_pos",
        "_start",
        "_width",
        "_can_backup",
        "_strict_backup",
        "_config",
        "_home",
        "_state",
        "_channel",
        "_thread",
        "_started",
        "_failure",
        "_last_item",
        "_last_pos",
    )

    def __init__(self, start: StateFn, home: StateFn | None = None) -> None:
        """Initialize scanner with its start and home states.

        Args:
            start: State function run first
            home: State function HOME resolves to; defaults to start
        """
        # Producer threads may start with a fresh context; capture now
        self._config = get_scan_config()
        self._strict_backup = self._config.strict_backup

        self._input = b""
        self._input_len = 0
        self._pos = 0
        self._start = 0
        self._width = 0
        self._can_backup = False

        self._home = home if home is not None else start
        self._state: StateFn | None = start
        self._channel = ItemChannel()
        self._thread: threading.Thread | None = None
        self._started = False
        self._failure: Exception | None = None
        self._last_item: Item | None = None
        self._last_pos = 0

    @property
    def config(self) -> ScanConfig:
        """Config captured when the scanner was built."""
        return self._config

    @property
    def home_state(self) -> StateFn:
        return self._home

    @property
    def state(self) -> StateFn | None:
        """State function that runs next (None once finished)."""
        return self._state

    @property
    def last_item(self) -> Item | None:
        """Most recently emitted item (producer side)."""
        return self._last_item

    @property
    def last_pos(self) -> int:
        """Position of the most recently received item (consumer side)."""
        return self._last_pos

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def resolve(self, target: StateFn | HomeMarker | None) -> StateFn | None:
        """Map HOME to the home state; pass anything else through."""
        if target is HOME:
            return self._home
        return target

    # =========================================================================
    # Producer side
    # =========================================================================

    def emit(self, item_type: ItemType) -> None:
        """Hand the pending window to the consumer as one item.

        Blocks until the consumer receives it.

        Raises:
            ScanCancelled: The consumer cancelled; the driver stops.
        """
        item = Item(
            item_type,
            self._start,
            self._input[self._start : self._pos].decode("utf-8", errors="replace"),
        )
        self._channel.send(item)
        self._last_item = item
        self._start = self._pos
        self._can_backup = False

    def run(self, source: str | bytes) -> None:
        """Run state functions over source on the calling thread.

        Returns when a state function returns None. Call it from a
        thread other than the consumer's; start() does that for you.

        Raises:
            ScannerStateError: The scanner already ran.
            Exception: Whatever a state function raised.
        """
        self._bind(source)
        self._drive()
        if self._failure is not None:
            raise self._failure

    def start(self, source: str | bytes) -> Scanner:
        """Run the scanner on a new producer thread.

        Returns:
            self, so it can be used directly as a context manager.
        """
        self._bind(source)
        self._thread = threading.Thread(
            target=self._drive,
            name=self._config.thread_name,
            daemon=self._config.daemon,
        )
        self._thread.start()
        return self

    def _bind(self, source: str | bytes) -> None:
        if self._started:
            raise ScannerStateError("scanner already started; create one per input")
        self._input = source.encode("utf-8") if isinstance(source, str) else bytes(source)
        self._input_len = len(self._input)
        self._started = True

    def _drive(self) -> None:
        logger.debug("scan started: %d bytes", self._input_len)
        try:
            while self._state is not None and not self._channel.cancelled:
                self._state = self._state(self)
            if self._state is not None:
                logger.debug("scan cancelled at offset %d between states", self._pos)
                self._state = None
        except ScanCancelled:
            logger.debug(
                "scan cancelled at offset %d after %d items",
                self._pos,
                self._channel.sent,
            )
            self._state = None
        except Exception as exc:
            logger.debug("state function failed at offset %d", self._pos, exc_info=True)
            self._failure = exc
            self._state = None
        finally:
            self._channel.close()
        logger.debug("scan finished: %d items emitted", self._channel.sent)

    # =========================================================================
    # Consumer side
    # =========================================================================

    def next_item(self, timeout: float | None = None) -> Item:
        """Receive the next item; called by the parser.

        Args:
            timeout: Seconds to wait; None waits for the producer.

        Raises:
            ChannelClosedError: The scan finished and every item was taken.
            ScanFailedError: The producer raised.
            TimeoutError: Nothing arrived within timeout.
        """
        self._require_started()
        item = self._channel.receive(timeout)
        if item is None:
            self._raise_failure()
            raise ChannelClosedError("scan finished; no more items")
        self._last_pos = item.pos
        return item

    def __iter__(self) -> Iterator[Item]:
        """Yield items until the scan finishes."""
        self._require_started()
        while (item := self._channel.receive()) is not None:
            self._last_pos = item.pos
            yield item
        self._raise_failure()

    def drain(self) -> int:
        """Receive and discard until the producer finishes.

        Returns:
            Number of items discarded.

        Raises:
            ScanFailedError: The producer raised.
        """
        self._require_started()
        count = 0
        while self._channel.receive() is not None:
            count += 1
        logger.debug("drained %d items", count)
        self._raise_failure()
        return count

    def cancel(self) -> None:
        """Stop the producer at its current emission or next state."""
        self._channel.cancel()

    def join(self, timeout: float | None = None) -> bool:
        """Wait for the producer thread.

        Args:
            timeout: Seconds to wait; defaults to the configured join_timeout.

        Returns:
            True if the producer has finished.
        """
        if self._thread is None:
            return True
        self._thread.join(self._config.join_timeout if timeout is None else timeout)
        if self._thread.is_alive():
            logger.warning("producer thread %r still running", self._thread.name)
            return False
        return True

    def close(self) -> None:
        """Drain remaining items and wait for the producer."""
        self.drain()
        self.join()

    def __enter__(self) -> Scanner:
        self._require_started()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if exc_type is None:
            self.close()
            return
        # Already unwinding: stop the producer rather than read its output
        self.cancel()
        self.join()

    def _require_started(self) -> None:
        if not self._started:
            raise ScannerStateError("scanner not started; call start() first")

    def _raise_failure(self) -> None:
        if self._failure is not None:
            raise ScanFailedError(
                f"state function failed: {self._failure!r}"
            ) from self._failure
