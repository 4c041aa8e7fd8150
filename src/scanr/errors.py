"""Exception classes for scanr.

Malformed input is never an exception: recognizers report it as an
ERROR item. The exceptions here cover misuse of the engine, the
producer/consumer handoff, and strict scanning on the consumer side.
"""

from __future__ import annotations


class ScanrError(Exception):
    """Base exception for all scanr errors.

    Subclass this for specific error categories.
    """

    pass


class CursorError(ScanrError):
    """Cursor contract violation.

    Raised when ``backup()`` is called twice without an intervening
    ``next()``.
    """

    pass


class ScannerStateError(ScanrError):
    """Scanner used out of order (run twice, consumed before start)."""

    pass


class ChannelClosedError(ScanrError):
    """Receive on an exhausted channel, or send on a closed one."""

    pass


class ScanCancelled(ScanrError):
    """Raised inside the producer when the consumer cancels the scan.

    The driver catches it and terminates; it never reaches the consumer.
    """

    pass


class ScanFailedError(ScanrError):
    """A state function raised on the producer thread.

    The original exception is chained as ``__cause__``.
    """

    pass


class InvalidTokenError(ScanrError):
    """An ERROR item was received by a strict consumer."""

    def __init__(
        self,
        text: str,
        offset: int,
        lineno: int | None = None,
        col_offset: int | None = None,
        source_file: str | None = None,
    ) -> None:
        """Initialize invalid token error with optional location.

        Args:
            text: Text of the offending ERROR item
            offset: Byte offset of the item in the encoded input
            lineno: Line number of the item (1-indexed)
            col_offset: Column of the item (1-indexed)
            source_file: Path to source file (optional)
        """
        self.text = text
        self.offset = offset
        self.lineno = lineno
        self.col_offset = col_offset
        self.source_file = source_file

        location = ""
        if source_file:
            location = f"{source_file}:"
        if lineno is not None:
            location += f"{lineno}:"
            if col_offset is not None:
                location += f"{col_offset}:"
        if location:
            location = location.rstrip(":") + " "

        super().__init__(f"{location}invalid token {text!r} at offset {offset}")
