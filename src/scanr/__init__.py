"""
scanr — state-machine lexical scanning for Python

Turns a character stream into typed items for a parser. State functions
consume runes through a cursor and emit items through a blocking
rendezvous channel, so the scanner runs on its own producer thread and
never gets more than one item ahead of the consumer.

Quick Start:
    >>> from scanr import scan
    >>> scan("10.0.0.1 www.example.com\\n")
    [Item(IP, '10.0.0.1', 0), Item(SPACE, ' ', 8), Item(HOSTNAME, 'www.example.com', 9),
     Item(NEWLINE, '\\n', 24), Item(EOF, '', 25)]

    >>> # Or drive a Scanner directly
    >>> from scanr import Scanner
    >>> from scanr.states import scan_tokens
    >>> with Scanner(scan_tokens).start("256.0.0.1") as scanner:
    ...     item = scanner.next_item()
    >>> item
    Item(ERROR, '256.0.0.1', 0)

Custom Grammars:
    >>> from scanr.states import Transition, hostname, scan_space
    >>> label = hostname(Transition(on_success=scan_space))
    >>> scanner = Scanner(label, home=my_dispatcher)

"""

from collections.abc import Iterator

from scanr.config import (
    ScanConfig,
    get_scan_config,
    reset_scan_config,
    scan_config_context,
    set_scan_config,
)
from scanr.errors import (
    ChannelClosedError,
    CursorError,
    InvalidTokenError,
    ScanCancelled,
    ScanFailedError,
    ScannerStateError,
    ScanrError,
)
from scanr.items import Item, ItemType, concat_text
from scanr.location import SourceLocation, locate
from scanr.scanner import EOF, HOME, Scanner, StateFn
from scanr.states import Transition, scan_tokens

__version__ = "0.1.0"


def scan(
    source: str | bytes,
    *,
    start: StateFn = scan_tokens,
    home: StateFn | None = None,
    strict: bool = False,
    source_file: str | None = None,
) -> list[Item]:
    """Scan source to completion and return every item.

    Args:
        source: Text to scan (bytes are taken as UTF-8)
        start: First state function (default: scan_tokens)
        home: State HOME resolves to (default: start)
        strict: Raise on the first ERROR item instead of returning it
        source_file: Optional source file path for error messages

    Returns:
        Items in emission order.

    Raises:
        InvalidTokenError: strict is set and an ERROR item was emitted.
            The producer is cancelled before the error propagates.
        ScanFailedError: A state function raised.

    Example:
        >>> [item.type.name for item in scan("a.b\\r\\n")]
        ['HOSTNAME', 'NEWLINE', 'EOF']
    """
    items: list[Item] = []
    with Scanner(start, home).start(source) as scanner:
        for item in scanner:
            if strict and item.type is ItemType.ERROR:
                loc = locate(source, item.pos, source_file)
                raise InvalidTokenError(
                    item.value,
                    item.pos,
                    lineno=loc.lineno,
                    col_offset=loc.col_offset,
                    source_file=source_file,
                )
            items.append(item)
    return items


def tokenize(
    source: str | bytes,
    *,
    start: StateFn = scan_tokens,
    home: StateFn | None = None,
) -> Iterator[Item]:
    """Yield items one at a time as the producer emits them.

    Closing the generator early (break, garbage collection) cancels the
    producer, so abandoning it never leaves a blocked thread behind.

    Yields:
        Item objects in emission order.
    """
    with Scanner(start, home).start(source) as scanner:
        yield from scanner


__all__ = [
    # Core API
    "scan",
    "tokenize",
    "Scanner",
    "StateFn",
    "Transition",
    "HOME",
    "EOF",
    "scan_tokens",
    # Items
    "Item",
    "ItemType",
    "concat_text",
    # Location
    "SourceLocation",
    "locate",
    # Configuration
    "ScanConfig",
    "get_scan_config",
    "set_scan_config",
    "reset_scan_config",
    "scan_config_context",
    # Errors
    "ScanrError",
    "CursorError",
    "ScannerStateError",
    "ChannelClosedError",
    "ScanCancelled",
    "ScanFailedError",
    "InvalidTokenError",
    # Version
    "__version__",
]
