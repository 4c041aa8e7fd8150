"""Item and ItemType definitions for the scanr engine.

The scanner produces a stream of Item objects that a parser consumes.
Each Item has a type, a byte offset into the encoded input, and the text
it covers.

Thread Safety:
Item is frozen (immutable) and safe to hand from the producer thread to
the consumer. ItemType is an enum (inherently immutable).

"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum, auto


class ItemType(Enum):
    """Item types produced by the recognizers.

    ERROR and EOF are sentinels; the rest name the token class a
    recognizer accepted. New recognizers add new members.

    """

    # Sentinels
    ERROR = auto()
    EOF = auto()

    # Layout
    SPACE = auto()  # run of spaces (and tabs, via scan_whitespace)
    NEWLINE = auto()  # \n, \r or \r\n

    # Network names
    IP = auto()  # 127.0.0.1
    HOSTNAME = auto()  # www. / www.example.com

    @property
    def is_sentinel(self) -> bool:
        """True for ERROR and EOF."""
        return self is ItemType.ERROR or self is ItemType.EOF


@dataclass(frozen=True, slots=True)
class Item:
    """A typed, positioned slice of the input.

    Attributes:
        type: The item type (from ItemType enum)
        pos: Byte offset of the first byte in the UTF-8 encoded input
        value: The text between the previous emission point and the
            cursor at the time of emission

    Bytes input that is not valid UTF-8 is decoded with replacement, so
    each bad byte reads as U+FFFD in value. pos stays a true byte offset,
    but value (and end, and concat_text over the items) no longer spell
    the original bytes; slice the input with pos instead.

    """

    type: ItemType
    pos: int
    value: str

    @property
    def end(self) -> int:
        """Byte offset one past the last byte of this item (exact for valid UTF-8)."""
        return self.pos + len(self.value.encode("utf-8"))

    def __repr__(self) -> str:
        """Compact repr for debugging."""
        val = self.value
        if len(val) > 20:
            val = val[:17] + "..."
        return f"Item({self.type.name}, {val!r}, {self.pos})"


def concat_text(items: Iterable[Item]) -> str:
    """Return the concatenated values of items, in order.

    For a complete run this reproduces the scanned input.
    """
    return "".join(item.value for item in items)
