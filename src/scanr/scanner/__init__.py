"""Scanning engine for scanr.

Architecture:
scanner/
├── __init__.py          # Re-exports Scanner, StateFn, HOME, EOF
├── core.py              # Scanner class (driver, emitter, consumer API)
├── cursor.py            # Rune cursor mixin, UTF-8 rune decoding
├── accept.py            # Accept primitives mixin
└── channel.py           # Unbuffered rendezvous channel

"""

from scanr.scanner.channel import ItemChannel
from scanr.scanner.core import HOME, HomeMarker, Scanner, StateFn
from scanr.scanner.cursor import EOF, RUNE_ERROR, decode_rune

__all__ = [
    "EOF",
    "HOME",
    "HomeMarker",
    "ItemChannel",
    "RUNE_ERROR",
    "Scanner",
    "StateFn",
    "decode_rune",
]
