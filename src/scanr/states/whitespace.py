"""Layout recognizers: spaces and line endings."""

from __future__ import annotations

from scanr.items import ItemType
from scanr.predicates import is_space, is_whitespace
from scanr.scanner.core import Scanner
from scanr.states.base import Match, recognizer


def _match_space(s: Scanner) -> Match:
    # An empty run is still a SPACE item
    s.accept_while(is_space)
    return Match.ACCEPTED


def _match_whitespace(s: Scanner) -> Match:
    s.accept_while(is_whitespace)
    return Match.ACCEPTED


def _match_newline(s: Scanner) -> Match:
    """Match one line ending: "\\n", "\\r", or "\\r\\n"."""
    r = s.next()
    if r == "\r":
        s.accept_one_of("\n")
        return Match.ACCEPTED
    if r == "\n":
        return Match.ACCEPTED
    s.backup()
    return Match.REJECTED


space = recognizer(_match_space, ItemType.SPACE, "scan_space")
whitespace = recognizer(_match_whitespace, ItemType.SPACE, "scan_whitespace")
newline = recognizer(_match_newline, ItemType.NEWLINE, "scan_newline")

scan_space = space()
scan_whitespace = whitespace()
scan_newline = newline()
