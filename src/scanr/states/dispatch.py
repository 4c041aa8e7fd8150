"""Default home state: pick a recognizer from the next rune.

scan_tokens covers the whole input. Every rune ends up in exactly one
item, so concatenating the values of a full run reproduces the input.
"""

from __future__ import annotations

from scanr.items import ItemType
from scanr.predicates import any_of, is_alnum, is_alpha, is_digit, is_newline, is_whitespace
from scanr.scanner.core import Scanner, StateFn
from scanr.scanner.cursor import EOF
from scanr.states.address import scan_ip
from scanr.states.hostname import scan_domain_name
from scanr.states.whitespace import scan_newline, scan_whitespace
from scanr.utils.logger import get_logger

logger = get_logger(__name__)

_is_token_start = any_of(is_whitespace, is_newline, is_alnum)


def scan_tokens(s: Scanner) -> StateFn | None:
    """Dispatch on the next rune; emit EOF and stop at end of input.

    Digits start numeric addresses and letters start host names, so a
    digit-led name such as "1password.com" is a single ERROR item.
    """
    r = s.peek()
    if r == EOF:
        s.emit(ItemType.EOF)
        return None
    if is_whitespace(r):
        return scan_whitespace
    if is_newline(r):
        return scan_newline
    if is_digit(r):
        return scan_ip
    if is_alpha(r):
        return scan_domain_name
    return scan_unknown


def scan_unknown(s: Scanner) -> StateFn | None:
    """Emit runes that cannot start a token as one ERROR item."""
    s.next()
    s.accept_until_match(_is_token_start)
    logger.debug("unrecognized input at offset %d: %r", s.start_pos, s.pending)
    s.emit(ItemType.ERROR)
    return s.home_state
