"""Dotted-quad numeric address recognizer.

Octets are read greedily, one digit at a time, with the set of digits
allowed next narrowed by the digits already read so that no octet can
exceed 255:

    lead 1      1, 1d, 1dd
    lead 2      2, 2[0-4]d, 25[0-5], 2[6-9]
    otherwise   d, dd   (leading zeros allowed unless canonical_octets)

There is no backtracking. A digit left over after an octet ("256",
"1000") fails the separator check, and a digit or "." after the fourth
octet fails the trailing check. Either way the rest of the word
(letters, digits, "-" and ".") joins the ERROR item, so a bad address
is reported once.
"""

from __future__ import annotations

from scanr.items import ItemType
from scanr.predicates import DIGITS, any_of, is_digit, is_hostname_char, one_of
from scanr.scanner.core import Scanner
from scanr.states.base import Match, invalid, recognizer

OCTETS = 4
SEPARATOR = "."

# Runes that keep a malformed address going; they join its ERROR item
_is_word_char = any_of(is_hostname_char, one_of(SEPARATOR))


def _accept_octet(s: Scanner) -> bool:
    """Consume one octet. Returns False if no digit is next."""
    lead = s.next()
    if not is_digit(lead):
        s.backup()
        return False

    if lead == "1":
        if s.accept_one_of(DIGITS):
            s.accept_one_of(DIGITS)
    elif lead == "2":
        if s.accept_one_of("01234"):
            s.accept_one_of(DIGITS)
        elif s.accept_one_of("5"):
            s.accept_one_of("012345")
        else:
            s.accept_one_of("6789")
    elif lead == "0" and s.config.canonical_octets:
        # "0" stands alone; a following digit fails the next check
        pass
    else:
        s.accept_one_of(DIGITS)
    return True


def _invalid_address(s: Scanner, reason: str) -> Match:
    s.accept_while(_is_word_char)
    return invalid(s, reason)


def _match_ip(s: Scanner) -> Match:
    if not is_digit(s.peek()):
        return Match.REJECTED

    for octet in range(1, OCTETS + 1):
        if not _accept_octet(s):
            return _invalid_address(s, f"octet {octet}: expected a digit")
        if octet < OCTETS and not s.accept_one_of(SEPARATOR):
            return _invalid_address(s, f"octet {octet}: out of range or missing '.'")

    r = s.peek()
    if is_digit(r) or r == SEPARATOR:
        return _invalid_address(s, "too many octets or digits")
    return Match.ACCEPTED


ip = recognizer(_match_ip, ItemType.IP, "scan_ip")

scan_ip = ip()
