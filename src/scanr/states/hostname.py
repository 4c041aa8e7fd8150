"""Hostname recognizers.

scan_hostname validates a single label and its terminating dot ("www.").
scan_domain_name reads a whole dotted name ("www.example.com", with or
without a trailing dot) and also enforces the RFC 1035 length limits.

Label rules, shared by both:
- starts with a letter or digit
- continues with letters, digits or "-"
- does not end with "-"

"""

from __future__ import annotations

from scanr.items import ItemType
from scanr.predicates import any_of, is_alnum, is_hostname_char, one_of
from scanr.scanner.core import Scanner
from scanr.states.base import Match, invalid, recognizer

SEPARATOR = "."
MAX_LABEL_LENGTH = 63
MAX_NAME_LENGTH = 253

_is_name_char = any_of(is_hostname_char, one_of(SEPARATOR))


def _invalid_label(s: Scanner, reason: str) -> Match:
    s.accept_while(is_hostname_char)
    s.accept_one_of(SEPARATOR)
    return invalid(s, reason)


def _match_hostname(s: Scanner) -> Match:
    r = s.next()
    if not is_hostname_char(r):
        s.backup()
        return Match.REJECTED
    if not is_alnum(r):
        return _invalid_label(s, "label must start with a letter or digit")

    s.accept_while(is_hostname_char)
    if s.prev_rune() == "-":
        return _invalid_label(s, "label must not end with '-'")
    if not s.accept_one_of(SEPARATOR):
        return _invalid_label(s, "label must be followed by '.'")
    return Match.ACCEPTED


def _invalid_name(s: Scanner, reason: str) -> Match:
    s.accept_while(_is_name_char)
    return invalid(s, reason)


def _match_domain_name(s: Scanner) -> Match:
    if not is_hostname_char(s.peek()):
        return Match.REJECTED

    name_start = s.pos
    labels = 0
    while True:
        label_start = s.pos
        r = s.next()
        if not is_alnum(r):
            s.backup()
            if labels and r != SEPARATOR and not is_hostname_char(r):
                break  # trailing dot of a fully qualified name
            return _invalid_name(s, "label must start with a letter or digit")

        s.accept_while(is_hostname_char)
        labels += 1
        if s.prev_rune() == "-":
            return _invalid_name(s, "label must not end with '-'")
        if s.pos - label_start > MAX_LABEL_LENGTH:
            return _invalid_name(s, f"label longer than {MAX_LABEL_LENGTH} bytes")
        if not s.accept_one_of(SEPARATOR):
            break

    length = s.pos - name_start
    if s.prev_rune() == SEPARATOR:
        length -= 1
    if length > MAX_NAME_LENGTH:
        return _invalid_name(s, f"name longer than {MAX_NAME_LENGTH} bytes")
    return Match.ACCEPTED


hostname = recognizer(_match_hostname, ItemType.HOSTNAME, "scan_hostname")
domain_name = recognizer(_match_domain_name, ItemType.HOSTNAME, "scan_domain_name")

scan_hostname = hostname()
scan_domain_name = domain_name()
