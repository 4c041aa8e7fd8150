"""Rune predicates for parameterizing accept loops.

Every predicate is a pure, total function of a single rune. A rune is a
one-character string, or the empty end-of-input sentinel, for which every
predicate here returns False. None of them look at scanner state; they are
passed to the accept primitives as arguments.

All sets are frozensets for:
- O(1) membership testing
- Immutability (thread-safe)
- Safe handling of the "" sentinel ("" in "abc" is True, "" in a frozenset is not)

Usage:
    from scanr.predicates import is_hostname_char

    scanner.accept_while(is_hostname_char)
"""

from collections.abc import Callable, Iterable

RuneFn = Callable[[str], bool]

SPACE: frozenset[str] = frozenset(" ")
WHITESPACE: frozenset[str] = frozenset(" \t")
QUOTES: frozenset[str] = frozenset("\"'`")
NEWLINES: frozenset[str] = frozenset("\r\n")
DIGITS: frozenset[str] = frozenset("0123456789")
ALPHA_LOWER: frozenset[str] = frozenset("abcdefghijklmnopqrstuvwxyz")
ALPHA_UPPER: frozenset[str] = frozenset("ABCDEFGHIJKLMNOPQRSTUVWXYZ")
ALPHA: frozenset[str] = ALPHA_LOWER | ALPHA_UPPER
ALNUM: frozenset[str] = ALPHA | DIGITS
HOSTNAME_CHARS: frozenset[str] = ALNUM | frozenset("-")


def is_space(r: str) -> bool:
    """Return True if r is a space character."""
    return r in SPACE


def is_whitespace(r: str) -> bool:
    """Return True if r is a space or tab."""
    return r in WHITESPACE


def is_quote(r: str) -> bool:
    """Return True if r is one of " ' `."""
    return r in QUOTES


def is_newline(r: str) -> bool:
    """Return True if r is \\r or \\n."""
    return r in NEWLINES


def is_alpha_lower(r: str) -> bool:
    return r in ALPHA_LOWER


def is_alpha_upper(r: str) -> bool:
    return r in ALPHA_UPPER


def is_alpha(r: str) -> bool:
    """Return True if r is an ASCII letter."""
    return r in ALPHA


def is_digit(r: str) -> bool:
    """Return True if r is between 0 and 9."""
    return r in DIGITS


def is_alnum(r: str) -> bool:
    """Return True if r is an ASCII letter or digit."""
    return r in ALNUM


def is_hostname_char(r: str) -> bool:
    """Return True if r is a letter, digit, or "-"."""
    return r in HOSTNAME_CHARS


def one_of(chars: Iterable[str]) -> RuneFn:
    """Build a predicate matching any rune in chars.

    Example:
        >>> is_sign = one_of("+-")
        >>> is_sign("-"), is_sign("")
        (True, False)
    """
    valid = frozenset(chars)

    def predicate(r: str) -> bool:
        return r in valid

    return predicate


def any_of(*fns: RuneFn) -> RuneFn:
    """Build a predicate that holds when any of fns holds."""

    def predicate(r: str) -> bool:
        return any(fn(r) for fn in fns)

    return predicate
