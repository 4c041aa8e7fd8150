"""Accept primitives mixin.

Generic consumption built on the cursor. Nothing here emits; every method
reports whether (or how much) it consumed.
"""

from __future__ import annotations

from collections.abc import Iterable

from scanr.predicates import RuneFn
from scanr.scanner.cursor import EOF


class AcceptMixin:
    """Mixin providing accept-style consumption over the cursor."""

    _input: bytes
    _pos: int
    _can_backup: bool

    def next(self) -> str:
        """Return the next rune and advance. Implemented by CursorMixin."""
        raise NotImplementedError

    def backup(self) -> None:
        """Step back one rune. Implemented by CursorMixin."""
        raise NotImplementedError

    def peek(self) -> str:
        """Return the next rune without consuming. Implemented by CursorMixin."""
        raise NotImplementedError

    def accept_one_of(self, valid: Iterable[str]) -> bool:
        """Consume the next rune if it's from the valid set.

        Args:
            valid: Accepted runes (a string or a set of runes)

        Returns:
            True if a rune was consumed.
        """
        valid = frozenset(valid)
        if self.next() in valid:
            return True
        self.backup()
        return False

    def accept_run(self, valid: Iterable[str]) -> int:
        """Consume a run of runes from the valid set.

        Returns:
            Number of runes consumed (possibly zero).
        """
        valid = frozenset(valid)
        length = 0
        while self.next() in valid:
            length += 1
        self.backup()
        return length

    def accept_until(self, end: str) -> bool:
        """Consume up to, but not including, end or EOF.

        Returns:
            False without consuming if the next rune is already end or
            EOF, True otherwise.
        """
        r = self.peek()
        if r == end or r == EOF:
            return False
        r = self.next()
        while r != end and r != EOF:
            r = self.next()
        self.backup()
        return True

    def accept_while(self, fn: RuneFn) -> bool:
        """Consume while fn returns True.

        Returns:
            True if anything was consumed.
        """
        accepted = False
        r = self.next()
        while r != EOF and fn(r):
            accepted = True
            r = self.next()
        self.backup()
        return accepted

    def accept_until_match(self, end: RuneFn) -> bool:
        """Consume until end returns True, or EOF.

        Returns:
            True if anything was consumed.
        """
        accepted = False
        r = self.next()
        while r != EOF and not end(r):
            accepted = True
            r = self.next()
        self.backup()
        return accepted

    def accept_literal(self, valid: str) -> bool:
        """Consume valid if the remaining input starts with it.

        Either the whole sequence is consumed or nothing is.

        Returns:
            True if the sequence was consumed.
        """
        encoded = valid.encode("utf-8")
        if not self._input.startswith(encoded, self._pos):
            return False
        if encoded:
            self._pos += len(encoded)
            # A literal is not a single rune step; backup() may not undo it
            self._can_backup = False
        return True
