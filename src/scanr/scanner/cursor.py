"""Rune cursor mixin.

Decodes UTF-8 runes from the encoded input one at a time. Positions are
byte offsets; a rune is 1 to 4 bytes wide.
"""

from __future__ import annotations

from scanr.errors import CursorError

# End-of-input sentinel. Never a valid rune, and no predicate matches it.
EOF = ""

# Substituted for bytes that do not start a valid UTF-8 sequence.
RUNE_ERROR = "�"


def decode_rune(buf: bytes, pos: int) -> tuple[str, int]:
    """Decode the rune starting at buf[pos].

    Returns:
        (rune, width). Invalid or truncated sequences decode to
        RUNE_ERROR with width 1 so the cursor always makes progress.
    """
    lead = buf[pos]
    if lead < 0x80:
        return chr(lead), 1
    if 0xC2 <= lead <= 0xDF:
        width = 2
    elif 0xE0 <= lead <= 0xEF:
        width = 3
    elif 0xF0 <= lead <= 0xF4:
        width = 4
    else:
        return RUNE_ERROR, 1
    try:
        # Strict decode rejects overlong forms, surrogates and short reads
        return buf[pos : pos + width].decode("utf-8"), width
    except UnicodeDecodeError:
        return RUNE_ERROR, 1


class CursorMixin:
    """Mixin providing rune navigation over the encoded input.

    State (set by the Scanner class):
        _input: UTF-8 encoded input
        _input_len: Cached len(_input)
        _pos: Current byte offset
        _start: Start of the pending (not yet emitted) window
        _width: Width of the most recently decoded rune
        _can_backup: Whether the last step was a next()

    """

    _input: bytes
    _input_len: int
    _pos: int
    _start: int
    _width: int
    _can_backup: bool
    _strict_backup: bool

    @property
    def pos(self) -> int:
        """Current byte offset."""
        return self._pos

    @property
    def start_pos(self) -> int:
        """Byte offset where the pending window starts."""
        return self._start

    @property
    def pending(self) -> str:
        """Text consumed since the last emission."""
        return self._input[self._start : self._pos].decode("utf-8", errors="replace")

    def next(self) -> str:
        """Return the next rune in the input and advance past it.

        Returns:
            The decoded rune, or EOF (width 0) at the end of input.
        """
        self._can_backup = True
        if self._pos >= self._input_len:
            self._width = 0
            return EOF

        r, w = decode_rune(self._input, self._pos)
        self._width = w
        self._pos += w
        return r

    def backup(self) -> None:
        """Step back one rune. Can only be called once per call of next.

        Raises:
            CursorError: On a second backup without an intervening next,
                unless the scanner was configured with strict_backup=False.
        """
        if not self._can_backup and self._strict_backup:
            raise CursorError(f"backup() without a preceding next() at offset {self._pos}")
        self._can_backup = False
        self._pos = max(self._start, self._pos - self._width)

    def peek(self) -> str:
        """Return but do not consume the next rune in the input."""
        r = self.next()
        self.backup()
        return r

    def prev_rune(self) -> str:
        """Return the rune that ends at the current position.

        Returns:
            The rune, or EOF at the start of input.
        """
        if self._pos == 0:
            return EOF
        # Walk back over continuation bytes (at most 3) to the lead byte
        start = self._pos - 1
        while start > 0 and self._pos - start < 4 and self._input[start] & 0xC0 == 0x80:
            start -= 1
        r, w = decode_rune(self._input, start)
        if start + w != self._pos:
            return RUNE_ERROR
        return r

    def ignore(self) -> None:
        """Skip over the pending input before this point without emitting."""
        self._start = self._pos
        self._can_backup = False
