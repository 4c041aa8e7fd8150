"""Source location tracking for diagnostics.

Items carry only a byte offset. SourceLocation turns that offset into a
line and column for error messages.

Thread Safety:
SourceLocation is frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class SourceLocation:
    """Source location for error messages and debugging.

    Line and column are 1-indexed; the column counts characters, not
    bytes.

    Attributes:
        lineno: Line number (1-indexed)
        col_offset: Column (1-indexed)
        offset: Absolute byte offset in the encoded input
        source_file: Source file path (optional)

    Examples:
            >>> locate("a\\nbc", 3)
        SourceLocation(lineno=2, col_offset=2, offset=3, source_file=None)

    """

    lineno: int
    col_offset: int
    offset: int = 0
    source_file: str | None = None

    def __str__(self) -> str:
        """Format location for error messages.

        Returns:
            Formatted string like "hosts.txt:10:5" or "10:5"
        """
        if self.source_file:
            return f"{self.source_file}:{self.lineno}:{self.col_offset}"
        return f"{self.lineno}:{self.col_offset}"


def locate(
    source: str | bytes, offset: int, source_file: str | None = None
) -> SourceLocation:
    """Compute the location of a byte offset in source.

    A lone "\\r" counts as a line break, as do "\\n" and "\\r\\n".

    Args:
        source: The scanned input (str is UTF-8 encoded first)
        offset: Byte offset, clamped to the input length
        source_file: Optional path for error messages

    Returns:
        SourceLocation for offset.
    """
    buf = source.encode("utf-8") if isinstance(source, str) else source
    offset = max(0, min(offset, len(buf)))
    prefix = buf[:offset]

    lineno = 1 + prefix.count(b"\n") + prefix.count(b"\r") - prefix.count(b"\r\n")
    line_start = max(prefix.rfind(b"\n"), prefix.rfind(b"\r")) + 1
    col = len(prefix[line_start:].decode("utf-8", errors="replace")) + 1

    return SourceLocation(
        lineno=lineno,
        col_offset=col,
        offset=offset,
        source_file=source_file,
    )
