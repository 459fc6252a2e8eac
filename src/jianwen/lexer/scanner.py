"""Character cursor with line/column tracking.

The inline parser reads its input one character at a time through a
CharScanner. Lookahead that may fail is done by saving the cursor,
reading ahead, and restoring it; no token buffer is kept.

Thread Safety:
    A scanner is mutable and owned by a single parse call.

"""

from __future__ import annotations

from typing import NamedTuple


class ScannerMark(NamedTuple):
    """Saved cursor state, as returned by :meth:`CharScanner.save`."""

    index: int
    line: int
    column: int


class CharScanner:
    """Cursor over a string.

    ``line`` and ``column`` describe the position of the next character to
    be read. Reading a newline moves to column 1 of the next line.

    Example:
        >>> scanner = CharScanner("a\\nb", base_line=4)
        >>> scanner.next(), scanner.next()
        ('a', '\\n')
        >>> scanner.line, scanner.column
        (5, 1)

    """

    __slots__ = ("text", "index", "line", "column")

    def __init__(self, text: str, base_line: int = 1, base_column: int = 1) -> None:
        self.text = text
        self.index = 0
        self.line = base_line
        self.column = base_column

    def peek(self) -> str | None:
        """Return the next character without consuming it."""
        if self.index >= len(self.text):
            return None
        return self.text[self.index]

    def next(self) -> str | None:
        """Consume and return the next character (None at end of input)."""
        if self.index >= len(self.text):
            return None
        ch = self.text[self.index]
        self.index += 1
        if ch == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        return ch

    def eof(self) -> bool:
        return self.index >= len(self.text)

    def rest(self) -> str:
        """Unconsumed remainder of the input."""
        return self.text[self.index :]

    def save(self) -> ScannerMark:
        return ScannerMark(self.index, self.line, self.column)

    def restore(self, mark: ScannerMark) -> None:
        self.index, self.line, self.column = mark
