"""Source location tracking for diagnostics and debugging.

Provides SourceLocation dataclass for tracking positions in Jianwen source.
Every tree node carries an optional SourceLocation in its ``location`` field.

Thread Safety:
SourceLocation is frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class SourceLocation:
    """Source location for diagnostics and debugging.

    All positions are 1-indexed (lineno and col_offset start at 1). For
    block nodes the column points at the first character after the leading
    layout tabs.

    Attributes:
        lineno: Line number (1-indexed)
        col_offset: Column offset (1-indexed)
        source_file: Source file path (optional, set for included files)

    Examples:
            >>> loc = SourceLocation(lineno=3, col_offset=2)
            >>> str(loc)
            '3:2'

            >>> SourceLocation(1, 1, "chapter.jw")
            SourceLocation(lineno=1, col_offset=1, source_file='chapter.jw')

    Thread Safety:
        Frozen dataclass ensures immutability for safe sharing.

    """

    lineno: int
    col_offset: int
    source_file: str | None = None

    def __str__(self) -> str:
        """Format location for error messages.

        Returns:
            Formatted string like "file.jw:10:5" or "10:5"
        """
        if self.source_file:
            return f"{self.source_file}:{self.lineno}:{self.col_offset}"
        return f"{self.lineno}:{self.col_offset}"

    @classmethod
    def unknown(cls) -> SourceLocation:
        """Create an unknown/placeholder location.

        Use for nodes created synthetically or when location is unavailable.
        """
        return cls(lineno=0, col_offset=0)
