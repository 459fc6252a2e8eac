"""Exception classes for Jianwen.

Malformed markup never raises: it is reported as a diagnostic record
(see :mod:`jianwen.diagnostics`). Exceptions are reserved for invalid
caller configuration and for callers that opt into failing on errors.
"""

from __future__ import annotations


class JianwenError(Exception):
    """Base exception for all Jianwen errors.

    Subclass this for specific error categories.
    """

    pass


class ConfigError(JianwenError):
    """Invalid parse configuration.

    Raised when a ParseConfig is built with values the parser cannot honor,
    such as a negative include depth or a non-callable file loader.
    """

    def __init__(self, option: str, message: str) -> None:
        """Initialize configuration error.

        Args:
            option: Name of the offending option (e.g., "include_max_depth")
            message: Description of the problem
        """
        self.option = option
        super().__init__(f"Invalid option '{option}': {message}")


class ParseFailedError(JianwenError):
    """A parse produced error-severity diagnostics.

    Raised by :meth:`jianwen.ParseResult.raise_for_errors` for callers that
    want to abort on the first fatal region instead of inspecting the
    diagnostics list.
    """

    def __init__(
        self,
        message: str,
        lineno: int | None = None,
        col_offset: int | None = None,
        source_file: str | None = None,
    ) -> None:
        """Initialize parse failure with optional location.

        Args:
            message: Error description
            lineno: Line number where error occurred (1-indexed)
            col_offset: Column offset where error occurred (1-indexed)
            source_file: Path to source file (optional)
        """
        self.message = message
        self.lineno = lineno
        self.col_offset = col_offset
        self.source_file = source_file

        # Build formatted message
        location = ""
        if source_file:
            location = f"{source_file}:"
        if lineno is not None:
            location += f"{lineno}:"
            if col_offset is not None:
                location += f"{col_offset}:"
        if location:
            location = location.rstrip(":") + " "

        super().__init__(f"{location}{message}")
