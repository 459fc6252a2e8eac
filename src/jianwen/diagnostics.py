"""Diagnostic records produced while parsing.

Every stage of the pipeline appends ParseError records to a shared,
append-only list instead of raising. Two severities exist:

- ``"error"``: a region could not be parsed as written (unterminated code
  fence, table row without closing border). Parsing continues afterwards.
- ``"warning"``: a construct degraded to literal text or was left
  unexpanded (unclosed inline delimiter, unresolved include or footnote).

Stable ``code`` values let callers filter diagnostics without matching
message text.

Example:
    >>> errors: list[ParseError] = []
    >>> report_warning(errors, "Missing closing style delimiter", 1, 5)
    >>> errors[0].severity
    'warning'

Thread Safety:
    ParseError is frozen. The report_* helpers mutate only the list passed in.

"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Literal, TypeAlias

Severity: TypeAlias = Literal["error", "warning"]

# Unterminated delimiters
UNTERMINATED_CODE_FENCE = "unterminated-code-fence"
UNTERMINATED_CODE_SPAN = "unterminated-code-span"
UNTERMINATED_FRAME = "unterminated-frame"
UNTERMINATED_STYLE = "unterminated-style"
UNTERMINATED_DISABLED = "unterminated-disabled"
UNTERMINATED_BRACKET = "unterminated-bracket"
UNTERMINATED_ATTRIBUTES = "unterminated-attributes"
UNTERMINATED_COMMENT = "unterminated-comment"
LINK_MISSING_URL = "link-missing-url"
LINK_EMPTY_URL = "link-empty-url"
INVALID_FONT_SIZE = "invalid-font-size"
TABLE_ROW_BORDER = "table-row-border"

# Unresolved references
FOOTNOTE_UNDEFINED = "footnote-undefined"
INCLUDE_TAG_NOT_FOUND = "include-tag-not-found"
INCLUDE_LOAD_FAILED = "include-load-failed"
INCLUDE_NO_LOADER = "include-no-loader"

# Structural limits
INCLUDE_CYCLE = "include-cycle"
INCLUDE_MAX_DEPTH = "include-max-depth"

# Layout misuse
LAYOUT_MULTI_ARROW = "layout-multi-arrow"


@dataclass(frozen=True, slots=True)
class ParseError:
    """A single diagnostic.

    Attributes:
        message: Human-readable description
        line: 1-indexed line in the document the diagnostic belongs to
        column: 1-indexed column, when known
        severity: "error" or "warning"
        code: Stable machine-readable category, when assigned

    """

    message: str
    line: int
    column: int | None = None
    severity: Severity = "warning"
    code: str | None = None

    @property
    def is_error(self) -> bool:
        return self.severity == "error"

    def __str__(self) -> str:
        position = f"{self.line}:{self.column}" if self.column is not None else f"{self.line}"
        return f"{position}: {self.severity}: {self.message}"


def build_parse_error(
    message: str,
    line: int,
    column: int | None = None,
    *,
    severity: Severity,
    code: str | None = None,
) -> ParseError:
    """Create a ParseError record."""
    return ParseError(message=message, line=line, column=column, severity=severity, code=code)


def report_error(
    errors: list[ParseError],
    message: str,
    line: int,
    column: int | None = None,
    *,
    code: str | None = None,
) -> None:
    """Append an error-severity diagnostic."""
    errors.append(build_parse_error(message, line, column, severity="error", code=code))


def report_warning(
    errors: list[ParseError],
    message: str,
    line: int,
    column: int | None = None,
    *,
    code: str | None = None,
) -> None:
    """Append a warning-severity diagnostic."""
    errors.append(build_parse_error(message, line, column, severity="warning", code=code))


def prefix_include_error(error: ParseError, target: str) -> ParseError:
    """Return a copy of ``error`` attributed to an included file.

    The original record is left untouched.

    Args:
        error: Diagnostic produced while parsing the included document
        target: Include target path, as written in ``[@](path)``

    Returns:
        New ParseError whose message starts with ``[include:target]``.
    """
    return replace(error, message=f"[include:{target}] {error.message}")


__all__ = [
    "ParseError",
    "Severity",
    "build_parse_error",
    "prefix_include_error",
    "report_error",
    "report_warning",
]
