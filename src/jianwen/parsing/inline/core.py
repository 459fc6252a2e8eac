"""Core inline parsing for Jianwen.

Inline parsing is a single left-to-right scan over a block's text. The
first character of each construct selects a rule:

    \\   escape              {   disabled span
    `   code span / frame   =   marker highlight
    * / _ - ~ ^   styles    [   bracket expression

Characters that start no rule accumulate in a text buffer. Rules that
produce nodes flush the buffer first; escape and disabled spans only add
literal text to it, so ``a\\*b`` stays one Text node.

Thread Safety:
All methods use instance-local state only.
Safe for concurrent use when each parser instance is used by one thread.

"""

from __future__ import annotations

from typing import TYPE_CHECKING

from jianwen.lexer.scanner import CharScanner
from jianwen.location import SourceLocation
from jianwen.nodes import Inline, Text

if TYPE_CHECKING:
    from jianwen.diagnostics import ParseError

# first char -> (flushes the text buffer, handler method name)
_INLINE_RULES: dict[str, tuple[bool, str]] = {
    "\\": (False, "_parse_escape"),
    "{": (False, "_parse_disabled"),
    "`": (True, "_read_backtick_segment"),
    "=": (True, "_read_marker_highlight"),
    "*": (True, "_read_styled_segment"),
    "/": (True, "_read_styled_segment"),
    "_": (True, "_read_styled_segment"),
    "-": (True, "_read_styled_segment"),
    "~": (True, "_read_styled_segment"),
    "^": (True, "_read_styled_segment"),
    "[": (True, "_parse_bracket_expression"),
}


class InlineParsingCoreMixin:
    """Inline scan loop and rule dispatch.

    Required Host Attributes:
        - _errors: list[ParseError]

    Required Host Methods (from other mixins):
        - _parse_escape(scanner) -> str
        - _parse_disabled(scanner) -> str
        - _read_backtick_segment(scanner) -> Inline
        - _read_marker_highlight(scanner) -> Inline
        - _read_styled_segment(scanner) -> Inline
        - _parse_bracket_expression(scanner) -> Inline | str

    """

    _errors: list[ParseError]

    def parse_inlines(
        self, text: str, base_line: int = 1, base_column: int = 1
    ) -> tuple[Inline, ...]:
        """Parse inline content.

        Args:
            text: Raw text of one inline container (may span lines)
            base_line: Line of the first character in the document
            base_column: Column of the first character

        Returns:
            Inline nodes in source order.
        """
        scanner = CharScanner(text, base_line, base_column)
        nodes: list[Inline] = []
        buffer: list[str] = []
        buffer_start: SourceLocation | None = None

        def flush() -> None:
            nonlocal buffer_start
            if buffer:
                nodes.append(Text(content="".join(buffer), location=buffer_start))
                buffer.clear()
            buffer_start = None

        while not scanner.eof():
            ch = scanner.peek()
            rule = _INLINE_RULES.get(ch)  # type: ignore[arg-type]
            start = self._location(scanner)

            if rule is None:
                if not buffer:
                    buffer_start = start
                buffer.append(scanner.next())  # type: ignore[arg-type]
                continue

            flushes, handler = rule
            if flushes:
                flush()
            result = getattr(self, handler)(scanner)

            if not isinstance(result, str):
                nodes.append(result)
            elif flushes:
                if result:
                    nodes.append(Text(content=result, location=start))
            elif result:
                if not buffer:
                    buffer_start = start
                buffer.append(result)

        flush()
        return tuple(nodes)

    def _parse_nested(self, text: str, base_line: int) -> tuple[Inline, ...]:
        """Parse the content of a construct; columns restart at 1."""
        return self.parse_inlines(text, base_line)

    @staticmethod
    def _location(scanner: CharScanner) -> SourceLocation:
        return SourceLocation(lineno=scanner.line, col_offset=scanner.column)
