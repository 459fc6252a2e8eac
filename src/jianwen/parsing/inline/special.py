"""Escapes, disabled spans, code spans and highlights.

    \\x          literal x
    {text}      literal text, never re-parsed
    `code`      code span, never re-parsed
    ``text``    frame highlight (N backticks close with N backticks)
    =text=      marker highlight

Each construct degrades to literal text plus a warning when unclosed.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from jianwen.diagnostics import (
    UNTERMINATED_CODE_SPAN,
    UNTERMINATED_DISABLED,
    UNTERMINATED_FRAME,
    report_warning,
)
from jianwen.nodes import CodeSpan, Highlight, Inline, Text

if TYPE_CHECKING:
    from jianwen.diagnostics import ParseError
    from jianwen.lexer.scanner import CharScanner


class SpecialInlineMixin:
    """Literal and highlight constructs.

    Required Host Attributes:
        - _errors: list[ParseError]

    Required Host Methods:
        - _parse_nested(text, base_line) -> tuple[Inline, ...]
        - _location(scanner) -> SourceLocation

    """

    _errors: list[ParseError]

    def _parse_escape(self, scanner: CharScanner) -> str:
        scanner.next()
        return scanner.next() or ""

    def _parse_disabled(self, scanner: CharScanner) -> str:
        start = self._location(scanner)
        scanner.next()
        content: list[str] = []
        while not scanner.eof():
            ch = scanner.next()
            if ch == "}":
                return "".join(content)
            content.append(ch)  # type: ignore[arg-type]

        report_warning(
            self._errors,
            "Missing closing } for disabled inline segment",
            start.lineno,
            start.col_offset,
            code=UNTERMINATED_DISABLED,
        )
        return "{" + "".join(content)

    def _read_backtick_segment(self, scanner: CharScanner) -> Inline:
        """Read a code span (one backtick) or a frame highlight (two or more)."""
        start = self._location(scanner)
        ticks = 0
        while scanner.peek() == "`":
            scanner.next()
            ticks += 1

        content: list[str] = []
        if ticks == 1:
            while not scanner.eof():
                ch = scanner.next()
                if ch == "`":
                    return CodeSpan(code="".join(content), location=start)
                content.append(ch)  # type: ignore[arg-type]

            report_warning(
                self._errors,
                "Missing closing backtick for inline code span",
                start.lineno,
                start.col_offset,
                code=UNTERMINATED_CODE_SPAN,
            )
            return Text(content="`" + "".join(content), location=start)

        closing = "`" * ticks
        while not scanner.eof():
            if scanner.text.startswith(closing, scanner.index):
                for _ in range(ticks):
                    scanner.next()
                children = self._parse_nested("".join(content), start.lineno)
                return Highlight(mode="frame", children=children, location=start)
            content.append(scanner.next())  # type: ignore[arg-type]

        report_warning(
            self._errors,
            "Missing closing double backticks for frame highlight",
            start.lineno,
            start.col_offset,
            code=UNTERMINATED_FRAME,
        )
        return Text(content=closing + "".join(content), location=start)

    def _read_marker_highlight(self, scanner: CharScanner) -> Inline:
        """Read ``=text=``; a lone ``=`` or ``==`` stays literal."""
        start = self._location(scanner)
        scanner.next()

        end = scanner.text.find("=", scanner.index)
        if end == -1:
            return Text(content="=", location=start)

        content = scanner.text[scanner.index : end]
        while scanner.index <= end:
            scanner.next()
        if not content:
            return Text(content="==", location=start)
        children = self._parse_nested(content, start.lineno)
        return Highlight(mode="marker", children=children, location=start)
