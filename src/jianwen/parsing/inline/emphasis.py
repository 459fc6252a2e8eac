"""Symmetric style delimiters.

    *bold*  /italic/  _underline_  -strike-  ~wave~  ^sup^  ^^sub^^

A style runs to the next occurrence of its own delimiter with no
left/right-flanking rules. Inside ``^^...^^`` a single ``^`` is content.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from jianwen.diagnostics import UNTERMINATED_STYLE, report_warning
from jianwen.nodes import (
    Emphasis,
    Inline,
    Strike,
    Strong,
    Subscript,
    Superscript,
    Text,
    Underline,
    Wave,
)

if TYPE_CHECKING:
    from jianwen.diagnostics import ParseError
    from jianwen.lexer.scanner import CharScanner

STYLE_NODE_TYPES: dict[str, type] = {
    "*": Strong,
    "/": Emphasis,
    "_": Underline,
    "-": Strike,
    "~": Wave,
    "^": Superscript,
}


class StyleInlineMixin:
    """Style delimiter parsing.

    Required Host Attributes:
        - _errors: list[ParseError]

    Required Host Methods:
        - _parse_nested(text, base_line) -> tuple[Inline, ...]
        - _location(scanner) -> SourceLocation

    """

    _errors: list[ParseError]

    def _read_styled_segment(self, scanner: CharScanner) -> Inline:
        start = self._location(scanner)
        marker = scanner.next()
        opener = marker
        node_type = STYLE_NODE_TYPES[marker]  # type: ignore[index]
        if marker == "^" and scanner.peek() == "^":
            scanner.next()
            opener = "^^"
            node_type = Subscript

        content: list[str] = []
        while not scanner.eof():
            if scanner.text.startswith(opener, scanner.index):  # type: ignore[arg-type]
                for _ in opener:  # type: ignore[union-attr]
                    scanner.next()
                children = self._parse_nested("".join(content), start.lineno)
                return node_type(children=children, location=start)
            content.append(scanner.next())  # type: ignore[arg-type]

        report_warning(
            self._errors,
            "Missing closing style delimiter",
            start.lineno,
            start.col_offset,
            code=UNTERMINATED_STYLE,
        )
        return Text(content=f"{opener}{''.join(content)}", location=start)
