"""Bracket expressions.

A ``[...]`` group is, in order of precedence:

    []                  literal
    [fn:id]             footnote reference
    [comment]...[/]     inline comment
    [link]...           keyword link (see :mod:`.links`)
    [attrs]...          attribute expression

Consecutive attribute groups merge (``[red][bold]``). What follows the
merged expression decides its reach:

- a delimiter symbol: only that construct is styled (``[red]*x*``)
- ``text(url)`` on the same line: an attributed link
- anything else: a scope running to ``[/]``, end of line, the next
  attribute group, or end of input

"""

from __future__ import annotations

from dataclasses import replace
from typing import TYPE_CHECKING

from jianwen.diagnostics import (
    UNTERMINATED_ATTRIBUTES,
    UNTERMINATED_BRACKET,
    UNTERMINATED_COMMENT,
    report_warning,
)
from jianwen.nodes import FootnoteRef, Highlight, Inline, InlineAttributes, InlineAttrs, InlineComment
from jianwen.parsing.attributes import is_inline_attribute_expression, parse_inline_attributes

if TYPE_CHECKING:
    from jianwen.diagnostics import ParseError
    from jianwen.lexer.scanner import CharScanner
    from jianwen.location import SourceLocation

# Characters that bind a preceding attribute expression to one construct
SCOPED_SYMBOLS = frozenset("*/_-~^`=[")

SCOPE_CLOSE = "[/]"


class BracketInlineMixin:
    """Bracket expression parsing.

    Required Host Attributes:
        - _errors: list[ParseError]

    Required Host Methods:
        - _parse_nested(text, base_line) -> tuple[Inline, ...]
        - _location(scanner) -> SourceLocation
        - _read_backtick_segment(scanner) -> Inline
        - _read_marker_highlight(scanner) -> Inline
        - _read_styled_segment(scanner) -> Inline
        - _parse_keyword_link(scanner, start) -> Inline | str
        - _try_attributed_link(scanner, attrs, start) -> Link | None

    """

    _errors: list[ParseError]

    def _parse_bracket_expression(self, scanner: CharScanner) -> Inline | str:
        start = self._location(scanner)
        scanner.next()
        inside, closed = self._read_until_close_bracket(scanner)
        if not closed:
            report_warning(
                self._errors,
                "Missing closing ] for bracket expression",
                start.lineno,
                start.col_offset,
                code=UNTERMINATED_BRACKET,
            )
            return "[" + inside

        if not inside:
            return "[]"

        if inside.startswith("fn:"):
            identifier = inside[3:].strip()
            if not identifier:
                return f"[{inside}]"
            return FootnoteRef(identifier=identifier, location=start)

        if inside == "comment":
            return self._parse_inline_comment(scanner, start)

        if inside == "link":
            return self._parse_keyword_link(scanner, start)

        attrs = parse_inline_attributes(inside, self._errors, start.lineno, start.col_offset)
        if attrs is None:
            return f"[{inside}]"
        return self._parse_attribute_run(scanner, attrs, f"[{inside}]", start)

    @staticmethod
    def _read_until_close_bracket(scanner: CharScanner) -> tuple[str, bool]:
        """Consume through the next ``]``; returns (content, closed)."""
        chars: list[str] = []
        while not scanner.eof():
            ch = scanner.next()
            if ch == "]":
                return "".join(chars), True
            chars.append(ch)  # type: ignore[arg-type]
        return "".join(chars), False

    def _parse_inline_comment(self, scanner: CharScanner, start: SourceLocation) -> Inline | str:
        content: list[str] = []
        while not scanner.eof():
            if scanner.text.startswith(SCOPE_CLOSE, scanner.index):
                for _ in SCOPE_CLOSE:
                    scanner.next()
                children = self._parse_nested("".join(content), start.lineno)
                return InlineComment(children=children, location=start)
            content.append(scanner.next())  # type: ignore[arg-type]

        report_warning(
            self._errors,
            "Missing closing [/] for inline comment",
            start.lineno,
            start.col_offset,
            code=UNTERMINATED_COMMENT,
        )
        return "[comment]" + "".join(content)

    def _parse_attribute_run(
        self,
        scanner: CharScanner,
        attrs: InlineAttributes,
        raw: str,
        start: SourceLocation,
    ) -> Inline | str:
        merged = attrs
        while scanner.peek() == "[":
            mark = scanner.save()
            scanner.next()
            group, closed = self._read_until_close_bracket(scanner)
            if not closed:
                report_warning(
                    self._errors,
                    "Missing closing ] for inline attributes",
                    mark.line,
                    mark.column,
                    code=UNTERMINATED_ATTRIBUTES,
                )
                return f"{raw}[{group}"
            if not is_inline_attribute_expression(group):
                scanner.restore(mark)
                break
            extra = parse_inline_attributes(group, self._errors, mark.line, mark.column)
            if extra is None:
                scanner.restore(mark)
                break
            merged = merged.merge(extra)
            raw += f"[{group}]"

        if scanner.peek() in SCOPED_SYMBOLS:
            return self._parse_scoped_symbol(scanner, merged, raw, start)

        link = self._try_attributed_link(scanner, merged, start)
        if link is not None:
            return link

        return self._parse_attribute_scope(scanner, merged, start)

    def _parse_scoped_symbol(
        self,
        scanner: CharScanner,
        attrs: InlineAttributes,
        raw: str,
        start: SourceLocation,
    ) -> Inline | str:
        symbol = scanner.peek()
        inner: Inline | str
        if symbol == "`":
            inner = self._read_backtick_segment(scanner)
        elif symbol == "=":
            inner = self._read_marker_highlight(scanner)
        elif symbol == "[":
            inner = self._parse_bracket_expression(scanner)
        else:
            inner = self._read_styled_segment(scanner)

        if isinstance(inner, str):
            return raw + inner

        if isinstance(inner, Highlight):
            # a highlight takes over the colors as its own text/fill colors
            inner = replace(
                inner,
                color=attrs.color or inner.color,
                fill_color=attrs.secondary_color or inner.fill_color,
            )
            attrs = replace(attrs, color=None, secondary_color=None)

        return InlineAttrs(attrs=attrs, children=(inner,), location=start)

    def _parse_attribute_scope(
        self,
        scanner: CharScanner,
        attrs: InlineAttributes,
        start: SourceLocation,
    ) -> Inline:
        text = scanner.text
        segment: list[str] = []
        while not scanner.eof():
            ch = scanner.peek()
            if ch == "\n":
                break
            if ch == "[":
                if text.startswith(SCOPE_CLOSE, scanner.index):
                    for _ in SCOPE_CLOSE:
                        scanner.next()
                    break
                if text.startswith("[/", scanner.index):
                    segment.append(scanner.next())  # type: ignore[arg-type]
                    continue
                close = text.find("]", scanner.index + 1)
                if close != -1 and is_inline_attribute_expression(
                    text[scanner.index + 1 : close]
                ):
                    break
            segment.append(scanner.next())  # type: ignore[arg-type]

        children = self._parse_nested("".join(segment), start.lineno)
        return InlineAttrs(attrs=attrs, children=children, location=start)
