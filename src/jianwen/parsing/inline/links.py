"""Inline links.

Two forms are recognized:

    [link]text(url)                     keyword link
    [link][red][!blue]text(url)         keyword link with colors
    [red,!blue]text(url)                attribute expression + text(url)

In the keyword form each optional group after ``[link]`` sets the text
color (plain token) and underline color (``!`` token); a group that
carries no color ends the group list and is read as link text.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from jianwen.diagnostics import (
    LINK_EMPTY_URL,
    LINK_MISSING_URL,
    UNTERMINATED_BRACKET,
    report_warning,
)
from jianwen.nodes import ColorAttribute, Inline, InlineAttributes, Link
from jianwen.parsing.attributes import split_attribute_parts

if TYPE_CHECKING:
    from jianwen.diagnostics import ParseError
    from jianwen.lexer.scanner import CharScanner
    from jianwen.location import SourceLocation


class LinkInlineMixin:
    """Link parsing.

    Required Host Attributes:
        - _errors: list[ParseError]

    Required Host Methods:
        - _parse_nested(text, base_line) -> tuple[Inline, ...]
        - _read_until_close_bracket(scanner) -> tuple[str, bool]

    """

    _errors: list[ParseError]

    def _parse_keyword_link(self, scanner: CharScanner, start: SourceLocation) -> Inline | str:
        """Parse what follows ``[link]``; the keyword is already consumed."""
        raw = "[link]"
        color: ColorAttribute | None = None
        underline_color: ColorAttribute | None = None

        while scanner.peek() == "[":
            mark = scanner.save()
            scanner.next()
            group, closed = self._read_until_close_bracket(scanner)
            if not closed:
                report_warning(
                    self._errors,
                    "Missing closing ] for link attribute",
                    mark.line,
                    mark.column,
                    code=UNTERMINATED_BRACKET,
                )
                return f"{raw}[{group}"

            group_color = color
            group_underline = underline_color
            recognized = False
            for part in split_attribute_parts(group):
                if part.startswith("!"):
                    parsed = ColorAttribute.from_token(part[1:])
                    if parsed is not None:
                        group_underline = parsed
                        recognized = True
                else:
                    parsed = ColorAttribute.from_token(part)
                    if parsed is not None:
                        group_color = parsed
                        recognized = True

            if not recognized:
                scanner.restore(mark)
                break
            color, underline_color = group_color, group_underline
            raw += f"[{group}]"

        text_chars: list[str] = []
        while not scanner.eof() and scanner.peek() != "(":
            text_chars.append(scanner.next())  # type: ignore[arg-type]
        text = "".join(text_chars)
        if not text.strip():
            return raw + text
        raw += text

        if scanner.peek() != "(":
            report_warning(
                self._errors,
                "Missing (url) after [link]text for inline link",
                scanner.line,
                scanner.column,
                code=LINK_MISSING_URL,
            )
            return raw

        scanner.next()
        url_chars: list[str] = []
        while not scanner.eof():
            ch = scanner.next()
            if ch == ")":
                break
            url_chars.append(ch)  # type: ignore[arg-type]

        href = "".join(url_chars).strip()
        if not href:
            report_warning(
                self._errors,
                "Empty url in inline link",
                start.lineno,
                start.col_offset,
                code=LINK_EMPTY_URL,
            )
            return raw + "()"

        return Link(
            href=href,
            children=self._parse_nested(text.strip(), start.lineno),
            color=color,
            underline_color=underline_color,
            location=start,
        )

    def _try_attributed_link(
        self,
        scanner: CharScanner,
        attrs: InlineAttributes,
        start: SourceLocation,
    ) -> Link | None:
        """Try ``text(url)`` on the current line after an attribute expression.

        The scanner is left untouched when no link is found.
        """
        mark = scanner.save()
        text_chars: list[str] = []
        found_paren = False
        while not scanner.eof():
            ch = scanner.peek()
            if ch == "(":
                found_paren = True
                break
            if ch == "\n":
                break
            text_chars.append(scanner.next())  # type: ignore[arg-type]

        text = "".join(text_chars)
        if found_paren and text:
            scanner.next()
            url_chars: list[str] = []
            closed = False
            while not scanner.eof():
                ch = scanner.next()
                if ch == ")":
                    closed = True
                    break
                url_chars.append(ch)  # type: ignore[arg-type]

            href = "".join(url_chars)
            if closed and href:
                return Link(
                    href=href,
                    children=self._parse_nested(text.strip(), start.lineno),
                    color=attrs.color,
                    underline_color=attrs.secondary_color,
                    location=start,
                )

        scanner.restore(mark)
        return None
