"""Footnote section parsing for Jianwen.

    [footnotes]
    [fn=1]
    First footnote, any block content.
    [fn=2]
    Second footnote.

The section runs to the next blank line. Inside it, each ``[fn=id]`` line
starts a definition whose content runs to the next ``[fn=...]`` line.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from jianwen.lexer.classifiers import is_footnotes_line, match_footnote_def
from jianwen.lexer.lines import get_line_info
from jianwen.location import SourceLocation
from jianwen.nodes import Block, BlockAttributes, FootnoteDef, Footnotes

if TYPE_CHECKING:
    from jianwen.lexer.lines import LineInfo


class FootnoteParsingMixin:
    """Mixin for ``[footnotes]`` sections.

    Required Host Attributes:
        - _lines: list[str]
        - _line_numbers: Sequence[int]
        - _source_file: str | None
        - _pos: int

    Required Host Methods:
        - _emit(info, raw, build) -> None
        - _raw_lines(start, end) -> str
        - _parse_nested_blocks(lines, line_numbers) -> tuple[Block, ...]

    """

    _lines: list[str]
    _line_numbers: Sequence[int]
    _source_file: str | None
    _pos: int

    def _try_footnotes(self, info: LineInfo, trimmed: str) -> bool:
        if not is_footnotes_line(trimmed):
            return False

        start = self._pos
        end = start + 1
        while end < len(self._lines) and self._lines[end].strip():
            end += 1

        def build(attrs: BlockAttributes, location: SourceLocation) -> Footnotes:
            return Footnotes(
                children=self._parse_footnote_defs(start + 1, end),
                block_attrs=attrs,
                location=location,
            )

        self._emit(info, self._raw_lines(start, end), build)
        self._pos = end
        return True

    def _parse_footnote_defs(self, start: int, end: int) -> tuple[FootnoteDef, ...]:
        """Split section lines ``start:end`` into definitions.

        Lines before the first ``[fn=id]`` are ignored.
        """
        contents = [get_line_info(line) for line in self._lines[start:end]]
        defs: list[FootnoteDef] = []
        index = 0
        while index < len(contents):
            identifier = match_footnote_def(contents[index].content.strip())
            if identifier is None:
                index += 1
                continue

            header = index
            index += 1
            body_start = index
            while index < len(contents) and match_footnote_def(contents[index].content.strip()) is None:
                index += 1

            children: tuple[Block, ...] = ()
            if index > body_start:
                children = self._parse_nested_blocks(
                    [info.content for info in contents[body_start:index]],
                    self._line_numbers[start + body_start : start + index],
                )

            defs.append(
                FootnoteDef(
                    identifier=identifier,
                    children=children,
                    location=SourceLocation(
                        lineno=self._line_numbers[start + header],
                        col_offset=contents[header].tab_count + 1,
                        source_file=self._source_file,
                    ),
                )
            )
        return tuple(defs)
