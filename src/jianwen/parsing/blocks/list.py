"""List parsing for Jianwen.

A list is a contiguous run of item lines of one kind whose syntax level
never drops below the first item's::

    - item              level 1
    -- nested item      level 2, nested under "item"
    - item              level 1

A closed code fence directly after an item (on a line that is not itself
an item) belongs to that item.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, NamedTuple

from jianwen.lexer.classifiers import (
    ListItemMatch,
    is_attribute_only_line,
    match_any_code_fence,
    match_list_item,
)
from jianwen.lexer.lines import get_line_info
from jianwen.location import SourceLocation
from jianwen.nodes import Block, BlockAttributes, CodeBlock, List, ListItem, Paragraph, Text

if TYPE_CHECKING:
    from jianwen.lexer.lines import LineInfo


class ListEntry(NamedTuple):
    """One item line plus the blocks attached after it."""

    match: ListItemMatch
    location: SourceLocation
    trailing: list[Block]


def build_list_items(
    entries: Sequence[ListEntry], start: int, level: int
) -> tuple[tuple[ListItem, ...], int]:
    """Build the items at ``level`` beginning at ``entries[start]``.

    Deeper entries following an item become nested lists inside it; a
    run that returns to a level between the two opens another nested list
    in the same item rather than being dropped.

    Returns:
        (items, index of the first entry not consumed)
    """
    items: list[ListItem] = []
    index = start
    while index < len(entries) and entries[index].match.indent == level:
        entry = entries[index]
        children: list[Block] = [
            Paragraph(
                children=(Text(content=entry.match.text, location=entry.location),),
                location=entry.location,
            ),
            *entry.trailing,
        ]
        index += 1

        while index < len(entries) and entries[index].match.indent > level:
            first = entries[index]
            nested, index = build_list_items(entries, index, first.match.indent)
            children.append(
                List(
                    kind=first.match.kind,
                    items=nested,
                    ordered_style="decimal" if first.match.kind == "ordered" else None,
                    location=first.location,
                )
            )

        items.append(
            ListItem(
                kind=entry.match.kind,
                indent=entry.match.indent,
                children=tuple(children),
                ordinal=entry.match.ordinal,
                task_status=entry.match.task_status,
                location=entry.location,
            )
        )
    return tuple(items), index


class ListParsingMixin:
    """Mixin for list parsing.

    Required Host Attributes:
        - _lines: list[str]
        - _pos: int

    Required Host Methods:
        - _emit(info, raw, build) -> None
        - _raw_lines(start, end) -> str
        - _line_location(info, index) -> SourceLocation
        - _read_code_fence(start, fence_tabs) -> tuple[list[str], int, bool]

    """

    _lines: list[str]
    _pos: int

    def _try_list(self, info: LineInfo, trimmed: str) -> bool:
        first = match_list_item(info.content)
        if first is None:
            return False

        start = self._pos
        entries = [ListEntry(first, self._line_location(info, start), [])]
        index = start + 1
        while index < len(self._lines):
            next_info = get_line_info(self._lines[index])
            next_trimmed = next_info.content.strip()
            if not next_trimmed or is_attribute_only_line(next_trimmed):
                break

            match = match_list_item(next_info.content)
            if match is None:
                fence = match_any_code_fence(next_trimmed)
                if fence is None:
                    break
                code, end, closed = self._read_code_fence(index + 1, next_info.tab_count)
                if not closed:
                    break
                entries[-1].trailing.append(
                    CodeBlock(
                        code="\n".join(code),
                        language=fence.language,
                        html_like=fence.is_html,
                        location=self._line_location(next_info, index),
                    )
                )
                index = end
                continue

            if match.kind != first.kind or match.indent < first.indent:
                break
            entries.append(ListEntry(match, self._line_location(next_info, index), []))
            index += 1

        def build(attrs: BlockAttributes, location: SourceLocation) -> List:
            items, _ = build_list_items(entries, 0, first.indent)
            return List(
                kind=first.kind,
                items=items,
                ordered_style="decimal" if first.kind == "ordered" else None,
                block_attrs=attrs,
                location=location,
            )

        self._emit(info, self._raw_lines(start, index), build)
        self._pos = index
        return True
