"""Table parsing for Jianwen.

Tables are only read after a ``[sheet]`` attribute line::

    [sheet]
    |:-|:-:|-:|
    | left | center | [l]right column, left cell |

The alignment row may be the first row or the second (Markdown style,
after a header row). A ``[l]``, ``[c]`` or ``[r]`` prefix overrides the
column alignment for one cell.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from jianwen.diagnostics import TABLE_ROW_BORDER, report_error
from jianwen.lexer.classifiers import (
    has_closing_border,
    is_alignment_row,
    is_attribute_only_line,
    is_table_row,
    parse_alignment_row,
    split_cells,
)
from jianwen.lexer.lines import get_line_info
from jianwen.location import SourceLocation
from jianwen.nodes import Align, BlockAttributes, Table, TableCell, TableRow, Text

if TYPE_CHECKING:
    from jianwen.diagnostics import ParseError
    from jianwen.lexer.lines import LineInfo
    from jianwen.parsing.blocks.pending import PendingBlockContext

_CELL_ALIGN_PREFIXES: dict[str, Align] = {
    "[l]": "left",
    "[c]": "center",
    "[r]": "right",
}


class TableParsingMixin:
    """Mixin for ``[sheet]`` tables.

    Required Host Attributes:
        - _lines: list[str]
        - _line_numbers: Sequence[int]
        - _source_file: str | None
        - _errors: list[ParseError]
        - _pos: int
        - _pending: PendingBlockContext

    Required Host Methods:
        - _emit(info, raw, build) -> None
        - _raw_lines(start, end) -> str

    """

    _lines: list[str]
    _line_numbers: Sequence[int]
    _source_file: str | None
    _errors: list[ParseError]
    _pos: int
    _pending: PendingBlockContext

    def _try_table(self, info: LineInfo, trimmed: str) -> bool:
        if not (self._pending.is_sheet and is_table_row(info.content)):
            return False

        start = self._pos
        end = start + 1
        while end < len(self._lines):
            next_info = get_line_info(self._lines[end])
            next_trimmed = next_info.content.strip()
            if (
                not next_trimmed
                or is_attribute_only_line(next_trimmed)
                or not is_table_row(next_info.content)
            ):
                break
            end += 1

        rows = [
            (get_line_info(self._lines[index]).content.strip(), self._line_numbers[index])
            for index in range(start, end)
        ]

        def build(attrs: BlockAttributes, location: SourceLocation) -> Table:
            table_rows, align = self._parse_table_rows(rows)
            return Table(rows=table_rows, align=align, block_attrs=attrs, location=location)

        self._emit(info, self._raw_lines(start, end), build)
        self._pos = end
        return True

    def _parse_table_rows(
        self, rows: list[tuple[str, int]]
    ) -> tuple[tuple[TableRow, ...], tuple[Align, ...] | None]:
        """Build rows from (trimmed text, line number) pairs.

        Returns:
            (rows, column alignment if an alignment row was found)
        """
        remaining = list(rows)
        align: tuple[Align, ...] | None = None
        if remaining and is_alignment_row(remaining[0][0]):
            align = parse_alignment_row(remaining.pop(0)[0])
        elif len(remaining) >= 2 and is_alignment_row(remaining[1][0]):
            align = parse_alignment_row(remaining.pop(1)[0])

        table_rows: list[TableRow] = []
        for text, line in remaining:
            location = SourceLocation(lineno=line, col_offset=1, source_file=self._source_file)
            if not has_closing_border(text):
                report_error(
                    self._errors,
                    'Table row is missing closing "|" border',
                    line,
                    code=TABLE_ROW_BORDER,
                )

            cells: list[TableCell] = []
            for column, raw_cell in enumerate(split_cells(text)):
                cell_text = raw_cell.strip()
                cell_align = align[column] if align is not None and column < len(align) else None
                override = _CELL_ALIGN_PREFIXES.get(cell_text[:3])
                if override is not None:
                    cell_align = override
                    cell_text = cell_text[3:].strip()
                children = (Text(content=cell_text, location=location),) if cell_text else ()
                cells.append(TableCell(children=children, align=cell_align, location=location))
            table_rows.append(TableRow(cells=tuple(cells), location=location))

        return tuple(table_rows), align
