"""Block parsing subsystem for Jianwen.

Provides mixins for parsing block-level content:
- Attribute lines and pending block state
- Code fences, quotes, content titles, images, html references
- Includes, headings, horizontal rules (delegated rules)
- Lists (bullet, ordered, task, foldable)
- Tables (under ``[sheet]``)
- Footnote sections
- Paragraphs

Architecture:
Block parsing is split into logical modules:
- core: Block loop, commit policy, basic blocks
- rules: Ordered single-line rules
- pending: Attribute-line state
- list: List runs with nesting
- table: Sheet tables
- footnote: Footnote sections

"""

from jianwen.parsing.blocks.core import BlockParsingCoreMixin
from jianwen.parsing.blocks.footnote import FootnoteParsingMixin
from jianwen.parsing.blocks.list import ListParsingMixin
from jianwen.parsing.blocks.pending import EMPTY_PENDING, PendingBlockContext
from jianwen.parsing.blocks.table import TableParsingMixin


class BlockParsingMixin(
    BlockParsingCoreMixin,
    ListParsingMixin,
    TableParsingMixin,
    FootnoteParsingMixin,
):
    """Combined block parsing mixin.

    Combines all block parsing functionality into a single mixin
    that can be inherited by the Parser class.

    Required Host Attributes:
        - _lines: list[str]
        - _line_numbers: Sequence[int]
        - _source_file: str | None
        - _errors: list[ParseError]
        - _pos: int
        - _blocks: list[Block]
        - _pending: PendingBlockContext
        - _last_position: Position

    Required Host Methods:
        - _parse_nested_blocks(lines, line_numbers) -> tuple[Block, ...]

    """


__all__ = [
    "EMPTY_PENDING",
    "BlockParsingCoreMixin",
    "BlockParsingMixin",
    "FootnoteParsingMixin",
    "ListParsingMixin",
    "PendingBlockContext",
    "TableParsingMixin",
]
