"""Two-pass parser producing the Jianwen document tree.

Pass one walks source lines and builds the block structure; paragraph,
heading, content-title and cell text is kept as a single raw Text node.
Pass two walks the finished block tree in order and replaces that raw
text with parsed inline nodes. Because the inline pass runs after the
whole structure exists, block diagnostics always precede the inline
diagnostics of the content they contain.

Architecture:
The parser uses a mixin-based design for separation of concerns:
- `InlineParsingMixin`: Styles, highlights, links, attribute expressions
- `BlockParsingMixin`: Attribute lines, quotes, lists, tables, footnotes

Thread Safety:
- Parser produces immutable trees (frozen dataclasses)
- Parser instances hold per-parse state; use one per parse
- Safe to share the resulting tree across threads

"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field, replace

from jianwen.diagnostics import ParseError
from jianwen.errors import ParseFailedError
from jianwen.location import SourceLocation
from jianwen.meta import extract_meta
from jianwen.nodes import (
    Block,
    CommentBlock,
    ContentTitle,
    Document,
    FootnoteDef,
    Footnotes,
    Heading,
    Inline,
    List,
    ListItem,
    Paragraph,
    Position,
    Quote,
    Table,
    TableCell,
    TaggedBlock,
    Text,
)
from jianwen.parsing import BlockParsingMixin, InlineParsingMixin
from jianwen.parsing.blocks import EMPTY_PENDING, PendingBlockContext
from jianwen.utils.logger import get_logger

logger = get_logger(__name__)


class Parser(InlineParsingMixin, BlockParsingMixin):
    """Parser for Jianwen body lines.

    Usage:
        >>> parser = Parser(["# Hello", "", "*World*"])
        >>> blocks = parser.parse()
        >>> type(blocks[1].children[0]).__name__
        'Strong'

    Thread Safety:
        Parser instances are single-use and not thread-safe. Create one per
        parse operation. The resulting tree is immutable and thread-safe.

    """

    __slots__ = (
        "_blocks",
        "_errors",
        "_last_position",
        "_line_numbers",
        "_lines",
        "_pending",
        "_pos",
        "_source_file",
    )

    _pending: PendingBlockContext
    _last_position: Position

    def __init__(
        self,
        lines: Sequence[str],
        line_numbers: Sequence[int] | None = None,
        *,
        source_file: str | None = None,
        errors: list[ParseError] | None = None,
    ) -> None:
        """Initialize parser with body lines.

        Args:
            lines: Body lines, template already removed
            line_numbers: Document line number of each body line; defaults
                to 1..len(lines)
            source_file: Optional source path recorded in block locations
            errors: Diagnostics list to append to; shared with sub-parsers

        """
        self._lines = list(lines)
        self._line_numbers = (
            list(line_numbers) if line_numbers is not None else list(range(1, len(lines) + 1))
        )
        self._source_file = source_file
        self._errors = [] if errors is None else errors
        self._pos = 0
        self._blocks: list[Block] = []
        self._pending = EMPTY_PENDING
        self._last_position = "L"

    @property
    def errors(self) -> list[ParseError]:
        """Diagnostics produced so far."""
        return self._errors

    def parse(self) -> tuple[Block, ...]:
        """Parse the lines into blocks with inline content.

        Returns:
            Top-level blocks in source order
        """
        blocks = self._parse_blocks()
        return tuple(self._enrich_block(block) for block in blocks)

    def _parse_nested_blocks(
        self, lines: Sequence[str], line_numbers: Sequence[int]
    ) -> tuple[Block, ...]:
        """Structure pass over nested content (quotes, footnote definitions).

        The sub-parser shares this parser's diagnostics list and starts with
        fresh pending state. Inline content is left raw; the enclosing
        parser's inline pass reaches it through the tree.
        """
        sub_parser = Parser(
            lines,
            line_numbers,
            source_file=self._source_file,
            errors=self._errors,
        )
        return sub_parser._parse_blocks()

    # =========================================================================
    # Inline pass
    # =========================================================================

    def _enrich_block(self, block: Block) -> Block:
        """Replace raw text in ``block`` and its descendants with inline nodes."""
        match block:
            case Paragraph() | Heading() | ContentTitle():
                return replace(block, children=self._enrich_inlines(block))
            case Table(rows=rows):
                return replace(
                    block,
                    rows=tuple(
                        replace(
                            row,
                            cells=tuple(
                                replace(cell, children=self._enrich_inlines(cell))
                                for cell in row.cells
                            ),
                        )
                        for row in rows
                    ),
                )
            case Quote(children=children) | ListItem(children=children) | FootnoteDef(
                children=children
            ) | CommentBlock(children=children):
                return replace(
                    block, children=tuple(self._enrich_block(child) for child in children)
                )
            case List(items=items):
                return replace(block, items=tuple(self._enrich_block(item) for item in items))
            case Footnotes(children=defs):
                return replace(
                    block, children=tuple(self._enrich_block(definition) for definition in defs)
                )
            case TaggedBlock(child=child):
                return replace(block, child=self._enrich_block(child))
        return block

    def _enrich_inlines(
        self, owner: Paragraph | Heading | ContentTitle | TableCell
    ) -> tuple[Inline, ...]:
        text = "".join(child.content for child in owner.children if isinstance(child, Text))
        if not text:
            return owner.children
        location = owner.location or SourceLocation(lineno=1, col_offset=1)
        return self.parse_inlines(text, location.lineno, location.col_offset)


@dataclass(frozen=True, slots=True)
class ParseResult:
    """Document tree plus every diagnostic produced while building it.

    Attributes:
        document: The parsed document
        errors: Diagnostics in the order they were produced

    """

    document: Document
    errors: tuple[ParseError, ...] = field(default=())

    @property
    def has_errors(self) -> bool:
        """True when any error-severity diagnostic exists."""
        return any(error.is_error for error in self.errors)

    @property
    def warnings(self) -> tuple[ParseError, ...]:
        return tuple(error for error in self.errors if not error.is_error)

    def raise_for_errors(self) -> None:
        """Raise for the first error-severity diagnostic, if any.

        Raises:
            ParseFailedError: When ``has_errors`` is true
        """
        for error in self.errors:
            if error.is_error:
                raise ParseFailedError(
                    error.message,
                    lineno=error.line,
                    col_offset=error.column,
                    source_file=self.document.location.source_file
                    if self.document.location is not None
                    else None,
                )


def parse_source(
    source: str,
    errors: list[ParseError],
    *,
    source_file: str | None = None,
) -> Document:
    """Run metadata extraction and both parser passes over ``source``.

    No include expansion or footnote reconciliation happens here; see
    :func:`jianwen.parse` for the full pipeline.

    Args:
        source: Jianwen source text
        errors: Diagnostics list to append to
        source_file: Optional path recorded in locations

    Returns:
        Document with ``meta``, ``children`` and ``source`` set
    """
    split = extract_meta(source)
    parser = Parser(
        split.lines,
        split.line_numbers,
        source_file=source_file,
        errors=errors,
    )
    blocks = parser.parse()
    logger.debug(
        "Parsed %d lines into %d blocks (%d diagnostics)%s",
        len(split.lines),
        len(blocks),
        len(errors),
        f" from {source_file}" if source_file else "",
    )
    return Document(
        children=blocks,
        meta=split.meta,
        source=source,
        location=SourceLocation(lineno=1, col_offset=1, source_file=source_file),
    )


__all__ = ["ParseResult", "Parser", "parse_source"]
