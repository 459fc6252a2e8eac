"""Core block parsing for Jianwen.

The block parser walks source lines once, threading two values through
the loop:

- ``_pending``: configuration from attribute-only lines, consumed by the
  next block
- ``_last_position``: layout column of the previously committed block,
  the base for ``[->]`` shifts

Per non-blank line, the first matching branch wins:

1. ``[footnotes]`` section            (FootnoteParsingMixin)
2. code fence                         (this module)
3. attribute-only line                (this module)
4. include, heading, horizontal rule  (blocks.rules)
5. content title                      (this module)
6. quote                              (this module)
7. table, under ``[sheet]``           (TableParsingMixin)
8. image, html reference              (this module)
9. list                               (ListParsingMixin)
10. paragraph or raw line             (this module)

Every branch commits through :meth:`BlockParsingCoreMixin._emit`, which
applies the disabled/tag/comment policy uniformly.

"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import replace
from typing import TYPE_CHECKING

from jianwen.diagnostics import UNTERMINATED_CODE_FENCE, report_error
from jianwen.lexer.classifiers import (
    is_attribute_only_line,
    is_code_fence_end,
    is_footnotes_line,
    match_attributed_code_fence,
    match_code_fence_start,
    match_content_title,
    match_heading,
    match_horizontal_rule,
    match_html_reference,
    match_image,
    match_include,
    match_list_item,
    match_quote,
    normalize_quote_line,
)
from jianwen.lexer.lines import LineInfo, get_line_info, position_from_tabs
from jianwen.location import SourceLocation
from jianwen.nodes import (
    Block,
    BlockAttributes,
    CodeBlock,
    CommentBlock,
    ContentTitle,
    DisabledBlock,
    Html,
    Image,
    Paragraph,
    Position,
    Quote,
    RawBlock,
    TaggedBlock,
    Text,
    block_attributes_of,
)
from jianwen.parsing.blocks.pending import (
    PendingBlockContext,
    apply_attribute_line,
    build_block_attrs,
)
from jianwen.parsing.blocks.rules import try_block_rules

if TYPE_CHECKING:
    from jianwen.diagnostics import ParseError
    from jianwen.parsing.protocols import BlockBuilder


def strip_layout_tabs(raw: str, count: int) -> str:
    """Remove up to ``count`` leading tabs."""
    stripped = 0
    while stripped < count and raw.startswith("\t"):
        raw = raw[1:]
        stripped += 1
    return raw


def interrupts_paragraph(info: LineInfo, trimmed: str) -> bool:
    """True when a line would start a block of its own."""
    content = info.content
    return (
        is_footnotes_line(trimmed)
        or match_include(content) is not None
        or match_heading(content) is not None
        or match_content_title(content) is not None
        or match_quote(content) is not None
        or match_code_fence_start(trimmed) is not None
        or match_horizontal_rule(trimmed) is not None
        or match_image(trimmed) is not None
        or match_html_reference(trimmed) is not None
        or match_list_item(content) is not None
    )


def shift_quote_levels(blocks: Sequence[Block], offset: int) -> tuple[Block, ...]:
    """Add the enclosing quote's level to every directly nested quote.

    The inner parse numbers quotes from 1; after the shift a quote's level
    is its absolute ``@`` count.
    """
    return tuple(
        replace(
            block,
            level=block.level + offset,
            children=shift_quote_levels(block.children, offset),
        )
        if isinstance(block, Quote)
        else block
        for block in blocks
    )


class BlockParsingCoreMixin:
    """Block loop, commit policy, and the simple single-line blocks.

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
        - _try_footnotes(info, trimmed) -> bool
        - _try_table(info, trimmed) -> bool
        - _try_list(info, trimmed) -> bool

    """

    _lines: list[str]
    _line_numbers: Sequence[int]
    _source_file: str | None
    _errors: list[ParseError]
    _pos: int
    _blocks: list[Block]
    _pending: PendingBlockContext
    _last_position: Position

    def _parse_blocks(self) -> tuple[Block, ...]:
        """Run the block loop over ``_lines``."""
        lines = self._lines
        while self._pos < len(lines):
            info = get_line_info(lines[self._pos])
            trimmed = info.content.strip()
            if not trimmed:
                self._pos += 1
                continue

            if (
                self._try_footnotes(info, trimmed)
                or self._try_code_fence(info, trimmed)
                or self._try_attribute_line(info, trimmed)
                or try_block_rules(self, info, trimmed)  # type: ignore[arg-type]
                or self._try_content_title(info, trimmed)
                or self._try_quote(info, trimmed)
                or self._try_table(info, trimmed)
                or self._try_image(info, trimmed)
                or self._try_html(info, trimmed)
                or self._try_list(info, trimmed)
            ):
                continue
            self._parse_paragraph(info, trimmed)

        return tuple(self._blocks)

    # =========================================================================
    # Commit
    # =========================================================================

    def _line_location(self, info: LineInfo, index: int | None = None) -> SourceLocation:
        """Location of a line's first non-tab character."""
        return SourceLocation(
            lineno=self._line_numbers[self._pos if index is None else index],
            col_offset=info.tab_count + 1,
            source_file=self._source_file,
        )

    def _raw_lines(self, start: int, end: int) -> str:
        return "\n".join(self._lines[start:end])

    def _emit(
        self,
        info: LineInfo,
        raw: str,
        build: BlockBuilder,
        *,
        fold_next: bool = False,
    ) -> None:
        """Build and commit the block starting on the current line.

        A pending ``[disable]`` replaces the block with a DisabledBlock
        holding ``raw``; ``build`` is not called then. Disabled blocks are
        never tag-wrapped.

        Args:
            info: The block's first line
            raw: Raw text of every line the block spans
            build: Creates the block from its attributes and location
            fold_next: Fold the block after this one (foldable headings)
        """
        pending = self._pending
        attrs = build_block_attrs(pending, info.tab_count)
        location = self._line_location(info)

        block: Block
        if pending.is_disabled:
            block = DisabledBlock(raw=raw, block_attrs=attrs, location=location)
        else:
            block = build(attrs, location)
            if pending.tag_name:
                block = TaggedBlock(
                    name=pending.tag_name,
                    child=block,
                    block_attrs=attrs,
                    location=location,
                )

        if pending.is_comment:
            block = CommentBlock(children=(block,), location=location)

        self._blocks.append(block)
        committed = block_attributes_of(block)
        if committed is not None and committed.position is not None:
            self._last_position = committed.position
        else:
            self._last_position = position_from_tabs(info.tab_count)

        self._pending = pending.reset()
        if fold_next:
            self._pending = replace(self._pending, fold_next=True)

    # =========================================================================
    # Code fences
    # =========================================================================

    def _read_code_fence(self, start: int, fence_tabs: int) -> tuple[list[str], int, bool]:
        """Read code lines from ``start`` to the closing fence.

        Returns:
            (code lines, index after the block, whether the fence closed)
        """
        lines = self._lines
        code: list[str] = []
        index = start
        while index < len(lines):
            raw = lines[index]
            if is_code_fence_end(get_line_info(raw).content.strip()):
                return code, index + 1, True
            code.append(strip_layout_tabs(raw, fence_tabs))
            index += 1
        return code, index, False

    def _try_code_fence(self, info: LineInfo, trimmed: str) -> bool:
        plain = match_code_fence_start(trimmed)
        attributed = None if plain is not None else match_attributed_code_fence(trimmed)
        fence = plain or attributed
        if fence is None:
            return False

        start = self._pos
        code, end, closed = self._read_code_fence(start + 1, info.tab_count)
        if not closed:
            report_error(
                self._errors,
                "Code block is not closed with ```",
                self._line_numbers[start],
                code=UNTERMINATED_CODE_FENCE,
            )

        html_like = self._pending.is_html or (attributed is not None and attributed.is_html)
        self._emit(
            info,
            self._raw_lines(start, end),
            lambda attrs, location: CodeBlock(
                code="\n".join(code),
                language=fence.language,
                html_like=html_like,
                block_attrs=attrs,
                location=location,
            ),
        )
        self._pos = end
        return True

    # =========================================================================
    # Attribute lines
    # =========================================================================

    def _try_attribute_line(self, info: LineInfo, trimmed: str) -> bool:
        if not is_attribute_only_line(trimmed):
            return False
        self._pending = apply_attribute_line(
            trimmed,
            self._line_numbers[self._pos],
            self._errors,
            self._pending,
            self._last_position,
            info.tab_count,
        )
        self._pos += 1
        return True

    # =========================================================================
    # Content titles and quotes
    # =========================================================================

    def _attach_image_title(self, title: str) -> bool:
        """Set the title of the image block just committed, if there is one."""
        if not self._blocks:
            return False
        last = self._blocks[-1]
        if isinstance(last, Image):
            self._blocks[-1] = replace(last, title=title)
            return True
        if isinstance(last, TaggedBlock) and isinstance(last.child, Image):
            self._blocks[-1] = replace(last, child=replace(last.child, title=title))
            return True
        return False

    def _try_content_title(self, info: LineInfo, trimmed: str) -> bool:
        title = match_content_title(info.content)
        if title is None:
            return False

        if self._pending.is_empty() and self._attach_image_title(title):
            self._pos += 1
            return True

        self._emit(
            info,
            info.raw,
            lambda attrs, location: ContentTitle(
                children=(Text(content=title, location=location),),
                block_attrs=attrs,
                location=location,
            ),
        )
        self._pos += 1
        return True

    def _try_quote(self, info: LineInfo, trimmed: str) -> bool:
        first = match_quote(info.content)
        if first is None:
            return False

        level = first.level
        inner: list[str] = [first.text]
        start = self._pos
        end = start + 1
        while end < len(self._lines):
            next_info = get_line_info(self._lines[end])
            if not next_info.content.strip():
                break
            match = match_quote(next_info.content)
            if match is None:
                break
            normalized = normalize_quote_line(match, level)
            if normalized is None:
                break
            inner.append(normalized)
            end += 1

        line_numbers = self._line_numbers[start:end]

        def build(attrs: BlockAttributes, location: SourceLocation) -> Quote:
            children = self._parse_nested_blocks(inner, line_numbers)
            return Quote(
                level=level,
                children=shift_quote_levels(children, level),
                block_attrs=attrs,
                location=location,
            )

        self._emit(info, self._raw_lines(start, end), build)
        self._pos = end
        return True

    # =========================================================================
    # Images and html references
    # =========================================================================

    def _try_image(self, info: LineInfo, trimmed: str) -> bool:
        match = match_image(trimmed)
        if match is None:
            return False
        self._emit(
            info,
            info.raw,
            lambda attrs, location: Image(
                url=match.url,
                shape=match.shape,
                rounded_radius=match.rounded_radius,
                block_attrs=attrs,
                location=location,
            ),
        )
        self._pos += 1
        return True

    def _try_html(self, info: LineInfo, trimmed: str) -> bool:
        source = match_html_reference(trimmed)
        if source is None:
            return False
        self._emit(
            info,
            info.raw,
            lambda attrs, location: Html(source=source, block_attrs=attrs, location=location),
        )
        self._pos += 1
        return True

    # =========================================================================
    # Paragraphs
    # =========================================================================

    def _parse_paragraph(self, info: LineInfo, trimmed: str) -> None:
        """Collect lines until one would start another block.

        A single line starting with ``[`` that no rule claimed is kept as a
        RawBlock.
        """
        start = self._pos
        text_lines = [info.content]
        end = start + 1
        while end < len(self._lines):
            next_info = get_line_info(self._lines[end])
            next_trimmed = next_info.content.strip()
            if (
                not next_trimmed
                or is_attribute_only_line(next_trimmed)
                or interrupts_paragraph(next_info, next_trimmed)
            ):
                break
            text_lines.append(next_info.content)
            end += 1

        text = "\n".join(text_lines)
        if len(text_lines) == 1 and trimmed.startswith("["):
            self._emit(
                info,
                info.raw,
                lambda attrs, location: RawBlock(value=text, block_attrs=attrs, location=location),
            )
        else:
            self._emit(
                info,
                self._raw_lines(start, end),
                lambda attrs, location: Paragraph(
                    children=(Text(content=text, location=location),),
                    block_attrs=attrs,
                    location=location,
                ),
            )
        self._pos = end
