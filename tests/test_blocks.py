"""Tests for block structure."""

import pytest

from jianwen import parse
from jianwen.nodes import (
    CodeBlock,
    CommentBlock,
    ContentTitle,
    DisabledBlock,
    FootnoteDef,
    Footnotes,
    Heading,
    HorizontalRule,
    Html,
    Image,
    Include,
    List,
    ListItem,
    Paragraph,
    Quote,
    RawBlock,
    Strong,
    Table,
    TaggedBlock,
    Text,
)


def blocks(source: str):
    return parse(source).document.children


def text_of(node) -> str:
    return "".join(child.content for child in node.children if isinstance(child, Text))


class TestHeadings:
    """Heading levels and foldable headings."""

    def test_heading(self) -> None:
        (heading,) = blocks("### Title")
        assert isinstance(heading, Heading)
        assert heading.level == 3
        assert text_of(heading) == "Title"
        assert not heading.foldable

    def test_heading_inline_content(self) -> None:
        (heading,) = blocks("# Hello *World*")
        assert isinstance(heading.children[1], Strong)

    def test_foldable_heading_folds_next_block(self) -> None:
        heading, body = blocks("#+ Details\nHidden body")
        assert isinstance(heading, Heading)
        assert heading.foldable
        assert isinstance(body, Paragraph)
        assert body.block_attrs is not None
        assert body.block_attrs.fold

    def test_fold_is_consumed_by_one_block(self) -> None:
        _, first, second = blocks("#+ Details\nfirst\n\nsecond")
        assert first.block_attrs.fold
        assert not second.block_attrs.fold


class TestParagraphs:
    """Paragraphs and raw lines."""

    def test_lines_join_into_one_paragraph(self) -> None:
        (paragraph,) = blocks("one\ntwo")
        assert isinstance(paragraph, Paragraph)
        assert text_of(paragraph) == "one\ntwo"

    def test_blank_line_separates_paragraphs(self) -> None:
        assert len(blocks("one\n\ntwo")) == 2

    def test_heading_interrupts_paragraph(self) -> None:
        paragraph, heading = blocks("text\n# Title")
        assert isinstance(paragraph, Paragraph)
        assert isinstance(heading, Heading)

    def test_unclaimed_bracket_line_is_raw(self) -> None:
        (raw,) = blocks("[red]styled line")
        assert isinstance(raw, RawBlock)
        assert raw.value == "[red]styled line"

    def test_location(self) -> None:
        _, paragraph = blocks("# A\n\nBody")
        assert paragraph.location is not None
        assert (paragraph.location.lineno, paragraph.location.col_offset) == (3, 1)

    def test_layout_tab_sets_position(self) -> None:
        (paragraph,) = blocks("\tCentered")
        assert paragraph.block_attrs.position == "C"
        assert paragraph.location.col_offset == 2
        assert text_of(paragraph) == "Centered"


class TestQuotes:
    """Quote levels and nesting."""

    def test_nested_quote_levels(self) -> None:
        (quote,) = blocks("@ A\n@@ B")
        assert isinstance(quote, Quote)
        assert quote.level == 1
        paragraph, inner = quote.children
        assert text_of(paragraph) == "A"
        assert isinstance(inner, Quote)
        assert inner.level == 2
        assert text_of(inner.children[0]) == "B"
        assert inner.location.lineno == 2

    def test_shallower_line_ends_quote(self) -> None:
        first, second = blocks("@@ deep\n@ shallow")
        assert first.level == 2
        assert second.level == 1

    def test_content_title(self) -> None:
        (title,) = blocks("> Caption")
        assert isinstance(title, ContentTitle)
        assert text_of(title) == "Caption"


class TestLists:
    """List kinds and nesting."""

    def test_bullet_nesting(self) -> None:
        (bullets,) = blocks("- a\n-- b\n- c")
        assert isinstance(bullets, List)
        assert bullets.kind == "bullet"
        first, second = bullets.items
        assert text_of(first.children[0]) == "a"
        nested = first.children[1]
        assert isinstance(nested, List)
        assert [text_of(item.children[0]) for item in nested.items] == ["b"]
        assert nested.items[0].indent == 2
        assert text_of(second.children[0]) == "c"

    def test_ordered_list(self) -> None:
        (ordered,) = blocks("1. one\n2. two")
        assert ordered.kind == "ordered"
        assert ordered.ordered_style == "decimal"
        assert [item.ordinal for item in ordered.items] == ["1", "2"]

    def test_task_list(self) -> None:
        (tasks,) = blocks("-[v] done\n-[o] doing")
        assert tasks.kind == "task"
        assert [item.task_status for item in tasks.items] == ["done", "in_progress"]

    def test_kind_change_starts_new_list(self) -> None:
        first, second = blocks("- a\n1. b")
        assert (first.kind, second.kind) == ("bullet", "ordered")

    def test_fence_after_item_belongs_to_item(self) -> None:
        (bullets,) = blocks("- run\n```sh\nmake\n```")
        item = bullets.items[0]
        assert isinstance(item, ListItem)
        code = item.children[1]
        assert isinstance(code, CodeBlock)
        assert code.code == "make"
        assert code.language == "sh"


class TestCodeBlocks:
    """Code fences."""

    def test_fence(self) -> None:
        (code,) = blocks("```py\nx = *1*\n```")
        assert isinstance(code, CodeBlock)
        assert code.code == "x = *1*"
        assert code.language == "py"
        assert not code.html_like

    def test_unterminated_fence(self) -> None:
        result = parse("```\nunclosed")
        (code,) = result.document.children
        assert code.code == "unclosed"
        (error,) = result.errors
        assert error.code == "unterminated-code-fence"
        assert error.severity == "error"
        assert (error.line, error.column) == (1, None)

    def test_html_fence(self) -> None:
        (code,) = blocks("[html]\n```\n<b>x</b>\n```")
        assert code.html_like


class TestTables:
    """``[sheet]`` tables."""

    def test_alignment_row(self) -> None:
        (table,) = blocks("[sheet]\n|:-|-:|\n| a | *b* |")
        assert isinstance(table, Table)
        assert table.align == ("left", "right")
        (row,) = table.rows
        left, right = row.cells
        assert (left.align, right.align) == ("left", "right")
        assert text_of(left) == "a"
        assert isinstance(right.children[0], Strong)

    def test_header_row_before_alignment(self) -> None:
        (table,) = blocks("[sheet]\n| h1 | h2 |\n|:-:|:-:|\n| a | b |")
        assert table.align == ("center", "center")
        assert [text_of(cell) for cell in table.rows[0].cells] == ["h1", "h2"]
        assert len(table.rows) == 2

    def test_cell_alignment_override(self) -> None:
        (table,) = blocks("[sheet]\n|:-|\n| [r]x |")
        (cell,) = table.rows[0].cells
        assert cell.align == "right"
        assert text_of(cell) == "x"

    def test_missing_border(self) -> None:
        result = parse("[sheet]\n| a | b")
        (table,) = result.document.children
        assert [text_of(cell) for cell in table.rows[0].cells] == ["a", "b"]
        (error,) = result.errors
        assert error.code == "table-row-border"
        assert error.is_error
        assert error.line == 2

    def test_rows_without_sheet_are_paragraph(self) -> None:
        (paragraph,) = blocks("| a | b |")
        assert isinstance(paragraph, Paragraph)


class TestSingleLineBlocks:
    """Rules, images, html references and includes."""

    @pytest.mark.parametrize(
        ("line", "style"),
        [("---", "solid"), ("***", "dashed"), ("===", "bold"), ("~~~", "wavy")],
    )
    def test_horizontal_rule(self, line: str, style: str) -> None:
        (rule,) = blocks(line)
        assert isinstance(rule, HorizontalRule)
        assert rule.style == style

    def test_image_takes_following_title(self) -> None:
        (image,) = blocks("[img,square](a.png)\n> A caption")
        assert isinstance(image, Image)
        assert image.url == "a.png"
        assert image.shape == "square"
        assert image.title == "A caption"

    def test_html_reference(self) -> None:
        (html,) = blocks("[html](snippet.html)")
        assert isinstance(html, Html)
        assert html.source == "snippet.html"

    def test_include_left_unexpanded_by_default(self) -> None:
        (include,) = blocks("[@](chapter.jw)")
        assert isinstance(include, Include)
        assert (include.mode, include.target) == ("file", "chapter.jw")


class TestBlockWrappers:
    """Disabled, tagged and comment blocks."""

    def test_disabled_block_keeps_raw_text(self) -> None:
        (disabled,) = blocks("[disable]\n*not parsed*")
        assert isinstance(disabled, DisabledBlock)
        assert disabled.raw == "*not parsed*"

    def test_disabled_list_includes_attached_code(self) -> None:
        (disabled,) = blocks("[d]\n- item\n```\ncode\n```")
        assert disabled.raw == "- item\n```\ncode\n```"

    def test_tagged_block(self) -> None:
        (tagged,) = blocks("[tag=intro]\nHello")
        assert isinstance(tagged, TaggedBlock)
        assert tagged.name == "intro"
        assert isinstance(tagged.child, Paragraph)
        assert text_of(tagged.child) == "Hello"

    def test_comment_block(self) -> None:
        (comment,) = blocks("[comment]\nHidden *note*")
        assert isinstance(comment, CommentBlock)
        (paragraph,) = comment.children
        assert isinstance(paragraph.children[1], Strong)

    def test_attribute_line_styles_next_block(self) -> None:
        (paragraph,) = blocks("[c,2,bold]\nBig")
        attrs = paragraph.block_attrs
        assert attrs.align == "center"
        assert attrs.font_size == 2
        assert attrs.font_style == ("bold",)


class TestFootnoteSections:
    """``[footnotes]`` sections."""

    def test_definitions(self) -> None:
        (section,) = blocks("[footnotes]\n[fn=1]\nFirst note.\n[fn=2]\nSecond *note*.")
        assert isinstance(section, Footnotes)
        first, second = section.children
        assert isinstance(first, FootnoteDef)
        assert (first.identifier, second.identifier) == ("1", "2")
        assert text_of(first.children[0]) == "First note."
        assert isinstance(second.children[0].children[1], Strong)

    def test_section_ends_at_blank_line(self) -> None:
        section, after = blocks("[footnotes]\n[fn=1]\nNote.\n\nAfter")
        assert isinstance(section, Footnotes)
        assert isinstance(after, Paragraph)
