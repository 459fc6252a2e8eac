"""Tests for the pure line classifiers."""

import pytest

from jianwen.lexer.classifiers import (
    has_closing_border,
    is_alignment_row,
    is_attribute_only_line,
    is_code_fence_end,
    match_attributed_code_fence,
    match_code_fence_start,
    match_content_title,
    match_footnote_def,
    match_heading,
    match_horizontal_rule,
    match_html_reference,
    match_image,
    match_include,
    match_list_item,
    match_quote,
    normalize_quote_line,
    parse_alignment_row,
    split_cells,
)
from jianwen.lexer.classifiers.quote import QuoteMatch
from jianwen.nodes import ColorAttribute


class TestHeadingClassifier:
    """``#`` to ``#####`` headings."""

    @pytest.mark.parametrize("level", [1, 2, 3, 4, 5])
    def test_levels(self, level: int) -> None:
        match = match_heading("#" * level + " Title")
        assert match is not None
        assert match.level == level
        assert match.text == "Title"
        assert not match.foldable

    def test_foldable(self) -> None:
        match = match_heading("##+ Details")
        assert match is not None
        assert match.level == 2
        assert match.foldable

    def test_six_hashes_is_not_a_heading(self) -> None:
        assert match_heading("###### Title") is None

    def test_space_required(self) -> None:
        assert match_heading("#Title") is None


class TestListClassifier:
    """List item shapes and their priority."""

    def test_bullet_levels(self) -> None:
        assert match_list_item("- a") == ("bullet", 1, "a", None, None)
        assert match_list_item("--- deep") == ("bullet", 3, "deep", None, None)

    @pytest.mark.parametrize(
        ("line", "status"),
        [
            ("-[ ] todo", "unknown"),
            ("-[] todo", "unknown"),
            ("-[o] todo", "in_progress"),
            ("-[x] todo", "not_done"),
            ("-[v] todo", "done"),
        ],
    )
    def test_task_markers(self, line: str, status: str) -> None:
        match = match_list_item(line)
        assert match is not None
        assert match.kind == "task"
        assert match.task_status == status

    def test_ordered_indent_counts_parts(self) -> None:
        match = match_list_item("1.2. nested")
        assert match is not None
        assert match.kind == "ordered"
        assert match.indent == 2
        assert match.ordinal == "1.2"
        assert match.text == "nested"

    def test_foldable_ordinal_from_depth(self) -> None:
        match = match_list_item("++ inner")
        assert match is not None
        assert match.kind == "foldable"
        assert match.ordinal == "1.1"

    def test_plain_text_is_not_an_item(self) -> None:
        assert match_list_item("hello") is None


class TestQuoteClassifier:
    """Quotes and content titles."""

    def test_quote_level(self) -> None:
        assert match_quote("@@ deep") == QuoteMatch(2, "deep")

    def test_normalize_relative_to_opening_level(self) -> None:
        assert normalize_quote_line(QuoteMatch(1, "same"), 1) == "same"
        assert normalize_quote_line(QuoteMatch(3, "deep"), 1) == "@@ deep"
        assert normalize_quote_line(QuoteMatch(1, "up"), 2) is None

    def test_content_title(self) -> None:
        assert match_content_title("> A caption") == "A caption"
        assert match_content_title(">no space") is None


class TestFenceClassifier:
    """Code fence openings and closings."""

    def test_plain_fence(self) -> None:
        match = match_code_fence_start("```python")
        assert match is not None
        assert match.language == "python"
        assert not match.is_html

    def test_attributed_html_fence(self) -> None:
        match = match_attributed_code_fence("[html]```")
        assert match is not None
        assert match.language is None
        assert match.is_html

    def test_closing_fence(self) -> None:
        assert is_code_fence_end("```")
        assert not is_code_fence_end("```js")


class TestMiscClassifiers:
    """Includes, media, rules, tables and attribute lines."""

    def test_file_and_tag_includes(self) -> None:
        assert match_include("[@](chapter.jw)") == ("file", "chapter.jw")
        assert match_include("[@=intro]") == ("tag", "intro")
        assert match_include("[@]()") is None

    def test_image_shapes(self) -> None:
        assert match_image("[img](a.png)") == ("a.png", None, None)
        assert match_image("[img,rounded=2](a.png)") == ("a.png", "rounded", 2.0)
        assert match_image("[red](a.png)") is None

    def test_html_reference(self) -> None:
        assert match_html_reference("[html](snippet.html)") == "snippet.html"

    @pytest.mark.parametrize(
        ("line", "style"),
        [("---", "solid"), ("***", "dashed"), ("===", "bold"), ("~~~~~", "wavy")],
    )
    def test_rule_styles(self, line: str, style: str) -> None:
        match = match_horizontal_rule(line)
        assert match is not None
        assert match.style == style

    def test_colored_rule(self) -> None:
        match = match_horizontal_rule("[#FF0000]---")
        assert match is not None
        assert match.color == ColorAttribute(kind="hex", value="#FF0000")

    def test_mixed_rule_characters(self) -> None:
        assert match_horizontal_rule("-*-") is None
        assert match_horizontal_rule("--") is None

    def test_attribute_only_lines(self) -> None:
        assert is_attribute_only_line("[c,->] [fold]")
        assert not is_attribute_only_line("[red]text")
        assert not is_attribute_only_line("[@=intro]")

    def test_footnote_def(self) -> None:
        assert match_footnote_def("[fn=note]") == "note"
        assert match_footnote_def("[fn=]") is None

    def test_table_rows(self) -> None:
        assert is_alignment_row("|:-|-:|:-:|")
        assert parse_alignment_row("|:-|-:|:-:|") == ("left", "right", "center")
        assert split_cells("| a | b |") == [" a ", " b "]
        assert split_cells("| a | b") == [" a ", " b"]
        assert has_closing_border("| a |")
        assert not has_closing_border("| a")
