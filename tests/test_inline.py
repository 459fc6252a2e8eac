"""Tests for inline parsing.

Inline parsing runs on a Parser with no lines; ``parse_inlines`` is the
same entry point the document pipeline uses for every paragraph.
"""

import pytest

from jianwen.diagnostics import ParseError
from jianwen.nodes import (
    CodeSpan,
    ColorAttribute,
    Emphasis,
    FootnoteRef,
    Highlight,
    Inline,
    InlineAttrs,
    InlineComment,
    Link,
    Strike,
    Strong,
    Subscript,
    Superscript,
    Text,
    Underline,
    Wave,
)
from jianwen.parser import Parser

RED = ColorAttribute(kind="preset", value="red")
BLUE = ColorAttribute(kind="preset", value="blue")
YELLOW = ColorAttribute(kind="preset", value="yellow")


def parse_inline(text: str, base_line: int = 1) -> tuple[tuple[Inline, ...], list[ParseError]]:
    parser = Parser([])
    nodes = parser.parse_inlines(text, base_line)
    return nodes, parser.errors


def plain_text(nodes: tuple[Inline, ...]) -> str:
    return "".join(node.content for node in nodes if isinstance(node, Text))


def codes(errors: list[ParseError]) -> list[str | None]:
    return [error.code for error in errors]


class TestPlainText:
    """Text without markup."""

    def test_single_text_node(self) -> None:
        nodes, errors = parse_inline("hello world")
        assert len(nodes) == 1
        assert isinstance(nodes[0], Text)
        assert nodes[0].content == "hello world"
        assert errors == []

    def test_empty_input(self) -> None:
        nodes, errors = parse_inline("")
        assert nodes == ()
        assert errors == []


class TestStyles:
    """Symmetric style delimiters."""

    @pytest.mark.parametrize(
        ("source", "node_type"),
        [
            ("*x*", Strong),
            ("/x/", Emphasis),
            ("_x_", Underline),
            ("-x-", Strike),
            ("~x~", Wave),
            ("^x^", Superscript),
            ("^^x^^", Subscript),
        ],
    )
    def test_style_node_types(self, source: str, node_type: type) -> None:
        nodes, errors = parse_inline(source)
        assert len(nodes) == 1
        assert isinstance(nodes[0], node_type)
        assert plain_text(nodes[0].children) == "x"  # type: ignore[union-attr]
        assert errors == []

    def test_nested_styles(self) -> None:
        nodes, _ = parse_inline("*bold /italic/*")
        strong = nodes[0]
        assert isinstance(strong, Strong)
        assert isinstance(strong.children[1], Emphasis)

    def test_unterminated_style_degrades(self) -> None:
        nodes, errors = parse_inline("ab *open")
        assert plain_text(nodes) == "ab *open"
        assert codes(errors) == ["unterminated-style"]
        assert errors[0].message == "Missing closing style delimiter"
        assert (errors[0].line, errors[0].column) == (1, 4)
        assert errors[0].severity == "warning"

    def test_unterminated_subscript_keeps_both_carets(self) -> None:
        nodes, errors = parse_inline("^^low")
        assert plain_text(nodes) == "^^low"
        assert codes(errors) == ["unterminated-style"]

    def test_location_uses_base_line(self) -> None:
        nodes, _ = parse_inline("x *y*", base_line=5)
        strong = nodes[1]
        assert strong.location is not None
        assert (strong.location.lineno, strong.location.col_offset) == (5, 3)

    def test_location_on_later_line(self) -> None:
        nodes, _ = parse_inline("a\n*b*")
        strong = nodes[1]
        assert strong.location is not None
        assert (strong.location.lineno, strong.location.col_offset) == (2, 1)


class TestLiterals:
    """Escapes, disabled spans and code spans."""

    def test_escape_stays_in_one_text_node(self) -> None:
        nodes, errors = parse_inline("a\\*b")
        assert nodes == (Text(content="a*b", location=nodes[0].location),)
        assert errors == []

    def test_disabled_span_is_not_parsed(self) -> None:
        nodes, errors = parse_inline("{*not bold*}")
        assert plain_text(nodes) == "*not bold*"
        assert not any(isinstance(node, Strong) for node in nodes)
        assert errors == []

    def test_unterminated_disabled_span(self) -> None:
        nodes, errors = parse_inline("{abc")
        assert plain_text(nodes) == "{abc"
        assert codes(errors) == ["unterminated-disabled"]

    def test_code_span(self) -> None:
        nodes, errors = parse_inline("run `a*b` now")
        assert isinstance(nodes[1], CodeSpan)
        assert nodes[1].code == "a*b"
        assert errors == []

    def test_unterminated_code_span(self) -> None:
        nodes, errors = parse_inline("`abc")
        assert plain_text(nodes) == "`abc"
        assert codes(errors) == ["unterminated-code-span"]


class TestHighlights:
    """Frame and marker highlights."""

    def test_frame_highlight(self) -> None:
        nodes, errors = parse_inline("``boxed *text*``")
        highlight = nodes[0]
        assert isinstance(highlight, Highlight)
        assert highlight.mode == "frame"
        assert isinstance(highlight.children[1], Strong)
        assert errors == []

    def test_frame_closes_with_matching_run(self) -> None:
        nodes, _ = parse_inline("```a``b```")
        highlight = nodes[0]
        assert isinstance(highlight, Highlight)
        assert isinstance(highlight.children[0], Text)
        assert highlight.children[0].content == "a"

    def test_unterminated_frame(self) -> None:
        nodes, errors = parse_inline("``open")
        assert plain_text(nodes) == "``open"
        assert codes(errors) == ["unterminated-frame"]

    def test_marker_highlight(self) -> None:
        nodes, errors = parse_inline("=marked=")
        assert isinstance(nodes[0], Highlight)
        assert nodes[0].mode == "marker"
        assert errors == []

    def test_lone_equals_is_literal(self) -> None:
        nodes, errors = parse_inline("a = b")
        assert plain_text(nodes) == "a = b"
        assert errors == []

    def test_double_equals_is_literal(self) -> None:
        nodes, errors = parse_inline("a==b")
        assert plain_text(nodes) == "a==b"
        assert not any(isinstance(node, Highlight) for node in nodes)
        assert errors == []


class TestBrackets:
    """Footnote refs, comments and literal brackets."""

    def test_footnote_ref(self) -> None:
        nodes, errors = parse_inline("see [fn:1].")
        ref = nodes[1]
        assert isinstance(ref, FootnoteRef)
        assert ref.identifier == "1"
        assert ref.location is not None
        assert ref.location.col_offset == 5
        assert errors == []

    def test_empty_brackets_are_literal(self) -> None:
        nodes, errors = parse_inline("a[]b")
        assert plain_text(nodes) == "a[]b"
        assert errors == []

    def test_inline_comment(self) -> None:
        nodes, errors = parse_inline("[comment]hidden[/] shown")
        assert isinstance(nodes[0], InlineComment)
        assert plain_text(nodes[0].children) == "hidden"
        assert plain_text(nodes[1:]) == " shown"
        assert errors == []

    def test_unterminated_comment(self) -> None:
        nodes, errors = parse_inline("[comment]never closed")
        assert plain_text(nodes) == "[comment]never closed"
        assert codes(errors) == ["unterminated-comment"]

    def test_unclosed_bracket(self) -> None:
        nodes, errors = parse_inline("a [red")
        assert plain_text(nodes) == "a [red"
        assert codes(errors) == ["unterminated-bracket"]


class TestAttributeExpressions:
    """Attribute groups, merging and scope."""

    def test_adjacent_groups_merge(self) -> None:
        merged, merged_errors = parse_inline("[red][bold]text")
        single, single_errors = parse_inline("[red,bold]text")
        assert merged == single
        assert merged_errors == single_errors == []

        node = single[0]
        assert isinstance(node, InlineAttrs)
        assert node.attrs.color == RED
        assert node.attrs.font_style == ("bold",)
        assert plain_text(node.children) == "text"

    def test_style_aliases(self) -> None:
        nodes, _ = parse_inline("[i,bb]x")
        assert isinstance(nodes[0], InlineAttrs)
        assert nodes[0].attrs.font_style == ("italic", "heavy")

    def test_font_size(self) -> None:
        nodes, _ = parse_inline("[1.5]x")
        assert isinstance(nodes[0], InlineAttrs)
        assert nodes[0].attrs.font_size == 1.5

    def test_invalid_font_size(self) -> None:
        nodes, errors = parse_inline("[7]x")
        assert plain_text(nodes) == "[7]x"
        assert codes(errors) == ["invalid-font-size"]
        assert errors[0].message == "Invalid fontSize 7 in inline attributes"

    def test_scope_ends_at_close_marker(self) -> None:
        nodes, _ = parse_inline("[red]one[/] two")
        assert isinstance(nodes[0], InlineAttrs)
        assert plain_text(nodes[0].children) == "one"
        assert plain_text(nodes[1:]) == " two"

    def test_scope_ends_at_next_attribute_group(self) -> None:
        nodes, _ = parse_inline("[red]a[blue]b")
        assert [type(node) for node in nodes] == [InlineAttrs, InlineAttrs]
        assert nodes[0].attrs.color == RED  # type: ignore[union-attr]
        assert nodes[1].attrs.color == BLUE  # type: ignore[union-attr]

    def test_scope_ends_at_line_break(self) -> None:
        nodes, _ = parse_inline("[red]a\nb")
        assert isinstance(nodes[0], InlineAttrs)
        assert plain_text(nodes[0].children) == "a"
        assert plain_text(nodes[1:]) == "\nb"

    def test_symbol_scopes_single_construct(self) -> None:
        nodes, _ = parse_inline("[red]*x* rest")
        attrs = nodes[0]
        assert isinstance(attrs, InlineAttrs)
        assert len(attrs.children) == 1
        assert isinstance(attrs.children[0], Strong)
        assert plain_text(nodes[1:]) == " rest"

    def test_highlight_absorbs_colors(self) -> None:
        nodes, _ = parse_inline("[red,!yellow]=x=")
        attrs = nodes[0]
        assert isinstance(attrs, InlineAttrs)
        highlight = attrs.children[0]
        assert isinstance(highlight, Highlight)
        assert highlight.color == RED
        assert highlight.fill_color == YELLOW
        assert attrs.attrs.color is None
        assert attrs.attrs.secondary_color is None


class TestLinks:
    """Keyword links and attributed links."""

    def test_keyword_link(self) -> None:
        nodes, errors = parse_inline("[link]site(https://example.com)")
        link = nodes[0]
        assert isinstance(link, Link)
        assert link.href == "https://example.com"
        assert plain_text(link.children) == "site"
        assert errors == []

    def test_keyword_link_colors(self) -> None:
        nodes, _ = parse_inline("[link][red][!blue]site(u)")
        link = nodes[0]
        assert isinstance(link, Link)
        assert link.color == RED
        assert link.underline_color == BLUE

    def test_keyword_link_missing_url(self) -> None:
        nodes, errors = parse_inline("[link]site")
        assert plain_text(nodes) == "[link]site"
        assert codes(errors) == ["link-missing-url"]

    def test_keyword_link_empty_url(self) -> None:
        nodes, errors = parse_inline("[link]site( )")
        assert plain_text(nodes) == "[link]site()"
        assert codes(errors) == ["link-empty-url"]

    def test_attributed_link(self) -> None:
        nodes, errors = parse_inline("[red,!blue]docs(https://a.b)")
        link = nodes[0]
        assert isinstance(link, Link)
        assert link.href == "https://a.b"
        assert link.color == RED
        assert link.underline_color == BLUE
        assert errors == []
