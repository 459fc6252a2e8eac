"""Tests for the public API surface."""

import pytest

import jianwen
from jianwen import ParseConfig, ParseResult, parse, parse_document
from jianwen.errors import ConfigError
from jianwen.nodes import Document, Heading, Include, Paragraph


class TestParse:
    """``jianwen.parse``."""

    def test_returns_result(self) -> None:
        result = parse("# Hello\n\nSay [red,bold]hi[/] to *all*")
        assert isinstance(result, ParseResult)
        assert isinstance(result.document, Document)
        heading, paragraph = result.document.children
        assert isinstance(heading, Heading)
        assert heading.level == 1
        assert isinstance(paragraph, Paragraph)
        assert result.errors == ()

    def test_source_file_recorded(self) -> None:
        document = parse("Body", source_file="notes.jw").document
        assert document.location.source_file == "notes.jw"
        assert document.children[0].location.source_file == "notes.jw"

    def test_overrides(self) -> None:
        files = {"intro.jw": "Intro text"}
        result = parse(
            "[@](intro.jw)",
            expand_include=True,
            load_file=lambda path, stack: files.get(path),
        )
        assert result.document.children[0].origin == "intro.jw"

    def test_overrides_apply_on_top_of_config(self) -> None:
        config = ParseConfig(load_file=lambda path, stack: "Loaded")
        result = parse("[@](a)", config, expand_include=True)
        assert isinstance(result.document.children[0], Paragraph)

    def test_unknown_override(self) -> None:
        with pytest.raises(ConfigError) as exc_info:
            parse("x", expandInclude=True)
        assert exc_info.value.option == "expandInclude"

    def test_invalid_override_value(self) -> None:
        with pytest.raises(ConfigError):
            parse("x", include_max_depth=-1)

    def test_includes_off_by_default(self) -> None:
        assert isinstance(parse("[@](a)").document.children[0], Include)

    def test_empty_source(self) -> None:
        result = parse("")
        assert result.document.children == ()
        assert result.document.meta is None
        assert result.errors == ()


class TestParseDocument:
    """``jianwen.parse_document``."""

    def test_discards_diagnostics(self) -> None:
        document = parse_document("Text [fn:x].")
        assert isinstance(document, Document)
        assert len(document.children) == 1


class TestExports:
    """Names exported from the package root."""

    def test_all_names_resolve(self) -> None:
        for name in jianwen.__all__:
            assert hasattr(jianwen, name), name

    def test_version(self) -> None:
        assert jianwen.__version__ == "0.1.0"
