"""Tests for diagnostic records and ParseResult helpers."""

import pytest

from jianwen import parse
from jianwen.diagnostics import (
    ParseError,
    prefix_include_error,
    report_error,
    report_warning,
)
from jianwen.errors import JianwenError, ParseFailedError


class TestParseError:
    """The diagnostic record."""

    def test_report_helpers(self) -> None:
        errors: list[ParseError] = []
        report_error(errors, "bad", 3, code="x")
        report_warning(errors, "meh", 4, 2)
        assert errors == [
            ParseError(message="bad", line=3, severity="error", code="x"),
            ParseError(message="meh", line=4, column=2),
        ]
        assert errors[0].is_error
        assert not errors[1].is_error

    def test_str(self) -> None:
        assert str(ParseError("meh", 4, 2)) == "4:2: warning: meh"
        assert str(ParseError("bad", 3, severity="error")) == "3: error: bad"

    def test_prefix_keeps_original(self) -> None:
        original = ParseError("Missing closing style delimiter", 2, 5, code="unterminated-style")
        prefixed = prefix_include_error(original, "a.jw")
        assert prefixed.message == "[include:a.jw] Missing closing style delimiter"
        assert (prefixed.line, prefixed.column, prefixed.code) == (2, 5, "unterminated-style")
        assert original.message == "Missing closing style delimiter"


class TestParseResult:
    """Result helpers over the diagnostics tuple."""

    def test_clean_result(self) -> None:
        result = parse("Plain")
        assert not result.has_errors
        assert result.warnings == ()
        result.raise_for_errors()

    def test_warnings_only(self) -> None:
        result = parse("a *b")
        assert not result.has_errors
        assert len(result.warnings) == 1
        result.raise_for_errors()

    def test_raise_for_errors(self) -> None:
        result = parse("text\n\n```\nopen", source_file="doc.jw")
        assert result.has_errors
        with pytest.raises(ParseFailedError) as exc_info:
            result.raise_for_errors()
        error = exc_info.value
        assert isinstance(error, JianwenError)
        assert error.lineno == 3
        assert error.col_offset is None
        assert error.source_file == "doc.jw"
        assert str(error) == "doc.jw:3 Code block is not closed with ```"

    def test_errors_keep_production_order(self) -> None:
        result = parse("*a\n\n[sheet]\n| x | y")
        assert [error.code for error in result.errors] == [
            "table-row-border",
            "unterminated-style",
        ]
