"""Tests for the progressive-disclosure parsing API."""

import io
from pathlib import Path

import pytest

from mini_dom_parser.api import MarkupParser, parse, parse_file, parse_string
from mini_dom_parser.shared import (
    CommentMode,
    DiagnosticSeverity,
    MismatchedClosingTag,
    ParserConfig,
)


class TestParse:
    """Test the raising entry point."""

    def test_returns_root_node(self):
        """Test a well-formed document yields its root."""
        root = parse('<html><body id="name">Hello World</body></html>')
        assert root.tag_name == "html"
        assert root.find("body").text_content == "Hello World"

    def test_raises_on_malformed_markup(self):
        """Test structural errors propagate."""
        with pytest.raises(MismatchedClosingTag):
            parse("<a></b>")

    def test_uses_config(self):
        """Test configuration reaches the parser."""
        root = parse("<a></a><b></b>", ParserConfig(synthetic_root_tag="doc"))
        assert root.tag_name == "doc"


class TestParseString:
    """Test parse_string."""

    def test_successful_parse(self):
        """Test results for well-formed markup."""
        result = parse_string("<p>one<!-- two --></p>")

        assert result.success
        assert result.error is None
        assert result.element_count == 1
        assert result.text_count == 1
        assert result.comment_count == 1
        assert result.performance.characters_processed == len("<p>one<!-- two --></p>")
        assert result.performance.nodes_created == 3
        assert not result.has_errors()

    def test_malformed_markup_does_not_raise(self):
        """Test errors are reported in the result."""
        result = parse_string("<a></b>")

        assert not result.success
        assert result.root is None
        assert isinstance(result.error, MismatchedClosingTag)
        errors = result.get_diagnostics_by_severity(DiagnosticSeverity.ERROR)
        assert len(errors) == 1
        assert errors[0].component == "parser"
        assert errors[0].details == {"code": "mismatched-closing-tag"}
        assert errors[0].position == {"line": 1, "column": 6, "offset": 5}

    def test_excessive_nesting_does_not_raise(self):
        """Test nesting deeper than the interpreter stack yields a failed result."""
        source = "<a>" * 5000 + "</a>" * 5000
        result = parse_string(source, ParserConfig(max_depth=100_000))

        assert not result.success
        assert result.error.code == "nesting-too-deep"

    def test_correlation_id(self):
        """Test correlation IDs are carried into the result."""
        result = parse_string("<p></p>", correlation_id="req-1")
        assert result.correlation_id == "req-1"

        config = ParserConfig(correlation_id="from-config")
        assert parse_string("<p></p>", config).correlation_id == "from-config"

    def test_comment_mode_from_config(self):
        """Test the compatible comment mode rejects hyphens in bodies."""
        markup = "<p><!-- a-b --></p>"
        assert parse_string(markup).success
        compatible = ParserConfig(comment_mode=CommentMode.FIRST_HYPHEN)
        assert not parse_string(markup, compatible).success


class TestParseFile:
    """Test parse_file."""

    def test_parse_file(self, tmp_path):
        """Test parsing a document from disk."""
        path = tmp_path / "doc.html"
        path.write_text("<p>Grüße</p>", encoding="utf-8")

        result = parse_file(path)

        assert result.success
        assert result.root.text_content == "Grüße"
        assert result.source_name == str(path)
        info = result.get_diagnostics_by_severity(DiagnosticSeverity.INFO)
        assert info[0].message == "File read with encoding: utf-8"

    def test_diagnostics_can_be_disabled(self, tmp_path):
        """Test the informational diagnostic is optional."""
        path = tmp_path / "doc.html"
        path.write_text("<p></p>")

        result = parse_file(path, config=ParserConfig(enable_diagnostics=False))
        assert result.diagnostics == []

    def test_missing_file(self, tmp_path):
        """Test a missing file yields a critical diagnostic."""
        result = parse_file(tmp_path / "missing.html")

        assert not result.success
        assert result.error is None
        critical = result.get_diagnostics_by_severity(DiagnosticSeverity.CRITICAL)
        assert "File not found" in critical[0].message

    def test_directory_is_not_a_file(self, tmp_path):
        """Test directories are rejected."""
        result = parse_file(tmp_path)
        assert not result.success
        assert "Path is not a file" in result.diagnostics[0].message

    def test_undecodable_file(self, tmp_path):
        """Test decoding failures are reported."""
        path = tmp_path / "bad.html"
        path.write_bytes(b"<p>\xff</p>")

        result = parse_file(path)
        assert not result.success
        assert "Cannot read file" in result.diagnostics[0].message

    def test_malformed_file(self, tmp_path):
        """Test malformed markup in a file."""
        path = tmp_path / "bad.html"
        path.write_text("<p>")

        result = parse_file(path)
        assert not result.success
        assert result.error.code == "unexpected-end-of-input"


class TestMarkupParser:
    """Test the configured parser class."""

    def test_string_input(self):
        """Test parsing a string."""
        parser = MarkupParser()
        assert parser.parse("<p></p>").success

    def test_bytes_input(self):
        """Test bytes are decoded as UTF-8."""
        result = MarkupParser().parse("<p>世界</p>".encode("utf-8"))
        assert result.root.text_content == "世界"

    def test_invalid_bytes_input(self):
        """Test undecodable bytes produce a failed result."""
        result = MarkupParser().parse(b"<p>\xff</p>")
        assert not result.success
        assert result.has_errors()

    def test_file_like_input(self):
        """Test objects with a read method."""
        result = MarkupParser().parse(io.StringIO("<a><b></b></a>"))
        assert result.element_count == 2

        result = MarkupParser().parse(io.BytesIO(b"<a></a>"))
        assert result.success

    def test_path_input(self, tmp_path):
        """Test Path objects are read from disk."""
        path = tmp_path / "doc.html"
        path.write_text("<a></a>")
        assert MarkupParser().parse(Path(path)).success

    def test_unsupported_input(self):
        """Test unsupported input types raise TypeError."""
        with pytest.raises(TypeError, match="Unsupported input type: int"):
            MarkupParser().parse(42)

    def test_statistics(self):
        """Test usage statistics accumulate and reset."""
        parser = MarkupParser(correlation_id="stats")
        parser.parse("<p></p>")
        parser.parse("<p></b>")

        stats = parser.statistics
        assert stats["total_parses"] == 2
        assert stats["successful_parses"] == 1
        assert stats["success_rate"] == 0.5
        assert stats["correlation_id"] == "stats"

        parser.reset_statistics()
        assert parser.statistics["total_parses"] == 0
        assert parser.statistics["success_rate"] == 0.0

    def test_reconfigure(self):
        """Test replacing the configuration."""
        parser = MarkupParser()
        parser.reconfigure(ParserConfig.compatible())
        assert parser.config.comment_mode is CommentMode.FIRST_HYPHEN
        assert not parser.parse("<p><!-- a-b --></p>").success
