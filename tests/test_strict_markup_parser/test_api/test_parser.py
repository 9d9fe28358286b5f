"""Tests for the public parsing API."""

import logging
from pathlib import Path

import pytest

from strict_markup_parser.api import (
    ParseResult,
    StrictMarkupParser,
    parse,
    parse_document,
    parse_file,
    parse_string,
)
from strict_markup_parser.parsing import TagMismatchError
from strict_markup_parser.shared import DiagnosticSeverity, ParserConfig
from strict_markup_parser.tree import make_text

QUIET = ParserConfig.quiet()


class TestParseDocument:
    """Test the raising entry point."""

    def test_returns_root_node(self) -> None:
        root = parse_document("<div><p>Hello</p></div>")

        assert root.tag_name == "div"
        assert root.children[0].children == (make_text("Hello"),)

    def test_raises_on_malformed_input(self) -> None:
        with pytest.raises(TagMismatchError):
            parse_document("<a><b></a></b>")

    def test_honours_root_tag(self) -> None:
        root = parse_document("<a></a><b></b>", ParserConfig(root_tag="body"))

        assert root.tag_name == "body"


class TestParseString:
    """Test the non-raising string entry point."""

    def test_success(self) -> None:
        result = parse_string("<div><p>Hello</p><p>World</p></div>", QUIET)

        assert isinstance(result, ParseResult)
        assert result.success
        assert result.root is not None
        assert result.root.tag_name == "div"
        assert result.element_count == 3
        assert result.node_count == 5
        assert result.max_depth == 3
        assert not result.has_errors()
        assert result.diagnostics == []

    def test_performance_metrics(self) -> None:
        source = "<a>x</a>"

        result = parse_string(source, QUIET)

        assert result.performance.characters_processed == len(source)
        assert result.performance.nodes_created == 2
        assert result.performance.elements_created == 1
        assert result.processing_time_ms >= 0.0

    def test_tag_mismatch_becomes_diagnostic(self) -> None:
        result = parse_string("<a><b></a></b>", QUIET, correlation_id="req-7")

        assert not result.success
        assert result.root is None
        assert result.has_errors()
        error = result.error
        assert error is not None
        assert error.severity is DiagnosticSeverity.ERROR
        assert error.component == "parser"
        assert error.details["kind"] == "TAG_MISMATCH"
        assert error.details["expected"] == "b"
        assert error.position == {"offset": 8, "line": 1, "column": 9}
        assert error.correlation_id == "req-7"

    @pytest.mark.parametrize(
        "source, kind",
        [
            ("<div>", "UNEXPECTED_EOF"),
            ("<a href=x>", "UNEXPECTED_CHAR"),
            ("<a></b>", "TAG_MISMATCH"),
        ],
    )
    def test_error_kinds(self, source: str, kind: str) -> None:
        result = parse_string(source, QUIET)

        assert result.error.details["kind"] == kind

    def test_very_deep_nesting(self) -> None:
        depth = 10000
        source = "<d>" * depth + "x" + "</d>" * depth

        result = parse_string(source, QUIET)

        assert result.success
        assert result.max_depth == depth + 1
        assert result.element_count == depth
        assert result.to_dict()["root"]["children"][0]["tag"] == "d"

    def test_memory_tracking(self) -> None:
        result = parse_string("<a></a>", ParserConfig(track_memory=True))

        assert result.performance.memory_used_bytes >= 0

    def test_to_dict(self) -> None:
        data = parse_string('<p id="x">Hi</p>', QUIET).to_dict()

        assert data["success"] is True
        assert data["root"]["tag"] == "p"
        assert data["diagnostics"] == []
        assert "performance" in data


class TestConfiguredLogging:
    """Test that ParserConfig.logging_level filters records."""

    def test_quiet_config_emits_nothing_below_error(self, caplog) -> None:
        with caplog.at_level(logging.DEBUG, logger="strict_markup_parser"):
            result = parse_string("<a></a>", ParserConfig.quiet())

        assert result.success
        assert [r for r in caplog.records if r.levelno < logging.ERROR] == []

    def test_debug_config_emits_parser_records(self, caplog) -> None:
        config = ParserConfig(logging_level="DEBUG", track_memory=False)

        with caplog.at_level(logging.DEBUG, logger="strict_markup_parser"):
            parse_string("<a></a>", config)

        messages = [record.getMessage() for record in caplog.records]
        assert "Starting string parse operation" in messages
        assert "Document parse complete" in messages

    def test_warning_config_keeps_failure_warning(self, caplog) -> None:
        config = ParserConfig(logging_level="WARNING", track_memory=False)

        with caplog.at_level(logging.DEBUG, logger="strict_markup_parser"):
            parse_string("<a></b>", config)

        assert [record.getMessage() for record in caplog.records] == [
            "Markup is not well-formed"
        ]


class TestParse:
    """Test input type routing."""

    def test_string_input(self) -> None:
        assert parse("<a></a>", QUIET).root.tag_name == "a"

    def test_bytes_input_uses_configured_encoding(self) -> None:
        result = parse("<p>café</p>".encode("latin-1"), QUIET.override(encoding="latin-1"))

        assert result.root.children[0].text == "café"

    def test_undecodable_bytes(self) -> None:
        result = parse(b"<p>\xff</p>", QUIET)

        assert not result.success
        assert result.error.severity is DiagnosticSeverity.CRITICAL
        assert "Unable to decode" in result.error.message

    def test_path_input(self, tmp_path: Path) -> None:
        path = tmp_path / "page.html"
        path.write_text("<html><body>Hi</body></html>", encoding="utf-8")

        result = parse(path, QUIET)

        assert result.success
        assert result.source_name == str(path)

    def test_unsupported_type(self) -> None:
        with pytest.raises(TypeError, match="Unsupported input type"):
            parse(42, QUIET)  # type: ignore


class TestParseFile:
    """Test file reading and parsing."""

    def test_parse_file(self, tmp_path: Path) -> None:
        path = tmp_path / "page.html"
        path.write_text("<div>\n  <p>Hello</p>\n</div>\n", encoding="utf-8")

        result = parse_file(path, config=QUIET)

        assert result.success
        assert result.root.find("p").text_content == "Hello"
        assert result.source_name == str(path)

    def test_encoding_override(self, tmp_path: Path) -> None:
        path = tmp_path / "legacy.html"
        path.write_bytes("<p>naïve</p>".encode("latin-1"))

        result = parse_file(str(path), encoding="latin-1", config=QUIET)

        assert result.root.text_content == "naïve"

    def test_missing_file(self, tmp_path: Path) -> None:
        result = parse_file(tmp_path / "missing.html", config=QUIET)

        assert not result.success
        assert "File not found" in result.error.message

    def test_directory_is_not_a_file(self, tmp_path: Path) -> None:
        result = parse_file(tmp_path, config=QUIET)

        assert not result.success
        assert "Path is not a file" in result.error.message

    def test_decode_error(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.html"
        path.write_bytes(b"<p>\xff</p>")

        result = parse_file(path, config=QUIET)

        assert not result.success
        assert "Unable to decode" in result.error.message

    def test_malformed_file(self, tmp_path: Path) -> None:
        path = tmp_path / "broken.html"
        path.write_text("<div>\n<p>text</div>", encoding="utf-8")

        result = parse_file(path, config=QUIET)

        assert not result.success
        assert result.error.details["kind"] == "TAG_MISMATCH"
        assert result.error.position["line"] == 2


class TestStrictMarkupParser:
    """Test the configured parser facade."""

    def test_parse_document_uses_config(self) -> None:
        parser = StrictMarkupParser(ParserConfig(root_tag="body"))

        assert parser.parse_document("<p></p><p></p>").tag_name == "body"

    def test_statistics(self) -> None:
        parser = StrictMarkupParser(QUIET, correlation_id="batch-1")

        parser.parse_string("<a></a>")
        parser.parse("<a>")
        parser.parse_string("<b></b>")

        stats = parser.statistics
        assert stats["total_parses"] == 3
        assert stats["successful_parses"] == 2
        assert stats["success_rate"] == pytest.approx(2 / 3)
        assert stats["correlation_id"] == "batch-1"

    def test_reset_statistics(self) -> None:
        parser = StrictMarkupParser(QUIET)
        parser.parse_string("<a></a>")

        parser.reset_statistics()

        assert parser.statistics["total_parses"] == 0
        assert parser.statistics["success_rate"] == 0.0

    def test_parse_file(self, tmp_path: Path) -> None:
        path = tmp_path / "doc.xml"
        path.write_text("<note><to>Tove</to></note>", encoding="utf-8")

        result = StrictMarkupParser(QUIET).parse_file(path)

        assert result.root.find("to").text_content == "Tove"
