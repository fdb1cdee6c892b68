"""Tests for the Typer-based CLI."""

from __future__ import annotations

import json
from unittest.mock import AsyncMock, patch

import pytest
from rich.console import Console
from typer.testing import CliRunner

from trparser.cli import formatters
from trparser.cli.app import app, is_url
from trparser.core.exceptions import RemoteDocumentError
from trparser.core.models import Status, TestResult, TestSuite

# Wide terminal so Rich neither truncates help nor wraps table cells
runner = CliRunner(env={"COLUMNS": "200"})


class TestUrlDetection:
    """Tests for detection of remote targets."""

    @pytest.mark.parametrize(
        "target,expected",
        [
            ("https://ci.example.com/report.xml", True),
            ("http://localhost:8080/junit.xml", True),
            ("HTTPS://CI.EXAMPLE.COM/r.xml", True),
            ("./report.xml", False),
            ("/absolute/path/report.json", False),
            ("ftp://host/report.xml", False),
            ("", False),
        ],
    )
    def test_is_url(self, target: str, expected: bool) -> None:
        """Only http(s) URLs are fetched."""
        assert is_url(target) == expected


class TestHelpCommands:
    """Tests for help output."""

    def test_main_help(self) -> None:
        """Main help lists the parse command."""
        result = runner.invoke(app, ["--help"])

        assert result.exit_code == 0
        assert "parse" in result.output

    def test_parse_help(self) -> None:
        """parse help documents its options."""
        result = runner.invoke(app, ["parse", "--help"])

        assert result.exit_code == 0
        assert "TARGET" in result.output
        assert "--type" in result.output
        assert "--ignore-error-count" in result.output
        assert "--output-format" in result.output


class TestParseCommand:
    """Tests for the parse command."""

    def test_json_output(self, junit_multiple_suites) -> None:
        """JSON output is the serialized result."""
        result = runner.invoke(app, ["parse", str(junit_multiple_suites), "-t", "junit", "-f", "json"])

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["status"] == "FAIL"
        assert data["total"] == 8
        assert [s["name"] for s in data["suites"]] == ["LoginTests", "ApiTests"]

    def test_text_output(self, cucumber_features) -> None:
        """Text output shows a suite table and a summary line."""
        result = runner.invoke(app, ["parse", str(cucumber_features), "--type", "cucumber"])

        assert result.exit_code == 0
        assert "Login" in result.output
        assert "Search" in result.output
        assert "3 total, 2 passed, 1 failed, 0 errors, 0 skipped" in result.output

    def test_type_is_case_insensitive(self, nunit_v3) -> None:
        """Report types may be given in any case."""
        result = runner.invoke(app, ["parse", str(nunit_v3), "-t", "NUnit", "-f", "json"])

        assert result.exit_code == 0
        assert json.loads(result.stdout)["total"] == 12

    def test_ignore_error_count(self, junit_multiple_suites) -> None:
        """--ignore-error-count drops the errors counter."""
        result = runner.invoke(
            app,
            ["parse", str(junit_multiple_suites), "-t", "junit", "-f", "json", "--ignore-error-count"],
        )

        assert result.exit_code == 0
        assert json.loads(result.stdout)["errors"] == 0

    def test_missing_type_is_a_usage_error(self, junit_single_suite) -> None:
        """--type is required."""
        result = runner.invoke(app, ["parse", str(junit_single_suite)])

        assert result.exit_code == 2

    def test_unknown_output_format(self, junit_single_suite) -> None:
        """Unknown output formats are rejected."""
        result = runner.invoke(app, ["parse", str(junit_single_suite), "-t", "junit", "-f", "xml"])

        assert result.exit_code == 2
        assert "unknown output format" in result.output

    def test_format_error_exits_with_one(self, cucumber_features) -> None:
        """A document that does not match the type is reported on stderr."""
        result = runner.invoke(app, ["parse", str(cucumber_features), "-t", "junit"])

        assert result.exit_code == 1
        assert "Error: Invalid XML document" in result.output

    def test_missing_file_exits_with_one(self, tmp_path) -> None:
        """A missing file is reported, not raised."""
        result = runner.invoke(app, ["parse", str(tmp_path / "nope.xml"), "-t", "junit"])

        assert result.exit_code == 1
        assert "Error:" in result.output

    def test_url_target_is_fetched(self, junit_single_suite) -> None:
        """http(s) targets go through parse_from_url."""
        content = junit_single_suite.read_text()
        with patch("trparser.parser.fetch_document", new=AsyncMock(return_value=content)) as fetch:
            result = runner.invoke(app, ["parse", "https://ci.example.com/r.xml", "-t", "junit", "-f", "json"])

        assert result.exit_code == 0
        assert fetch.await_args.args[0] == "https://ci.example.com/r.xml"
        assert json.loads(result.stdout)["name"] == "wdio"

    def test_remote_error_exits_with_one(self) -> None:
        """Fetch failures are reported like parse failures."""
        error = RemoteDocumentError("https://ci.example.com/r.xml", "Not Found", status_code=404)
        with patch("trparser.parser.fetch_document", new=AsyncMock(side_effect=error)):
            result = runner.invoke(app, ["parse", "https://ci.example.com/r.xml", "-t", "junit"])

        assert result.exit_code == 1
        assert "404" in result.output

    def test_verbose_logs_debug_events(self, junit_single_suite) -> None:
        """-v turns on debug logging of library events."""
        result = runner.invoke(app, ["-v", "parse", str(junit_single_suite), "-t", "junit", "-f", "json"])

        assert result.exit_code == 0
        assert "document_parsed" in result.output


class TestFormatters:
    """Tests for output formatting helpers."""

    @pytest.mark.parametrize(
        "duration_ms,expected",
        [(0, "0ms"), (12.4, "12ms"), (999, "999ms"), (1000, "1.00s"), (1523.4, "1.52s")],
    )
    def test_format_duration(self, duration_ms: float, expected: str) -> None:
        """Durations are shown in ms below one second, in seconds above."""
        assert formatters.format_duration(duration_ms) == expected

    def test_print_text(self) -> None:
        """The text report renders suites and the summary."""
        suite = TestSuite(name="Checkout", status=Status.PASS, total=2, passed=2, duration_ms=1500.0)
        result = TestResult(name="run", status=Status.PASS, total=2, passed=2, duration_ms=1500.0, suites=(suite,))
        console = Console(record=True, width=120)

        formatters.print_text(result, console=console)

        text = console.export_text()
        assert "Checkout" in text
        assert "PASS 2 total, 2 passed, 0 failed, 0 errors, 0 skipped in 1.50s" in text

    def test_print_text_keeps_brackets_in_names(self) -> None:
        """Names that look like Rich markup are printed literally."""
        suite = TestSuite(name="Login [smoke] [/x]", status=Status.FAIL, total=1, failed=1)
        result = TestResult(name="nightly [/y]", status=Status.FAIL, total=1, failed=1, suites=(suite,))
        console = Console(record=True, width=200)

        formatters.print_text(result, console=console)

        text = console.export_text()
        assert "Login [smoke] [/x]" in text
        assert "nightly [/y]" in text

    def test_text_output_with_bracketed_suite_name(self, tmp_path) -> None:
        """The CLI renders a bracketed suite name from a real report."""
        report = tmp_path / "report.xml"
        report.write_text(
            '<testsuites><testsuite name="Login [smoke] [/x]" tests="1" failures="0">'
            '<testcase name="a"/></testsuite></testsuites>'
        )

        result = runner.invoke(app, ["parse", str(report), "-t", "junit"])

        assert result.exit_code == 0
        assert "Login [smoke] [/x]" in result.output
