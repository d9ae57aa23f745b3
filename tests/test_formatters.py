"""Tests for the CLI output formatters."""

import io
import json
from pathlib import Path

from vanilla_web_lint.cli.formatters import (
    create_console,
    format_config_paths_json,
    format_json,
    format_report_json,
    format_rules_list_json,
    format_summary,
    format_violations_csv,
    format_violations_table,
)
from vanilla_web_lint.config_paths import describe_config_sources
from vanilla_web_lint.report import LintReport, Severity, Violation


def sample_report() -> LintReport:
    return LintReport(
        violations=[
            Violation("no-important", 'Declaration "color" uses !important', "a.css", 2, 3, Severity.WARNING),
            Violation("parse-error", "No such file or directory", "gone.html", severity=Severity.ERROR),
        ],
        files_checked=["a.css"],
        suppressed_count=1,
    ).finalize()


def test_format_json_serializes_paths_enums_and_sets() -> None:
    """Test the fallback serializer."""
    buffer = io.StringIO()
    format_json({"path": Path("css/a.css"), "severity": Severity.INFO, "ids": {"b", "a"}}, output=buffer)
    assert json.loads(buffer.getvalue()) == {"ids": ["a", "b"], "path": "css/a.css", "severity": "info"}
    assert buffer.getvalue().endswith("\n")


def test_format_report_json() -> None:
    """Test the report payload."""
    data = format_report_json(sample_report(), Severity.WARNING)
    assert data["fail_on"] == "warning"
    assert data["passed"] is False
    assert data["summary"] == {"files": 1, "errors": 1, "warnings": 1, "info": 0, "suppressed": 1}
    assert [v["path"] for v in data["violations"]] == ["a.css", "gone.html"]


def test_format_rules_list_json_sorts() -> None:
    """Test that rule rows are sorted by id."""
    data = format_rules_list_json([{"id": "no-var"}, {"id": "doctype"}])
    assert data == {"rules": [{"id": "doctype"}, {"id": "no-var"}], "count": 2}


def test_format_config_paths_json() -> None:
    """Test that the active source is surfaced."""
    data = format_config_paths_json(describe_config_sources())
    assert data["active"]["source"] == data["resolution_order"][-1]


def test_violations_csv_quotes_fields() -> None:
    """Test CSV quoting of messages with quotes."""
    lines = format_violations_csv(sample_report()).splitlines()
    assert lines[1] == 'a.css,2,3,warning,no-important,"Declaration ""color"" uses !important"'
    assert lines[2] == "gone.html,0,0,error,parse-error,No such file or directory"


def test_violations_table_groups_by_file() -> None:
    """Test that each file gets its own table with dashes for missing positions."""
    buffer = io.StringIO()
    format_violations_table(sample_report(), create_console(buffer, no_color=True))
    output = buffer.getvalue()
    assert output.index("a.css") < output.index("gone.html")
    assert "parse-error" in output


def test_summary_states() -> None:
    """Test the three summary lines."""
    report = sample_report()

    buffer = io.StringIO()
    format_summary(report, Severity.ERROR, create_console(buffer, no_color=True))
    assert "Failed" in buffer.getvalue()
    assert "suppressed" in buffer.getvalue()

    passing = LintReport(violations=[report.violations[0]], files_checked=["a.css"])
    buffer = io.StringIO()
    format_summary(passing, Severity.ERROR, create_console(buffer, no_color=True))
    assert "Passed" in buffer.getvalue()

    buffer = io.StringIO()
    format_summary(LintReport(), Severity.ERROR, create_console(buffer, no_color=True))
    assert "No problems found" in buffer.getvalue()
