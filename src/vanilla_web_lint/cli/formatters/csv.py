"""CSV output formatter for CLI."""

import csv
import io
from typing import Any, Dict, List

from ...report import LintReport

VIOLATION_COLUMNS = ["path", "line", "column", "severity", "rule", "message"]
RULE_COLUMNS = ["id", "file_types", "severity", "default_severity", "description"]


def format_violations_csv(report: LintReport) -> str:
    """Render violations as CSV with a header row."""
    output = io.StringIO()
    writer = csv.writer(output)
    writer.writerow(VIOLATION_COLUMNS)
    for violation in report.violations:
        row = violation.to_dict()
        writer.writerow([row[col] for col in VIOLATION_COLUMNS])
    return output.getvalue().strip()


def format_rules_csv(rules: List[Dict[str, Any]]) -> str:
    """Render the rule listing as CSV with a header row."""
    output = io.StringIO()
    writer = csv.writer(output)
    writer.writerow(RULE_COLUMNS)
    for rule in sorted(rules, key=lambda r: r["id"]):
        writer.writerow(
            [
                rule["id"],
                " ".join(rule["file_types"]),
                rule["severity"],
                rule["default_severity"],
                rule["description"],
            ]
        )
    return output.getvalue().strip()
