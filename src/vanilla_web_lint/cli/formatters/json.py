"""JSON output formatter for CLI."""

import json
import sys
from enum import Enum as _Enum
from pathlib import PurePath
from typing import Any, Dict, List, Optional, TextIO

from ...config_paths import (
    SOURCE_DEFAULT,
    SOURCE_ENV,
    SOURCE_EXPLICIT,
    SOURCE_PROJECT,
    SOURCE_USER,
)
from ...report import LintReport, Severity


def _default_serializer(obj: Any) -> Any:
    """Serialize otherwise non-JSON-serializable objects.

    - Enum -> value (fallback to name)
    - Path -> string
    - set/frozenset -> sorted list
    - Fallback -> str(obj)
    """
    if isinstance(obj, _Enum):
        return getattr(obj, "value", obj.name)
    if isinstance(obj, PurePath):
        return str(obj)
    if isinstance(obj, (set, frozenset)):
        return sorted(obj)
    return str(obj)


def format_json(data: Any, output: Optional[TextIO] = None, indent: int = 2) -> None:
    """Format data as JSON and write to output.

    Args:
        data: Data to format
        output: Output stream (defaults to stdout)
        indent: JSON indentation level
    """
    if output is None:
        output = sys.stdout

    json.dump(
        data,
        output,
        indent=indent,
        ensure_ascii=False,
        sort_keys=True,
        default=_default_serializer,
    )
    output.write("\n")


def format_report_json(report: LintReport, fail_on: Severity = Severity.ERROR) -> Dict[str, Any]:
    """Format a lint report for JSON output.

    Args:
        report: Finished lint report
        fail_on: Severity threshold the run is judged against

    Returns:
        Formatted data structure
    """
    return {
        "violations": [v.to_dict() for v in report.violations],
        "summary": report.summary(),
        "by_rule": report.by_rule(),
        "files": list(report.files_checked),
        "fail_on": fail_on.value,
        "passed": report.exit_code(fail_on) == 0,
    }


def format_rules_list_json(rules: List[Dict[str, Any]]) -> Dict[str, Any]:
    """Format the rule listing for JSON output."""
    sorted_rules = sorted(rules, key=lambda r: r["id"])
    return {"rules": sorted_rules, "count": len(rules)}


def format_config_paths_json(sources: List[Dict[str, Any]]) -> Dict[str, Any]:
    """Format config source resolution for JSON output.

    Args:
        sources: Entries from ``describe_config_sources``

    Returns:
        Formatted data structure
    """
    active = next((s for s in sources if s.get("active")), None)
    return {
        "config_sources": sources,
        "active": active,
        "resolution_order": [
            SOURCE_EXPLICIT,
            SOURCE_ENV,
            SOURCE_PROJECT,
            SOURCE_USER,
            SOURCE_DEFAULT,
        ],
    }
