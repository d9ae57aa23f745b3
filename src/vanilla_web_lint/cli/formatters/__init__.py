"""CLI formatters package."""

from .csv import format_rules_csv, format_violations_csv
from .json import (
    format_config_paths_json,
    format_json,
    format_report_json,
    format_rules_list_json,
)
from .table import (
    create_console,
    format_config_paths_table,
    format_config_table,
    format_rule_detail,
    format_rules_table,
    format_summary,
    format_violations_table,
)

__all__ = [
    "format_json",
    "format_report_json",
    "format_rules_list_json",
    "format_config_paths_json",
    "format_violations_csv",
    "format_rules_csv",
    "create_console",
    "format_violations_table",
    "format_summary",
    "format_rules_table",
    "format_rule_detail",
    "format_config_paths_table",
    "format_config_table",
]
