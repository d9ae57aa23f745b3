"""CLI utilities package."""

from .helpers import (
    ExitCode,
    exit_code_for,
    handle_error,
    load_cli_config,
    resolve_format,
    resolve_log_level,
    setup_logging,
    validate_format_support,
)

__all__ = [
    "ExitCode",
    "exit_code_for",
    "handle_error",
    "load_cli_config",
    "resolve_format",
    "resolve_log_level",
    "setup_logging",
    "validate_format_support",
]
