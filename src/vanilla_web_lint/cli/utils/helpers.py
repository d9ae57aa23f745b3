"""Helper functions for CLI operations."""

import logging
import sys
from typing import Any, Dict, List, Optional

import click
from rich.console import Console
from rich.logging import RichHandler

from ...config import LintConfig, load_config
from ...errors import ConfigurationError, InvalidRuleOptionError, RuleNotFoundError, VanillaLintError
from ...logging import LOGGER_NAME


class ExitCode:
    """Standard exit codes for the CLI."""

    SUCCESS = 0
    GENERIC_ERROR = 1
    VIOLATIONS_FOUND = 1
    INVALID_USAGE = 2
    RULE_NOT_FOUND = 3
    CONFIG_ERROR = 4


_cli_handler: Optional[logging.Handler] = None


def resolve_format(cli_format: Optional[str] = None, default_tty: str = "table", default_non_tty: str = "json") -> str:
    """Resolve output format with TTY detection.

    Args:
        cli_format: Format specified via CLI flag
        default_tty: Default format for TTY output
        default_non_tty: Default format for non-TTY output

    Returns:
        Resolved format name
    """
    if cli_format:
        return cli_format.lower()

    # Auto-detect based on TTY
    if sys.stdout.isatty():
        return default_tty
    else:
        return default_non_tty


def resolve_log_level(verbose: int = 0, quiet: int = 0, debug: bool = False) -> str:
    """Map the verbosity flags to a logging level name."""
    log_level = "WARNING"
    if debug:
        log_level = "DEBUG"
    elif verbose > quiet:
        if verbose >= 2:
            log_level = "DEBUG"
        elif verbose >= 1:
            log_level = "INFO"
    elif quiet > verbose:
        if quiet >= 2:
            log_level = "CRITICAL"
        elif quiet >= 1:
            log_level = "ERROR"
    return log_level


def setup_logging(log_level: str, no_color: bool = False) -> None:
    """Send package log records to stderr through rich.

    Calling this again replaces the handler installed by the previous call.
    """
    global _cli_handler
    logger = logging.getLogger(LOGGER_NAME)
    if _cli_handler is not None:
        logger.removeHandler(_cli_handler)

    _cli_handler = RichHandler(
        console=Console(stderr=True, no_color=no_color),
        show_time=False,
        show_path=False,
        markup=False,
    )
    logger.addHandler(_cli_handler)
    logger.setLevel(log_level)


def exit_code_for(error: Exception) -> int:
    """Pick the exit code for a library error."""
    if isinstance(error, RuleNotFoundError):
        return ExitCode.RULE_NOT_FOUND
    if isinstance(error, (ConfigurationError, InvalidRuleOptionError)):
        return ExitCode.CONFIG_ERROR
    if isinstance(error, click.BadParameter):
        return ExitCode.INVALID_USAGE
    return ExitCode.GENERIC_ERROR


def handle_error(error: Exception, exit_code: Optional[int] = None) -> None:
    """Handle CLI errors with consistent formatting.

    Args:
        error: Exception to handle
        exit_code: Exit code to use; derived from the error type when omitted
    """
    if exit_code is None:
        exit_code = exit_code_for(error)
    click.echo(f"Error: {str(error)}", err=True)
    if isinstance(error, RuleNotFoundError) and error.available_rules:
        click.echo(f"Available rules: {', '.join(error.available_rules)}", err=True)
    sys.exit(exit_code)


def validate_format_support(
    format_type: str,
    supported_formats: List[str],
    command_name: str,
    ctx_obj: Dict[str, Any],
) -> str:
    """Validate format support for a command with consistent fallback behavior.

    Args:
        format_type: The requested format
        supported_formats: List of supported formats for this command
        command_name: Name of the command for error messages
        ctx_obj: Click context object containing verbosity settings

    Returns:
        The validated format (may be changed from input for fallback)

    Raises:
        click.BadParameter: For unsupported formats that can't fall back
    """
    if format_type in supported_formats:
        return format_type

    # Common fallback behavior for table/csv
    if format_type in ["table", "csv"]:
        fallback_format = "json" if "json" in supported_formats else supported_formats[0]
        # Only show message in verbose mode to avoid cluttering output
        if ctx_obj.get("verbose", 0) > 0:
            click.echo(
                f"Note: {command_name} doesn't support '{format_type}' format, using {fallback_format} instead.",
                err=True,
            )
        return fallback_format
    else:
        supported_list = "', '".join(supported_formats)
        raise click.BadParameter(f"Format '{format_type}' is not supported for {command_name}. Use '{supported_list}'.")


def load_cli_config(ctx_obj: Dict[str, Any]) -> LintConfig:
    """Load the effective config for a command, exiting on configuration errors."""
    try:
        return load_config(ctx_obj.get("config_path"))
    except VanillaLintError as e:
        handle_error(e)
        raise  # unreachable; handle_error exits
