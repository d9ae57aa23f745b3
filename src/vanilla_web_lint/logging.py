"""Logging utilities for the linter.

This module provides standardized logging functionality for lint operations.
"""

import logging
from enum import Enum
from typing import Any, Callable, Dict, Optional

# Type for log callback functions
LogCallback = Callable[[int, str, Dict[str, Any]], None]

LOGGER_NAME = "vanilla_web_lint"

_callback: Optional[LogCallback] = None


class LogLevel(int, Enum):
    """Log levels for the linter."""

    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARNING = logging.WARNING
    ERROR = logging.ERROR
    CRITICAL = logging.CRITICAL


class LogEvent(str, Enum):
    """Event types for linter logging."""

    CONFIG = "config"
    DISCOVERY = "discovery"
    PARSE = "parse"
    RULE = "rule"
    REPORT = "report"


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Get a logger under the package namespace.

    Args:
        name: Sub-logger name; dotted module names are accepted as-is

    Returns:
        The logger instance
    """
    if not name or name == LOGGER_NAME:
        return logging.getLogger(LOGGER_NAME)
    if name.startswith(LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{LOGGER_NAME}.{name}")


def set_log_callback(callback: Optional[LogCallback]) -> None:
    """Install a callback that receives every structured log record.

    Args:
        callback: Function called as ``callback(level, event, data)``, or None
            to remove the current callback
    """
    global _callback
    _callback = callback


def _log(
    callback: LogCallback,
    level: LogLevel,
    event: LogEvent,
    data: Dict[str, Any],
) -> None:
    """Log an event with the provided callback.

    Args:
        callback: Function to call with the log data
        level: Severity level
        event: Event type
        data: Dictionary of event data
    """
    try:
        callback(level, event.value, data)
    except Exception as e:
        # Fallback to standard logging if callback fails
        logging.getLogger(LOGGER_NAME).error(
            f"Logging callback failed with error: {e}. Original log: "
            f"level={level}, event={event.value}, data={data}"
        )


def _emit(level: LogLevel, event: LogEvent, message: str, data: Dict[str, Any]) -> None:
    logger = get_logger(event.value)
    if logger.isEnabledFor(level):
        logger.log(level, message, extra={"event": event.value, "data": data})
    if _callback is not None:
        _log(_callback, level, event, {"message": message, **data})


def log_debug(event: LogEvent, message: str, **data: Any) -> None:
    """Log a debug-level event."""
    _emit(LogLevel.DEBUG, event, message, data)


def log_info(event: LogEvent, message: str, **data: Any) -> None:
    """Log an info-level event."""
    _emit(LogLevel.INFO, event, message, data)


def log_warning(event: LogEvent, message: str, **data: Any) -> None:
    """Log a warning-level event."""
    _emit(LogLevel.WARNING, event, message, data)


def log_error(event: LogEvent, message: str, **data: Any) -> None:
    """Log an error-level event."""
    _emit(LogLevel.ERROR, event, message, data)
