"""Configuration loading result object.

This module defines a standard result object for configuration file reads.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from .errors import ConfigFileNotFoundError, InvalidConfigFormatError


@dataclass
class ConfigResult:
    """Result of reading a configuration file.

    Attributes:
        success: Whether the file was read and parsed
        data: Parsed mapping (if successful)
        error: Error message (if unsuccessful)
        exception: Original exception (if an error occurred)
        path: Path to the configuration file
        missing: True when the failure is that the file does not exist
    """

    success: bool
    data: Optional[Dict[str, Any]] = None
    error: Optional[str] = None
    exception: Optional[Exception] = None
    path: Optional[str] = None
    missing: bool = False

    def unwrap(self) -> Dict[str, Any]:
        """Return the parsed data or raise the matching configuration error.

        Raises:
            ConfigFileNotFoundError: If the file does not exist
            InvalidConfigFormatError: If the file could not be read or parsed
        """
        if self.success:
            return self.data or {}
        message = self.error or "Unknown configuration error"
        if self.missing:
            raise ConfigFileNotFoundError(message, path=self.path)
        raise InvalidConfigFormatError(message, path=self.path)
