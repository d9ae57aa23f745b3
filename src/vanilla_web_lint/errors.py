"""Error types for vanilla-web-lint.

This module defines the error types raised by the linter library for
configuration, rule lookup and parsing problems.
"""

from typing import Any, Dict, List, Optional, Set, Union


class VanillaLintError(Exception):
    """Base class for all linter errors.

    This is the parent class for all vanilla-web-lint specific exceptions.
    """

    pass


class ConfigurationError(VanillaLintError):
    """Base class for configuration-related errors.

    This is raised for errors related to configuration loading, parsing,
    or validation.
    """

    def __init__(self, message: str, path: Optional[str] = None) -> None:
        """Initialize configuration error.

        Args:
            message: Error message
            path: Optional path to the configuration file that caused the error
        """
        super().__init__(message)
        self.message = message
        self.path = path


class ConfigFileNotFoundError(ConfigurationError):
    """Raised when an explicitly requested configuration file does not exist.

    Examples:
        >>> try:
        ...     load_config("missing.yml")
        ... except ConfigFileNotFoundError as e:
        ...     print(f"Config file not found: {e.path}")
    """

    pass


class InvalidConfigFormatError(ConfigurationError):
    """Raised when a configuration file has an invalid format.

    Examples:
        >>> try:
        ...     load_config("broken.yml")
        ... except InvalidConfigFormatError as e:
        ...     print(f"Invalid config format: {e}")
    """

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        expected_type: str = "dict",
    ) -> None:
        """Initialize invalid format error.

        Args:
            message: Error message
            path: Optional path to the configuration file
            expected_type: Expected type of the offending value
        """
        super().__init__(message, path)
        self.expected_type = expected_type


class RuleError(VanillaLintError):
    """Base class for rule lookup and rule configuration errors."""

    pass


class RuleNotFoundError(RuleError):
    """Raised when a rule id is not known to the registry.

    Examples:
        >>> try:
        ...     RuleRegistry.get_default().get("no-such-rule")
        ... except RuleNotFoundError as e:
        ...     print(f"Rule {e.rule_id} is not available")
    """

    def __init__(
        self,
        message: str,
        rule_id: Optional[str] = None,
        available_rules: Optional[Union[List[str], Set[str], Dict[str, Any]]] = None,
    ) -> None:
        """Initialize rule not found error.

        Args:
            message: Error message
            rule_id: The unknown rule id
            available_rules: Known rule ids (optional)
        """
        super().__init__(message)
        self.message = message
        self.rule_id = rule_id
        # Convert other collection types to a sorted list for consistency
        if available_rules is not None:
            self.available_rules: Optional[List[str]] = sorted(available_rules)
        else:
            self.available_rules = None

    def __str__(self) -> str:
        """Return string representation of the error."""
        return self.message


class DuplicateRuleError(RuleError):
    """Raised when a rule id is registered twice."""

    def __init__(self, message: str, rule_id: str) -> None:
        """Initialize duplicate rule error.

        Args:
            message: Error message
            rule_id: The id that was already registered
        """
        super().__init__(message)
        self.message = message
        self.rule_id = rule_id


class InvalidRuleOptionError(RuleError):
    """Raised when a configured rule option fails validation.

    Examples:
        >>> try:
        ...     rule.resolve_options({"allow_null": "yes"})
        ... except InvalidRuleOptionError as e:
        ...     print(f"{e.rule_id}: bad value for {e.option}")
    """

    def __init__(
        self,
        message: str,
        rule_id: str,
        option: str,
        value: Any = None,
    ) -> None:
        """Initialize invalid rule option error.

        Args:
            message: Error message
            rule_id: The rule the option belongs to
            option: The option name
            value: The value that failed validation
        """
        super().__init__(message)
        self.message = message
        self.rule_id = rule_id
        self.option = option
        self.value = value


class ParseError(VanillaLintError):
    """Raised when a source file cannot be read or decoded."""

    def __init__(self, message: str, path: Optional[str] = None, line: int = 0) -> None:
        """Initialize parse error.

        Args:
            message: Error message
            path: Path of the file that failed
            line: Line number, or 0 when the whole file is affected
        """
        super().__init__(message)
        self.message = message
        self.path = path
        self.line = line
