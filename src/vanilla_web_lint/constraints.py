"""Option constraints for lint rules.

This module defines the constraint types used to validate rule options read
from configuration files.
"""

import math
from dataclasses import dataclass
from typing import (
    Any,
    List,
    Optional,
    Union,
)

from .errors import VanillaLintError


class NumericConstraint:
    """Constraint for numeric options."""

    def __init__(
        self,
        min_value: float = 0.0,
        max_value: Optional[float] = None,
        allow_float: bool = True,
        allow_int: bool = True,
        description: str = "",
    ):
        """Initialize numeric constraint.

        Args:
            min_value: Minimum allowed value
            max_value: Maximum allowed value, or None for no upper limit
            allow_float: Whether floating point values are allowed
            allow_int: Whether integer values are allowed
            description: Description of the option
        """
        self.min_value = min_value
        self.max_value = max_value
        self.allow_float = allow_float
        self.allow_int = allow_int
        self.description = description

    def validate(self, name: str, value: Any) -> None:
        """Validate a value against this constraint.

        Args:
            name: Option name for error messages
            value: Value to validate

        Raises:
            VanillaLintError: If validation fails
        """
        # bool is an int subclass but never a valid number here
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise VanillaLintError(
                f"Option '{name}' must be a number, got {type(value).__name__}.\n"
                "Allowed types: "
                + (
                    "float and integer"
                    if self.allow_float and self.allow_int
                    else ("float only" if self.allow_float else "integer only")
                )
            )

        if isinstance(value, float) and not self.allow_float:
            raise VanillaLintError(
                f"Option '{name}' must be an integer, got float {value}.\n"
                f"Description: {self.description}"
            )
        if isinstance(value, int) and not self.allow_int:
            raise VanillaLintError(
                f"Option '{name}' must be a float, got integer {value}.\n"
                f"Description: {self.description}"
            )

        if isinstance(value, float):
            if math.isnan(value):
                raise VanillaLintError(
                    f"Option '{name}' cannot be NaN (not a number).\n"
                    f"Description: {self.description}"
                )
            if math.isinf(value):
                raise VanillaLintError(
                    f"Option '{name}' cannot be infinity.\n"
                    f"Description: {self.description}"
                )

        min_val = self.min_value
        max_val = self.max_value

        if value < min_val or (max_val is not None and value > max_val):
            max_desc = str(max_val) if max_val is not None else "unlimited"
            raise VanillaLintError(
                f"Option '{name}' must be between {min_val} and {max_desc}.\n"
                f"Description: {self.description}\n"
                f"Current value: {value}"
            )


class EnumConstraint:
    """Constraint for enumerated string options."""

    def __init__(
        self,
        allowed_values: List[str],
        description: str = "",
    ):
        """Initialize enum constraint.

        Args:
            allowed_values: List of allowed string values
            description: Description of the option
        """
        self.allowed_values = allowed_values
        self.description = description

    def validate(self, name: str, value: Any) -> None:
        """Validate a value against this constraint.

        Raises:
            VanillaLintError: If validation fails
        """
        if not isinstance(value, str):
            raise VanillaLintError(
                f"Option '{name}' must be a string, got {type(value).__name__}.\n"
                f"Description: {self.description}"
            )

        if value not in self.allowed_values:
            raise VanillaLintError(
                f"Invalid value '{value}' for option '{name}'.\n"
                f"Description: {self.description}\n"
                f"Allowed values: {', '.join(map(str, sorted(self.allowed_values)))}"
            )


class BooleanConstraint:
    """Constraint for on/off options."""

    def __init__(self, description: str = ""):
        self.description = description

    def validate(self, name: str, value: Any) -> None:
        if not isinstance(value, bool):
            raise VanillaLintError(
                f"Option '{name}' must be true or false, got {type(value).__name__}.\n"
                f"Description: {self.description}"
            )


class StringListConstraint:
    """Constraint for options holding a list of strings."""

    def __init__(self, allow_empty: bool = True, description: str = ""):
        """Initialize string list constraint.

        Args:
            allow_empty: Whether an empty list is accepted
            description: Description of the option
        """
        self.allow_empty = allow_empty
        self.description = description

    def validate(self, name: str, value: Any) -> None:
        if not isinstance(value, (list, tuple)):
            raise VanillaLintError(
                f"Option '{name}' must be a list of strings, got {type(value).__name__}.\n"
                f"Description: {self.description}"
            )
        bad = [item for item in value if not isinstance(item, str)]
        if bad:
            raise VanillaLintError(
                f"Option '{name}' must only contain strings, got {bad!r}.\n"
                f"Description: {self.description}"
            )
        if not value and not self.allow_empty:
            raise VanillaLintError(f"Option '{name}' must not be empty.\nDescription: {self.description}")


class PathSegmentConstraint:
    """Constraint for options naming a single directory inside a project."""

    def __init__(self, description: str = ""):
        self.description = description

    def validate(self, name: str, value: Any) -> None:
        if not isinstance(value, str) or not value.strip():
            raise VanillaLintError(
                f"Option '{name}' must be a non-empty directory name.\n"
                f"Description: {self.description}"
            )
        if value.startswith("/") or ".." in value.split("/"):
            raise VanillaLintError(
                f"Option '{name}' must be relative to the project root, got '{value}'.\n"
                f"Description: {self.description}"
            )


Constraint = Union[
    NumericConstraint,
    EnumConstraint,
    BooleanConstraint,
    StringListConstraint,
    PathSegmentConstraint,
]


@dataclass
class RuleOption:
    """A configurable option of a rule with its default value."""

    name: str
    constraint: Constraint
    default: Any
    description: str = ""
