"""Violation records and report aggregation."""

from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterable, List, Tuple

from .errors import InvalidConfigFormatError


class Severity(str, Enum):
    """Severity of a rule violation."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"
    OFF = "off"

    @property
    def weight(self) -> int:
        """Numeric weight; higher is more severe."""
        return _SEVERITY_WEIGHTS[self]

    @classmethod
    def parse(cls, value: str) -> "Severity":
        """Parse a severity name.

        Args:
            value: Severity name (case-insensitive)

        Returns:
            The matching severity

        Raises:
            InvalidConfigFormatError: If the name is not a known severity
        """
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            raise InvalidConfigFormatError(
                f"Severity must be a string, got {type(value).__name__}",
                expected_type="str",
            )
        try:
            return cls(value.strip().lower())
        except ValueError:
            allowed = ", ".join(s.value for s in cls)
            raise InvalidConfigFormatError(
                f"Invalid severity '{value}'. Allowed values: {allowed}",
                expected_type="str",
            )

    def at_least(self, other: "Severity") -> bool:
        """Check whether this severity is at or above another."""
        return self.weight >= other.weight

    # ordered by weight, not by the alphabetical order of the values
    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self.weight < other.weight

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self.weight <= other.weight

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self.weight > other.weight

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self.weight >= other.weight


_SEVERITY_WEIGHTS = {
    Severity.OFF: 0,
    Severity.INFO: 1,
    Severity.WARNING: 2,
    Severity.ERROR: 3,
}


@dataclass(frozen=True)
class Violation:
    """A single rule violation at a source location."""

    rule_id: str
    message: str
    path: str
    line: int = 0
    column: int = 0
    severity: Severity = Severity.ERROR

    @property
    def sort_key(self) -> Tuple[str, int, int, str]:
        return (self.path, self.line, self.column, self.rule_id)

    def to_dict(self) -> Dict[str, object]:
        return {
            "rule": self.rule_id,
            "message": self.message,
            "path": self.path,
            "line": self.line,
            "column": self.column,
            "severity": self.severity.value,
        }


@dataclass
class LintReport:
    """Aggregated result of a lint run.

    Attributes:
        violations: All violations, kept sorted by location
        files_checked: Paths of the files that were linted
        suppressed_count: Violations hidden by inline ``vwl-disable`` comments
    """

    violations: List[Violation] = field(default_factory=list)
    files_checked: List[str] = field(default_factory=list)
    suppressed_count: int = 0

    def add(self, violation: Violation) -> None:
        self.violations.append(violation)

    def extend(self, violations: Iterable[Violation]) -> None:
        self.violations.extend(violations)

    def merge(self, other: "LintReport") -> None:
        """Fold another report into this one."""
        self.violations.extend(other.violations)
        self.files_checked.extend(other.files_checked)
        self.suppressed_count += other.suppressed_count

    def finalize(self) -> "LintReport":
        """Sort violations and deduplicate file paths."""
        self.violations.sort(key=lambda v: v.sort_key)
        self.files_checked = sorted(set(self.files_checked))
        return self

    def count(self, severity: Severity) -> int:
        return sum(1 for v in self.violations if v.severity == severity)

    @property
    def error_count(self) -> int:
        return self.count(Severity.ERROR)

    @property
    def warning_count(self) -> int:
        return self.count(Severity.WARNING)

    @property
    def info_count(self) -> int:
        return self.count(Severity.INFO)

    @property
    def has_errors(self) -> bool:
        return self.error_count > 0

    def by_rule(self) -> Dict[str, int]:
        """Count violations per rule id, sorted by id."""
        counts = Counter(v.rule_id for v in self.violations)
        return dict(sorted(counts.items()))

    def by_file(self) -> Dict[str, List[Violation]]:
        """Group violations by file path, preserving location order."""
        grouped: Dict[str, List[Violation]] = {}
        for violation in sorted(self.violations, key=lambda v: v.sort_key):
            grouped.setdefault(violation.path, []).append(violation)
        return grouped

    def exit_code(self, fail_on: Severity = Severity.ERROR) -> int:
        """Return 1 when any violation is at or above ``fail_on``, else 0."""
        if fail_on == Severity.OFF:
            return 0
        if any(v.severity.at_least(fail_on) for v in self.violations):
            return 1
        return 0

    def summary(self) -> Dict[str, int]:
        return {
            "files": len(self.files_checked),
            "errors": self.error_count,
            "warnings": self.warning_count,
            "info": self.info_count,
            "suppressed": self.suppressed_count,
        }
