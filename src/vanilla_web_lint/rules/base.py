"""Base class and context objects shared by all lint rules."""

from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath
from typing import Any, Dict, FrozenSet, Iterable, List, Mapping, Optional, Tuple

from ..constraints import RuleOption
from ..errors import InvalidRuleOptionError, VanillaLintError
from ..parsers import Document, FileType
from ..report import Severity, Violation


@dataclass
class RuleContext:
    """Per-run information handed to a rule.

    Attributes:
        path: Display path used in reported violations
        severity: Effective severity of the rule
        options: Validated rule options, defaults filled in
        root: Project root for project-level rules
    """

    path: str
    severity: Severity
    options: Dict[str, Any] = field(default_factory=dict)
    root: Optional[Path] = None


@dataclass(frozen=True)
class ProjectFile:
    """A file discovered under a project root."""

    path: Path
    relative: PurePosixPath
    file_type: Optional[FileType] = None


class Rule:
    """Base class for lint rules.

    Subclasses set the class attributes and implement :meth:`check` for
    per-file rules or :meth:`check_project` for project-level rules.
    """

    id: str = ""
    description: str = ""
    file_types: FrozenSet[FileType] = frozenset()
    default_severity: Severity = Severity.WARNING
    options: Tuple[RuleOption, ...] = ()

    @property
    def is_project_rule(self) -> bool:
        return not self.file_types

    def applies_to(self, file_type: FileType) -> bool:
        return file_type in self.file_types

    def default_options(self) -> Dict[str, Any]:
        return {opt.name: opt.default for opt in self.options}

    def resolve_options(self, overrides: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        """Merge configured options over the defaults and validate them.

        Args:
            overrides: Option values from configuration

        Returns:
            Complete option mapping

        Raises:
            InvalidRuleOptionError: If an option is unknown or fails validation
        """
        resolved = self.default_options()
        known = {opt.name: opt for opt in self.options}
        for name, value in (overrides or {}).items():
            option = known.get(name)
            if option is None:
                available = ", ".join(sorted(known)) or "none"
                raise InvalidRuleOptionError(
                    f"Unknown option '{name}' for rule '{self.id}'. Available options: {available}",
                    rule_id=self.id,
                    option=name,
                    value=value,
                )
            try:
                option.constraint.validate(name, value)
            except VanillaLintError as e:
                raise InvalidRuleOptionError(
                    f"Rule '{self.id}': {e}",
                    rule_id=self.id,
                    option=name,
                    value=value,
                ) from e
            resolved[name] = value
        return resolved

    def violation(
        self,
        context: RuleContext,
        message: str,
        line: int = 0,
        column: int = 0,
    ) -> Violation:
        return Violation(
            rule_id=self.id,
            message=message,
            path=context.path,
            line=line,
            column=column,
            severity=context.severity,
        )

    def check(self, document: Document, context: RuleContext) -> Iterable[Violation]:
        """Check a single parsed document."""
        raise NotImplementedError

    def check_project(self, files: List[ProjectFile], context: RuleContext) -> Iterable[Violation]:
        """Check the set of files discovered under a project root."""
        raise NotImplementedError

    def describe(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "description": self.description,
            "file_types": sorted(ft.value for ft in self.file_types) or ["project"],
            "default_severity": self.default_severity.value,
            "options": {
                opt.name: {"default": opt.default, "description": opt.description} for opt in self.options
            },
        }
