"""Registry of available lint rules."""

import threading
from typing import Dict, Iterable, List, Optional

from ..errors import DuplicateRuleError, RuleNotFoundError
from ..logging import LogEvent, log_debug
from ..parsers import FileType
from .base import Rule


class RuleRegistry:
    """Registry mapping rule ids to rule instances."""

    _default_instance: Optional["RuleRegistry"] = None
    _instance_lock = threading.RLock()

    @classmethod
    def get_default(cls) -> "RuleRegistry":
        """Get the shared registry holding every built-in rule.

        Returns:
            The default RuleRegistry instance
        """
        with cls._instance_lock:
            if cls._default_instance is None:
                from . import builtin_rules

                cls._default_instance = cls(builtin_rules())
            return cls._default_instance

    @classmethod
    def reset_default(cls) -> None:
        """Drop the shared registry so the next call rebuilds it."""
        with cls._instance_lock:
            cls._default_instance = None

    def __init__(self, rules: Optional[Iterable[Rule]] = None):
        """Initialize a registry.

        Args:
            rules: Rules to register up front
        """
        self._rules: Dict[str, Rule] = {}
        self._lock = threading.RLock()
        for rule in rules or ():
            self.register(rule)

    def register(self, rule: Rule) -> None:
        """Add a rule.

        Raises:
            DuplicateRuleError: If a rule with the same id is already registered
        """
        with self._lock:
            if rule.id in self._rules:
                raise DuplicateRuleError(f"Rule '{rule.id}' is already registered", rule_id=rule.id)
            self._rules[rule.id] = rule
        log_debug(LogEvent.RULE, f"Registered rule {rule.id}", rule=rule.id)

    def get(self, rule_id: str) -> Rule:
        """Look up a rule by id.

        Raises:
            RuleNotFoundError: If no rule has that id
        """
        rule = self._rules.get(rule_id)
        if rule is None:
            raise RuleNotFoundError(
                f"Unknown rule '{rule_id}'",
                rule_id=rule_id,
                available_rules=list(self._rules),
            )
        return rule

    def __contains__(self, rule_id: object) -> bool:
        return rule_id in self._rules

    def ids(self) -> List[str]:
        return sorted(self._rules)

    def list_rules(self) -> List[Rule]:
        return [self._rules[rule_id] for rule_id in self.ids()]

    def rules_for(self, file_type: FileType) -> List[Rule]:
        return [rule for rule in self.list_rules() if rule.applies_to(file_type)]

    def project_rules(self) -> List[Rule]:
        return [rule for rule in self.list_rules() if rule.is_project_rule]
