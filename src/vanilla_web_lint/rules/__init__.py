"""Lint rules and the rule registry."""

from typing import List

from .base import ProjectFile, Rule, RuleContext
from .css import CSS_RULES
from .html import HTML_RULES
from .js import JS_RULES
from .layout import LAYOUT_RULES
from .naming import BemClassNameRule
from .registry import RuleRegistry


def builtin_rules() -> List[Rule]:
    """Instantiate every built-in rule."""
    classes = [*HTML_RULES, BemClassNameRule, *CSS_RULES, *JS_RULES, *LAYOUT_RULES]
    return [cls() for cls in classes]


__all__ = [
    "ProjectFile",
    "Rule",
    "RuleContext",
    "RuleRegistry",
    "builtin_rules",
]
