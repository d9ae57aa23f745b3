"""Rules for stylesheets."""

from typing import Iterable, Set

from ..constraints import NumericConstraint, RuleOption
from ..parsers import FileType
from ..parsers.css import Stylesheet
from ..report import Severity, Violation
from .base import Rule, RuleContext


class NoIdSelectorRule(Rule):
    id = "no-id-selector"
    description = "Style with classes; ids are for anchors and scripting."
    file_types = frozenset({FileType.CSS})
    default_severity = Severity.WARNING

    def check(self, document: Stylesheet, context: RuleContext) -> Iterable[Violation]:
        for rule in document.rules:
            seen: Set[str] = set()
            for name in rule.id_names:
                if name in seen:
                    continue
                seen.add(name)
                yield self.violation(
                    context,
                    f"ID selector '#{name}' used for styling; use a class",
                    rule.line,
                )


class NoImportantRule(Rule):
    id = "no-important"
    description = "Avoid !important; fix the selector specificity instead."
    file_types = frozenset({FileType.CSS})
    default_severity = Severity.WARNING
    options = (
        RuleOption(
            name="max_allowed",
            constraint=NumericConstraint(
                min_value=0,
                allow_float=False,
                description="Number of !important declarations tolerated per stylesheet",
            ),
            default=0,
            description="Number of !important declarations tolerated per stylesheet",
        ),
    )

    def check(self, document: Stylesheet, context: RuleContext) -> Iterable[Violation]:
        allowed = context.options["max_allowed"]
        count = 0
        for _, declaration in document.declarations():
            if not declaration.important:
                continue
            count += 1
            if count > allowed:
                yield self.violation(
                    context,
                    f"'{declaration.property}' uses !important",
                    declaration.line,
                )


CSS_RULES = (NoIdSelectorRule, NoImportantRule)
