"""BEM class-name rule, applied to HTML class attributes and CSS selectors."""

from typing import Iterable, Set

from ..constraints import RuleOption, StringListConstraint
from ..naming import DEFAULT_UTILITY_PREFIXES, bem_violation_reason, is_exempt
from ..parsers import Document, FileType
from ..parsers.css import Stylesheet
from ..parsers.html import HtmlDocument
from ..report import Severity, Violation
from .base import Rule, RuleContext


class BemClassNameRule(Rule):
    id = "bem-class-name"
    description = "Class names must follow BEM: block__element--modifier."
    file_types = frozenset({FileType.HTML, FileType.CSS})
    default_severity = Severity.WARNING
    options = (
        RuleOption(
            name="utility_prefixes",
            constraint=StringListConstraint(description="Class prefixes exempt from BEM (JS hooks, state classes)"),
            default=list(DEFAULT_UTILITY_PREFIXES),
            description="Class prefixes exempt from BEM (JS hooks, state classes)",
        ),
    )

    def check(self, document: Document, context: RuleContext) -> Iterable[Violation]:
        prefixes = context.options["utility_prefixes"]
        if isinstance(document, HtmlDocument):
            for element in document.iter():
                seen: Set[str] = set()
                for name in element.classes:
                    if name in seen or is_exempt(name, prefixes):
                        continue
                    seen.add(name)
                    reason = bem_violation_reason(name)
                    if reason:
                        yield self.violation(
                            context,
                            f"Class '{name}' is not BEM: {reason}",
                            element.line,
                            element.column,
                        )
        elif isinstance(document, Stylesheet):
            for rule in document.rules:
                seen = set()
                for name in rule.class_names:
                    if name in seen or is_exempt(name, prefixes):
                        continue
                    seen.add(name)
                    reason = bem_violation_reason(name)
                    if reason:
                        yield self.violation(
                            context,
                            f"Selector class '.{name}' is not BEM: {reason}",
                            rule.line,
                        )
