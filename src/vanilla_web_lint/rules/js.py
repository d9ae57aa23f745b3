"""Rules for JavaScript sources."""

from typing import Iterable

from ..constraints import BooleanConstraint, RuleOption
from ..parsers import FileType
from ..parsers.js import Script
from ..report import Severity, Violation
from .base import Rule, RuleContext


class NoVarRule(Rule):
    id = "no-var"
    description = "Declare variables with let or const, never var."
    file_types = frozenset({FileType.JS})
    default_severity = Severity.ERROR

    def check(self, document: Script, context: RuleContext) -> Iterable[Violation]:
        for node in document.find("variable_declaration", "for_in_statement"):
            if node.type == "for_in_statement":
                # for (var key in object)
                kind = node.child_by_field_name("kind")
                if kind is None or kind.type != "var":
                    continue
                node = kind
            line, column = document.position(node)
            yield self.violation(context, "Use 'let' or 'const' instead of 'var'", line, column)


class StrictEqualityRule(Rule):
    id = "strict-equality"
    description = "Compare with === and !== instead of == and !=."
    file_types = frozenset({FileType.JS})
    default_severity = Severity.ERROR
    options = (
        RuleOption(
            name="allow_null",
            constraint=BooleanConstraint(description="Allow '== null' to test for null or undefined"),
            default=False,
            description="Allow '== null' to test for null or undefined",
        ),
    )

    def check(self, document: Script, context: RuleContext) -> Iterable[Violation]:
        allow_null = context.options["allow_null"]
        for node in document.find("binary_expression"):
            operator = node.child_by_field_name("operator")
            if operator is None or operator.type not in ("==", "!="):
                continue
            operands = (node.child_by_field_name("left"), node.child_by_field_name("right"))
            if allow_null and any(o is not None and o.type == "null" for o in operands):
                continue
            line, column = document.position(operator)
            yield self.violation(context, f"Use '{operator.type}=' instead of '{operator.type}'", line, column)


class NoDocumentWriteRule(Rule):
    id = "no-document-write"
    description = "Build DOM nodes instead of calling document.write."
    file_types = frozenset({FileType.JS})
    default_severity = Severity.ERROR

    def check(self, document: Script, context: RuleContext) -> Iterable[Violation]:
        for node in document.find("member_expression"):
            obj = node.child_by_field_name("object")
            prop = node.child_by_field_name("property")
            if obj is None or prop is None or obj.type != "identifier":
                continue
            name = document.text(prop)
            if document.text(obj) == "document" and name in ("write", "writeln"):
                line, column = document.position(obj)
                yield self.violation(
                    context,
                    f"Avoid document.{name}(); create elements with the DOM API",
                    line,
                    column,
                )


JS_RULES = (NoVarRule, StrictEqualityRule, NoDocumentWriteRule)
