"""CSS parsing on the tree-sitter css grammar.

The syntax tree is reduced to what the lint rules need: style rules with
their selectors, class and id names and declarations, plus the at-rules
of the sheet. Rules inside ``@media`` and the other grouping at-rules are
kept and remember the at-rule that holds them.
"""

import re
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from tree_sitter import Node

from ..logging import LogEvent, log_debug
from .syntax_tree import SyntaxTree, child_of_type, named_children

# block at-rules whose body holds ordinary style rules
NESTING_AT_RULES = frozenset({"media", "supports", "layer", "container", "document", "scope"})

_AT_RULE_NODES = frozenset(
    {
        "at_rule",
        "charset_statement",
        "import_statement",
        "keyframes_statement",
        "media_statement",
        "namespace_statement",
        "scope_statement",
        "supports_statement",
    }
)
_IMPORTANT = re.compile(r"!\s*important\s*;?\s*$", re.IGNORECASE)


@dataclass
class Declaration:
    property: str
    value: str
    important: bool = False
    line: int = 0


@dataclass
class StyleRule:
    selectors: List[str]
    declarations: List[Declaration] = field(default_factory=list)
    line: int = 0
    at_rule: Optional[str] = None
    class_names: List[str] = field(default_factory=list)
    id_names: List[str] = field(default_factory=list)


@dataclass
class AtRule:
    name: str
    prelude: str
    line: int = 0
    has_block: bool = False


@dataclass
class CssComment:
    text: str
    line: int


@dataclass
class Stylesheet:
    """Parsed CSS source."""

    rules: List[StyleRule] = field(default_factory=list)
    at_rules: List[AtRule] = field(default_factory=list)
    comments: List[CssComment] = field(default_factory=list)
    path: Optional[str] = None

    def declarations(self) -> List[Tuple[StyleRule, Declaration]]:
        return [(rule, decl) for rule in self.rules for decl in rule.declarations]


def _squash(text: str) -> str:
    return " ".join(text.split())


class _SheetBuilder:
    def __init__(self, tree: SyntaxTree, path: Optional[str]) -> None:
        self.tree = tree
        self.sheet = Stylesheet(path=path)

    def build(self) -> Stylesheet:
        self.visit_items(self.tree.root, at_rule=None)
        for node in self.tree.find_by_type("comment"):
            body = self.tree.text(node)
            body = body[2:-2] if body.endswith("*/") and len(body) >= 4 else body[2:]
            self.sheet.comments.append(CssComment(text=body, line=self.tree.line(node)))
        return self.sheet

    def visit_items(self, parent: Node, at_rule: Optional[str]) -> None:
        for node in parent.named_children:
            if node.type == "rule_set":
                self.visit_rule_set(node, at_rule)
            elif node.type in _AT_RULE_NODES:
                self.visit_at_rule(node, at_rule)
            elif node.type == "ERROR":
                # recovered garbage may still hold complete rules
                self.visit_items(node, at_rule)

    def visit_rule_set(self, node: Node, at_rule: Optional[str]) -> None:
        selectors_node = child_of_type(node, "selectors")
        block = child_of_type(node, "block")
        if selectors_node is None:
            return
        rule = StyleRule(
            selectors=[_squash(self.tree.text(s)) for s in named_children(selectors_node)],
            line=self.tree.line(node),
            at_rule=at_rule,
        )
        for selector_node in self.tree.walk(selectors_node):
            if selector_node.type == "class_selector":
                name = child_of_type(selector_node, "class_name")
                if name is not None:
                    rule.class_names.append(self.tree.text(name))
            elif selector_node.type == "id_selector":
                name = child_of_type(selector_node, "id_name")
                if name is not None:
                    rule.id_names.append(self.tree.text(name))
        self.sheet.rules.append(rule)
        if block is None:
            return
        for item in block.named_children:
            if item.type == "declaration":
                rule.declarations.append(self.declaration(item))
            elif item.type == "ERROR" and child_of_type(item, "property_name") is not None:
                rule.declarations.append(self.declaration(item))
            elif item.type == "rule_set":
                self.visit_rule_set(item, at_rule)
            elif item.type in _AT_RULE_NODES:
                self.visit_at_rule(item, at_rule)

    def visit_at_rule(self, node: Node, parent: Optional[str]) -> None:
        keyword = node.children[0]
        name = self.tree.text(keyword).lstrip("@").lower()
        body = child_of_type(node, "block", "keyframe_block_list")
        end = next((c for c in node.children if c.type == ";"), body)
        prelude = _squash(self.tree.slice(keyword.end_byte, end.start_byte if end is not None else node.end_byte))
        self.sheet.at_rules.append(
            AtRule(name=name, prelude=prelude, line=self.tree.line(node), has_block=body is not None)
        )
        if body is None or body.type != "block" or name not in NESTING_AT_RULES:
            return
        context = f"@{name} {prelude}".strip()
        if parent:
            context = f"{parent} {context}"
        self.visit_items(body, context)

    def declaration(self, node: Node) -> Declaration:
        prop = child_of_type(node, "property_name")
        colon = child_of_type(node, ":")
        important = child_of_type(node, "important")
        value_start = colon.end_byte if colon is not None else node.start_byte
        value_end = important.start_byte if important is not None else node.end_byte
        value = self.tree.slice(value_start, value_end).strip().rstrip(";").strip()
        flagged = important is not None
        if not flagged and _IMPORTANT.search(value):
            flagged = True
            value = _IMPORTANT.sub("", value).rstrip()
        return Declaration(
            property=self.tree.text(prop).lower() if prop is not None else "",
            value=value,
            important=flagged,
            line=self.tree.line(node),
        )


def parse_css(source: str, path: Optional[str] = None, line_offset: int = 0) -> Stylesheet:
    """Parse CSS source.

    Args:
        source: CSS text
        path: Path recorded on the stylesheet
        line_offset: Added to every reported line, for CSS embedded in HTML

    Returns:
        The parsed stylesheet
    """
    tree = SyntaxTree.parse(source, "css", path=path, line_offset=line_offset)
    if tree.has_error():
        log_debug(LogEvent.PARSE, "Recovered from CSS syntax errors", path=path, errors=len(tree.errors()))
    return _SheetBuilder(tree, path).build()
