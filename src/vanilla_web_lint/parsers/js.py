"""JavaScript parsing on the tree-sitter javascript grammar.

Rules walk the syntax tree, so regex literals, strings and template text
never look like code while expressions inside ``${...}`` substitutions
are linted like any other expression.
"""

from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Tuple

from tree_sitter import Node

from ..logging import LogEvent, log_debug
from .syntax_tree import SyntaxTree


@dataclass
class JsComment:
    text: str
    line: int
    column: int


@dataclass
class Script:
    """Parsed JavaScript source."""

    tree: SyntaxTree
    path: Optional[str] = None
    comments: List[JsComment] = field(default_factory=list)

    def find(self, *node_types: str) -> List[Node]:
        """Nodes of the given types in source order."""
        return self.tree.find_by_type(*node_types)

    def walk(self) -> Iterator[Node]:
        return self.tree.walk()

    def text(self, node: Node) -> str:
        return self.tree.text(node)

    def position(self, node: Node) -> Tuple[int, int]:
        return self.tree.position(node)


def parse_js(source: str, path: Optional[str] = None, line_offset: int = 0) -> Script:
    """Parse JavaScript source.

    Args:
        source: Script text
        path: Path recorded on the script
        line_offset: Added to every reported line, for scripts embedded in HTML

    Returns:
        The parsed script
    """
    tree = SyntaxTree.parse(source, "javascript", path=path, line_offset=line_offset)
    comments = []
    for node in tree.find_by_type("comment"):
        line, column = tree.position(node)
        comments.append(JsComment(text=tree.text(node), line=line, column=column))
    if tree.has_error():
        log_debug(LogEvent.PARSE, "Recovered from JavaScript syntax errors", path=path, errors=len(tree.errors()))
    return Script(tree=tree, path=path, comments=comments)
