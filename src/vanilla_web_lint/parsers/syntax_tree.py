"""Wrapper around a tree-sitter syntax tree.

Tree-sitter reports rows from 0 and columns in bytes. The wrapper turns
them into the 1-based line and character column used in violations, and
shifts lines by ``line_offset`` for code embedded in an HTML file.
"""

import re
from bisect import bisect_right
from typing import Iterator, List, Optional, Tuple

from tree_sitter import Node, Tree

from ..errors import ParseError
from .parser_registry import get_registry


class SyntaxTree:
    """A parsed source with position and text helpers."""

    def __init__(self, source: str, tree: Tree, line_offset: int = 0) -> None:
        self.source = source
        self.data = source.encode("utf-8")
        self.tree = tree
        self.line_offset = line_offset
        self._line_starts = [0] + [m.end() for m in re.finditer(b"\n", self.data)]

    @classmethod
    def parse(cls, source: str, language: str, path: Optional[str] = None, line_offset: int = 0) -> "SyntaxTree":
        """Parse source text with the grammar of ``language``.

        Raises:
            ParseError: If no grammar is available for the language
        """
        parser = get_registry().get_parser(language)
        if parser is None:
            raise ParseError(f"No {language} grammar available", path=path)
        return cls(source, parser.parse(source.encode("utf-8")), line_offset=line_offset)

    @property
    def root(self) -> Node:
        return self.tree.root_node

    def walk(self, node: Optional[Node] = None) -> Iterator[Node]:
        """Walk nodes depth-first in source order."""
        stack = [node if node is not None else self.root]
        while stack:
            current = stack.pop()
            yield current
            stack.extend(reversed(current.children))

    def find_by_type(self, *node_types: str, node: Optional[Node] = None) -> List[Node]:
        return [n for n in self.walk(node) if n.type in node_types]

    def text(self, node: Node) -> str:
        return self.slice(node.start_byte, node.end_byte)

    def slice(self, start_byte: int, end_byte: int) -> str:
        return self.data[start_byte:end_byte].decode("utf-8", errors="replace")

    def line_of_byte(self, offset: int) -> int:
        return bisect_right(self._line_starts, offset) + self.line_offset

    def position(self, node: Node) -> Tuple[int, int]:
        """Return the 1-based (line, column) where ``node`` starts."""
        row, byte_column = node.start_point
        start = self._line_starts[row] if row < len(self._line_starts) else node.start_byte - byte_column
        prefix = self.data[start : start + byte_column].decode("utf-8", errors="replace")
        return row + 1 + self.line_offset, len(prefix) + 1

    def line(self, node: Node) -> int:
        return node.start_point[0] + 1 + self.line_offset

    def has_error(self) -> bool:
        return self.root.has_error

    def errors(self) -> List[Node]:
        return [n for n in self.walk() if n.type == "ERROR" or n.is_missing]


def named_children(node: Node, skip: Tuple[str, ...] = ("comment",)) -> List[Node]:
    """Named children of a node, without comments."""
    return [child for child in node.named_children if child.type not in skip]


def child_of_type(node: Node, *node_types: str) -> Optional[Node]:
    return next((child for child in node.children if child.type in node_types), None)
