"""HTML parsing on the tree-sitter html grammar.

The syntax tree is turned into a lightweight element tree. The grammar
recovers the way browsers do: void elements take no children, implied end
tags close ``<li>``, ``<p>`` and friends, unclosed elements close at end of
input and stray end tags are dropped.
"""

from dataclasses import dataclass, field
from html import unescape
from typing import Dict, Iterator, List, Optional

from tree_sitter import Node

from ..logging import LogEvent, log_debug
from .syntax_tree import SyntaxTree, child_of_type

_ELEMENT_NODES = frozenset({"element", "script_element", "style_element"})
_RAW_TEXT_NODES = frozenset({"script_element", "style_element"})
_TAG_NODES = frozenset({"start_tag", "self_closing_tag"})


@dataclass(eq=False)
class Element:
    """An element node in the parsed tree."""

    tag: str
    attrs: Dict[str, str] = field(default_factory=dict)
    line: int = 0
    column: int = 0
    parent: Optional["Element"] = field(default=None, repr=False)
    children: List["Element"] = field(default_factory=list, repr=False)
    text: str = ""
    # line where raw text content starts (used for <style> and <script>)
    text_line: int = 0

    @property
    def classes(self) -> List[str]:
        return self.attrs.get("class", "").split()

    @property
    def id(self) -> str:
        return self.attrs.get("id", "").strip()

    def has_attr(self, name: str) -> bool:
        return name in self.attrs

    def ancestors(self) -> Iterator["Element"]:
        node = self.parent
        while node is not None and node.tag != "#document":
            yield node
            node = node.parent

    def has_ancestor(self, tag: str) -> bool:
        return any(a.tag == tag for a in self.ancestors())

    def iter(self) -> Iterator["Element"]:
        """Walk descendants depth-first in document order."""
        for child in self.children:
            yield child
            yield from child.iter()


@dataclass
class HtmlComment:
    text: str
    line: int


@dataclass
class HtmlDocument:
    """Parsed HTML file."""

    root: Element
    source: str
    path: Optional[str] = None
    doctype: Optional[str] = None
    comments: List[HtmlComment] = field(default_factory=list)

    @property
    def lines(self) -> List[str]:
        return self.source.splitlines()

    def iter(self) -> Iterator[Element]:
        return self.root.iter()

    def find_all(self, tag: str) -> List[Element]:
        tag = tag.lower()
        return [el for el in self.iter() if el.tag == tag]

    def find(self, tag: str) -> Optional[Element]:
        tag = tag.lower()
        return next((el for el in self.iter() if el.tag == tag), None)


class _TreeBuilder:
    def __init__(self, tree: SyntaxTree, path: Optional[str]) -> None:
        self.tree = tree
        self.path = path
        self.root = Element(tag="#document", line=1, column=1)

    def build(self) -> HtmlDocument:
        self.visit(self.tree.root.children, self.root)
        doctype = next(iter(self.tree.find_by_type("doctype")), None)
        comments = []
        for node in self.tree.find_by_type("comment"):
            body = self.tree.text(node)
            body = body[4:-3] if body.endswith("-->") and len(body) >= 7 else body[4:]
            comments.append(HtmlComment(text=body, line=self.tree.line(node)))
        return HtmlDocument(
            root=self.root,
            source=self.tree.source,
            path=self.path,
            doctype=self.tree.text(doctype)[2:-1].strip() if doctype is not None else None,
            comments=comments,
        )

    def visit(self, nodes: List[Node], parent: Element) -> None:
        pieces: List[str] = []
        for node in nodes:
            if node.type in _ELEMENT_NODES:
                self.visit_element(node, parent)
            elif node.type in _TAG_NODES:
                # a lone tag left over by error recovery
                self.open_element(node, node, parent)
            elif node.type in ("text", "entity"):
                pieces.append(unescape(self.tree.text(node)))
            elif node.type == "erroneous_end_tag":
                log_debug(
                    LogEvent.PARSE,
                    f"Ignoring stray end tag {self.tree.text(node)}",
                    path=self.path,
                    line=self.tree.line(node),
                )
            elif node.type == "ERROR":
                self.visit(node.children, parent)
        if pieces:
            parent.text = " ".join(([parent.text] if parent.text else []) + pieces)

    def visit_element(self, node: Node, parent: Element) -> None:
        tag_node = child_of_type(node, *_TAG_NODES)
        if tag_node is None:
            self.visit(node.children, parent)
            return
        element = self.open_element(node, tag_node, parent)
        end_tag = child_of_type(node, "end_tag")
        if node.type in _RAW_TEXT_NODES:
            stop = end_tag.start_byte if end_tag is not None else node.end_byte
            element.text = self.tree.slice(tag_node.end_byte, stop)
            element.text_line = self.tree.line_of_byte(tag_node.end_byte)
            return
        self.visit([c for c in node.children if c is not tag_node and c.type != "end_tag"], element)

    def open_element(self, node: Node, tag_node: Node, parent: Element) -> Element:
        name = child_of_type(tag_node, "tag_name")
        attrs: Dict[str, str] = {}
        for attribute in tag_node.named_children:
            if attribute.type != "attribute":
                continue
            attr_name = child_of_type(attribute, "attribute_name")
            if attr_name is None:
                continue
            # first occurrence of a repeated attribute wins
            attrs.setdefault(self.tree.text(attr_name).lower(), self.attribute_value(attribute))
        line, column = self.tree.position(node)
        element = Element(
            tag=self.tree.text(name).lower() if name is not None else "",
            attrs=attrs,
            line=line,
            column=column,
            parent=parent,
        )
        parent.children.append(element)
        return element

    def attribute_value(self, attribute: Node) -> str:
        value = child_of_type(attribute, "attribute_value", "quoted_attribute_value")
        if value is not None and value.type == "quoted_attribute_value":
            value = child_of_type(value, "attribute_value")
        return unescape(self.tree.text(value)) if value is not None else ""


def parse_html(source: str, path: Optional[str] = None) -> HtmlDocument:
    """Parse HTML source into an element tree.

    Args:
        source: HTML text
        path: Path used in log messages

    Returns:
        The parsed document
    """
    tree = SyntaxTree.parse(source, "html", path=path)
    if tree.has_error():
        log_debug(LogEvent.PARSE, "Recovered from HTML syntax errors", path=path, errors=len(tree.errors()))
    return _TreeBuilder(tree, path).build()
