"""Rules for HTML documents: semantic markup and keeping code out of markup."""

import re
from typing import Iterable, List, Set

from ..constraints import RuleOption, StringListConstraint
from ..parsers import FileType, is_inline_javascript
from ..parsers.html import Element, HtmlDocument
from ..report import Severity, Violation
from .base import Rule, RuleContext

LANDMARK_TAGS = ("header", "footer", "main", "article", "section", "aside")

_TOKEN_SPLIT = re.compile(r"[-_]+")
_LIST_TAGS = frozenset({"ul", "ol", "li"})


def _describe(element: Element) -> str:
    """Render a short opening tag for messages."""
    parts = [element.tag]
    if element.id:
        parts.append(f'id="{element.id}"')
    if element.attrs.get("class", "").strip():
        parts.append(f'class="{" ".join(element.classes)}"')
    return "<" + " ".join(parts) + ">"


def _wraps_only_links(element: Element) -> bool:
    """True when every element child is an anchor or a list of anchors."""
    if not element.children:
        return False
    for child in element.children:
        if child.tag == "a":
            continue
        if child.tag in _LIST_TAGS and _wraps_only_links(child):
            continue
        return False
    return True


class SemanticNavRule(Rule):
    id = "semantic-nav"
    description = "Navigation link groups must use the <nav> element instead of a generic container."
    file_types = frozenset({FileType.HTML})
    default_severity = Severity.ERROR
    options = (
        RuleOption(
            name="nav_tokens",
            constraint=StringListConstraint(
                allow_empty=False,
                description="Class or id words that mark a container as navigation",
            ),
            default=["nav", "navbar", "navigation", "menu"],
            description="Class or id words that mark a container as navigation",
        ),
    )

    def _is_nav_named(self, element: Element, tokens: Set[str]) -> bool:
        names = element.classes + ([element.id] if element.id else [])
        for name in names:
            words = set(_TOKEN_SPLIT.split(name.lower()))
            if words & tokens:
                return True
        return False

    def check(self, document: HtmlDocument, context: RuleContext) -> Iterable[Violation]:
        tokens = {t.lower() for t in context.options["nav_tokens"]}
        flagged: List[Element] = []
        for element in document.iter():
            if element.tag not in ("div", "ul"):
                continue
            if element.has_ancestor("nav"):
                continue
            if any(a in flagged for a in element.ancestors()):
                continue
            if self._is_nav_named(element, tokens) and _wraps_only_links(element):
                flagged.append(element)
                yield self.violation(
                    context,
                    f"{_describe(element)} wraps only links; use the <nav> element",
                    element.line,
                    element.column,
                )


class SemanticLandmarkRule(Rule):
    id = "semantic-landmark"
    description = "Page regions named header, footer, main, etc. must use the matching semantic element."
    file_types = frozenset({FileType.HTML})
    default_severity = Severity.WARNING

    def check(self, document: HtmlDocument, context: RuleContext) -> Iterable[Violation]:
        for element in document.iter():
            if element.tag != "div":
                continue
            names = [element.id.lower()] + [c.lower() for c in element.classes]
            landmark = next((tag for tag in LANDMARK_TAGS if tag in names), None)
            if landmark:
                yield self.violation(
                    context,
                    f"Use <{landmark}> instead of {_describe(element)}",
                    element.line,
                    element.column,
                )


class InlineStyleRule(Rule):
    id = "inline-style"
    description = "Styles belong in external stylesheets, not in style attributes or <style> blocks."
    file_types = frozenset({FileType.HTML})
    default_severity = Severity.ERROR

    def check(self, document: HtmlDocument, context: RuleContext) -> Iterable[Violation]:
        for element in document.iter():
            if element.tag == "style":
                yield self.violation(
                    context,
                    "Embedded <style> block; move the rules to an external stylesheet",
                    element.line,
                    element.column,
                )
            if element.has_attr("style"):
                yield self.violation(
                    context,
                    f"Inline style attribute on <{element.tag}>; use a class in a stylesheet",
                    element.line,
                    element.column,
                )


class InlineScriptRule(Rule):
    id = "inline-script"
    description = "JavaScript belongs in external files loaded with <script src>."
    file_types = frozenset({FileType.HTML})
    default_severity = Severity.ERROR

    def check(self, document: HtmlDocument, context: RuleContext) -> Iterable[Violation]:
        for element in document.find_all("script"):
            if is_inline_javascript(element) and element.text.strip():
                yield self.violation(
                    context,
                    "Inline <script> block; move the code to an external .js file",
                    element.line,
                    element.column,
                )


class InlineEventHandlerRule(Rule):
    id = "inline-event-handler"
    description = "Event handlers must be attached with addEventListener, not on* attributes."
    file_types = frozenset({FileType.HTML})
    default_severity = Severity.ERROR

    def check(self, document: HtmlDocument, context: RuleContext) -> Iterable[Violation]:
        for element in document.iter():
            for name in element.attrs:
                if name.startswith("on") and len(name) > 2 and name[2:].isalpha():
                    yield self.violation(
                        context,
                        f"Inline event handler '{name}' on <{element.tag}>; use addEventListener in a script file",
                        element.line,
                        element.column,
                    )


class ImgAltRule(Rule):
    id = "img-alt"
    description = "Images must have an alt attribute (empty for decorative images)."
    file_types = frozenset({FileType.HTML})
    default_severity = Severity.ERROR

    def check(self, document: HtmlDocument, context: RuleContext) -> Iterable[Violation]:
        for element in document.find_all("img"):
            if not element.has_attr("alt"):
                src = element.attrs.get("src", "")
                label = f" '{src}'" if src else ""
                yield self.violation(
                    context,
                    f"Image{label} has no alt attribute",
                    element.line,
                    element.column,
                )


class HtmlLangRule(Rule):
    id = "html-lang"
    description = "The <html> element must declare the page language."
    file_types = frozenset({FileType.HTML})
    default_severity = Severity.WARNING

    def check(self, document: HtmlDocument, context: RuleContext) -> Iterable[Violation]:
        html = document.find("html")
        if html is not None and not html.attrs.get("lang", "").strip():
            yield self.violation(
                context,
                "<html> element has no lang attribute",
                html.line,
                html.column,
            )


class DoctypeRule(Rule):
    id = "doctype"
    description = "Full documents must start with <!DOCTYPE html>."
    file_types = frozenset({FileType.HTML})
    default_severity = Severity.WARNING

    def check(self, document: HtmlDocument, context: RuleContext) -> Iterable[Violation]:
        # fragments and templates without <html> are exempt
        if document.find("html") is None:
            return
        head = document.source.lstrip("\ufeff \t\r\n")
        if not re.match(r"<!doctype\s+html\s*>", head, re.IGNORECASE):
            found = f" (found '{document.doctype}')" if document.doctype else ""
            yield self.violation(
                context,
                f"Document does not start with <!DOCTYPE html>{found}",
                1,
                1,
            )


HTML_RULES = (
    SemanticNavRule,
    SemanticLandmarkRule,
    InlineStyleRule,
    InlineScriptRule,
    InlineEventHandlerRule,
    ImgAltRule,
    HtmlLangRule,
    DoctypeRule,
)
