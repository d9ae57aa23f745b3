"""Parsers for the supported source file types."""

from enum import Enum
from pathlib import PurePath
from typing import List, Optional, Union

from .css import Stylesheet, parse_css
from .html import Element, HtmlDocument, parse_html
from .js import Script, parse_js

Document = Union[HtmlDocument, Stylesheet, Script]

# <script type> values that hold JavaScript
JS_SCRIPT_TYPES = frozenset(
    {
        "",
        "text/javascript",
        "application/javascript",
        "module",
        "text/ecmascript",
        "application/ecmascript",
    }
)


class FileType(str, Enum):
    """Source file types understood by the linter."""

    HTML = "html"
    CSS = "css"
    JS = "js"


_EXTENSIONS = {
    ".html": FileType.HTML,
    ".htm": FileType.HTML,
    ".css": FileType.CSS,
    ".js": FileType.JS,
    ".mjs": FileType.JS,
}


def detect_file_type(path: Union[str, PurePath]) -> Optional[FileType]:
    """Map a file path to its type by extension, or None if unsupported."""
    return _EXTENSIONS.get(PurePath(path).suffix.lower())


def parse_document(source: str, file_type: FileType, path: Optional[str] = None) -> Document:
    """Parse source text of the given type."""
    if file_type == FileType.HTML:
        return parse_html(source, path=path)
    if file_type == FileType.CSS:
        return parse_css(source, path=path)
    return parse_js(source, path=path)


def is_inline_javascript(element: Element) -> bool:
    """Check whether a ``<script>`` element carries inline JavaScript."""
    if element.tag != "script" or element.has_attr("src"):
        return False
    return element.attrs.get("type", "").strip().lower() in JS_SCRIPT_TYPES


def embedded_documents(document: HtmlDocument) -> List[Union[Stylesheet, Script]]:
    """Parse the ``<style>`` and inline ``<script>`` blocks of an HTML document.

    Line numbers of the returned documents refer to the HTML file.
    """
    embedded: List[Union[Stylesheet, Script]] = []
    for element in document.iter():
        if not element.text.strip():
            continue
        offset = max(element.text_line - 1, 0)
        if element.tag == "style":
            embedded.append(parse_css(element.text, path=document.path, line_offset=offset))
        elif is_inline_javascript(element):
            embedded.append(parse_js(element.text, path=document.path, line_offset=offset))
    return embedded


def document_file_type(document: Document) -> FileType:
    if isinstance(document, HtmlDocument):
        return FileType.HTML
    if isinstance(document, Stylesheet):
        return FileType.CSS
    return FileType.JS


__all__ = [
    "Document",
    "FileType",
    "HtmlDocument",
    "Script",
    "Stylesheet",
    "detect_file_type",
    "document_file_type",
    "embedded_documents",
    "is_inline_javascript",
    "parse_css",
    "parse_document",
    "parse_html",
    "parse_js",
]
