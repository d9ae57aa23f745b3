"""Registry of tree-sitter parsers for the supported languages."""

import threading
from typing import Dict, List, Optional

from tree_sitter import Language, Parser
from tree_sitter_language_pack import get_language

from ..logging import LogEvent, log_debug, log_warning


class ParserRegistry:
    """Loads tree-sitter grammars and hands out cached parsers.

    Grammars come from ``tree-sitter-language-pack``; one parser is built
    per language on first use.
    """

    def __init__(self) -> None:
        self._languages: Dict[str, Language] = {}
        self._parsers: Dict[str, Parser] = {}
        self._lock = threading.Lock()
        self._setup_languages()

    def _register_language(self, name: str, aliases: Optional[List[str]] = None) -> None:
        """Load a grammar and register it under its name and aliases."""
        try:
            language = get_language(name)
        except Exception as e:
            log_warning(LogEvent.PARSE, f"Failed to load {name} grammar: {e}", language=name)
            return
        for key in [name, *(aliases or [])]:
            self._languages[key] = language
        log_debug(LogEvent.PARSE, f"Loaded {name} grammar", language=name, aliases=aliases or [])

    def _setup_languages(self) -> None:
        self._register_language("html", ["htm"])
        self._register_language("css")
        self._register_language("javascript", ["js", "mjs"])

    def get_parser(self, language: str) -> Optional[Parser]:
        """Get the parser for a language, or None if its grammar is unavailable."""
        language = language.lower()
        with self._lock:
            parser = self._parsers.get(language)
            if parser is not None:
                return parser
            grammar = self._languages.get(language)
            if grammar is None:
                return None
            parser = Parser(grammar)
            self._parsers[language] = parser
            return parser

    def supports_language(self, language: str) -> bool:
        return language.lower() in self._languages


_registry: Optional[ParserRegistry] = None
_registry_lock = threading.Lock()


def get_registry() -> ParserRegistry:
    """Get the process-wide parser registry."""
    global _registry
    with _registry_lock:
        if _registry is None:
            _registry = ParserRegistry()
        return _registry
