"""Style-guide linter for framework-free HTML, CSS and JavaScript projects.

This package checks plain web projects against a set of conventions:
semantic HTML, BEM class names, no inline styles or scripts, modern
JavaScript and a predictable file layout.
"""

# Version of the package
try:
    from importlib.metadata import version as _version

    __version__ = _version("vanilla-web-lint")
except ImportError:
    raise ImportError(
        "Failed to determine package version. This package requires Python 3.8+ "
        "where importlib.metadata is available, or must be installed as a package."
    )

# Import main components for easier access
from .config import LintConfig, RuleSettings, load_config, read_config_file
from .engine import Linter
from .errors import (
    ConfigFileNotFoundError,
    ConfigurationError,
    DuplicateRuleError,
    InvalidConfigFormatError,
    InvalidRuleOptionError,
    ParseError,
    RuleError,
    RuleNotFoundError,
    VanillaLintError,
)
from .naming import is_bem, parse_bem
from .parsers import FileType, parse_css, parse_html, parse_js
from .report import LintReport, Severity, Violation
from .rules import Rule, RuleContext, RuleRegistry

# Define public API
__all__ = [
    # Linting
    "Linter",
    "LintReport",
    "Severity",
    "Violation",
    # Configuration
    "LintConfig",
    "RuleSettings",
    "load_config",
    "read_config_file",
    # Rules
    "Rule",
    "RuleContext",
    "RuleRegistry",
    # Parsing
    "FileType",
    "parse_html",
    "parse_css",
    "parse_js",
    "is_bem",
    "parse_bem",
    # Errors
    "VanillaLintError",
    "ConfigurationError",
    "ConfigFileNotFoundError",
    "InvalidConfigFormatError",
    "RuleError",
    "RuleNotFoundError",
    "DuplicateRuleError",
    "InvalidRuleOptionError",
    "ParseError",
    "__version__",
]
