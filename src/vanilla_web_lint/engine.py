"""File discovery and the lint driver.

The :class:`Linter` walks the given paths, parses every supported file,
runs the enabled rules over it (including CSS and JavaScript embedded in
HTML) and collects the results in a :class:`LintReport`.
"""

import fnmatch
import os
import re
import traceback
from pathlib import Path, PurePosixPath
from typing import Iterable, List, Optional, Set, Tuple, Union

from .config import LintConfig, RuleSettings
from .errors import ParseError
from .logging import LogEvent, log_debug, log_error, log_info
from .parsers import (
    Document,
    FileType,
    HtmlDocument,
    detect_file_type,
    document_file_type,
    embedded_documents,
    parse_document,
)
from .report import LintReport, Severity, Violation
from .rules import ProjectFile, Rule, RuleContext, RuleRegistry

PARSE_ERROR_RULE = "parse-error"
RULE_ERROR_RULE = "rule-error"

# rule ids reported by the engine itself; a bare `vwl-disable` never hides them
ENGINE_RULES = frozenset({PARSE_ERROR_RULE, RULE_ERROR_RULE})

_DISABLE = re.compile(r"\bvwl-disable(?![\w-])[ \t]*([a-z0-9][a-z0-9, \t-]*)?", re.IGNORECASE)
_RULE_ID = re.compile(r"^[a-z][a-z0-9-]*$")


def parse_suppressions(documents: Iterable[Document]) -> Tuple[bool, Set[str]]:
    """Collect ``vwl-disable`` directives from the comments of a file.

    Returns:
        Tuple of (all rules disabled, ids of disabled rules)
    """
    disable_all = False
    disabled: Set[str] = set()
    for document in documents:
        for text in (c.text for c in document.comments):
            for match in _DISABLE.finditer(text):
                ids = [i for i in re.split(r"[,\s]+", (match.group(1) or "").lower()) if _RULE_ID.match(i)]
                if ids:
                    disabled.update(ids)
                else:
                    disable_all = True
    return disable_all, disabled


class Linter:
    """Lint files and directories against the configured rules."""

    def __init__(
        self,
        config: Optional[LintConfig] = None,
        registry: Optional[RuleRegistry] = None,
        cwd: Optional[Path] = None,
    ):
        """Initialize the linter.

        Args:
            config: Effective configuration; defaults apply when omitted
            registry: Rules to run; the built-in registry when omitted
            cwd: Directory display paths are made relative to
        """
        self.config = config or LintConfig()
        self.registry = registry or RuleRegistry.get_default()
        self.cwd = (cwd or Path.cwd()).resolve()

    def _enabled(self, rules: Iterable[Rule]) -> List[Tuple[Rule, RuleSettings]]:
        enabled = []
        for rule in rules:
            settings = self.config.settings_for(rule)
            if settings.severity != Severity.OFF:
                enabled.append((rule, settings))
        return enabled

    def display_path(self, path: Path) -> str:
        """Path shown in reports: relative to the working directory when possible."""
        resolved = path.resolve()
        try:
            return resolved.relative_to(self.cwd).as_posix()
        except ValueError:
            return resolved.as_posix()

    def is_ignored(self, relative: PurePosixPath) -> bool:
        """Check a path against the ``ignore`` globs.

        A pattern matches either the whole relative path or any one segment.
        """
        posix = relative.as_posix()
        for pattern in self.config.ignore:
            if fnmatch.fnmatch(posix, pattern):
                return True
            if any(fnmatch.fnmatch(part, pattern) for part in relative.parts):
                return True
        return False

    def discover(self, root: Path) -> List[ProjectFile]:
        """List the non-ignored files under ``root`` in sorted order."""
        files: List[ProjectFile] = []
        for dirpath, dirnames, filenames in os.walk(root):
            rel_dir = PurePosixPath(Path(dirpath).relative_to(root).as_posix())
            kept = []
            for name in sorted(dirnames):
                if self.is_ignored(rel_dir / name):
                    log_debug(LogEvent.DISCOVERY, f"Skipping ignored directory {rel_dir / name}")
                else:
                    kept.append(name)
            dirnames[:] = kept
            for name in sorted(filenames):
                relative = rel_dir / name
                if self.is_ignored(relative):
                    log_debug(LogEvent.DISCOVERY, f"Skipping ignored file {relative}")
                    continue
                files.append(ProjectFile(path=Path(dirpath) / name, relative=relative, file_type=detect_file_type(name)))
        log_debug(LogEvent.DISCOVERY, f"Discovered {len(files)} files under {root}", root=str(root), count=len(files))
        return files

    def lint_paths(self, paths: Iterable[Union[str, Path]]) -> LintReport:
        """Lint files and directories.

        Directories are walked recursively and also get the project-level
        rules. A path that does not exist is reported as a parse error.

        Args:
            paths: Files or directories to lint

        Returns:
            Sorted report for every path
        """
        report = LintReport()
        for raw in paths:
            path = Path(raw)
            if path.is_dir():
                report.merge(self._lint_directory(path))
            elif path.is_file():
                display = self.display_path(path)
                if self.is_ignored(PurePosixPath(display)):
                    log_info(LogEvent.DISCOVERY, f"Skipping ignored file {display}", path=display)
                elif detect_file_type(path) is None:
                    log_debug(LogEvent.DISCOVERY, f"Skipping unsupported file {display}", path=display)
                else:
                    report.merge(self.lint_file(path))
            else:
                report.add(
                    Violation(
                        rule_id=PARSE_ERROR_RULE,
                        message="No such file or directory",
                        path=str(raw),
                        severity=Severity.ERROR,
                    )
                )
        report.finalize()
        log_info(LogEvent.REPORT, "Lint run finished", **report.summary())
        return report

    def _lint_directory(self, root: Path) -> LintReport:
        files = self.discover(root)
        report = LintReport()
        for item in files:
            if item.file_type is not None:
                report.merge(self.lint_file(item.path))
        report.extend(self._check_project(root, files))
        return report

    def _check_project(self, root: Path, files: List[ProjectFile]) -> List[Violation]:
        display_root = self.display_path(root)
        violations: List[Violation] = []
        for rule, settings in self._enabled(self.registry.project_rules()):
            context = RuleContext(path=display_root, severity=settings.severity, options=settings.options, root=root)
            try:
                violations.extend(rule.check_project(files, context))
            except Exception as e:
                violations.append(self._rule_failure(rule, display_root, e))
        return violations

    def read_source(self, path: Path) -> str:
        """Read a source file as UTF-8, dropping a byte-order mark.

        Raises:
            ParseError: If the file cannot be read or decoded
        """
        display = self.display_path(path)
        try:
            return path.read_text(encoding="utf-8-sig")
        except UnicodeDecodeError as e:
            raise ParseError(f"File is not valid UTF-8 ({e.reason} at byte {e.start})", path=display) from e
        except OSError as e:
            raise ParseError(f"Could not read file: {e.strerror or e}", path=display) from e

    def lint_file(self, path: Path) -> LintReport:
        """Lint a single file of a supported type."""
        display = self.display_path(path)
        file_type = detect_file_type(path)
        if file_type is None:
            log_debug(LogEvent.DISCOVERY, f"Skipping unsupported file {display}", path=display)
            return LintReport()

        try:
            source = self.read_source(path)
        except ParseError as e:
            log_error(LogEvent.PARSE, str(e), path=display)
            return LintReport(
                violations=[
                    Violation(
                        rule_id=PARSE_ERROR_RULE,
                        message=e.message,
                        path=display,
                        line=e.line or 0,
                        severity=Severity.ERROR,
                    )
                ],
                files_checked=[display],
            )
        return self.lint_source(source, file_type, path=display)

    def lint_source(self, source: str, file_type: FileType, path: str = "<string>") -> LintReport:
        """Lint source text held in memory.

        Args:
            source: File contents
            file_type: How to parse ``source``
            path: Path shown in violations

        Returns:
            Sorted report for this one file
        """
        report = LintReport(files_checked=[path])
        try:
            document = parse_document(source, file_type, path=path)
        except Exception as e:
            log_error(LogEvent.PARSE, f"Failed to parse {path}: {e}", path=path, traceback=traceback.format_exc())
            report.add(
                Violation(
                    rule_id=PARSE_ERROR_RULE,
                    message=f"Could not parse file: {e}",
                    path=path,
                    severity=Severity.ERROR,
                )
            )
            return report

        documents: List[Document] = [document]
        if isinstance(document, HtmlDocument):
            documents.extend(embedded_documents(document))

        violations: List[Violation] = []
        for doc in documents:
            violations.extend(self._check_document(doc, path))

        disable_all, disabled = parse_suppressions(documents)
        for violation in violations:
            suppressed = violation.rule_id in disabled or (disable_all and violation.rule_id not in ENGINE_RULES)
            if suppressed:
                report.suppressed_count += 1
            else:
                report.add(violation)

        log_debug(
            LogEvent.PARSE,
            f"Linted {path}",
            path=path,
            violations=len(report.violations),
            suppressed=report.suppressed_count,
        )
        return report.finalize()

    def _check_document(self, document: Document, path: str) -> List[Violation]:
        file_type = document_file_type(document)
        violations: List[Violation] = []
        for rule, settings in self._enabled(self.registry.rules_for(file_type)):
            context = RuleContext(path=path, severity=settings.severity, options=settings.options)
            try:
                violations.extend(rule.check(document, context))
            except Exception as e:
                violations.append(self._rule_failure(rule, path, e))
        return violations

    def _rule_failure(self, rule: Rule, path: str, error: Exception) -> Violation:
        log_error(
            LogEvent.RULE,
            f"Rule {rule.id} failed on {path}: {error}",
            rule=rule.id,
            path=path,
            traceback=traceback.format_exc(),
        )
        return Violation(
            rule_id=RULE_ERROR_RULE,
            message=f"Rule '{rule.id}' failed: {error}",
            path=path,
            severity=Severity.ERROR,
        )
