"""Project-level rule checking where files live and how they are named."""

import re
from pathlib import PurePosixPath
from typing import Dict, Iterable, List, Optional

from ..constraints import BooleanConstraint, EnumConstraint, PathSegmentConstraint, RuleOption
from ..parsers import FileType
from ..report import Severity, Violation
from .base import ProjectFile, Rule, RuleContext

IMAGE_EXTENSIONS = frozenset({".png", ".jpg", ".jpeg", ".gif", ".svg", ".webp", ".avif", ".ico"})

# files that conventionally sit at the project root
ROOT_FILES = frozenset({"favicon.ico", "apple-touch-icon.png"})

_FILENAME_PATTERNS: Dict[str, "re.Pattern[str]"] = {
    "kebab": re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$"),
    "snake": re.compile(r"^[a-z0-9]+(?:_[a-z0-9]+)*$"),
    "lower": re.compile(r"^[a-z0-9_-]+$"),
}


def _under(relative: PurePosixPath, directory: str) -> bool:
    prefix = directory.strip("/")
    return relative.as_posix().startswith(prefix + "/")


class FileLayoutRule(Rule):
    id = "file-layout"
    description = "Keep stylesheets, scripts and images in their own folders with lowercase hyphenated names."
    default_severity = Severity.WARNING
    options = (
        RuleOption(
            name="styles_dir",
            constraint=PathSegmentConstraint(description="Folder holding stylesheets"),
            default="css",
            description="Folder holding stylesheets",
        ),
        RuleOption(
            name="scripts_dir",
            constraint=PathSegmentConstraint(description="Folder holding scripts"),
            default="js",
            description="Folder holding scripts",
        ),
        RuleOption(
            name="images_dir",
            constraint=PathSegmentConstraint(description="Folder holding images"),
            default="img",
            description="Folder holding images",
        ),
        RuleOption(
            name="filename_case",
            constraint=EnumConstraint(
                ["kebab", "snake", "lower"],
                description="Naming convention for file names",
            ),
            default="kebab",
            description="Naming convention for file names",
        ),
        RuleOption(
            name="require_index",
            constraint=BooleanConstraint(description="Require index.html at the project root"),
            default=True,
            description="Require index.html at the project root",
        ),
    )

    def _expected_dir(self, item: ProjectFile, options: Dict[str, object]) -> Optional[str]:
        if item.file_type == FileType.CSS:
            return str(options["styles_dir"])
        if item.file_type == FileType.JS:
            return str(options["scripts_dir"])
        if item.relative.suffix.lower() in IMAGE_EXTENSIONS:
            if len(item.relative.parts) == 1 and item.relative.name.lower() in ROOT_FILES:
                return None
            return str(options["images_dir"])
        return None

    def _display(self, context: RuleContext, relative: PurePosixPath) -> str:
        base = context.path.rstrip("/")
        if base in ("", "."):
            return relative.as_posix()
        return f"{base}/{relative.as_posix()}"

    def check_project(self, files: List[ProjectFile], context: RuleContext) -> Iterable[Violation]:
        options = context.options
        pattern = _FILENAME_PATTERNS[str(options["filename_case"])]
        has_html = False
        has_index = False

        for item in files:
            relative = item.relative
            if item.file_type == FileType.HTML:
                has_html = True
                if len(relative.parts) == 1 and relative.name.lower() == "index.html":
                    has_index = True

            tracked = item.file_type is not None or relative.suffix.lower() in IMAGE_EXTENSIONS
            if not tracked:
                continue
            display = self._display(context, relative)

            expected = self._expected_dir(item, options)
            if expected and not _under(relative, expected):
                yield Violation(
                    rule_id=self.id,
                    message=f"'{relative.name}' should live under '{expected.strip('/')}/'",
                    path=display,
                    severity=context.severity,
                )

            # every dot-separated piece of the stem must follow the convention
            stem_parts = relative.name.split(".")[:-1] or [relative.name]
            if not all(pattern.match(part) for part in stem_parts):
                yield Violation(
                    rule_id=self.id,
                    message=f"File name '{relative.name}' is not {options['filename_case']}-case",
                    path=display,
                    severity=context.severity,
                )

        if options["require_index"] and has_html and not has_index:
            yield Violation(
                rule_id=self.id,
                message="Project root has no index.html",
                path=self._display(context, PurePosixPath("index.html")),
                severity=context.severity,
            )


LAYOUT_RULES = (FileLayoutRule,)
