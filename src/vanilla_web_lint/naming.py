"""BEM (Block, Element, Modifier) class-name parsing.

A BEM class name has the shape ``block__element--modifier`` where the
element and modifier parts are optional. A modifier may carry a value,
separated by a single underscore: ``button--size_large``. Every part is made
of lowercase latin letters and digits joined by single hyphens, and starts
with a letter.
"""

import re
from dataclasses import dataclass
from typing import Optional, Sequence

DEFAULT_UTILITY_PREFIXES = ("js-", "is-", "has-")

_PART = r"[a-z][a-z0-9]*(?:-[a-z0-9]+)*"
_BEM_PATTERN = re.compile(
    rf"^(?P<block>{_PART})"
    rf"(?:__(?P<element>{_PART}))?"
    rf"(?:--(?P<modifier>{_PART})(?:_(?P<value>{_PART}))?)?$"
)
_CAMEL_CASE = re.compile(r"[a-z0-9][A-Z]")


@dataclass(frozen=True)
class BemName:
    """Parsed parts of a BEM class name."""

    block: str
    element: Optional[str] = None
    modifier: Optional[str] = None
    value: Optional[str] = None

    def __str__(self) -> str:
        name = self.block
        if self.element:
            name += f"__{self.element}"
        if self.modifier:
            name += f"--{self.modifier}"
            if self.value:
                name += f"_{self.value}"
        return name


def parse_bem(name: str) -> Optional[BemName]:
    """Parse a class name into BEM parts.

    Args:
        name: Class name without the leading dot

    Returns:
        The parsed name, or None if it does not follow BEM
    """
    match = _BEM_PATTERN.match(name)
    if match is None:
        return None
    return BemName(
        block=match.group("block"),
        element=match.group("element"),
        modifier=match.group("modifier"),
        value=match.group("value"),
    )


def is_bem(name: str) -> bool:
    return parse_bem(name) is not None


def is_exempt(name: str, utility_prefixes: Sequence[str] = DEFAULT_UTILITY_PREFIXES) -> bool:
    """Check whether a class name carries a utility prefix exempt from BEM."""
    return any(prefix and name.startswith(prefix) for prefix in utility_prefixes)


def bem_violation_reason(name: str) -> Optional[str]:
    """Explain why a class name is not valid BEM.

    Returns:
        A short human-readable reason, or None if the name is valid
    """
    if is_bem(name):
        return None
    if _CAMEL_CASE.search(name):
        return "uses camelCase"
    if any(ch.isupper() for ch in name):
        return "uses an uppercase letter"
    if name.count("__") > 1:
        return "repeats the element separator '__'"
    if name.count("--") > 1:
        return "repeats the modifier separator '--'"
    if "--" in name and "__" in name and name.index("--") < name.index("__"):
        return "places the modifier before the element"
    stripped = name.replace("__", "")
    if "_" in stripped and "--" not in name:
        return "uses underscores outside the element separator"
    if "---" in name or "___" in name:
        return "uses a malformed separator"
    if name[:1].isdigit() or name[:1] in ("-", "_"):
        return "does not start with a letter"
    if re.search(r"[^a-zA-Z0-9_-]", name):
        return "contains characters outside [a-z0-9-_]"
    return "does not match block__element--modifier"
