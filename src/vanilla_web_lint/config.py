"""Loading, merging and validating linter configuration.

Configuration is YAML. The bundled ``defaults/default.yml`` is always loaded
first and the resolved user or project file is merged over it, so a project
file only needs to list what it changes::

    fail_on: warning
    ignore:
      - "legacy/**"
    rules:
      inline-style: warning
      bem-class-name:
        options:
          utility_prefixes: ["js-", "is-", "u-"]
      no-var: off
"""

import copy
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

import yaml

from .config_paths import SOURCE_DEFAULT, get_default_config_path, resolve_config_path
from .config_result import ConfigResult
from .errors import InvalidConfigFormatError
from .logging import LogEvent, log_debug, log_error, log_info
from .report import Severity
from .rules import Rule, RuleRegistry

DEFAULT_IGNORE = ["node_modules", ".git", "dist", "vendor", "*.min.*"]

_TOP_LEVEL_KEYS = ("fail_on", "ignore", "rules")
_RULE_KEYS = ("severity", "options")


@dataclass
class RuleSettings:
    """Effective severity and options of one rule."""

    severity: Severity
    options: Dict[str, Any] = field(default_factory=dict)


@dataclass
class LintConfig:
    """Effective linter configuration.

    Attributes:
        fail_on: Lowest severity that makes a run fail
        ignore: Glob patterns of paths to skip
        rules: Settings per rule id; rules missing here use their defaults
        path: File the configuration was loaded from
        source: Where the file came from in the resolution order
    """

    fail_on: Severity = Severity.ERROR
    ignore: List[str] = field(default_factory=lambda: list(DEFAULT_IGNORE))
    rules: Dict[str, RuleSettings] = field(default_factory=dict)
    path: Optional[str] = None
    source: str = SOURCE_DEFAULT

    def settings_for(self, rule: Rule) -> RuleSettings:
        settings = self.rules.get(rule.id)
        if settings is None:
            return RuleSettings(severity=rule.default_severity, options=rule.default_options())
        return settings

    def severity_for(self, rule: Rule) -> Severity:
        return self.settings_for(rule).severity

    def is_enabled(self, rule: Rule) -> bool:
        return self.severity_for(rule) != Severity.OFF

    def restrict(
        self,
        only: Optional[Iterable[str]] = None,
        disable: Optional[Iterable[str]] = None,
        registry: Optional[RuleRegistry] = None,
    ) -> "LintConfig":
        """Return a copy with rules switched off by selection.

        Args:
            only: If given, every rule not listed is turned off
            disable: Rules to turn off
            registry: Registry used to validate the rule ids

        Raises:
            RuleNotFoundError: If a rule id is unknown
        """
        registry = registry or RuleRegistry.get_default()
        only_ids = {registry.get(rule_id).id for rule_id in only} if only else None
        disabled_ids = {registry.get(rule_id).id for rule_id in disable or ()}

        rules = copy.deepcopy(self.rules)
        for rule in registry.list_rules():
            off = (only_ids is not None and rule.id not in only_ids) or rule.id in disabled_ids
            if off:
                settings = rules.get(rule.id) or self.settings_for(rule)
                rules[rule.id] = RuleSettings(severity=Severity.OFF, options=dict(settings.options))
        return replace(self, rules=rules)

    def to_dict(self, registry: Optional[RuleRegistry] = None) -> Dict[str, Any]:
        registry = registry or RuleRegistry.get_default()
        return {
            "fail_on": self.fail_on.value,
            "ignore": list(self.ignore),
            "rules": {
                rule.id: {
                    "severity": self.severity_for(rule).value,
                    "options": dict(self.settings_for(rule).options),
                }
                for rule in registry.list_rules()
            },
            "path": self.path,
            "source": self.source,
        }


def read_config_file(path: Path) -> ConfigResult:
    """Read and parse a YAML config file without raising.

    Args:
        path: File to read

    Returns:
        ConfigResult describing the outcome
    """
    if not path.is_file():
        error_msg = f"Config file not found: {path}"
        log_error(LogEvent.CONFIG, error_msg, path=str(path))
        return ConfigResult(success=False, error=error_msg, path=str(path), missing=True)

    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        error_msg = f"Could not read config file {path}: {e}"
        log_error(LogEvent.CONFIG, error_msg, path=str(path))
        return ConfigResult(success=False, error=error_msg, exception=e, path=str(path))

    if not content.strip():
        log_debug(LogEvent.CONFIG, "Config file is empty", path=str(path))
        return ConfigResult(success=True, data={}, path=str(path))

    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        error_msg = f"YAML parsing error in {path}: {e}"
        log_error(LogEvent.CONFIG, error_msg, path=str(path))
        return ConfigResult(success=False, error=error_msg, exception=e, path=str(path))

    if data is None:
        return ConfigResult(success=True, data={}, path=str(path))

    if not isinstance(data, dict):
        error_msg = f"Invalid configuration format in {path}: expected mapping, got {type(data).__name__}"
        log_error(LogEvent.CONFIG, error_msg, path=str(path))
        return ConfigResult(success=False, error=error_msg, path=str(path))

    return ConfigResult(success=True, data=data, path=str(path))


def _normalize_rule_entry(rule_id: str, value: Any, path: Optional[str]) -> Dict[str, Any]:
    """Turn the accepted rule value shorthands into ``{severity, options}``."""
    if isinstance(value, bool):
        # YAML reads a bare `off` as False
        return {} if value else {"severity": Severity.OFF.value}
    if isinstance(value, str):
        return {"severity": value}
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise InvalidConfigFormatError(
            f"Rule '{rule_id}' must be a severity or a mapping, got {type(value).__name__}",
            path=path,
        )
    unknown = sorted(set(value) - set(_RULE_KEYS))
    if unknown:
        raise InvalidConfigFormatError(
            f"Rule '{rule_id}' has unknown keys: {', '.join(map(str, unknown))}",
            path=path,
        )
    entry: Dict[str, Any] = {}
    if "severity" in value:
        severity = value["severity"]
        entry["severity"] = Severity.OFF.value if severity is False else severity
    options = value.get("options")
    if options is not None:
        if not isinstance(options, dict):
            raise InvalidConfigFormatError(
                f"Options of rule '{rule_id}' must be a mapping, got {type(options).__name__}",
                path=path,
            )
        entry["options"] = dict(options)
    return entry


def _check_top_level_keys(data: Dict[str, Any], path: Optional[str]) -> None:
    unknown = sorted(set(map(str, data)) - set(_TOP_LEVEL_KEYS))
    if unknown:
        raise InvalidConfigFormatError(
            f"Unknown configuration keys: {', '.join(unknown)}. Allowed keys: {', '.join(_TOP_LEVEL_KEYS)}",
            path=path,
        )


def merge_config_data(base: Dict[str, Any], override: Dict[str, Any], path: Optional[str] = None) -> Dict[str, Any]:
    """Merge a user config mapping over the bundled defaults.

    ``fail_on`` is replaced, ``ignore`` patterns are appended and rule
    options are merged key by key.
    """
    for mapping in (base, override):
        _check_top_level_keys(mapping, path)

    merged: Dict[str, Any] = {
        "fail_on": base.get("fail_on", Severity.ERROR.value),
        "ignore": list(base.get("ignore") or []),
        "rules": {},
    }
    if "fail_on" in override:
        merged["fail_on"] = override["fail_on"]

    extra_ignore = override.get("ignore") or []
    if not isinstance(extra_ignore, list):
        raise InvalidConfigFormatError("'ignore' must be a list of glob patterns", path=path, expected_type="list")
    for pattern in extra_ignore:
        if pattern not in merged["ignore"]:
            merged["ignore"].append(pattern)

    for source in (base.get("rules") or {}, override.get("rules") or {}):
        if not isinstance(source, dict):
            raise InvalidConfigFormatError("'rules' must be a mapping", path=path)
        for rule_id, value in source.items():
            entry = _normalize_rule_entry(str(rule_id), value, path)
            current = merged["rules"].setdefault(str(rule_id), {})
            if "severity" in entry:
                current["severity"] = entry["severity"]
            if "options" in entry:
                current.setdefault("options", {}).update(entry["options"])
    return merged


def build_config(
    data: Dict[str, Any],
    registry: Optional[RuleRegistry] = None,
    path: Optional[str] = None,
    source: str = SOURCE_DEFAULT,
) -> LintConfig:
    """Validate a merged config mapping and build a LintConfig.

    Raises:
        InvalidConfigFormatError: If keys, severities or patterns are malformed
        RuleNotFoundError: If a rule id is unknown
        InvalidRuleOptionError: If a rule option fails validation
    """
    registry = registry or RuleRegistry.get_default()

    _check_top_level_keys(data, path)

    fail_on_value = data.get("fail_on", Severity.ERROR.value)
    if fail_on_value is False:
        fail_on_value = Severity.OFF.value
    try:
        fail_on = Severity.parse(fail_on_value)
    except InvalidConfigFormatError as e:
        raise InvalidConfigFormatError(f"fail_on: {e.message}", path=path, expected_type="str") from e

    ignore = data.get("ignore") or []
    if not isinstance(ignore, list) or not all(isinstance(p, str) for p in ignore):
        raise InvalidConfigFormatError("'ignore' must be a list of glob patterns", path=path, expected_type="list")

    rules_data = data.get("rules") or {}
    if not isinstance(rules_data, dict):
        raise InvalidConfigFormatError("'rules' must be a mapping", path=path)

    rules: Dict[str, RuleSettings] = {}
    for rule_id, value in rules_data.items():
        rule = registry.get(str(rule_id))
        entry = _normalize_rule_entry(rule.id, value, path)
        try:
            severity = Severity.parse(entry.get("severity", rule.default_severity.value))
        except InvalidConfigFormatError as e:
            raise InvalidConfigFormatError(f"Rule '{rule.id}': {e.message}", path=path, expected_type="str") from e
        rules[rule.id] = RuleSettings(severity=severity, options=rule.resolve_options(entry.get("options")))

    return LintConfig(fail_on=fail_on, ignore=list(ignore), rules=rules, path=path, source=source)


def load_config(
    path: Optional[str] = None,
    registry: Optional[RuleRegistry] = None,
    cwd: Optional[Path] = None,
) -> LintConfig:
    """Resolve, read and validate the effective configuration.

    Args:
        path: Explicit config file; must exist when given
        registry: Rule registry used for validation
        cwd: Directory to start the project config search from

    Returns:
        The effective configuration

    Raises:
        ConfigFileNotFoundError: If an explicit path does not exist
        InvalidConfigFormatError: If a file is not valid configuration
        RuleNotFoundError: If a configured rule id is unknown
        InvalidRuleOptionError: If a rule option fails validation
    """
    resolved, source = resolve_config_path(path, cwd)
    default_path = get_default_config_path()

    data = read_config_file(default_path).unwrap()
    if resolved.resolve() != default_path.resolve():
        data = merge_config_data(data, read_config_file(resolved).unwrap(), path=str(resolved))
    else:
        data = merge_config_data(data, {}, path=str(resolved))

    config = build_config(data, registry=registry, path=str(resolved), source=source)
    log_info(LogEvent.CONFIG, f"Loaded configuration from {resolved}", path=str(resolved), source=source)
    return config
