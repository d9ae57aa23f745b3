"""Rich table formatter for CLI output."""

import sys
from typing import Any, Dict, List, Optional, TextIO

from rich.console import Console
from rich.table import Table
from rich.text import Text

from ...report import LintReport, Severity

SEVERITY_STYLES = {
    Severity.ERROR.value: "bold red",
    Severity.WARNING.value: "yellow",
    Severity.INFO.value: "cyan",
    Severity.OFF.value: "dim",
}


def create_console(output: Optional[TextIO] = None, no_color: bool = False) -> Console:
    """Create a Rich console instance.

    Args:
        output: Output stream (defaults to stdout)
        no_color: Disable color output

    Returns:
        Console instance
    """
    if output is None:
        output = sys.stdout

    return Console(file=output, no_color=no_color)


def _severity_text(severity: str) -> Text:
    return Text(severity, style=SEVERITY_STYLES.get(severity, ""))


def _format_option_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return ", ".join(str(v) for v in value) or "[]"
    return str(value)


def format_violations_table(report: LintReport, console: Optional[Console] = None) -> None:
    """Print violations grouped by file.

    Args:
        report: Finished lint report
        console: Rich console (will create if None)
    """
    if console is None:
        console = create_console()

    for path, violations in report.by_file().items():
        table = Table(title=path, title_justify="left", show_header=True, header_style="bold magenta")
        table.add_column("Line", justify="right", no_wrap=True)
        table.add_column("Col", justify="right", no_wrap=True)
        table.add_column("Severity", no_wrap=True)
        table.add_column("Rule", style="cyan", no_wrap=True)
        table.add_column("Message")

        for violation in violations:
            table.add_row(
                str(violation.line) if violation.line else "-",
                str(violation.column) if violation.column else "-",
                _severity_text(violation.severity.value),
                violation.rule_id,
                violation.message,
            )
        console.print(table)


def format_summary(report: LintReport, fail_on: Severity, console: Optional[Console] = None) -> None:
    """Print the one-line run summary."""
    if console is None:
        console = create_console()

    summary = report.summary()
    counts = (
        f"{summary['files']} files checked, "
        f"{summary['errors']} errors, {summary['warnings']} warnings, {summary['info']} info"
    )
    if summary["suppressed"]:
        counts += f", {summary['suppressed']} suppressed"

    if report.exit_code(fail_on) == 0:
        if report.violations:
            console.print(f"[green]Passed[/green] (fail-on: {fail_on.value}): {counts}")
        else:
            console.print(f"✅ [green]No problems found:[/green] {counts}")
    else:
        console.print(f"❌ [red]Failed[/red] (fail-on: {fail_on.value}): {counts}")


def format_rules_table(rules: List[Dict[str, Any]], console: Optional[Console] = None) -> None:
    """Format the rule listing as a Rich table.

    Args:
        rules: Rule rows with id, file types, severities and description
        console: Rich console (will create if None)
    """
    if console is None:
        console = create_console()

    table = Table(title="Lint Rules", show_header=True, header_style="bold magenta")
    table.add_column("Rule", style="cyan", no_wrap=True)
    table.add_column("Files", no_wrap=True)
    table.add_column("Severity", no_wrap=True)
    table.add_column("Description")

    for rule in sorted(rules, key=lambda r: r["id"]):
        table.add_row(
            rule["id"],
            ", ".join(rule["file_types"]),
            _severity_text(rule["severity"]),
            rule["description"],
        )

    console.print(table)


def format_rule_detail(rule: Dict[str, Any], console: Optional[Console] = None) -> None:
    """Print one rule with its options.

    Args:
        rule: Rule description with effective severity and options
        console: Rich console (will create if None)
    """
    if console is None:
        console = create_console()

    console.print(f"[bold cyan]{rule['id']}[/bold cyan]")
    console.print(rule["description"])
    console.print()
    console.print(f"[bold]Files:[/bold] {', '.join(rule['file_types'])}")
    console.print(f"[bold]Default severity:[/bold] {rule['default_severity']}")
    console.print("[bold]Effective severity:[/bold] ", _severity_text(rule["severity"]))

    options = rule.get("options", {})
    if not options:
        console.print("[dim]No options[/dim]")
        return

    table = Table(title="Options", show_header=True, header_style="bold magenta")
    table.add_column("Option", style="cyan", no_wrap=True)
    table.add_column("Value")
    table.add_column("Default", style="dim")
    table.add_column("Description")

    effective = rule.get("effective_options", {})
    for name, info in sorted(options.items()):
        table.add_row(
            name,
            _format_option_value(effective.get(name, info["default"])),
            _format_option_value(info["default"]),
            info.get("description", ""),
        )
    console.print(table)


def format_config_paths_table(sources: List[Dict[str, Any]], console: Optional[Console] = None) -> None:
    """Format config source resolution as a Rich table.

    Args:
        sources: Entries from ``describe_config_sources`` in precedence order
        console: Rich console (will create if None)
    """
    if console is None:
        console = create_console()

    table = Table(title="Config Sources", show_header=True, header_style="bold magenta")
    table.add_column("#", justify="right")
    table.add_column("Source", style="yellow")
    table.add_column("Path", style="dim")
    table.add_column("Exists", justify="center")
    table.add_column("Active", justify="center")

    for position, source in enumerate(sources, start=1):
        exists = source.get("exists", False)
        active = source.get("active", False)
        table.add_row(
            str(position),
            source["source"],
            source.get("path") or "[dim]<not set>[/dim]",
            Text("✓" if exists else "✗", style="green" if exists else "red"),
            Text("✓ Active" if active else "", style="bold green"),
        )

    console.print(table)


def format_config_table(config: Dict[str, Any], console: Optional[Console] = None) -> None:
    """Print the effective configuration.

    Args:
        config: Output of ``LintConfig.to_dict``
        console: Rich console (will create if None)
    """
    if console is None:
        console = create_console()

    console.print(f"[bold]Config file:[/bold] {config.get('path') or 'N/A'} ({config.get('source')})")
    console.print(f"[bold]Fail on:[/bold] {config['fail_on']}")
    console.print(f"[bold]Ignore:[/bold] {', '.join(config['ignore']) or '[dim]<none>[/dim]'}")
    console.print()

    table = Table(title="Rules", show_header=True, header_style="bold magenta")
    table.add_column("Rule", style="cyan", no_wrap=True)
    table.add_column("Severity", no_wrap=True)
    table.add_column("Options")

    for rule_id, settings in sorted(config["rules"].items()):
        options = ", ".join(f"{k}={_format_option_value(v)}" for k, v in sorted(settings["options"].items()))
        table.add_row(rule_id, _severity_text(settings["severity"]), options or "[dim]-[/dim]")

    console.print(table)
