"""Rule inspection commands for the vwl CLI."""

from typing import Any, Dict

import click

from ...config import LintConfig
from ...errors import RuleNotFoundError
from ...rules import Rule, RuleRegistry
from ..formatters import (
    create_console,
    format_json,
    format_rule_detail,
    format_rules_csv,
    format_rules_list_json,
    format_rules_table,
)
from ..utils import ExitCode, handle_error, load_cli_config, validate_format_support


def rule_row(rule: Rule, config: LintConfig) -> Dict[str, Any]:
    """Summarize a rule with its effective severity."""
    described = rule.describe()
    return {
        "id": rule.id,
        "description": rule.description,
        "file_types": described["file_types"],
        "severity": config.severity_for(rule).value,
        "default_severity": rule.default_severity.value,
    }


@click.group()
def rules() -> None:
    """List and inspect lint rules."""
    pass


@rules.command(name="list")
@click.pass_context
def list_rules(ctx: click.Context) -> None:
    """List every rule with its effective severity."""
    config = load_cli_config(ctx.obj)
    rows = [rule_row(rule, config) for rule in RuleRegistry.get_default().list_rules()]

    format_type = ctx.obj["format"]
    if format_type == "json":
        format_json(format_rules_list_json(rows))
    elif format_type == "csv":
        click.echo(format_rules_csv(rows))
    else:
        console = create_console(no_color=ctx.obj["no_color"])
        format_rules_table(rows, console)


@rules.command()
@click.argument("rule_id", type=str)
@click.pass_context
def show(ctx: click.Context, rule_id: str) -> None:
    """Show a rule's description, severity and options."""
    try:
        rule = RuleRegistry.get_default().get(rule_id)
    except RuleNotFoundError as e:
        handle_error(e, ExitCode.RULE_NOT_FOUND)
        return

    config = load_cli_config(ctx.obj)
    detail = rule.describe()
    detail["severity"] = config.severity_for(rule).value
    detail["effective_options"] = config.settings_for(rule).options

    try:
        format_type = validate_format_support(ctx.obj["format"], ["table", "json"], "rules show", ctx.obj)
    except click.BadParameter as e:
        handle_error(e, ExitCode.INVALID_USAGE)
        return

    if format_type == "json":
        format_json(detail)
    else:
        console = create_console(no_color=ctx.obj["no_color"])
        format_rule_detail(detail, console)
