"""Lint command for the vwl CLI."""

import sys
from pathlib import Path
from typing import Optional, Tuple

import click

from ...engine import Linter
from ...errors import VanillaLintError
from ...report import Severity
from ..formatters import (
    create_console,
    format_json,
    format_report_json,
    format_summary,
    format_violations_csv,
    format_violations_table,
)
from ..utils import handle_error, load_cli_config


@click.command()
@click.argument("paths", nargs=-1, type=click.Path(path_type=Path))
@click.option(
    "--fail-on",
    type=click.Choice([s.value for s in Severity], case_sensitive=False),
    help="Lowest severity that makes the run fail. Overrides 'fail_on' from the config.",
)
@click.option("--rule", "only_rules", multiple=True, help="Run only this rule (can be used multiple times).")
@click.option("--disable", "disabled_rules", multiple=True, help="Skip this rule (can be used multiple times).")
@click.pass_context
def check(
    ctx: click.Context,
    paths: Tuple[Path, ...],
    fail_on: Optional[str] = None,
    only_rules: Tuple[str, ...] = (),
    disabled_rules: Tuple[str, ...] = (),
) -> None:
    """Lint HTML, CSS and JavaScript files.

    PATHS may be files or directories and default to the current directory.
    Directories are searched recursively and also get the project layout checks.

    Exits with 1 when a violation reaches the fail-on severity.
    """
    config = load_cli_config(ctx.obj)
    try:
        config = config.restrict(only=only_rules or None, disable=disabled_rules)
    except VanillaLintError as e:
        handle_error(e)

    threshold = Severity.parse(fail_on) if fail_on else config.fail_on
    report = Linter(config).lint_paths(paths or (Path("."),))

    format_type = ctx.obj["format"]
    if format_type == "json":
        format_json(format_report_json(report, threshold))
    elif format_type == "csv":
        click.echo(format_violations_csv(report))
    else:
        console = create_console(no_color=ctx.obj["no_color"])
        format_violations_table(report, console)
        format_summary(report, threshold, console)

    sys.exit(report.exit_code(threshold))
