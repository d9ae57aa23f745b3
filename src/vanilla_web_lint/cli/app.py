"""Main CLI application for vanilla-web-lint."""

from typing import Any, Optional

import click
import rich_click as rich_click

from .utils import resolve_format, resolve_log_level, setup_logging

# Configure rich-click
rich_click.rich_click.USE_RICH_MARKUP = True
rich_click.rich_click.USE_MARKDOWN = True
rich_click.rich_click.SHOW_ARGUMENTS = True
rich_click.rich_click.GROUP_ARGUMENTS_OPTIONS = True


def _print_version(ctx: click.Context, param: click.Parameter, value: Any) -> None:
    """Print the package version and exit."""
    if not value or ctx.resilient_parsing:
        return
    from .. import __version__

    click.echo(f"vwl version: {__version__}")
    ctx.exit()


@click.group()
@click.option(
    "--format",
    type=click.Choice(["table", "json", "csv"], case_sensitive=False),
    help="Output format. Defaults to 'table' for TTY, 'json' for non-TTY.",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    help="Config file to use instead of the project, user or bundled one.",
)
@click.option("--verbose", "-v", count=True, help="Increase verbosity (can be used multiple times).")
@click.option("--quiet", "-q", count=True, help="Decrease verbosity (can be used multiple times).")
@click.option("--debug", is_flag=True, help="Enable debug-level logging.")
@click.option("--no-color", is_flag=True, help="Disable color output.")
@click.option(
    "--version",
    is_flag=True,
    is_eager=True,
    expose_value=False,
    callback=_print_version,
    help="Print version information and exit.",
)
@click.pass_context
def app(
    ctx: click.Context,
    format: Optional[str] = None,
    config_path: Optional[str] = None,
    verbose: int = 0,
    quiet: int = 0,
    debug: bool = False,
    no_color: bool = False,
) -> None:
    """vanilla-web-lint - check framework-free web projects against a style guide.

    Checks semantic HTML, BEM class names, inline styles and scripts,
    modern JavaScript and the project's file layout.

    Examples:
      # Lint the current directory
      vwl check

      # Lint one page, failing on warnings too
      vwl check --fail-on warning index.html

      # Explain a rule
      vwl rules show semantic-nav

      # Start a project config file
      vwl config init --project --yes
    """
    ctx.ensure_object(dict)

    log_level = resolve_log_level(verbose, quiet, debug)
    setup_logging(log_level, no_color=no_color)

    ctx.obj.update(
        {
            "format": resolve_format(format),
            "format_explicit": format is not None,
            "config_path": config_path,
            "verbose": verbose,
            "quiet": quiet,
            "debug": debug,
            "no_color": no_color,
            "log_level": log_level,
        }
    )


# Import and register subcommands after the group exists
from .commands import check, config, rules  # noqa: E402

app.add_command(check.check)
app.add_command(rules.rules)
app.add_command(config.config)


if __name__ == "__main__":
    app()
