"""Configuration commands for the vwl CLI."""

from pathlib import Path

import click

from ...config_paths import (
    PROJECT_CONFIG_FILENAMES,
    USER_CONFIG_FILENAME,
    copy_default_config,
    copy_default_to_user_config,
    describe_config_sources,
    get_user_config_dir,
)
from ..formatters import (
    create_console,
    format_config_paths_json,
    format_config_paths_table,
    format_config_table,
    format_json,
)
from ..utils import ExitCode, handle_error, load_cli_config, validate_format_support


@click.group()
def config() -> None:
    """Inspect and create configuration files."""
    pass


@config.command()
@click.pass_context
def paths(ctx: click.Context) -> None:
    """Show where configuration is looked up and which file is active."""
    sources = describe_config_sources(ctx.obj.get("config_path"))

    format_type = validate_format_support(ctx.obj["format"], ["table", "json"], "config paths", ctx.obj)
    if format_type == "json":
        format_json(format_config_paths_json(sources))
    else:
        console = create_console(no_color=ctx.obj["no_color"])
        format_config_paths_table(sources, console)


@config.command()
@click.pass_context
def show(ctx: click.Context) -> None:
    """Show the effective configuration after merging over the defaults."""
    effective = load_cli_config(ctx.obj).to_dict()

    format_type = validate_format_support(ctx.obj["format"], ["table", "json"], "config show", ctx.obj)
    if format_type == "json":
        format_json(effective)
    else:
        console = create_console(no_color=ctx.obj["no_color"])
        format_config_table(effective, console)


@config.command()
@click.option("--yes", is_flag=True, help="Create the file without prompting (required for non-interactive use).")
@click.option(
    "--project",
    is_flag=True,
    help=f"Write {PROJECT_CONFIG_FILENAMES[0]} in the current directory instead of the user config directory.",
)
@click.pass_context
def init(ctx: click.Context, yes: bool = False, project: bool = False) -> None:
    """Create a config file from the bundled defaults.

    Existing files are never overwritten.
    """
    target = Path.cwd() / PROJECT_CONFIG_FILENAMES[0] if project else get_user_config_dir() / USER_CONFIG_FILENAME

    if target.exists():
        created = False
    else:
        if not yes and not click.confirm(f"Create {target}?"):
            click.echo("Config init cancelled.")
            return
        try:
            created = copy_default_config(target) if project else copy_default_to_user_config()
        except OSError as e:
            handle_error(e, ExitCode.CONFIG_ERROR)
            return

    if ctx.obj["format"] == "json":
        format_json({"path": str(target), "created": created})
        return

    console = create_console(no_color=ctx.obj["no_color"])
    if created:
        console.print(f"✅ [green]Created config file:[/green] {target}")
    else:
        console.print(f"[yellow]Config file already exists, left unchanged:[/yellow] {target}")
