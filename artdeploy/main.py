#!/usr/bin/env python3
"""artdeploy - Main entry point"""

import functools
import os
import sys

from rich.console import Console
from click.exceptions import ClickException, UsageError

# Rich-Click: colored CLI help
import rich_click as click

from artdeploy import __version__
from artdeploy.commands.deploy import DeployCommand
from artdeploy.options import RawOptions

click.rich_click.USE_RICH_MARKUP = True
click.rich_click.USE_MARKDOWN = False
click.rich_click.MAX_WIDTH = 100

# OPTIONS: Bold magenta, switches green
click.rich_click.STYLE_OPTION = "bold magenta"
click.rich_click.STYLE_SWITCH = "bold green"

# HEADERS and USAGE
click.rich_click.STYLE_HEADER_TEXT = "bold cyan"
click.rich_click.STYLE_USAGE = "bold yellow"
click.rich_click.STYLE_USAGE_COMMAND = "bold cyan"

# METAVARS: Yellow
click.rich_click.STYLE_METAVAR = "bold yellow"

# PANEL BORDERS: Cyan
click.rich_click.STYLE_OPTIONS_PANEL_BORDER = "cyan"
click.rich_click.ALIGN_ERRORS_PANEL = "left"
click.rich_click.ERRORS_EPILOGUE = ""

console = Console()


def handle_cli_errors(func):
    """Decorator to handle CLI errors gracefully."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except ClickException as e:
            e.show()
            sys.exit(e.exit_code)
        except KeyboardInterrupt:
            console.print("\n\n[yellow]⚠️  Operation cancelled by user[/yellow]")
            sys.exit(130)
        except Exception as e:
            console.print(f"\n[bold red]✗ Unexpected error:[/bold red] {e}\n")

            if os.environ.get("DEBUG") or os.environ.get("VERBOSE"):
                import traceback

                console.print("[dim]Traceback:[/dim]")
                traceback.print_exc()
            sys.exit(1)

    return wrapper


class ArtdeployCommand(click.RichCommand):
    """Top-level command whose usage errors exit with status 1."""

    def make_context(self, info_name, args, parent=None, **extra):
        try:
            return super().make_context(info_name, args, parent=parent, **extra)
        except UsageError as e:
            e.exit_code = 1
            raise


def show_usage(ctx: click.Context, _param, value: bool) -> None:
    """Print usage and exit non-zero."""
    if not value or ctx.resilient_parsing:
        return
    click.echo(ctx.get_help())
    ctx.exit(1)


@click.command(
    "artdeploy",
    cls=ArtdeployCommand,
    context_settings={"help_option_names": []},
)
@click.option(
    "-a",
    "--action",
    metavar="ACTION",
    help="start, stop, restart, status, remove or logs (default: start with clean)",
)
@click.option(
    "-d",
    "--data-dir",
    metavar="DIR",
    help="Root directory for persistent data (default: /data on Linux, ~/.artifactory on macOS)",
)
@click.option("-c", "--clean", is_flag=True, help="Remove the data directory (asks first)")
@click.option(
    "-f",
    "--force",
    is_flag=True,
    help="Do not ask before a clean requested with -c (the default start still asks)",
)
@click.option("-v", "--verbose", is_flag=True, help="Show all command output")
@click.option(
    "-h",
    "--help",
    is_flag=True,
    is_eager=True,
    expose_value=False,
    callback=show_usage,
    help="Show this message and exit",
)
@click.version_option(version=__version__, prog_name="artdeploy")
def cli(action, data_dir, clean, force, verbose):
    """
    Deploy Artifactory with PostgreSQL and nginx through docker-compose.

    \b
    Examples:
      artdeploy                     # Start; cleans the data directory after confirmation
      artdeploy -a start -d /srv    # Start with a custom data directory
      artdeploy -a status           # List the stack's containers
      artdeploy -a logs             # Show logs with timestamps
      artdeploy -a remove -c -f     # Remove containers, then the data directory
    """
    options = RawOptions(action=action, data_dir=data_dir, clean=clean, force=force)
    DeployCommand(options, verbose=verbose).run()


@handle_cli_errors
def main():
    """Main entry point with error handling."""
    cli()


if __name__ == "__main__":
    main()
