"""Main CLI application entry point.

Defines the Typer application and global options.
"""

import logging
from typing import Annotated

import typer

from wiper import __version__
from wiper.cli.commands import config, wipe
from wiper.utils.formatting import configure_logging

# Create main Typer app
app = typer.Typer(
    name="wiper",
    help="Reclaim disk space on macOS.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"wiper version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    debug: Annotated[
        bool,
        typer.Option(
            "--debug",
            "-d",
            help="Enable debug logging.",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Only show warnings and errors.",
        ),
    ] = False,
) -> None:
    """wiper - Reclaim disk space on macOS.

    Remove caches, logs and temporary files, uninstall applications
    together with their leftovers, or hunt down large files.
    """
    if debug:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    else:
        level = logging.INFO
    configure_logging(level)

    # Store options in context for subcommands
    ctx.ensure_object(dict)
    ctx.obj["debug"] = debug
    ctx.obj["quiet"] = quiet


# Register commands
app.command(name="wipe")(wipe.wipe)
app.add_typer(config.app, name="config")


if __name__ == "__main__":
    app()
