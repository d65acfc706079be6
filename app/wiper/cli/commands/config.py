"""Configuration file commands.

Provides commands to show, create, and locate the wiper config file.
"""

from typing import Annotated

import typer
from rich.table import Table

from wiper.core.config import ConfigError, WiperConfig, load_config, save_config
from wiper.core.paths import get_config_path
from wiper.utils.formatting import console, print_error, print_success, print_warning

app = typer.Typer(
    help="Show and manage the wiper configuration file.",
    no_args_is_help=True,
)


@app.command()
def show() -> None:
    """Show the effective configuration."""
    config_path = get_config_path()
    try:
        config = load_config(config_path)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    table = Table(
        title="Configuration",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Setting", style="bold")
    table.add_column("Value")
    table.add_row("Config file", str(config_path) if config_path.exists() else "(defaults)")
    table.add_row("Large file threshold", f"{config.large_file_threshold_mb} MB")
    table.add_row("Ignored paths", "\n".join(config.ignore) or "[muted]none[/muted]")

    console.print(table)


@app.command()
def init(
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Overwrite an existing config file."),
    ] = False,
) -> None:
    """Write a default config file."""
    config_path = get_config_path()
    if config_path.exists() and not force:
        print_warning(f"Config file already exists: {config_path}")
        console.print("[dim]Use --force to overwrite.[/dim]")
        raise typer.Exit(code=1)

    try:
        saved = save_config(WiperConfig(), config_path)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Config written to {saved}")


@app.command()
def path() -> None:
    """Print the config file location."""
    console.print(str(get_config_path()), highlight=False, soft_wrap=True)
