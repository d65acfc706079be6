"""CLI package for wiper.

This package contains the Typer application and all subcommands.
"""

from wiper.cli.main import app

__all__ = ["app"]
