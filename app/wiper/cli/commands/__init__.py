"""CLI commands for wiper.

This package contains all subcommand implementations.
"""

from wiper.cli.commands import config, wipe

__all__ = ["config", "wipe"]
