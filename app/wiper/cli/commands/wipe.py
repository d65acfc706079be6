"""Cleanup command.

Runs one of three discovery strategies (system junk, application
uninstall, large files) and hands the candidates to the cleanup executor.
"""

from typing import Annotated

import typer

from wiper.cleanup.executor import (
    CleanupExecutor,
    InvocationError,
    resolve_mode,
    validate_invocation,
)
from wiper.cleanup.ignore import IgnoreFilter, resolve_home
from wiper.cleanup.scanner import (
    ApplicationScanner,
    LargeFileScanner,
    Scanner,
    SystemScanner,
)
from wiper.cli.display import print_preview, print_reclaimed
from wiper.core.config import SHOW_WARNINGS_ENV, ConfigError, load_config
from wiper.utils.formatting import (
    format_size,
    print_error,
    print_info,
    print_success,
    print_warning,
)


class ConsoleConfirmer:
    """Asks yes/no questions on the terminal; anything but yes is no.

    End of input and Ctrl-C count as no.
    """

    def confirm(self, prompt: str) -> bool:
        try:
            return typer.confirm(prompt, default=False)
        except typer.Abort:
            typer.echo()
            return False


def parse_ignore_options(values: list[str] | None) -> list[str]:
    """Split repeated, comma-separated ``--ignore`` values into paths."""
    paths: list[str] = []
    for value in values or []:
        paths.extend(part.strip() for part in value.split(",") if part.strip())
    return paths


def wipe(
    app_name: Annotated[
        str | None,
        typer.Argument(help="Application to uninstall together with its leftovers."),
    ] = None,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", "-n", help="Show what would be deleted."),
    ] = False,
    ignore: Annotated[
        list[str] | None,
        typer.Option(
            "--ignore",
            "-i",
            help="Paths to exclude (comma-separated, repeatable).",
        ),
    ] = None,
    large_files: Annotated[
        bool,
        typer.Option("--large-files", help="Find and remove large files."),
    ] = False,
    interactive: Annotated[
        bool,
        typer.Option(
            "--interactive",
            "-I",
            help="Confirm each item individually (with --large-files).",
        ),
    ] = False,
) -> None:
    """Clean up system junk, an application, or large files."""
    try:
        validate_invocation(app_name, large_files)
    except InvocationError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    try:
        settings = load_config()
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    home = resolve_home()
    ignore_filter = IgnoreFilter(
        [*settings.ignore, *parse_ignore_options(ignore)],
        home=home,
    )

    if interactive and not large_files:
        print_warning("--interactive is only supported with --large-files; ignoring it.")
        interactive = False

    scanner: Scanner
    if app_name:
        if not dry_run:
            confirmed = ConsoleConfirmer().confirm(
                f"Do you really want to uninstall application: {app_name}?"
            )
            if not confirmed:
                print_info("Aborted.")
                raise typer.Exit(code=0)
        scanner = ApplicationScanner(app_name, home=home, ignore=ignore_filter)
    elif large_files:
        print_info("Searching for large files...")
        scanner = LargeFileScanner(
            home=home,
            threshold=settings.large_file_threshold_bytes,
            ignore=ignore_filter,
        )
    else:
        print_info("Scanning for junk files...")
        scanner = SystemScanner(home=home, ignore=ignore_filter)

    candidates = list(scanner.scan())

    if scanner.suppressed_warnings:
        print_warning(
            "Some warnings were suppressed. "
            f"Set {SHOW_WARNINGS_ENV}=true to see full warning details."
        )

    mode = resolve_mode(dry_run=dry_run, interactive=interactive, application=bool(app_name))
    executor = CleanupExecutor(mode, ConsoleConfirmer(), on_preview=print_preview)
    reclaimed = executor.run(candidates)

    if dry_run:
        print_success(
            f"Cleanup estimation finished. Estimated space reclaimed: {format_size(reclaimed)}"
        )
        return

    print_reclaimed(executor.actual)
    print_success(f"Cleanup completed. Space reclaimed: {format_size(reclaimed)}")
