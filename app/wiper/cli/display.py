"""Shared Rich display functions for cleanup runs.

Provides the preview table shown before any prompt and the per-category
summary tables shown for the estimated and the actual ledger.
"""

from rich.table import Table

from wiper.cleanup.ledger import Ledger, aggregate_by_display_path
from wiper.cleanup.models import CandidateItem
from wiper.utils.formatting import console, format_size


def create_summary_table(ledger: Ledger, title: str, removed_only: bool = False) -> Table:
    """Create a Rich table with one row per category and a total footer.

    Args:
        ledger: Ledger to summarize.
        title: Table title.
        removed_only: Count only entries that were actually removed.

    Returns:
        Rich Table configured for category display.
    """
    table = Table(
        title=title,
        show_header=True,
        header_style="bold_header",
        border_style="border",
        show_footer=True,
    )
    totals = ledger.category_totals(removed_only)
    table.add_column("Category", footer="[total]TOTAL[/total]")
    table.add_column(
        "Size",
        justify="right",
        style="size",
        footer=f"[total]{format_size(ledger.total_bytes(removed_only))}[/total]",
    )

    for category, size in totals.items():
        table.add_row(category, format_size(size))

    return table


def create_preview_table(candidates: list[CandidateItem]) -> Table:
    """Create a Rich table of candidates grouped by display path.

    Args:
        candidates: Candidates discovered in this run.

    Returns:
        Rich Table with Path and Size columns.
    """
    table = Table(
        title="Items to Clean",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Path", no_wrap=True)
    table.add_column("Size", justify="right", style="size")

    for display_path, size in aggregate_by_display_path(candidates).items():
        table.add_row(display_path, format_size(size))

    return table


def print_preview(ledger: Ledger, candidates: list[CandidateItem]) -> None:
    """Print the candidate preview and the estimated summary."""
    console.print(create_preview_table(candidates))
    console.print(create_summary_table(ledger, "Estimated Space"))


def print_reclaimed(ledger: Ledger) -> None:
    """Print the summary of actually removed entries.

    Produces no output when nothing was attempted.
    """
    if not len(ledger):
        return
    console.print(create_summary_table(ledger, "Reclaimed Space", removed_only=True))
    kept = len(ledger) - ledger.removed_count
    if kept:
        console.print(f"[kept]{kept} item(s) kept.[/kept]")
