"""Reclaimed-space ledger.

A run keeps two independent ledgers: the *estimated* ledger lists every
discovered candidate, the *actual* ledger lists every attempted deletion.
Totals are computed when read. The estimate view counts every entry and
the actual view counts removed entries only, so the caller chooses the
view with ``removed_only``.
"""

from collections import defaultdict
from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from wiper.cleanup.models import CandidateItem


@dataclass(frozen=True, slots=True)
class LedgerEntry:
    """One processed filesystem entry.

    Attributes:
        path: Filesystem path of the entry.
        size_bytes: Size attributed to the entry.
        removed: Whether the entry was actually deleted.
        category: Reporting category.
    """

    path: str
    size_bytes: int
    removed: bool
    category: str


class Ledger:
    """Append-only, insertion-ordered record of processed entries."""

    def __init__(self) -> None:
        self._entries: list[LedgerEntry] = []

    @property
    def entries(self) -> tuple[LedgerEntry, ...]:
        """All entries in insertion order."""
        return tuple(self._entries)

    def add(self, path: str, size_bytes: int, removed: bool, category: str) -> LedgerEntry:
        """Append an entry and return it."""
        entry = LedgerEntry(path=path, size_bytes=size_bytes, removed=removed, category=category)
        self._entries.append(entry)
        return entry

    def _selected(self, removed_only: bool) -> Iterator[LedgerEntry]:
        return (e for e in self._entries if e.removed or not removed_only)

    def total_bytes(self, removed_only: bool = False) -> int:
        """Sum entry sizes.

        Args:
            removed_only: Count only entries that were actually removed.

        Returns:
            Total size in bytes.
        """
        return sum(e.size_bytes for e in self._selected(removed_only))

    def category_totals(self, removed_only: bool = False) -> dict[str, int]:
        """Sum entry sizes per category, ordered by category name."""
        totals: dict[str, int] = defaultdict(int)
        for entry in self._selected(removed_only):
            totals[entry.category] += entry.size_bytes
        return {category: totals[category] for category in sorted(totals)}

    def categories(self, removed_only: bool = False) -> list[str]:
        """Category names in lexicographic order."""
        return list(self.category_totals(removed_only))

    @property
    def removed_count(self) -> int:
        return sum(1 for e in self._entries if e.removed)

    def __len__(self) -> int:
        return len(self._entries)


def aggregate_by_display_path(candidates: Iterable[CandidateItem]) -> dict[str, int]:
    """Collapse candidates into preview rows keyed by display path.

    Rows keep first-seen order.
    """
    rows: dict[str, int] = {}
    for item in candidates:
        rows[item.display_path] = rows.get(item.display_path, 0) + item.size_bytes
    return rows
