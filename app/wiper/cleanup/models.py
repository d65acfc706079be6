"""Cleanup domain models.

This module defines the immutable data structures that flow through
the cleanup engine: declarative cleanup targets, candidate items
produced by discovery, and the fixed category names used in reports.
"""

from dataclasses import dataclass, field
from datetime import timedelta

# Categories assigned outside the target catalog and the classifier
APPLICATION_BUNDLE = "Application Bundle"
APPLICATION_LEFTOVER = "Application Leftover"


@dataclass(frozen=True, slots=True)
class CleanupTarget:
    """Declarative definition of one kind of filesystem clutter.

    Attributes:
        category: Human-readable category name (e.g., "User Caches").
        patterns: Ordered glob patterns locating candidate entries.
        min_age: Minimum modification age for a match to qualify.
            A zero duration disables the age filter.
        aggregation_roots: Path prefixes used to collapse many matches
            into a single display row.
    """

    category: str
    patterns: tuple[str, ...]
    min_age: timedelta = timedelta(0)
    aggregation_roots: tuple[str, ...] = field(default_factory=tuple)

    def display_path_for(self, path: str) -> str:
        """Return the longest aggregation root containing ``path``.

        Falls back to ``path`` itself when no root matches.
        """
        best: str | None = None
        for root in self.aggregation_roots:
            if path == root or path.startswith(root.rstrip("/") + "/"):
                if best is None or len(root) > len(best):
                    best = root
        return best if best is not None else path


@dataclass(frozen=True, slots=True)
class CandidateItem:
    """A filesystem entry discovered as eligible for deletion.

    Attributes:
        display_path: Path shown in previews (may be an aggregation root).
        path: Actual filesystem path to delete.
        size_bytes: On-disk allocation in bytes.
        category: Reporting category.
    """

    display_path: str
    path: str
    size_bytes: int
    category: str

    def __post_init__(self) -> None:
        """Validate candidate data after initialization."""
        if not self.path:
            msg = "Path cannot be empty"
            raise ValueError(msg)
        if self.size_bytes < 0:
            msg = f"Size must be non-negative, got {self.size_bytes}"
            raise ValueError(msg)
