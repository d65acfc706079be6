"""Ignore-list handling for cleanup scans.

Operator-supplied ignore entries may be written with the ``~`` home
shorthand or a ``$HOME`` / ``${HOME}`` placeholder. Entries are expanded
once, canonicalized, and then used for containment checks: a path is
ignored when it equals an entry or lies beneath it.
"""

import logging
import os
from collections.abc import Iterable
from pathlib import Path

logger = logging.getLogger(__name__)

_HOME_PLACEHOLDERS: tuple[str, ...] = ("${HOME}", "$HOME")


def resolve_home() -> str | None:
    """Return the current user's home directory, or None if unknown."""
    try:
        return str(Path.home())
    except (RuntimeError, KeyError):
        return None


def expand_path(raw: str, home: str | None = None) -> str:
    """Expand home shorthands in a user-supplied path.

    ``~`` and ``~/...`` resolve against ``home`` (the current user's home
    when omitted). ``$HOME`` and ``${HOME}`` are substituted from the
    ``HOME`` environment variable, or ``home`` when given. Paths without a
    shorthand are returned unchanged, as are shorthands that cannot be
    resolved.

    Args:
        raw: Path string as typed by the operator.
        home: Explicit home directory override.

    Returns:
        The expanded path string.
    """
    if raw == "~" or raw.startswith("~/"):
        base = home or resolve_home()
        if base is None:
            return raw
        return base + raw[1:]

    for placeholder in _HOME_PLACEHOLDERS:
        if placeholder in raw:
            base = home or os.environ.get("HOME")
            if not base:
                return raw
            return raw.replace(placeholder, base)

    return raw


def canonicalize(path: str) -> str:
    """Return an absolute path with ``..`` and duplicate separators removed."""
    return os.path.normpath(os.path.abspath(path))


def is_within(path: str, root: str) -> bool:
    """Check whether canonical ``path`` equals or is nested under ``root``."""
    if path == root:
        return True
    prefix = root if root.endswith(os.sep) else root + os.sep
    return path.startswith(prefix)


class IgnoreFilter:
    """Canonicalized containment check over a list of ignore entries.

    Args:
        entries: Raw ignore paths (may use ``~`` or ``$HOME``).
        home: Home directory used for expansion. Defaults to the
            current user's home.

    Example:
        >>> flt = IgnoreFilter(["~/Downloads"], home="/Users/alice")
        >>> flt.is_ignored("/Users/alice/Downloads/movie.mkv")
        True
    """

    def __init__(self, entries: Iterable[str] = (), *, home: str | None = None) -> None:
        self._home = home
        self._roots: list[str] = []
        for entry in entries:
            self.add(entry)

    @property
    def roots(self) -> tuple[str, ...]:
        """Canonical ignore roots in insertion order."""
        return tuple(self._roots)

    def add(self, entry: str) -> None:
        """Expand, canonicalize and register one ignore entry.

        Blank entries are dropped.
        """
        entry = entry.strip()
        if not entry:
            return
        root = canonicalize(expand_path(entry, self._home))
        if root not in self._roots:
            self._roots.append(root)
            logger.debug("Ignoring %s (from %s)", root, entry)

    def is_ignored(self, path: str) -> bool:
        """Check whether ``path`` equals or is nested under an ignore entry.

        Args:
            path: Filesystem path to check. Relative paths are resolved
                against the current working directory.

        Returns:
            True if the path must be excluded from cleanup.
        """
        if not self._roots:
            return False
        target = canonicalize(path)
        for root in self._roots:
            if is_within(target, root):
                logger.debug("Path %s is ignored because it's under %s", path, root)
                return True
        return False

    def __len__(self) -> int:
        return len(self._roots)
