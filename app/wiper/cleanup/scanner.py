"""Discovery of cleanup candidates.

Three strategies share the :class:`Scanner` interface:

- :class:`SystemScanner` expands the declarative target catalog.
- :class:`ApplicationScanner` finds an application bundle and the
  support files it leaves behind.
- :class:`LargeFileScanner` walks user and temporary directories for
  files above a size threshold.

No strategy aborts on a single bad path. Per-path errors are logged when
``WIPER_SHOW_WARNINGS=true`` and otherwise only counted in
:attr:`Scanner.suppressed_warnings`.
"""

import glob
import logging
import os
import stat
import time
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterator

from wiper.cleanup.classifier import classify
from wiper.cleanup.ignore import IgnoreFilter, canonicalize, is_within, resolve_home
from wiper.cleanup.models import (
    APPLICATION_BUNDLE,
    APPLICATION_LEFTOVER,
    CandidateItem,
    CleanupTarget,
)
from wiper.cleanup.sizes import allocated_bytes, disk_usage, format_size
from wiper.cleanup.targets import get_cleanup_targets
from wiper.core import config

logger = logging.getLogger(__name__)

APP_SUFFIX = ".app"

LARGE_FILE_THRESHOLD = 100 * 1024 * 1024

# System trees never descended into by the large-file walk
_DENIED_ROOTS: frozenset[str] = frozenset({"/System", "/Library", "/usr", "/Applications"})
_DENIED_PREFIX = "/Developer"


class Scanner(ABC):
    """Abstract base class for candidate discovery strategies.

    Args:
        ignore: Ignore filter applied to every discovered path.
        show_warnings: Log per-path errors instead of only counting them.
            Defaults to the ``WIPER_SHOW_WARNINGS`` environment toggle.

    Example:
        >>> scanner = SystemScanner(home="/Users/alice")
        >>> for item in scanner.scan():
        ...     print(item.path, item.size_bytes)
    """

    def __init__(
        self,
        *,
        ignore: IgnoreFilter | None = None,
        show_warnings: bool | None = None,
    ) -> None:
        self._ignore = ignore if ignore is not None else IgnoreFilter()
        self._show_warnings = config.show_warnings() if show_warnings is None else show_warnings
        self.suppressed_warnings = 0

    @abstractmethod
    def scan(self) -> Iterator[CandidateItem]:
        """Yield candidate items for this strategy.

        Yields:
            CandidateItem instances, each at most once per scan.
        """

    def _warn(self, message: str, *args: object) -> None:
        """Report a recoverable per-path problem."""
        if self._show_warnings:
            logger.warning(message, *args)
        else:
            self.suppressed_warnings += 1
            logger.debug(message, *args)

    def _glob(self, pattern: str) -> list[str]:
        """Expand a glob pattern, including hidden entries, in sorted order."""
        try:
            return sorted(glob.glob(pattern, include_hidden=True))
        except (OSError, ValueError) as e:
            self._warn("Error globbing pattern %s: %s", pattern, e)
            return []

    def _measure(self, path: str) -> int | None:
        """Return the on-disk size of ``path``, or None if it cannot be read."""
        try:
            return disk_usage(path)
        except OSError as e:
            self._warn("Could not get size of %s: %s", path, e)
            return None


class SystemScanner(Scanner):
    """Scans the declarative cleanup target catalog.

    Args:
        targets: Targets to scan. Defaults to the built-in catalog for
            ``home``.
        home: Home directory for the built-in catalog. Defaults to the
            current user's home.
        ignore: Ignore filter applied to every match.
        show_warnings: See :class:`Scanner`.
        clock: Returns the current time as a POSIX timestamp; used for
            minimum-age checks.
    """

    def __init__(
        self,
        *,
        targets: tuple[CleanupTarget, ...] | None = None,
        home: str | None = None,
        ignore: IgnoreFilter | None = None,
        show_warnings: bool | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        super().__init__(ignore=ignore, show_warnings=show_warnings)
        self._clock = clock

        if targets is not None:
            self._targets = targets
        else:
            home = home or resolve_home()
            if home is None:
                logger.warning("Cannot resolve home directory; scanning system targets only")
                self._targets = tuple(
                    t
                    for t in get_cleanup_targets("~")
                    if not any(p.startswith("~") for p in t.patterns)
                )
            else:
                self._targets = get_cleanup_targets(home)

    @property
    def targets(self) -> tuple[CleanupTarget, ...]:
        """Targets scanned by this scanner."""
        return self._targets

    def scan(self) -> Iterator[CandidateItem]:
        """Expand every target pattern and yield qualifying matches.

        A match that overlaps an already emitted candidate, as an ancestor
        or a descendant of it, is skipped; the earlier target wins.
        """
        emitted: list[str] = []
        now = self._clock()

        for target in self._targets:
            logger.debug("Scanning for %s using patterns: %s", target.category, target.patterns)
            for pattern in target.patterns:
                for path in self._glob(pattern):
                    overlap = _overlapping(path, emitted)
                    if overlap is not None:
                        logger.debug("Skipping %s: overlaps %s", path, overlap)
                        continue
                    item = self._inspect(target, path, now)
                    if item is not None:
                        emitted.append(path)
                        yield item

    def _inspect(self, target: CleanupTarget, path: str, now: float) -> CandidateItem | None:
        """Apply ignore and age filters to one match and measure it."""
        if self._ignore.is_ignored(path):
            logger.debug("Skipping ignored path: %s", path)
            return None

        try:
            st = os.stat(path)
        except OSError as e:
            self._warn("Error stating path %s: %s", path, e)
            return None

        min_age = target.min_age.total_seconds()
        if min_age > 0 and now - st.st_mtime < min_age:
            logger.debug("Skipping recent file/directory: %s", path)
            return None

        size = self._measure(path)
        if size is None:
            return None

        return CandidateItem(
            display_path=target.display_path_for(path),
            path=path,
            size_bytes=size,
            category=target.category,
        )


def normalize_app_name(name: str) -> str:
    """Return the bundle name for an application, adding ``.app`` if absent."""
    name = name.strip()
    if not name.endswith(APP_SUFFIX):
        name += APP_SUFFIX
    return name


def leftover_patterns(
    app_name: str,
    home: str | None,
    system_library: str = "/Library",
) -> list[str]:
    """Build glob patterns for an application's leftover support files.

    Preference-style locations use the reverse-DNS convention
    ``com.<name>.*`` with the name lower-cased and spaces removed.

    Args:
        app_name: Application name with or without the ``.app`` suffix.
        home: User home directory; user-level locations are omitted when None.
        system_library: System-wide Library directory.

    Returns:
        Ordered list of glob patterns.
    """
    base = app_name.strip()
    if base.endswith(APP_SUFFIX):
        base = base[: -len(APP_SUFFIX)]
    escaped = glob.escape(base)
    reverse_dns = "com." + glob.escape(base.replace(" ", "").lower()) + ".*"

    patterns: list[str] = []
    if home is not None:
        library = os.path.join(home, "Library")
        patterns += [
            os.path.join(library, "Application Support", escaped),
            os.path.join(library, "Caches", escaped),
            os.path.join(library, "Preferences", reverse_dns),
            os.path.join(library, "Saved Application State", reverse_dns),
            os.path.join(library, "Containers", f"*{escaped}*"),
            os.path.join(library, "Group Containers", f"*{escaped}*"),
        ]
    patterns += [
        os.path.join(system_library, "Application Support", escaped),
        os.path.join(system_library, "Caches", escaped),
        os.path.join(system_library, "Preferences", reverse_dns),
    ]
    return patterns


class ApplicationScanner(Scanner):
    """Finds an application bundle and its leftover files.

    Args:
        app_name: Application name, e.g. ``"Google Chrome"`` or ``"Foo.app"``.
        home: User home directory. Defaults to the current user's home.
        install_roots: Directories searched for the bundle. Defaults to
            ``/Applications`` and ``~/Applications``.
        system_library: System-wide Library directory.
        ignore: Ignore filter applied to every match.
        show_warnings: See :class:`Scanner`.
    """

    def __init__(
        self,
        app_name: str,
        *,
        home: str | None = None,
        install_roots: tuple[str, ...] | None = None,
        system_library: str = "/Library",
        ignore: IgnoreFilter | None = None,
        show_warnings: bool | None = None,
    ) -> None:
        super().__init__(ignore=ignore, show_warnings=show_warnings)
        self._bundle_name = normalize_app_name(app_name)
        self._home = home or resolve_home()
        self._system_library = system_library

        if install_roots is not None:
            self._install_roots = install_roots
        elif self._home is not None:
            self._install_roots = ("/Applications", os.path.join(self._home, "Applications"))
        else:
            self._install_roots = ("/Applications",)

    @property
    def bundle_name(self) -> str:
        """Normalized bundle name including the ``.app`` suffix."""
        return self._bundle_name

    def scan(self) -> Iterator[CandidateItem]:
        """Yield the application bundle(s) followed by leftover files."""
        seen: set[str] = set()

        logger.info("Searching for '%s' and its associated files...", self._bundle_name)
        bundles = [
            match
            for root in self._install_roots
            for match in self._glob(os.path.join(root, glob.escape(self._bundle_name)))
        ]
        if not bundles:
            logger.warning(
                "Application '%s' not found in %s",
                self._bundle_name,
                ", ".join(self._install_roots),
            )
        for path in bundles:
            item = self._inspect(path, APPLICATION_BUNDLE, seen)
            if item is not None:
                yield item

        for pattern in leftover_patterns(self._bundle_name, self._home, self._system_library):
            for path in self._glob(pattern):
                item = self._inspect(path, APPLICATION_LEFTOVER, seen)
                if item is not None:
                    yield item

    def _inspect(self, path: str, category: str, seen: set[str]) -> CandidateItem | None:
        if path in seen or not os.path.exists(path):
            return None
        if self._ignore.is_ignored(path):
            logger.debug("Skipping ignored path: %s", path)
            return None

        size = self._measure(path)
        if size is None:
            return None

        seen.add(path)
        return CandidateItem(display_path=path, path=path, size_bytes=size, category=category)


def _is_denied(path: str) -> bool:
    if path.startswith(_DENIED_PREFIX):
        return True
    return any(is_within(path, root) for root in _DENIED_ROOTS)


def _overlapping(path: str, emitted: list[str]) -> str | None:
    """Return the emitted path that contains or lies under ``path``, if any."""
    for other in emitted:
        if is_within(path, other) or is_within(other, path):
            return other
    return None


class LargeFileScanner(Scanner):
    """Walks user and temporary directories for large files.

    ``~/Applications`` is always ignored so application bundles are not
    reported file by file.

    Args:
        roots: Directories to walk. Defaults to ``/Users``,
            ``/private/var/folders``, ``/private/tmp``, ``~/Downloads``
            and ``~/Documents``.
        home: User home directory. Defaults to the current user's home.
        threshold: Minimum on-disk allocation in bytes.
        ignore: Ignore filter; ignored directories are pruned entirely.
        show_warnings: See :class:`Scanner`.
        show_details: Log every large file found. Defaults to the
            ``WIPER_SHOW_DETAILS`` environment toggle.
    """

    def __init__(
        self,
        *,
        roots: tuple[str, ...] | None = None,
        home: str | None = None,
        threshold: int = LARGE_FILE_THRESHOLD,
        ignore: IgnoreFilter | None = None,
        show_warnings: bool | None = None,
        show_details: bool | None = None,
    ) -> None:
        super().__init__(ignore=ignore, show_warnings=show_warnings)
        self._home = home or resolve_home()
        self._threshold = threshold
        self._show_details = config.show_details() if show_details is None else show_details

        user_roots: tuple[str, ...] = ()
        if self._home is not None:
            user_roots = (
                os.path.join(self._home, "Downloads"),
                os.path.join(self._home, "Documents"),
            )
            self._ignore = IgnoreFilter(
                (*self._ignore.roots, os.path.join(self._home, "Applications")),
                home=self._home,
            )

        if roots is not None:
            self._roots = roots
        else:
            self._roots = ("/Users", "/private/var/folders", "/private/tmp", *user_roots)

    def scan(self) -> Iterator[CandidateItem]:
        """Walk every root and yield files at or above the threshold."""
        logger.debug("Scanning for files of at least %s", format_size(self._threshold))
        seen: set[str] = set()

        for root in self._roots:
            root = canonicalize(root)
            if self._ignore.is_ignored(root) or _is_denied(root):
                continue

            for dirpath, dirnames, filenames in os.walk(root, onerror=self._walk_error):
                dirnames[:] = [name for name in sorted(dirnames) if self._descend(dirpath, name)]

                for name in sorted(filenames):
                    path = os.path.join(dirpath, name)
                    if path in seen or self._ignore.is_ignored(path):
                        continue
                    item = self._inspect(path)
                    if item is not None:
                        seen.add(path)
                        yield item

    def _descend(self, dirpath: str, name: str) -> bool:
        """Decide whether the walk enters a subdirectory."""
        path = os.path.join(dirpath, name)
        if self._ignore.is_ignored(path) or _is_denied(path):
            logger.debug("Pruning %s", path)
            return False
        return True

    def _walk_error(self, error: OSError) -> None:
        self._warn("Error accessing path %s: %s", error.filename, error)

    def _inspect(self, path: str) -> CandidateItem | None:
        try:
            st = os.lstat(path)
        except OSError as e:
            self._warn("Error accessing path %s: %s", path, e)
            return None

        if not stat.S_ISREG(st.st_mode):
            return None

        size = allocated_bytes(st)
        if size < self._threshold:
            return None

        if self._show_details:
            logger.info(
                "Found large file: %s (Actual Size: %s, Logical Size: %s)",
                path,
                format_size(size),
                format_size(st.st_size),
            )

        return CandidateItem(
            display_path=path,
            path=path,
            size_bytes=size,
            category=classify(path, self._home),
        )
