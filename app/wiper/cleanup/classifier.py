"""Path categorization for large-file reports.

Categories are decided by an ordered rule table. Several rules can match
the same path (a Chrome cache file is also under ``~/Library`` and under
the home directory), so the table is evaluated top to bottom and the
first match wins. Rule order is part of the contract.
"""

from collections.abc import Callable
from dataclasses import dataclass

from wiper.cleanup.ignore import resolve_home

FALLBACK_CATEGORY = "Other Large Files"
SYSTEM_TEMP_CATEGORY = "System Temporary Files"


@dataclass(frozen=True, slots=True)
class PathView:
    """A path as seen by classification rules.

    Attributes:
        path: The absolute path being classified.
        tilde: The same path with the home directory replaced by ``~``,
            or the unchanged path when it is outside the home directory.
    """

    path: str
    tilde: str


@dataclass(frozen=True, slots=True)
class CategoryRule:
    """A single (predicate, category) classification rule."""

    category: str
    predicate: Callable[[PathView], bool]

    def matches(self, view: PathView) -> bool:
        return self.predicate(view)


def _under(path: str, *roots: str) -> bool:
    return any(path == root or path.startswith(root + "/") for root in roots)


def _home_under(*roots: str) -> Callable[[PathView], bool]:
    return lambda view: _under(view.tilde, *roots)


def _system_under(*roots: str) -> Callable[[PathView], bool]:
    return lambda view: _under(view.path, *roots)


def _tilde_contains(*markers: str) -> Callable[[PathView], bool]:
    return lambda view: any(marker in view.tilde for marker in markers)


_TEMP_ROOTS: tuple[str, ...] = ("/private/var/folders", "/private/var/tmp", "/tmp")

DEFAULT_RULES: tuple[CategoryRule, ...] = (
    CategoryRule(
        "Browser Caches",
        _tilde_contains(
            "~/Library/Application Support/Google/Chrome",
            "~/Library/Caches/Google/Chrome",
            "~/Library/Application Support/BraveSoftware/Brave-Browser",
            "~/Library/Caches/com.apple.Safari",
            "~/Library/Application Support/Firefox",
        ),
    ),
    CategoryRule("User Downloads", _home_under("~/Downloads")),
    CategoryRule("User Documents", _home_under("~/Documents")),
    CategoryRule("Application Support Files", _home_under("~/Library/Application Support")),
    CategoryRule("User Caches", _home_under("~/Library/Caches")),
    CategoryRule("User Container Data", _home_under("~/Library/Containers")),
    CategoryRule("User Group Container Data", _home_under("~/Library/Group Containers")),
    CategoryRule("Messages Attachments", _home_under("~/Library/Messages/Attachments")),
    CategoryRule("Spotlight Metadata", _home_under("~/Library/Metadata/CoreSpotlight")),
    CategoryRule("Other User Library Files", _home_under("~/Library")),
    CategoryRule(SYSTEM_TEMP_CATEGORY, _system_under(*_TEMP_ROOTS)),
    CategoryRule(
        "Developer Tool Caches/Data",
        _tilde_contains(
            ".rustup",
            ".npm",
            ".gradle",
            "Xcode/iOS DeviceSupport",
            "Android/Sdk",
            "JetBrains",
        ),
    ),
    CategoryRule("User Home Files", lambda view: view.tilde.startswith("~/")),
    CategoryRule("System Files", _system_under("/var", "/usr", "/opt")),
)


def _to_tilde(path: str, home: str) -> str:
    home = home.rstrip("/")
    if home and _under(path, home):
        return "~" + path[len(home) :]
    return path


def classify(
    path: str,
    home: str | None = None,
    rules: tuple[CategoryRule, ...] = DEFAULT_RULES,
) -> str:
    """Map an absolute path to its reporting category.

    Args:
        path: Absolute filesystem path.
        home: Home directory used for ``~``-relative rules. Defaults to
            the current user's home.
        rules: Ordered rule table; the first matching rule wins.

    Returns:
        Category name, or ``"Other Large Files"`` when nothing matches.
    """
    if home is None:
        home = resolve_home()
    if home is None:
        if _under(path, "/private/var", "/tmp"):
            return SYSTEM_TEMP_CATEGORY
        return FALLBACK_CATEGORY

    view = PathView(path=path, tilde=_to_tilde(path, home))
    for rule in rules:
        if rule.matches(view):
            return rule.category
    return FALLBACK_CATEGORY
