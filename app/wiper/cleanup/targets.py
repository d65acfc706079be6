"""Built-in cleanup target catalog.

The catalog is plain configuration data: calling :func:`get_cleanup_targets`
twice with the same home directory returns equal values and touches
nothing on disk.
"""

import os
from datetime import timedelta

from wiper.cleanup.models import CleanupTarget

_DAY = timedelta(days=1)


def get_cleanup_targets(home: str) -> tuple[CleanupTarget, ...]:
    """Return the ordered cleanup targets for a user's home directory.

    Args:
        home: Absolute path of the user's home directory.

    Returns:
        Tuple of CleanupTarget definitions, scanned in order.
    """
    library = os.path.join(home, "Library")
    app_support = os.path.join(library, "Application Support")
    caches = os.path.join(library, "Caches")

    return (
        CleanupTarget(
            category="User Temporary Files",
            patterns=(
                os.path.join(caches, "TemporaryItems", "*"),
                "/private/var/folders/*/*/T/*",
            ),
            min_age=_DAY,
            aggregation_roots=(
                os.path.join(caches, "TemporaryItems"),
                "/private/var/folders",
            ),
        ),
        CleanupTarget(
            category="System Temporary Files",
            patterns=("/private/var/tmp/*", "/tmp/*"),
            min_age=_DAY,
            aggregation_roots=("/private/var/tmp", "/tmp"),
        ),
        CleanupTarget(
            category="User Caches",
            patterns=(os.path.join(caches, "*"),),
            aggregation_roots=(caches,),
        ),
        CleanupTarget(
            category="System Caches",
            patterns=("/Library/Caches/*",),
            aggregation_roots=("/Library/Caches",),
        ),
        CleanupTarget(
            category="User Logs",
            patterns=(os.path.join(library, "Logs", "*"),),
            min_age=30 * _DAY,
            aggregation_roots=(os.path.join(library, "Logs"),),
        ),
        CleanupTarget(
            category="Browser Caches",
            patterns=(
                os.path.join(app_support, "Google", "Chrome", "Default", "Cache", "*"),
                os.path.join(
                    app_support,
                    "Google",
                    "Chrome",
                    "Default",
                    "Service Worker",
                    "CacheStorage",
                    "*",
                ),
                os.path.join(caches, "Google", "Chrome", "*"),
                os.path.join(caches, "com.apple.Safari", "*"),
                os.path.join(app_support, "Firefox", "Profiles", "*", "cache2", "entries", "*"),
                os.path.join(
                    app_support, "BraveSoftware", "Brave-Browser", "Default", "Cache", "*"
                ),
                os.path.join(caches, "BraveSoftware", "Brave-Browser", "*"),
            ),
            aggregation_roots=(
                os.path.join(app_support, "Google", "Chrome"),
                os.path.join(caches, "Google", "Chrome"),
                os.path.join(caches, "com.apple.Safari"),
                os.path.join(app_support, "Firefox"),
                os.path.join(app_support, "BraveSoftware", "Brave-Browser"),
                os.path.join(caches, "BraveSoftware", "Brave-Browser"),
            ),
        ),
        CleanupTarget(
            category="Trash Bin",
            patterns=(os.path.join(home, ".Trash", "*"),),
            aggregation_roots=(os.path.join(home, ".Trash"),),
        ),
        CleanupTarget(
            category="Downloads (old)",
            patterns=(os.path.join(home, "Downloads", "*"),),
            min_age=90 * _DAY,
            aggregation_roots=(os.path.join(home, "Downloads"),),
        ),
    )
