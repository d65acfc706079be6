"""On-disk size calculation.

Sizes are reported as block allocation (``st_blocks * 512``) rather than
logical length, so sparse files count for what they actually occupy.
"""

import logging
import os
import stat

logger = logging.getLogger(__name__)

_BLOCK_SIZE = 512


def allocated_bytes(st: os.stat_result) -> int:
    """Return the on-disk allocation recorded in a stat result.

    Falls back to the logical size when the platform does not report
    block counts.
    """
    blocks = getattr(st, "st_blocks", None)
    if blocks is None:
        return st.st_size
    return blocks * _BLOCK_SIZE


def disk_usage(path: str) -> int:
    """Compute on-disk usage of a file or directory tree.

    Symlinks are measured themselves and never followed. Unreadable
    entries below the top-level path contribute zero.

    Args:
        path: File or directory to measure.

    Returns:
        Size in bytes. A path that does not exist has size 0.

    Raises:
        OSError: If the top-level path exists but cannot be inspected.
    """
    try:
        st = os.lstat(path)
    except FileNotFoundError:
        return 0

    if not stat.S_ISDIR(st.st_mode):
        return allocated_bytes(st)

    return allocated_bytes(st) + _tree_usage(path)


def _tree_usage(directory: str) -> int:
    """Sum allocation of every descendant of ``directory``."""
    total = 0
    try:
        entries = list(os.scandir(directory))
    except OSError as e:
        logger.debug("Cannot list %s for size calculation: %s", directory, e)
        return 0

    for entry in entries:
        try:
            st = entry.stat(follow_symlinks=False)
        except OSError as e:
            logger.debug("Cannot stat %s for size calculation: %s", entry.path, e)
            continue
        total += allocated_bytes(st)
        if stat.S_ISDIR(st.st_mode):
            total += _tree_usage(entry.path)

    return total


def format_size(size_bytes: int | None) -> str:
    """Format a byte count as a human-readable string.

    Example:
        >>> format_size(1536)
        '1.50 KB'
    """
    if not size_bytes:
        return "0 B"
    size = float(size_bytes)
    for unit in ("B", "KB", "MB", "GB"):
        if abs(size) < 1024:
            return f"{size:.2f} {unit}" if unit != "B" else f"{int(size)} B"
        size /= 1024
    return f"{size:.2f} TB"
