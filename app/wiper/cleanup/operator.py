"""Filesystem deletion operator.

Removes one path at a time and reports the outcome as a value, so a
failure on one item never interrupts the rest of a batch.
"""

import os
import shutil
from dataclasses import dataclass

from wiper.cleanup.sizes import disk_usage


@dataclass(frozen=True, slots=True)
class RemovalResult:
    """Result of a single deletion.

    Attributes:
        path: Absolute path that was operated on.
        success: Whether the path was removed.
        freed_bytes: On-disk size measured just before removal.
        error: Error message if the removal failed, None otherwise.
    """

    path: str
    success: bool
    freed_bytes: int = 0
    error: str | None = None


class FilesystemOperator:
    """Deletes files, symlinks and directory trees.

    Directories are removed recursively; symlinks are removed without
    touching their targets.
    """

    def remove(self, path: str) -> RemovalResult:
        """Delete a single filesystem path.

        Args:
            path: Absolute filesystem path to delete.

        Returns:
            RemovalResult indicating success (with the freed size) or failure.
        """
        try:
            if not os.path.lexists(path):
                return RemovalResult(
                    path=path,
                    success=False,
                    error=f"Path does not exist: {path}",
                )

            size = disk_usage(path)

            # Directories (but not symlinks to directories)
            if os.path.isdir(path) and not os.path.islink(path):
                shutil.rmtree(path)
            else:
                os.unlink(path)

        except OSError as e:
            return RemovalResult(path=path, success=False, error=str(e))

        return RemovalResult(path=path, success=True, freed_bytes=size)
