"""wiper - reclaim disk space on macOS.

Finds leftover application files, stale caches and temporary files, and
oversized files, previews how much space they occupy, and deletes them
under the confirmation policy the operator chooses.
"""

__version__ = "0.1.0"
