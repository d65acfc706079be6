"""Cleanup resolution and execution engine.

This module provides candidate discovery (declarative targets,
application leftovers, large files), ignore filtering, size accounting,
path classification, the deletion policy, and the reclaimed-space ledger.
"""

from wiper.cleanup.classifier import DEFAULT_RULES, CategoryRule, classify
from wiper.cleanup.executor import (
    CleanupExecutor,
    Confirmer,
    ExecutionMode,
    InvocationError,
    resolve_mode,
    validate_invocation,
)
from wiper.cleanup.ignore import IgnoreFilter, expand_path
from wiper.cleanup.ledger import Ledger, LedgerEntry, aggregate_by_display_path
from wiper.cleanup.models import CandidateItem, CleanupTarget
from wiper.cleanup.operator import FilesystemOperator, RemovalResult
from wiper.cleanup.scanner import (
    ApplicationScanner,
    LargeFileScanner,
    Scanner,
    SystemScanner,
)
from wiper.cleanup.sizes import disk_usage, format_size
from wiper.cleanup.targets import get_cleanup_targets

__all__ = [
    "DEFAULT_RULES",
    "ApplicationScanner",
    "CandidateItem",
    "CategoryRule",
    "CleanupExecutor",
    "CleanupTarget",
    "Confirmer",
    "ExecutionMode",
    "FilesystemOperator",
    "IgnoreFilter",
    "InvocationError",
    "LargeFileScanner",
    "Ledger",
    "LedgerEntry",
    "RemovalResult",
    "Scanner",
    "SystemScanner",
    "aggregate_by_display_path",
    "classify",
    "disk_usage",
    "expand_path",
    "format_size",
    "get_cleanup_targets",
    "resolve_mode",
    "validate_invocation",
]
