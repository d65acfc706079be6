"""Confirmation and deletion policy for cleanup candidates.

The executor consumes the full candidate list of one run and applies
exactly one :class:`ExecutionMode`:

- ``DRY_RUN``: nothing is deleted; the estimate is returned.
- ``INTERACTIVE``: every candidate is confirmed individually.
- ``APPLICATION_FORCE``: everything is deleted without prompting; the
  caller already obtained one confirmation for the whole application.
- ``SINGLE_CONFIRM``: one confirmation naming the total size covers the
  whole batch.

Whatever the mode, the estimated ledger is filled from every candidate
before any prompt is shown or any file is touched.
"""

import logging
from collections.abc import Callable, Iterable
from enum import Enum
from typing import Protocol

from wiper.cleanup.ledger import Ledger
from wiper.cleanup.models import CandidateItem
from wiper.cleanup.operator import FilesystemOperator, RemovalResult
from wiper.cleanup.sizes import format_size
from wiper.core import config

logger = logging.getLogger(__name__)


class ExecutionMode(str, Enum):
    """How candidates are confirmed and deleted.

    Attributes:
        DRY_RUN: Report only, never delete.
        INTERACTIVE: Ask before deleting each candidate.
        APPLICATION_FORCE: Delete all candidates without further prompts.
        SINGLE_CONFIRM: Ask once for the whole batch.
    """

    DRY_RUN = "dry_run"
    INTERACTIVE = "interactive"
    APPLICATION_FORCE = "application_force"
    SINGLE_CONFIRM = "single_confirm"


class InvocationError(Exception):
    """Raised when cleanup options contradict each other."""


def validate_invocation(app_name: str | None, large_files: bool) -> None:
    """Reject option combinations before any scanning starts.

    Raises:
        InvocationError: If large-file mode is combined with an application name.
    """
    if large_files and app_name:
        msg = "the --large-files flag cannot be used with an application name"
        raise InvocationError(msg)


def resolve_mode(*, dry_run: bool, interactive: bool, application: bool) -> ExecutionMode:
    """Collapse mode flags into a single execution mode.

    Flags are checked in priority order: dry-run, interactive,
    application, then the single-confirmation default.
    """
    if dry_run:
        return ExecutionMode.DRY_RUN
    if interactive:
        return ExecutionMode.INTERACTIVE
    if application:
        return ExecutionMode.APPLICATION_FORCE
    return ExecutionMode.SINGLE_CONFIRM


class Confirmer(Protocol):
    """Yes/no confirmation capability."""

    def confirm(self, prompt: str) -> bool:
        """Ask ``prompt`` and return True only for an explicit yes."""
        ...


class Remover(Protocol):
    """Single-path deletion capability."""

    def remove(self, path: str) -> RemovalResult: ...


PreviewCallback = Callable[[Ledger, list[CandidateItem]], None]


class CleanupExecutor:
    """Applies an execution mode to a batch of candidates.

    Args:
        mode: Execution mode for the run.
        confirmer: Source of yes/no answers.
        operator: Performs deletions. Defaults to FilesystemOperator.
        show_details: Log each removed item. Defaults to the
            ``WIPER_SHOW_DETAILS`` environment toggle.
        on_preview: Called with the estimated ledger and the candidates
            after the estimate is recorded and before any prompt.

    Attributes:
        estimated: Ledger of every candidate, removed=False.
        actual: Ledger of every attempted deletion.
    """

    def __init__(
        self,
        mode: ExecutionMode,
        confirmer: Confirmer,
        *,
        operator: Remover | None = None,
        show_details: bool | None = None,
        on_preview: PreviewCallback | None = None,
    ) -> None:
        self._mode = mode
        self._confirmer = confirmer
        self._operator = operator if operator is not None else FilesystemOperator()
        self._show_details = config.show_details() if show_details is None else show_details
        self._on_preview = on_preview
        self.estimated = Ledger()
        self.actual = Ledger()

    @property
    def mode(self) -> ExecutionMode:
        return self._mode

    def run(self, candidates: Iterable[CandidateItem]) -> int:
        """Process all candidates of one run.

        Args:
            candidates: Discovered candidates; consumed once.

        Returns:
            Bytes reclaimed, or the estimated total in dry-run mode.
            A declined batch confirmation returns 0.
        """
        items = list(candidates)
        if not items:
            logger.info("No items found for cleanup.")
            return 0

        for item in items:
            self.estimated.add(item.path, item.size_bytes, False, item.category)

        if self._on_preview is not None:
            self._on_preview(self.estimated, items)

        if self._mode is ExecutionMode.DRY_RUN:
            return self.estimated.total_bytes()

        if self._mode is ExecutionMode.INTERACTIVE:
            logger.info("Starting interactive cleanup. You will be prompted for each item.")
            reclaimed = 0
            for item in items:
                prompt = (
                    f"Delete {item.path} ({format_size(item.size_bytes)}, "
                    f"Category: {item.category})?"
                )
                if self._confirmer.confirm(prompt):
                    reclaimed += self._remove(item)
                else:
                    logger.info("Skipped %s", item.path)
                    self.actual.add(item.path, item.size_bytes, False, item.category)
            return reclaimed

        if self._mode is ExecutionMode.SINGLE_CONFIRM:
            total = self.estimated.total_bytes()
            prompt = f"Do you want to clean up these items (Total: {format_size(total)})?"
            if not self._confirmer.confirm(prompt):
                logger.info("Cleanup cancelled by user.")
                return 0

        return sum(self._remove(item) for item in items)

    def _remove(self, item: CandidateItem) -> int:
        """Delete one candidate and record the outcome in the actual ledger."""
        result = self._operator.remove(item.path)
        if not result.success:
            logger.error("Failed to remove %s: %s", item.path, result.error)
            self.actual.add(item.path, item.size_bytes, False, item.category)
            return 0

        self.actual.add(item.path, result.freed_bytes, True, item.category)
        if self._show_details:
            logger.info("Removed %s", item.path)
        return result.freed_bytes
