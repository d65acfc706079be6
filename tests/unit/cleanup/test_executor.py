"""Unit tests for the cleanup executor.

Tests mode resolution, invocation validation, and the deletion policy of
each execution mode using a scripted confirmer and a fake operator.
"""

import logging
from collections.abc import Callable
from pathlib import Path

import pytest
from wiper.cleanup.executor import (
    CleanupExecutor,
    ExecutionMode,
    InvocationError,
    resolve_mode,
    validate_invocation,
)
from wiper.cleanup.ledger import Ledger
from wiper.cleanup.models import CandidateItem
from wiper.cleanup.operator import RemovalResult
from wiper.cleanup.sizes import disk_usage


class ScriptedConfirmer:
    """Answers prompts from a fixed script and records them."""

    def __init__(self, *answers: bool) -> None:
        self.answers = list(answers)
        self.prompts: list[str] = []

    def confirm(self, prompt: str) -> bool:
        self.prompts.append(prompt)
        return self.answers.pop(0)


class FakeOperator:
    """Pretends to delete paths; fails for the configured ones."""

    def __init__(self, sizes: dict[str, int], failing: frozenset[str] = frozenset()) -> None:
        self.sizes = sizes
        self.failing = failing
        self.removed: list[str] = []

    def remove(self, path: str) -> RemovalResult:
        if path in self.failing:
            return RemovalResult(path=path, success=False, error="Permission denied")
        self.removed.append(path)
        return RemovalResult(path=path, success=True, freed_bytes=self.sizes[path])


def _items(*sizes: int, category: str = "Junk") -> list[CandidateItem]:
    return [
        CandidateItem(display_path="/junk", path=f"/junk/{i}", size_bytes=size, category=category)
        for i, size in enumerate(sizes)
    ]


def _operator(items: list[CandidateItem], **kwargs: frozenset[str]) -> FakeOperator:
    return FakeOperator({i.path: i.size_bytes for i in items}, **kwargs)


class TestResolveMode:
    """Tests for resolve_mode."""

    @pytest.mark.parametrize(
        ("dry_run", "interactive", "application", "expected"),
        [
            (True, True, True, ExecutionMode.DRY_RUN),
            (False, True, True, ExecutionMode.INTERACTIVE),
            (False, False, True, ExecutionMode.APPLICATION_FORCE),
            (False, False, False, ExecutionMode.SINGLE_CONFIRM),
            (True, False, False, ExecutionMode.DRY_RUN),
        ],
    )
    def test_priority(
        self, dry_run: bool, interactive: bool, application: bool, expected: ExecutionMode
    ) -> None:
        """Dry-run beats interactive, which beats application mode."""
        mode = resolve_mode(dry_run=dry_run, interactive=interactive, application=application)

        assert mode is expected


class TestValidateInvocation:
    """Tests for validate_invocation."""

    def test_large_files_with_app_rejected(self) -> None:
        """Large-file mode cannot be combined with an application name."""
        with pytest.raises(InvocationError, match="--large-files"):
            validate_invocation("Foo", large_files=True)

    @pytest.mark.parametrize(
        ("app_name", "large_files"), [("Foo", False), (None, True), (None, False)]
    )
    def test_valid_combinations(self, app_name: str | None, large_files: bool) -> None:
        """Every other combination is accepted."""
        validate_invocation(app_name, large_files)


class TestDryRun:
    """Tests for DRY_RUN mode."""

    def test_estimate_without_deleting(self) -> None:
        """Three items of 10, 20 and 30 bytes estimate to 60 and nothing is removed."""
        items = _items(10, 20, 30)
        operator = _operator(items)
        confirmer = ScriptedConfirmer()
        executor = CleanupExecutor(ExecutionMode.DRY_RUN, confirmer, operator=operator)

        total = executor.run(items)

        assert total == 60
        assert executor.estimated.total_bytes() == 60
        assert len(executor.estimated) == 3
        assert all(not e.removed for e in executor.estimated.entries)
        assert len(executor.actual) == 0
        assert operator.removed == []
        assert confirmer.prompts == []

    def test_real_files_untouched(
        self, tmp_path: Path, make_file: Callable[[Path, int], Path]
    ) -> None:
        """Dry-run over real files leaves them in place and is repeatable."""
        paths = [make_file(tmp_path / name, 1000) for name in ("a", "b")]
        items = [
            CandidateItem(str(tmp_path), str(p), disk_usage(str(p)), "Junk") for p in paths
        ]

        first = CleanupExecutor(ExecutionMode.DRY_RUN, ScriptedConfirmer()).run(items)
        second = CleanupExecutor(ExecutionMode.DRY_RUN, ScriptedConfirmer()).run(items)

        assert first == second == sum(i.size_bytes for i in items)
        assert all(p.exists() for p in paths)


class TestSingleConfirm:
    """Tests for SINGLE_CONFIRM mode."""

    def test_accept_removes_all(self) -> None:
        """Accepting the batch removes every item."""
        items = _items(10, 20, 30)
        operator = _operator(items)
        confirmer = ScriptedConfirmer(True)
        executor = CleanupExecutor(ExecutionMode.SINGLE_CONFIRM, confirmer, operator=operator)

        total = executor.run(items)

        assert total == 60
        assert operator.removed == [i.path for i in items]
        assert executor.actual.total_bytes(removed_only=True) == 60
        assert executor.actual.removed_count == 3
        assert confirmer.prompts == ["Do you want to clean up these items (Total: 60 B)?"]

    def test_decline_removes_nothing(self) -> None:
        """Declining returns 0 and records no removals."""
        items = _items(10, 20, 30)
        operator = _operator(items)
        executor = CleanupExecutor(
            ExecutionMode.SINGLE_CONFIRM, ScriptedConfirmer(False), operator=operator
        )

        total = executor.run(items)

        assert total == 0
        assert operator.removed == []
        assert executor.actual.removed_count == 0
        assert executor.estimated.total_bytes() == 60

    def test_failure_continues_batch(self) -> None:
        """A failed deletion is recorded as kept and the batch goes on."""
        items = _items(10, 20, 30)
        operator = _operator(items, failing=frozenset({items[1].path}))
        executor = CleanupExecutor(
            ExecutionMode.SINGLE_CONFIRM, ScriptedConfirmer(True), operator=operator
        )

        total = executor.run(items)

        assert total == 40
        assert operator.removed == [items[0].path, items[2].path]
        failed = executor.actual.entries[1]
        assert failed.removed is False
        assert failed.size_bytes == 20

    def test_failure_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        """A failed deletion is logged as an error."""
        items = _items(10)
        operator = _operator(items, failing=frozenset({items[0].path}))
        executor = CleanupExecutor(
            ExecutionMode.SINGLE_CONFIRM, ScriptedConfirmer(True), operator=operator
        )

        with caplog.at_level(logging.ERROR, logger="wiper"):
            executor.run(items)

        assert "Failed to remove /junk/0: Permission denied" in caplog.text


class TestInteractive:
    """Tests for INTERACTIVE mode."""

    def test_accept_first_decline_second(self) -> None:
        """Accepting A and declining B reclaims only A."""
        items = _items(50, 50)
        operator = _operator(items)
        confirmer = ScriptedConfirmer(True, False)
        executor = CleanupExecutor(ExecutionMode.INTERACTIVE, confirmer, operator=operator)

        total = executor.run(items)

        assert total == 50
        assert [(e.path, e.removed, e.size_bytes) for e in executor.actual.entries] == [
            ("/junk/0", True, 50),
            ("/junk/1", False, 50),
        ]
        assert executor.actual.total_bytes(removed_only=True) == 50
        assert operator.removed == ["/junk/0"]

    def test_prompt_per_item(self) -> None:
        """Each prompt names the path, size and category."""
        items = _items(1536, category="User Caches")
        confirmer = ScriptedConfirmer(False)

        CleanupExecutor(ExecutionMode.INTERACTIVE, confirmer, operator=_operator(items)).run(items)

        assert confirmer.prompts == ["Delete /junk/0 (1.50 KB, Category: User Caches)?"]

    def test_total_matches_removed_entries(self) -> None:
        """The returned total equals the removed entries in the actual ledger."""
        items = _items(5, 7, 11, 13)
        operator = _operator(items, failing=frozenset({items[2].path}))
        executor = CleanupExecutor(
            ExecutionMode.INTERACTIVE,
            ScriptedConfirmer(True, False, True, True),
            operator=operator,
        )

        total = executor.run(items)

        assert total == 5 + 13
        assert total == executor.actual.total_bytes(removed_only=True)
        assert len(executor.actual) == 4


class TestApplicationForce:
    """Tests for APPLICATION_FORCE mode."""

    def test_removes_without_prompt(self) -> None:
        """Everything is removed without asking."""
        items = _items(1, 2, 3)
        operator = _operator(items)
        confirmer = ScriptedConfirmer()

        total = CleanupExecutor(
            ExecutionMode.APPLICATION_FORCE, confirmer, operator=operator
        ).run(items)

        assert total == 6
        assert confirmer.prompts == []
        assert operator.removed == [i.path for i in items]

    def test_real_deletion(self, tmp_path: Path, make_file: Callable[[Path, int], Path]) -> None:
        """The default operator deletes real files."""
        path = make_file(tmp_path / "Foo.app" / "binary", 5000)
        bundle = path.parent
        size = disk_usage(str(bundle))
        items = [CandidateItem(str(bundle), str(bundle), size, "Application Bundle")]

        total = CleanupExecutor(ExecutionMode.APPLICATION_FORCE, ScriptedConfirmer()).run(items)

        assert total == size
        assert not bundle.exists()


class TestExecutorCommon:
    """Behavior shared by every mode."""

    @pytest.mark.parametrize("mode", list(ExecutionMode))
    def test_empty_candidates(self, mode: ExecutionMode) -> None:
        """No candidates returns 0 without prompting or previewing."""
        previews: list[Ledger] = []
        confirmer = ScriptedConfirmer()
        executor = CleanupExecutor(
            mode,
            confirmer,
            operator=FakeOperator({}),
            on_preview=lambda ledger, _: previews.append(ledger),
        )

        assert executor.run([]) == 0
        assert previews == []
        assert confirmer.prompts == []

    @pytest.mark.parametrize("mode", list(ExecutionMode))
    def test_estimate_recorded_before_prompt(self, mode: ExecutionMode) -> None:
        """The preview sees the full estimate before any confirmation."""
        items = _items(10, 20)
        seen: list[tuple[int, int]] = []

        class _Confirmer:
            def confirm(self, prompt: str) -> bool:
                seen.append((len(executor.estimated), len(executor.actual)))
                return False

        executor = CleanupExecutor(
            mode,
            _Confirmer(),
            operator=_operator(items),
            on_preview=lambda ledger, candidates: seen.append((len(ledger), len(candidates))),
        )
        executor.run(items)

        assert seen[0] == (2, 2)
        assert all(estimated == 2 for estimated, _ in seen)

    def test_accepts_iterator(self) -> None:
        """Candidates may be a one-shot iterator."""
        items = _items(4, 6)

        total = CleanupExecutor(ExecutionMode.DRY_RUN, ScriptedConfirmer()).run(iter(items))

        assert total == 10

    def test_show_details_logs_removals(self, caplog: pytest.LogCaptureFixture) -> None:
        """With details enabled every removal is logged."""
        items = _items(3)
        executor = CleanupExecutor(
            ExecutionMode.APPLICATION_FORCE,
            ScriptedConfirmer(),
            operator=_operator(items),
            show_details=True,
        )

        with caplog.at_level(logging.INFO, logger="wiper"):
            executor.run(items)

        assert "Removed /junk/0" in caplog.text

    def test_mode_property(self) -> None:
        """The executor exposes its mode."""
        executor = CleanupExecutor(ExecutionMode.INTERACTIVE, ScriptedConfirmer())

        assert executor.mode is ExecutionMode.INTERACTIVE
