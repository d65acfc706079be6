"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

import logging
import os
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Iterator[None]:
    """Keep tests away from the user's config and reporting toggles."""
    monkeypatch.delenv("WIPER_SHOW_WARNINGS", raising=False)
    monkeypatch.delenv("WIPER_SHOW_DETAILS", raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))

    wiper_logger = logging.getLogger("wiper")
    handlers = list(wiper_logger.handlers)
    level = wiper_logger.level
    propagate = wiper_logger.propagate
    yield
    wiper_logger.handlers[:] = handlers
    wiper_logger.setLevel(level)
    wiper_logger.propagate = propagate


@pytest.fixture
def home(tmp_path: Path) -> Path:
    """An empty fake home directory."""
    path = tmp_path / "home"
    path.mkdir()
    return path


@pytest.fixture
def make_file() -> Callable[[Path, int], Path]:
    """Factory creating a file with ``size`` random bytes."""

    def _make(path: Path, size: int = 0) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(os.urandom(size))
        return path

    return _make
