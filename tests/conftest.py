"""Shared test fixtures.

Everything here runs without network or Node.js: orchestrator tests use
``BareDirectoryGenerator`` or in-process fakes instead of create-next-app.
"""

from __future__ import annotations

import os
import sys
from collections.abc import Iterator
from pathlib import Path

import pytest
from loguru import logger

from nextmfe.scaffold.models.status import ScaffoldStatus
from nextmfe.scaffold.settings import get_settings


class RecordingReporter:
    """Reporter that keeps every status for assertions."""

    def __init__(self) -> None:
        self.statuses: list[ScaffoldStatus] = []

    def report(self, status: ScaffoldStatus) -> None:
        self.statuses.append(status)

    @property
    def stages(self) -> list[str]:
        return [s.stage.value for s in self.statuses]


@pytest.fixture(autouse=True)
def _fresh_settings(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Drop NEXTMFE_* overrides from the host env and the settings cache."""
    for key in list(os.environ):
        if key.startswith("NEXTMFE_"):
            monkeypatch.delenv(key)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def reporter() -> RecordingReporter:
    return RecordingReporter()


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """An empty workspace directory."""
    root = tmp_path / "ws"
    root.mkdir()
    return root


@pytest.fixture(autouse=True)
def _reset_loguru() -> Iterator[None]:
    """Drop sinks bound to streams that CliRunner closes after each invoke."""
    yield
    logger.remove()
    logger.add(sys.stderr, level="WARNING")
