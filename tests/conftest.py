"""Shared fixtures for path_handoff tests."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, List

import pytest

from path_handoff.config import HandoffConfig


class FakeRunner:
    """Stands in for osascript: records scripts, replays canned output or errors."""

    def __init__(self, output: str = "", error: Exception | None = None) -> None:
        self.output = output
        self.error = error
        self.scripts: List[str] = []

    def __call__(self, script: str) -> str:
        self.scripts.append(script)
        if self.error is not None:
            raise self.error
        return self.output


@pytest.fixture
def make_runner() -> Callable[..., FakeRunner]:
    return FakeRunner


@pytest.fixture
def cloud_storage(tmp_path: Path) -> Path:
    """An empty ~/Library/CloudStorage lookalike."""
    storage = tmp_path / "CloudStorage"
    storage.mkdir()
    return storage


@pytest.fixture
def cloud_config(cloud_storage: Path) -> HandoffConfig:
    return HandoffConfig(cloud_storage_dir=cloud_storage)
