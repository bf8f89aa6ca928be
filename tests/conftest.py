# tests/conftest.py

"""Shared pytest fixtures for the cardtrend test suite."""

from collections.abc import Generator
from pathlib import Path

import pytest

from cardtrend.config.settings import Settings


@pytest.fixture(autouse=True)
def isolated_logs_dir(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch,
) -> Generator[Path, None, None]:
    """Keep run logs written during tests out of the project tree."""
    logs_dir = tmp_path / "logs"
    monkeypatch.setattr(Settings, "LOGS_DIR", logs_dir)
    yield logs_dir
