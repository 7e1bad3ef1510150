"""Root pytest configuration for all tests."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest

from tests.utils import T0, set_mtime


@pytest.fixture
def existing_file(tmp_path: Path) -> Path:
    """A file with a known modification time."""
    path = tmp_path / "existing.txt"
    path.write_text("original\n")
    set_mtime(path, T0)
    return path


@pytest.fixture
def missing_file(tmp_path: Path) -> Path:
    """A path inside tmp_path that does not exist yet."""
    return tmp_path / "missing.txt"


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Keep tests away from the real user config and environment overrides."""
    from fwatch.config import reset_config

    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    monkeypatch.delenv("FWATCH_LOG", raising=False)
    monkeypatch.delenv("FWATCH_POLL_INTERVAL", raising=False)
    reset_config()
    yield
    reset_config()
