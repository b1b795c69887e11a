"""Shared fixtures for glsnap test suite."""

from __future__ import annotations

from collections.abc import Generator
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

import pytest

from glsnap.backend import open_surface
from glsnap.config import UPDATE_ENV, HarnessConfig
from glsnap.surface import DrawingSurface


@pytest.fixture(autouse=True)
def _no_update_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's GLSNAP_UPDATE_REFERENCE from leaking into tests."""
    monkeypatch.delenv(UPDATE_ENV, raising=False)


@pytest.fixture
def surface() -> Generator[DrawingSurface, None, None]:
    """A 64x64 surface, released after the test."""
    with open_surface(64, 64) as surf:
        yield surf


@pytest.fixture
def pool() -> Generator[ThreadPoolExecutor, None, None]:
    """Single-worker executor, matching the harness."""
    with ThreadPoolExecutor(max_workers=1) as executor:
        yield executor


@pytest.fixture
def config(tmp_path: Path) -> HarnessConfig:
    """Default config with artifacts under tmp_path."""
    return HarnessConfig(
        expected_path=tmp_path / "expected.png",
        actual_path=tmp_path / "actual.png",
    )
