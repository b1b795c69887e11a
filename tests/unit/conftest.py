"""Shared helpers for unit tests."""

from __future__ import annotations

from pathlib import Path

import pytest
from PIL import Image


def solid_png(
    path: Path,
    color: tuple[int, ...] | int,
    size: tuple[int, int] = (4, 4),
    mode: str = "RGBA",
) -> Path:
    """Write a solid-color image to *path* and return it."""
    Image.new(mode, size, color).save(path)
    return path


@pytest.fixture
def make_png(tmp_path: Path):
    """Factory fixture: ``make_png(name, color, size=(4, 4), mode="RGBA")``."""

    def _make(
        name: str,
        color: tuple[int, ...] | int,
        size: tuple[int, int] = (4, 4),
        mode: str = "RGBA",
    ) -> Path:
        return solid_png(tmp_path / name, color, size, mode)

    return _make
