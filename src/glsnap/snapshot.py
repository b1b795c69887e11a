"""Surface readback and PNG persistence."""

from __future__ import annotations

import logging
from concurrent.futures import Executor, Future
from pathlib import Path

import numpy as np
from PIL import Image

from glsnap.surface import DrawingSurface

log = logging.getLogger(__name__)


def read_snapshot(surface: DrawingSurface, width: int, height: int) -> np.ndarray:
    """Read ``width*height`` RGBA pixels and return them top row first.

    Raises:
        ValueError: If the requested size exceeds the surface.
    """
    pixels = surface.read_pixels(0, 0, width, height)
    return np.ascontiguousarray(pixels[::-1])


def write_png(pixels: np.ndarray, path: Path) -> Path:
    """Encode an RGBA array as PNG at *path*; the file is closed on return."""
    path.parent.mkdir(parents=True, exist_ok=True)
    image = Image.fromarray(np.asarray(pixels, dtype=np.uint8))
    with path.open("wb") as fh:
        image.save(fh, format="PNG")
    log.debug("wrote %dx%d snapshot to %s", image.width, image.height, path)
    return path


def save_snapshot(surface: DrawingSurface, width: int, height: int, path: Path | str) -> Path:
    """Read back the surface and write it to *path* as PNG.

    Raises:
        OSError: If the file cannot be written.
        ValueError: If the requested size exceeds the surface.
    """
    return write_png(read_snapshot(surface, width, height), Path(path))


def save_snapshot_async(
    executor: Executor,
    surface: DrawingSurface,
    width: int,
    height: int,
    path: Path | str,
) -> Future[Path]:
    """Read back now and encode/write on *executor*.

    The readback stays on the calling thread so the surface is only touched
    by its owner. The returned future resolves once the file is fully
    written, or raises the write error.
    """
    pixels = read_snapshot(surface, width, height)
    return executor.submit(write_png, pixels, Path(path))
