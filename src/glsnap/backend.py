"""Surface creation and scoped lifetime."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from glsnap.errors import BackendInitError, SurfaceError
from glsnap.surface import DrawingSurface

log = logging.getLogger(__name__)

MAX_SURFACE_SIZE = 16384


def create_surface(width: int, height: int) -> DrawingSurface:
    """Create a surface and set its viewport to the full size.

    Raises:
        BackendInitError: If the dimensions are unusable.
    """
    if not isinstance(width, int) or not isinstance(height, int):
        raise BackendInitError(f"surface size must be integers, got {width!r}x{height!r}")
    if width <= 0 or height <= 0:
        raise BackendInitError(f"surface size must be positive, got {width}x{height}")
    if width > MAX_SURFACE_SIZE or height > MAX_SURFACE_SIZE:
        raise BackendInitError(
            f"surface size {width}x{height} exceeds limit {MAX_SURFACE_SIZE}"
        )

    try:
        surface = DrawingSurface(width, height)
    except MemoryError as exc:
        raise BackendInitError(f"cannot allocate {width}x{height} surface") from exc
    try:
        surface.set_viewport(0, 0, width, height)
    except SurfaceError as exc:
        surface.release()
        raise BackendInitError(f"viewport setup failed: {exc}") from exc
    log.debug("surface %dx%d created", width, height)
    return surface


@contextmanager
def open_surface(width: int, height: int) -> Iterator[DrawingSurface]:
    """Yield a fresh surface and release it on every exit path."""
    surface = create_surface(width, height)
    try:
        yield surface
    finally:
        surface.release()
