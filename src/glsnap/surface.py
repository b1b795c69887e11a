"""Software off-screen drawing surface with GL-style clear and readback.

Buffers are stored bottom-up (row 0 is the bottom of the surface), the way
``glReadPixels`` reports them. Callers that want image order flip the rows.
"""

from __future__ import annotations

import logging
import math

import numpy as np

from glsnap.errors import SurfaceError

log = logging.getLogger(__name__)

COLOR_BUFFER_BIT = 0x00004000
DEPTH_BUFFER_BIT = 0x00000100
STENCIL_BUFFER_BIT = 0x00000400

_ALL_BITS = COLOR_BUFFER_BIT | DEPTH_BUFFER_BIT | STENCIL_BUFFER_BIT


def _to_unorm8(value: float) -> int:
    """Clamp to [0, 1] and quantize to an 8-bit channel. NaN maps to 0."""
    value = float(value)
    if math.isnan(value):
        return 0
    clamped = min(max(value, 0.0), 1.0)
    return int(round(clamped * 255.0))


class DrawingSurface:
    """Fixed-size RGBA8 color buffer plus depth and stencil buffers."""

    def __init__(self, width: int, height: int) -> None:
        self.width = width
        self.height = height
        self.viewport: tuple[int, int, int, int] = (0, 0, width, height)
        self._color = np.zeros((height, width, 4), dtype=np.uint8)
        self._depth = np.ones((height, width), dtype=np.float32)
        self._stencil = np.zeros((height, width), dtype=np.uint8)
        self._clear_color: tuple[int, int, int, int] = (0, 0, 0, 0)
        self._clear_depth = 1.0
        self._clear_stencil = 0
        self._released = False

    @property
    def released(self) -> bool:
        return self._released

    def _check_alive(self) -> None:
        if self._released:
            raise SurfaceError("surface has been released")

    def set_viewport(self, x: int, y: int, width: int, height: int) -> None:
        self._check_alive()
        if width < 0 or height < 0:
            raise SurfaceError(f"invalid viewport size {width}x{height}")
        self.viewport = (x, y, width, height)

    def clear_color(self, r: float, g: float, b: float, a: float) -> None:
        """Set the color used by subsequent color-buffer clears."""
        self._check_alive()
        self._clear_color = (_to_unorm8(r), _to_unorm8(g), _to_unorm8(b), _to_unorm8(a))

    def clear_depth(self, depth: float) -> None:
        self._check_alive()
        self._clear_depth = min(max(float(depth), 0.0), 1.0)

    def clear_stencil(self, value: int) -> None:
        self._check_alive()
        self._clear_stencil = int(value) & 0xFF

    def clear(self, mask: int) -> None:
        """Overwrite every buffer selected by *mask* with its clear value."""
        self._check_alive()
        if mask & ~_ALL_BITS:
            raise SurfaceError(f"invalid clear mask 0x{mask:x}")
        if mask & COLOR_BUFFER_BIT:
            self._color[...] = self._clear_color
        if mask & DEPTH_BUFFER_BIT:
            self._depth[...] = self._clear_depth
        if mask & STENCIL_BUFFER_BIT:
            self._stencil[...] = self._clear_stencil
        log.debug("clear mask=0x%x color=%s", mask, self._clear_color)

    def read_pixels(self, x: int, y: int, width: int, height: int) -> np.ndarray:
        """Return a copy of the RGBA pixels in the given rectangle, bottom-up.

        Raises:
            ValueError: If the rectangle leaves the surface.
        """
        self._check_alive()
        if width <= 0 or height <= 0:
            raise ValueError(f"invalid readback size {width}x{height}")
        if x < 0 or y < 0 or x + width > self.width or y + height > self.height:
            raise ValueError(
                f"readback {width}x{height}+{x}+{y} exceeds surface {self.width}x{self.height}"
            )
        return self._color[y : y + height, x : x + width].copy()

    def read_depth(self) -> np.ndarray:
        self._check_alive()
        return self._depth.copy()

    def read_stencil(self) -> np.ndarray:
        self._check_alive()
        return self._stencil.copy()

    def release(self) -> None:
        """Drop the buffers. Safe to call more than once."""
        if self._released:
            return
        self._released = True
        del self._color, self._depth, self._stencil
        log.debug("surface %dx%d released", self.width, self.height)

    def __repr__(self) -> str:
        state = "released" if self._released else "live"
        return f"DrawingSurface({self.width}x{self.height}, {state})"
