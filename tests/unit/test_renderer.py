"""Tests for the background renderer."""

from __future__ import annotations

import numpy as np
import pytest

from glsnap.color import Color
from glsnap.errors import SurfaceError
from glsnap.renderer import draw_background
from glsnap.surface import DrawingSurface


def _pixel(surf: DrawingSurface) -> list[int]:
    pixels = surf.read_pixels(0, 0, surf.width, surf.height)
    assert np.all(pixels == pixels[0, 0])
    return pixels[0, 0].tolist()


class TestDrawBackground:
    def test_red(self, surface: DrawingSurface) -> None:
        draw_background(surface, (1, 0, 0))
        assert _pixel(surface) == [255, 0, 0, 255]

    def test_channels_in_order(self, surface: DrawingSurface) -> None:
        draw_background(surface, Color(0.2, 0.4, 0.6))
        assert _pixel(surface) == [51, 102, 153, 255]

    def test_alpha(self, surface: DrawingSurface) -> None:
        draw_background(surface, [0.0, 0.0, 1.0, 0.0])
        assert _pixel(surface) == [0, 0, 255, 0]

    def test_overwrites_previous_content(self, surface: DrawingSurface) -> None:
        draw_background(surface, (0, 1, 0))
        draw_background(surface, (0, 0, 1))
        assert _pixel(surface) == [0, 0, 255, 255]

    def test_resets_depth(self, surface: DrawingSurface) -> None:
        surface._depth[...] = 0.25
        draw_background(surface, (1, 1, 1))
        assert np.all(surface.read_depth() == 1.0)

    def test_depth_uses_clear_value(self, surface: DrawingSurface) -> None:
        surface.clear_depth(0.5)
        draw_background(surface, (1, 1, 1))
        assert np.all(surface.read_depth() == np.float32(0.5))

    def test_rejects_non_finite_sequence(self, surface: DrawingSurface) -> None:
        with pytest.raises(ValueError, match="non-finite"):
            draw_background(surface, (float("nan"), 0, 0))

    def test_idempotent(self, surface: DrawingSurface) -> None:
        draw_background(surface, (0.3, 0.6, 0.9))
        first = surface.read_pixels(0, 0, 64, 64)
        draw_background(surface, (0.3, 0.6, 0.9))
        assert np.array_equal(first, surface.read_pixels(0, 0, 64, 64))

    def test_released_surface(self) -> None:
        surf = DrawingSurface(2, 2)
        surf.release()
        with pytest.raises(SurfaceError):
            draw_background(surf, (1, 0, 0))


class TestLegacySwizzle:
    def test_blue_feeds_green(self, surface: DrawingSurface) -> None:
        draw_background(surface, Color(0.2, 0.4, 0.6), legacy_swizzle=True)
        assert _pixel(surface) == [51, 153, 153, 255]

    def test_alpha_forced_opaque(self, surface: DrawingSurface) -> None:
        draw_background(surface, Color(0.0, 0.0, 1.0, 0.0), legacy_swizzle=True)
        assert _pixel(surface) == [0, 255, 255, 255]

    def test_red_unaffected(self, surface: DrawingSurface) -> None:
        draw_background(surface, (1, 0, 0), legacy_swizzle=True)
        assert _pixel(surface) == [255, 0, 0, 255]
