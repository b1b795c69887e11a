"""Solid-color background renderer."""

from __future__ import annotations

from collections.abc import Sequence

from glsnap.color import Color
from glsnap.surface import COLOR_BUFFER_BIT, DEPTH_BUFFER_BIT, DrawingSurface


def draw_background(
    surface: DrawingSurface,
    color: Color | Sequence[float],
    *,
    legacy_swizzle: bool = False,
) -> None:
    """Fill the whole surface with *color* and reset its depth buffer.

    With ``legacy_swizzle`` the blue component also feeds the green channel
    and alpha is forced to 1, matching reference images produced by older
    releases.
    """
    if not isinstance(color, Color):
        color = Color.from_sequence(list(color))

    if legacy_swizzle:
        surface.clear_color(color.r, color.b, color.b, 1.0)
    else:
        surface.clear_color(color.r, color.g, color.b, color.a)
    surface.clear(COLOR_BUFFER_BIT | DEPTH_BUFFER_BIT)
