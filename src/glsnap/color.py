"""Color values and parsing."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass

_HEX_RE = re.compile(r"^#?([0-9a-fA-F]{6}|[0-9a-fA-F]{8})$")


@dataclass(frozen=True)
class Color:
    """Normalized RGBA intensities, nominally in [0, 1]."""

    r: float
    g: float
    b: float
    a: float = 1.0

    def __getitem__(self, index: int) -> float:
        return self.as_tuple()[index]

    def __len__(self) -> int:
        return 4

    def as_tuple(self) -> tuple[float, float, float, float]:
        return (self.r, self.g, self.b, self.a)

    @classmethod
    def from_sequence(cls, values: tuple[float, ...] | list[float]) -> Color:
        """Build a Color from 3 or 4 components."""
        if len(values) not in (3, 4):
            raise ValueError(f"expected 3 or 4 color components, got {len(values)}")
        components = [float(v) for v in values]
        if not all(math.isfinite(v) for v in components):
            raise ValueError(f"non-finite color component in {tuple(components)}")
        return cls(*components)


def parse_color(text: str) -> Color:
    """Parse ``r,g,b[,a]`` floats or ``#rrggbb[aa]`` hex into a Color.

    Raises:
        ValueError: If *text* is neither form.
    """
    text = text.strip()
    match = _HEX_RE.match(text)
    if match and (text.startswith("#") or "," not in text):
        digits = match.group(1)
        channels = [int(digits[i : i + 2], 16) / 255.0 for i in range(0, len(digits), 2)]
        return Color.from_sequence(channels)

    parts = [p.strip() for p in text.split(",")]
    try:
        values = [float(p) for p in parts]
    except ValueError:
        raise ValueError(f"invalid color {text!r}; use r,g,b[,a] or #rrggbb[aa]") from None
    return Color.from_sequence(values)
