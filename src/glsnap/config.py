"""Harness configuration."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

from glsnap.backend import MAX_SURFACE_SIZE

UPDATE_ENV = "GLSNAP_UPDATE_REFERENCE"

_SIZE_RE = re.compile(r"^(\d+)[xX](\d+)$")
_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class HarnessConfig:
    width: int = 64
    height: int = 64
    tolerance: int = 0
    compare_alpha: bool = True
    threshold: float = 0.0
    legacy_swizzle: bool = False
    expected_path: Path = Path("expected.png")
    actual_path: Path = Path("actual.png")
    diff_path: Path | None = None
    update_reference: bool = False
    create_missing: bool = False

    def __post_init__(self) -> None:
        for name in ("width", "height"):
            value = getattr(self, name)
            if not 0 < value <= MAX_SURFACE_SIZE:
                raise ValueError(f"{name} must be in 1..{MAX_SURFACE_SIZE}, got {value}")
        if not 0 <= self.tolerance <= 255:
            raise ValueError(f"tolerance must be in 0..255, got {self.tolerance}")
        if not 0.0 <= self.threshold <= 100.0:
            raise ValueError(f"threshold must be in 0..100, got {self.threshold}")
        object.__setattr__(self, "expected_path", Path(self.expected_path))
        object.__setattr__(self, "actual_path", Path(self.actual_path))
        if self.diff_path is not None:
            object.__setattr__(self, "diff_path", Path(self.diff_path))

    @classmethod
    def from_env(cls, **overrides: Any) -> HarnessConfig:
        """Build a config, enabling update mode when $GLSNAP_UPDATE_REFERENCE is set."""
        if "update_reference" not in overrides:
            flag = os.environ.get(UPDATE_ENV, "").strip().lower()
            overrides["update_reference"] = flag in _TRUTHY
        return cls(**overrides)

    def with_overrides(self, **changes: Any) -> HarnessConfig:
        return replace(self, **changes)


def parse_size(text: str) -> tuple[int, int]:
    """Parse ``WxH`` into ``(width, height)``."""
    match = _SIZE_RE.match(text.strip())
    if not match:
        raise ValueError(f"invalid size {text!r}; use WxH, e.g. 64x64")
    return int(match.group(1)), int(match.group(2))
