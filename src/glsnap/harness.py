"""Render/persist/compare harness.

A run moves through four states::

    INIT -> RENDERED_EXPECTED -> RENDERED_ACTUAL -> COMPARED

Snapshot writes run on an executor and return futures; the comparison
waits on both before it decodes anything.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from enum import Enum
from pathlib import Path

from glsnap.backend import open_surface
from glsnap.color import Color
from glsnap.config import HarnessConfig
from glsnap.errors import HarnessStateError
from glsnap.image_compare import ComparisonResult, check_images_async
from glsnap.renderer import draw_background
from glsnap.snapshot import save_snapshot_async
from glsnap.surface import DrawingSurface

log = logging.getLogger(__name__)


class HarnessState(Enum):
    INIT = "init"
    RENDERED_EXPECTED = "rendered-expected"
    RENDERED_ACTUAL = "rendered-actual"
    COMPARED = "compared"


class VisualTest:
    """One reference-image comparison against a single surface."""

    def __init__(
        self,
        surface: DrawingSurface,
        executor: Executor,
        config: HarnessConfig | None = None,
    ) -> None:
        self.surface = surface
        self.executor = executor
        self.config = config or HarnessConfig()
        self.state = HarnessState.INIT
        self.result: ComparisonResult | None = None
        self._expected_write: Future[Path] | None = None
        self._actual_write: Future[Path] | None = None

    def _advance(self, current: HarnessState, target: HarnessState) -> None:
        if self.state is not current:
            raise HarnessStateError(
                f"cannot move to {target.value}: state is {self.state.value}, "
                f"expected {current.value}"
            )
        self.state = target
        log.debug("harness -> %s", target.value)

    def _render(self, color: Color | Sequence[float], path: Path) -> Future[Path]:
        draw_background(self.surface, color, legacy_swizzle=self.config.legacy_swizzle)
        return save_snapshot_async(
            self.executor, self.surface, self.config.width, self.config.height, path
        )

    def render_expected(self, color: Color | Sequence[float]) -> Future[Path]:
        """Render *color* and write it as the reference image."""
        self._advance(HarnessState.INIT, HarnessState.RENDERED_EXPECTED)
        self._expected_write = self._render(color, self.config.expected_path)
        return self._expected_write

    def use_reference(self) -> Path:
        """Take the existing reference image as-is; nothing is written."""
        self._advance(HarnessState.INIT, HarnessState.RENDERED_EXPECTED)
        self._expected_write = None
        return self.config.expected_path

    def render_actual(self, color: Color | Sequence[float]) -> Future[Path]:
        """Render *color* and write it as the candidate image."""
        self._advance(HarnessState.RENDERED_EXPECTED, HarnessState.RENDERED_ACTUAL)
        self._actual_write = self._render(color, self.config.actual_path)
        return self._actual_write

    def compare(self) -> ComparisonResult:
        """Wait for both writes, then compare actual against expected."""
        self._advance(HarnessState.RENDERED_ACTUAL, HarnessState.COMPARED)
        writes = [w for w in (self._expected_write, self._actual_write) if w is not None]
        pending = check_images_async(
            self.executor,
            self.config.expected_path,
            self.config.actual_path,
            self.config,
            after=writes,
        )
        self.result = pending.result()
        log.debug(
            "compare finished: equal=%s error=%s", self.result.is_equal, self.result.error
        )
        return self.result


def run_visual_test(
    actual_color: Color | Sequence[float],
    *,
    expected_color: Color | Sequence[float] | None = None,
    config: HarnessConfig | None = None,
) -> ComparisonResult:
    """Run the full render/persist/compare cycle on a scoped surface.

    Without *expected_color* the checked-in reference is used, unless update
    mode is on or the reference is missing with ``create_missing`` set; then
    *actual_color* is rendered as the new reference first.
    """
    cfg = config or HarnessConfig()
    if expected_color is None:
        regenerate = cfg.update_reference or (
            cfg.create_missing and not cfg.expected_path.exists()
        )
        if regenerate:
            log.info("writing reference image %s", cfg.expected_path)
            expected_color = actual_color

    with open_surface(cfg.width, cfg.height) as surface:
        with ThreadPoolExecutor(max_workers=1, thread_name_prefix="glsnap") as pool:
            test = VisualTest(surface, pool, cfg)
            if expected_color is None:
                test.use_reference()
            else:
                test.render_expected(expected_color)
            test.render_actual(actual_color)
            return test.compare()
