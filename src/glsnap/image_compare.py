"""Pixel-level image comparison utility."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from concurrent.futures import Executor, Future
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

import numpy as np
from PIL import Image, UnidentifiedImageError

if TYPE_CHECKING:
    from glsnap.config import HarnessConfig

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class CompareResult:
    """Result of comparing two images pixel-by-pixel."""

    identical: bool
    diff_pixels: int
    total_pixels: int
    diff_ratio: float
    max_delta: int
    diff_image: Path | None


@dataclass(frozen=True)
class ComparisonResult:
    """Equality verdict plus the reason the comparison could not run, if any.

    ``is_equal`` is meaningless when ``error`` is set.
    """

    is_equal: bool
    error: str | None = None
    detail: CompareResult | None = None

    @property
    def passed(self) -> bool:
        return self.error is None and self.is_equal


def compare_images(
    path_a: Path,
    path_b: Path,
    threshold: float = 0.0,
    diff_output: Path | None = None,
    *,
    tolerance: int = 0,
    compare_alpha: bool = True,
) -> CompareResult:
    """Compare two images pixel-by-pixel.

    Args:
        path_a: Path to the first (expected) image.
        path_b: Path to the second (actual) image.
        threshold: Maximum diff ratio (%) to still count as identical.
        diff_output: If set, write a diff visualization PNG here when pixels
            differ (creating parent directories), or remove it when none do.
        tolerance: Largest per-channel delta that still counts as equal.
        compare_alpha: If False, only RGB channels are compared.

    Returns:
        CompareResult with comparison details.

    Raises:
        ValueError: If the two images have different dimensions.
        FileNotFoundError: If either path does not exist.
        PIL.UnidentifiedImageError: If either file is not a valid image.
    """
    with Image.open(path_a) as src_a:
        img_a = src_a.convert("RGBA")
    with Image.open(path_b) as src_b:
        img_b = src_b.convert("RGBA")

    if img_a.size != img_b.size:
        raise ValueError(f"size mismatch: {img_a.size} vs {img_b.size}")

    arr_a = np.array(img_a, dtype=np.int16)
    arr_b = np.array(img_b, dtype=np.int16)
    if not compare_alpha:
        arr_a = arr_a[..., :3]
        arr_b = arr_b[..., :3]

    delta = np.abs(arr_a - arr_b)
    mask = np.any(delta > tolerance, axis=2)
    diff_pixels = int(np.count_nonzero(mask))
    total_pixels = img_a.size[0] * img_a.size[1]
    diff_ratio = diff_pixels / total_pixels * 100.0
    identical = diff_ratio <= threshold
    max_delta = int(delta.max()) if delta.size else 0

    diff_image: Path | None = None
    if diff_output and diff_pixels > 0:
        diff_output = Path(diff_output)
        diff_output.parent.mkdir(parents=True, exist_ok=True)
        gray = img_a.convert("L").convert("RGBA")
        diff_arr = np.array(gray, dtype=np.uint8)
        diff_arr[mask] = [255, 0, 0, 255]
        Image.fromarray(diff_arr).save(diff_output)
        diff_image = diff_output
    elif diff_output:
        # stale diff from an earlier run
        Path(diff_output).unlink(missing_ok=True)

    return CompareResult(
        identical=identical,
        diff_pixels=diff_pixels,
        total_pixels=total_pixels,
        diff_ratio=diff_ratio,
        max_delta=max_delta,
        diff_image=diff_image,
    )


def check_images(
    expected: Path,
    actual: Path,
    config: HarnessConfig | None = None,
) -> ComparisonResult:
    """Compare *actual* against *expected*, folding failures into ``error``."""
    threshold, tolerance, compare_alpha, diff_output = 0.0, 0, True, None
    if config is not None:
        threshold = config.threshold
        tolerance = config.tolerance
        compare_alpha = config.compare_alpha
        diff_output = config.diff_path

    try:
        cmp = compare_images(
            Path(expected),
            Path(actual),
            threshold,
            diff_output,
            tolerance=tolerance,
            compare_alpha=compare_alpha,
        )
    except FileNotFoundError as exc:
        return ComparisonResult(False, f"image not found: {exc.filename or exc}")
    except UnidentifiedImageError as exc:
        return ComparisonResult(False, f"invalid image: {exc}")
    except ValueError as exc:
        return ComparisonResult(False, str(exc))
    except OSError as exc:
        return ComparisonResult(False, f"cannot read image: {exc}")

    log.debug(
        "compare %s vs %s: %d/%d pixels differ",
        expected,
        actual,
        cmp.diff_pixels,
        cmp.total_pixels,
    )
    return ComparisonResult(cmp.identical, None, cmp)


def _check_after(
    expected: Path,
    actual: Path,
    config: HarnessConfig | None,
    after: list[Future[Path]],
) -> ComparisonResult:
    for fut in after:
        try:
            fut.result()
        except Exception as exc:  # noqa: BLE001
            return ComparisonResult(False, f"snapshot write failed: {exc}")
    return check_images(expected, actual, config)


def check_images_async(
    executor: Executor,
    expected: Path,
    actual: Path,
    config: HarnessConfig | None = None,
    *,
    after: Iterable[Future[Path]] = (),
) -> Future[ComparisonResult]:
    """Schedule a comparison that starts only after every future in *after*.

    The *after* futures must already be submitted to *executor* (or be done)
    so that a FIFO pool runs them first.
    """
    return executor.submit(_check_after, Path(expected), Path(actual), config, list(after))
