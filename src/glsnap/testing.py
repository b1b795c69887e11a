"""Assertion helpers for test suites that use glsnap."""

from __future__ import annotations

from glsnap.image_compare import ComparisonResult


def assert_visual_match(result: ComparisonResult, msg: str = "images match") -> None:
    """Fail unless the comparison ran cleanly and found the images equal."""
    if result.error is not None:
        raise AssertionError(f"{msg}: comparison failed: {result.error}")
    if not result.is_equal:
        detail = result.detail
        if detail is None:
            raise AssertionError(f"{msg}: images differ")
        raise AssertionError(
            f"{msg}: {detail.diff_pixels}/{detail.total_pixels} pixels differ "
            f"({detail.diff_ratio:.2f}%, max channel delta {detail.max_delta})"
        )
