"""glsnap compare command -- pixel-level image comparison."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

import click

from glsnap.commands._helpers import fail
from glsnap.formatters.json_fmt import write_json
from glsnap.image_compare import CompareResult, compare_images


def _json_payload(result: CompareResult, threshold: float, tolerance: int) -> dict[str, Any]:
    return {
        "identical": result.identical,
        "diff_pixels": result.diff_pixels,
        "total_pixels": result.total_pixels,
        "diff_ratio": result.diff_ratio,
        "max_delta": result.max_delta,
        "diff_image": str(result.diff_image) if result.diff_image else None,
        "threshold": threshold,
        "tolerance": tolerance,
    }


@click.command("compare")
@click.argument("expected", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("actual", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--threshold",
    default=0.0,
    type=click.FloatRange(0.0, 100.0),
    help="Diff ratio threshold (%).",
)
@click.option(
    "--tolerance",
    default=0,
    type=click.IntRange(0, 255),
    help="Per-channel delta still counted as equal.",
)
@click.option("--ignore-alpha", is_flag=True, help="Compare RGB channels only.")
@click.option(
    "--diff-output",
    default=None,
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write diff visualization PNG.",
)
@click.option("--json", "use_json", is_flag=True, help="JSON output.")
def compare_cmd(
    expected: Path,
    actual: Path,
    threshold: float,
    tolerance: int,
    ignore_alpha: bool,
    diff_output: Path | None,
    use_json: bool,
) -> None:
    """Compare two images pixel-by-pixel.

    Exit 0 if images match (within threshold), exit 1 if they differ,
    exit 2 on error (size mismatch, invalid image).
    """
    try:
        result = compare_images(
            expected,
            actual,
            threshold=threshold,
            diff_output=diff_output,
            tolerance=tolerance,
            compare_alpha=not ignore_alpha,
        )
    except (ValueError, OSError) as exc:
        fail(str(exc))

    if use_json:
        write_json(_json_payload(result, threshold, tolerance))
    elif result.identical:
        click.echo("match")
    else:
        click.echo(
            f"diff: {result.diff_pixels}/{result.total_pixels} pixels ({result.diff_ratio:.2f}%)"
        )

    sys.exit(0 if result.identical else 1)
