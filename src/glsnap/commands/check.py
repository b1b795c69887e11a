"""glsnap check -- render, persist and compare against a reference image."""

from __future__ import annotations

import sys
from pathlib import Path

import click

from glsnap.color import Color
from glsnap.commands._helpers import COLOR, SIZE, fail, result_payload
from glsnap.config import HarnessConfig
from glsnap.errors import GlsnapError
from glsnap.formatters.json_fmt import write_json
from glsnap.harness import run_visual_test


@click.command("check")
@click.argument("color", type=COLOR)
@click.option(
    "--expected",
    default="expected.png",
    show_default=True,
    type=click.Path(dir_okay=False, path_type=Path),
    help="Reference image.",
)
@click.option(
    "--actual",
    default="actual.png",
    show_default=True,
    type=click.Path(dir_okay=False, path_type=Path),
    help="Candidate image, overwritten on every run.",
)
@click.option(
    "--reference-color",
    default=None,
    type=COLOR,
    help="Render the reference from this color instead of reading it from disk.",
)
@click.option("--size", default="64x64", type=SIZE, show_default=True, help="Surface size.")
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
@click.option("--legacy-swizzle", is_flag=True, help="Feed blue into the green channel too.")
@click.option(
    "--update",
    is_flag=True,
    help="Rewrite the reference from COLOR (also $GLSNAP_UPDATE_REFERENCE=1).",
)
@click.option("--create-missing", is_flag=True, help="Write the reference if it does not exist.")
@click.option(
    "--diff-output",
    default=None,
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write diff visualization PNG.",
)
@click.option("--json", "use_json", is_flag=True, help="JSON output.")
def check_cmd(
    color: Color,
    expected: Path,
    actual: Path,
    reference_color: Color | None,
    size: tuple[int, int],
    threshold: float,
    tolerance: int,
    ignore_alpha: bool,
    legacy_swizzle: bool,
    update: bool,
    create_missing: bool,
    diff_output: Path | None,
    use_json: bool,
) -> None:
    """Render COLOR, save it as ACTUAL and compare it against EXPECTED.

    Exit 0 if the images match, exit 1 if they differ, exit 2 if the
    comparison could not run (missing or invalid reference, size mismatch,
    write failure).
    """
    width, height = size
    overrides: dict[str, object] = {}
    if update:
        overrides["update_reference"] = True
    try:
        config = HarnessConfig.from_env(
            width=width,
            height=height,
            tolerance=tolerance,
            compare_alpha=not ignore_alpha,
            threshold=threshold,
            legacy_swizzle=legacy_swizzle,
            expected_path=expected,
            actual_path=actual,
            diff_path=diff_output,
            create_missing=create_missing,
            **overrides,
        )
    except ValueError as exc:
        raise click.BadParameter(str(exc)) from exc

    try:
        result = run_visual_test(color, expected_color=reference_color, config=config)
    except (GlsnapError, OSError) as exc:
        fail(str(exc))

    if use_json:
        write_json(result_payload(result, threshold))
    elif result.error is not None:
        click.echo(f"error: {result.error}", err=True)
    elif result.is_equal:
        click.echo("match")
    else:
        detail = result.detail
        assert detail is not None
        click.echo(
            f"diff: {detail.diff_pixels}/{detail.total_pixels} pixels ({detail.diff_ratio:.2f}%)"
        )
        if detail.diff_image is not None:
            click.echo(f"  diff image: {detail.diff_image}")

    if result.error is not None:
        sys.exit(2)
    sys.exit(0 if result.is_equal else 1)
