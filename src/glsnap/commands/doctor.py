from __future__ import annotations

import os
import sys
import tempfile
from dataclasses import dataclass
from pathlib import Path

import click
import numpy as np
import PIL

from glsnap.backend import open_surface
from glsnap.color import Color
from glsnap.errors import GlsnapError
from glsnap.image_compare import check_images
from glsnap.renderer import draw_background
from glsnap.snapshot import read_snapshot, save_snapshot


@dataclass(frozen=True)
class CheckResult:
    name: str
    ok: bool
    detail: str


def _check_python() -> CheckResult:
    if sys.version_info < (3, 10):
        return CheckResult("python", False, f"{sys.version.split()[0]} (need >= 3.10)")
    return CheckResult("python", True, sys.version.split()[0])


def _check_numpy() -> CheckResult:
    return CheckResult("numpy", True, np.__version__)


def _check_pillow() -> CheckResult:
    from PIL import features

    if not features.check_codec("zlib"):
        return CheckResult("pillow", False, f"{PIL.__version__} built without zlib (no PNG)")
    return CheckResult("pillow", True, PIL.__version__)


def _check_backend() -> CheckResult:
    """Clear a tiny surface and verify the readback."""
    try:
        with open_surface(2, 2) as surface:
            draw_background(surface, Color(1.0, 0.0, 0.0))
            pixels = read_snapshot(surface, 2, 2)
    except GlsnapError as exc:
        return CheckResult("backend", False, str(exc))
    if not np.all(pixels == [255, 0, 0, 255]):
        return CheckResult("backend", False, f"unexpected clear result {pixels[0, 0].tolist()}")
    return CheckResult("backend", True, "software surface ok")


def _check_roundtrip() -> CheckResult:
    """Write a snapshot to a temp dir and compare it with itself."""
    try:
        with tempfile.TemporaryDirectory(prefix="glsnap-") as tmp:
            path = Path(tmp) / "probe.png"
            with open_surface(4, 4) as surface:
                draw_background(surface, Color(0.0, 0.5, 1.0))
                save_snapshot(surface, 4, 4, path)
            result = check_images(path, path)
    except (GlsnapError, OSError) as exc:
        return CheckResult("png-roundtrip", False, str(exc))
    if not result.passed:
        return CheckResult("png-roundtrip", False, result.error or "self-comparison differs")
    return CheckResult("png-roundtrip", True, "encode/decode ok")


def _check_workdir() -> CheckResult:
    cwd = Path.cwd()
    if not os.access(cwd, os.W_OK):
        return CheckResult("workdir", False, f"{cwd} is not writable")
    return CheckResult("workdir", True, str(cwd))


def run_doctor() -> list[CheckResult]:
    """Run all environment checks and return results."""
    return [
        _check_python(),
        _check_numpy(),
        _check_pillow(),
        _check_backend(),
        _check_roundtrip(),
        _check_workdir(),
    ]


@click.command("doctor")
def doctor_cmd() -> None:
    """Run environment checks for glsnap."""
    results = run_doctor()
    has_error = False

    for result in results:
        icon = "\u2705" if result.ok else "\u274c"
        click.echo(f"{icon} {result.name}: {result.detail}")
        if not result.ok:
            has_error = True

    if has_error:
        raise SystemExit(1)
