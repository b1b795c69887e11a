"""glsnap render -- draw a solid color and save the snapshot."""

from __future__ import annotations

from pathlib import Path

import click

from glsnap.backend import open_surface
from glsnap.color import Color
from glsnap.commands._helpers import COLOR, SIZE, fail
from glsnap.errors import GlsnapError
from glsnap.formatters.json_fmt import write_json
from glsnap.renderer import draw_background
from glsnap.snapshot import save_snapshot


@click.command("render")
@click.argument("color", type=COLOR)
@click.option(
    "-o",
    "--output",
    required=True,
    type=click.Path(dir_okay=False, path_type=Path),
    help="PNG file to write.",
)
@click.option("--size", default="64x64", type=SIZE, show_default=True, help="Surface size.")
@click.option("--legacy-swizzle", is_flag=True, help="Feed blue into the green channel too.")
@click.option("--json", "use_json", is_flag=True, help="JSON output.")
def render_cmd(
    color: Color,
    output: Path,
    size: tuple[int, int],
    legacy_swizzle: bool,
    use_json: bool,
) -> None:
    """Fill an off-screen surface with COLOR and write it as PNG.

    COLOR is r,g,b[,a] in 0..1 or #rrggbb[aa].
    """
    width, height = size
    try:
        with open_surface(width, height) as surface:
            draw_background(surface, color, legacy_swizzle=legacy_swizzle)
            path = save_snapshot(surface, width, height, output)
    except (GlsnapError, OSError) as exc:
        fail(str(exc))

    if use_json:
        write_json(
            {
                "path": str(path),
                "width": width,
                "height": height,
                "color": list(color.as_tuple()),
                "legacy_swizzle": legacy_swizzle,
            }
        )
    else:
        click.echo(f"render: {width}x{height} -> {path}")
