"""Shared CLI command helpers."""

from __future__ import annotations

import json
from dataclasses import asdict
from typing import Any, NoReturn

import click

from glsnap.color import Color, parse_color
from glsnap.config import parse_size
from glsnap.image_compare import ComparisonResult

__all__ = [
    "COLOR",
    "SIZE",
    "_json_mode",
    "fail",
    "result_payload",
]


def _json_mode() -> bool:
    """Return True if the current Click context has a JSON output flag set."""
    ctx = click.get_current_context(silent=True)
    if ctx is None:
        return False
    return bool(ctx.params.get("use_json"))


def fail(msg: str, code: int = 2) -> NoReturn:
    """Report *msg* on stderr (JSON-wrapped in JSON mode) and exit."""
    if _json_mode():
        click.echo(json.dumps({"error": {"message": msg}}), err=True)
    else:
        click.echo(f"error: {msg}", err=True)
    raise SystemExit(code)


class ColorType(click.ParamType):
    name = "color"

    def convert(
        self, value: Any, param: click.Parameter | None, ctx: click.Context | None
    ) -> Color:
        if isinstance(value, Color):
            return value
        try:
            return parse_color(str(value))
        except ValueError as exc:
            self.fail(str(exc), param, ctx)


class SizeType(click.ParamType):
    name = "WxH"

    def convert(
        self, value: Any, param: click.Parameter | None, ctx: click.Context | None
    ) -> tuple[int, int]:
        if isinstance(value, tuple):
            return value
        try:
            return parse_size(str(value))
        except ValueError as exc:
            self.fail(str(exc), param, ctx)


COLOR = ColorType()
SIZE = SizeType()


def result_payload(result: ComparisonResult, threshold: float) -> dict[str, Any]:
    """Flatten a ComparisonResult into a JSON-ready dict."""
    data: dict[str, Any] = {
        "passed": result.passed,
        "identical": result.is_equal,
        "error": result.error,
        "threshold": threshold,
    }
    if result.detail is not None:
        detail = asdict(result.detail)
        detail.pop("identical")
        detail["diff_image"] = str(result.detail.diff_image) if result.detail.diff_image else None
        data.update(detail)
    return data
