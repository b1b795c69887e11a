"""JSON output formatter for glsnap."""

from __future__ import annotations

import json
import sys
from typing import Any, TextIO


def write_json(data: Any, *, out: TextIO | None = None, indent: int = 2) -> None:
    """Write data as formatted JSON to the given output stream."""
    dest = out or sys.stdout
    dest.write(json.dumps(data, default=str, indent=indent) + "\n")
