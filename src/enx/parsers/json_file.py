"""JSON config files."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from enx.parsers.base import ParseOptions


def parse_json_file(path: str | Path, options: ParseOptions | None = None) -> dict[str, Any]:
    """Load a JSON object from path. Returns {} on any read or decode failure."""
    options = options or ParseOptions()
    path = Path(path)
    try:
        data = json.loads(path.read_bytes())
    except (OSError, ValueError) as exc:
        options.log(exc, prefix=f"error in parse_json_file({path})")
        return {}
    if not isinstance(data, dict):
        options.log(
            f"expected a JSON object, got {type(data).__name__}",
            prefix=f"error in parse_json_file({path})",
        )
        return {}
    return data
