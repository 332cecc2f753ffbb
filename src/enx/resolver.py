"""Pick the parser for a config path and resolve multi-format candidates."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from enx.core.constants import DOTENV_MARKER, JSON_SUFFIX, MODULE_SUFFIX
from enx.core.errors import UnsupportedFileTypeError
from enx.parsers import ParseOptions, parse_dotenv_file, parse_json_file, parse_module_file


def get_config_file(path: str | Path, options: ParseOptions | None = None) -> dict[str, Any]:
    """Parse path with the parser its name selects.

    Priority is ``.json``, then ``.py``, then the ``.env`` name marker, so
    ``.env.py`` is a module and ``.env.json`` is JSON. Any other name raises
    UnsupportedFileTypeError.
    """
    options = options or ParseOptions()
    path = Path(path)
    name = path.name
    if name.endswith(JSON_SUFFIX):
        return parse_json_file(path, options)
    if name.endswith(MODULE_SUFFIX):
        return parse_module_file(path, options)
    if name.startswith(DOTENV_MARKER):
        return parse_dotenv_file(path, options)
    raise UnsupportedFileTypeError(
        f"file type not supported: path({path})",
        code="unsupported_file_type",
        details={"path": str(path)},
    )


def candidate_paths(json_path: str | Path) -> tuple[Path, Path, Path]:
    """Return (dotenv, module, json) candidates for a ``.json`` path."""
    json_path = Path(json_path)
    name = json_path.name
    stem = name[: -len(JSON_SUFFIX)] if name.endswith(JSON_SUFFIX) else name
    return (
        json_path.with_name(stem),
        json_path.with_name(stem + MODULE_SUFFIX),
        json_path,
    )


def resolve_and_parse(json_path: str | Path, options: ParseOptions | None = None) -> dict[str, Any]:
    """Parse the first existing of <name>, <name>.py, else <name>.json."""
    options = options or ParseOptions()
    dotenv_path, module_path, json_path = candidate_paths(json_path)
    if dotenv_path.exists():
        chosen = dotenv_path
    elif module_path.exists():
        chosen = module_path
    else:
        chosen = json_path
    options.log(str(chosen), prefix="resolved")
    return get_config_file(chosen, options)
