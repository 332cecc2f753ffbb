"""Python module config files.

A module config is a regular ``.py`` file defining ``config``, either a
mapping or a zero-argument callable that returns one::

    # .env.production.py
    import os

    config = {"db": {"host": os.environ.get("DB_HOST", "localhost")}}
"""

from __future__ import annotations

import hashlib
import importlib.util
from collections.abc import Mapping
from pathlib import Path
from types import ModuleType
from typing import Any

from enx.core.constants import MODULE_EXPORT
from enx.core.errors import ModuleExportError
from enx.parsers.base import ParseOptions


def _module_name(path: Path) -> str:
    digest = hashlib.sha1(str(path).encode("utf-8")).hexdigest()[:12]
    return f"_enx_config_{digest}"


def _exec_module(path: Path) -> ModuleType:
    spec = importlib.util.spec_from_file_location(_module_name(path), path)
    if spec is None or spec.loader is None:
        raise ModuleExportError(
            f"cannot load {path} as a Python module",
            code="module_not_loadable",
            details={"path": str(path)},
        )
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def _export_of(module: ModuleType, path: Path) -> dict[str, Any]:
    if not hasattr(module, MODULE_EXPORT):
        raise ModuleExportError(
            f"module does not define `{MODULE_EXPORT}`",
            code="missing_export",
            details={"path": str(path)},
        )
    exported = getattr(module, MODULE_EXPORT)
    if callable(exported) and not isinstance(exported, Mapping):
        exported = exported()
    if not isinstance(exported, Mapping):
        raise ModuleExportError(
            f"module does not export a mapping (returned: {type(exported).__name__})",
            code="invalid_export",
            details={"path": str(path), "type": type(exported).__name__},
        )
    return dict(exported)


def parse_module_file(path: str | Path, options: ParseOptions | None = None) -> dict[str, Any]:
    """Execute a Python config module and return its exported mapping, or {} on failure."""
    options = options or ParseOptions()
    absolute = Path(path).resolve()
    try:
        return _export_of(_exec_module(absolute), absolute)
    except Exception as exc:
        # Arbitrary user code runs here; any failure degrades to an empty layer.
        options.log(exc, prefix=f"error in parse_module_file({path})")
        return {}
