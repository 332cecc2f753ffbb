"""enx: layered environment configuration (base file + per-environment override)."""

from enx.config import Config
from enx.core.errors import EnxError, ModuleExportError, UnsupportedFileTypeError
from enx.environ import EnvironProvider, MemoryEnviron, OsEnviron
from enx.loader import load, reset
from enx.resolver import get_config_file, resolve_and_parse
from enx.tree import flatten, flatten_paths, merge, unflatten

__version__ = "0.1.0"

__all__ = [
    "Config",
    "EnvironProvider",
    "EnxError",
    "MemoryEnviron",
    "ModuleExportError",
    "OsEnviron",
    "UnsupportedFileTypeError",
    "__version__",
    "flatten",
    "flatten_paths",
    "get_config_file",
    "load",
    "merge",
    "reset",
    "resolve_and_parse",
    "unflatten",
]
