"""Load base + environment config once per process."""

from __future__ import annotations

import threading
from pathlib import Path
from types import SimpleNamespace
from typing import Any

from loguru import logger as _default_logger

from enx.core.constants import CACHE_FIELD, DEFAULT_FILENAME, ENV_NAME_VAR, ENV_PLACEHOLDER
from enx.environ import EnvironProvider, OsEnviron
from enx.parsers import ParseOptions, Parser
from enx.resolver import get_config_file, resolve_and_parse
from enx.tree import from_environ, inject as inject_environ, merge

# Default cache holder; load() stores the merged config on its `enx` attribute
state = SimpleNamespace()

# Reentrant: Python config modules may call load() while the lock is held
_lock = threading.RLock()


def base_filename(filename: str) -> str:
    """'.env.${env}.json' -> '.env.json'."""
    return filename.replace(f".{ENV_PLACEHOLDER}", "")


def env_filename(filename: str, env: str) -> str:
    """'.env.${env}.json', 'production' -> '.env.production.json'."""
    return filename.replace(ENV_PLACEHOLDER, env)


def load(
    *,
    holder: Any = None,
    filename: str = DEFAULT_FILENAME,
    env: str | None = None,
    cwd: str | Path | None = None,
    inject: bool = True,
    absorb_env: bool = False,
    debug: bool = False,
    logger: Any = None,
    environ: EnvironProvider | None = None,
) -> dict[str, Any]:
    """Return the merged config, computing it on the first call.

    The base file (template without ``.${env}``) is merged with the file
    for the current environment, override winning per leaf. With the
    default template each layer may be a dotenv file, a ``.py`` module or
    JSON; a custom template is parsed by its own extension only.

    When ``inject`` is set, the flattened result is written to ``environ``.
    When ``absorb_env`` is set, variables already present in ``environ``
    before injection are merged on top and win over both files.
    """
    holder = state if holder is None else holder
    environ = OsEnviron() if environ is None else environ
    options = ParseOptions(debug=debug, logger=_default_logger if logger is None else logger)

    with _lock:
        cached = getattr(holder, CACHE_FIELD, None)
        if cached is not None:
            options.log("enx already loaded")
            return cached

        if env is None:
            env = environ.get(ENV_NAME_VAR)
        root = Path.cwd() if cwd is None else Path(cwd)
        parse: Parser = resolve_and_parse if filename == DEFAULT_FILENAME else get_config_file

        base_path = (root / base_filename(filename)).resolve()
        base = parse(base_path, options)
        options.log(base, prefix="vars")

        if env:
            override = parse((root / env_filename(filename, env)).resolve(), options)
        else:
            options.log(f"{ENV_NAME_VAR} not set; skipping environment file")
            override = {}
        options.log(override, prefix="envVars")

        merged = merge(base, override)

        absorbed = from_environ(environ) if absorb_env else None
        if inject:
            inject_environ(merged, environ, options=options)
        if absorbed:
            merged = merge(merged, absorbed)

        setattr(holder, CACHE_FIELD, merged)
        return merged


def reset(holder: Any = None) -> None:
    """Forget the cached config so the next load() re-reads files. For tests."""
    holder = state if holder is None else holder
    with _lock:
        if hasattr(holder, CACHE_FIELD):
            delattr(holder, CACHE_FIELD)
