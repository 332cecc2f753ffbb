"""enx command line: inspect or export the merged configuration."""

from __future__ import annotations

import argparse
import json
import os
import sys
from pathlib import Path
from types import SimpleNamespace
from typing import Any

import yaml
from dotenv import load_dotenv
from loguru import logger

from enx import __version__
from enx.config import Config
from enx.core.constants import DEFAULT_FILENAME
from enx.core.errors import EnxError
from enx.loader import load
from enx.tree import flatten

_MISSING = object()


def _safe_message_filter(record: Any) -> bool:
    """Escape braces/angles in log messages to prevent format/tag errors."""
    if isinstance(record.get("message"), str):
        msg = record["message"]
        msg = msg.replace("{", "{{").replace("}", "}}").replace("<", "\\<")
        record["message"] = msg
    return True


def setup_logging(verbose: bool = False) -> None:
    """Configure loguru on stderr.
    Level: verbose=True or LOG_LEVEL=DEBUG enables DEBUG; otherwise WARNING."""
    level = "WARNING"
    if verbose:
        level = "DEBUG"
    else:
        env_level = (os.environ.get("LOG_LEVEL") or "").upper()
        if env_level in ("DEBUG", "INFO", "WARNING", "ERROR"):
            level = env_level

    logger.remove()
    logger.add(
        sys.stderr,
        level=level,
        format=("<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan> | {message}"),
        filter=_safe_message_filter,
    )


def _render_value(value: Any) -> str:
    if isinstance(value, str):
        return value
    return json.dumps(value, default=str)


def render(data: dict[str, Any], fmt: str) -> str:
    """Render merged config as json, yaml or env (KEY="value" lines)."""
    if fmt == "yaml":
        return yaml.safe_dump(data, sort_keys=False, default_flow_style=False).rstrip("\n")
    if fmt == "env":
        lines = []
        for name, value in flatten(data).items():
            escaped = value.replace("\r\n", "\\n").replace("\n", "\\n").replace("\r", "\\n")
            lines.append(f'{name}="{escaped}"')
        return "\n".join(lines)
    return json.dumps(data, indent=2, default=str)


def export_dotenv(data: dict[str, Any], path: Path) -> int:
    """Replace path with the flattened variables in enx's dotenv grammar.

    Returns the number of variables written.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    rendered = render(data, "env")
    path.write_text(rendered + "\n" if rendered else "", encoding="utf-8")
    return len(flatten(data))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="enx", description="Layered environment configuration loader")
    parser.add_argument("--env", "-e", help="Environment name (default: $ENX_ENV)")
    parser.add_argument("--cwd", "-C", type=Path, default=None, help="Directory holding the config files")
    parser.add_argument(
        "--file",
        "-f",
        default=DEFAULT_FILENAME,
        help=f"Filename template with ${{env}} placeholder (default: {DEFAULT_FILENAME})",
    )
    parser.add_argument(
        "--dotenv",
        type=Path,
        default=None,
        help="Load variables from this dotenv file into the environment first (e.g. ENX_ENV)",
    )
    parser.add_argument(
        "--absorb-env",
        action="store_true",
        help="Merge current environment variables on top of the files",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    sub = parser.add_subparsers(dest="command")
    show = sub.add_parser("show", help="Print the merged configuration")
    show.add_argument("--format", choices=("json", "yaml", "env"), default="json")
    get = sub.add_parser("get", help="Print one dot-path value")
    get.add_argument("key")
    get.add_argument("--default", default=None)
    export = sub.add_parser("export", help="Write flattened variables to a dotenv file")
    export.add_argument("path", type=Path)
    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entrypoint."""
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)

    if args.dotenv is not None:
        load_dotenv(args.dotenv)
        logger.debug("Loaded environment from {}", args.dotenv)

    try:
        data = load(
            holder=SimpleNamespace(),
            filename=args.file,
            env=args.env,
            cwd=args.cwd,
            inject=False,
            absorb_env=args.absorb_env,
            debug=args.verbose,
        )
    except EnxError as exc:
        logger.error("Failed to load config: {}", exc)
        return 2

    command = args.command or "show"
    if command == "get":
        value = Config(data).get(args.key, _MISSING)
        if value is _MISSING:
            if args.default is None:
                logger.error("Key not found: {}", args.key)
                return 1
            value = args.default
        print(_render_value(value))
    elif command == "export":
        count = export_dotenv(data, args.path)
        logger.info("Wrote {} variables to {}", count, args.path)
    else:
        print(render(data, getattr(args, "format", "json")))
    return 0


if __name__ == "__main__":
    sys.exit(main())
