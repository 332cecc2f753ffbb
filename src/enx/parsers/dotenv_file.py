"""Dotenv (KEY=VALUE per line) config files."""

from __future__ import annotations

import re
from pathlib import Path

from enx.parsers.base import ParseOptions

_KEY_VALUE_RE = re.compile(r"^\s*([\w.-]+)\s*=\s*(.*)?\s*$")
_NEWLINES_RE = re.compile(r"\r\n|\n|\r")
_ESCAPED_NEWLINE = "\\n"


def parse_dotenv_value(raw: str | None) -> str:
    """Apply quoting rules to the right-hand side of an assignment."""
    val = raw or ""
    end = len(val) - 1
    double_quoted = len(val) >= 2 and val[0] == '"' and val[end] == '"'
    single_quoted = len(val) >= 2 and val[0] == "'" and val[end] == "'"
    if double_quoted or single_quoted:
        val = val[1:end]
        if double_quoted:
            val = val.replace(_ESCAPED_NEWLINE, "\n")
        return val
    return val.strip()


def parse_dotenv_text(text: str, options: ParseOptions | None = None) -> dict[str, str]:
    """Parse dotenv source text into a flat dict. Later keys win."""
    options = options or ParseOptions()
    result: dict[str, str] = {}
    for idx, line in enumerate(_NEWLINES_RE.split(text)):
        match = _KEY_VALUE_RE.match(line)
        if match is None:
            options.log(
                f"did not match key and value when parsing line {idx + 1}: {line}",
                prefix="parse_dotenv_file",
            )
            continue
        result[match.group(1)] = parse_dotenv_value(match.group(2))
    return result


def parse_dotenv_file(path: str | Path, options: ParseOptions | None = None) -> dict[str, str]:
    """Load a dotenv file. Returns {} when the file cannot be read."""
    options = options or ParseOptions()
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        options.log(exc, prefix=f"error in parse_dotenv_file({path})")
        return {}
    return parse_dotenv_text(text, options)
