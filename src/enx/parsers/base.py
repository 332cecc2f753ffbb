"""Parser contract shared by every config format."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Protocol

from loguru import logger as _default_logger


@dataclass(frozen=True)
class ParseOptions:
    """Per-call parser settings. Logging only happens when debug is set."""

    debug: bool = False
    logger: Any = field(default_factory=lambda: _default_logger)

    def log(self, message: object, prefix: str | None = None) -> None:
        if not self.debug:
            return
        if not isinstance(message, str) and not isinstance(message, BaseException):
            message = json.dumps(message, default=str)
        if prefix:
            self.logger.debug("{}: {}", prefix, message)
        else:
            self.logger.debug("{}", message)


class Parser(Protocol):
    """Reads one file into a config tree. Must not raise on bad input."""

    def __call__(self, path: Path, options: ParseOptions) -> dict[str, Any]: ...
