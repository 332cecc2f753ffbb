"""Process environment access, injectable for tests."""

from __future__ import annotations

import os
from collections.abc import Iterator, Mapping, MutableMapping
from typing import Protocol


class EnvironProvider(Protocol):
    """Read/write view of environment variables."""

    def get(self, name: str, default: str | None = None) -> str | None: ...

    def items(self) -> Iterator[tuple[str, str]]: ...

    def set(self, name: str, value: str) -> None: ...


class OsEnviron:
    """Live process environment (os.environ)."""

    def __init__(self, target: MutableMapping[str, str] | None = None) -> None:
        self._target = os.environ if target is None else target

    def get(self, name: str, default: str | None = None) -> str | None:
        return self._target.get(name, default)

    def items(self) -> Iterator[tuple[str, str]]:
        return iter(list(self._target.items()))

    def set(self, name: str, value: str) -> None:
        self._target[name] = value


class MemoryEnviron(OsEnviron):
    """In-memory environment backed by a private dict."""

    def __init__(self, initial: Mapping[str, str] | None = None) -> None:
        super().__init__(dict(initial or {}))

    @property
    def vars(self) -> dict[str, str]:
        return dict(self._target)
