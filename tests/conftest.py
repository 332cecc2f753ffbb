"""Shared fixtures: fresh cache slot, in-memory environment, loguru capture."""

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest
from loguru import logger

from enx.environ import MemoryEnviron
from enx.loader import reset


@pytest.fixture(autouse=True)
def _reset_loader_state():
    reset()
    yield
    reset()


@pytest.fixture
def holder() -> SimpleNamespace:
    return SimpleNamespace()


@pytest.fixture
def environ() -> MemoryEnviron:
    return MemoryEnviron()


@pytest.fixture
def log_messages():
    """Collect loguru DEBUG+ messages emitted during the test."""
    messages: list[str] = []
    handler_id = logger.add(lambda m: messages.append(m.record["message"]), level="DEBUG")
    yield messages
    logger.remove(handler_id)


@pytest.fixture
def write(tmp_path: Path):
    """Write a file under tmp_path and return its path."""

    def _write(name: str, content: str) -> Path:
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path

    return _write
