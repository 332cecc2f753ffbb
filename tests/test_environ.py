"""Test environment providers and concurrent first load."""

import json
import os
import threading
from unittest.mock import MagicMock

import enx.resolver
from enx.environ import MemoryEnviron, OsEnviron
from enx.loader import load
from enx.parsers import ParseOptions
from enx.tree import inject


class TestOsEnviron:
    """Live process environment."""

    def test_reads_and_writes_os_environ(self, monkeypatch):
        # Arrange
        monkeypatch.setenv("ENX_TEST_VAR", "before")
        environ = OsEnviron()

        # Act
        environ.set("ENX_TEST_VAR", "after")

        # Assert
        assert environ.get("ENX_TEST_VAR") == "after"
        assert ("ENX_TEST_VAR", "after") in list(environ.items())

    def test_get_default(self, monkeypatch):
        monkeypatch.delenv("ENX_TEST_MISSING", raising=False)
        assert OsEnviron().get("ENX_TEST_MISSING", "d") == "d"

    def test_load_injects_into_process_env(self, write, tmp_path, holder, monkeypatch):
        # Arrange
        write(".env.json", json.dumps({"ENXTEST": {"NAME": "svc"}}))
        monkeypatch.setenv("ENXTEST", "placeholder")
        monkeypatch.setenv("ENXTEST_NAME", "placeholder")

        # Act
        load(holder=holder, env="dev", cwd=tmp_path)

        # Assert
        assert os.environ["ENXTEST_NAME"] == "svc"
        assert json.loads(os.environ["ENXTEST"]) == {"NAME": "svc"}


class TestMemoryEnviron:
    """In-memory provider."""

    def test_isolated_copy(self):
        # Arrange
        initial = {"A": "1"}
        environ = MemoryEnviron(initial)

        # Act
        environ.set("B", "2")

        # Assert
        assert initial == {"A": "1"}
        assert environ.vars == {"A": "1", "B": "2"}


class TestConcurrentLoad:
    """Concurrent first calls compute once."""

    def test_parsed_once_across_threads(self, write, tmp_path, holder, monkeypatch):
        # Arrange
        write(".env.json", json.dumps({"a": 1}))
        spy = MagicMock(wraps=enx.resolver.parse_json_file)
        monkeypatch.setattr(enx.resolver, "parse_json_file", spy)
        results = []

        def worker():
            results.append(load(holder=holder, env="dev", cwd=tmp_path, environ=MemoryEnviron()))

        threads = [threading.Thread(target=worker) for _ in range(8)]

        # Act
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        # Assert
        assert spy.call_count == 2
        assert all(r is results[0] for r in results)


class TestInjectRejectedNames:
    """Names the OS refuses are skipped, the rest is still injected."""

    def test_load_skips_illegal_names(self, write, tmp_path, holder, monkeypatch):
        # Arrange
        write(".env.json", json.dumps({"a=b": 1, "ENXOK": "yes"}))
        monkeypatch.setenv("ENXOK", "placeholder")

        # Act
        result = load(holder=holder, env="dev", cwd=tmp_path, environ=OsEnviron())

        # Assert
        assert result == {"a=b": 1, "ENXOK": "yes"}
        assert holder.enx is result
        assert os.environ["ENXOK"] == "yes"
        assert "a=b" not in os.environ

    def test_inject_logs_skipped_name_in_debug(self, monkeypatch):
        # Arrange
        monkeypatch.setenv("ENXVAL", "placeholder")
        log = MagicMock()

        # Act
        written = inject(
            {"": "empty", "ENXVAL": "ok\x00bad", "x=y": "1"},
            OsEnviron(),
            options=ParseOptions(debug=True, logger=log),
        )

        # Assert
        assert written == {}
        assert log.debug.call_count == 3
        assert os.environ["ENXVAL"] == "placeholder"
