"""Unit tests for navproto.logging_config."""

from __future__ import annotations

import json
import logging

import pytest

from navproto.logging_config import _JsonFormatter, configure_logging


@pytest.fixture()
def restore_root_logging():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


class TestJsonFormatter:
    def test_fields(self):
        record = logging.LogRecord("navproto.protocol", logging.WARNING, __file__, 1, "step %s failed", ("click",), None)
        entry = json.loads(_JsonFormatter().format(record))
        assert entry["severity"] == "WARNING"
        assert entry["message"] == "step click failed"
        assert entry["logger"] == "navproto.protocol"

    def test_includes_exception(self):
        try:
            raise ValueError("boom")
        except ValueError:
            import sys

            record = logging.LogRecord("x", logging.ERROR, __file__, 1, "failed", (), sys.exc_info())
        entry = json.loads(_JsonFormatter().format(record))
        assert "ValueError: boom" in entry["exception"]


class TestConfigureLogging:
    def test_json_outside_local(self, restore_root_logging):
        configure_logging(level="debug", env="ci")
        root = logging.getLogger()
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, _JsonFormatter)

    def test_level_from_env(self, monkeypatch, restore_root_logging):
        monkeypatch.setenv("NAVPROTO_LOG_LEVEL", "error")
        configure_logging(env="ci")
        assert logging.getLogger().level == logging.ERROR

    def test_quiets_asyncio_logger(self, restore_root_logging):
        configure_logging(level="debug", env="local")
        assert logging.getLogger("asyncio").level == logging.WARNING
