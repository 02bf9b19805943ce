# tests/unit/logging/test_logger.py — v2
"""Tests for logging/logger.py, logging/context.py and logging/handlers.py."""

from __future__ import annotations

import json
import logging
from logging.handlers import RotatingFileHandler

import pytest

from codexindex.logging.context import (
    clear_context,
    get_context,
    set_document_context,
    set_run_context,
)
from codexindex.logging.handlers import create_rotating_handler, parse_size
from codexindex.logging.logger import JsonFormatter, TextFormatter, get_logger, setup_logging


def _record(msg: str = "Hello", **extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="test", level=logging.INFO, pathname="", lineno=0,
        msg=msg, args=(), exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger("codexindex")
    handlers, level = list(root.handlers), root.level
    yield root
    for handler in root.handlers:
        handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


class TestContext:
    def test_empty(self):
        assert get_context().as_dict() == {}

    def test_set_and_clear(self):
        set_run_context("run1")
        set_document_context("docs/a.md", step="index")
        ctx = get_context()
        assert ctx.as_dict() == {"run_id": "run1", "document_path": "docs/a.md", "step": "index"}
        clear_context()
        assert get_context().run_id is None


class TestJsonFormatter:
    def test_format_basic(self):
        parsed = json.loads(JsonFormatter().format(_record()))
        assert parsed["level"] == "INFO"
        assert parsed["message"] == "Hello"
        assert "timestamp" in parsed
        assert "context" not in parsed

    def test_format_with_context_and_data(self):
        set_run_context("run1")
        set_document_context("docs/a.md")
        parsed = json.loads(JsonFormatter().format(_record(data={"n": 1})))
        assert parsed["context"] == {"run_id": "run1", "document_path": "docs/a.md"}
        assert parsed["data"] == {"n": 1}


class TestTextFormatter:
    def test_format_basic(self):
        output = TextFormatter().format(_record("Hello text"))
        assert "Hello text" in output
        assert "INFO" in output

    def test_document_and_step(self):
        set_document_context("docs/a.md", step="index")
        output = TextFormatter().format(_record())
        assert "<docs/a.md>" in output
        assert "(index)" in output


class TestGetLogger:
    def test_returns_child_logger(self):
        assert get_logger("test_module").name == "codexindex.test_module"


class TestSetupLogging:
    def test_setup_json(self, restore_root_logger):
        setup_logging(level="DEBUG", log_format="json")
        assert restore_root_logger.level == logging.DEBUG
        assert isinstance(restore_root_logger.handlers[0].formatter, JsonFormatter)

    def test_setup_text(self, restore_root_logger):
        setup_logging(level="INFO", log_format="text")
        assert restore_root_logger.level == logging.INFO
        assert len(restore_root_logger.handlers) == 1

    def test_log_file(self, restore_root_logger, tmp_path):
        log_file = tmp_path / "logs" / "codex.log"
        setup_logging(level="INFO", log_file=log_file)
        assert any(isinstance(h, RotatingFileHandler) for h in restore_root_logger.handlers)
        get_logger("file_test").info("written")
        for handler in restore_root_logger.handlers:
            handler.flush()
        assert "written" in log_file.read_text(encoding="utf-8")


class TestHandlers:
    @pytest.mark.parametrize(
        "size,expected",
        [("10MB", 10 * 1024**2), ("512kb", 512 * 1024), ("4096", 4096), ("1 GB", 1024**3)],
    )
    def test_parse_size(self, size, expected):
        assert parse_size(size) == expected

    def test_parse_size_invalid(self):
        with pytest.raises(ValueError):
            parse_size("ten megabytes")

    def test_rotating_handler(self, tmp_path):
        handler = create_rotating_handler(tmp_path / "a" / "b.log", rotation="1KB", retention=2)
        try:
            assert handler.maxBytes == 1024
            assert handler.backupCount == 2
            assert (tmp_path / "a").is_dir()
        finally:
            handler.close()
