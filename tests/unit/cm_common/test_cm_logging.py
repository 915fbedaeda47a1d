"""Tests for logging configuration and env parsing."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from cm_common.config import parse_bool_env, parse_path_env
from cm_common.logging import configure_logging


pytestmark = pytest.mark.unit_common


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.mark.parametrize(
    "raw, expected",
    [(None, None), ("1", True), ("YES", True), (" on ", True), ("0", False), ("nope", False)],
)
def test_parse_bool_env(raw, expected) -> None:
    assert parse_bool_env(raw) is expected


def test_parse_path_env_expands_home(monkeypatch) -> None:
    monkeypatch.setenv("HOME", "/home/tester")
    assert parse_path_env("~/menus") == Path("/home/tester/menus")
    assert parse_path_env("   ") is None
    assert parse_path_env(None) is None


def test_configure_logging_reads_level_from_env(monkeypatch, restore_root_logger) -> None:
    monkeypatch.setenv("CM_LOG_LEVEL", "info")
    monkeypatch.delenv("CM_LOG_FILE", raising=False)
    configure_logging(force=True)
    assert restore_root_logger.level == logging.INFO


def test_configure_logging_debug_wins(monkeypatch, restore_root_logger) -> None:
    monkeypatch.setenv("CM_LOG_LEVEL", "ERROR")
    configure_logging(debug=True, force=True)
    assert restore_root_logger.level == logging.DEBUG


def test_configure_logging_writes_log_file(tmp_path: Path, monkeypatch, restore_root_logger) -> None:
    monkeypatch.delenv("CM_LOG_LEVEL", raising=False)
    log_file = tmp_path / "cm.log"
    configure_logging(level="WARNING", log_file=str(log_file), json=True, force=True)

    logging.getLogger("cm.test").warning("disk almost full")
    for handler in restore_root_logger.handlers:
        handler.flush()

    content = log_file.read_text()
    assert "disk almost full" in content
    assert '"level": "warning"' in content


def test_configure_logging_keeps_existing_handlers(restore_root_logger) -> None:
    sentinel = logging.NullHandler()
    restore_root_logger.handlers[:] = [sentinel]
    configure_logging()
    assert restore_root_logger.handlers == [sentinel]
