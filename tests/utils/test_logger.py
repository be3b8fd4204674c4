"""Tests for the application logger utility."""

from __future__ import annotations

import logging
import logging.handlers
from unittest.mock import patch

import pytest

from motion_cli.utils.logger import get_logger, log_file_path


@pytest.fixture
def log_dir(tmp_path):
    path = tmp_path / "a" / "b"
    with patch("motion_cli.utils.logger.user_log_dir", return_value=str(path)):
        yield path


def test_get_logger_creates_log_file(log_dir):
    """Logger creates the log file (and missing parents) inside user_log_dir."""
    logger = get_logger()

    assert (log_dir / "motion.log").exists()
    assert isinstance(logger, logging.Logger)
    assert logger.name == "motion_cli"


def test_get_logger_returns_singleton(log_dir):
    assert get_logger() is get_logger()
    file_handlers = [
        h
        for h in logging.getLogger("motion_cli").handlers
        if isinstance(h, logging.handlers.RotatingFileHandler)
    ]
    assert len(file_handlers) == 1


def test_file_handler_added_next_to_foreign_handler(log_dir):
    """A handler attached by someone else does not suppress the log file."""
    foreign = logging.NullHandler()
    logging.getLogger("motion_cli").addHandler(foreign)

    logger = get_logger()
    logger.info("still written")
    for handler in logger.handlers:
        handler.flush()

    assert foreign in logger.handlers
    assert "still written" in (log_dir / "motion.log").read_text(encoding="utf-8")


def test_module_loggers_reach_the_file(log_dir):
    """Children of motion_cli write through the application handler."""
    logger = get_logger()
    logging.getLogger("motion_cli.tools.search_tasks").info("hello from a tool")

    for handler in logger.handlers:
        handler.flush()

    content = (log_dir / "motion.log").read_text(encoding="utf-8")
    assert "hello from a tool" in content
    assert "[motion_cli.tools.search_tasks]" in content


def test_does_not_propagate_to_root(log_dir):
    assert get_logger().propagate is False


def test_log_file_path(log_dir):
    assert log_file_path() == log_dir / "motion.log"


@pytest.mark.parametrize(
    "value,expected",
    [("warning", logging.WARNING), (" INFO ", logging.INFO), ("chatty", logging.DEBUG)],
)
def test_level_from_environment(log_dir, monkeypatch, value, expected):
    monkeypatch.setenv("MOTION_LOG_LEVEL", value)
    assert get_logger().level == expected


def test_messages_below_threshold_are_dropped(log_dir, monkeypatch):
    monkeypatch.setenv("MOTION_LOG_LEVEL", "WARNING")
    logger = get_logger()
    logging.getLogger("motion_cli.api.client").info("quiet")
    logging.getLogger("motion_cli.api.client").warning("loud")
    for handler in logger.handlers:
        handler.flush()

    content = (log_dir / "motion.log").read_text(encoding="utf-8")
    assert "loud" in content
    assert "quiet" not in content
