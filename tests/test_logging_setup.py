"""Tests for the logging_setup module."""

import logging
from io import StringIO

from ipfscmds.logging_setup import (
    RESET,
    LogObjects,
    ScreenLogFormatter,
    enable_debug,
    error_text,
    get_logger,
    is_debug,
    use_colors,
)


def make_record(level, msg="hello"):
    return logging.LogRecord("ipfs.test", level, __file__, 1, msg, None, None)


def test_use_colors_no_color(monkeypatch):
    """Test NO_COLOR wins over everything."""
    monkeypatch.setenv("NO_COLOR", "1")
    monkeypatch.setenv("FORCE_COLOR", "1")
    assert use_colors(StringIO()) is False


def test_use_colors_force(monkeypatch):
    monkeypatch.delenv("NO_COLOR", raising=False)
    monkeypatch.setenv("FORCE_COLOR", "1")
    assert use_colors(StringIO()) is True


def test_use_colors_pipe(monkeypatch):
    """Test non terminal streams get no colors."""
    monkeypatch.delenv("NO_COLOR", raising=False)
    monkeypatch.delenv("FORCE_COLOR", raising=False)
    assert use_colors(StringIO()) is False


def test_error_text(monkeypatch):
    monkeypatch.delenv("NO_COLOR", raising=False)
    monkeypatch.delenv("FORCE_COLOR", raising=False)
    assert error_text("disk full", StringIO()) == "Error: disk full"

    monkeypatch.setenv("FORCE_COLOR", "1")
    text = error_text("disk full", StringIO())
    assert text.startswith("\x1b[31;1mError: disk full")
    assert text.endswith(RESET)


class TestScreenLogFormatter:
    """Tests for ScreenLogFormatter."""

    def test_plain(self):
        formatter = ScreenLogFormatter()
        assert formatter.format(make_record(logging.INFO)) == "hello"
        assert formatter.format(make_record(logging.ERROR)) == "hello"

    def test_colors(self):
        formatter = ScreenLogFormatter(colors=True)
        assert formatter.format(make_record(logging.INFO)) == "hello"
        assert formatter.format(make_record(logging.WARNING)) == f"\x1b[33;2mhello{RESET}"
        assert formatter.format(make_record(logging.CRITICAL)) == f"\x1b[31;1mhello{RESET}"

    def test_debug(self):
        text = ScreenLogFormatter(debug=True).format(make_record(logging.DEBUG))
        assert "ipfs.test - hello // " in text


def test_get_logger():
    logger = get_logger("tests")
    assert logger.name == "ipfs.tests"
    assert logger.propagate is False
    assert all(handler in logger.handlers for handler in LogObjects.handlers)

    again = get_logger("tests", level=logging.ERROR)
    assert again is logger
    assert len(again.handlers) == len(LogObjects.handlers)
    assert again.level == logging.ERROR


def test_enable_debug(monkeypatch):
    """Test loggers created before debug mode switch to DEBUG."""
    monkeypatch.setattr(LogObjects, "debug", False)
    logger = get_logger("tests.late")
    assert logger.level == logging.WARNING

    enable_debug()
    assert is_debug()
    assert logger.level == logging.DEBUG
    screen = [handler for handler in LogObjects.handlers if isinstance(handler.formatter, ScreenLogFormatter)]
    assert screen
    assert " - hello // " in screen[0].format(make_record(logging.INFO))
