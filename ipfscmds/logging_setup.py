"""Logging setup and terminal styling.

Debug mode comes from ``--debug`` on the command line or ``IPFS_LOGGING=debug``
in the environment. Colors are only used on terminals, unless NO_COLOR or
FORCE_COLOR say otherwise.
"""

import logging
import os
import sys
from typing import TextIO

__all__ = [
    "LogObjects",
    "enable_debug",
    "error_text",
    "get_logger",
    "init_logger",
    "is_debug",
    "set_debug",
    "use_colors",
]

ENV_LOGGING = "IPFS_LOGGING"

_ESC = "\x1b["
RESET = f"{_ESC}0m"

BOLD = "1"
DIM = "2"
RED = "31"
YELLOW = "33"

LEVEL_STYLES: dict[int, tuple[str, ...]] = {
    logging.WARNING: (YELLOW, DIM),
    logging.ERROR: (RED, DIM),
    logging.CRITICAL: (RED, BOLD),
}


class LogObjects:
    """Reusable objects for loggers."""

    debug: bool = os.environ.get(ENV_LOGGING, "").lower() == "debug"
    handlers: list[logging.Handler] = []


def is_debug() -> bool:
    """Return the current debug state."""
    return LogObjects.debug


def set_debug(value: bool) -> None:
    """Set the debug state, for loggers created afterwards."""
    LogObjects.debug = value


def use_colors(stream: TextIO | None = None) -> bool:
    """Tell whether ANSI colors should be written to `stream` (stderr by default)."""
    if os.environ.get("NO_COLOR"):
        return False
    if os.environ.get("FORCE_COLOR"):
        return True
    if stream is None:
        stream = sys.stderr
    return hasattr(stream, "isatty") and stream.isatty()


def _style(*codes: str) -> str:
    return f"{_ESC}{';'.join(codes)}m"


def error_text(message: str, stream: TextIO | None = None) -> str:
    """Return the ``Error: ...`` line printed by the command line, red on terminals."""
    text = f"Error: {message}"
    return f"{_style(RED, BOLD)}{text}{RESET}" if use_colors(stream) else text


class ScreenLogFormatter(logging.Formatter):
    """Console formatter, warnings and errors are colored by level."""

    def __init__(self, debug: bool = False, colors: bool = False) -> None:
        super().__init__()
        log_format = r"%(name)14s - %(message)s // %(filename)s:%(lineno)d" if debug else r"%(message)s"
        self._default = logging.Formatter(log_format)
        self._formatters = {
            level: logging.Formatter(f"{_style(*codes)}{log_format}{RESET}" if colors else log_format)
            for level, codes in LEVEL_STYLES.items()
        }

    def format(self, record: logging.LogRecord) -> str:
        return self._formatters.get(record.levelno, self._default).format(record)


def init_logger(filename: str | None = None, force_debug: bool = False) -> None:
    """Initialize the logging system.

    Args:
        filename: Optional filename to log to
        force_debug: If True, force debug level (``--debug`` on the command line)
    """
    if force_debug:
        set_debug(True)

    logging.basicConfig()
    LogObjects.handlers.clear()
    if filename:
        file_handler = logging.FileHandler(filename)
        file_handler.setFormatter(logging.Formatter(fmt=r"%(asctime)s [%(levelname)s] %(name)s :: %(message)s :: %(filename)s:%(lineno)d"))
        LogObjects.handlers.append(file_handler)
    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(ScreenLogFormatter(debug=is_debug(), colors=use_colors()))
    LogObjects.handlers.append(stream_handler)


def enable_debug() -> None:
    """Turn debug mode on once logging is initialized.

    Screen handlers switch to the debug format and existing loggers to DEBUG.
    """
    set_debug(True)
    for handler in LogObjects.handlers:
        if isinstance(handler.formatter, ScreenLogFormatter):
            handler.setFormatter(ScreenLogFormatter(debug=True, colors=use_colors()))
    for name, logger in logging.root.manager.loggerDict.items():
        if name.startswith("ipfs.") and isinstance(logger, logging.Logger):
            logger.setLevel(logging.DEBUG)


def get_logger(name: str = "core/commands", level: int | None = None) -> logging.Logger:
    """Return a named logger wired to the handlers of `init_logger`.

    Args:
        name: logger's name
        level: logger's level (DEBUG in debug mode, WARNING otherwise, if not set)
    """
    logger = logging.getLogger(f"ipfs.{name}")
    if level is None:
        logger.setLevel(logging.DEBUG if is_debug() else logging.WARNING)
    else:
        logger.setLevel(level)
    logger.propagate = False
    for handler in list(logger.handlers):
        if handler not in LogObjects.handlers:
            logger.removeHandler(handler)
    for handler in LogObjects.handlers:
        if handler not in logger.handlers:
            logger.addHandler(handler)
    return logger
