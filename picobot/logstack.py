"""Levelled logging with a ``[LEVEL] [library] [file:line]`` prefix on every message."""

from __future__ import annotations

import enum
import logging
import sys

__all__ = ["LogLevel", "SdkFormatter", "format_prefix", "get_logger"]


class LogLevel(enum.IntEnum):
    """Verbosity of a library's log output; each level includes those below it."""

    NONE = 0
    ERROR = 1
    WARN = 2
    INFO = 3
    DEBUG = 4


_TO_LOGGING = {
    LogLevel.NONE: logging.CRITICAL + 10,
    LogLevel.ERROR: logging.ERROR,
    LogLevel.WARN: logging.WARNING,
    LogLevel.INFO: logging.INFO,
    LogLevel.DEBUG: logging.DEBUG,
}

_LINE_END = "\r\n"


def _coerce_level(level: LogLevel | int | str) -> LogLevel:
    try:
        if isinstance(level, str):
            return LogLevel[level.upper()]
        return LogLevel(level)
    except (KeyError, ValueError):
        raise ValueError(
            "log level must be one of NONE, ERROR, WARN, INFO or DEBUG, "
            f"not {level!r}"
        ) from None


def _label_for(levelno: int) -> str:
    if levelno >= logging.ERROR:
        return "ERROR"
    if levelno >= logging.WARNING:
        return "WARN"
    if levelno >= logging.INFO:
        return "INFO"
    return "DEBUG"


def format_prefix(level: LogLevel | int | str, library: str, filename: str, line: int) -> str:
    """Return the metadata prefix put in front of a message of ``level``."""
    lvl = _coerce_level(level)
    if lvl is LogLevel.NONE:
        raise ValueError("no message is ever logged at level NONE")
    if not library:
        raise ValueError("a library name is required")
    base = filename.rsplit("/", 1)[-1]
    return f"[{lvl.name}] [{library}] [{base}:{line}] "


class SdkFormatter(logging.Formatter):
    """Formats records as ``[LEVEL] [library] [file:line] message``."""

    def __init__(self, library: str) -> None:
        super().__init__()
        if not library:
            raise ValueError("a library name is required")
        self.library = library

    def format(self, record: logging.LogRecord) -> str:
        label = _label_for(record.levelno)
        prefix = format_prefix(label, self.library, record.pathname, record.lineno)
        text = prefix + record.getMessage()
        if record.exc_info:
            text += "\n" + self.formatException(record.exc_info)
        return text


def get_logger(name: str, level: LogLevel | int | str) -> logging.Logger:
    """Return a logger for library ``name`` printing to stdout at ``level``."""
    if not name:
        raise ValueError("a library name is required")
    lvl = _coerce_level(level)
    logger = logging.getLogger(name)
    for handler in list(logger.handlers):
        if isinstance(handler.formatter, SdkFormatter):
            logger.removeHandler(handler)
    handler = logging.StreamHandler(sys.stdout)
    handler.terminator = _LINE_END
    handler.setFormatter(SdkFormatter(name))
    logger.addHandler(handler)
    logger.setLevel(_TO_LOGGING[lvl])
    logger.propagate = False
    return logger