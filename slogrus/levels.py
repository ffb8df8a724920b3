"""Severity levels and their mapping onto numeric handler levels."""

from __future__ import annotations

from enum import IntEnum

# Numeric handler levels: lower values are more verbose.
LEVEL_DEBUG = -4
LEVEL_INFO = 0
LEVEL_WARN = 4
LEVEL_ERROR = 8


class ParseError(ValueError):
    """Raised when a level name cannot be parsed."""


class LogPanic(Exception):
    """Raised after a message has been logged at panic level."""


class Level(IntEnum):
    """Log severity, ordered from most severe (PANIC) to least (TRACE)."""

    PANIC = 0
    FATAL = 1
    ERROR = 2
    WARN = 3
    INFO = 4
    DEBUG = 5
    TRACE = 6

    def __str__(self) -> str:
        return _NAMES[self]

    def __format__(self, spec: str) -> str:
        return format(str(self), spec)

    def to_slog_level(self) -> int:
        """Return the numeric handler level for this severity."""
        return _SLOG_LEVELS[self]


_NAMES = {
    Level.TRACE: "trace",
    Level.DEBUG: "debug",
    Level.INFO: "info",
    Level.WARN: "warning",
    Level.ERROR: "error",
    Level.FATAL: "fatal",
    Level.PANIC: "panic",
}

_SLOG_LEVELS = {
    Level.TRACE: LEVEL_DEBUG - 4,
    Level.DEBUG: LEVEL_DEBUG,
    Level.INFO: LEVEL_INFO,
    Level.WARN: LEVEL_WARN,
    Level.ERROR: LEVEL_ERROR,
    Level.FATAL: LEVEL_ERROR + 4,
    Level.PANIC: LEVEL_ERROR + 8,
}

_PARSE = {
    "panic": Level.PANIC,
    "fatal": Level.FATAL,
    "error": Level.ERROR,
    "warn": Level.WARN,
    "warning": Level.WARN,
    "info": Level.INFO,
    "debug": Level.DEBUG,
    "trace": Level.TRACE,
}

ALL_LEVELS = tuple(Level)


def parse_level(lvl: str) -> Level:
    """Parse a level name such as ``"info"`` or ``"warning"``."""
    try:
        return _PARSE[lvl]
    except KeyError:
        raise ParseError(f'not a valid logrus Level: "{lvl}"') from None