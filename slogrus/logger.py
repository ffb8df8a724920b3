"""The Logger: level filtering and logging methods over a structured handler."""

from __future__ import annotations

import sys
from typing import Any, Callable, Mapping, Optional, TextIO, Union

from .entry import Entry, LogWriter, _sprint, _sprintf, _sprintln
from .formatters import Formatter, JSONFormatter, TextFormatter
from .handlers import (
    Handler,
    HandlerOptions,
    JSONHandler,
    SlogLogger,
    TextHandler,
)
from .levels import LEVEL_DEBUG, LEVEL_ERROR, LEVEL_INFO, LEVEL_WARN, Level, LogPanic


def _formatter_for(handler: Handler) -> Formatter:
    return JSONFormatter() if isinstance(handler, JSONHandler) else TextFormatter()


def _level_from_handler_level(value: Optional[int]) -> Level:
    if value is None:
        return Level.INFO
    if value <= LEVEL_DEBUG - 4:
        return Level.TRACE
    if value <= LEVEL_DEBUG:
        return Level.DEBUG
    if value <= LEVEL_INFO:
        return Level.INFO
    if value <= LEVEL_WARN:
        return Level.WARN
    if value <= LEVEL_ERROR:
        return Level.ERROR
    if value <= LEVEL_ERROR + 4:
        return Level.FATAL
    return Level.PANIC


class Logger:
    """Filters by level and passes messages to an underlying structured logger."""

    def __init__(
        self,
        slogger: SlogLogger,
        level: Level = Level.INFO,
        out: Optional[TextIO] = None,
        formatter: Optional[Formatter] = None,
    ):
        self._slogger = slogger
        self.level = Level(level)
        self.out = sys.stderr if out is None else out
        self.formatter = formatter if formatter is not None else _formatter_for(slogger.handler)

    def _rebuild_handler(self) -> None:
        options = HandlerOptions(level=self.level.to_slog_level())
        handler = self._slogger.handler
        if isinstance(handler, TextHandler):
            self._slogger = SlogLogger(TextHandler(self.out, options))
            self.formatter = TextFormatter()
        elif isinstance(handler, JSONHandler):
            self._slogger = SlogLogger(JSONHandler(self.out, options))
            self.formatter = JSONFormatter()

    def set_output(self, out: TextIO) -> None:
        """Send output to ``out``, rebuilding a text or JSON handler."""
        self.out = out
        self._rebuild_handler()

    def set_level(self, level: Union[Level, int]) -> None:
        """Set the level, rebuilding a text or JSON handler to match."""
        self.level = Level(level)
        self._rebuild_handler()

    def is_level_enabled(self, level: Union[Level, int]) -> bool:
        """Report whether messages at ``level`` pass this logger's level."""
        return level <= self.level

    def slogger(self) -> SlogLogger:
        """Return the underlying structured logger."""
        return self._slogger

    # Entries

    def with_field(self, key: str, value: Any) -> Entry:
        return Entry(logger=self).with_field(key, value)

    def with_fields(self, fields: Mapping[str, Any]) -> Entry:
        return Entry(logger=self).with_fields(fields)

    def with_context(self, context: Any) -> Entry:
        return Entry(logger=self).with_context(context)

    def with_error(self, err: BaseException) -> Entry:
        return Entry(logger=self).with_error(err)

    # Core

    def _log(self, level: Level, render: Callable[[], str]) -> None:
        if not self.is_level_enabled(level):
            return
        msg = render()
        self._slogger.log(level.to_slog_level(), msg)
        if level is Level.FATAL:
            raise SystemExit(1)
        if level is Level.PANIC:
            raise LogPanic(msg)

    # Plain

    def trace(self, *args: Any) -> None:
        self._log(Level.TRACE, lambda: _sprint(*args))

    def debug(self, *args: Any) -> None:
        self._log(Level.DEBUG, lambda: _sprint(*args))

    def info(self, *args: Any) -> None:
        self._log(Level.INFO, lambda: _sprint(*args))

    def print(self, *args: Any) -> None:
        self.info(*args)

    def warn(self, *args: Any) -> None:
        self._log(Level.WARN, lambda: _sprint(*args))

    def warning(self, *args: Any) -> None:
        self.warn(*args)

    def error(self, *args: Any) -> None:
        self._log(Level.ERROR, lambda: _sprint(*args))

    def fatal(self, *args: Any) -> None:
        """Log at fatal level, then raise SystemExit(1)."""
        self._log(Level.FATAL, lambda: _sprint(*args))

    def panic(self, *args: Any) -> None:
        """Log at panic level, then raise LogPanic."""
        self._log(Level.PANIC, lambda: _sprint(*args))

    # Formatted

    def tracef(self, fmt: str, *args: Any) -> None:
        self._log(Level.TRACE, lambda: _sprintf(fmt, *args))

    def debugf(self, fmt: str, *args: Any) -> None:
        self._log(Level.DEBUG, lambda: _sprintf(fmt, *args))

    def infof(self, fmt: str, *args: Any) -> None:
        self._log(Level.INFO, lambda: _sprintf(fmt, *args))

    def printf(self, fmt: str, *args: Any) -> None:
        self.infof(fmt, *args)

    def warnf(self, fmt: str, *args: Any) -> None:
        self._log(Level.WARN, lambda: _sprintf(fmt, *args))

    def warningf(self, fmt: str, *args: Any) -> None:
        self.warnf(fmt, *args)

    def errorf(self, fmt: str, *args: Any) -> None:
        self._log(Level.ERROR, lambda: _sprintf(fmt, *args))

    def fatalf(self, fmt: str, *args: Any) -> None:
        self._log(Level.FATAL, lambda: _sprintf(fmt, *args))

    def panicf(self, fmt: str, *args: Any) -> None:
        self._log(Level.PANIC, lambda: _sprintf(fmt, *args))

    # Space-separated

    def traceln(self, *args: Any) -> None:
        self._log(Level.TRACE, lambda: _sprintln(*args))

    def debugln(self, *args: Any) -> None:
        self._log(Level.DEBUG, lambda: _sprintln(*args))

    def infoln(self, *args: Any) -> None:
        self._log(Level.INFO, lambda: _sprintln(*args))

    def println(self, *args: Any) -> None:
        self.infoln(*args)

    def warnln(self, *args: Any) -> None:
        self._log(Level.WARN, lambda: _sprintln(*args))

    def warningln(self, *args: Any) -> None:
        self.warnln(*args)

    def errorln(self, *args: Any) -> None:
        self._log(Level.ERROR, lambda: _sprintln(*args))

    def fatalln(self, *args: Any) -> None:
        self._log(Level.FATAL, lambda: _sprintln(*args))

    def panicln(self, *args: Any) -> None:
        self._log(Level.PANIC, lambda: _sprintln(*args))

    # Writers

    def writer(self) -> LogWriter:
        """Return a writer that logs each written line at info level."""
        return self.writer_level(Level.INFO)

    def writer_level(self, level: Union[Level, int]) -> LogWriter:
        """Return a writer that logs each written line at ``level``."""
        return Entry(logger=self).writer_level(level)


def new() -> Logger:
    """Create a logger writing text to standard error at info level."""
    handler = TextHandler(sys.stderr, HandlerOptions(level=LEVEL_INFO))
    return Logger(SlogLogger(handler), Level.INFO, sys.stderr, TextFormatter())


def new_with_handler(handler: Handler) -> Logger:
    """Create a logger at info level around ``handler``."""
    return Logger(SlogLogger(handler), Level.INFO, sys.stderr, _formatter_for(handler))


def from_slog_logger(slogger: SlogLogger) -> Logger:
    """Wrap an existing structured logger; the level starts at info."""
    return Logger(slogger, Level.INFO, sys.stderr, _formatter_for(slogger.handler))


def _new_logger(
    handler_cls: type, formatter: Formatter, out: Optional[TextIO], opts: Optional[HandlerOptions]
) -> Logger:
    if out is None:
        out = sys.stderr
    if opts is None:
        opts = HandlerOptions(level=LEVEL_INFO)
    handler = handler_cls(out, opts)
    return Logger(SlogLogger(handler), _level_from_handler_level(opts.level), out, formatter)


def new_text_logger(out: Optional[TextIO] = None, opts: Optional[HandlerOptions] = None) -> Logger:
    """Create a logger writing key=value text, its level taken from ``opts``."""
    return _new_logger(TextHandler, TextFormatter(), out, opts)


def new_json_logger(out: Optional[TextIO] = None, opts: Optional[HandlerOptions] = None) -> Logger:
    """Create a logger writing JSON lines, its level taken from ``opts``."""
    return _new_logger(JSONHandler, JSONFormatter(), out, opts)