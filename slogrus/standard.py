"""The process-wide standard logger and module-level shortcuts to it."""

from __future__ import annotations

from typing import Any, Mapping, Optional, TextIO, Union

from .entry import Entry
from .formatters import Formatter, JSONFormatter, TextFormatter
from .handlers import HandlerOptions, JSONHandler, SlogLogger, TextHandler
from .levels import Level
from .logger import Logger, new

_standard: Logger = new()


def standard_logger() -> Logger:
    """Return the shared standard logger."""
    return _standard


def set_output(out: TextIO) -> None:
    """Send the standard logger's output to ``out``."""
    _standard.set_output(out)


def set_level(level: Union[Level, int]) -> None:
    """Set the standard logger's level."""
    _standard.set_level(level)


def set_formatter(formatter: Optional[Formatter]) -> None:
    """Switch the standard logger between text and JSON output.

    Anything other than a TextFormatter or JSONFormatter selects text output.
    """
    options = HandlerOptions(level=_standard.level.to_slog_level())
    if isinstance(formatter, JSONFormatter):
        handler = JSONHandler(_standard.out, options)
        _standard.formatter = formatter
    elif isinstance(formatter, TextFormatter):
        handler = TextHandler(_standard.out, options)
        _standard.formatter = formatter
    else:
        handler = TextHandler(_standard.out, options)
        _standard.formatter = TextFormatter()
    _standard._slogger = SlogLogger(handler)


def set_report_caller(include: bool) -> None:
    """Turn reporting of the calling source location on or off."""
    options = HandlerOptions(level=_standard.level.to_slog_level(), add_source=include)
    if isinstance(_standard.slogger().handler, JSONHandler):
        handler = JSONHandler(_standard.out, options)
        _standard.formatter = JSONFormatter()
    else:
        handler = TextHandler(_standard.out, options)
        _standard.formatter = TextFormatter()
    _standard._slogger = SlogLogger(handler)


def with_field(key: str, value: Any) -> Entry:
    return _standard.with_field(key, value)


def with_fields(fields: Mapping[str, Any]) -> Entry:
    return _standard.with_fields(fields)


def with_error(err: BaseException) -> Entry:
    return _standard.with_error(err)


def trace(*args: Any) -> None:
    _standard.trace(*args)


def debug(*args: Any) -> None:
    _standard.debug(*args)


def info(*args: Any) -> None:
    _standard.info(*args)


def print(*args: Any) -> None:
    _standard.print(*args)


def warn(*args: Any) -> None:
    _standard.warn(*args)


def warning(*args: Any) -> None:
    _standard.warning(*args)


def error(*args: Any) -> None:
    _standard.error(*args)


def fatal(*args: Any) -> None:
    """Log at fatal level, then raise SystemExit(1)."""
    _standard.fatal(*args)


def panic(*args: Any) -> None:
    """Log at panic level, then raise LogPanic."""
    _standard.panic(*args)


def tracef(fmt: str, *args: Any) -> None:
    _standard.tracef(fmt, *args)


def debugf(fmt: str, *args: Any) -> None:
    _standard.debugf(fmt, *args)


def infof(fmt: str, *args: Any) -> None:
    _standard.infof(fmt, *args)


def printf(fmt: str, *args: Any) -> None:
    _standard.printf(fmt, *args)


def warnf(fmt: str, *args: Any) -> None:
    _standard.warnf(fmt, *args)


def warningf(fmt: str, *args: Any) -> None:
    _standard.warningf(fmt, *args)


def errorf(fmt: str, *args: Any) -> None:
    _standard.errorf(fmt, *args)


def fatalf(fmt: str, *args: Any) -> None:
    _standard.fatalf(fmt, *args)


def panicf(fmt: str, *args: Any) -> None:
    _standard.panicf(fmt, *args)


def traceln(*args: Any) -> None:
    _standard.traceln(*args)


def debugln(*args: Any) -> None:
    _standard.debugln(*args)


def infoln(*args: Any) -> None:
    _standard.infoln(*args)


def println(*args: Any) -> None:
    _standard.println(*args)


def warnln(*args: Any) -> None:
    _standard.warnln(*args)


def warningln(*args: Any) -> None:
    _standard.warningln(*args)


def errorln(*args: Any) -> None:
    _standard.errorln(*args)


def fatalln(*args: Any) -> None:
    _standard.fatalln(*args)


def panicln(*args: Any) -> None:
    _standard.panicln(*args)