"""Log entries: a logger plus fields, time and context, with logging methods."""

from __future__ import annotations

import json
import math
import re
import threading
from dataclasses import dataclass, field, replace
from datetime import datetime
from decimal import Decimal
from typing import Any, Callable, Mapping, Optional, Union

from .levels import Level, LogPanic

_MAX_TOKEN_SIZE = 64 * 1024


@dataclass(frozen=True)
class Caller:
    """Where a log call came from."""

    file: str
    line: int
    function: str


def _go_float(value: float, eprec: int = 21) -> str:
    """Shortest float text, switching to exponent form outside [-4, eprec)."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    if value == 0:
        return "-0" if math.copysign(1.0, value) < 0 else "0"
    number = Decimal(repr(value)).normalize()
    sign, digits, exponent = number.as_tuple()
    text = "".join(map(str, digits))
    exp = len(digits) + exponent - 1
    neg = "-" if sign else ""
    if exp < -4 or exp >= eprec:
        mantissa = text[0] + ("." + text[1:] if len(text) > 1 else "")
        return f"{neg}{mantissa}e{'-' if exp < 0 else '+'}{abs(exp):02d}"
    return neg + format(number.copy_abs(), "f")


def _go_value(value: Any) -> str:
    """Render a value the way the default %v verb does."""
    if value is None:
        return "<nil>"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        return _go_float(value)
    if isinstance(value, str):
        return value
    if isinstance(value, (bytes, bytearray)):
        return "[" + " ".join(str(b) for b in value) + "]"
    if isinstance(value, Mapping):
        items = sorted(value.items(), key=lambda kv: str(kv[0]))
        return "map[" + " ".join(f"{_go_value(k)}:{_go_value(v)}" for k, v in items) + "]"
    if isinstance(value, (list, tuple, set, frozenset)):
        return "[" + " ".join(_go_value(v) for v in value) + "]"
    return str(value)


def _sprint(*args: Any) -> str:
    """Concatenate operands, adding a space between two non-string operands."""
    parts = []
    prev_is_str = False
    for position, arg in enumerate(args):
        is_str = isinstance(arg, str)
        if position > 0 and not is_str and not prev_is_str:
            parts.append(" ")
        parts.append(_go_value(arg))
        prev_is_str = is_str
    return "".join(parts)


def _sprintln(*args: Any) -> str:
    """Join operands with single spaces."""
    return " ".join(_go_value(arg) for arg in args)


_VERB = re.compile(r"%([-+# 0]*)(\d*)(?:\.(\d*))?(.|$)", re.S)


def _type_name(value: Any) -> str:
    return type(value).__name__


def _bad_verb(verb: str, arg: Any) -> str:
    if arg is None:
        return f"%!{verb}(<nil>)"
    return f"%!{verb}({_type_name(arg)}={_go_value(arg)})"


def _format_verb(verb: str, flags: str, width: str, prec: Optional[str], arg: Any) -> str:
    base = "%" + flags + width
    spec = base + ("." + (prec or "0") if prec is not None else "")
    is_int = isinstance(arg, int) and not isinstance(arg, bool)
    is_number = is_int or isinstance(arg, float)
    try:
        if verb in "vs":
            return (spec + "s") % _go_value(arg)
        if verb == "d" and is_int:
            return (spec + "d") % arg
        if verb in "xXo" and is_int:
            return (spec + verb) % arg
        if verb in "xX" and isinstance(arg, (str, bytes, bytearray)):
            data = arg.encode("utf-8") if isinstance(arg, str) else bytes(arg)
            text = data.hex()
            return (base + "s") % (text.upper() if verb == "X" else text)
        if verb == "b" and is_int:
            return (base + "s") % format(arg, "b")
        if verb in "gG" and is_number and prec is None:
            text = _go_float(float(arg), eprec=6)
            return (base + "s") % (text.upper() if verb == "G" else text)
        if verb in "eEfFgG" and is_number:
            return (spec + verb) % float(arg)
        if verb == "q" and isinstance(arg, str):
            return (base + "s") % json.dumps(arg, ensure_ascii=False)
        if verb == "q" and is_int:
            return (base + "s") % ("'" + chr(arg) + "'")
        if verb == "c" and is_int:
            return (base + "s") % chr(arg)
        if verb == "t" and isinstance(arg, bool):
            return (base + "s") % _go_value(arg)
        if verb == "T":
            return (base + "s") % ("<nil>" if arg is None else _type_name(arg))
    except (TypeError, ValueError, OverflowError):
        pass
    return _bad_verb(verb, arg)


def _sprintf(fmt: str, *args: Any) -> str:
    """Format printf-style, reporting missing, extra and mismatched operands inline."""
    position = 0

    def substitute(match: re.Match) -> str:
        nonlocal position
        flags, width, prec, verb = match.groups()
        if verb == "%":
            return "%"
        if not verb:
            return "%!(NOVERB)"
        if position >= len(args):
            return f"%!{verb}(MISSING)"
        arg = args[position]
        position += 1
        return _format_verb(verb, flags, width, prec, arg)

    out = _VERB.sub(substitute, fmt)
    if position < len(args):
        extra = ", ".join(
            "<nil>" if a is None else f"{_type_name(a)}={_go_value(a)}" for a in args[position:]
        )
        out += f"%!(EXTRA {extra})"
    return out


@dataclass(eq=False)
class Entry:
    """A logger together with fields, a time and a context for one log call."""

    logger: Any
    data: dict = field(default_factory=dict)
    time: datetime = field(default_factory=datetime.now)
    level: Level = Level.PANIC
    caller: Optional[Caller] = None
    context: Any = None

    # Derivation

    def with_field(self, key: str, value: Any) -> "Entry":
        """Return a new entry with one more field."""
        return replace(self, data={**self.data, key: value})

    def with_fields(self, fields: Mapping[str, Any]) -> "Entry":
        """Return a new entry with the given fields added."""
        return replace(self, data={**self.data, **fields})

    def with_context(self, context: Any) -> "Entry":
        """Return a new entry carrying ``context``."""
        return replace(self, data=dict(self.data), context=context)

    def with_error(self, err: BaseException) -> "Entry":
        """Return a new entry with ``err`` under the ``error`` field."""
        return self.with_field("error", err)

    def with_time(self, time: datetime) -> "Entry":
        """Return a new entry with its time set to ``time``."""
        return replace(self, data=dict(self.data), time=time)

    # Core

    def _log(self, level: Level, render: Callable[[], str]) -> None:
        if not self.logger.is_level_enabled(level):
            return
        msg = render()
        slogger = self.logger.slogger()
        if self.data:
            slogger.log_attrs(level.to_slog_level(), msg, list(self.data.items()), context=self.context)
        else:
            slogger.log(level.to_slog_level(), msg, context=self.context)
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

    def writer(self) -> "LogWriter":
        """Return a writer that logs each written line at info level."""
        return self.writer_level(Level.INFO)

    def writer_level(self, level: Union[Level, int]) -> "LogWriter":
        """Return a writer that logs each written line at ``level``."""
        methods = {
            Level.TRACE: self.trace,
            Level.DEBUG: self.debug,
            Level.INFO: self.info,
            Level.WARN: self.warn,
            Level.ERROR: self.error,
            Level.FATAL: self.fatal,
            Level.PANIC: self.panic,
        }
        try:
            print_func = methods[Level(level)]
        except ValueError:
            print_func = self.print
        return LogWriter(print_func, self.error)


class LogWriter:
    """File-like sink that logs every complete line written to it."""

    def __init__(self, print_func: Callable[..., None], error_func: Callable[..., None]):
        self._print = print_func
        self._error = error_func
        self._pending = bytearray()
        self._closed = False
        self._broken = False
        self._lock = threading.Lock()

    @property
    def closed(self) -> bool:
        return self._closed

    def writable(self) -> bool:
        return not self._closed

    def flush(self) -> None:
        """Lines are logged as soon as they are complete; nothing to flush."""

    def write(self, data: Union[str, bytes, bytearray]) -> int:
        """Buffer ``data`` and log each complete line; return the amount written."""
        if self._closed:
            raise ValueError("write to closed writer")
        if self._broken:
            raise BrokenPipeError("writer is no longer being read")
        chunk = data.encode("utf-8") if isinstance(data, str) else bytes(data)
        lines = []
        too_long = False
        with self._lock:
            self._pending.extend(chunk)
            while True:
                newline = self._pending.find(b"\n")
                if newline < 0:
                    too_long = len(self._pending) >= _MAX_TOKEN_SIZE
                    break
                if newline >= _MAX_TOKEN_SIZE:
                    too_long = True
                    break
                lines.append(bytes(self._pending[:newline]))
                del self._pending[: newline + 1]
            if too_long:
                self._broken = True
                self._pending.clear()
        for line in lines:
            self._print(_line_text(line))
        if too_long:
            self._error("Error while reading from Writer: ", "token too long")
            raise BrokenPipeError("writer is no longer being read")
        return len(data)

    def close(self) -> None:
        """Log any unterminated final line and refuse further writes."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
            rest = b"" if self._broken else bytes(self._pending)
            self._pending.clear()
        if rest:
            self._print(_line_text(rest))

    def __enter__(self) -> "LogWriter":
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()

    def __del__(self) -> None:
        try:
            self.close()
        except BaseException:
            pass


def _line_text(line: bytes) -> str:
    if line.endswith(b"\r"):
        line = line[:-1]
    return line.decode("utf-8", errors="replace")