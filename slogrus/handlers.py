"""Structured record handlers writing key=value text or JSON lines."""

from __future__ import annotations

import json
import math
import os
import sys
import threading
from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional, TextIO

from .levels import LEVEL_DEBUG, LEVEL_ERROR, LEVEL_INFO, LEVEL_WARN

BADKEY = "!BADKEY"

_PACKAGE_DIR = os.path.dirname(os.path.abspath(__file__))


def level_name(level: int) -> str:
    """Name a numeric level, e.g. ``INFO``, ``DEBUG-4`` or ``ERROR+4``."""
    for base, name in ((LEVEL_ERROR, "ERROR"), (LEVEL_WARN, "WARN"), (LEVEL_INFO, "INFO")):
        if level >= base:
            return _with_delta(name, level - base)
    return _with_delta("DEBUG", level - LEVEL_DEBUG)


def _with_delta(name: str, delta: int) -> str:
    return name if delta == 0 else f"{name}{delta:+d}"


@dataclass
class HandlerOptions:
    """Handler settings: minimum level (None means INFO) and source reporting."""

    level: Optional[int] = None
    add_source: bool = False


@dataclass
class Record:
    """One log event as handed to a handler."""

    time: Optional[datetime]
    level: int
    message: str
    attrs: list = field(default_factory=list)
    source: Optional[tuple] = None


def _aware(t: datetime) -> datetime:
    return t if t.tzinfo is not None else t.astimezone()


def _zone(t: datetime) -> str:
    offset = t.utcoffset()
    if not offset:
        return "Z"
    minutes = int(offset.total_seconds()) // 60
    sign = "+" if minutes >= 0 else "-"
    hours, mins = divmod(abs(minutes), 60)
    return f"{sign}{hours:02d}:{mins:02d}"


def _rfc3339_millis(t: datetime) -> str:
    t = _aware(t)
    return f"{t:%Y-%m-%dT%H:%M:%S}.{t.microsecond // 1000:03d}{_zone(t)}"


def _rfc3339_nano(t: datetime) -> str:
    t = _aware(t)
    fraction = f".{t.microsecond:06d}".rstrip("0") if t.microsecond else ""
    return f"{t:%Y-%m-%dT%H:%M:%S}{fraction}{_zone(t)}"


_ESCAPES = {
    "\a": "\\a",
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\v": "\\v",
    "\\": "\\\\",
    '"': '\\"',
}


def _quote(s: str) -> str:
    out = []
    for ch in s:
        if ch in _ESCAPES:
            out.append(_ESCAPES[ch])
        elif ch.isprintable():
            out.append(ch)
        elif ord(ch) < 0x80:
            out.append(f"\\x{ord(ch):02x}")
        elif ord(ch) < 0x10000:
            out.append(f"\\u{ord(ch):04x}")
        else:
            out.append(f"\\U{ord(ch):08x}")
    return '"' + "".join(out) + '"'


def _needs_quoting(s: str) -> bool:
    return not s or any(ch in ' ="' or ch.isspace() or not ch.isprintable() for ch in s)


def _text_str(s: str) -> str:
    return _quote(s) if _needs_quoting(s) else s


def _text_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "<nil>"
    if isinstance(value, datetime):
        return _rfc3339_millis(value)
    return _text_str(str(value))


def _json_value(value: Any) -> Any:
    if value is None or isinstance(value, (bool, int, str)):
        return value
    if isinstance(value, float):
        return value if math.isfinite(value) else str(value)
    if isinstance(value, datetime):
        return _rfc3339_nano(value)
    if isinstance(value, Mapping):
        return {str(k): _json_value(v) for k, v in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [_json_value(v) for v in value]
    return str(value)


def _dumps(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"))


def _write(out: Any, text: str) -> None:
    try:
        out.write(text)
    except TypeError:
        out.write(text.encode("utf-8"))


class Handler(ABC):
    """Base class: filters by level and writes one rendered line per record."""

    def __init__(self, out: Optional[TextIO] = None, options: Optional[HandlerOptions] = None):
        self.out = sys.stderr if out is None else out
        self.options = options if options is not None else HandlerOptions()
        self._lock = threading.Lock()

    def enabled(self, level: int) -> bool:
        """Report whether records at ``level`` would be written."""
        minimum = LEVEL_INFO if self.options.level is None else self.options.level
        return level >= minimum

    def handle(self, record: Record) -> None:
        """Render the record and write it as one line."""
        line = self._render(record) + "\n"
        with self._lock:
            _write(self.out, line)

    @abstractmethod
    def _render(self, record: Record) -> str:
        """Render a record without its trailing newline."""


class TextHandler(Handler):
    """Writes records as space-separated key=value pairs."""

    def _render(self, record: Record) -> str:
        parts = []
        if record.time is not None:
            parts.append("time=" + _rfc3339_millis(record.time))
        parts.append("level=" + level_name(record.level))
        if record.source is not None:
            _function, file, line = record.source
            parts.append("source=" + _text_str(f"{file}:{line}"))
        parts.append("msg=" + _text_str(record.message))
        parts.extend(f"{_text_str(str(k))}={_text_value(v)}" for k, v in record.attrs)
        return " ".join(parts)


class JSONHandler(Handler):
    """Writes records as one JSON object per line."""

    def _render(self, record: Record) -> str:
        pairs = []
        if record.time is not None:
            pairs.append(("time", _rfc3339_nano(record.time)))
        pairs.append(("level", level_name(record.level)))
        if record.source is not None:
            function, file, line = record.source
            pairs.append(("source", {"function": function, "file": file, "line": line}))
        pairs.append(("msg", record.message))
        pairs.extend((str(k), _json_value(v)) for k, v in record.attrs)
        return "{" + ",".join(f"{_dumps(k)}:{_dumps(v)}" for k, v in pairs) + "}"


def _args_to_attrs(args: Iterable[Any]) -> list:
    attrs = []
    items = iter(args)
    for key in items:
        if not isinstance(key, str):
            attrs.append((BADKEY, key))
            continue
        try:
            attrs.append((key, next(items)))
        except StopIteration:
            attrs.append((BADKEY, key))
    return attrs


def _caller() -> Optional[tuple]:
    frame = sys._getframe(1)
    while frame is not None and os.path.dirname(os.path.abspath(frame.f_code.co_filename)) == _PACKAGE_DIR:
        frame = frame.f_back
    if frame is None:
        return None
    return (frame.f_code.co_name, frame.f_code.co_filename, frame.f_lineno)


class SlogLogger:
    """Front end that builds records and passes them to a handler."""

    def __init__(self, handler: Handler):
        self.handler = handler

    def log(self, level: int, msg: str, *args: Any, context: Any = None) -> None:
        """Log ``msg`` with alternating key/value ``args``."""
        if self.handler.enabled(level):
            self._emit(level, msg, _args_to_attrs(args))

    def log_attrs(self, level: int, msg: str, attrs: Any = (), context: Any = None) -> None:
        """Log ``msg`` with attributes given as a mapping or (key, value) pairs."""
        if self.handler.enabled(level):
            items = attrs.items() if isinstance(attrs, Mapping) else attrs
            self._emit(level, msg, list(items))

    def debug(self, msg: str, *args: Any) -> None:
        self.log(LEVEL_DEBUG, msg, *args)

    def info(self, msg: str, *args: Any) -> None:
        self.log(LEVEL_INFO, msg, *args)

    def warn(self, msg: str, *args: Any) -> None:
        self.log(LEVEL_WARN, msg, *args)

    def error(self, msg: str, *args: Any) -> None:
        self.log(LEVEL_ERROR, msg, *args)

    def _emit(self, level: int, msg: str, attrs: list) -> None:
        source = _caller() if self.handler.options.add_source else None
        record = Record(datetime.now().astimezone(), level, msg, attrs, source)
        self.handler.handle(record)