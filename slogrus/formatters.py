"""Formatters that render an entry's level, time and fields as a line."""

from __future__ import annotations

import io
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

from .handlers import JSONHandler, Record, TextHandler
from .levels import Level


def _render(handler_cls: type, entry: Any, include_time: bool) -> str:
    buf = io.StringIO()
    record = Record(
        time=entry.time if include_time else None,
        level=Level(entry.level).to_slog_level(),
        message=getattr(entry, "message", ""),
        attrs=list((entry.data or {}).items()),
    )
    handler_cls(buf).handle(record)
    return buf.getvalue()


class Formatter(ABC):
    """Turns an entry into the bytes of one log line."""

    @abstractmethod
    def format(self, entry: Any) -> bytes:
        """Render ``entry`` as bytes."""


@dataclass
class TextFormatter(Formatter):
    """Renders entries as key=value text; the flags are kept for compatibility."""

    disable_colors: bool = False
    full_timestamp: bool = False
    force_colors: bool = False

    def format(self, entry: Any) -> bytes:
        return _render(TextHandler, entry, include_time=True).encode("utf-8")


@dataclass
class JSONFormatter(Formatter):
    """Renders entries as one JSON object per line."""

    disable_timestamp: bool = False
    disable_html_escape: bool = False

    def format(self, entry: Any) -> bytes:
        text = _render(JSONHandler, entry, include_time=not self.disable_timestamp)
        if not self.disable_html_escape:
            # These characters only occur inside JSON strings, so escaping is safe.
            text = text.replace("&", "\\u0026").replace("<", "\\u003c").replace(">", "\\u003e")
        return text.encode("utf-8")