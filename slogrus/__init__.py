"""Leveled, structured logging with entries and writers over text or JSON handlers."""

__version__ = "0.1.0"

__all__ = ["levels", "handlers", "formatters", "entry", "logger", "standard"]