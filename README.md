# slogrus

Leveled logging for Python with structured fields, chained entries and
line-oriented writers. Records are written by a handler as `key=value` text
lines or as one JSON object per line.

## Installation

```
pip install slogrus
```

The package has no dependencies outside the standard library.

## Levels

`slogrus.levels.Level` runs from most to least severe: `PANIC`, `FATAL`,
`ERROR`, `WARN`, `INFO`, `DEBUG`, `TRACE`. A logger passes a message when the
message's level is at least as severe as the logger's level.

```python
from slogrus.levels import ALL_LEVELS, Level, parse_level

parse_level("warning")       # Level.WARN ("warn" works too)
parse_level("bogus")         # raises ParseError (a ValueError)
str(Level.WARN)              # "warning"
Level.DEBUG.to_slog_level()  # -4, the numeric handler level
```

After writing its message, a call at `FATAL` raises `SystemExit(1)` and a
call at `PANIC` raises `slogrus.levels.LogPanic`.

## Loggers

```python
import io
from slogrus.handlers import HandlerOptions
from slogrus.levels import Level
from slogrus.logger import new_json_logger, new_text_logger

buf = io.StringIO()
log = new_text_logger(buf, HandlerOptions(level=Level.DEBUG.to_slog_level()))

log.info("service started")
log.debugf("loaded %d items", 42)
log.with_field("component", "api").with_fields({"method": "GET"}).info("request")
log.with_error(ValueError("boom")).error("request failed")

log.set_level(Level.WARN)
log.is_level_enabled(Level.INFO)   # False

json_log = new_json_logger(buf, None)
json_log.info("hello")   # {"time":"...","level":"INFO","msg":"hello"}
```

`new_text_logger` and `new_json_logger` default to standard error and the
`INFO` level; the logger's own level is derived from `opts.level`.
`new()` gives a text logger on standard error at `INFO`.

Every logging call comes in three forms:

- `info(*args)` concatenates its arguments, putting a space between two
  adjacent non-string arguments;
- `infof(fmt, *args)` formats with a printf-style format string (`%d`, `%s`,
  `%v`, `%x`, `%q`, ...), reporting missing or extra arguments inline as
  `%!d(MISSING)` or `%!(EXTRA ...)`;
- `infoln(*args)` joins its arguments with single spaces.

The same applies to `trace`, `debug`, `print`, `warn`, `warning`, `error`,
`fatal` and `panic`.

`set_output(out)` and `set_level(level)` rebuild a text or JSON handler with
the new output or level. Entries (`slogrus.entry.Entry`) are immutable in use:
`with_field`, `with_fields`, `with_error`, `with_context` and `with_time`
each return a new entry.

## Handlers and the structured logger

`slogrus.handlers` provides `TextHandler` and `JSONHandler`, configured with
`HandlerOptions(level=..., add_source=...)`, and `SlogLogger`, which builds
records and hands them to a handler. Its `log` and `info`/`debug`/`warn`/`error`
methods take alternating key/value arguments; `log_attrs` takes a mapping or
`(key, value)` pairs.

`new_with_handler(handler)` wraps a handler and `from_slog_logger(slogger)`
wraps an existing `SlogLogger`; both start at the `INFO` level, and the
handler's own level still filters what is written. The wrapped structured
logger is available as `log.slogger()`:

```python
log.slogger().info("direct message", "key", "value")
```

## Writers

`log.writer()` and `log.writer_level(level)` (also on entries) return a
`LogWriter`: each complete line written to it is logged as one message at that
level, carrying the entry's fields. Closing it, or leaving its `with` block,
logs any unterminated final line. A line of 64 KiB or more is reported as an
error and the writer then raises `BrokenPipeError`.

```python
with log.with_field("source", "worker").writer_level(Level.WARN) as w:
    w.write("first line\nsecond line\n")
```

## Formatters

`slogrus.formatters` has `TextFormatter` and `JSONFormatter`. A logger keeps
one in its `formatter` attribute to record whether it writes text or JSON;
`format(entry)` renders an entry's time, level and fields as the bytes of one
line (`JSONFormatter` escapes `&`, `<` and `>` unless `disable_html_escape`
is set, and leaves out the time when `disable_timestamp` is set). The loggers
themselves write through their handlers, not through the formatter.

## The standard logger

`slogrus.standard` keeps a process-wide logger writing text to standard error
at `INFO`, with module-level versions of all logging calls:

```python
from slogrus import standard
from slogrus.formatters import JSONFormatter
from slogrus.levels import Level

standard.set_level(Level.DEBUG)
standard.set_formatter(JSONFormatter())   # anything else selects text output
standard.set_report_caller(True)          # adds the calling file and line
standard.with_field("user", "alice").info("logged in")
standard.warnf("disk at %d%%", 91)
```

## What it does not do

There is no command-line tool and no connection to the standard library's
`logging` module. Colour output and the formatter flags `disable_colors`,
`full_timestamp` and `force_colors` are accepted but change nothing, and an
entry's `caller` is never filled in; source locations appear only through
`set_report_caller` or `HandlerOptions(add_source=True)`.