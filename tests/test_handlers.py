import io
import json
from datetime import datetime, timezone

import pytest

from slogrus.handlers import (
    Handler,
    HandlerOptions,
    JSONHandler,
    Record,
    SlogLogger,
    TextHandler,
    level_name,
)
from slogrus.levels import LEVEL_DEBUG, LEVEL_ERROR, LEVEL_INFO, LEVEL_WARN


def test_json_handler_output():
    buf = io.StringIO()
    logger = SlogLogger(JSONHandler(buf, HandlerOptions(level=LEVEL_DEBUG)))
    logger.info("test message")
    output = buf.getvalue()
    assert "test message" in output
    assert '"msg":"test message"' in output


def test_text_handler_with_attributes():
    buf = io.StringIO()
    logger = SlogLogger(TextHandler(buf, HandlerOptions(level=LEVEL_INFO)))
    logger.info("direct slog message", "key", "value")
    output = buf.getvalue()
    assert "direct slog message" in output
    assert "key=value" in output


def test_text_handler_attribute_service():
    buf = io.StringIO()
    logger = SlogLogger(TextHandler(buf, HandlerOptions(level=LEVEL_DEBUG)))
    logger.info("slog style message", "service", "api")
    output = buf.getvalue()
    assert "slog style message" in output
    assert "service=api" in output


def test_level_filtering():
    buf = io.StringIO()
    logger = SlogLogger(TextHandler(buf, HandlerOptions(level=LEVEL_WARN)))
    logger.debug("debug message")
    logger.warn("warn message")
    output = buf.getvalue()
    assert "debug message" not in output
    assert "warn message" in output


def test_default_level_is_info():
    handler = TextHandler(io.StringIO())
    assert handler.enabled(LEVEL_INFO)
    assert not handler.enabled(LEVEL_DEBUG)
    assert handler.enabled(LEVEL_ERROR)


@pytest.mark.parametrize(
    "level, expected",
    [
        (LEVEL_DEBUG - 4, "DEBUG-4"),
        (LEVEL_DEBUG, "DEBUG"),
        (LEVEL_INFO, "INFO"),
        (LEVEL_INFO + 2, "INFO+2"),
        (LEVEL_WARN, "WARN"),
        (LEVEL_ERROR, "ERROR"),
        (LEVEL_ERROR + 4, "ERROR+4"),
        (LEVEL_ERROR + 8, "ERROR+8"),
    ],
)
def test_level_name(level, expected):
    assert level_name(level) == expected


def test_text_record_without_time():
    buf = io.StringIO()
    TextHandler(buf).handle(Record(None, LEVEL_INFO, "hello"))
    assert buf.getvalue() == "level=INFO msg=hello\n"


def test_text_quoting():
    buf = io.StringIO()
    TextHandler(buf).handle(Record(None, LEVEL_INFO, "hello world", [("empty", ""), ("q", 'a"b')]))
    assert buf.getvalue() == 'level=INFO msg="hello world" empty="" q="a\\"b"\n'


def test_text_time_format():
    buf = io.StringIO()
    when = datetime(2023, 1, 1, 12, 0, 0, tzinfo=timezone.utc)
    TextHandler(buf).handle(Record(when, LEVEL_WARN, "m"))
    assert buf.getvalue().startswith("time=2023-01-01T12:00:00.000Z level=WARN")


def test_json_record_parses():
    buf = io.StringIO()
    when = datetime(2023, 1, 1, 12, 0, 0, tzinfo=timezone.utc)
    JSONHandler(buf).handle(Record(when, LEVEL_ERROR, "oops", [("count", 42), ("ok", True)]))
    parsed = json.loads(buf.getvalue())
    assert parsed == {
        "time": "2023-01-01T12:00:00Z",
        "level": "ERROR",
        "msg": "oops",
        "count": 42,
        "ok": True,
    }


def test_special_values_in_text():
    buf = io.StringIO()
    logger = SlogLogger(TextHandler(buf))
    logger.info("m", "ok", True, "n", None, "err", ValueError("boom"))
    output = buf.getvalue()
    assert "ok=true" in output
    assert "n=<nil>" in output
    assert "err=boom" in output


def test_error_value_in_json():
    buf = io.StringIO()
    SlogLogger(JSONHandler(buf)).error("failed", "error", ValueError("test error"))
    assert json.loads(buf.getvalue())["error"] == "test error"


def test_bad_key_handling():
    buf = io.StringIO()
    logger = SlogLogger(TextHandler(buf))
    logger.info("m", "dangling")
    logger.info("m", 7)
    lines = buf.getvalue().splitlines()
    assert lines[0].endswith("!BADKEY=dangling")
    assert lines[1].endswith("!BADKEY=7")


def test_log_attrs_mapping_and_pairs():
    buf = io.StringIO()
    logger = SlogLogger(JSONHandler(buf))
    logger.log_attrs(LEVEL_INFO, "a", {"k1": "v1"})
    logger.log_attrs(LEVEL_INFO, "b", [("k2", "v2")])
    first, second = (json.loads(line) for line in buf.getvalue().splitlines())
    assert first["k1"] == "v1"
    assert second["k2"] == "v2"


def test_log_attrs_filtered():
    buf = io.StringIO()
    SlogLogger(JSONHandler(buf)).log_attrs(LEVEL_DEBUG, "hidden", {"k": 1})
    assert buf.getvalue() == ""


def test_add_source_reports_caller():
    buf = io.StringIO()
    logger = SlogLogger(JSONHandler(buf, HandlerOptions(add_source=True)))
    logger.info("with source")
    source = json.loads(buf.getvalue())["source"]
    assert source["file"].endswith("test_handlers.py")
    assert source["function"] == "test_add_source_reports_caller"


def test_json_keeps_attribute_order():
    buf = io.StringIO()
    SlogLogger(JSONHandler(buf)).info("m", "b", 1, "a", 2)
    assert list(json.loads(buf.getvalue()))[-2:] == ["b", "a"]


def test_handler_is_abstract():
    with pytest.raises(TypeError):
        Handler(io.StringIO())


def test_binary_output():
    buf = io.BytesIO()
    TextHandler(buf).handle(Record(None, LEVEL_INFO, "bytes"))
    assert buf.getvalue() == b"level=INFO msg=bytes\n"