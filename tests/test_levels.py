import pytest

from slogrus.levels import (
    ALL_LEVELS,
    LEVEL_DEBUG,
    LEVEL_ERROR,
    LEVEL_INFO,
    LEVEL_WARN,
    Level,
    LogPanic,
    ParseError,
    parse_level,
)

_NAMES_BY_SEVERITY = ["panic", "fatal", "error", "warning", "info", "debug", "trace"]


@pytest.mark.parametrize(
    "level, expected",
    [
        (Level.TRACE, "trace"),
        (Level.DEBUG, "debug"),
        (Level.INFO, "info"),
        (Level.WARN, "warning"),
        (Level.ERROR, "error"),
        (Level.FATAL, "fatal"),
        (Level.PANIC, "panic"),
    ],
)
def test_level_string(level, expected):
    assert str(level) == expected
    assert f"{level}" == expected


def test_unknown_level_value_rejected():
    with pytest.raises(ValueError):
        Level(99)


@pytest.mark.parametrize(
    "text, expected",
    [
        ("panic", Level.PANIC),
        ("fatal", Level.FATAL),
        ("error", Level.ERROR),
        ("warn", Level.WARN),
        ("warning", Level.WARN),
        ("info", Level.INFO),
        ("debug", Level.DEBUG),
        ("trace", Level.TRACE),
    ],
)
def test_parse_level(text, expected):
    assert parse_level(text) is expected


@pytest.mark.parametrize("text", ["invalid", ""])
def test_parse_level_invalid(text):
    with pytest.raises(ParseError) as info:
        parse_level(text)
    assert str(info.value) == f'not a valid logrus Level: "{text}"'


def test_parse_error_message():
    assert str(ParseError("test error")) == "test error"


def test_parse_error_is_value_error():
    with pytest.raises(ValueError):
        parse_level("loud")


def test_all_levels_order():
    parsed = [parse_level(name) for name in _NAMES_BY_SEVERITY]
    assert parsed == list(ALL_LEVELS)


def test_levels_ordered_by_verbosity():
    assert (
        parse_level("panic")
        < parse_level("error")
        < parse_level("warn")
        < parse_level("info")
        < parse_level("trace")
    )


@pytest.mark.parametrize(
    "level, expected",
    [
        (Level.TRACE, LEVEL_DEBUG - 4),
        (Level.DEBUG, LEVEL_DEBUG),
        (Level.INFO, LEVEL_INFO),
        (Level.WARN, LEVEL_WARN),
        (Level.ERROR, LEVEL_ERROR),
        (Level.FATAL, LEVEL_ERROR + 4),
        (Level.PANIC, LEVEL_ERROR + 8),
    ],
)
def test_to_slog_level(level, expected):
    assert level.to_slog_level() == expected


def test_slog_levels_decrease_with_verbosity():
    values = [parse_level(name).to_slog_level() for name in _NAMES_BY_SEVERITY]
    assert values == [LEVEL_ERROR + 8, LEVEL_ERROR + 4, LEVEL_ERROR, LEVEL_WARN, LEVEL_INFO, LEVEL_DEBUG, LEVEL_DEBUG - 4]
    assert values == sorted(values, reverse=True)


def test_log_panic_carries_message():
    assert str(LogPanic("boom")) == "boom"