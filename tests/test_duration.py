"""Tests for the Duration value type."""

import logging
from dataclasses import FrozenInstanceError
from datetime import datetime, timezone

import pytest
from dateutil.relativedelta import relativedelta

from reltime import Duration, FixedClock

NOW = FixedClock(datetime(2022, 10, 21, 16, 48, 44, 104000, tzinfo=timezone.utc))


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("P4Y", Duration(years=4)),
        ("-P4Y", Duration(years=-4)),
        ("-P3MT5M", Duration(months=-3, minutes=-5)),
        ("P1Y2M3DT4H5M6S", Duration(1, 2, 0, 3, 4, 5, 6)),
        ("P5W", Duration(weeks=5)),
        ("-P5W", Duration(weeks=-5)),
        ("  P1D\n", Duration(days=1)),
    ],
)
def test_from_value_parses_iso_strings(text, expected):
    assert Duration.from_value(text) == expected


@pytest.mark.parametrize("text", ["P4Y", "-P4Y", "-P3MT5M", "P1Y2M3DT4H5M6S", "-P5W"])
def test_abs_drops_sign_and_keeps_magnitudes(text):
    duration = Duration.from_value(text)
    result = duration.abs()

    assert result.sign in (0, 1)
    assert result.fields() == tuple(abs(value) for value in duration.fields())
    assert abs(duration) == result


def test_from_value_is_lenient_with_unparseable_strings(caplog):
    """Strings outside the grammar become blank durations, not errors."""
    with caplog.at_level(logging.DEBUG, logger="reltime.duration"):
        duration = Duration.from_value("three days")

    assert duration.blank
    assert duration == Duration()
    assert "three days" in caplog.text


def test_from_value_reads_mapping_fields():
    duration = Duration.from_value({"days": 2, "hours": -1, "unrelated": 9})

    assert duration == Duration(days=2, hours=-1)
    assert Duration.from_value({}) == Duration()


def test_from_value_treats_none_fields_as_zero():
    assert Duration.from_value({"years": None, "seconds": 3}) == Duration(seconds=3)


def test_from_value_copies_duration():
    original = Duration(1, 2, 3, 4, 5, 6, 7, 8)
    copy = Duration.from_value(original)

    assert copy == original
    assert copy is not original


def test_from_value_reads_relativedelta():
    delta = relativedelta(years=1, months=2, weeks=1, days=1, hours=3, microseconds=5500)

    assert Duration.from_value(delta) == Duration(
        years=1, months=2, days=8, hours=3, milliseconds=5
    )


@pytest.mark.parametrize("value", [5, 1.5, None, True, [1, 2]])
def test_from_value_rejects_other_types(value):
    with pytest.raises(TypeError, match="invalid duration"):
        Duration.from_value(value)


def test_sign_comes_from_most_significant_field():
    assert Duration(-1).sign == -1
    assert Duration(1).sign == 1
    assert Duration().sign == 0
    assert Duration(0, 0, 0, 0, 0, 0, 0, -5).sign == -1
    # Later fields do not override the first non-zero one
    assert Duration(days=1, hours=-30).sign == 1


def test_blank_when_every_field_is_zero():
    assert Duration().blank
    assert not Duration(0, 0, 0, 0, 0, 0, 1).blank
    assert Duration.from_value("PT0S").blank
    assert not Duration.from_value("PT1S").blank


def test_negative_zero_is_normalized():
    duration = Duration(-0.0, 0, 0, 0.0, 0, 0, 0, -0.0)

    assert duration.sign == 0
    assert duration.blank
    assert duration.years == 0
    assert str(duration.years) == "0"


def test_fields_are_not_carried():
    duration = Duration(months=14, seconds=90)

    assert duration.months == 14
    assert duration.years == 0
    assert duration.seconds == 90


def test_duration_is_immutable():
    duration = Duration(days=1)
    with pytest.raises(FrozenInstanceError):
        duration.days = 2  # type: ignore[misc]


@pytest.mark.parametrize(
    ("one", "two", "expected"),
    [
        ("P1Y", "P6M", -1),
        ("P1Y", "P18M", 1),
        ("P2Y", "P18M", -1),
        ("PT60S", "PT60S", 0),
        ("PT1M", "PT60S", 0),
        ("PT1M", "PT61S", 1),
        ("PT1M1S", "PT60S", -1),
        ("P31D", "P30D", -1),
        ("-P31D", "P30D", -1),
        ("P55Y", "P30D", -1),
        ("-P55Y", "P30D", -1),
        ("PT1S", "PT0S", -1),
        ("PT0S", "PT0S", 0),
    ],
)
def test_compare_orders_by_absolute_effect(one, two, expected):
    assert Duration.compare(one, two, clock=NOW) == expected


def test_compare_accepts_duration_likes():
    assert Duration.compare(Duration(days=1), {"hours": 24}, clock=NOW) == 0


def test_compare_uses_system_clock_by_default():
    assert Duration.compare("P1D", "PT1H") == -1


def test_compare_rejects_invalid_arguments():
    with pytest.raises(TypeError, match="invalid duration"):
        Duration.compare(3, "P1D", clock=NOW)


class RecordingFormatter:
    def __init__(self):
        self.calls = []

    def format(self, duration, locale, options):
        self.calls.append((duration, locale, options))
        return f"{duration.days} days ({locale})"


def test_to_locale_string_delegates_to_formatter():
    formatter = RecordingFormatter()
    duration = Duration(days=3)

    text = duration.to_locale_string("en", {"style": "long"}, formatter=formatter)

    assert text == "3 days (en)"
    assert formatter.calls == [(duration, "en", {"style": "long"})]


def test_to_locale_string_defaults_options_to_empty():
    formatter = RecordingFormatter()
    Duration(days=1).to_locale_string("de", formatter=formatter)

    assert formatter.calls[0][2] == {}
