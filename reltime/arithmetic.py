"""Date arithmetic with Durations.

``apply_duration`` moves an instant by a Duration using calendar rollover;
``elapsed_time`` goes the other way and estimates the Duration between two
instants with fixed unit ratios.
"""

from datetime import datetime, timedelta

from reltime.clock import Clock, Instant, epoch_milliseconds, resolve_now, to_datetime
from reltime.duration import Duration
from reltime.util import (
    DAYS_PER_MONTH,
    DAYS_PER_WEEK,
    HOURS_PER_DAY,
    MILLISECONDS_PER_SECOND,
    MINUTES_PER_HOUR,
    MONTHS_PER_YEAR,
    SECONDS_PER_MINUTE,
    UNIT_NAMES,
    Unit,
)


def _shift_months(value: datetime, months: int) -> datetime:
    """Move ``value`` by whole months, spilling an out-of-range day into the next month."""
    if not months:
        return value
    index = value.year * MONTHS_PER_YEAR + value.month - 1 + months
    year, month = divmod(index, MONTHS_PER_YEAR)
    first = value.replace(year=year, month=month + 1, day=1)
    return first + timedelta(days=value.day - 1)


def apply_duration(date: Instant, duration: Duration) -> datetime:
    """Return ``date`` moved by ``duration``.

    Fields are applied one at a time, largest first: years, months, days
    (weeks counted as 7 days), hours, minutes, seconds. A day of month that
    does not exist after a year or month step rolls forward, so
    2023-01-31 + P1M is 2023-03-03. Day and time steps are wall-clock
    additions in the instant's own timezone.

    Milliseconds are not applied.

    Example:
        >>> apply_duration("2022-10-21T16:48:44.104Z", Duration.from_value("P1Y2M3DT4H5M6S"))
        datetime.datetime(2023, 12, 24, 20, 53, 50, 104000, tzinfo=tzutc())
    """
    result = to_datetime(date)
    result = _shift_months(result, duration.years * MONTHS_PER_YEAR)
    result = _shift_months(result, duration.months)
    result += timedelta(days=duration.weeks * DAYS_PER_WEEK + duration.days)
    result += timedelta(hours=duration.hours)
    result += timedelta(minutes=duration.minutes)
    result += timedelta(seconds=duration.seconds)
    return result


def elapsed_time(
    date: Instant,
    precision: Unit = "second",
    now: Instant | None = None,
    *,
    clock: Clock | None = None,
) -> Duration:
    """Estimate the Duration from ``now`` to ``date``.

    Uses fixed ratios (30-day months, 12-month years), so the result is an
    approximation of the calendar gap. Fields smaller than ``precision`` are
    dropped without rounding. Weeks are never reported.

    The result is positive when ``date`` is after ``now``.

    Raises:
        ValueError: If precision is not a unit name
    """
    if precision not in UNIT_NAMES:
        valid = ", ".join(UNIT_NAMES)
        raise ValueError(f"Invalid precision '{precision}'. Valid units: {valid}")

    delta = epoch_milliseconds(to_datetime(date)) - epoch_milliseconds(
        resolve_now(now, clock)
    )
    if delta == 0:
        return Duration()
    sign = 1 if delta > 0 else -1

    ms = abs(delta)
    sec = ms // MILLISECONDS_PER_SECOND
    minute = sec // SECONDS_PER_MINUTE
    hour = minute // MINUTES_PER_HOUR
    day = hour // HOURS_PER_DAY
    month = day // DAYS_PER_MONTH
    year = month // MONTHS_PER_YEAR

    # One entry per unit name, weeks always 0
    values = (
        year,
        month - year * MONTHS_PER_YEAR,
        0,
        day - month * DAYS_PER_MONTH,
        hour - day * HOURS_PER_DAY,
        minute - hour * MINUTES_PER_HOUR,
        sec - minute * SECONDS_PER_MINUTE,
        ms - sec * MILLISECONDS_PER_SECOND,
    )
    cutoff = UNIT_NAMES.index(precision)
    return Duration(
        *(value * sign if i <= cutoff else 0 for i, value in enumerate(values))
    )
