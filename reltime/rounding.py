"""Collapsing a Duration to its single most significant unit.

Used to phrase relative times: "P1DT21H" reads better as "in 2 days".
"""

import logging
import math

from reltime.arithmetic import apply_duration, elapsed_time
from reltime.clock import Clock, Instant, resolve_now
from reltime.duration import Duration
from reltime.util import DAYS_PER_WEEK, UNIT_NAMES, Unit

logger = logging.getLogger(__name__)

# Positions in the magnitude list; weeks have no slot
YEAR, MONTH, DAY, HOUR, MINUTE, SECOND, MILLISECOND = range(7)

# A value at or above its threshold rounds the next larger unit up
ROUNDING_THRESHOLDS: tuple[float, ...] = (
    math.inf,  # year
    11,  # month
    28,  # day
    21,  # hour
    55,  # minute
    55,  # second
    900,  # millisecond
)

# Round to weeks below this many, otherwise to a month
WEEKS_PER_MONTH_CUTOFF = 4


def round_balanced_to_single_unit(duration: Duration) -> Duration:
    """Collapse ``duration`` to one non-zero field.

    The most significant populated unit is kept. It is rounded up when the
    next smaller unit is at or over its threshold (55 minutes make an hour,
    21 hours a day, 28 days a month, 11 months a year), and promoted to the
    larger unit when it reaches its own threshold. Spans of 6 days or more
    and under a month become weeks.

    A blank duration is returned unchanged.

    Example:
        >>> round_balanced_to_single_unit(Duration.from_value("PT20H55M"))
        Duration(years=0, months=0, weeks=0, days=1, hours=0, minutes=0, seconds=0, milliseconds=0)
    """
    if duration.blank:
        return duration
    sign = duration.sign
    values = [
        abs(duration.years),
        abs(duration.months),
        abs(duration.weeks) * DAYS_PER_WEEK + abs(duration.days),
        abs(duration.hours),
        abs(duration.minutes),
        abs(duration.seconds),
        abs(duration.milliseconds),
    ]
    biggest = next(i for i, value in enumerate(values) if value > 0)

    carried = (
        biggest < MILLISECOND
        and values[biggest + 1] >= ROUNDING_THRESHOLDS[biggest + 1]
    )
    if carried:
        values[biggest] += 1
    if values[biggest] >= ROUNDING_THRESHOLDS[biggest]:
        biggest -= 1
        values[biggest] = 1
    for i in range(biggest + 1, len(values)):
        values[i] = 0

    if biggest == DAY and values[DAY] >= DAYS_PER_WEEK - 1:
        weeks = max(1, (values[DAY] + (0 if carried else 1)) // DAYS_PER_WEEK)
        if weeks < WEEKS_PER_MONTH_CUTOFF:
            logger.debug("Rounded %d days to %d weeks", values[DAY], weeks)
            return Duration(weeks=weeks * sign)
        logger.debug("Rounded %d days to a month", values[DAY])
        values[DAY] = 0
        biggest = MONTH
        values[biggest] = 1

    values[biggest] *= sign
    years, months, days, hours, minutes, seconds, milliseconds = values
    return Duration(years, months, 0, days, hours, minutes, seconds, milliseconds)


def round_to_single_unit(
    duration: Duration,
    *,
    relative_to: Instant | None = None,
    clock: Clock | None = None,
) -> Duration:
    """Round ``duration`` as it falls on the calendar from ``relative_to``.

    The duration is first applied to the anchor and measured back as
    elapsed time, so "P2M28D" counts the real days of the two months it
    spans before rounding. The anchor defaults to the clock's current
    instant.
    """
    anchor = resolve_now(relative_to, clock)
    return round_balanced_to_single_unit(
        elapsed_time(apply_duration(anchor, duration), "millisecond", anchor)
    )


def get_rounded_relative_time_unit(rounded: Duration) -> tuple[int, Unit]:
    """Return (value, unit) for the first non-zero unit, seconds at the finest."""
    if rounded.blank:
        return 0, "second"
    for unit in UNIT_NAMES:
        if unit == "millisecond":
            continue
        value = getattr(rounded, f"{unit}s")
        if value:
            return value, unit
    return 0, "second"
