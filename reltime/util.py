"""Utility constants and helpers for reltime.

Unit ratios are fixed approximations (30-day months, 12-month years) used to
estimate elapsed time; they are not calendar-exact.
"""

from typing import Literal, TypeAlias

# Unit ratios
MILLISECONDS_PER_SECOND = 1000
SECONDS_PER_MINUTE = 60
MINUTES_PER_HOUR = 60
HOURS_PER_DAY = 24
DAYS_PER_WEEK = 7
DAYS_PER_MONTH = 30
MONTHS_PER_YEAR = 12

Unit: TypeAlias = Literal[
    "year", "month", "week", "day", "hour", "minute", "second", "millisecond"
]

# Significance order, largest first
UNIT_NAMES: tuple[Unit, ...] = (
    "year",
    "month",
    "week",
    "day",
    "hour",
    "minute",
    "second",
    "millisecond",
)

FIELD_NAMES: tuple[str, ...] = tuple(f"{unit}s" for unit in UNIT_NAMES)
