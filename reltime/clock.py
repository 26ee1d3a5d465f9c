"""Sources of the current instant, and coercion of instant-like values.

Every operation that needs "now" takes an optional ``clock``. Production code
leaves it unset and gets :data:`system_clock`; tests pass a
:class:`FixedClock` to pin the instant.
"""

from abc import ABC, abstractmethod
from datetime import date, datetime, time, timedelta, timezone
from typing import Any, TypeAlias

from dateutil.parser import isoparse
from typing_extensions import override

Instant: TypeAlias = datetime | date | str

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_MILLISECOND = timedelta(milliseconds=1)


class Clock(ABC):

    @abstractmethod
    def now(self) -> datetime:
        """Return the current instant."""
        pass


class SystemClock(Clock):
    """Reads the wall clock, in UTC."""

    @override
    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class FixedClock(Clock):
    """Always reports the same instant."""

    def __init__(self, instant: Instant):
        self.instant: datetime = to_datetime(instant)

    @override
    def now(self) -> datetime:
        return self.instant

    def __repr__(self) -> str:
        return f"FixedClock({self.instant.isoformat()})"


system_clock: Clock = SystemClock()


def resolve_now(now: Instant | None = None, clock: Clock | None = None) -> datetime:
    """Return ``now`` as a datetime, falling back to the clock (or the system clock)."""
    if now is not None:
        return to_datetime(now)
    return (clock or system_clock).now()


def to_datetime(value: Any) -> datetime:
    """Convert an instant-like value to a datetime.

    Accepts:
    - datetime: Passed through as-is
    - date: Start of that day in UTC
    - str: ISO-8601 timestamp, e.g. "2022-10-21T16:48:44.104Z"

    Raises:
        TypeError: If value is an unsupported type
        ValueError: If a string is not an ISO-8601 timestamp
    """
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, time.min, tzinfo=timezone.utc)
    if isinstance(value, str):
        try:
            return isoparse(value)
        except ValueError as exc:
            raise ValueError(
                f"Instant string must be an ISO-8601 timestamp.\n"
                f"Got: {value!r}\n"
                f"Example: '2022-10-21T16:48:44.104Z'"
            ) from exc
    raise TypeError(
        f"Instant must be datetime, date, or ISO-8601 string.\n"
        f"Got {type(value).__name__!r}: {value!r}\n"
        f"Examples:\n"
        f"  datetime(2025, 1, 1, tzinfo=timezone.utc)\n"
        f"  date(2025, 1, 1)  # midnight UTC\n"
        f"  '2025-01-01T00:00:00Z'"
    )


def epoch_milliseconds(value: datetime) -> int:
    """Whole milliseconds since the Unix epoch. Naive datetimes are read as UTC."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return (value - _EPOCH) // _MILLISECOND
