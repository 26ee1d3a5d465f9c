"""The Duration value type.

A Duration is a calendar quantity, years down to milliseconds, modelled on
the TC39 Temporal ``Duration``: https://tc39.es/proposal-temporal/docs/duration.html
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Literal, Protocol, TypeAlias

from dateutil.relativedelta import relativedelta

from reltime.clock import Clock, epoch_milliseconds, resolve_now
from reltime.iso import parse_iso_duration
from reltime.util import FIELD_NAMES

logger = logging.getLogger(__name__)

Sign: TypeAlias = Literal[-1, 0, 1]


class DurationFormatter(Protocol):
    """Locale-aware rendering of a Duration, provided by the caller."""

    def format(
        self, duration: "Duration", locale: str, options: Mapping[str, Any]
    ) -> str: ...


@dataclass(frozen=True)
class Duration:
    """Immutable calendar quantity with eight independent signed fields.

    Fields are never carried into one another (``months=14`` stays 14
    months); only the rounding functions normalize.
    """

    years: int = 0
    months: int = 0
    weeks: int = 0
    days: int = 0
    hours: int = 0
    minutes: int = 0
    seconds: int = 0
    milliseconds: int = 0

    def __post_init__(self) -> None:
        # Store canonical 0 for both 0.0 and -0.0
        for name in FIELD_NAMES:
            if getattr(self, name) == 0:
                object.__setattr__(self, name, 0)

    def fields(self) -> tuple[int, ...]:
        """The eight field values, years first."""
        return tuple(getattr(self, name) for name in FIELD_NAMES)

    @property
    def sign(self) -> Sign:
        """Sign of the most significant non-zero field, or 0."""
        for value in self.fields():
            if value > 0:
                return 1
            if value < 0:
                return -1
        return 0

    @property
    def blank(self) -> bool:
        return self.sign == 0

    def abs(self) -> "Duration":
        return Duration(*(abs(value) for value in self.fields()))

    def __abs__(self) -> "Duration":
        return self.abs()

    @classmethod
    def from_value(cls, value: Any) -> "Duration":
        """Build a Duration from a duration-like value.

        Accepts:
        - str: ISO-8601 duration, e.g. "P1Y2M3DT4H5M6S" or "-PT5M".
          Strings that do not match yield a blank Duration.
        - Duration: Copied
        - Mapping: The eight field names as keys, missing ones are 0
        - relativedelta: Calendar fields copied, microseconds truncated
          to milliseconds

        Raises:
            TypeError: If value is none of the above
        """
        if isinstance(value, str):
            text = value.strip()
            parsed = parse_iso_duration(text)
            if parsed is None:
                logger.debug("Not an ISO-8601 duration, using blank: %r", text)
                return cls()
            return cls(*parsed)
        if isinstance(value, Duration):
            return cls(*value.fields())
        if isinstance(value, relativedelta):
            return cls(
                years=value.years,
                months=value.months,
                days=value.days,
                hours=value.hours,
                minutes=value.minutes,
                seconds=value.seconds,
                milliseconds=int(value.microseconds / 1000),
            )
        if isinstance(value, Mapping):
            return cls(*(value.get(name) or 0 for name in FIELD_NAMES))
        raise TypeError(
            f"invalid duration: expected ISO-8601 string or mapping of fields.\n"
            f"Got {type(value).__name__!r}: {value!r}\n"
            f"Examples:\n"
            f"  Duration.from_value('P1DT12H')\n"
            f"  Duration.from_value({{'days': 1, 'hours': 12}})"
        )

    @staticmethod
    def compare(one: Any, two: Any, *, clock: Clock | None = None) -> Literal[-1, 0, 1]:
        """Order two duration-likes by how far each moves the current instant.

        Returns -1 if ``one`` moves it further than ``two``, 1 if less far,
        0 if equally far. Direction is ignored.

        Example:
            >>> Duration.compare("P1Y", "P6M")
            -1
            >>> Duration.compare("-P31D", "P30D")
            -1
        """
        from reltime.arithmetic import apply_duration

        now = resolve_now(clock=clock)
        reference = epoch_milliseconds(now)
        one_applied = abs(
            epoch_milliseconds(apply_duration(now, Duration.from_value(one))) - reference
        )
        two_applied = abs(
            epoch_milliseconds(apply_duration(now, Duration.from_value(two))) - reference
        )
        if one_applied > two_applied:
            return -1
        if one_applied < two_applied:
            return 1
        return 0

    def to_locale_string(
        self,
        locale: str,
        options: Mapping[str, Any] | None = None,
        *,
        formatter: DurationFormatter,
    ) -> str:
        return formatter.format(self, locale, options or {})

