from .arithmetic import apply_duration, elapsed_time
from .clock import Clock, FixedClock, SystemClock, system_clock
from .duration import Duration, DurationFormatter
from .iso import is_duration
from .rounding import (
    get_rounded_relative_time_unit,
    round_balanced_to_single_unit,
    round_to_single_unit,
)
from .util import UNIT_NAMES, Unit

__all__ = [
    "Duration",
    "DurationFormatter",
    "is_duration",
    "apply_duration",
    "elapsed_time",
    "round_balanced_to_single_unit",
    "round_to_single_unit",
    "get_rounded_relative_time_unit",
    "Clock",
    "SystemClock",
    "FixedClock",
    "system_clock",
    "Unit",
    "UNIT_NAMES",
]
