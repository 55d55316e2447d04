"""
Civil (UTC) timestamps to and from Julian dates.

UTC is treated as UT1 here: leap seconds are ignored, and dynamical time is
reached through the Delta T approximation.
"""

import math
from typing import Tuple

from ..constants import SECONDS_PER_DAY
from .delta_t import et_to_ut, ut_to_et
from .julian import days_in_month, julday, revjul

# (year, month, day, hour, minute, second)
CivilTime = Tuple[int, int, int, int, int, float]

MIN_YEAR = -4713


def utc_to_jd(
    year: int,
    month: int,
    day: int,
    hour: int = 0,
    minute: int = 0,
    second: float = 0.0,
    gregorian: bool = True,
) -> Tuple[float, float]:
    """Convert a UTC timestamp to Julian dates.

    Args:
        year: Astronomical year (1 BC is 0)
        month: Month (1-12)
        day: Day of the month
        hour: Hour (0-23)
        minute: Minute (0-59)
        second: Seconds, decimal, in [0, 60)
        gregorian: Gregorian calendar if True, Julian calendar otherwise

    Returns:
        (dynamical-time JD, universal-time JD)

    Raises:
        ValueError: If any field is out of range
    """
    if year < MIN_YEAR:
        raise ValueError(f"Year out of range: {year}")
    if not 1 <= month <= 12:
        raise ValueError(f"Invalid month: {month}")
    if not 1 <= day <= days_in_month(year, month, gregorian):
        raise ValueError(f"Invalid day: {year}-{month:02d}-{day:02d}")
    if not 0 <= hour < 24:
        raise ValueError(f"Invalid hour: {hour}")
    if not 0 <= minute < 60:
        raise ValueError(f"Invalid minute: {minute}")
    if not 0 <= second < 60:
        raise ValueError(f"Invalid second: {second}")

    jd_ut = julday(year, month, day, hour + minute / 60.0 + second / 3600.0, gregorian)
    return ut_to_et(jd_ut), jd_ut


def jd_to_utc(jd_ut: float, gregorian: bool = True) -> CivilTime:
    """Split a universal-time Julian date into calendar fields."""
    year, month, day, hours = revjul(jd_ut, gregorian)
    hour = int(hours)
    minutes = (hours - hour) * 60.0
    minute = int(minutes)
    return year, month, day, hour, minute, (minutes - minute) * 60.0


def et_jd_to_utc(jd_et: float, gregorian: bool = True) -> CivilTime:
    """Like jd_to_utc, for a dynamical-time Julian date."""
    return jd_to_utc(et_to_ut(jd_et), gregorian)


def shift_time_zone(
    year: int,
    month: int,
    day: int,
    hour: int,
    minute: int,
    second: float,
    offset_hours: float,
) -> CivilTime:
    """Add a time zone offset to a Gregorian civil time.

    Passing a zone's offset converts UTC to that zone's local time; passing
    its negation converts local time back to UTC.
    """
    total = hour * 3600 + minute * 60 + second + offset_hours * 3600
    day_offset = math.floor(total / SECONDS_PER_DAY)
    total -= day_offset * SECONDS_PER_DAY

    new_year, new_month, new_day, _ = revjul(julday(year, month, day) + day_offset)
    new_hour, rest = divmod(total, 3600)
    new_minute, new_second = divmod(rest, 60)
    return new_year, new_month, new_day, int(new_hour), int(new_minute), new_second
