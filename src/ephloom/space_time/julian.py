"""Julian date calculation module.

Conversions between calendar dates and Julian dates using the Meeus
algorithm from "Astronomical Algorithms" (2nd ed.). Both the Gregorian and
the Julian calendar are supported.
"""

import math
from datetime import datetime, timedelta, timezone
from typing import Tuple

# Precision for Julian dates (microsecond precision = 12 decimal places)
JD_PRECISION = 12

# First Julian Day Number of the Gregorian calendar (1582-10-15)
GREGORIAN_CUTOVER_JDN = 2299161


def julday(year: int, month: int, day: int, hour: float = 0.0, gregorian: bool = True) -> float:
    """Convert a calendar date to a Julian date.

    Args:
        year: Astronomical year (1 BC is 0)
        month: Month (1-12)
        day: Day of the month
        hour: Hours since midnight, decimal
        gregorian: Gregorian calendar if True, Julian calendar otherwise

    Returns:
        Julian date
    """
    if not 1 <= month <= 12:
        raise ValueError(f"Invalid month: {month}")

    # Jan & Feb are months 13 & 14 of the previous year
    if month <= 2:
        year -= 1
        month += 12

    if gregorian:
        a = math.floor(year / 100)
        b = 2 - a + math.floor(a / 4)
    else:
        b = 0

    jd = (
        math.floor(365.25 * (year + 4716))
        + math.floor(30.6001 * (month + 1))
        + day
        + b
        - 1524.5
    )
    return jd + hour / 24.0


def revjul(jd: float, gregorian: bool = True) -> Tuple[int, int, int, float]:
    """Convert a Julian date back to a calendar date.

    Args:
        jd: Julian date
        gregorian: Gregorian calendar if True, Julian calendar otherwise

    Returns:
        (year, month, day, hour) with hour as decimal hours
    """
    jd_plus_half = jd + 0.5
    z = math.floor(jd_plus_half)
    f = jd_plus_half - z

    if gregorian and z >= GREGORIAN_CUTOVER_JDN:
        alpha = math.floor((z - 1867216.25) / 36524.25)
        a = z + 1 + alpha - math.floor(alpha / 4)
    else:
        a = z

    b = a + 1524
    c = math.floor((b - 122.1) / 365.25)
    d = math.floor(365.25 * c)
    e = math.floor((b - d) / 30.6001)

    day = b - d - math.floor(30.6001 * e)
    month = e - 1 if e < 14 else e - 13
    year = c - 4716 if month > 2 else c - 4715

    return int(year), int(month), int(day), f * 24.0


def datetime_to_julian(dt: datetime) -> float:
    """Convert a datetime object to a Julian Date.

    Args:
        dt: datetime object (must be timezone-aware)

    Returns:
        Julian Date (JD)
    """
    if dt.tzinfo is None:
        raise ValueError("datetime must be timezone-aware")

    dt = dt.astimezone(timezone.utc)
    hour = dt.hour + dt.minute / 60 + (dt.second + dt.microsecond / 1_000_000) / 3600

    return round(julday(dt.year, dt.month, dt.day, hour), JD_PRECISION)


def julian_to_datetime(jd: float) -> datetime:
    """Convert a Julian Date to a UTC datetime (Gregorian calendar).

    Args:
        jd: Julian Date

    Returns:
        datetime object with UTC timezone, rounded to the microsecond
    """
    year, month, day, hour = revjul(round(jd, JD_PRECISION))

    total_us = round(hour * 3600 * 1_000_000)
    # Rounding can carry into the next day; let datetime arithmetic handle it
    base = datetime(year, month, day, tzinfo=timezone.utc)
    return base + timedelta(microseconds=total_us)


def day_of_week(jd: float) -> int:
    """Day of week for a Julian date, 0 = Monday ... 6 = Sunday."""
    return int(math.floor(jd + 0.5)) % 7


def is_leap_year(year: int, gregorian: bool = True) -> bool:
    """Whether a (astronomical) year has 366 days in the given calendar."""
    if year % 4 != 0:
        return False
    if not gregorian:
        return True
    return year % 100 != 0 or year % 400 == 0


_MONTH_DAYS = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)


def days_in_month(year: int, month: int, gregorian: bool = True) -> int:
    """Number of days in a month.

    Raises:
        ValueError: If month is not 1-12
    """
    if not 1 <= month <= 12:
        raise ValueError(f"Invalid month: {month}")
    if month == 2 and is_leap_year(year, gregorian):
        return 29
    return _MONTH_DAYS[month - 1]
