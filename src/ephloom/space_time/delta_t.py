"""
Approximate Delta T (TT - UT) for converting between universal time and
the dynamical time used to index ephemeris files.

The model is a coarse piecewise polynomial; it is good to a few seconds
for 1620-2030 and degrades quickly outside that span.
"""

from ..constants import DAYS_PER_JULIAN_YEAR, J2000, SECONDS_PER_DAY


def decimal_year(jd: float) -> float:
    return 2000.0 + (jd - J2000) / DAYS_PER_JULIAN_YEAR


def delta_t(jd: float) -> float:
    """
    Delta T in seconds at a Julian date.

    Args:
        jd: Julian date (UT or TT; the difference is negligible here)

    Returns:
        TT - UT in seconds
    """
    year = decimal_year(jd)

    if year < 1620:
        t = (year - 2000) / 100
        return -20 + 32 * t * t
    if year < 2005:
        t = year - 2000
        return (
            63.86
            + 0.3345 * t
            - 0.060374 * t**2
            + 0.0017275 * t**3
            + 0.000651814 * t**4
            + 0.00002373599 * t**5
        )
    return 64.184 + 0.8 * (year - 2005)


def ut_to_et(jd_ut: float) -> float:
    """Convert a UT Julian date to dynamical time."""
    return jd_ut + delta_t(jd_ut) / SECONDS_PER_DAY


def et_to_ut(jd_et: float) -> float:
    """Convert a dynamical-time Julian date to UT."""
    return jd_et - delta_t(jd_et) / SECONDS_PER_DAY
