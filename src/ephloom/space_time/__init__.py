from .julian import (
    julday,
    revjul,
    datetime_to_julian,
    julian_to_datetime,
    day_of_week,
    is_leap_year,
    days_in_month,
)
from .delta_t import delta_t, ut_to_et, et_to_ut
from .utc import utc_to_jd, jd_to_utc, et_jd_to_utc, shift_time_zone

__all__ = [
    "julday",
    "revjul",
    "datetime_to_julian",
    "julian_to_datetime",
    "day_of_week",
    "is_leap_year",
    "days_in_month",
    "delta_t",
    "ut_to_et",
    "et_to_ut",
    "utc_to_jd",
    "jd_to_utc",
    "et_jd_to_utc",
    "shift_time_zone",
]
