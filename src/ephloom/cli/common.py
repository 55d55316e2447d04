"""
Command-line interface utilities for ephloom.

Logging setup and date parsing and formatting shared by the CLI commands.
"""

import logging
import math
from datetime import datetime, timezone
from typing import Any, Dict

from ..constants import SECONDS_PER_DAY
from ..logging import set_log_level
from ..space_time.julian import datetime_to_julian, revjul


def configure_logging(args: Dict[str, Any]) -> None:
    """
    Configure logging based on command line arguments.

    Args:
        args: Parsed options with "quiet", "debug" and "verbose" keys
    """
    quiet = args.get("quiet", False)
    debug = args.get("debug", False)
    verbosity = args.get("verbose", 0)

    if quiet:
        log_level = logging.ERROR
    elif debug:
        log_level = logging.DEBUG
    elif verbosity == 0:
        # 0 -> WARNING, 1 -> INFO, 2+ -> DEBUG
        log_level = logging.WARNING
    elif verbosity == 1:
        log_level = logging.INFO
    else:
        log_level = logging.DEBUG

    set_log_level(log_level)
    logging.getLogger("ephloom").debug(
        f"Logging configured with level {logging.getLevelName(log_level)}"
    )


def parse_date_input(date_str: str) -> float:
    """Parse a date given as a Julian date, an ISO timestamp or "now".

    Args:
        date_str: Date string in one of these forms:
            - Julian date (e.g., "2460385.333333333")
            - ISO format with timezone (e.g., "2024-03-15T20:00:00+00:00")
            - ISO format without timezone, taken as UTC (e.g., "2024-03-15T20:00:00")
            - "now"

    Returns:
        Julian date

    Raises:
        ValueError: If date string is invalid
    """
    if date_str.lower() == "now":
        return datetime_to_julian(datetime.now(timezone.utc))

    try:
        return float(date_str.strip("' "))
    except ValueError:
        try:
            dt = datetime.fromisoformat(date_str)
        except ValueError:
            raise ValueError(f"Invalid date format: {date_str}")
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=timezone.utc)
        return datetime_to_julian(dt)


def format_julian_date(jd: float) -> str:
    """Format a Julian date as an ISO-style UTC timestamp.

    Works for any year, including negative (astronomical) years that
    datetime cannot represent. Dates before 1582-10-15 use the Julian
    calendar.

    Args:
        jd: Julian date

    Returns:
        Timestamp such as "2024-01-01T00:00:00Z" or "-4712-01-18T00:00:00Z"
    """
    midnight = math.floor(jd + 0.5) - 0.5
    seconds = round((jd - midnight) * SECONDS_PER_DAY)
    if seconds >= SECONDS_PER_DAY:
        midnight += 1
        seconds -= int(SECONDS_PER_DAY)

    year, month, day, _ = revjul(midnight)
    hours, rest = divmod(seconds, 3600)
    minutes, secs = divmod(rest, 60)
    year_str = f"{year:04d}" if year >= 0 else f"-{-year:04d}"
    return f"{year_str}-{month:02d}-{day:02d}T{hours:02d}:{minutes:02d}:{secs:02d}Z"
