"""Design constants for the JPL ephemeris file format and angle conversions."""

import math

# File layout
RECORD_SIZE = 8144  # bytes per record, header and data alike
COEFFICIENT_COUNT = 1018  # 8-byte floats per data record
LAYOUT_SLOTS = 13
BYTE_ORDER = "<"  # little-endian

# Reference epochs
J2000 = 2451545.0
DAYS_PER_JULIAN_YEAR = 365.25
SECONDS_PER_DAY = 86400.0

# Physical constants used when the file does not supply its own
AU_KM = 149597870.7
EARTH_MOON_MASS_RATIO = 1 / 0.0123000383

TWO_PI = 2.0 * math.pi
RAD_TO_DEG = 180.0 / math.pi
