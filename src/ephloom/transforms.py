"""
Coordinate transforms applied to a composed state vector.

Polar vectors are ordered (longitude, latitude, distance, longitude rate,
latitude rate, distance rate); Cartesian vectors are (x, y, z, vx, vy, vz).
Distances are in AU and rates per day throughout.
"""

import math

import numpy as np

from .constants import RAD_TO_DEG, TWO_PI
from .flags import AngleUnit, RequestFlags, Shape
from .state import StateVector


def normalize_angle(angle: float) -> float:
    """Reduce an angle in radians to [0, 2*pi)."""
    result = math.fmod(angle, TWO_PI)
    if result < 0:
        result += TWO_PI
    # fmod of a tiny negative number can round up to exactly 2*pi
    if result >= TWO_PI:
        result = 0.0
    return result


def cartesian_to_polar(xyz: np.ndarray) -> np.ndarray:
    """
    Convert a Cartesian state to polar form.

    Longitude is normalized to [0, 2*pi) and latitude lies in [-pi/2, pi/2].
    Rates follow from differentiating polar_to_cartesian. At r == 0 every
    component is zero. On the polar axis the longitude rate is zero and the
    longitude is the direction of travel, so in-plane motion survives as a
    latitude rate.

    Args:
        xyz: (x, y, z, vx, vy, vz)

    Returns:
        (lon, lat, r, dlon, dlat, dr) in radians and AU
    """
    x, y, z, vx, vy, vz = (float(v) for v in xyz)
    rho_sq = x * x + y * y
    r_sq = rho_sq + z * z
    r = math.sqrt(r_sq)
    if r == 0.0:
        return np.zeros(6)

    rho = math.sqrt(rho_sq)
    lat = math.asin(max(-1.0, min(1.0, z / r)))
    dr = (x * vx + y * vy + z * vz) / r

    if rho > 0:
        lon = normalize_angle(math.atan2(y, x))
        dlon = (x * vy - y * vx) / rho_sq
        dlat = (vz * rho_sq - z * (x * vx + y * vy)) / (r_sq * rho)
    else:
        # On the axis, longitude is the direction of travel away from the pole
        lon = normalize_angle(math.atan2(vy, vx))
        dlon = 0.0
        dlat = -math.copysign(math.hypot(vx, vy), z) / r

    return np.array([lon, lat, r, dlon, dlat, dr])


def polar_to_cartesian(polar: np.ndarray) -> np.ndarray:
    """
    Convert a polar state to Cartesian form.

    x = r cos(lat) cos(lon), y = r cos(lat) sin(lon), z = r sin(lat), with
    velocities from the product rule.

    Args:
        polar: (lon, lat, r, dlon, dlat, dr) in radians and AU

    Returns:
        (x, y, z, vx, vy, vz)
    """
    lon, lat, r, dlon, dlat, dr = (float(v) for v in polar)
    cos_lat = math.cos(lat)
    sin_lat = math.sin(lat)
    cos_lon = math.cos(lon)
    sin_lon = math.sin(lon)

    return np.array(
        [
            r * cos_lat * cos_lon,
            r * cos_lat * sin_lon,
            r * sin_lat,
            dr * cos_lat * cos_lon - r * dlat * sin_lat * cos_lon - r * dlon * cos_lat * sin_lon,
            dr * cos_lat * sin_lon - r * dlat * sin_lat * sin_lon + r * dlon * cos_lat * cos_lon,
            dr * sin_lat + r * dlat * cos_lat,
        ]
    )


def render(state: StateVector, flags: RequestFlags) -> np.ndarray:
    """
    Shape a composed state into the six numbers a caller asked for.

    The center choice (barycentric or heliocentric) has already been made
    when the state was composed; this only changes representation:
    Cartesian passes through, polar converts and, for degrees, scales the
    angles and their rates. Distance and its rate are never scaled.

    Args:
        state: Equatorial Cartesian state from composition
        flags: Requested output form

    Returns:
        Six components; velocity entries are 0 when flags.velocity is off
    """
    result = state.as_array().astype(float)

    if flags.shape is Shape.POLAR:
        result = cartesian_to_polar(result)
        if flags.angle_unit is AngleUnit.DEGREES:
            result[[0, 1, 3, 4]] *= RAD_TO_DEG

    if not flags.velocity:
        result[3:] = 0.0

    return result
