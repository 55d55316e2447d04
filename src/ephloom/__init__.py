"""Position and velocity lookups from JPL-format binary ephemeris files."""

from .bodies import Body
from .flags import RequestFlags, Backend, Center, Shape, AngleUnit
from .state import StateVector
from .errors import (
    EphemerisError,
    NotOpenError,
    BackendUnavailableError,
    FileError,
    OpenError,
    TruncatedHeaderError,
    ShortReadError,
    InvalidHeaderError,
    EphemerisLookupError,
    OutOfRangeError,
    UnknownBodyError,
    InsufficientCoefficientsError,
)
from .jpl import EphemerisSession, EphemerisHeader
from .transforms import cartesian_to_polar, polar_to_cartesian, render

__version__ = "0.1.0"

__all__ = [
    "Body",
    "RequestFlags",
    "Backend",
    "Center",
    "Shape",
    "AngleUnit",
    "StateVector",
    "EphemerisError",
    "NotOpenError",
    "BackendUnavailableError",
    "FileError",
    "OpenError",
    "TruncatedHeaderError",
    "ShortReadError",
    "InvalidHeaderError",
    "EphemerisLookupError",
    "OutOfRangeError",
    "UnknownBodyError",
    "InsufficientCoefficientsError",
    "EphemerisSession",
    "EphemerisHeader",
    "cartesian_to_polar",
    "polar_to_cartesian",
    "render",
]
