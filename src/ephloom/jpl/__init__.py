"""
Reader for JPL-format binary ephemeris files.

A file is a sequence of fixed-size records: a header giving the validity
interval, record step and per-body coefficient layout, followed by data
records of Chebyshev coefficients.
"""

from .byte_cursor import ByteCursor
from .header import EphemerisHeader, LayoutEntry, parse_header, make_layout
from .record_store import DataRecord, RecordStore, CacheInfo
from .chebyshev import evaluate_series, chebyshev_basis, chebyshev_derivative_basis
from .composition import compose_state
from .session import EphemerisSession
from .writer import EphemerisWriter, pack_layout, linear_series

__all__ = [
    "ByteCursor",
    "EphemerisHeader",
    "LayoutEntry",
    "parse_header",
    "make_layout",
    "DataRecord",
    "RecordStore",
    "CacheInfo",
    "evaluate_series",
    "chebyshev_basis",
    "chebyshev_derivative_basis",
    "compose_state",
    "EphemerisSession",
    "EphemerisWriter",
    "pack_layout",
    "linear_series",
]
