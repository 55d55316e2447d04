"""
Header record of a JPL-format ephemeris file.

The header is the file's first fixed-size record. Its fields, in order, are
little-endian:

    valid start JD       (8-byte float)
    valid end JD         (8-byte float)
    step in days         (8-byte float)
    constant count       (4-byte int)
    astronomical unit    (8-byte float, km)
    Earth/Moon mass ratio (8-byte float)
    layout table         (3 rows x 13 slots of 4-byte ints:
                          coefficient offset, coefficients per component,
                          sub-intervals per record)
    coefficient counts   (13 x 4-byte int)

The remainder of the record is padding.
"""

import math
import struct
from dataclasses import dataclass
from typing import BinaryIO, Dict, List, Sequence, Tuple

from ..constants import BYTE_ORDER, COEFFICIENT_COUNT, LAYOUT_SLOTS, RECORD_SIZE
from ..errors import InvalidHeaderError, ShortReadError, TruncatedHeaderError
from ..logging import get_logger
from .byte_cursor import ByteCursor

logger = get_logger(__name__)


@dataclass(frozen=True)
class LayoutEntry:
    """Where one body's coefficients sit inside every data record."""

    offset: int
    coefficient_count: int
    sub_intervals: int

    @property
    def populated(self) -> bool:
        # Offset 0 would overlap the record's own start time field
        return self.offset >= 1 and self.coefficient_count >= 1 and self.sub_intervals >= 1

    @property
    def span(self) -> int:
        """Number of record entries covered by this body's coefficient blocks."""
        return 3 * self.coefficient_count * self.sub_intervals


EMPTY_LAYOUT_ENTRY = LayoutEntry(0, 0, 0)


@dataclass(frozen=True)
class EphemerisHeader:
    """Parsed, immutable header of an ephemeris file."""

    valid_start: float
    valid_end: float
    step_days: float
    layout: Tuple[LayoutEntry, ...]
    au: float = 0.0
    earth_moon_mass_ratio: float = 0.0
    constant_count: int = 0
    declared_coefficient_counts: Tuple[int, ...] = ()

    def __post_init__(self) -> None:
        if not self.valid_end > self.valid_start:
            raise InvalidHeaderError(
                f"Valid end {self.valid_end} must be after valid start {self.valid_start}"
            )
        if not self.step_days > 0:
            raise InvalidHeaderError(f"Step must be positive, got {self.step_days}")
        if len(self.layout) != LAYOUT_SLOTS:
            raise InvalidHeaderError(
                f"Layout table must have {LAYOUT_SLOTS} slots, got {len(self.layout)}"
            )

    @property
    def constants(self) -> Dict[str, float]:
        """Named constants the header supplies; zero values are left out."""
        named = {"AU": self.au, "EMRAT": self.earth_moon_mass_ratio}
        return {name: value for name, value in named.items() if value}

    @property
    def record_count(self) -> int:
        """Number of data records needed to cover the validity interval."""
        return max(1, math.ceil((self.valid_end - self.valid_start) / self.step_days))

    def covers(self, t: float) -> bool:
        return self.valid_start <= t <= self.valid_end

    def record_index(self, t: float) -> int:
        """
        Index of the data record covering time t.

        The index is clamped to [0, record_count - 1] so that t == valid_end
        resolves to the last record.
        """
        index = math.floor((t - self.valid_start) / self.step_days)
        return min(max(index, 0), self.record_count - 1)

    def entry(self, slot: int) -> LayoutEntry:
        return self.layout[slot]

    def validate_layout(self, coefficient_count: int = COEFFICIENT_COUNT) -> None:
        """
        Check that every populated series fits inside a data record.

        Raises:
            InvalidHeaderError: If a series would index past the record end
        """
        for slot, entry in enumerate(self.layout):
            if not entry.populated:
                continue
            last = entry.offset + entry.span
            if last > coefficient_count:
                raise InvalidHeaderError(
                    f"Slot {slot} needs {last} coefficients, record holds {coefficient_count}"
                )

        for slot, (entry, declared) in enumerate(
            zip(self.layout, self.declared_coefficient_counts)
        ):
            if entry.populated and declared and declared != entry.coefficient_count:
                logger.warning(
                    f"Slot {slot}: layout says {entry.coefficient_count} coefficients, "
                    f"count table says {declared}; using the layout"
                )

    def to_bytes(self, record_size: int = RECORD_SIZE) -> bytes:
        """
        Convert the header to a padded binary record.

        Returns:
            Binary representation of the header, record_size bytes long
        """
        counts = list(self.declared_coefficient_counts) or [
            e.coefficient_count for e in self.layout
        ]
        result = bytearray()
        result.extend(
            struct.pack(
                BYTE_ORDER + "dddidd",
                self.valid_start,
                self.valid_end,
                self.step_days,
                self.constant_count,
                self.au,
                self.earth_moon_mass_ratio,
            )
        )
        result.extend(struct.pack(BYTE_ORDER + "13i", *[e.offset for e in self.layout]))
        result.extend(
            struct.pack(BYTE_ORDER + "13i", *[e.coefficient_count for e in self.layout])
        )
        result.extend(struct.pack(BYTE_ORDER + "13i", *[e.sub_intervals for e in self.layout]))
        result.extend(struct.pack(BYTE_ORDER + "13i", *counts))
        if len(result) > record_size:
            raise ValueError(f"Header needs {len(result)} bytes, record holds {record_size}")
        result.extend(b"\x00" * (record_size - len(result)))
        return bytes(result)

    @classmethod
    def from_bytes(cls, data: bytes, record_size: int = RECORD_SIZE) -> "EphemerisHeader":
        """
        Decode a header record.

        Args:
            data: The file's first record
            record_size: Bytes per record

        Returns:
            The parsed header

        Raises:
            TruncatedHeaderError: If data is shorter than one record
            InvalidHeaderError: If the decoded values violate header invariants
        """
        if len(data) < record_size:
            raise TruncatedHeaderError(record_size, len(data))

        cursor = ByteCursor(data)
        valid_start = cursor.read_f64()
        valid_end = cursor.read_f64()
        step_days = cursor.read_f64()
        constant_count = cursor.read_i32()
        au = cursor.read_f64()
        emrat = cursor.read_f64()

        rows: List[List[int]] = [
            [cursor.read_i32() for _ in range(LAYOUT_SLOTS)] for _ in range(3)
        ]
        declared = tuple(cursor.read_i32() for _ in range(LAYOUT_SLOTS))

        layout = tuple(
            LayoutEntry(offset, count, subs) for offset, count, subs in zip(*rows)
        )

        return cls(
            valid_start=valid_start,
            valid_end=valid_end,
            step_days=step_days,
            layout=layout,
            au=au,
            earth_moon_mass_ratio=emrat,
            constant_count=constant_count,
            declared_coefficient_counts=declared,
        )


def parse_header(
    stream: BinaryIO,
    record_size: int = RECORD_SIZE,
    coefficient_count: int = COEFFICIENT_COUNT,
) -> EphemerisHeader:
    """
    Read and decode the header record from the start of an open file.

    Args:
        stream: Binary file opened for reading
        record_size: Bytes per record
        coefficient_count: Floats per data record, used to validate the layout

    Returns:
        The parsed header

    Raises:
        TruncatedHeaderError: If the file is shorter than one record
        ShortReadError: If the underlying read fails
        InvalidHeaderError: If the header is inconsistent
    """
    try:
        stream.seek(0)
        data = stream.read(record_size)
    except OSError as e:
        raise ShortReadError(record_size, 0, record_index=None, reason=str(e)) from e

    header = EphemerisHeader.from_bytes(data, record_size=record_size)
    header.validate_layout(coefficient_count)
    return header


def make_layout(entries: Sequence[Tuple[int, LayoutEntry]]) -> Tuple[LayoutEntry, ...]:
    """
    Build a full 13-slot layout table from (slot, entry) pairs.

    Unlisted slots are left unpopulated.
    """
    layout = [EMPTY_LAYOUT_ENTRY] * LAYOUT_SLOTS
    for slot, entry in entries:
        if not 0 <= slot < LAYOUT_SLOTS:
            raise ValueError(f"Layout slot must be in [0, {LAYOUT_SLOTS}), got {slot}")
        layout[slot] = entry
    return tuple(layout)
