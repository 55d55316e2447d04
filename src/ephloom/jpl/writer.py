"""
Writing JPL-format ephemeris files.

Mostly useful for building small synthetic files for tests and fixtures.
"""

import os
from typing import List, Mapping, Sequence, Tuple, Union

import numpy as np

from ..bodies import Body
from ..constants import AU_KM, BYTE_ORDER, COEFFICIENT_COUNT, EARTH_MOON_MASS_RATIO
from ..logging import get_logger
from .header import EphemerisHeader, LayoutEntry, make_layout

logger = get_logger(__name__)

SlotKey = Union[Body, int]

# Entries 0 and 1 of each record hold its start and end epochs
FIRST_COEFFICIENT = 2


def _slot(key: SlotKey) -> int:
    if isinstance(key, Body):
        if key.slot is None:
            raise ValueError(f"{key.name} has no series slot")
        return key.slot
    return key


def pack_layout(
    shapes: Mapping[SlotKey, Tuple[int, int]], coefficient_count: int = COEFFICIENT_COUNT
) -> Tuple[LayoutEntry, ...]:
    """
    Assign consecutive coefficient offsets to series.

    Args:
        shapes: For each body or slot, (coefficients per component, sub-intervals)
        coefficient_count: Floats per record

    Returns:
        A 13-slot layout table

    Raises:
        ValueError: If the series don't fit in one record
    """
    entries: List[Tuple[int, LayoutEntry]] = []
    offset = FIRST_COEFFICIENT
    for key in sorted(shapes, key=_slot):
        count, sub_intervals = shapes[key]
        entry = LayoutEntry(offset, count, sub_intervals)
        entries.append((_slot(key), entry))
        offset += entry.span
    if offset > coefficient_count:
        raise ValueError(f"Series need {offset} coefficients, record holds {coefficient_count}")
    return make_layout(entries)


class EphemerisWriter:
    """
    Builds an ephemeris file record by record.

    Example:
        writer = EphemerisWriter(2451536.5, 2451568.5, 32.0,
                                 pack_layout({Body.MARS: (2, 1)}))
        writer.add_record(2451536.5, {Body.MARS: [[[1.0, 0.0], [0.0, 0.0], [0.0, 0.0]]]})
        writer.write("tiny.eph")
    """

    def __init__(
        self,
        valid_start: float,
        valid_end: float,
        step_days: float,
        layout: Sequence[LayoutEntry],
        au: float = AU_KM,
        earth_moon_mass_ratio: float = EARTH_MOON_MASS_RATIO,
        coefficient_count: int = COEFFICIENT_COUNT,
    ):
        self.header = EphemerisHeader(
            valid_start=valid_start,
            valid_end=valid_end,
            step_days=step_days,
            layout=tuple(layout),
            au=au,
            earth_moon_mass_ratio=earth_moon_mass_ratio,
            constant_count=2,
            declared_coefficient_counts=tuple(e.coefficient_count for e in layout),
        )
        self.header.validate_layout(coefficient_count)
        self.coefficient_count = coefficient_count
        self.records: List[np.ndarray] = []

    @property
    def record_size(self) -> int:
        return self.coefficient_count * 8

    def add_record(
        self,
        record_start: float,
        series: Mapping[SlotKey, Union[Sequence, np.ndarray]],
    ) -> np.ndarray:
        """
        Append a data record.

        Args:
            record_start: Start epoch of the record (JD)
            series: For each body or slot, coefficients shaped
                (sub-intervals, 3, coefficients per component)

        Returns:
            The record's coefficient array
        """
        record = np.zeros(self.coefficient_count)
        record[0] = record_start
        record[1] = record_start + self.header.step_days

        for key, coeffs in series.items():
            slot = _slot(key)
            entry = self.header.entry(slot)
            if not entry.populated:
                raise ValueError(f"Slot {slot} has no layout entry")
            block = np.asarray(coeffs, dtype=float)
            expected = (entry.sub_intervals, 3, entry.coefficient_count)
            if block.shape != expected:
                raise ValueError(f"Slot {slot} coefficients must have shape {expected}, got {block.shape}")
            record[entry.offset : entry.offset + entry.span] = block.ravel()

        self.records.append(record)
        return record

    def to_bytes(self) -> bytes:
        """Header record followed by every data record."""
        result = bytearray(self.header.to_bytes(self.record_size))
        for record in self.records:
            result.extend(record.astype(BYTE_ORDER + "f8").tobytes())
        return bytes(result)

    def write(self, path: str) -> None:
        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(path, "wb") as f:
            f.write(self.to_bytes())
        logger.info(f"Wrote {len(self.records)} records to {path}")


def linear_series(
    midpoint: Sequence[float],
    velocity: Sequence[float] = (0.0, 0.0, 0.0),
    step_days: float = 32.0,
    coefficient_count: int = 2,
) -> np.ndarray:
    """
    Coefficients of a single-interval series moving linearly through
    `midpoint` (AU, at the middle of the record) at `velocity` (AU/day).

    Returns:
        Array shaped (1, 3, coefficient_count)
    """
    block = np.zeros((1, 3, coefficient_count))
    block[0, :, 0] = midpoint
    if coefficient_count > 1:
        # d/dt (c1 * x) = c1 * 2 / step_days
        block[0, :, 1] = np.asarray(velocity, dtype=float) * step_days / 2.0
    return block
