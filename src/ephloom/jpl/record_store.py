"""
Random access to the data records of an open ephemeris file.
"""

import threading
from collections import OrderedDict
from dataclasses import dataclass
from typing import BinaryIO, NamedTuple, Optional

import numpy as np

from ..constants import BYTE_ORDER, COEFFICIENT_COUNT
from ..errors import NotOpenError, OutOfRangeError, ShortReadError
from ..logging import get_logger
from .header import EphemerisHeader

logger = get_logger(__name__)


@dataclass(frozen=True)
class DataRecord:
    """
    Coefficients for one step-length span of time, for all bodies at once.

    The record's first entry is its own start epoch (JD).
    """

    index: int
    coefficients: np.ndarray

    @property
    def record_start(self) -> float:
        return float(self.coefficients[0])

    def __len__(self) -> int:
        return len(self.coefficients)


class CacheInfo(NamedTuple):
    hits: int
    misses: int
    maxsize: int
    currsize: int


class RecordStore:
    """
    Locates and reads the data record covering a requested time.

    Data record k covers [valid_start + k * step, valid_start + (k + 1) * step)
    and is stored as file record k + 1, after the header. Seek and read happen
    under one lock, so a store may be shared between threads.

    With cache_size > 0 the most recently read records are kept in an LRU
    cache keyed by record index; the default of 0 re-reads every record.
    """

    def __init__(
        self,
        stream: BinaryIO,
        header: EphemerisHeader,
        coefficient_count: int = COEFFICIENT_COUNT,
        cache_size: int = 0,
    ):
        if cache_size < 0:
            raise ValueError("cache_size must be non-negative")
        self.stream: Optional[BinaryIO] = stream
        self.header = header
        self.coefficient_count = coefficient_count
        self.record_size = coefficient_count * 8
        self.cache_size = cache_size
        self._dtype = np.dtype(BYTE_ORDER + "f8")
        self._cache: "OrderedDict[int, DataRecord]" = OrderedDict()
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0

    @property
    def is_open(self) -> bool:
        return self.stream is not None

    def fetch(self, t: float) -> DataRecord:
        """
        Get the data record covering time t.

        Args:
            t: Julian date (dynamical time)

        Returns:
            The covering DataRecord

        Raises:
            NotOpenError: If the store has been closed
            OutOfRangeError: If t is outside the header's validity interval
            ShortReadError: If the file holds less than a full record there
        """
        if self.stream is None:
            raise NotOpenError()
        if not self.header.covers(t):
            raise OutOfRangeError(t, self.header.valid_start, self.header.valid_end)
        return self.read_record(self.header.record_index(t))

    def read_record(self, index: int) -> DataRecord:
        """Read data record `index` (0-based, not counting the header)."""
        with self._lock:
            if self.stream is None:
                raise NotOpenError()

            if self.cache_size:
                cached = self._cache.get(index)
                if cached is not None:
                    self._cache.move_to_end(index)
                    self._hits += 1
                    logger.debug(f"Record {index} served from cache")
                    return cached
                self._misses += 1

            offset = (index + 1) * self.record_size
            try:
                self.stream.seek(offset)
                data = self.stream.read(self.record_size)
            except OSError as e:
                raise ShortReadError(self.record_size, 0, index, str(e)) from e

            if len(data) < self.record_size:
                raise ShortReadError(self.record_size, len(data), index)

            logger.debug(f"Read record {index} at byte offset {offset}")
            coefficients = np.frombuffer(data, dtype=self._dtype, count=self.coefficient_count)
            record = DataRecord(index=index, coefficients=coefficients)

            if self.cache_size:
                self._cache[index] = record
                while len(self._cache) > self.cache_size:
                    self._cache.popitem(last=False)

            return record

    def cache_info(self) -> CacheInfo:
        with self._lock:
            return CacheInfo(self._hits, self._misses, self.cache_size, len(self._cache))

    def close(self) -> None:
        """Forget the stream and every cached record. The caller owns the stream."""
        with self._lock:
            self.stream = None
            self._cache.clear()
