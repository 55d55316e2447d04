"""Tests for reading data records."""

import io
import unittest

from ephloom.bodies import Body
from ephloom.errors import NotOpenError, OutOfRangeError, ShortReadError
from ephloom.jpl.record_store import RecordStore
from ephloom.jpl.writer import EphemerisWriter, linear_series, pack_layout

START = 2451536.5
STEP = 32.0


class TestRecordStore(unittest.TestCase):
    """Test record lookup, short reads and caching."""

    def setUp(self):
        self.writer = EphemerisWriter(
            START, START + 3 * STEP, STEP, pack_layout({Body.MARS: (2, 1)})
        )
        for k in range(3):
            self.writer.add_record(
                START + k * STEP, {Body.MARS: linear_series((k + 1.0, 0.0, 0.0))}
            )
        self.stream = io.BytesIO(self.writer.to_bytes())

    def make_store(self, cache_size=0):
        return RecordStore(self.stream, self.writer.header, cache_size=cache_size)

    def test_fetch_covering_record(self):
        """Each record is found by time and carries its own start epoch."""
        store = self.make_store()
        for k in range(3):
            record = store.fetch(START + k * STEP + 5.0)
            self.assertEqual(record.index, k)
            self.assertEqual(record.record_start, START + k * STEP)
            self.assertEqual(len(record), 1018)
            self.assertEqual(record.coefficients[2], k + 1.0)

    def test_valid_end_uses_last_record(self):
        store = self.make_store()
        record = store.fetch(START + 3 * STEP)
        self.assertEqual(record.index, 2)

    def test_out_of_range(self):
        store = self.make_store()
        with self.assertRaises(OutOfRangeError):
            store.fetch(START - 1.0)
        with self.assertRaises(OutOfRangeError):
            store.fetch(START + 3 * STEP + 1.0)

    def test_short_read(self):
        """A file cut short inside a record raises ShortReadError."""
        data = self.writer.to_bytes()
        store = RecordStore(io.BytesIO(data[:-100]), self.writer.header)
        with self.assertRaises(ShortReadError) as cm:
            store.fetch(START + 2 * STEP + 1.0)
        self.assertEqual(cm.exception.record_index, 2)
        self.assertEqual(cm.exception.actual, 8144 - 100)

    def test_closed_store(self):
        store = self.make_store()
        store.close()
        self.assertFalse(store.is_open)
        with self.assertRaises(NotOpenError):
            store.fetch(START + 1.0)

    def test_no_cache_by_default(self):
        store = self.make_store()
        store.fetch(START + 1.0)
        store.fetch(START + 2.0)
        info = store.cache_info()
        self.assertEqual((info.hits, info.misses, info.currsize), (0, 0, 0))

    def test_cache_hits_and_eviction(self):
        """Repeated reads are served from cache; the oldest record is evicted."""
        store = self.make_store(cache_size=2)
        first = store.fetch(START + 1.0)
        again = store.fetch(START + 2.0)
        self.assertIs(first, again)

        store.fetch(START + STEP + 1.0)
        store.fetch(START + 2 * STEP + 1.0)
        info = store.cache_info()
        self.assertEqual(info.hits, 1)
        self.assertEqual(info.misses, 3)
        self.assertEqual(info.currsize, 2)

        # Record 0 was evicted, so this is a miss
        store.fetch(START + 1.0)
        self.assertEqual(store.cache_info().misses, 4)

    def test_close_clears_cache(self):
        store = self.make_store(cache_size=2)
        store.fetch(START + 1.0)
        store.close()
        self.assertEqual(store.cache_info().currsize, 0)

    def test_negative_cache_size(self):
        with self.assertRaises(ValueError):
            self.make_store(cache_size=-1)


if __name__ == "__main__":
    unittest.main()
