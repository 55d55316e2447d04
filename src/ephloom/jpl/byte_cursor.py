"""
Sequential reader for fixed-width fields in a byte buffer.
"""

import struct

from ..constants import BYTE_ORDER


class ByteCursor:
    """
    Reads 8-byte floats and 4-byte integers from a buffer in order.

    Reading past the end of the buffer returns zero instead of raising;
    callers check the buffer length against the record size before relying
    on its contents.
    """

    def __init__(self, data: bytes, byte_order: str = BYTE_ORDER):
        """
        Initialize a cursor at the start of the buffer.

        Args:
            data: Buffer to read from
            byte_order: struct byte-order character ("<" little, ">" big)
        """
        if byte_order not in ("<", ">"):
            raise ValueError(f"Invalid byte order: {byte_order!r}")
        self.data = data
        self.position = 0
        self._f64 = struct.Struct(byte_order + "d")
        self._i32 = struct.Struct(byte_order + "i")

    @property
    def remaining(self) -> int:
        return max(0, len(self.data) - self.position)

    def read_f64(self) -> float:
        """Consume the next 8 bytes as a float, or return 0.0 past the end."""
        if self.position + 8 > len(self.data):
            return 0.0
        value = self._f64.unpack_from(self.data, self.position)[0]
        self.position += 8
        return value

    def read_i32(self) -> int:
        """Consume the next 4 bytes as a signed int, or return 0 past the end."""
        if self.position + 4 > len(self.data):
            return 0
        value = self._i32.unpack_from(self.data, self.position)[0]
        self.position += 4
        return value
