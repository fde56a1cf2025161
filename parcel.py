"""Ordered binary buffer for passing records across a process boundary.

A Parcel is a flat sequence of primitive writes with no field names, no
length header and no version tag. Readers must consume values in exactly the
order the writer produced them. Reading past the end of the data returns
zero values (0 for ints, None for strings) instead of raising.
"""

import struct
from typing import Optional

from models.uri import EMPTY_URI, Uri, get_valid_uri

_INT = struct.Struct("<i")
_NULL_LENGTH = -1

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1


class Parcel:
    """Byte buffer with a read cursor.

    Args:
        data: Bytes previously produced by :meth:`marshall`. Omit to start
            an empty buffer for writing.
    """

    def __init__(self, data: bytes = b""):
        self._buffer = bytearray(data)
        self._position = 0

    def marshall(self) -> bytes:
        """Return the raw bytes written so far."""
        return bytes(self._buffer)

    def data_size(self) -> int:
        return len(self._buffer)

    def data_position(self) -> int:
        return self._position

    def set_data_position(self, position: int) -> None:
        self._position = max(0, min(position, len(self._buffer)))

    def write_int(self, value: int) -> None:
        """Append a signed 32-bit integer.

        Raises:
            ValueError: If the value does not fit in a signed 32-bit int.
        """
        if not INT32_MIN <= value <= INT32_MAX:
            raise ValueError(f"Value does not fit in 32 bits: {value}")
        self._buffer += _INT.pack(value)

    def read_int(self) -> int:
        end = self._position + _INT.size
        if end > len(self._buffer):
            self._position = len(self._buffer)
            return 0
        (value,) = _INT.unpack_from(self._buffer, self._position)
        self._position = end
        return value

    def write_string(self, value: Optional[str]) -> None:
        if value is None:
            self.write_int(_NULL_LENGTH)
            return
        # JSON text can carry lone surrogates.
        encoded = value.encode("utf-8", errors="surrogatepass")
        self.write_int(len(encoded))
        self._buffer += encoded

    def read_string(self) -> Optional[str]:
        if len(self._buffer) - self._position < _INT.size:
            self._position = len(self._buffer)
            return None
        length = self.read_int()
        if length < 0:
            return None
        end = min(self._position + length, len(self._buffer))
        raw = bytes(self._buffer[self._position:end])
        self._position = end
        try:
            return raw.decode("utf-8", errors="surrogatepass")
        except UnicodeDecodeError:
            return raw.decode("utf-8", errors="replace")

    def write_uri(self, uri: Optional[Uri]) -> None:
        self.write_string(None if uri is None else str(uri))

    def read_uri(self) -> Uri:
        value = self.read_string()
        try:
            return get_valid_uri(value)
        except ValueError:
            # Corrupt buffers are not detected; keep the read going.
            return EMPTY_URI
