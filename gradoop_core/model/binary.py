"""
Gradoop Core Model - Binary Primitives

Big-endian writer/reader shared by identifiers, property values and
element serialization. All multi-byte integers are network byte order.
"""

import struct
from typing import Union

from gradoop_core.exceptions import CorruptEncodingError

_BYTE = struct.Struct(">B")
_INT = struct.Struct(">i")
_UINT = struct.Struct(">I")
_LONG = struct.Struct(">q")
_FLOAT = struct.Struct(">f")
_DOUBLE = struct.Struct(">d")


class BinaryWriter:
    """Accumulates an encoded payload."""

    def __init__(self):
        self._buffer = bytearray()

    def write_byte(self, value: int) -> None:
        self._buffer += _BYTE.pack(value)

    def write_int(self, value: int) -> None:
        self._buffer += _INT.pack(value)

    def write_length(self, value: int) -> None:
        self._buffer += _UINT.pack(value)

    def write_long(self, value: int) -> None:
        self._buffer += _LONG.pack(value)

    def write_float(self, value: float) -> None:
        self._buffer += _FLOAT.pack(value)

    def write_double(self, value: float) -> None:
        self._buffer += _DOUBLE.pack(value)

    def write_raw(self, data: bytes) -> None:
        self._buffer += data

    def write_bytes(self, data: bytes) -> None:
        """Write a 4-byte length prefix followed by the data."""
        self.write_length(len(data))
        self._buffer += data

    def write_string(self, value: str) -> None:
        self.write_bytes(value.encode("utf-8"))

    def getvalue(self) -> bytes:
        return bytes(self._buffer)


class BinaryReader:
    """
    Sequential reader over an encoded payload.

    Every read checks the remaining length and raises
    CorruptEncodingError instead of returning a short result.
    """

    def __init__(self, data: Union[bytes, bytearray, memoryview], offset: int = 0):
        self._data = bytes(data)
        self._offset = offset

    @property
    def offset(self) -> int:
        return self._offset

    @property
    def remaining(self) -> int:
        return len(self._data) - self._offset

    def read_raw(self, size: int) -> bytes:
        if size < 0 or self.remaining < size:
            raise CorruptEncodingError(
                f"Truncated payload: need {size} bytes at offset {self._offset}, "
                f"{max(self.remaining, 0)} available"
            )
        chunk = self._data[self._offset:self._offset + size]
        self._offset += size
        return chunk

    def read_byte(self) -> int:
        return _BYTE.unpack(self.read_raw(_BYTE.size))[0]

    def read_int(self) -> int:
        return _INT.unpack(self.read_raw(_INT.size))[0]

    def read_length(self) -> int:
        return _UINT.unpack(self.read_raw(_UINT.size))[0]

    def read_long(self) -> int:
        return _LONG.unpack(self.read_raw(_LONG.size))[0]

    def read_float(self) -> float:
        return _FLOAT.unpack(self.read_raw(_FLOAT.size))[0]

    def read_double(self) -> float:
        return _DOUBLE.unpack(self.read_raw(_DOUBLE.size))[0]

    def read_bytes(self) -> bytes:
        return self.read_raw(self.read_length())

    def read_string(self) -> str:
        data = self.read_bytes()
        try:
            return data.decode("utf-8")
        except UnicodeDecodeError as e:
            raise CorruptEncodingError(f"Invalid UTF-8 payload: {e}") from e

    def expect_end(self) -> None:
        """Raise if unread bytes remain."""
        if self.remaining:
            raise CorruptEncodingError(
                f"{self.remaining} trailing bytes after offset {self._offset}"
            )
