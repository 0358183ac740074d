# Copyright (c) 2026 Firefly Software Solutions Inc.
# Licensed under the Apache License, Version 2.0

"""
Cursor reader for the ``__consumer_offsets`` binary format.

Format Conventions:
- All multi-byte integers are signed and big-endian
- Strings are length-prefixed: [2B len][N bytes UTF-8], a negative len is ""
- Byte arrays are length-prefixed: [4B len][N bytes data]
- Blobs are byte arrays holding an independently versioned structure
"""

from __future__ import annotations

import struct
from typing import Union

from .exceptions import InsufficientDataError, MalformedTextError

BytesLike = Union[bytes, bytearray, memoryview]

_I16 = struct.Struct(">h")
_I32 = struct.Struct(">i")
_I64 = struct.Struct(">q")


class ByteReader:
    """
    Sequential reader over a bounded view of a byte buffer.

    The reader never reads outside ``[start, end)``. Sub-readers created with
    slice() share the underlying buffer but are bounded to the carved span.
    Values returned by the read methods are copies, so nothing handed back to
    the caller references the input buffer.

    Example:
        >>> reader = ByteReader(b"\\x00\\x02\\x00\\x01g")
        >>> reader.read_i16()
        2
        >>> reader.read_string()
        'g'
    """

    __slots__ = ("_data", "_pos", "_end")

    def __init__(self, data: BytesLike, start: int = 0, end: int | None = None) -> None:
        view = data if isinstance(data, memoryview) else memoryview(data)
        if view.ndim != 1 or view.itemsize != 1:
            view = view.cast("B")
        self._data = view
        self._end = len(view) if end is None else end
        if not 0 <= start <= self._end <= len(view):
            raise ValueError(f"Invalid bounds [{start}, {end}) for buffer of {len(view)} bytes")
        self._pos = start

    @property
    def position(self) -> int:
        """Current cursor position within the underlying buffer."""
        return self._pos

    @property
    def remaining(self) -> int:
        """Number of bytes left before the end of this view."""
        return self._end - self._pos

    def _advance(self, size: int) -> int:
        if size < 0 or size > self._end - self._pos:
            raise InsufficientDataError(size, self._end - self._pos, self._pos)
        pos = self._pos
        self._pos += size
        return pos

    def read_i16(self) -> int:
        """Read a big-endian signed 16-bit integer."""
        return _I16.unpack_from(self._data, self._advance(2))[0]

    def read_i32(self) -> int:
        """Read a big-endian signed 32-bit integer."""
        return _I32.unpack_from(self._data, self._advance(4))[0]

    def read_i64(self) -> int:
        """Read a big-endian signed 64-bit integer."""
        return _I64.unpack_from(self._data, self._advance(8))[0]

    def read_bytes(self, size: int) -> bytes:
        """
        Read the next ``size`` bytes.

        Raises:
            InsufficientDataError: If ``size`` is negative or exceeds the
                remaining bytes.
        """
        pos = self._advance(size)
        return self._data[pos:pos + size].tobytes()

    def read_string(self) -> str:
        """
        Read an i16 length-prefixed UTF-8 string.

        A negative length decodes to an empty string, not an error.

        Raises:
            InsufficientDataError: If the input ends before the string does.
            MalformedTextError: If the bytes are not valid UTF-8.
        """
        length = self.read_i16()
        if length < 0:
            return ""
        pos = self._pos
        raw = self.read_bytes(length)
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise MalformedTextError(pos, e.reason) from e

    def read_byte_array(self) -> bytes:
        """Read an i32 length-prefixed byte array, verbatim."""
        return self.read_bytes(self.read_i32())

    def slice(self, size: int) -> ByteReader:
        """
        Carve the next ``size`` bytes into an isolated reader.

        This reader advances past the carved span whatever the sub-reader
        ends up consuming.
        """
        pos = self._advance(size)
        return ByteReader(self._data, pos, pos + size)

    def read_blob(self) -> ByteReader:
        """Read an i32 length prefix and carve that many bytes into a reader."""
        return self.slice(self.read_i32())

    def __repr__(self) -> str:
        return f"ByteReader(position={self._pos}, remaining={self.remaining})"


def as_reader(data: ByteReader | BytesLike) -> ByteReader:
    """Wrap bytes-like input in a ByteReader; readers are returned as-is."""
    if isinstance(data, ByteReader):
        return data
    return ByteReader(data)
