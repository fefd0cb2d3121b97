"""Minimal CDR (Common Data Representation) encoder and decoder."""

from __future__ import annotations

import enum
import struct
import sys

__all__ = [
    "DEFAULT_ENDIANNESS",
    "CdrReader",
    "CdrWriter",
    "Endianness",
    "NotEnoughMemoryError",
    "alignment",
]


class Endianness(enum.Enum):
    """Byte order of a CDR stream; the value is the struct prefix."""

    BIG = ">"
    LITTLE = "<"

    @property
    def flag(self) -> int:
        """Low bit of the encapsulation kind byte for this byte order."""
        return 1 if self is Endianness.LITTLE else 0


DEFAULT_ENDIANNESS = Endianness.LITTLE if sys.byteorder == "little" else Endianness.BIG

_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1


class NotEnoughMemoryError(Exception):
    """Raised when a buffer is too small to hold or supply the requested data."""


def alignment(current_alignment: int, data_size: int) -> int:
    """Return the padding needed to align ``current_alignment`` to ``data_size``."""
    return (data_size - (current_alignment % data_size)) & (data_size - 1)


class CdrWriter:
    """Serializes values into a bounded CDR buffer."""

    def __init__(self, max_size: int | None = None, endianness: Endianness = DEFAULT_ENDIANNESS):
        self.max_size = max_size
        self.endianness = endianness
        self._buffer = bytearray()
        self._origin = 0

    def _reserve(self, size: int) -> None:
        if self.max_size is not None and len(self._buffer) + size > self.max_size:
            raise NotEnoughMemoryError(
                f"cannot write {size} bytes: buffer limited to {self.max_size} bytes"
            )

    def _align(self, size: int) -> None:
        padding = alignment(len(self._buffer) - self._origin, size)
        if padding:
            self._reserve(padding)
            self._buffer.extend(bytes(padding))

    def _pack(self, fmt: str, value) -> None:
        data = struct.pack(self.endianness.value + fmt, value)
        self._align(len(data))
        self._reserve(len(data))
        self._buffer.extend(data)

    def write_encapsulation(self) -> None:
        """Write the 4-byte encapsulation header and restart alignment after it."""
        self._reserve(4)
        self._buffer.extend((0, self.endianness.flag, 0, 0))
        self._origin = len(self._buffer)

    def write_int64(self, value: int) -> None:
        """Write a signed 64-bit integer."""
        if not _INT64_MIN <= value <= _INT64_MAX:
            raise ValueError(f"{value} does not fit in a signed 64-bit integer")
        self._pack("q", value)

    def write_string(self, value: str) -> None:
        """Write a length-prefixed, NUL-terminated string."""
        encoded = value.encode("utf-8") + b"\x00"
        self._pack("I", len(encoded))
        self._reserve(len(encoded))
        self._buffer.extend(encoded)

    def getvalue(self) -> bytes:
        """Return everything written so far."""
        return bytes(self._buffer)

    def __len__(self) -> int:
        return len(self._buffer)


class CdrReader:
    """Deserializes values from a CDR buffer."""

    def __init__(self, data: bytes, endianness: Endianness = DEFAULT_ENDIANNESS):
        self._data = bytes(data)
        self.endianness = endianness
        self._pos = 0
        self._origin = 0
        self.options = 0

    def _take(self, size: int) -> bytes:
        if self._pos + size > len(self._data):
            raise NotEnoughMemoryError(
                f"cannot read {size} bytes at offset {self._pos}: only {len(self._data)} bytes"
            )
        chunk = self._data[self._pos:self._pos + size]
        self._pos += size
        return chunk

    def _align(self, size: int) -> None:
        self._take(alignment(self._pos - self._origin, size))

    def _unpack(self, fmt: str):
        size = struct.calcsize(fmt)
        self._align(size)
        (value,) = struct.unpack(self.endianness.value + fmt, self._take(size))
        return value

    def read_encapsulation(self) -> None:
        """Read the encapsulation header, adopting the byte order it declares."""
        dummy, kind, opt_hi, opt_lo = self._take(4)
        if dummy != 0:
            raise ValueError("unexpected non-zero byte in CDR encapsulation")
        if kind & ~1:
            raise ValueError(f"unsupported CDR encapsulation kind {kind:#04x}")
        self.endianness = Endianness.LITTLE if kind & 1 else Endianness.BIG
        self.options = (opt_hi << 8) | opt_lo
        self._origin = self._pos

    def read_int64(self) -> int:
        """Read a signed 64-bit integer."""
        return self._unpack("q")

    def read_string(self) -> str:
        """Read a length-prefixed string, dropping its NUL terminator."""
        length = self._unpack("I")
        if length == 0:
            return ""
        raw = self._take(length)
        if raw.endswith(b"\x00"):
            raw = raw[:-1]
        return raw.decode("utf-8")

    @property
    def remaining(self) -> int:
        """Number of bytes not yet consumed."""
        return len(self._data) - self._pos