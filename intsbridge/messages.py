"""AddTwoInts request and response message types."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from intsbridge.cdr import CdrReader, CdrWriter, alignment

__all__ = ["AddTwoIntsRequest", "AddTwoIntsResponse"]


def _int64_fields_size(count: int, current_alignment: int) -> int:
    position = current_alignment
    for _ in range(count):
        position += 8 + alignment(position, 8)
    return position - current_alignment


@dataclass
class AddTwoIntsRequest:
    """Request carrying the two operands to add."""

    _KEY_FIELDS: ClassVar[tuple[str, ...]] = ()

    a: int = 0
    b: int = 0

    @classmethod
    def max_serialized_size(cls, current_alignment: int = 0) -> int:
        """Largest serialized size at the given buffer alignment."""
        return _int64_fields_size(2, current_alignment)

    def serialized_size(self, current_alignment: int = 0) -> int:
        """Serialized size of this value at the given buffer alignment."""
        return _int64_fields_size(2, current_alignment)

    def serialize(self, writer: CdrWriter) -> None:
        """Write both operands to ``writer``."""
        writer.write_int64(self.a)
        writer.write_int64(self.b)

    @classmethod
    def deserialize(cls, reader: CdrReader) -> "AddTwoIntsRequest":
        """Read a request from ``reader``."""
        a = reader.read_int64()
        b = reader.read_int64()
        return cls(a=a, b=b)

    @classmethod
    def key_max_serialized_size(cls, current_alignment: int = 0) -> int:
        """Alignment reached after the key members; the type has none."""
        return current_alignment + _int64_fields_size(
            len(cls._KEY_FIELDS), current_alignment
        )

    @classmethod
    def is_key_defined(cls) -> bool:
        """Whether the type defines key members."""
        return bool(cls._KEY_FIELDS)

    def serialize_key(self, writer: CdrWriter) -> None:
        """Write the key members, of which there are none."""
        for name in self._KEY_FIELDS:
            writer.write_int64(getattr(self, name))


@dataclass
class AddTwoIntsResponse:
    """Response carrying the computed sum."""

    _KEY_FIELDS: ClassVar[tuple[str, ...]] = ()

    sum: int = 0

    @classmethod
    def max_serialized_size(cls, current_alignment: int = 0) -> int:
        """Largest serialized size at the given buffer alignment."""
        return _int64_fields_size(1, current_alignment)

    def serialized_size(self, current_alignment: int = 0) -> int:
        """Serialized size of this value at the given buffer alignment."""
        return _int64_fields_size(1, current_alignment)

    def serialize(self, writer: CdrWriter) -> None:
        """Write the sum to ``writer``."""
        writer.write_int64(self.sum)

    @classmethod
    def deserialize(cls, reader: CdrReader) -> "AddTwoIntsResponse":
        """Read a response from ``reader``."""
        return cls(sum=reader.read_int64())

    @classmethod
    def key_max_serialized_size(cls, current_alignment: int = 0) -> int:
        """Alignment reached after the key members; the type has none."""
        return current_alignment + _int64_fields_size(
            len(cls._KEY_FIELDS), current_alignment
        )

    @classmethod
    def is_key_defined(cls) -> bool:
        """Whether the type defines key members."""
        return bool(cls._KEY_FIELDS)

    def serialize_key(self, writer: CdrWriter) -> None:
        """Write the key members, of which there are none."""
        for name in self._KEY_FIELDS:
            writer.write_int64(getattr(self, name))