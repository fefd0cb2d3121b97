"""HelloWorld message type carrying a single string."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from intsbridge.cdr import CdrReader, CdrWriter, alignment

__all__ = ["MAX_DATA_LENGTH", "HelloWorld"]

MAX_DATA_LENGTH = 255


def _string_size(length: int, current_alignment: int) -> int:
    return 4 + alignment(current_alignment, 4) + length + 1


@dataclass
class HelloWorld:
    """Message holding one text field."""

    _KEY_FIELDS: ClassVar[tuple[str, ...]] = ()

    data: str = ""

    @classmethod
    def max_serialized_size(cls, current_alignment: int = 0) -> int:
        """Largest serialized size at the given buffer alignment."""
        return _string_size(MAX_DATA_LENGTH, current_alignment)

    def serialized_size(self, current_alignment: int = 0) -> int:
        """Serialized size of this value at the given buffer alignment."""
        return _string_size(len(self.data.encode("utf-8")), current_alignment)

    def serialize(self, writer: CdrWriter) -> None:
        """Write the text to ``writer``."""
        writer.write_string(self.data)

    @classmethod
    def deserialize(cls, reader: CdrReader) -> "HelloWorld":
        """Read a message from ``reader``."""
        return cls(data=reader.read_string())

    @classmethod
    def key_max_serialized_size(cls, current_alignment: int = 0) -> int:
        """Alignment reached after the key members; the type has none."""
        position = current_alignment
        for _ in cls._KEY_FIELDS:
            position += _string_size(MAX_DATA_LENGTH, position)
        return position

    @classmethod
    def is_key_defined(cls) -> bool:
        """Whether the type defines key members."""
        return bool(cls._KEY_FIELDS)

    def serialize_key(self, writer: CdrWriter) -> None:
        """Write the key members, of which there are none."""
        for name in self._KEY_FIELDS:
            writer.write_string(getattr(self, name))