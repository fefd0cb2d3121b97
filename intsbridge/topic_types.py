"""Topic data types that turn AddTwoInts messages into CDR payloads."""

from __future__ import annotations

import enum
import hashlib
from dataclasses import dataclass
from typing import Callable

from intsbridge.cdr import (
    DEFAULT_ENDIANNESS,
    CdrReader,
    CdrWriter,
    Endianness,
    alignment,
)
from intsbridge.messages import AddTwoIntsRequest, AddTwoIntsResponse

__all__ = [
    "ENCAPSULATION_SIZE",
    "KEY_HASH_SIZE",
    "Encapsulation",
    "SerializedPayload",
    "TopicDataType",
    "add_two_ints_request_type",
    "add_two_ints_response_type",
]

ENCAPSULATION_SIZE = 4
KEY_HASH_SIZE = 16


class Encapsulation(enum.IntEnum):
    """Encapsulation identifier recorded on a serialized payload."""

    CDR_BE = 0x0000
    CDR_LE = 0x0001

    @classmethod
    def for_endianness(cls, endianness: Endianness) -> "Encapsulation":
        """Encapsulation matching the given byte order."""
        return cls.CDR_BE if endianness is Endianness.BIG else cls.CDR_LE


@dataclass(frozen=True)
class SerializedPayload:
    """Serialized bytes of one sample together with their encapsulation."""

    data: bytes
    encapsulation: Encapsulation
    max_size: int | None = None

    @property
    def length(self) -> int:
        """Number of serialized bytes, encapsulation header included."""
        return len(self.data)


class TopicDataType:
    """Describes how samples of one message type travel on a topic."""

    def __init__(self, name: str, message_type: type, submessage_alignment: bool = True):
        self.name = name
        self.message_type = message_type
        size = message_type.max_serialized_size()
        if submessage_alignment:
            size += alignment(size, 4)
        self.type_size = size + ENCAPSULATION_SIZE
        self.is_get_key_defined = message_type.is_key_defined()
        self.key_max_size = message_type.key_max_serialized_size()
        self.key_buffer_size = max(self.key_max_size, KEY_HASH_SIZE)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, type_size={self.type_size})"

    def serialize(self, data, max_size: int | None = None) -> SerializedPayload:
        """Serialize ``data`` with its encapsulation header.

        Raises NotEnoughMemoryError when the result does not fit in ``max_size``
        (by default the type's maximum size).
        """
        limit = self.type_size if max_size is None else max_size
        writer = CdrWriter(limit, DEFAULT_ENDIANNESS)
        writer.write_encapsulation()
        data.serialize(writer)
        return SerializedPayload(
            data=writer.getvalue(),
            encapsulation=Encapsulation.for_endianness(writer.endianness),
            max_size=limit,
        )

    def deserialize(self, payload):
        """Rebuild a sample from a payload or raw bytes.

        Raises NotEnoughMemoryError when the payload is truncated.
        """
        raw = payload.data if isinstance(payload, SerializedPayload) else bytes(payload)
        reader = CdrReader(raw, DEFAULT_ENDIANNESS)
        reader.read_encapsulation()
        return self.message_type.deserialize(reader)

    def serialized_size_provider(self, data) -> Callable[[], int]:
        """Return a callable giving the serialized size of ``data`` with its header."""
        return lambda: data.serialized_size() + ENCAPSULATION_SIZE

    def create_data(self):
        """Return a new default-constructed sample."""
        return self.message_type()

    def get_key(self, data, force_md5: bool = False) -> bytes | None:
        """Return the 16-byte instance handle of ``data``, or None if the type has no key."""
        if not self.is_get_key_defined:
            return None
        writer = CdrWriter(self.key_max_size, Endianness.BIG)
        data.serialize_key(writer)
        key = writer.getvalue()
        if force_md5 or self.key_max_size > KEY_HASH_SIZE:
            return hashlib.md5(key).digest()
        return key.ljust(self.key_buffer_size, b"\x00")[:KEY_HASH_SIZE]


def add_two_ints_request_type() -> TopicDataType:
    """Topic data type for AddTwoInts requests."""
    return TopicDataType("AddTwoInts_Request", AddTwoIntsRequest, True)


def add_two_ints_response_type() -> TopicDataType:
    """Topic data type for AddTwoInts responses."""
    return TopicDataType("AddTwoInts_Response", AddTwoIntsResponse, True)