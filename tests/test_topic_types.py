import hashlib
from dataclasses import dataclass

import pytest

from intsbridge.cdr import DEFAULT_ENDIANNESS, Endianness, NotEnoughMemoryError
from intsbridge.messages import AddTwoIntsRequest, AddTwoIntsResponse
from intsbridge.topic_types import (
    Encapsulation,
    SerializedPayload,
    TopicDataType,
    add_two_ints_request_type,
    add_two_ints_response_type,
)


@dataclass
class KeyedMessage:
    ident: int = 0

    @classmethod
    def max_serialized_size(cls, current_alignment=0):
        return 8

    def serialized_size(self, current_alignment=0):
        return 8

    def serialize(self, writer):
        writer.write_int64(self.ident)

    @classmethod
    def deserialize(cls, reader):
        return cls(reader.read_int64())

    @classmethod
    def key_max_serialized_size(cls, current_alignment=0):
        return current_alignment + 8

    @classmethod
    def is_key_defined(cls):
        return True

    def serialize_key(self, writer):
        writer.write_int64(self.ident)


def test_type_names():
    assert add_two_ints_request_type().name == "AddTwoInts_Request"
    assert add_two_ints_response_type().name == "AddTwoInts_Response"


def test_type_sizes_include_encapsulation():
    req = add_two_ints_request_type()
    rep = add_two_ints_response_type()
    assert req.type_size == AddTwoIntsRequest.max_serialized_size() + 4
    assert rep.type_size == AddTwoIntsResponse.max_serialized_size() + 4


def test_request_round_trip():
    topic = add_two_ints_request_type()
    request = AddTwoIntsRequest(a=-7, b=2**40)
    payload = topic.serialize(request)
    assert topic.deserialize(payload) == request


def test_response_round_trip_from_bytes():
    topic = add_two_ints_response_type()
    response = AddTwoIntsResponse(sum=123456789)
    payload = topic.serialize(response)
    assert topic.deserialize(payload.data) == response


def test_encapsulation_header_matches_endianness():
    topic = add_two_ints_response_type()
    payload = topic.serialize(AddTwoIntsResponse(sum=1))
    expected = Encapsulation.for_endianness(DEFAULT_ENDIANNESS)
    assert payload.encapsulation == expected
    assert payload.data[:4] == bytes((0, int(expected), 0, 0))


def test_encapsulation_values():
    assert Encapsulation.for_endianness(Endianness.BIG) is Encapsulation.CDR_BE
    assert Encapsulation.for_endianness(Endianness.LITTLE) is Encapsulation.CDR_LE


def test_payload_length_matches_size_provider():
    topic = add_two_ints_request_type()
    request = AddTwoIntsRequest(a=1, b=3)
    payload = topic.serialize(request)
    assert payload.length == topic.serialized_size_provider(request)()
    assert payload.length <= topic.type_size


def test_serialize_too_small_buffer_raises():
    topic = add_two_ints_request_type()
    with pytest.raises(NotEnoughMemoryError):
        topic.serialize(AddTwoIntsRequest(a=1, b=2), max_size=10)


def test_deserialize_truncated_payload_raises():
    topic = add_two_ints_request_type()
    payload = topic.serialize(AddTwoIntsRequest(a=1, b=2))
    truncated = SerializedPayload(payload.data[:-3], payload.encapsulation)
    with pytest.raises(NotEnoughMemoryError):
        topic.deserialize(truncated)


def test_create_data_is_default():
    assert add_two_ints_request_type().create_data() == AddTwoIntsRequest(0, 0)
    assert add_two_ints_response_type().create_data() == AddTwoIntsResponse(0)


def test_get_key_without_key_defined():
    topic = add_two_ints_request_type()
    assert topic.is_get_key_defined is False
    assert topic.get_key(AddTwoIntsRequest(a=1, b=2)) is None


def test_get_key_short_key_is_padded():
    topic = TopicDataType("Keyed", KeyedMessage, True)
    key = topic.get_key(KeyedMessage(ident=5))
    assert len(key) == 16
    assert key == (5).to_bytes(8, "big") + bytes(8)


def test_get_key_forced_md5():
    topic = TopicDataType("Keyed", KeyedMessage, True)
    key = topic.get_key(KeyedMessage(ident=5), force_md5=True)
    assert key == hashlib.md5((5).to_bytes(8, "big")).digest()


def test_keyed_round_trip():
    topic = TopicDataType("Keyed", KeyedMessage, False)
    message = KeyedMessage(ident=-99)
    assert topic.deserialize(topic.serialize(message)) == message
    assert topic.type_size == KeyedMessage.max_serialized_size() + 4