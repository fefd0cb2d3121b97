import pytest

from intsbridge.cdr import CdrReader, CdrWriter, Endianness, NotEnoughMemoryError
from intsbridge.hello import MAX_DATA_LENGTH, HelloWorld


def test_default_data_is_empty():
    assert HelloWorld().data == ""


@pytest.mark.parametrize("endianness", [Endianness.LITTLE, Endianness.BIG])
@pytest.mark.parametrize("text", ["", "HelloWorld", "héllo wörld", "x" * MAX_DATA_LENGTH])
def test_round_trip(endianness, text):
    writer = CdrWriter(None, endianness)
    HelloWorld(text).serialize(writer)
    reader = CdrReader(writer.getvalue(), endianness)
    assert HelloWorld.deserialize(reader) == HelloWorld(text)
    assert reader.remaining == 0


def test_little_endian_wire_bytes():
    writer = CdrWriter(None, Endianness.LITTLE)
    HelloWorld("HelloWorld").serialize(writer)
    assert writer.getvalue() == b"\x0b\x00\x00\x00HelloWorld\x00"


@pytest.mark.parametrize("text", ["", "HelloWorld", "ünïcode"])
def test_serialized_size_matches_bytes_written(text):
    message = HelloWorld(text)
    writer = CdrWriter(None, Endianness.LITTLE)
    message.serialize(writer)
    assert message.serialized_size() == len(writer.getvalue())


def test_longest_data_reaches_max_size():
    message = HelloWorld("a" * MAX_DATA_LENGTH)
    assert message.serialized_size() == HelloWorld.max_serialized_size()
    assert HelloWorld("short").serialized_size() < HelloWorld.max_serialized_size()


def test_max_size_depends_on_alignment():
    assert HelloWorld.max_serialized_size(4) == HelloWorld.max_serialized_size(0)
    assert HelloWorld.max_serialized_size(1) > HelloWorld.max_serialized_size(0)
    message = HelloWorld("abc")
    assert message.serialized_size(8) == message.serialized_size(0)
    assert message.serialized_size(2) > message.serialized_size(0)


def test_key_is_not_defined():
    assert HelloWorld.is_key_defined() is False
    assert HelloWorld.key_max_serialized_size(7) == 7
    writer = CdrWriter(None, Endianness.BIG)
    HelloWorld("HelloWorld").serialize_key(writer)
    assert writer.getvalue() == b""


def test_truncated_input_raises():
    writer = CdrWriter(None, Endianness.LITTLE)
    HelloWorld("HelloWorld").serialize(writer)
    reader = CdrReader(writer.getvalue()[:-3], Endianness.LITTLE)
    with pytest.raises(NotEnoughMemoryError):
        HelloWorld.deserialize(reader)


def test_bounded_writer_rejects_too_much():
    writer = CdrWriter(HelloWorld.max_serialized_size(), Endianness.LITTLE)
    with pytest.raises(NotEnoughMemoryError):
        HelloWorld("z" * (MAX_DATA_LENGTH + 1)).serialize(writer)