"""Topic data type for HelloWorld messages."""

from __future__ import annotations

from intsbridge.hello import HelloWorld
from intsbridge.topic_types import TopicDataType

__all__ = ["hello_world_type"]


def hello_world_type() -> TopicDataType:
    """Topic data type for HelloWorld samples, without submessage alignment."""
    return TopicDataType("HelloWorld", HelloWorld, False)