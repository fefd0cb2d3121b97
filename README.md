# intsbridge

This package holds the parts needed for the "AddTwoInts" and "HelloWorld" integration examples.

- **CDR encoding** (`intsbridge.cdr`)
  - `CdrWriter` and `CdrReader` encode and decode signed 64-bit integers and length-prefixed strings. They handle alignment and byte order.
  - They also write and read the 4-byte encapsulation header. When `CdrReader.read_encapsulation()` reads a header, the reader switches to the byte order that the header declares.
  - `alignment()` computes padding.
  - `DEFAULT_ENDIANNESS` is the host byte order.
  - A write past the writer's `max_size` raises `NotEnoughMemoryError`, and so does a read past the end of the data.
- **Message types** (`intsbridge.messages`, `intsbridge.hello`)
  - The types are `AddTwoIntsRequest` (`a`, `b`), `AddTwoIntsResponse` (`sum`) and `HelloWorld` (`data`).
  - Each type reports its maximum serialized size and its actual serialized size. Each one also serializes itself to a `CdrWriter` and is rebuilt from a `CdrReader`.
  - None of these types defines key members.
- **Topic data types** (`intsbridge.topic_types`, `intsbridge.hello_topic`)
  - `TopicDataType.serialize()` turns a message into a `SerializedPayload`, which holds the bytes and an `Encapsulation` (`CDR_BE` or `CDR_LE`).
  - `TopicDataType.deserialize()` reads a payload, or raw bytes, back into a message.
  - `serialized_size_provider()` and `create_data()` are also available.
  - `get_key()` returns a 16-byte instance handle, or `None` when the type has no key.
  - `add_two_ints_request_type()`, `add_two_ints_response_type()` and `hello_world_type()` build the ready-made types.
- **Command-line options** (`intsbridge.options`)
  - `parse_add_two_ints_args()` and `parse_hello_world_args()` return an `ExampleOptions` with the `mode`, `domain_id`, `count`, `name` and `sleep_ms` fields.
  - These option names are accepted: `-m/--mode`, `-d/--domain`, `-c/--count`, `-n/--service_name` (AddTwoInts) or `-n/--topic_name` (HelloWorld), and `-h/--help`.
  - An empty command line, an unknown option or a missing mode raises `UsageError`.
  - `-h` raises `HelpRequested` with the help text.
  - An unknown mode, a negative domain or a count that is not positive raises `ValueError`.
  - The usage lines are available from `add_two_ints_usage()` and `hello_world_usage()`.
- **WebSocket AddTwoInts service** (`intsbridge.websocket_server`)
  - `AddTwoIntsServer` announces the service to each client that connects. It then answers each request with the sum of `a` and `b`.
  - `AddTwoIntsServer.handle_message()` answers a single request without any network connection.

## Installation

```
pip install .
```

## Running the WebSocket service

```
intsbridge-websocket-add-two-ints --port 8080 --service_name add_two_ints
```

Options:

- `-p/--port`: the port to listen on. The default is 80. A value outside 0–65535 is rejected with `ValueError`.
- `-n/--service_name`: the name of the service. The default is `add_two_ints`.
- `-h/--help`: prints the help and exits with status 0. An unknown option prints the usage line and exits with status 1.

The server uses plain `ws://` and listens on all interfaces. It runs until it is interrupted. At shutdown it closes every open connection.

When a client connects, the server sends:

```json
{"op":"advertise_service","request_type":"AddTwoInts_Request","reply_type":"AddTwoInts_Response","service":"add_two_ints"}
```

A request such as this one:

```json
{"op":"call_service","id":"1","args":{"a":2,"b":3}}
```

is answered with:

```json
{"op":"service_response", "result":"true", "id": "1", "service": "add_two_ints", "values":{"sum":5}}
```

Some messages get no answer: those without `args` or `id`, those whose `args` lack `a` or `b`, text that is not JSON, and operands that are not numbers. The server reports each such message on standard error and keeps the connection open.

## Using the serialization layer

```python
from intsbridge.messages import AddTwoIntsRequest
from intsbridge.topic_types import add_two_ints_request_type

topic = add_two_ints_request_type()
payload = topic.serialize(AddTwoIntsRequest(a=1, b=3), max_size=topic.type_size)
request = topic.deserialize(payload)
assert (request.a, request.b) == (1, 3)
```

## What the package does not do

The package has no publish/subscribe transport. The topic data types produce and read payloads, but nothing sends those payloads between processes. For the same reason, no command runs the AddTwoInts client/server or the HelloWorld publisher/subscriber. Their option parsers are available only as functions. The WebSocket service does not offer TLS.

## Running the tests

```
pip install .[test]
pytest
```