"""WebSocket server that answers AddTwoInts service requests."""

from __future__ import annotations

import asyncio
import getopt
import json
import re
import sys

import websockets
from websockets.exceptions import ConnectionClosed

from intsbridge.options import HelpRequested, UsageError

__all__ = [
    "DEFAULT_PORT",
    "DEFAULT_SERVICE_NAME",
    "AddTwoIntsServer",
    "add_two_ints",
    "main",
    "parse_args",
    "usage",
]

DEFAULT_PORT = 80
DEFAULT_SERVICE_NAME = "add_two_ints"

_HELP_LINES = (
    "\t-p/--port\t(optional) Specify a WebSocket server port (default: 80)",
    "\t-n/--service_name\t(optional) Request/reply to/from a specific service "
    "(default: add_two_ints)",
)

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def add_two_ints(a: int, b: int) -> int:
    """Return the sum of the two operands."""
    return a + b


def usage() -> str:
    """Usage line of the WebSocket AddTwoInts server."""
    return (
        "Usage: WebSocketAddTwoInts "
        "-p/--port <UNSIGNED_INTEGER> "
        "-n/--service_name <STRING>"
    )


def _atoi(text: str) -> int:
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


def parse_args(argv: list[str] | None = None) -> tuple[str, int]:
    """Parse server options into ``(service_name, port)``.

    Raises HelpRequested for -h, UsageError for unknown options and
    ValueError for a port outside the 16-bit unsigned range.
    """
    args = sys.argv[1:] if argv is None else list(argv)
    try:
        parsed, _ = getopt.gnu_getopt(args, "p:n:h", ["port=", "service_name=", "help"])
    except getopt.GetoptError as exc:
        raise UsageError(usage()) from exc

    service_name = DEFAULT_SERVICE_NAME
    port = DEFAULT_PORT
    for opt, value in parsed:
        if opt in ("-p", "--port"):
            raw_port = _atoi(value)
            if not 0 <= raw_port <= 65535:
                raise ValueError("Service port parameter must be a positive uint16 value")
            port = raw_port
        elif opt in ("-n", "--service_name"):
            service_name = value
        elif opt in ("-h", "--help"):
            raise HelpRequested("\n".join((usage(), *_HELP_LINES)))
    return service_name, port


def _as_int64(value) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"expected a number, got {json.dumps(value)}")
    return int(value)


def _dump(value) -> str:
    return json.dumps(value, separators=(",", ":"))


class AddTwoIntsServer:
    """Advertises an AddTwoInts service to WebSocket clients and answers requests."""

    def __init__(self, service_name: str = DEFAULT_SERVICE_NAME, port: int = DEFAULT_PORT):
        self.service_name = service_name
        self.port = port
        self.host: str | None = None
        self.bound_port: int | None = None
        self.ready = asyncio.Event()
        self._connections: set = set()
        print(
            f"Creating TCP '{self.service_name}' WebSocket server on port: {self.port}"
        )

    def advertise_message(self) -> str:
        """Message telling a new client which service this server provides."""
        return (
            '{"op":"advertise_service",'
            '"request_type":"AddTwoInts_Request",'
            '"reply_type":"AddTwoInts_Response",'
            f'"service":{json.dumps(self.service_name)}}}'
        )

    def handle_message(self, payload: str | bytes) -> str | None:
        """Answer one request; return the response text, or None if it is malformed.

        Raises ValueError for text that is not JSON and TypeError for
        operands that are not numbers.
        """
        if isinstance(payload, (bytes, bytearray)):
            payload = payload.decode("utf-8")
        request = json.loads(payload)

        if not (isinstance(request, dict) and "args" in request and "id" in request):
            print(
                f"WebSocket '{self.service_name}' Server received an invalid "
                f"message format: [ {_dump(request)} ]",
                file=sys.stderr,
            )
            return None

        arguments = request["args"]
        if not (isinstance(arguments, dict) and "a" in arguments and "b" in arguments):
            print(
                f"WebSocket '{self.service_name}' Server received invalid "
                f"input arguments: 'a' and 'b' expected, received [ {_dump(arguments)} ]",
                file=sys.stderr,
            )
            return None

        a = _as_int64(arguments["a"])
        b = _as_int64(arguments["b"])
        print(f"WebSocket '{self.service_name}' Server:")
        print(f"\t - Request received: [ a: {a}, b: {b} ]")

        result = add_two_ints(a, b)
        response = (
            '{"op":"service_response", "result":"true", "id": '
            + _dump(request["id"])
            + ', "service": "'
            + self.service_name
            + '", "values":{"sum":'
            + str(result)
            + "}}"
        )
        print(f"\t - Sending response: '{response}'")
        return response

    async def _handle_connection(self, connection, *_path) -> None:
        self._connections.add(connection)
        try:
            await connection.send(self.advertise_message())
            async for message in connection:
                try:
                    response = self.handle_message(message)
                except (ValueError, TypeError) as exc:
                    print(
                        f"WebSocket '{self.service_name}' Server could not process "
                        f"a message: {exc}",
                        file=sys.stderr,
                    )
                    continue
                if response is not None:
                    await connection.send(response)
        except ConnectionClosed:
            pass
        finally:
            self._connections.discard(connection)

    async def _close_connections(self) -> None:
        for connection in list(self._connections):
            try:
                await connection.close(1000, "shutdown")
            except Exception as exc:  # noqa: BLE001 - report and keep closing the rest
                print(
                    f"Exception occurred while trying to close connection {connection}: {exc}",
                    file=sys.stderr,
                )
        self._connections.clear()

    async def serve(self) -> None:
        """Accept connections until cancelled, then close every open connection."""
        async with websockets.serve(self._handle_connection, self.host, self.port) as server:
            sockets = list(server.sockets or ())
            if sockets:
                self.bound_port = sockets[0].getsockname()[1]
            self.ready.set()
            try:
                await asyncio.Future()
            finally:
                await self._close_connections()
                self.ready.clear()

    def run(self) -> None:
        """Serve in a fresh event loop until interrupted."""
        try:
            asyncio.run(self.serve())
        except KeyboardInterrupt:
            pass


def main(argv: list[str] | None = None) -> int:
    """Command entry point: parse options and run the server."""
    try:
        service_name, port = parse_args(argv)
    except HelpRequested as help_request:
        print(help_request.text)
        return 0
    except UsageError as error:
        print(error.usage)
        return 1

    AddTwoIntsServer(service_name, port).run()
    return 0