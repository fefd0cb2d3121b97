"""Command-line options shared by the AddTwoInts and HelloWorld examples."""

from __future__ import annotations

import enum
import getopt
import sys
from dataclasses import dataclass, field

__all__ = [
    "DEFAULT_COUNT",
    "DEFAULT_SLEEP_MS",
    "ExampleOptions",
    "HelpRequested",
    "OperationMode",
    "UsageError",
    "add_two_ints_usage",
    "hello_world_usage",
    "parse_add_two_ints_args",
    "parse_hello_world_args",
]

DEFAULT_COUNT = 10
DEFAULT_SLEEP_MS = 100


class OperationMode(enum.Enum):
    """Role an example process plays."""

    INVALID = "invalid"
    SERVER = "server"
    CLIENT = "client"
    PUBLISH = "publisher"
    SUBSCRIBE = "subscriber"


class UsageError(Exception):
    """The command line cannot be used; the message is the usage line."""

    def __init__(self, usage: str):
        super().__init__(usage)
        self.usage = usage


class HelpRequested(Exception):
    """Help was asked for; ``text`` holds the full help output."""

    def __init__(self, text: str):
        super().__init__(text)
        self.text = text


@dataclass
class ExampleOptions:
    """Parsed options of an example program."""

    mode: OperationMode = OperationMode.INVALID
    domain_id: int = 0
    count: int = DEFAULT_COUNT
    name: str = ""
    sleep_ms: int = DEFAULT_SLEEP_MS


@dataclass(frozen=True)
class _ExampleSpec:
    program: str
    modes: dict[str, OperationMode]
    name_option: str
    default_name: str
    mode_error: str
    count_error: str
    help_lines: tuple[str, ...] = field(default_factory=tuple)

    def usage(self) -> str:
        mode_names = "/".join(self.modes)
        return (
            f"Usage: {self.program} "
            f"-m/--mode <{mode_names}> "
            "-d/--domain <UNSIGNED_INTEGER> "
            "-c/--count <UNSIGNED_INTEGER> "
            f"-n/--{self.name_option} <STRING>"
        )

    def help_text(self) -> str:
        return "\n".join((self.usage(), *self.help_lines))


_ADD_TWO_INTS = _ExampleSpec(
    program="DDSAddTwoInts",
    modes={"server": OperationMode.SERVER, "client": OperationMode.CLIENT},
    name_option="service_name",
    default_name="AddTwoIntsService",
    mode_error="Invalid mode: please choose between 'server' or 'client'",
    count_error="Service client request count parameter must be a positive value",
    help_lines=(
        "\t-m/--mode\tChoose between 'server' or 'client'",
        "\t-d/--domain\t(optional) Set a custom Domain ID (default: 0)",
        "\t-c/--count\t(optional) Make a specific number of service client requests (default: 10)",
        "\t-n/--service_name\t(optional) Request/reply to/from a specific service "
        "(default: AddTwoIntsService)",
    ),
)

_HELLO_WORLD = _ExampleSpec(
    program="DDSHelloWorld",
    modes={"publisher": OperationMode.PUBLISH, "subscriber": OperationMode.SUBSCRIBE},
    name_option="topic_name",
    default_name="HelloWorldTopic",
    mode_error="Invalid mode: please choose between 'publisher' or 'subscriber'",
    count_error="Topic publish count parameter must be a positive value",
    help_lines=(
        "\t-m/--mode\tChoose between 'publisher' or 'subscriber'",
        "\t-d/--domain\t(optional) Set a custom Domain ID (default: 0)",
        "\t-c/--count\t(optional) Publish a specific number of messages (default: 10)",
        "\t-n/--topic_name\t(optional) Publish or subscribe to a specific topic "
        "(default: HelloWorldTopic)",
    ),
)


def _atoi(text: str) -> int:
    """Leading integer of ``text``, or 0 when there is none."""
    stripped = text.lstrip()
    sign = 1
    if stripped[:1] in ("+", "-"):
        sign = -1 if stripped[0] == "-" else 1
        stripped = stripped[1:]
    digits = ""
    for char in stripped:
        if not char.isdigit():
            break
        digits += char
    return sign * int(digits) if digits else 0


def _parse(spec: _ExampleSpec, argv: list[str] | None) -> ExampleOptions:
    args = sys.argv[1:] if argv is None else list(argv)
    if not args:
        raise UsageError(spec.usage())

    try:
        parsed, _ = getopt.gnu_getopt(
            args,
            "m:d:c:n:h",
            ["mode=", "domain=", "count=", f"{spec.name_option}=", "help"],
        )
    except getopt.GetoptError as exc:
        raise UsageError(spec.usage()) from exc

    options = ExampleOptions(name=spec.default_name)
    for opt, value in parsed:
        if opt in ("-m", "--mode"):
            if value in spec.modes:
                options.mode = spec.modes[value]
            if options.mode is OperationMode.INVALID:
                raise ValueError(spec.mode_error)
        elif opt in ("-d", "--domain"):
            raw_domain = _atoi(value)
            if raw_domain < 0:
                raise ValueError(
                    "Error while parsing provided arguments: Domain ID must be >= 0"
                )
            options.domain_id = raw_domain
        elif opt in ("-c", "--count"):
            raw_count = _atoi(value)
            if raw_count <= 0:
                raise ValueError(spec.count_error)
            options.count = raw_count
        elif opt in ("-n", f"--{spec.name_option}"):
            options.name = value
        elif opt in ("-h", "--help"):
            raise HelpRequested(spec.help_text())

    if options.mode is OperationMode.INVALID:
        raise UsageError(spec.usage())
    return options


def add_two_ints_usage() -> str:
    """Usage line of the AddTwoInts service example."""
    return _ADD_TWO_INTS.usage()


def hello_world_usage() -> str:
    """Usage line of the HelloWorld example."""
    return _HELLO_WORLD.usage()


def parse_add_two_ints_args(argv: list[str] | None = None) -> ExampleOptions:
    """Parse AddTwoInts options; ``argv`` excludes the program name.

    Raises UsageError, HelpRequested, or ValueError for bad option values.
    """
    return _parse(_ADD_TWO_INTS, argv)


def parse_hello_world_args(argv: list[str] | None = None) -> ExampleOptions:
    """Parse HelloWorld options; ``argv`` excludes the program name.

    Raises UsageError, HelpRequested, or ValueError for bad option values.
    """
    return _parse(_HELLO_WORLD, argv)