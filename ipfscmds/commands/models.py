"""Data models for the command tree."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum, StrEnum
from typing import Any

__all__ = [
    "Argument",
    "Command",
    "CommandKind",
    "Encoding",
    "HelpText",
    "Option",
    "OptionType",
    "Request",
    "Response",
]


class CommandKind(Enum):
    """The two historical command representations.

    Both expose the same capability surface; they only differ in how the
    handler delivers its output (see `Command.call`).
    """

    MODERN = "modern"  # handler(request) -> output
    LEGACY = "legacy"  # handler(request, response) -> None


class OptionType(StrEnum):
    """Value type of an option."""

    STRING = "string"
    BOOL = "bool"


class Encoding(StrEnum):
    """Output encodings a command can be marshaled to."""

    TEXT = "text"


@dataclass(frozen=True)
class HelpText:
    """Help metadata of a command."""

    tagline: str = ""  # one line, used in listings
    synopsis: str = ""
    short_description: str = ""
    long_description: str = ""
    subcommands: str = ""  # hand-written grouped listing (root only)


@dataclass(frozen=True)
class Option:
    """A command line option.

    `names` holds the long name first, then the optional one-char alias.
    """

    names: tuple[str, ...]
    type: OptionType
    description: str
    default: Any = None

    @property
    def name(self) -> str:
        """Canonical option name."""
        return self.names[0]


@dataclass(frozen=True)
class Argument:
    """A positional argument, as documented in help and completions."""

    name: str
    required: bool = True
    variadic: bool = False
    description: str = ""


@dataclass
class Request:
    """One command invocation, as seen by a handler."""

    path: tuple[str, ...]
    arguments: list[str]
    options: dict[str, Any]
    root: Command  # tree the request is served from
    node: Any = None  # collaborator implementing the subcommands
    context: dict[str, Any] = field(default_factory=dict)  # set by the entry point (trees, shutdown...)

    def option(self, name: str, default: Any = None) -> Any:  # noqa: ANN401
        """Return the resolved value of option `name`."""
        value = self.options.get(name)
        return default if value is None else value


@dataclass
class Response:
    """Result of a handler, created per request and discarded after rendering."""

    output: Any = None
    error: str | None = None
    request: Request | None = field(default=None, repr=False)

    def set_output(self, value: Any) -> None:  # noqa: ANN401
        """Set the handler's output (a value or an iterator streaming values)."""
        self.output = value

    def set_error(self, message: str) -> None:
        """Mark the command as failed."""
        self.error = message


Handler = Callable[..., Any]
Marshaler = Callable[[Response], Any]


@dataclass(eq=False)
class Command:  # pylint: disable=too-many-instance-attributes
    """A node of the command tree.

    A command without handler is a pure namespace. The name of a command is
    the key it is registered under in its parent's `children`; commands are
    compared by identity so the same leaf can be shared between trees.
    """

    helptext: HelpText = field(default_factory=HelpText)
    options: list[Option] = field(default_factory=list)
    arguments: list[Argument] = field(default_factory=list)
    children: dict[str, Command] = field(default_factory=dict)
    handler: Handler | None = None
    kind: CommandKind = CommandKind.MODERN
    marshalers: dict[Encoding, Marshaler] = field(default_factory=dict)
    output_type: type | None = None  # shape of the handler's output

    @property
    def is_namespace(self) -> bool:
        """True if the command only groups children."""
        return self.handler is None

    def call(self, request: Request) -> Response:
        """Run the handler and return its response, whatever the representation."""
        response = Response(request=request)
        if self.handler is None:
            return response
        if self.kind is CommandKind.LEGACY:
            self.handler(request, response)
        else:
            response.set_output(self.handler(request))
        return response
