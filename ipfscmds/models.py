"""Errors, exit codes and protocol enums shared across ipfscmds."""

from enum import IntEnum, StrEnum

__all__ = [
    "AllowListDrift",
    "CommandUnavailable",
    "CommandsError",
    "DaemonError",
    "DuplicateOption",
    "DuplicateRegistration",
    "ExitCode",
    "InvalidAddress",
    "KindMismatch",
    "MissingHelpMetadata",
    "MissingOptionValue",
    "PayloadShapeMismatch",
    "ResponsePrefix",
    "StartupError",
    "UnknownCommand",
    "UnknownOption",
    "UsageError",
]


class CommandsError(Exception):
    """Base class for every error raised by the command core."""


# Startup-time errors: the trees must never be served after one of those


class StartupError(CommandsError):
    """Raised while assembling the command trees, aborts process start."""


class DuplicateRegistration(StartupError):
    """Two registrations claim the same name under the same parent."""

    def __init__(self, parent: str, name: str) -> None:
        super().__init__(f"command {name!r} is already registered under {parent!r}")
        self.parent = parent
        self.name = name


class MissingHelpMetadata(StartupError):
    """A reachable command has no tagline."""

    def __init__(self, path: str) -> None:
        super().__init__(f"command {path!r} has no help text")
        self.path = path


class AllowListDrift(StartupError):
    """The read-only allow-list names a command the full tree doesn't have."""

    def __init__(self, path: str) -> None:
        super().__init__(f"read-only command {path!r} does not exist in the full tree")
        self.path = path


class DuplicateOption(StartupError):
    """An option name or alias is declared twice in the same option set."""

    def __init__(self, path: str, name: str) -> None:
        super().__init__(f"option {name!r} is declared twice on {path!r}")
        self.path = path
        self.name = name


class KindMismatch(StartupError):
    """A command was registered through the map of the other representation."""


# Request-time errors: they fail one request, never the process


class PayloadShapeMismatch(CommandsError):
    """A handler result doesn't have the shape its text marshaler expects."""

    def __init__(self, expected: type | str, actual: object) -> None:
        self.expected = expected if isinstance(expected, str) else expected.__name__
        self.actual = type(actual).__name__
        super().__init__(f"expected type {self.expected}, got: {self.actual}")


class UsageError(CommandsError):
    """The command line doesn't match the command tree."""


class UnknownCommand(UsageError):
    """No command with that name under the resolved path."""


class UnknownOption(UsageError):
    """An option isn't declared on the resolved path."""


class MissingOptionValue(UsageError):
    """A string option was given without a value."""


class CommandUnavailable(CommandsError):
    """The node collaborator doesn't implement a command."""


class InvalidAddress(CommandsError):
    """An API or gateway multiaddr can't be used."""


class DaemonError(Exception):
    """Used for daemon/client errors which already triggered logging."""


class ExitCode(IntEnum):
    """Process exit codes."""

    SUCCESS = 0
    FAILURE = 1


class ResponsePrefix(StrEnum):
    """Response prefixes for daemon-client communication."""

    OK = "OK"
    ERROR = "ERROR"
