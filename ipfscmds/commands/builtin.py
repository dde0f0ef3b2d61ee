"""Commands implemented by the command core itself.

Everything else in the tree forwards to the node collaborator (see
`catalog`); these few only need the tree, the process or `$PATH`.
"""

from __future__ import annotations

import io
import platform
import shutil
import subprocess
import sys
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from ..completions import SUPPORTED_SHELLS, generate_completion
from ..constants import PROGRAM_NAME, UPDATE_BINARY
from ..logging_setup import get_logger
from ..models import CommandUnavailable, PayloadShapeMismatch
from ..version import REPO_VERSION, VERSION
from .marshal import MessageOutput, message_text_marshaler, text_marshaler, unwrap_output
from .models import Argument, Command, CommandKind, Encoding, HelpText
from .options import bool_option
from .tree import iter_commands

if TYPE_CHECKING:
    from .models import Request, Response

__all__ = [
    "CommandListing",
    "VersionOutput",
    "commands_command",
    "external_binary",
    "shutdown_command",
    "version_command",
]


@dataclass(frozen=True)
class CommandListing:
    """Output of `ipfs commands`."""

    name: str
    paths: list[tuple[str, ...]]
    flags: dict[tuple[str, ...], list[str]] = field(default_factory=dict)


def _render_listing(listing: CommandListing) -> str:
    lines = []
    for path in listing.paths:
        lines.append(" ".join((listing.name, *path)))
        for flag in listing.flags.get(path, []):
            lines.append(f"{' '.join((listing.name, *path))} {flag}")
    return "\n".join(lines) + "\n"


def _list_commands(request: Request) -> CommandListing:
    show_flags = request.option("flags", False)
    paths = []
    flags: dict[tuple[str, ...], list[str]] = {}
    for path, command in iter_commands(request.root):
        paths.append(path)
        if show_flags and command.options:
            flags[path] = [" / ".join(f"--{n}" if len(n) > 1 else f"-{n}" for n in option.names) for option in command.options]
    return CommandListing(name=PROGRAM_NAME, paths=paths, flags=flags)


def _completion(request: Request) -> MessageOutput:
    return MessageOutput(generate_completion(request.root, request.arguments[0]))


def commands_command() -> Command:
    """Return the `commands` command.

    It lists the tree the request is served from, so a single instance can be
    shared by the full and the read-only trees.
    """
    completion = Command(
        helptext=HelpText(
            tagline="Generate shell completions.",
            short_description=f"Prints a completion script for one of: {', '.join(SUPPORTED_SHELLS)}.",
        ),
        arguments=[Argument("shell", description="Shell to generate the script for.")],
        handler=_completion,
        marshalers={Encoding.TEXT: message_text_marshaler},
        output_type=MessageOutput,
    )
    return Command(
        helptext=HelpText(tagline="List all available commands."),
        options=[bool_option("flags", "f", "Show command flags", default=False)],
        children={"completion": completion},
        handler=_list_commands,
        marshalers={Encoding.TEXT: text_marshaler(CommandListing, _render_listing)},
        output_type=CommandListing,
    )


@dataclass(frozen=True)
class VersionOutput:
    """Output of `ipfs version`."""

    version: str
    repo: str
    system: str
    runtime: str


def _version(request: Request) -> VersionOutput:
    return VersionOutput(
        version=VERSION,
        repo=str(REPO_VERSION),
        system=f"{platform.machine()}/{sys.platform}",
        runtime=platform.python_version(),
    )


def _version_text(response: Response) -> io.StringIO:
    value = unwrap_output(response.output)
    if type(value) is not VersionOutput:
        raise PayloadShapeMismatch(VersionOutput, value)
    request = response.request
    if request is not None and request.option("all", False):
        return io.StringIO(
            f"{PROGRAM_NAME} version: {value.version}\n"
            f"Repo version: {value.repo}\n"
            f"System version: {value.system}\n"
            f"Python version: {value.runtime}\n"
        )
    if request is not None and request.option("repo", False):
        return io.StringIO(value.repo + "\n")
    if request is not None and request.option("number", False):
        return io.StringIO(value.version + "\n")
    return io.StringIO(f"{PROGRAM_NAME} version {value.version}\n")


def version_command() -> Command:
    """Return the `version` command."""
    return Command(
        helptext=HelpText(
            tagline="Show ipfs version information.",
            short_description="Returns the current version of ipfs and exits.",
        ),
        options=[
            bool_option("number", "n", "Only show the version number.", default=False),
            bool_option("repo", "Show repo version.", default=False),
            bool_option("all", "Show all version information", default=False),
        ],
        handler=lambda request, response: response.set_output(_version(request)),
        kind=CommandKind.LEGACY,
        marshalers={Encoding.TEXT: _version_text},
        output_type=VersionOutput,
    )


def _shutdown(request: Request, response: Response) -> None:
    stop = request.context.get("shutdown")
    if stop is None:
        raise CommandUnavailable("daemon not running")
    stop()
    response.set_output(MessageOutput("daemon is shutting down\n"))


def shutdown_command() -> Command:
    """Return the `shutdown` command, only usable against a running daemon."""
    return Command(
        helptext=HelpText(tagline="Shut down the ipfs daemon"),
        handler=_shutdown,
        kind=CommandKind.LEGACY,
        marshalers={Encoding.TEXT: message_text_marshaler},
        output_type=MessageOutput,
    )


def external_binary(binary: str = UPDATE_BINARY, tagline: str = "Download and apply go-ipfs updates") -> Command:
    """Return a leaf running `binary` from $PATH with the remaining arguments."""

    def run(request: Request, response: Response) -> None:
        path = shutil.which(binary)
        if path is None:
            response.set_error(f"{binary} is not installed, download it and add it to your $PATH")
            return
        get_logger().debug("running %s %s", path, request.arguments)
        result = subprocess.run([path, *request.arguments], capture_output=True, text=True, check=False)  # noqa: S603
        if result.returncode:
            response.set_error(result.stderr.strip() or f"{binary} exited with status {result.returncode}")
            return
        response.set_output(MessageOutput(result.stdout))

    return Command(
        helptext=HelpText(tagline=tagline, short_description=f"Forwards its arguments to the {binary} binary."),
        arguments=[Argument("args", required=False, variadic=True, description="Arguments for subcommand.")],
        handler=run,
        kind=CommandKind.LEGACY,
        marshalers={Encoding.TEXT: message_text_marshaler},
        output_type=MessageOutput,
    )
