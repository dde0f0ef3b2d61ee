"""Request dispatch: resolve a command line through a tree and run it."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from .commands.models import Encoding, Request
from .commands.parsing import check_arguments, parse_command_line
from .help import render_help
from .logging_setup import get_logger
from .models import CommandsError, ExitCode
from .trees import Mode

if TYPE_CHECKING:
    from collections.abc import Sequence

    from .commands.models import Command, Response
    from .trees import CommandTrees

__all__ = ["Dispatcher", "Outcome", "render_output"]


@dataclass
class Outcome:
    """What a command invocation prints and how the process exits."""

    exit_code: ExitCode
    text: str = ""
    error: str = ""


def _default_text(output: Any) -> str:  # noqa: ANN401
    if output is None:
        return ""
    if isinstance(output, bytes):
        return output.decode("utf-8", errors="replace")
    if isinstance(output, str):
        return output
    if isinstance(output, Iterator):
        return "".join(f"{_default_text(item).rstrip(chr(10))}\n" for item in output)
    return f"{output}\n"


def render_output(command: Command, response: Response) -> str:
    """Render a response as text, through the command's text marshaler if it has one.

    Raises:
        PayloadShapeMismatch: if the marshaler doesn't get the shape it expects
    """
    marshaler = command.marshalers.get(Encoding.TEXT)
    if marshaler is None:
        return _default_text(response.output)
    return marshaler(response).read()


class Dispatcher:
    """Serve command lines from the full or the read-only tree.

    A dispatcher never mutates the trees and keeps no per-request state, so
    it can be shared by concurrent requests.
    """

    def __init__(self, trees: CommandTrees, node: Any = None, context: dict[str, Any] | None = None) -> None:  # noqa: ANN401
        self.trees = trees
        self.node = node
        self.context = dict(context or {})
        self.context.setdefault("dispatcher", self)
        self.log = get_logger("dispatch")

    def execute(self, argv: Sequence[str], mode: Mode = Mode.FULL, context: dict[str, Any] | None = None) -> Outcome:
        """Run one command line.

        Any failure of the command (usage, missing node support, handler
        error, unexpected output shape) only fails this invocation.

        Args:
            argv: command line, without the program name
            mode: which tree serves the request
            context: values made available to handlers on top of the dispatcher's
        """
        root = self.trees.select(mode)
        path: tuple[str, ...] = ()
        try:
            parsed = parse_command_line(root, argv)
            path = parsed.path
            command = parsed.command

            if parsed.options.get("help") or parsed.options.get("h"):
                return Outcome(ExitCode.SUCCESS, render_help(path, command, short=not parsed.options.get("help")))
            if command.is_namespace and not parsed.arguments:
                return Outcome(ExitCode.FAILURE, render_help(path, command, short=True))
            check_arguments(parsed)

            request = Request(
                path=path,
                arguments=parsed.arguments,
                options=parsed.options,
                root=root,
                node=self.node,
                context={**self.context, **(context or {})},
            )
            self.log.debug("[%s] running %s %s", mode.value, " ".join(path), parsed.arguments)
            response = command.call(request)
            if response.error:
                return Outcome(ExitCode.FAILURE, error=response.error)
            return Outcome(ExitCode.SUCCESS, render_output(command, response))
        except CommandsError as e:
            self.log.info("%s: %s", " ".join(path) or "ipfs", e)
            return Outcome(ExitCode.FAILURE, error=str(e))
        except Exception as e:  # pylint: disable=W0718
            self.log.exception("%s failed:", " ".join(path))
            return Outcome(ExitCode.FAILURE, error=str(e) or type(e).__name__)
