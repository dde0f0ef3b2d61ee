"""Shell completion scripts generated from a command tree.

The tree is mirrored into an argparse parser (one sub-parser per command)
which shtab turns into a completion script.
"""

from __future__ import annotations

import argparse
from typing import TYPE_CHECKING

import shtab

from .commands.models import OptionType
from .constants import PROGRAM_NAME
from .models import UsageError

if TYPE_CHECKING:
    from .commands.models import Command, Option

__all__ = ["SUPPORTED_SHELLS", "build_parser", "generate_completion"]

SUPPORTED_SHELLS = ("bash", "zsh", "tcsh")


def _flags(option: Option) -> list[str]:
    return [f"--{name}" if len(name) > 1 else f"-{name}" for name in option.names]


def _populate(parser: argparse.ArgumentParser, command: Command, depth: int) -> None:
    for option in command.options:
        if option.type is OptionType.BOOL:
            parser.add_argument(*_flags(option), help=option.description, action="store_true", dest=option.name)
        else:
            parser.add_argument(*_flags(option), help=option.description, metavar=option.name, dest=option.name)

    if command.children:
        subparsers = parser.add_subparsers(dest=f"command_{depth}", metavar="<command>")
        for name, child in sorted(command.children.items()):
            subparser = subparsers.add_parser(name, help=child.helptext.tagline, add_help=False, allow_abbrev=False)
            _populate(subparser, child, depth + 1)
    else:
        for arg in command.arguments:
            if arg.variadic:
                nargs = "+" if arg.required else "*"
            else:
                nargs = None if arg.required else "?"
            parser.add_argument(arg.name, help=arg.description, nargs=nargs)


def build_parser(root: Command, prog: str = PROGRAM_NAME) -> argparse.ArgumentParser:
    """Return an argparse parser mirroring every command reachable from `root`."""
    parser = argparse.ArgumentParser(prog=prog, description=root.helptext.tagline, add_help=False, allow_abbrev=False)
    _populate(parser, root, 0)
    return parser


def generate_completion(root: Command, shell: str, prog: str = PROGRAM_NAME) -> str:
    """Return the completion script of `root` for `shell`.

    Raises:
        UsageError: if the shell is not supported
    """
    if shell not in SUPPORTED_SHELLS:
        msg = f"unsupported shell {shell!r}, use one of: {', '.join(SUPPORTED_SHELLS)}"
        raise UsageError(msg)
    return shtab.complete(build_parser(root, prog), shell=shell)
