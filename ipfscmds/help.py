"""Help rendering for commands of a tree."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .commands.models import OptionType
from .constants import PROGRAM_NAME

if TYPE_CHECKING:
    from collections.abc import Sequence

    from .commands.models import Command, Option

__all__ = ["render_help", "usage_line"]

INDENT = "  "


def _option_flags(option: Option) -> str:
    flags = ", ".join(f"--{name}" if len(name) > 1 else f"-{name}" for name in sorted(option.names, key=len))
    return flags if option.type is OptionType.BOOL else f"{flags} {option.type}"


def usage_line(path: Sequence[str], command: Command, program: str = PROGRAM_NAME) -> str:
    """Return the generated synopsis of a command."""
    parts = [program, *path]
    if command.options:
        parts.append("[<options>]")
    for arg in command.arguments:
        name = f"<{arg.name}>..." if arg.variadic else f"<{arg.name}>"
        parts.append(name if arg.required else f"[{name}]")
    if command.children:
        parts.append("<command> ...")
    return " ".join(parts)


def _subcommands_section(path: Sequence[str], command: Command, program: str) -> list[str]:
    if command.helptext.subcommands:
        return [command.helptext.subcommands.strip("\n")]
    prefix = " ".join((program, *path))
    width = max(len(name) for name in command.children)
    return [f"{INDENT}{prefix} {name:{width}s} - {child.helptext.tagline}" for name, child in sorted(command.children.items())]


def render_help(path: Sequence[str], command: Command, short: bool = False, program: str = PROGRAM_NAME) -> str:
    """Render the help of the command at `path`.

    Args:
        path: path of the command in its tree
        command: the command itself
        short: render the ``-h`` version (no option or argument details)
        program: program name used in usage lines

    Returns:
        The help text, newline terminated
    """
    helptext = command.helptext
    name = " ".join((program, *path))
    synopsis = helptext.synopsis or usage_line(path, command, program)

    lines = ["USAGE", f"{INDENT}{name} - {helptext.tagline}", "", f"{INDENT}{synopsis}", ""]

    description = helptext.short_description if short else (helptext.long_description or helptext.short_description)
    if description:
        lines.extend(f"{INDENT}{line}" if line else "" for line in description.strip("\n").split("\n"))
        lines.append("")

    if not short:
        if command.arguments:
            lines.append("ARGUMENTS")
            lines.append("")
            for arg in command.arguments:
                lines.append(f"{INDENT}<{arg.name}>{'...' if arg.variadic else ''} - {arg.description}")
            lines.append("")
        if command.options:
            lines.append("OPTIONS")
            lines.append("")
            for option in command.options:
                default = f" Default: {str(option.default).lower()}." if option.default not in (None, "") else ""
                lines.append(f"{INDENT}{_option_flags(option):28s} - {option.description}{default}")
            lines.append("")

    if command.children:
        lines.append("SUBCOMMANDS")
        lines.extend(_subcommands_section(path, command, program))
        lines.append("")
        if not helptext.subcommands:
            lines.append(f"{INDENT}Use '{name} <subcmd> --help' for more information about each command.")
            lines.append("")

    if short:
        lines.append(f"Use '{name} --help' for more information about this command.")
        lines.append("")

    return "\n".join(lines)
