"""Resolution of a command line against a command tree."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from ..models import MissingOptionValue, UnknownCommand, UnknownOption, UsageError
from .models import OptionType
from .tree import format_path

if TYPE_CHECKING:
    from collections.abc import Sequence

    from .models import Command, Option

__all__ = ["ParsedCommand", "check_arguments", "parse_command_line"]

_BOOL_VALUES = {"true": True, "false": False}


@dataclass
class ParsedCommand:
    """A command line resolved against a tree."""

    path: tuple[str, ...]
    arguments: list[str]
    options: dict[str, Any]
    command: Command


def _lookup(chain: Sequence[Command], name: str) -> Option | None:
    # innermost command first, so subcommands may reuse a global alias
    for command in reversed(chain):
        for option in command.options:
            if name in option.names:
                return option
    return None


def _parse_bool(option: Option, value: str) -> bool:
    try:
        return _BOOL_VALUES[value.lower()]
    except KeyError:
        raise UsageError(f"option --{option.name}: expected true or false, got {value!r}") from None


def parse_command_line(root: Command, argv: Sequence[str]) -> ParsedCommand:
    """Split `argv` into options, a command path and arguments.

    Tokens naming a child of the current command extend the path until the
    first argument; options may appear anywhere and are looked up along the
    path. Defaults are filled in for every option of the path.

    Raises:
        UnknownOption: an option isn't declared on the path
        MissingOptionValue: a string option ends the command line
        UsageError: a boolean option has a value other than true/false
    """
    chain = [root]
    path: list[str] = []
    arguments: list[str] = []
    options: dict[str, Any] = {}
    options_done = False

    tokens = iter(argv)
    for token in tokens:
        if not options_done and token == "--":
            options_done = True
            continue
        if not options_done and token.startswith("-") and token != "-":
            name, sep, value = token.lstrip("-").partition("=")
            option = _lookup(chain, name)
            if option is None:
                raise UnknownOption(f"unknown option {token!r} for {format_path(path)!r}")
            if option.type is OptionType.BOOL:
                options[option.name] = _parse_bool(option, value) if sep else True
            elif sep:
                options[option.name] = value
            else:
                try:
                    options[option.name] = next(tokens)
                except StopIteration:
                    raise MissingOptionValue(f"missing value for option --{option.name}") from None
            continue
        if not arguments and token in chain[-1].children:
            chain.append(chain[-1].children[token])
            path.append(token)
            continue
        arguments.append(token)

    for command in chain:
        for option in command.options:
            if option.name not in options and option.default is not None:
                options[option.name] = option.default

    return ParsedCommand(path=tuple(path), arguments=arguments, options=options, command=chain[-1])


def check_arguments(parsed: ParsedCommand) -> None:
    """Validate the positional arguments against the command's declaration.

    Raises:
        UnknownCommand: arguments given to a namespace
        UsageError: a required argument is missing or too many were given
    """
    command = parsed.command
    if command.is_namespace:
        if parsed.arguments:
            raise UnknownCommand(f"unknown command {format_path((*parsed.path, parsed.arguments[0]))!r}")
        return

    required = [arg for arg in command.arguments if arg.required]
    if len(parsed.arguments) < len(required):
        missing = required[len(parsed.arguments)]
        raise UsageError(f"argument {missing.name!r} is required for {format_path(parsed.path)!r}")
    variadic = any(arg.variadic for arg in command.arguments)
    if not variadic and len(parsed.arguments) > len(command.arguments):
        raise UsageError(f"expected {len(command.arguments)} argument(s) for {format_path(parsed.path)!r}, got {len(parsed.arguments)}")
