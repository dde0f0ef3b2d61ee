"""Option constructors and the global options of the root command."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..constants import API_OPTION, DEFAULT_API_ADDRESS
from ..models import DuplicateOption
from .models import Option, OptionType

if TYPE_CHECKING:
    from collections.abc import Iterable

__all__ = [
    "GLOBAL_OPTIONS",
    "bool_option",
    "check_option_set",
    "string_option",
]


def _make(option_type: OptionType, names_and_doc: tuple[str, ...], default: object) -> Option:
    *names, description = names_and_doc
    if not names:
        msg = "an option needs at least one name"
        raise ValueError(msg)
    return Option(names=tuple(names), type=option_type, description=description, default=default)


def string_option(*names_and_doc: str, default: str | None = None) -> Option:
    """Declare a string option.

    The last positional argument is the description, the others are the
    names: ``string_option("config", "c", "Path to the configuration file to use.")``
    """
    return _make(OptionType.STRING, names_and_doc, default)


def bool_option(*names_and_doc: str, default: bool | None = None) -> Option:
    """Declare a boolean option, see `string_option`."""
    return _make(OptionType.BOOL, names_and_doc, default)


def check_option_set(path: str, options: Iterable[Option]) -> None:
    """Ensure names and aliases are unique within one option set.

    Raises:
        DuplicateOption: naming the first name seen twice
    """
    seen: set[str] = set()
    for option in options:
        for name in option.names:
            if name in seen:
                raise DuplicateOption(path, name)
            seen.add(name)


GLOBAL_OPTIONS: list[Option] = [
    string_option("config", "c", "Path to the configuration file to use."),
    bool_option("debug", "D", "Operate in debug mode.", default=False),
    bool_option("help", "Show the full command help text.", default=False),
    bool_option("h", "Show a short version of the command help text.", default=False),
    bool_option("local", "L", "Run the command locally, instead of using the daemon.", default=False),
    string_option(API_OPTION, f"Use a specific API instance (defaults to {DEFAULT_API_ADDRESS})", default=DEFAULT_API_ADDRESS),
]
