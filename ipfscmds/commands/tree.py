"""Tree operations: registration, traversal, lookup and help validation."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..models import DuplicateRegistration, MissingHelpMetadata, UnknownCommand
from .options import check_option_set

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator, Mapping, Sequence

    from .models import Command

__all__ = [
    "finalize_help",
    "format_path",
    "iter_commands",
    "merge_subtrees",
    "register_subtree",
    "resolve_path",
]


def format_path(path: Sequence[str]) -> str:
    """Return the user-facing form of a path ("" is the root)."""
    return " ".join(path) or "<root>"


def register_subtree(parent: Command, name: str, node: Command, parent_path: Sequence[str] = ()) -> None:
    """Attach `node` under `parent` as `name`.

    Raises:
        DuplicateRegistration: if `parent` already has a child called `name`
    """
    if name in parent.children:
        raise DuplicateRegistration(format_path(parent_path), name)
    parent.children[name] = node


def merge_subtrees(groups: Iterable[Mapping[str, Command]], parent_path: Sequence[str] = ()) -> dict[str, Command]:
    """Merge command maps into one, refusing names claimed by two groups.

    Raises:
        DuplicateRegistration: naming the first name claimed twice
    """
    merged: dict[str, Command] = {}
    for group in groups:
        for name, node in group.items():
            if name in merged:
                raise DuplicateRegistration(format_path(parent_path), name)
            merged[name] = node
    return merged


def iter_commands(root: Command) -> Iterator[tuple[tuple[str, ...], Command]]:
    """Yield (path, command) for every reachable command, depth first, sorted by name.

    The root itself is yielded first with an empty path.
    """
    stack: list[tuple[tuple[str, ...], Command]] = [((), root)]
    while stack:
        path, command = stack.pop()
        yield path, command
        for name in sorted(command.children, reverse=True):
            stack.append(((*path, name), command.children[name]))


def resolve_path(root: Command, path: Sequence[str]) -> Command:
    """Return the command at `path`.

    Raises:
        UnknownCommand: if a segment doesn't exist
    """
    command = root
    for depth, name in enumerate(path):
        try:
            command = command.children[name]
        except KeyError:
            raise UnknownCommand(f"unknown command {format_path(path[: depth + 1])!r}") from None
    return command


def finalize_help(root: Command) -> None:
    """Validate every reachable command once the tree is assembled.

    Each command, namespaces included, must carry a tagline so it can be
    listed, and its option set must not declare a name twice.

    Raises:
        MissingHelpMetadata: naming the first incomplete path
        DuplicateOption: naming the first option declared twice
    """
    for path, command in iter_commands(root):
        if not command.helptext.tagline.strip():
            raise MissingHelpMetadata(format_path(path))
        check_option_set(format_path(path), command.options)
