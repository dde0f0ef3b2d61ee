"""Derivation of the read-only command tree.

The read-only tree is what the daemon exposes to less-trusted callers. It is
rebuilt from scratch out of the full tree: top-level commands are picked from
an allow-list and shared by reference, commands with unsafe descendants are
pruned, and mixed namespaces only keep their safe children. Nothing is ever
re-implemented, so every reachable leaf is the very object found at the same
path in the full tree.
"""

from __future__ import annotations

from dataclasses import replace
from typing import TYPE_CHECKING

from ..logging_setup import get_logger
from ..models import AllowListDrift
from .tree import finalize_help, format_path, register_subtree

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from .models import Command

__all__ = [
    "READONLY_COMMANDS",
    "READONLY_NAMESPACES",
    "READONLY_PRUNED",
    "derive_readonly",
    "partial_namespace",
    "pruned",
]

# Shared as is, with all their descendants
READONLY_COMMANDS: tuple[str, ...] = ("cat", "commands", "dns", "get", "ls", "resolve", "version")

# Kept without any descendant (`refs local` lists the whole blockstore)
READONLY_PRUNED: tuple[str, ...] = ("refs",)

# Namespaces reduced to their read-only operations
READONLY_NAMESPACES: dict[str, tuple[str, ...]] = {
    "block": ("get", "stat"),
    "dag": ("get",),
    "name": ("resolve",),
    "object": ("data", "get", "links", "stat"),
}


def _child(parent: Command, name: str, parent_path: tuple[str, ...] = ()) -> Command:
    try:
        return parent.children[name]
    except KeyError:
        raise AllowListDrift(format_path((*parent_path, name))) from None


def pruned(command: Command) -> Command:
    """Return a copy of `command` (same help, options and handler) without children.

    The option list and marshalers are copied too, so the copy can be
    changed without touching `command`.
    """
    return replace(command, children={}, options=list(command.options), marshalers=dict(command.marshalers))


def partial_namespace(command: Command, names: Iterable[str], path: tuple[str, ...] = ()) -> Command:
    """Return a copy of `command` keeping only the children called `names`.

    Children are shared by reference.

    Raises:
        AllowListDrift: if one of `names` isn't a child of `command`
    """
    namespace = pruned(command)
    for name in sorted(names):
        register_subtree(namespace, name, _child(command, name, path), path)
    return namespace


def derive_readonly(
    root: Command,
    commands: Iterable[str] = READONLY_COMMANDS,
    pruned_commands: Iterable[str] = READONLY_PRUNED,
    namespaces: Mapping[str, Iterable[str]] | None = None,
) -> Command:
    """Build the read-only tree out of the full tree `root`.

    The new root copies the header (help text, options) of `root` and owns
    its children dictionary, and so does every pruned or partial namespace.

    Raises:
        AllowListDrift: if the allow-lists name a command missing from `root`
        DuplicateRegistration: if a name is listed twice
    """
    if namespaces is None:
        namespaces = READONLY_NAMESPACES
    root_ro = pruned(root)

    for name in sorted(commands):
        register_subtree(root_ro, name, _child(root, name))
    for name in sorted(pruned_commands):
        register_subtree(root_ro, name, pruned(_child(root, name)))
    for name, children in sorted(namespaces.items()):
        register_subtree(root_ro, name, partial_namespace(_child(root, name), children, (name,)))

    finalize_help(root_ro)
    get_logger().debug("read-only tree derived with %d top-level commands", len(root_ro.children))
    return root_ro
