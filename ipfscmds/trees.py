"""Construction of the two command trees served by the process."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from .commands.catalog import build_catalog
from .commands.readonly import derive_readonly
from .commands.root import build_root

if TYPE_CHECKING:
    from collections.abc import Mapping

    from .commands.models import Command

__all__ = ["CommandTrees", "Mode", "init_trees"]


class Mode(Enum):
    """Which tree a request is served from."""

    FULL = "full"
    READONLY = "readonly"


@dataclass(frozen=True)
class CommandTrees:
    """The full tree and its read-only derivation, never mutated once built."""

    root: Command
    root_ro: Command

    def select(self, mode: Mode) -> Command:
        """Return the tree serving `mode`."""
        return self.root_ro if mode is Mode.READONLY else self.root


def init_trees(extra: Mapping[str, Command] | None = None) -> CommandTrees:
    """Build the full tree, then derive the read-only tree from it.

    Args:
        extra: commands registered by the entry point on top of the catalog

    Raises:
        StartupError: if either tree is inconsistent; nothing may be served then
    """
    subcommands, old_subcommands = build_catalog()
    root = build_root(subcommands, old_subcommands, extra)
    return CommandTrees(root=root, root_ro=derive_readonly(root))
