"""Assembly of the full command tree."""

from __future__ import annotations

from dataclasses import replace
from typing import TYPE_CHECKING

from ..constants import ENV_REPO_PATH
from ..logging_setup import get_logger
from ..models import KindMismatch
from .models import Command, CommandKind, HelpText
from .options import GLOBAL_OPTIONS
from .tree import finalize_help, register_subtree

if TYPE_CHECKING:
    from collections.abc import Mapping

    from .models import Option

__all__ = ["ROOT_HELP", "build_root", "define_root"]

ROOT_HELP = HelpText(
    tagline="Global p2p merkle-dag filesystem.",
    synopsis="ipfs [--config=<config> | -c] [--debug=<debug> | -D] [--help=<help>] [-h=<h>] "
    "[--local=<local> | -L] [--api=<api>] <command> ...",
    subcommands=f"""
BASIC COMMANDS
  init          Initialize ipfs local configuration
  add <path>    Add a file to IPFS
  cat <ref>     Show IPFS object data
  get <ref>     Download IPFS objects
  ls <ref>      List links from an object
  refs <ref>    List hashes of links from an object

DATA STRUCTURE COMMANDS
  block         Interact with raw blocks in the datastore
  object        Interact with raw dag nodes
  files         Interact with objects as if they were a unix filesystem
  dag           Interact with IPLD documents (experimental)

ADVANCED COMMANDS
  daemon        Start a long-running daemon process
  mount         Mount an IPFS read-only mountpoint
  resolve       Resolve any type of name
  name          Publish and resolve IPNS names
  key           Create and list IPNS name keypairs
  dns           Resolve DNS links
  pin           Pin objects to local storage
  repo          Manipulate the IPFS repository
  stats         Various operational stats
  ptp           Libp2p stream mounting
  filestore     Manage the filestore (experimental)

NETWORK COMMANDS
  id            Show info about IPFS peers
  bootstrap     Add or remove bootstrap peers
  swarm         Manage connections to the p2p network
  dht           Query the DHT for values or peers
  ping          Measure the latency of a connection
  diag          Print diagnostics

TOOL COMMANDS
  config        Manage configuration
  version       Show ipfs version information
  update        Download and apply go-ipfs updates
  commands      List all available commands

Use 'ipfs <command> --help' to learn more about each command.

ipfs uses a repository in the local file system. By default, the repo is located
at ~/.ipfs. To change the repo location, set the ${ENV_REPO_PATH} environment variable:

  export {ENV_REPO_PATH}=/path/to/ipfsrepo

EXIT STATUS

The CLI will exit with one of the following values:

0     Successful execution.
1     Failed executions.
""",
)


def define_root(helptext: HelpText = ROOT_HELP, options: list[Option] | None = None) -> Command:
    """Create the root command, without children."""
    return Command(helptext=helptext, options=list(GLOBAL_OPTIONS if options is None else options))


def _register_all(root: Command, registrations: Mapping[str, Command], kind: CommandKind | None) -> None:
    for name, command in registrations.items():
        if kind is not None and command.kind is not kind:
            msg = f"command {name!r} is {command.kind.value}, registered as {kind.value}"
            raise KindMismatch(msg)
        register_subtree(root, name, command)


def build_root(
    subcommands: Mapping[str, Command],
    old_subcommands: Mapping[str, Command],
    extra: Mapping[str, Command] | None = None,
    root: Command | None = None,
) -> Command:
    """Assemble the full tree from both command representations.

    Args:
        subcommands: top-level commands in the modern representation
        old_subcommands: top-level commands in the legacy representation
        extra: commands registered by the entry point (e.g. daemon, init)
        root: header to use, `define_root()` if not set

    Raises:
        DuplicateRegistration: if a name is claimed twice, in any order
        KindMismatch: if a command sits in the map of the other representation
        MissingHelpMetadata: if a reachable command has no tagline
    """
    root = define_root() if root is None else replace(root, children={})
    _register_all(root, subcommands, CommandKind.MODERN)
    _register_all(root, old_subcommands, CommandKind.LEGACY)
    _register_all(root, extra or {}, None)
    finalize_help(root)
    get_logger().debug("command tree assembled with %d top-level commands", len(root.children))
    return root
