"""Definitions of the subcommands implemented by the node.

Each command carries its help text, options and arguments; its handler
forwards the request to the node collaborator (``block stat`` calls
``node.block_stat(request)``). The two maps at the bottom register them under
the root, one per command representation.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from ..models import CommandUnavailable
from .builtin import commands_command, external_binary, shutdown_command, version_command
from .marshal import MessageOutput, message_text_marshaler, text_marshaler
from .models import Argument, Command, CommandKind, Encoding, HelpText
from .options import bool_option, string_option
from .tree import merge_subtrees

if TYPE_CHECKING:
    from .models import Option, Request, Response

__all__ = ["ResolvedPath", "build_catalog", "forward"]

LEGACY = CommandKind.LEGACY
MODERN = CommandKind.MODERN


@dataclass(frozen=True)
class ResolvedPath:
    """Output of the name resolution commands."""

    path: str


resolved_path_marshaler = text_marshaler(ResolvedPath, lambda out: out.path + "\n")


def _node_method(request: Request, method: str) -> Callable[[Request], Any]:
    if request.node is None:
        raise CommandUnavailable(f"'{' '.join(request.path)}' needs a node, is the repository initialized?")
    fn = getattr(request.node, method.replace(".", "_").replace("-", "_"), None)
    if fn is None:
        raise CommandUnavailable(f"'{' '.join(request.path)}' is not supported by this node")
    return fn


def forward(method: str, kind: CommandKind = MODERN) -> Callable[..., Any]:
    """Return a handler calling `method` on the request's node.

    Args:
        method: dotted method name, "block.stat" calls ``node.block_stat``
        kind: representation of the command the handler belongs to
    """
    if kind is LEGACY:

        def legacy_handler(request: Request, response: Response) -> None:
            response.set_output(_node_method(request, method)(request))

        return legacy_handler

    def handler(request: Request) -> Any:  # noqa: ANN401
        return _node_method(request, method)(request)

    return handler


def leaf(  # noqa: PLR0913
    method: str,
    tagline: str,
    *,
    kind: CommandKind = MODERN,
    arguments: list[Argument] | None = None,
    options: list[Option] | None = None,
    description: str = "",
    children: dict[str, Command] | None = None,
    output_type: type | None = None,
) -> Command:
    """Declare a command forwarded to the node."""
    marshalers = {}
    if output_type is MessageOutput:
        marshalers[Encoding.TEXT] = message_text_marshaler
    elif output_type is ResolvedPath:
        marshalers[Encoding.TEXT] = resolved_path_marshaler
    return Command(
        helptext=HelpText(tagline=tagline, short_description=description),
        options=options or [],
        arguments=arguments or [],
        children=children or {},
        handler=forward(method, kind),
        kind=kind,
        marshalers=marshalers,
        output_type=output_type,
    )


def namespace(tagline: str, children: dict[str, Command], *, kind: CommandKind = MODERN, description: str = "", options: list[Option] | None = None) -> Command:
    """Declare a command only grouping `children`."""
    return Command(
        helptext=HelpText(tagline=tagline, short_description=description),
        options=options or [],
        children=children,
        kind=kind,
    )


def _arg(name: str, description: str, required: bool = True, variadic: bool = False) -> Argument:
    return Argument(name, required=required, variadic=variadic, description=description)


IPFS_PATH_ARGS = [_arg("ipfs-path", "The path to the IPFS object(s) to be outputted.", variadic=True)]
KEY_ARG = _arg("key", "The base58 multihash of an existing block.")
OBJECT_KEY_ARG = _arg("key", "Key of the object to retrieve, in base58-encoded multihash format.")
PEER_ARG = _arg("peer-id", "ID of peer to be pinged.", variadic=True)
RECURSIVE = bool_option("recursive", "r", "Resolve until the result is not a DNS link.", default=False)


def _modern_commands() -> dict[str, Command]:
    block = namespace(
        "Interact with raw IPFS blocks.",
        {
            "stat": leaf("block.stat", "Print information of a raw IPFS block.", arguments=[KEY_ARG]),
            "get": leaf("block.get", "Get a raw IPFS block.", arguments=[KEY_ARG]),
            "put": leaf(
                "block.put",
                "Store input as an IPFS block.",
                arguments=[_arg("data", "The data to be stored as an IPFS block.")],
                options=[
                    string_option("format", "f", "cid format for blocks to be created with.", default="v0"),
                    string_option("mhtype", "multihash hash function", default="sha2-256"),
                    string_option("mhlen", "multihash hash length", default="-1"),
                ],
            ),
            "rm": leaf(
                "block.rm",
                "Remove IPFS block(s).",
                arguments=[_arg("hash", "Bash58 encoded multihash of block(s) to remove.", variadic=True)],
                options=[
                    bool_option("force", "f", "Ignore nonexistent blocks.", default=False),
                    bool_option("quiet", "q", "Write minimal output.", default=False),
                ],
            ),
        },
        description="'ipfs block' is a plumbing command used to manipulate raw IPFS blocks.",
    )
    filestore = namespace(
        "Interact with filestore objects.",
        {
            "ls": leaf("filestore.ls", "List objects in filestore.", arguments=[_arg("obj", "Cid of objects to list.", required=False, variadic=True)]),
            "verify": leaf("filestore.verify", "Verify objects in filestore.", arguments=[_arg("obj", "Cid of objects to verify.", required=False, variadic=True)]),
            "dups": leaf("filestore.dups", "List blocks that are both in the filestore and standard block storage."),
        },
    )
    return {
        "add": leaf(
            "add",
            "Add a file or directory to ipfs.",
            arguments=[_arg("path", "The path to a file to be added to ipfs.", variadic=True)],
            options=[
                bool_option("recursive", "r", "Add directory paths recursively.", default=False),
                bool_option("quiet", "q", "Write minimal output."),
                bool_option("silent", "Write no output."),
                bool_option("progress", "p", "Stream progress data."),
                bool_option("trickle", "t", "Use trickle-dag format for dag generation."),
                bool_option("only-hash", "n", "Only chunk and hash - do not write to disk."),
                bool_option("wrap-with-directory", "w", "Wrap files with a directory object."),
                bool_option("hidden", "H", "Include files that are hidden. Only takes effect on recursive add."),
                string_option("chunker", "s", "Chunking algorithm to use."),
                bool_option("pin", "Pin this object when adding.", default=True),
                bool_option("raw-leaves", "Use raw blocks for leaf nodes. (experimental)"),
                bool_option("nocopy", "Add the file using filestore. (experimental)"),
                bool_option("fscache", "Check the filestore for pre-existing blocks. (experimental)"),
            ],
            description="Adds contents of <path> to ipfs. Use -r to add directories.",
        ),
        "block": block,
        "cat": leaf("cat", "Show IPFS object data.", arguments=IPFS_PATH_ARGS),
        "commands": commands_command(),
        "get": leaf(
            "get",
            "Download IPFS objects.",
            arguments=[_arg("ipfs-path", "The path to the IPFS object(s) to be outputted.")],
            options=[
                string_option("output", "o", "The path where the output should be stored."),
                bool_option("archive", "a", "Output a TAR archive.", default=False),
                bool_option("compress", "C", "Compress the output with GZIP compression.", default=False),
                string_option("compression-level", "l", "The level of compression (1-9).", default="-1"),
            ],
        ),
        "filestore": filestore,
    }


def _legacy_network_commands() -> dict[str, Command]:
    dht = namespace(
        "Issue commands directly through the DHT.",
        {
            "query": leaf("dht.query", "Find the closest Peer IDs to a given Peer ID by querying the DHT.", kind=LEGACY, arguments=[_arg("peerID", "The peerID to run the query against.")]),
            "findprovs": leaf("dht.findprovs", "Find peers in the DHT that can provide a specific value, given a key.", kind=LEGACY, arguments=[_arg("key", "The key to find providers for.")]),
            "findpeer": leaf("dht.findpeer", "Query the DHT for all of the multiaddresses associated with a Peer ID.", kind=LEGACY, arguments=[_arg("peerID", "The ID of the peer to search for.")]),
            "get": leaf("dht.get", "Given a key, query the DHT for its best value.", kind=LEGACY, arguments=[_arg("key", "The key to find a value for.")]),
            "put": leaf("dht.put", "Write a key/value pair to the DHT.", kind=LEGACY, arguments=[_arg("key", "The key to store the value at."), _arg("value", "The value to store.")]),
            "provide": leaf("dht.provide", "Announce to the network that you are providing given values.", kind=LEGACY, arguments=[_arg("key", "The key[s] to send provide records for.", variadic=True)]),
        },
        kind=LEGACY,
        options=[bool_option("verbose", "v", "Print extra information.", default=False)],
    )
    swarm = namespace(
        "Interact with the swarm.",
        {
            "peers": leaf("swarm.peers", "List peers with open connections.", kind=LEGACY, options=[bool_option("verbose", "v", "display all extra information"), bool_option("latency", "Also list information about latency to each peer")]),
            "addrs": leaf(
                "swarm.addrs",
                "List known addresses. Useful for debugging.",
                kind=LEGACY,
                children={"local": leaf("swarm.addrs.local", "List local addresses.", kind=LEGACY, options=[bool_option("id", "Show peer ID in addresses.", default=False)])},
            ),
            "connect": leaf("swarm.connect", "Open connection to a given address.", kind=LEGACY, arguments=[_arg("address", "Address of peer to connect to.", variadic=True)]),
            "disconnect": leaf("swarm.disconnect", "Close connection to a given address.", kind=LEGACY, arguments=[_arg("address", "Address of peer to disconnect from.", variadic=True)]),
            "filters": leaf(
                "swarm.filters",
                "Manipulate address filters.",
                kind=LEGACY,
                children={
                    "add": leaf("swarm.filters.add", "Add an address filter.", kind=LEGACY, arguments=[_arg("address", "Multiaddr to filter.", variadic=True)]),
                    "rm": leaf("swarm.filters.rm", "Remove an address filter.", kind=LEGACY, arguments=[_arg("address", "Multiaddr filter to remove.", variadic=True)]),
                },
            ),
        },
        kind=LEGACY,
        description="'ipfs swarm' is a tool to manipulate the network swarm.",
    )
    bootstrap = namespace(
        "Show or edit the list of bootstrap peers.",
        {
            "list": leaf("bootstrap.list", "Show peers in the bootstrap list.", kind=LEGACY),
            "add": leaf(
                "bootstrap.add",
                "Add peers to the bootstrap list.",
                kind=LEGACY,
                arguments=[_arg("peer", "A peer to add to the bootstrap list.", required=False, variadic=True)],
                options=[bool_option("default", "Add default bootstrap nodes. (Deprecated, use 'default' subcommand instead)")],
            ),
            "rm": leaf(
                "bootstrap.rm",
                "Remove peers from the bootstrap list.",
                kind=LEGACY,
                arguments=[_arg("peer", "A peer to remove from the bootstrap list.", required=False, variadic=True)],
                options=[bool_option("all", "Remove all bootstrap peers. (Deprecated, use 'all' subcommand)")],
            ),
        },
        kind=LEGACY,
    )
    bitswap = namespace(
        "Interact with the bitswap agent.",
        {
            "wantlist": leaf("bitswap.wantlist", "Show blocks currently on the wantlist.", kind=LEGACY, options=[string_option("peer", "p", "Specify which peer to show wantlist for.")]),
            "stat": leaf("bitswap.stat", "Show some diagnostic information on the bitswap agent.", kind=LEGACY),
            "unwant": leaf("bitswap.unwant", "Remove a given block from your wantlist.", kind=LEGACY, arguments=[_arg("key", "Key(s) to remove from your wantlist.", variadic=True)]),
            "ledger": leaf("bitswap.ledger", "Show the current ledger for a peer.", kind=LEGACY, arguments=[_arg("peer", "The PeerID (B58) of the ledger to inspect.")]),
            "reprovide": leaf("bitswap.reprovide", "Trigger reprovider.", kind=LEGACY),
        },
        kind=LEGACY,
    )
    return {
        "bootstrap": bootstrap,
        "bitswap": bitswap,
        "dht": dht,
        "diag": namespace(
            "Generate diagnostic reports.",
            {
                "sys": leaf("diag.sys", "Print system diagnostic information.", kind=LEGACY),
                "cmds": leaf(
                    "diag.cmds",
                    "List commands run on this IPFS node.",
                    kind=LEGACY,
                    options=[bool_option("verbose", "v", "Print extra information.")],
                    children={"clear": leaf("diag.cmds.clear", "Clear inactive requests from the log.", kind=LEGACY)},
                ),
            },
            kind=LEGACY,
        ),
        "id": leaf(
            "id",
            "Show ipfs node id info.",
            kind=LEGACY,
            arguments=[_arg("peerid", "Peer.ID of node to look up.", required=False)],
            options=[string_option("format", "f", "Optional output format.")],
        ),
        "ping": leaf(
            "ping",
            "Send echo request packets to IPFS hosts.",
            kind=LEGACY,
            arguments=[PEER_ARG],
            options=[string_option("count", "n", "Number of ping messages to send.", default="10")],
            output_type=MessageOutput,
        ),
        "ptp": namespace(
            "Libp2p stream mounting.",
            {
                "listener": namespace(
                    "P2P listener management.",
                    {
                        "ls": leaf("ptp.listener.ls", "List active p2p listeners.", kind=LEGACY, options=[bool_option("headers", "v", "Print table headers (HandlerID, Protocol, Local, Remote).")]),
                        "open": leaf("ptp.listener.open", "Forward p2p connections to a network multiaddr.", kind=LEGACY, arguments=[_arg("Protocol", "Protocol identifier."), _arg("Address", "Request handling application address.")]),
                        "close": leaf("ptp.listener.close", "Close active p2p listener.", kind=LEGACY, arguments=[_arg("Protocol", "P2P listener protocol", required=False)], options=[bool_option("all", "a", "Close all listeners.")]),
                    },
                    kind=LEGACY,
                ),
                "stream": namespace(
                    "P2P stream management.",
                    {
                        "ls": leaf("ptp.stream.ls", "List active p2p streams.", kind=LEGACY, options=[bool_option("headers", "v", "Print table headers (HagndlerID, Protocol, Local, Remote).")]),
                        "dial": leaf("ptp.stream.dial", "Dial to a p2p listener.", kind=LEGACY, arguments=[_arg("Peer", "Remote peer to connect to"), _arg("Protocol", "Protocol identifier."), _arg("BindAddress", "Address to listen for connection/s (default: /ip4/127.0.0.1/tcp/0).", required=False)]),
                        "close": leaf("ptp.stream.close", "Close active p2p stream.", kind=LEGACY, arguments=[_arg("HandlerID", "Stream HandlerID", required=False)], options=[bool_option("all", "a", "Close all streams.")]),
                    },
                    kind=LEGACY,
                ),
            },
            kind=LEGACY,
        ),
        "pubsub": namespace(
            "An experimental publish-subscribe system on ipfs.",
            {
                "pub": leaf("pubsub.pub", "Publish a message to a given pubsub topic.", kind=LEGACY, arguments=[_arg("topic", "Topic to publish to."), _arg("data", "Payload of message to publish.", required=False, variadic=True)]),
                "sub": leaf("pubsub.sub", "Subscribe to messages on a given topic.", kind=LEGACY, arguments=[_arg("topic", "String name of topic to subscribe to.")], options=[bool_option("discover", "try to discover other peers subscribed to the same topic")]),
                "ls": leaf("pubsub.ls", "List subscribed topics by name.", kind=LEGACY),
                "peers": leaf("pubsub.peers", "List peers we are currently pubsubbing with.", kind=LEGACY, arguments=[_arg("topic", "topic to list connected peers of", required=False)]),
            },
            kind=LEGACY,
        ),
        "swarm": swarm,
    }


def _legacy_data_commands() -> dict[str, Command]:
    object_patch = namespace(
        "Create a new merkledag object based on an existing one.",
        {
            "add-link": leaf("object.patch.add-link", "Add a link to a given object.", kind=LEGACY, arguments=[_arg("root", "The hash of the node to modify."), _arg("name", "Name of link to create."), _arg("ref", "IPFS object to add link to.")], options=[bool_option("create", "p", "Create intermediary nodes.", default=False)]),
            "rm-link": leaf("object.patch.rm-link", "Remove a link from an object.", kind=LEGACY, arguments=[_arg("root", "The hash of the node to modify."), _arg("link", "Name of the link to remove.")]),
            "append-data": leaf("object.patch.append-data", "Append data to the data segment of a dag node.", kind=LEGACY, arguments=[_arg("root", "The hash of the node to modify."), _arg("data", "Data to append.")]),
            "set-data": leaf("object.patch.set-data", "Set the data field of an IPFS object.", kind=LEGACY, arguments=[_arg("root", "The hash of the node to modify."), _arg("data", "The data to set the object to.")]),
        },
        kind=LEGACY,
    )
    object_ns = namespace(
        "Interact with IPFS objects.",
        {
            "data": leaf("object.data", "Output the raw bytes of an IPFS object.", kind=LEGACY, arguments=[OBJECT_KEY_ARG]),
            "diff": leaf("object.diff", "Display the diff between two ipfs objects.", kind=LEGACY, arguments=[_arg("obj_a", "Object to diff against."), _arg("obj_b", "Object to diff.")], options=[bool_option("verbose", "v", "Print extra information.")]),
            "get": leaf("object.get", "Get and serialize the DAG node named by <key>.", kind=LEGACY, arguments=[OBJECT_KEY_ARG]),
            "links": leaf("object.links", "Output the links pointed to by the specified object.", kind=LEGACY, arguments=[OBJECT_KEY_ARG], options=[bool_option("headers", "v", "Print table headers (Hash, Size, Name).", default=False)]),
            "new": leaf("object.new", "Create a new object from an ipfs template.", kind=LEGACY, arguments=[_arg("template", "Template to use. Optional.", required=False)]),
            "patch": object_patch,
            "put": leaf("object.put", "Store input as a DAG object, print its key.", kind=LEGACY, arguments=[_arg("data", "Data to be stored as a DAG object.")], options=[string_option("inputenc", "Encoding type of input data. One of: {\"protobuf\", \"json\"}.", default="json"), string_option("datafieldenc", "Encoding type of the data field, either \"text\" or \"base64\".", default="text"), bool_option("pin", "Pin this object when adding.")]),
            "stat": leaf("object.stat", "Get stats for the DAG node named by <key>.", kind=LEGACY, arguments=[OBJECT_KEY_ARG]),
        },
        kind=LEGACY,
        description="'ipfs object' is a plumbing command used to manipulate DAG objects directly.",
    )
    dag = namespace(
        "Interact with ipld dag objects.",
        {
            "put": leaf("dag.put", "Add a dag node to ipfs.", kind=LEGACY, arguments=[_arg("object-data", "The object to put", variadic=True)], options=[string_option("format", "f", "Format that the object will be added as.", default="cbor"), string_option("input-enc", "Format that the input object will be.", default="json"), bool_option("pin", "Pin this object when adding.")]),
            "get": leaf("dag.get", "Get a dag node from ipfs.", kind=LEGACY, arguments=[_arg("ref", "The object to get")]),
            "resolve": leaf("dag.resolve", "Resolve ipld block", kind=LEGACY, arguments=[_arg("ref", "The path to resolve")]),
        },
        kind=LEGACY,
        description="'ipfs dag' is used for creating and manipulating dag objects.",
    )
    files_ns = namespace(
        "Interact with unixfs files.",
        {
            "read": leaf("files.read", "Read a file in a given mfs.", kind=LEGACY, arguments=[_arg("path", "Path to file to be read.")], options=[string_option("offset", "o", "Byte offset to begin reading from."), string_option("count", "n", "Maximum number of bytes to read.")]),
            "write": leaf("files.write", "Write to a mutable file in a given filesystem.", kind=LEGACY, arguments=[_arg("path", "Path to write to."), _arg("data", "Data to write.")], options=[string_option("offset", "o", "Byte offset to begin writing at."), bool_option("create", "e", "Create the file if it does not exist."), bool_option("truncate", "t", "Truncate the file to size zero before writing."), string_option("count", "n", "Maximum number of bytes to read.")]),
            "mv": leaf("files.mv", "Move files.", kind=LEGACY, arguments=[_arg("source", "Source file to move."), _arg("dest", "Destination path for file to be moved to.")]),
            "cp": leaf("files.cp", "Copy files into mfs.", kind=LEGACY, arguments=[_arg("source", "Source object to copy."), _arg("dest", "Destination to copy object to.")]),
            "ls": leaf("files.ls", "List directories in the local mutable namespace.", kind=LEGACY, arguments=[_arg("path", "Path to show listing for. Defaults to '/'.", required=False)], options=[bool_option("l", "Use long listing format.")]),
            "mkdir": leaf("files.mkdir", "Make directories.", kind=LEGACY, arguments=[_arg("path", "Path to dir to make.")], options=[bool_option("parents", "p", "No error if existing, make parent directories as needed.")]),
            "stat": leaf("files.stat", "Display file status.", kind=LEGACY, arguments=[_arg("path", "Path to node to stat.")], options=[string_option("format", "Print statistics in given format.")]),
            "rm": leaf("files.rm", "Remove a file.", kind=LEGACY, arguments=[_arg("path", "File to remove.", variadic=True)], options=[bool_option("recursive", "r", "Recursively remove directories.")]),
            "flush": leaf("files.flush", "Flush a given path's data to disk.", kind=LEGACY, arguments=[_arg("path", "Path to flush. Default: '/'.", required=False)]),
        },
        kind=LEGACY,
        options=[bool_option("f", "flush", "Flush target and ancestors after write.", default=True)],
    )
    return {
        "dag": dag,
        "files": files_ns,
        # kept apart from "files": a different command group with its own history
        "file": namespace(
            "Interact with IPFS objects representing Unix filesystems.",
            {"ls": leaf("file.ls", "List directory contents for Unix filesystem objects.", kind=LEGACY, arguments=[_arg("ipfs-path", "The path to the IPFS object(s) to list links from.", variadic=True)])},
            kind=LEGACY,
        ),
        "ls": leaf(
            "ls",
            "List directory contents for Unix filesystem objects.",
            kind=LEGACY,
            arguments=[_arg("ipfs-path", "The path to the IPFS object(s) to list links from.", variadic=True)],
            options=[
                bool_option("headers", "v", "Print table headers (Hash, Size, Name).", default=False),
                bool_option("resolve-type", "Resolve linked objects to find out their types.", default=True),
            ],
        ),
        "object": object_ns,
        "refs": leaf(
            "refs",
            "List links (references) from an object.",
            kind=LEGACY,
            arguments=[_arg("ipfs-path", "Path to the object(s) to list refs from.", variadic=True)],
            options=[
                string_option("format", "Emit edges with given format. Available tokens: <src> <dst> <linkname>.", default="<dst>"),
                bool_option("edges", "e", "Emit edge format: `<from> -> <to>`.", default=False),
                bool_option("unique", "u", "Omit duplicate refs from output.", default=False),
                bool_option("recursive", "r", "Recursively list links of child nodes.", default=False),
            ],
            children={"local": leaf("refs.local", "List all local references.", kind=LEGACY)},
        ),
        "tar": namespace(
            "Utility functions for tar files in ipfs.",
            {
                "add": leaf("tar.add", "Import a tar file into ipfs.", kind=LEGACY, arguments=[_arg("file", "Tar file to add.")]),
                "cat": leaf("tar.cat", "Export a tar file from IPFS.", kind=LEGACY, arguments=[_arg("path", "ipfs path of archive to export.")]),
            },
            kind=LEGACY,
        ),
    }


def _legacy_system_commands() -> dict[str, Command]:
    name = namespace(
        "Publish and resolve IPNS names.",
        {
            "publish": leaf(
                "name.publish",
                "Publish IPNS names.",
                kind=LEGACY,
                arguments=[_arg("ipfs-path", "ipfs path of the object to be published.")],
                options=[
                    bool_option("resolve", "Resolve given path before publishing.", default=True),
                    string_option("lifetime", "Time duration that the record will be valid for.", default="24h"),
                    string_option("ttl", "Time duration this record should be cached for (caution: experimental)."),
                    string_option("key", "k", "Name of the key to be used, as listed by 'ipfs key list'.", default="self"),
                ],
            ),
            "resolve": leaf(
                "name.resolve",
                "Resolve IPNS names.",
                kind=LEGACY,
                arguments=[_arg("name", "The IPNS name to resolve. Defaults to your node's peerID.", required=False)],
                options=[RECURSIVE, bool_option("nocache", "n", "Do not use cached entries.", default=False)],
                output_type=ResolvedPath,
            ),
        },
        kind=LEGACY,
        description="IPNS is a PKI namespace, where names are the hashes of public keys.",
    )
    return {
        "config": leaf(
            "config",
            "Get and set ipfs config values.",
            kind=LEGACY,
            arguments=[_arg("key", "The key of the config entry (e.g. \"Addresses.API\")."), _arg("value", "The value to set the config entry to.", required=False)],
            options=[bool_option("bool", "Set a boolean value.", default=False), bool_option("json", "Parse stringified JSON.", default=False)],
            children={
                "show": leaf("config.show", "Output config file contents.", kind=LEGACY),
                "edit": leaf("config.edit", "Open the config file for editing in $EDITOR.", kind=LEGACY),
                "replace": leaf("config.replace", "Replace the config with <file>.", kind=LEGACY, arguments=[_arg("file", "The file to use as the new config.")]),
            },
        ),
        "dns": leaf("dns", "Resolve DNS links.", kind=LEGACY, arguments=[_arg("domain-name", "The domain-name name to resolve.")], options=[RECURSIVE], output_type=ResolvedPath),
        "key": namespace(
            "Create and list IPNS name keypairs",
            {
                "gen": leaf("key.gen", "Create a new keypair", kind=LEGACY, arguments=[_arg("name", "name of key to create")], options=[string_option("type", "t", "type of the key to create [rsa, ed25519]"), string_option("size", "s", "size of the key to generate")]),
                "list": leaf("key.list", "List all local keypairs", kind=LEGACY, options=[bool_option("l", "Show extra information about keys.")]),
            },
            kind=LEGACY,
        ),
        "log": namespace(
            "Interact with the daemon log output.",
            {
                "level": leaf("log.level", "Change the logging level.", kind=LEGACY, arguments=[_arg("subsystem", "The subsystem logging identifier. Use 'all' for all subsystems."), _arg("level", "The log level, with 'debug' the most verbose and 'critical' the least verbose.")], output_type=MessageOutput),
                "ls": leaf("log.ls", "List the logging subsystems.", kind=LEGACY),
                "tail": leaf("log.tail", "Read the event log.", kind=LEGACY),
            },
            kind=LEGACY,
        ),
        "mount": leaf(
            "mount",
            "Mounts IPFS to the filesystem (read-only).",
            kind=LEGACY,
            options=[string_option("ipfs-path", "f", "The path where IPFS should be mounted."), string_option("ipns-path", "n", "The path where IPNS should be mounted.")],
        ),
        "name": name,
        "pin": namespace(
            "Pin (and unpin) objects to local storage.",
            {
                "add": leaf("pin.add", "Pin objects to local storage.", kind=LEGACY, arguments=[_arg("ipfs-path", "Path to object(s) to be pinned.", variadic=True)], options=[bool_option("recursive", "r", "Recursively pin the object linked to by the specified object(s).", default=True), bool_option("progress", "Show progress")]),
                "rm": leaf("pin.rm", "Removes the pinned object from local storage.", kind=LEGACY, arguments=[_arg("ipfs-path", "Path to object(s) to be unpinned.", variadic=True)], options=[bool_option("recursive", "r", "Recursively unpin the object linked to by the specified object(s).", default=True)]),
                "ls": leaf("pin.ls", "List objects pinned to local storage.", kind=LEGACY, arguments=[_arg("ipfs-path", "Path to object(s) to be listed.", required=False, variadic=True)], options=[string_option("type", "t", "The type of pinned keys to list. Can be \"direct\", \"indirect\", \"recursive\", or \"all\".", default="all"), bool_option("quiet", "q", "Write just hashes of objects.")]),
            },
            kind=LEGACY,
        ),
        "repo": namespace(
            "Manipulate the IPFS repo.",
            {
                "gc": leaf("repo.gc", "Perform a garbage collection sweep on the repo.", kind=LEGACY, options=[bool_option("quiet", "q", "Write minimal output.", default=False)]),
                "stat": leaf("repo.stat", "Get stats for the currently used repo.", kind=LEGACY, options=[bool_option("human", "Output RepoSize in MiB.", default=False)]),
                "fsck": leaf("repo.fsck", "Remove repo lockfiles.", kind=LEGACY),
                "verify": leaf("repo.verify", "Verify all blocks in repo are not corrupted.", kind=LEGACY),
                "version": leaf("repo.version", "Show the repo version.", kind=LEGACY, options=[bool_option("quiet", "q", "Write minimal output.")]),
            },
            kind=LEGACY,
            description="'ipfs repo' is a plumbing command used to manipulate the repo.",
        ),
        "resolve": leaf(
            "resolve",
            "Resolve the value of names to IPFS.",
            kind=LEGACY,
            arguments=[_arg("name", "The name to resolve.")],
            options=[bool_option("recursive", "r", "Resolve until the result is an IPFS name.", default=False)],
            output_type=ResolvedPath,
        ),
        "shutdown": shutdown_command(),
        "stats": namespace(
            "Query ipfs statistics.",
            {
                "bitswap": leaf("stats.bitswap", "Show some diagnostic information on the bitswap agent.", kind=LEGACY),
                "bw": leaf("stats.bw", "Print ipfs bandwidth information.", kind=LEGACY, options=[string_option("peer", "p", "Specify a peer to print bandwidth for."), string_option("proto", "t", "Specify a protocol to print bandwidth for."), bool_option("poll", "Print bandwidth at an interval.", default=False), string_option("interval", "i", "Time interval to wait between updating output, if 'poll' is true.", default="1s")]),
                "repo": leaf("stats.repo", "Get stats for the currently used repo.", kind=LEGACY, options=[bool_option("human", "Output RepoSize in MiB.", default=False)]),
            },
            kind=LEGACY,
        ),
        "tour": leaf(
            "tour",
            "Provide an introduction to IPFS.",
            kind=LEGACY,
            arguments=[_arg("id", "The id of the topic you would like to tour.", required=False)],
            children={
                "list": leaf("tour.list", "Show a list of IPFS Tour topics.", kind=LEGACY),
                "next": leaf("tour.next", "Show the next IPFS Tour topic.", kind=LEGACY),
                "restart": leaf("tour.restart", "Restart the IPFS Tour.", kind=LEGACY),
            },
        ),
        "update": external_binary(),
        "version": version_command(),
    }


def build_catalog() -> tuple[dict[str, Command], dict[str, Command]]:
    """Return fresh (modern, legacy) top-level command maps.

    Raises:
        DuplicateRegistration: if two legacy groups claim the same name
    """
    legacy = merge_subtrees((_legacy_network_commands(), _legacy_data_commands(), _legacy_system_commands()))
    return _modern_commands(), legacy
