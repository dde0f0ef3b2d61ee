"""ipfscmds - the command root of an IPFS-style CLI and daemon.

Builds one authoritative tree of nested commands and derives a
capability-restricted, read-only tree from it for less-trusted exposure.
The daemon serves both trees over asyncio sockets.
"""
