"""Shared constants for ipfscmds."""

import os
from pathlib import Path

__all__ = [
    "API_OPTION",
    "CONFIG_FILENAME",
    "DEFAULT_API_ADDRESS",
    "DEFAULT_REPO_PATH",
    "ENV_REPO_PATH",
    "PROGRAM_NAME",
    "REQUEST_TIMEOUT",
    "UPDATE_BINARY",
    "get_repo_path",
]

PROGRAM_NAME = "ipfs"

API_OPTION = "api"
DEFAULT_API_ADDRESS = "/ip4/127.0.0.1/tcp/5001"

ENV_REPO_PATH = "IPFS_PATH"
DEFAULT_REPO_PATH = Path("~/.ipfs")
CONFIG_FILENAME = "config.toml"

# Binary fetched separately and invoked by `ipfs update`
UPDATE_BINARY = "ipfs-update"

# Seconds a client waits for the daemon to answer
REQUEST_TIMEOUT = 120.0


def get_repo_path() -> Path:
    """Return the repository location, honoring $IPFS_PATH."""
    return Path(os.environ.get(ENV_REPO_PATH) or DEFAULT_REPO_PATH).expanduser()
