"""Repository initialization (`ipfs init`)."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

from .commands.marshal import MessageOutput, message_text_marshaler
from .commands.models import Command, Encoding, HelpText
from .commands.options import string_option
from .constants import CONFIG_FILENAME, DEFAULT_API_ADDRESS, ENV_REPO_PATH, get_repo_path
from .logging_setup import get_logger
from .models import CommandsError

if TYPE_CHECKING:
    from pathlib import Path

    from .commands.models import Request

__all__ = ["DEFAULT_GATEWAY_ADDRESS", "init_command", "init_repo"]

DEFAULT_GATEWAY_ADDRESS = "/ip4/127.0.0.1/tcp/8080"


def init_repo(path: Path, api: str = DEFAULT_API_ADDRESS, gateway: str = DEFAULT_GATEWAY_ADDRESS) -> Path:
    """Create the repository at `path` with a default configuration.

    Returns:
        The configuration file written

    Raises:
        CommandsError: if the repository already has a configuration
    """
    config_file = path / CONFIG_FILENAME
    if config_file.exists():
        raise CommandsError(f"ipfs configuration file already exists! Reinitializing would overwrite your keys: {config_file}")
    path.mkdir(parents=True, exist_ok=True)
    # JSON strings are valid TOML basic strings
    lines = ["[addresses]", f"api = {json.dumps(api)}"]
    if gateway:
        lines.append(f"gateway = {json.dumps(gateway)}")
    config_file.write_text("\n".join(lines) + "\n", encoding="utf-8")
    get_logger("repo").info("initialized repository at %s", path)
    return config_file


def _init(request: Request) -> MessageOutput:
    path = get_repo_path()
    init_repo(path, gateway=request.option("gateway", DEFAULT_GATEWAY_ADDRESS))
    return MessageOutput(f"initializing IPFS node at {path}\n")


def init_command() -> Command:
    """Return the `init` command."""
    return Command(
        helptext=HelpText(
            tagline="Initializes ipfs config file.",
            short_description="Initializes ipfs configuration files and generates a new keypair.",
            long_description=f"""Initializes ipfs configuration files and generates a new keypair.

ipfs uses a repository in the local file system. By default, the repo is
located at ~/.ipfs. To change the repo location, set the ${ENV_REPO_PATH}
environment variable:

    export {ENV_REPO_PATH}=/path/to/ipfsrepo""",
        ),
        options=[string_option("gateway", "g", "Gateway address written to the configuration.", default=DEFAULT_GATEWAY_ADDRESS)],
        handler=_init,
        marshalers={Encoding.TEXT: message_text_marshaler},
        output_type=MessageOutput,
    )
