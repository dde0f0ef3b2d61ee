"""Configuration file loading.

The configuration is a TOML file stored in the repository
(``$IPFS_PATH/config.toml``) unless ``--config`` points elsewhere.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import TYPE_CHECKING

from .config import Configuration
from .constants import CONFIG_FILENAME, get_repo_path
from .models import DaemonError

if TYPE_CHECKING:
    import logging

__all__ = ["ConfigLoader"]


class ConfigLoader:
    """Locate and parse the configuration file."""

    def __init__(self, log: logging.Logger) -> None:
        self.log = log

    def default_path(self) -> Path:
        """Return the configuration file of the current repository."""
        return get_repo_path() / CONFIG_FILENAME

    def load(self, config_filename: str = "") -> Configuration:
        """Load the configuration.

        Args:
            config_filename: Explicit file (``--config``). When empty, the
                repository file is used and may be missing.

        Raises:
            DaemonError: If an explicit file is missing or any file has syntax errors.
        """
        if config_filename:
            fname = Path(os.path.expandvars(config_filename)).expanduser()
            if not fname.exists():
                self.log.critical("Config file not found: %s", fname)
                raise DaemonError(f"config file not found: {fname}")
        else:
            fname = self.default_path()
            if not fname.exists():
                self.log.info("No configuration at %s, using defaults", fname)
                return Configuration(logger=self.log)

        self.log.info("Loading %s", fname)
        with fname.open("rb") as f:
            try:
                return Configuration(tomllib.load(f), logger=self.log)
            except tomllib.TOMLDecodeError as e:
                self.log.critical("Problem reading %s: %s", fname, e)
                raise DaemonError(f"invalid configuration file {fname}: {e}") from e
