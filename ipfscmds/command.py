"""ipfs command line entry point (client & daemon)."""

from __future__ import annotations

import asyncio
import importlib
import sys
from typing import TYPE_CHECKING, Any

from .client import run_client
from .commands.parsing import parse_command_line
from .config_loader import ConfigLoader
from .constants import API_OPTION, DEFAULT_API_ADDRESS
from .daemon import daemon_command
from .dispatch import Dispatcher, Outcome
from .logging_setup import enable_debug, error_text, get_logger, init_logger
from .models import CommandsError, DaemonError, ExitCode, StartupError
from .repo import init_command
from .trees import init_trees

if TYPE_CHECKING:
    import logging

    from .config import Configuration

__all__ = ["LOCAL_COMMANDS", "load_node", "main", "run_command"]

# Never forwarded to a daemon
LOCAL_COMMANDS = frozenset({"daemon", "init", "update", "commands"})


def load_node(config: Configuration, log: logging.Logger) -> Any:  # noqa: ANN401
    """Instantiate the node collaborator named by ``[node] module``.

    The module must expose a ``Node`` class taking the configuration.
    Without one, only the commands implemented locally can run.

    Raises:
        DaemonError: if the module can't be imported or has no ``Node``
    """
    modname = config.section("node").get_str("module")
    if not modname:
        log.debug("No node module configured")
        return None
    try:
        module = importlib.import_module(modname)
    except ImportError as e:
        log.critical("Failed to import node module %s: %s", modname, e)
        raise DaemonError(f"cannot load node module {modname!r}") from e
    try:
        node_class = module.Node
    except AttributeError as e:
        raise DaemonError(f"node module {modname!r} has no Node class") from e
    log.debug("Loaded node from %s", modname)
    return node_class(config)


def _print_outcome(outcome: Outcome) -> None:
    if outcome.text:
        sys.stdout.write(outcome.text)
        sys.stdout.flush()
    if outcome.error:
        print(error_text(outcome.error, sys.stderr), file=sys.stderr)


def run_command(argv: list[str], log: logging.Logger) -> ExitCode:
    """Build the trees and run `argv`, locally or through the daemon."""
    try:
        trees = init_trees(extra={"daemon": daemon_command(), "init": init_command()})
    except StartupError:
        log.critical("Inconsistent command tree, refusing to start:", exc_info=True)
        return ExitCode.FAILURE

    try:
        parsed = parse_command_line(trees.root, argv)
        if parsed.options.get("debug"):
            enable_debug()
        config = ConfigLoader(log).load(parsed.options.get("config", ""))
    except (CommandsError, DaemonError) as e:
        _print_outcome(Outcome(ExitCode.FAILURE, error=str(e)))
        return ExitCode.FAILURE

    options = parsed.options
    local = (
        options.get("local")
        or options.get("help")
        or options.get("h")
        or not parsed.path
        or parsed.path[0] in LOCAL_COMMANDS
    )

    outcome = None
    if not local:
        api = options.get(API_OPTION, DEFAULT_API_ADDRESS)
        if api == DEFAULT_API_ADDRESS:
            api = config.section("addresses").get_str("api", api)
        try:
            outcome = asyncio.run(run_client(argv, api))
        except DaemonError as e:
            log.debug("%s, running the command locally", e)
        except CommandsError as e:
            outcome = Outcome(ExitCode.FAILURE, error=str(e))

    if outcome is None:
        try:
            node = load_node(config, log)
        except DaemonError as e:
            _print_outcome(Outcome(ExitCode.FAILURE, error=str(e)))
            return ExitCode.FAILURE
        outcome = Dispatcher(trees, node=node, context={"config": config}).execute(argv)

    _print_outcome(outcome)
    return outcome.exit_code


def main() -> None:
    """Run the command."""
    init_logger()
    log = get_logger("startup")
    try:
        code = run_command(sys.argv[1:], log)
    except KeyboardInterrupt:
        code = ExitCode.FAILURE
    sys.exit(code)


if __name__ == "__main__":
    main()
