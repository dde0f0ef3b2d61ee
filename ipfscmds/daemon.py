"""Long-running daemon serving the command trees over sockets.

The API address serves the full tree. The gateway address, when
configured, serves the read-only tree unless the daemon runs with
``--writable``.

Protocol: one request per connection. The client sends one line holding the
shell-quoted command line and half-closes; the daemon answers ``OK`` followed
by the text output, or ``ERROR: <message>``.
"""

from __future__ import annotations

import asyncio
import shlex
from dataclasses import dataclass
from functools import partial
from pathlib import Path
from typing import TYPE_CHECKING

from .commands.marshal import MessageOutput, message_text_marshaler
from .commands.models import Command, Encoding, HelpText
from .commands.options import bool_option
from .constants import DEFAULT_API_ADDRESS
from .logging_setup import get_logger
from .models import CommandUnavailable, InvalidAddress, ResponsePrefix
from .trees import Mode

if TYPE_CHECKING:
    from .commands.models import Request
    from .dispatch import Dispatcher, Outcome

__all__ = ["Daemon", "Endpoint", "daemon_command", "format_response", "parse_multiaddr", "run_daemon"]


@dataclass(frozen=True)
class Endpoint:
    """A socket address parsed from a multiaddr."""

    host: str = ""
    port: int = 0
    path: str = ""  # set for unix sockets

    @property
    def is_unix(self) -> bool:
        """True for unix domain sockets."""
        return bool(self.path)


def parse_multiaddr(address: str) -> Endpoint:
    """Parse ``/ip4/<host>/tcp/<port>``, ``/ip6/<host>/tcp/<port>``, ``/dns/<name>/tcp/<port>`` or ``/unix/<path>``.

    Raises:
        InvalidAddress: for any other form
    """
    if address.startswith("/unix/"):
        path = address[len("/unix") :]
        if len(path) > 1:
            return Endpoint(path=path)
        raise InvalidAddress(f"invalid unix multiaddr {address!r}")

    parts = address.split("/")
    if len(parts) != 5 or parts[0] or parts[1] not in {"ip4", "ip6", "dns", "dns4", "dns6"} or parts[3] != "tcp":
        raise InvalidAddress(f"unsupported multiaddr {address!r}")
    try:
        port = int(parts[4])
    except ValueError:
        raise InvalidAddress(f"invalid port in multiaddr {address!r}") from None
    if not 0 <= port <= 65535:  # noqa: PLR2004
        raise InvalidAddress(f"invalid port in multiaddr {address!r}")
    return Endpoint(host=parts[2], port=port)


def format_response(outcome: Outcome) -> bytes:
    """Encode an outcome for the client."""
    if outcome.error:
        return f"{ResponsePrefix.ERROR}: {outcome.error}\n".encode()
    return f"{ResponsePrefix.OK}\n{outcome.text}".encode()


class Daemon:
    """Socket servers answering command lines through a dispatcher."""

    def __init__(self, dispatcher: Dispatcher) -> None:
        self.dispatcher = dispatcher
        self.servers: list[asyncio.Server] = []
        self.log = get_logger("daemon")
        self._stop = asyncio.Event()
        self._loop: asyncio.AbstractEventLoop | None = None

    async def listen(self, address: str, mode: Mode) -> asyncio.Server:
        """Serve the tree of `mode` on `address`."""
        endpoint = parse_multiaddr(address)
        handler = partial(self.read_command, mode)
        if endpoint.is_unix:
            Path(endpoint.path).parent.mkdir(parents=True, exist_ok=True)
            server = await asyncio.start_unix_server(handler, endpoint.path)
        else:
            server = await asyncio.start_server(handler, endpoint.host, endpoint.port)
        self.servers.append(server)
        self.log.info("%s tree listening on %s", mode.value, address)
        return server

    async def read_command(self, mode: Mode, reader: asyncio.StreamReader, writer: asyncio.StreamWriter) -> None:
        """Receive a command line and answer it."""
        data = (await reader.readline()).decode(errors="replace").strip()
        if not data:
            self.log.warning("Empty command received")
            writer.write(f"{ResponsePrefix.ERROR}: empty command\n".encode())
        else:
            try:
                argv = shlex.split(data)
            except ValueError as e:
                writer.write(f"{ResponsePrefix.ERROR}: {e}\n".encode())
            else:
                # handlers may block, keep the loop free for other requests
                outcome = await asyncio.to_thread(self.dispatcher.execute, argv, mode, {"shutdown": self.request_shutdown})
                writer.write(format_response(outcome))
        await writer.drain()
        writer.close()
        await writer.wait_closed()

    def request_shutdown(self) -> None:
        """Stop serving, callable from any thread."""
        if self._loop is None:
            self._stop.set()
        else:
            self._loop.call_soon_threadsafe(self._stop.set)

    async def serve(self) -> None:
        """Run until `request_shutdown` is called, then close every server."""
        self._loop = asyncio.get_running_loop()
        try:
            await self._stop.wait()
        finally:
            for server in self.servers:
                server.close()
            for server in self.servers:
                await server.wait_closed()
            self.log.info("daemon stopped")


async def run_daemon(dispatcher: Dispatcher, api: str, gateway: str = "", writable: bool = False) -> None:
    """Serve the full tree on `api` and, if set, the read-only tree on `gateway`."""
    daemon = Daemon(dispatcher)
    await daemon.listen(api, Mode.FULL)
    if gateway:
        await daemon.listen(gateway, Mode.FULL if writable else Mode.READONLY)
    print("Daemon is ready", flush=True)
    await daemon.serve()


def _daemon(request: Request) -> MessageOutput:
    dispatcher = request.context.get("dispatcher")
    config = request.context.get("config")
    if dispatcher is None or config is None:
        raise CommandUnavailable("the daemon can only be started from the command line")
    if "shutdown" in request.context:
        raise CommandUnavailable("the daemon is already running")
    addresses = config.section("addresses")
    try:
        asyncio.run(
            run_daemon(
                dispatcher,
                api=addresses.get_str("api", DEFAULT_API_ADDRESS),
                gateway=addresses.get_str("gateway"),
                writable=request.option("writable", False),
            )
        )
    except KeyboardInterrupt:
        return MessageOutput("Received interrupt signal, shutting down...\n")
    return MessageOutput("")


def daemon_command() -> Command:
    """Return the `daemon` command."""
    return Command(
        helptext=HelpText(
            tagline="Run a network-connected IPFS node.",
            short_description="'ipfs daemon' runs a persistent ipfs daemon that can serve commands over the network.",
            long_description="""'ipfs daemon' runs a persistent ipfs daemon that can serve commands over the network.

The daemon serves every command on the API address (Addresses.API in the
configuration). When a gateway address is configured (addresses.gateway), the
read-only subset of the commands is served there, or all of them with --writable.""",
        ),
        options=[bool_option("writable", "Enable writing objects on the gateway address.", default=False)],
        handler=_daemon,
        marshalers={Encoding.TEXT: message_text_marshaler},
        output_type=MessageOutput,
    )
