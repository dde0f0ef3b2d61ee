"""Client side: forward a command line to a running daemon."""

from __future__ import annotations

import asyncio
import shlex
from typing import TYPE_CHECKING

from .constants import REQUEST_TIMEOUT
from .daemon import parse_multiaddr
from .dispatch import Outcome
from .logging_setup import get_logger
from .models import DaemonError, ExitCode, ResponsePrefix

if TYPE_CHECKING:
    from collections.abc import Sequence

__all__ = ["parse_response", "run_client"]


def parse_response(data: str) -> Outcome:
    """Decode a daemon answer."""
    if data.startswith(f"{ResponsePrefix.ERROR}:"):
        # skip "ERROR: "
        return Outcome(ExitCode.FAILURE, error=data[len(ResponsePrefix.ERROR) + 2 :].strip())
    if data.startswith(f"{ResponsePrefix.OK}\n"):
        return Outcome(ExitCode.SUCCESS, data[len(ResponsePrefix.OK) + 1 :])
    return Outcome(ExitCode.FAILURE, error=f"unexpected daemon response: {data[:80]!r}")


async def run_client(argv: Sequence[str], api: str, timeout: float = REQUEST_TIMEOUT) -> Outcome:
    """Send `argv` to the daemon listening on `api` and return its answer.

    Raises:
        InvalidAddress: `api` is not a supported multiaddr
        DaemonError: the daemon can't be reached or doesn't answer in time
    """
    log = get_logger("client")
    endpoint = parse_multiaddr(api)
    try:
        if endpoint.is_unix:
            reader, writer = await asyncio.wait_for(asyncio.open_unix_connection(endpoint.path), timeout)
        else:
            reader, writer = await asyncio.wait_for(asyncio.open_connection(endpoint.host, endpoint.port), timeout)
    except (OSError, TimeoutError) as e:
        log.debug("Cannot connect to %s: %s", api, e)
        raise DaemonError(f"cannot connect to the api at {api}") from e

    try:
        writer.write((shlex.join(argv) + "\n").encode())
        writer.write_eof()
        await writer.drain()
        data = await asyncio.wait_for(reader.read(), timeout)
    except TimeoutError as e:
        raise DaemonError(f"no answer from the api at {api}") from e
    finally:
        writer.close()
        await writer.wait_closed()

    return parse_response(data.decode("utf-8", errors="replace"))
