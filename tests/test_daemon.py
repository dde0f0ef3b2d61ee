"""Tests for the daemon, its wire protocol and the client."""

import asyncio

import pytest

from ipfscmds.client import parse_response, run_client
from ipfscmds.daemon import Daemon, Endpoint, format_response, parse_multiaddr
from ipfscmds.dispatch import Dispatcher, Outcome
from ipfscmds.models import DaemonError, ExitCode, InvalidAddress
from ipfscmds.trees import Mode

from .testtools import MockReader, MockWriter


class TestParseMultiaddr:
    """Tests for parse_multiaddr."""

    def test_tcp(self):
        assert parse_multiaddr("/ip4/127.0.0.1/tcp/5001") == Endpoint(host="127.0.0.1", port=5001)
        assert parse_multiaddr("/dns/localhost/tcp/8080") == Endpoint(host="localhost", port=8080)

    def test_unix(self):
        endpoint = parse_multiaddr("/unix/run/ipfs/api.sock")
        assert endpoint.is_unix
        assert endpoint.path == "/run/ipfs/api.sock"

    @pytest.mark.parametrize(
        "address",
        ["", "/ip4/127.0.0.1/udp/5001", "/ip4/127.0.0.1/tcp/http", "/ip4/127.0.0.1/tcp/70000", "/unix/", "127.0.0.1:5001"],
    )
    def test_invalid(self, address):
        with pytest.raises(InvalidAddress):
            parse_multiaddr(address)


class TestProtocol:
    """Tests for the response encoding."""

    def test_ok(self):
        data = format_response(Outcome(ExitCode.SUCCESS, "pong"))
        assert data == b"OK\npong"
        assert parse_response(data.decode()) == Outcome(ExitCode.SUCCESS, "pong")

    def test_error(self):
        data = format_response(Outcome(ExitCode.FAILURE, error="disk full"))
        assert data == b"ERROR: disk full\n"
        assert parse_response(data.decode()) == Outcome(ExitCode.FAILURE, error="disk full")

    def test_help_on_failure(self):
        "A bare namespace has text but no error"
        assert format_response(Outcome(ExitCode.FAILURE, "USAGE\n")).startswith(b"OK\n")

    def test_garbage(self):
        outcome = parse_response("HTTP/1.1 400 Bad Request")
        assert outcome.exit_code == ExitCode.FAILURE
        assert "unexpected daemon response" in outcome.error


class TestReadCommand:
    """Tests for Daemon.read_command with mocked streams."""

    @pytest.mark.asyncio
    async def test_full_tree(self, trees, node):
        daemon = Daemon(Dispatcher(trees, node=node))
        writer = MockWriter()
        await daemon.read_command(Mode.FULL, MockReader(b"ping QmPeer\n"), writer)
        assert writer.written == b"OK\npong"
        writer.close.assert_called_once()
        writer.wait_closed.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_quoted_arguments(self, trees, node):
        daemon = Daemon(Dispatcher(trees, node=node))
        await daemon.read_command(Mode.FULL, MockReader(b"cat 'my file'\n"), MockWriter())
        assert node.calls == [("cat", ["my file"])]

    @pytest.mark.asyncio
    async def test_readonly_tree(self, trees, node):
        daemon = Daemon(Dispatcher(trees, node=node))
        writer = MockWriter()
        await daemon.read_command(Mode.READONLY, MockReader(b"add file.txt\n"), writer)
        assert writer.written.startswith(b"ERROR: unknown command 'add'")
        assert node.calls == []

    @pytest.mark.asyncio
    async def test_empty(self, trees):
        daemon = Daemon(Dispatcher(trees))
        writer = MockWriter()
        await daemon.read_command(Mode.FULL, MockReader(b"\n"), writer)
        assert writer.written == b"ERROR: empty command\n"

    @pytest.mark.asyncio
    async def test_bad_quoting(self, trees):
        daemon = Daemon(Dispatcher(trees))
        writer = MockWriter()
        await daemon.read_command(Mode.FULL, MockReader(b"cat 'unterminated\n"), writer)
        assert writer.written.startswith(b"ERROR: ")


class TestServe:
    """End to end tests over unix sockets."""

    @pytest.mark.asyncio
    async def test_round_trip(self, trees, node, tmp_path):
        """Test both trees are served and shutdown stops the daemon."""
        api = f"/unix{tmp_path}/api.sock"
        gateway = f"/unix{tmp_path}/gateway.sock"
        daemon = Daemon(Dispatcher(trees, node=node))
        await daemon.listen(api, Mode.FULL)
        await daemon.listen(gateway, Mode.READONLY)
        serving = asyncio.create_task(daemon.serve())

        assert await run_client(["ping", "QmPeer"], api) == Outcome(ExitCode.SUCCESS, "pong")
        outcome = await run_client(["ping", "QmPeer"], gateway)
        assert outcome.exit_code == ExitCode.FAILURE
        assert "ping" in outcome.error

        outcome = await run_client(["block", "stat", "Qm1"], gateway)
        assert outcome.exit_code == ExitCode.SUCCESS

        outcome = await run_client(["shutdown"], gateway)
        assert outcome.exit_code == ExitCode.FAILURE
        assert not serving.done()

        outcome = await run_client(["shutdown"], api)
        assert outcome == Outcome(ExitCode.SUCCESS, "daemon is shutting down\n")
        await asyncio.wait_for(serving, 5)

    @pytest.mark.asyncio
    async def test_no_daemon(self, tmp_path):
        with pytest.raises(DaemonError, match="cannot connect"):
            await run_client(["version"], f"/unix{tmp_path}/missing.sock")
