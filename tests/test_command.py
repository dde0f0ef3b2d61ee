"""Tests for the command line entry point."""

import sys
import tomllib

import pytest

from ipfscmds import command
from ipfscmds.config import Configuration
from ipfscmds.constants import CONFIG_FILENAME
from ipfscmds.dispatch import Outcome
from ipfscmds.models import DaemonError, DuplicateRegistration, ExitCode
from ipfscmds.repo import init_repo

FAKE_NODE_MODULE = """
from ipfscmds.commands.marshal import MessageOutput


class Node:
    def __init__(self, config):
        self.config = config

    def ping(self, request):
        return MessageOutput("pong from " + request.arguments[0])
"""


@pytest.fixture
def repo(tmp_path, monkeypatch):
    "An initialized repository, selected through $IPFS_PATH"
    monkeypatch.setenv("IPFS_PATH", str(tmp_path))
    return tmp_path


@pytest.fixture
def log(test_logger):
    return test_logger


@pytest.fixture
def client(mocker):
    "The daemon client, unreachable by default"
    return mocker.patch.object(command, "run_client", side_effect=DaemonError("cannot connect"))


class TestRunCommand:
    """Tests for run_command."""

    def test_local_command(self, repo, log, client, capsys):
        """Test local commands never reach the daemon."""
        assert command.run_command(["commands"], log) == ExitCode.SUCCESS
        client.assert_not_called()
        assert "ipfs object patch add-link" in capsys.readouterr().out.splitlines()

    def test_local_option(self, repo, log, client, capsys):
        assert command.run_command(["--local", "version", "-n"], log) == ExitCode.SUCCESS
        client.assert_not_called()
        assert capsys.readouterr().out.strip() == "0.4.10"

    def test_forwarded(self, repo, log, client, capsys):
        """Test other commands go through the daemon."""
        client.side_effect = None
        client.return_value = Outcome(ExitCode.SUCCESS, "pong")
        assert command.run_command(["--api", "/ip4/10.0.0.1/tcp/5001", "ping", "QmPeer"], log) == ExitCode.SUCCESS
        argv, api = client.call_args.args
        assert argv == ["--api", "/ip4/10.0.0.1/tcp/5001", "ping", "QmPeer"]
        assert api == "/ip4/10.0.0.1/tcp/5001"
        assert capsys.readouterr().out == "pong"

    def test_api_from_config(self, repo, log, client):
        init_repo(repo, api="/unix/tmp/ipfs.sock")
        client.side_effect = None
        client.return_value = Outcome(ExitCode.SUCCESS, "")
        command.run_command(["ping", "QmPeer"], log)
        assert client.call_args.args[1] == "/unix/tmp/ipfs.sock"

    def test_daemon_error(self, repo, log, client, capsys):
        client.side_effect = None
        client.return_value = Outcome(ExitCode.FAILURE, error="disk full")
        assert command.run_command(["add", "file.txt"], log) == ExitCode.FAILURE
        assert "Error: disk full" in capsys.readouterr().err

    def test_fallback_to_local(self, repo, log, client, capsys):
        """Test an unreachable daemon makes the command run locally."""
        assert command.run_command(["cat", "Qm1"], log) == ExitCode.FAILURE
        client.assert_called_once()
        assert "needs a node" in capsys.readouterr().err

    def test_node_module(self, repo, log, client, monkeypatch, capsys):
        (repo / "fake_ipfs_node.py").write_text(FAKE_NODE_MODULE)
        (repo / CONFIG_FILENAME).write_text('[node]\nmodule = "fake_ipfs_node"\n')
        monkeypatch.syspath_prepend(str(repo))
        assert command.run_command(["--local", "ping", "QmPeer"], log) == ExitCode.SUCCESS
        client.assert_not_called()
        assert capsys.readouterr().out == "pong from QmPeer"

    def test_usage_error(self, repo, log, client, capsys):
        assert command.run_command(["--nope"], log) == ExitCode.FAILURE
        assert "unknown option" in capsys.readouterr().err

    def test_help_is_local(self, repo, log, client, capsys):
        assert command.run_command(["add", "--help"], log) == ExitCode.SUCCESS
        client.assert_not_called()
        assert "USAGE" in capsys.readouterr().out

    def test_debug_option(self, repo, log, client, mocker):
        """Test debug mode follows the parsed option, in any spelling."""
        enable = mocker.patch.object(command, "enable_debug")
        assert command.run_command(["--debug=true", "--local", "version", "-n"], log) == ExitCode.SUCCESS
        enable.assert_called_once_with()

        enable.reset_mock()
        command.run_command(["--debug=false", "--local", "version", "-n"], log)
        enable.assert_not_called()

    def test_debug_flag_after_separator(self, repo, log, client, mocker):
        """Test a -D argument after -- doesn't turn debug on."""
        enable = mocker.patch.object(command, "enable_debug")
        command.run_command(["--local", "cat", "--", "-D"], log)
        enable.assert_not_called()

    def test_inconsistent_tree(self, repo, log, mocker):
        mocker.patch.object(command, "init_trees", side_effect=DuplicateRegistration("<root>", "add"))
        assert command.run_command(["version"], log) == ExitCode.FAILURE


class TestLoadNode:
    """Tests for load_node."""

    def test_no_module(self, test_logger):
        assert command.load_node(Configuration(logger=test_logger), test_logger) is None

    def test_missing_module(self, test_logger):
        config = Configuration({"node": {"module": "ipfscmds_no_such_node"}}, logger=test_logger)
        with pytest.raises(DaemonError, match="cannot load node module"):
            command.load_node(config, test_logger)

    def test_no_node_class(self, test_logger):
        config = Configuration({"node": {"module": "ipfscmds.version"}}, logger=test_logger)
        with pytest.raises(DaemonError, match="no Node class"):
            command.load_node(config, test_logger)


class TestInit:
    """Tests for `ipfs init`."""

    def test_init(self, repo, log, capsys):
        assert command.run_command(["init", "--gateway", "/ip4/127.0.0.1/tcp/9090"], log) == ExitCode.SUCCESS
        with (repo / CONFIG_FILENAME).open("rb") as f:
            config = tomllib.load(f)
        assert config == {"addresses": {"api": "/ip4/127.0.0.1/tcp/5001", "gateway": "/ip4/127.0.0.1/tcp/9090"}}
        assert "initializing IPFS node" in capsys.readouterr().out

    def test_already_initialized(self, repo, log, capsys):
        init_repo(repo)
        assert command.run_command(["init"], log) == ExitCode.FAILURE
        assert "already exists" in capsys.readouterr().err


def test_main_exit_code(repo, client, monkeypatch):
    monkeypatch.setattr(sys, "argv", ["ipfs", "version"])
    with pytest.raises(SystemExit) as exc:
        command.main()
    assert exc.value.code == ExitCode.SUCCESS
