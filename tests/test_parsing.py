"""Tests for command line resolution."""

import pytest

from ipfscmds.commands.parsing import check_arguments, parse_command_line
from ipfscmds.constants import DEFAULT_API_ADDRESS
from ipfscmds.models import MissingOptionValue, UnknownCommand, UnknownOption, UsageError


class TestParseCommandLine:
    """Tests for parse_command_line on the full tree."""

    def test_global_options_and_path(self, trees):
        """Test global options before the command path."""
        parsed = parse_command_line(trees.root, ["--debug", "--api", "/ip4/127.0.0.1/tcp/5001", "add", "file.txt"])
        assert parsed.options["debug"] is True
        assert parsed.options["api"] == "/ip4/127.0.0.1/tcp/5001"
        assert parsed.path == ("add",)
        assert parsed.arguments == ["file.txt"]
        assert parsed.command is trees.root.children["add"]

    def test_defaults(self, trees):
        """Test defaults are filled along the path."""
        parsed = parse_command_line(trees.root, ["add", "file.txt"])
        assert parsed.options["debug"] is False
        assert parsed.options["local"] is False
        assert parsed.options["api"] == DEFAULT_API_ADDRESS
        assert parsed.options["pin"] is True
        assert "config" not in parsed.options

    def test_nested_path(self, trees):
        """Test nested commands and their options."""
        parsed = parse_command_line(trees.root, ["object", "patch", "add-link", "-p", "root", "name", "ref"])
        assert parsed.path == ("object", "patch", "add-link")
        assert parsed.options["create"] is True
        assert parsed.arguments == ["root", "name", "ref"]

    def test_option_forms(self, trees):
        """Test --name=value, short aliases and explicit booleans."""
        parsed = parse_command_line(trees.root, ["-D=false", "--api=/unix/tmp/api.sock", "-L", "version"])
        assert parsed.options["debug"] is False
        assert parsed.options["api"] == "/unix/tmp/api.sock"
        assert parsed.options["local"] is True

    def test_invalid_boolean(self, trees):
        """Test a boolean with a value other than true/false."""
        with pytest.raises(UsageError):
            parse_command_line(trees.root, ["--debug=maybe", "version"])

    def test_argument_stops_path(self, trees):
        """Test a token naming a child is an argument once arguments started."""
        parsed = parse_command_line(trees.root, ["cat", "Qm1", "get"])
        assert parsed.path == ("cat",)
        assert parsed.arguments == ["Qm1", "get"]

    def test_double_dash(self, trees):
        """Test -- ends option parsing."""
        parsed = parse_command_line(trees.root, ["cat", "--", "-weird-name"])
        assert parsed.arguments == ["-weird-name"]

    def test_unknown_option(self, trees):
        with pytest.raises(UnknownOption):
            parse_command_line(trees.root, ["cat", "--nope", "Qm1"])

    def test_option_of_other_command(self, trees):
        """Test options are only looked up along the path."""
        with pytest.raises(UnknownOption):
            parse_command_line(trees.root, ["cat", "--pin", "Qm1"])

    def test_missing_value(self, trees):
        with pytest.raises(MissingOptionValue):
            parse_command_line(trees.root, ["version", "--api"])

    def test_readonly_tree(self, trees):
        """Test mutating commands are plain arguments of the read-only root."""
        parsed = parse_command_line(trees.root_ro, ["add", "file.txt"])
        assert parsed.path == ()
        assert parsed.arguments == ["add", "file.txt"]
        with pytest.raises(UnknownCommand):
            check_arguments(parsed)


class TestCheckArguments:
    """Tests for check_arguments."""

    def test_required_missing(self, trees):
        with pytest.raises(UsageError, match="'key' is required"):
            check_arguments(parse_command_line(trees.root, ["block", "stat"]))

    def test_too_many(self, trees):
        with pytest.raises(UsageError, match="expected 1 argument"):
            check_arguments(parse_command_line(trees.root, ["block", "stat", "Qm1", "Qm2"]))

    def test_variadic(self, trees):
        check_arguments(parse_command_line(trees.root, ["cat", "Qm1", "Qm2", "Qm3"]))

    def test_optional(self, trees):
        check_arguments(parse_command_line(trees.root, ["files", "ls"]))
        check_arguments(parse_command_line(trees.root, ["files", "ls", "/"]))

    def test_unknown_subcommand(self, trees):
        with pytest.raises(UnknownCommand, match="'block nope'"):
            check_arguments(parse_command_line(trees.root, ["block", "nope"]))
