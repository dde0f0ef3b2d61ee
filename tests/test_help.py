"""Tests for help rendering."""

from ipfscmds.commands.tree import resolve_path
from ipfscmds.help import render_help, usage_line


class TestRenderHelp:
    """Tests for render_help."""

    def test_root_long(self, trees):
        """Test the root help uses its grouped listing."""
        text = render_help((), trees.root)
        assert text.startswith("USAGE\n  ipfs - Global p2p merkle-dag filesystem.")
        assert "BASIC COMMANDS" in text
        assert "OPTIONS" in text
        assert "--api" in text

    def test_root_short(self, trees):
        """Test the short root help has no option details."""
        text = render_help((), trees.root, short=True)
        assert "OPTIONS" not in text
        assert "Use 'ipfs --help' for more information about this command." in text

    def test_namespace_listing(self, trees):
        """Test namespaces list their children with taglines."""
        text = render_help(("block",), trees.root.children["block"])
        assert "SUBCOMMANDS" in text
        assert "ipfs block stat - Print information of a raw IPFS block." in text
        assert "Use 'ipfs block <subcmd> --help'" in text

    def test_readonly_namespace_listing(self, trees):
        """Test partial namespaces only list their kept children."""
        text = render_help(("block",), trees.root_ro.children["block"])
        assert "ipfs block get" in text
        assert "ipfs block put" not in text

    def test_leaf(self, trees):
        """Test leaf help shows arguments, options and defaults."""
        command = resolve_path(trees.root, ["block", "put"])
        text = render_help(("block", "put"), command)
        assert "ARGUMENTS" in text
        assert "<data> - The data to be stored as an IPFS block." in text
        assert "-f, --format string" in text
        assert "Default: v0." in text

    def test_bool_flags(self, trees):
        """Test boolean options are rendered without a value."""
        text = render_help(("version",), trees.root.children["version"])
        assert "-n, --number " in text
        assert "Default: false." in text


def test_usage_line(trees):
    assert usage_line(("cat",), trees.root.children["cat"]) == "ipfs cat <ipfs-path>..."
    assert usage_line(("files", "ls"), resolve_path(trees.root, ["files", "ls"])) == "ipfs files ls [<options>] [<path>]"
    assert usage_line(("block",), trees.root.children["block"]) == "ipfs block <command> ..."
