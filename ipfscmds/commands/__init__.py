"""Command tree handling for ipfscmds.

This package provides:
- models: Data structures (Command, Request, Response, HelpText, Option, Argument)
- options: Option constructors and the global options of the root
- tree: Registration, traversal and help validation of a tree
- root: Construction of the full tree
- readonly: Derivation of the read-only tree
- marshal: Output unwrapping and text marshalers
- parsing: Command line resolution against a tree
- builtin: Commands implemented by the core itself
- catalog: The subcommand catalog forwarding to the node
"""
