"""Lintgate CLI entry point — argument parsing and command dispatch.

Builds the argparse parser tree and dispatches each subcommand to its handler
in :mod:`lintgate.cli.commands`.  Program name, description and default
values come from the central config module.

Usage::

    lintgate check src/ [--config .lintgate.yaml] [--format json] [--fix]
    lintgate list-rules [--preset <name>]
    lintgate init [--preset <name>]
    lintgate test-rule <rule-id> <file> [--option whitespace-insensitive]
"""

from __future__ import annotations

import argparse

from lintgate import __version__
from lintgate.cli.commands import cmd_check, cmd_init, cmd_list_rules, cmd_test_rule
from lintgate.lib import config


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse tree with one sub-parser per subcommand."""
    prog = config.get_str("cli.prog_name")
    default_preset = config.get_str("defaults.preset_name")
    formats = [
        config.get_str("formats.stderr"),
        config.get_str("formats.json"),
        config.get_str("formats.quiet"),
    ]

    parser = argparse.ArgumentParser(
        prog=prog, description=config.get_str("cli.description")
    )
    parser.add_argument(
        "--version", action="version", version=f"{prog} {__version__}"
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    sub_check = subparsers.add_parser("check", help="Lint files and directories")
    sub_check.add_argument("paths", nargs="+", help="Files or directories to lint")
    sub_check.add_argument(
        "--config",
        default=config.get_str("filenames.project_config"),
        help="Path to the project config",
    )
    sub_check.add_argument(
        "--format",
        choices=formats,
        default=config.get_str("formats.default"),
        help="Output format",
    )
    sub_check.add_argument(
        "--fix", action="store_true", help="Write fixes back to the files"
    )

    sub_list = subparsers.add_parser("list-rules", help="List available rules")
    sub_list.add_argument("--preset", help="Show the rules of a specific preset")

    sub_init = subparsers.add_parser(
        "init", help="Create a .lintgate.yaml in the current directory"
    )
    sub_init.add_argument(
        "--preset",
        default=default_preset,
        help=f"Preset to use (default: {default_preset})",
    )

    sub_test = subparsers.add_parser(
        "test-rule", help="Run a single rule against a file"
    )
    sub_test.add_argument("rule_id", help="Rule ID to test")
    sub_test.add_argument("file", help="File to test against")
    sub_test.add_argument(
        "--option",
        action="append",
        default=[],
        dest="options",
        help="Rule option (repeatable)",
    )

    return parser


def main() -> None:
    """Parse arguments and dispatch to the matching command handler.

    Prints the help text when no subcommand is given.
    """
    parser = build_parser()
    args = parser.parse_args()

    dispatch = {
        "check": cmd_check,
        "list-rules": cmd_list_rules,
        "init": cmd_init,
        "test-rule": cmd_test_rule,
    }

    handler = dispatch.get(args.command)
    if handler:
        handler(args)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
