"""Command-line argument parsing for gitgum."""

import argparse
from typing import List, Optional

from gitgum.constants import COMPLETION_SHELLS

_TRUE_VALUES = ("1", "t", "true", "y", "yes", "on")
_FALSE_VALUES = ("0", "f", "false", "n", "no", "off")


def parse_bool(value: str) -> bool:
    """Parse the value of a ``--flag=<bool>`` option."""
    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise argparse.ArgumentTypeError(f"invalid boolean value: '{value}'")


def wants_version(argv: List[str]) -> bool:
    """True if ``--version`` or ``-v`` appears anywhere on the command line."""
    return any(arg in ("--version", "-v") for arg in argv)


def _add_bool_option(parser: argparse.ArgumentParser, name: str, help_text: str) -> None:
    parser.add_argument(
        f"--{name}",
        nargs="?",
        const=True,
        default=None,
        type=parse_bool,
        metavar="BOOL",
        help=help_text,
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level parser with one subparser per command."""
    parser = argparse.ArgumentParser(
        prog="gitgum",
        description="Interactive helpers for everyday git work",
    )
    parser.add_argument("-v", "--version", action="store_true", help="Print version and exit")
    parser.add_argument("--verbose", action="store_true", help="Show informational log messages")
    parser.add_argument(
        "--debug", action="store_true", help="Show debug information and write ~/.gitgum/gitgum.log"
    )

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")
    subparsers.required = True

    subparsers.add_parser("switch", help="Switch to a local or remote branch")
    subparsers.add_parser("checkout-pr", help="Check out a pull request as pr-<number>")
    subparsers.add_parser("status", help="Show branches, remotes and changes")
    subparsers.add_parser("push", help="Push the current branch")
    subparsers.add_parser("delete", help="Delete a local branch (and its remote branch)")
    subparsers.add_parser("empty", help="Create an empty commit and offer to push it")

    clean = subparsers.add_parser("clean", help="Discard changes and remove untracked files")
    _add_bool_option(clean, "changes", "Discard tracked changes (default: true)")
    _add_bool_option(clean, "untracked", "Remove untracked files (default: true)")
    _add_bool_option(clean, "ignored", "Also remove ignored files, implies --untracked (default: false)")
    clean.add_argument("--all", action="store_true", help="Enable every cleanup option")
    clean.add_argument("-y", "--yes", action="store_true", help="Do not ask for confirmation")

    replay = subparsers.add_parser(
        "replay-list", help="List commits on A since its merge base with B, oldest first"
    )
    replay.add_argument("branch_a", metavar="A", help="Branch whose commits are listed")
    replay.add_argument("branch_b", metavar="B", help="Branch to compute the merge base against")

    completion = subparsers.add_parser("completion", help="Print a shell completion script")
    completion.add_argument("shell", metavar="SHELL", help=f"One of: {', '.join(COMPLETION_SHELLS)}")

    return parser


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    return build_parser().parse_args(argv)
