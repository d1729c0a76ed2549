"""Command-line entry point for gitgum"""

import argparse
import sys
from typing import List, Optional

from rich.console import Console
from rich.markup import escape

from gitgum.__version__ import __version__
from gitgum.cli.args import parse_args, wants_version
from gitgum.config import CleanOptions, Config
from gitgum.core import (
    BranchDeleter,
    BranchPusher,
    BranchSwitcher,
    EmptyCommit,
    PullRequestCheckout,
    StatusReport,
    TreeCleaner,
    print_completion,
    print_replay_list,
)
from gitgum.core.completion import command_name
from gitgum.exceptions import GitgumError, UserCancelledError
from gitgum.logging_config import get_logger, setup_logging
from gitgum.services.git_service import GitService
from gitgum.ui.picker import FuzzyPicker

console = Console(highlight=False, soft_wrap=True)
err_console = Console(stderr=True, highlight=False, soft_wrap=True)
logger = get_logger(__name__)


def dispatch(args: argparse.Namespace, config: Config, program: str) -> None:
    """Run the selected command."""
    if args.command == "completion":
        print_completion(args.shell, program)
        return

    git_service = GitService(config.repo_path)
    picker = FuzzyPicker()

    if args.command == "switch":
        BranchSwitcher(git_service, picker, config).run()
    elif args.command == "checkout-pr":
        PullRequestCheckout(git_service, picker, config).run()
    elif args.command == "status":
        StatusReport(git_service).run()
    elif args.command == "push":
        BranchPusher(git_service, picker, config).run()
    elif args.command == "clean":
        options = CleanOptions(
            changes=args.changes,
            untracked=args.untracked,
            ignored=args.ignored,
            all=args.all,
            yes=args.yes,
        )
        TreeCleaner(git_service, picker, config, options).run()
    elif args.command == "delete":
        BranchDeleter(git_service, picker, config).run()
    elif args.command == "replay-list":
        print_replay_list(git_service, args.branch_a, args.branch_b)
    elif args.command == "empty":
        EmptyCommit(git_service, picker, config).run()
    else:
        raise GitgumError(f"unknown command: {args.command}")


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the application."""
    if argv is None:
        argv = sys.argv[1:]
    # Captured once; completion scripts are bound to the name we were invoked as
    program = command_name(sys.argv[0] if sys.argv and sys.argv[0] else "gitgum")

    if wants_version(argv):
        console.print(f"gitgum {__version__}")
        return 0

    parsed_args = parse_args(argv)
    try:
        setup_logging(verbose=parsed_args.verbose, debug=parsed_args.debug)
        config = Config(verbose=parsed_args.verbose, debug=parsed_args.debug)

        if parsed_args.debug:
            err_console.print("[yellow]Debug mode enabled[/yellow]")
            for key, value in config.to_dict().items():
                logger.debug(f"config {key}: {value}")

        dispatch(parsed_args, config, program)
        return 0
    except UserCancelledError as e:
        err_console.print(f"[yellow]{escape(str(e))}[/yellow]")
        return 1
    except GitgumError as e:
        err_console.print(f"[red]Error: {escape(str(e))}[/red]")
        if parsed_args.debug:
            err_console.print_exception()
        return 1
    except KeyboardInterrupt:
        err_console.print("\n[yellow]Operation cancelled by user[/yellow]")
        return 1
    except Exception as e:
        err_console.print(f"[red]Error: {escape(str(e))}[/red]")
        if parsed_args.debug:
            err_console.print_exception()
        return 1


def run() -> None:
    """Console script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    run()
