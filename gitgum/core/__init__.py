"""Command implementations for gitgum."""

from .cleaner import TreeCleaner
from .completion import print_completion, render_completion
from .deleter import BranchDeleter
from .empty import EmptyCommit
from .pull_requests import PullRequestCheckout, parse_pull_request_refs
from .pusher import BranchPusher
from .replay import print_replay_list, replay_list
from .status import StatusReport
from .switcher import BranchSwitcher

__all__ = [
    "TreeCleaner",
    "print_completion",
    "render_completion",
    "BranchDeleter",
    "EmptyCommit",
    "PullRequestCheckout",
    "parse_pull_request_refs",
    "BranchPusher",
    "print_replay_list",
    "replay_list",
    "StatusReport",
    "BranchSwitcher",
]
