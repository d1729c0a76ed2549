"""Data models for gitgum."""

from .branch import BranchKind, BranchRef, SelectionItem
from .pull_request import PullRequestRef
from .remote import Remote, parse_remotes
from .status import FileStatus
from .worktree import WorktreeInfo

__all__ = [
    "BranchKind",
    "BranchRef",
    "SelectionItem",
    "PullRequestRef",
    "Remote",
    "parse_remotes",
    "FileStatus",
    "WorktreeInfo",
]
