"""Worktree data models."""

from dataclasses import dataclass


@dataclass
class WorktreeInfo:
    """One line of `git worktree list`: a checkout directory and what it has checked out."""

    path: str
    branch_name: str  # Empty when HEAD is detached
    commit_sha: str = ""

    @property
    def is_detached(self) -> bool:
        return not self.branch_name

    def __str__(self) -> str:
        branch = "(detached)" if self.is_detached else self.branch_name
        return f"{branch} @ {self.path}"
