"""Git-related services for gitgum."""

from .base import GitBase, stderr_text
from .branch_queries import BranchQueries
from .operations import GitOperations
from .worktrees import WorktreeService

__all__ = [
    "GitBase",
    "stderr_text",
    "BranchQueries",
    "GitOperations",
    "WorktreeService",
]
