"""Services for gitgum."""

from .git_service import GitService
from .branch_enumerator import BranchEnumerator, OptionStore

__all__ = [
    "GitService",
    "BranchEnumerator",
    "OptionStore",
]
