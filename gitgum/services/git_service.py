"""Git service facade"""
from typing import Optional

from gitgum.models.worktree import WorktreeInfo
from gitgum.services.git import BranchQueries, GitOperations, WorktreeService
from gitgum.logging_config import get_logger

logger = get_logger(__name__)


class GitService(BranchQueries, GitOperations):
    """Typed access to every git query and mutation gitgum needs.

    The service holds no mutable state beyond the repository path, so one
    instance can be shared by the enumerator's worker threads.
    """

    def __init__(self, repo_path: str):
        """Initialize the service.

        Args:
            repo_path: Path inside the git working tree (string path, not repo object)
        """
        super().__init__(repo_path)
        self.worktree_service = WorktreeService(repo_path)
        logger.debug(f"Git service initialized for {repo_path}")

    def find_worktree(self, branch_name: str) -> Optional[WorktreeInfo]:
        return self.worktree_service.find_worktree(branch_name)

    def worktree_for(self, branch_name: str) -> tuple[bool, str]:
        """Return (is_checked_out, worktree_path) for ``branch_name``."""
        return self.worktree_service.worktree_for(branch_name)

    def is_attached_elsewhere(self, branch_name: str, current_path: Optional[str] = None) -> bool:
        """True if ``branch_name`` is checked out in another worktree than ours."""
        return self.worktree_service.is_attached_elsewhere(
            branch_name, current_path or self.working_dir
        )
