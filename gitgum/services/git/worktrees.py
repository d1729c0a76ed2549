"""Worktree lookups for gitgum."""

import os
import re
from typing import Optional

from gitgum.models.worktree import WorktreeInfo
from gitgum.services.git.base import GitBase
from gitgum.logging_config import get_logger

logger = get_logger(__name__)

# "<path>  <sha> [<branch>]" or "<path>  <sha> (detached HEAD)"
_WORKTREE_LINE = re.compile(r"^(?P<path>.+?)\s+(?P<sha>[0-9a-f]+)\s+(?P<head>\[.*?\]|\(.*?\))")


class WorktreeService(GitBase):
    """Service for looking up which branches are attached to worktrees."""

    def find_worktree(self, branch_name: str) -> Optional[WorktreeInfo]:
        """Find the worktree that has ``branch_name`` checked out.

        Scans the human-readable `git worktree list` output for a
        ``[<branch>]`` or space-delimited ``<branch>`` token, returning the
        first match.

        Returns:
            WorktreeInfo for the matching worktree, or None
        """
        with self._git_errors("worktree list", branch_name):
            output = self._get_repo().git.worktree("list")

        for line in output.splitlines():
            if f"[{branch_name}]" not in line and f" {branch_name} " not in line:
                continue

            match = _WORKTREE_LINE.match(line)
            if match:
                path = match.group("path").strip()
                head = match.group("head")
                attached = head[1:-1] if head.startswith("[") else ""
                sha = match.group("sha")
            else:
                fields = line.split()
                if not fields:
                    continue
                path, attached, sha = fields[0], branch_name, ""

            logger.debug(f"Branch {branch_name} is attached to worktree {path}")
            return WorktreeInfo(path=path, branch_name=attached, commit_sha=sha)

        return None

    def worktree_for(self, branch_name: str) -> tuple[bool, str]:
        """Check whether a branch is checked out in some worktree.

        Returns:
            Tuple of (is_checked_out, worktree_path). The path is empty when
            the branch is not checked out anywhere.
        """
        info = self.find_worktree(branch_name)
        if info is None:
            return False, ""
        return True, info.path

    def is_attached_elsewhere(self, branch_name: str, current_path: str) -> bool:
        """True if ``branch_name`` is checked out in a worktree other than ``current_path``."""
        info = self.find_worktree(branch_name)
        if info is None:
            return False
        return os.path.realpath(info.path) != os.path.realpath(current_path)
