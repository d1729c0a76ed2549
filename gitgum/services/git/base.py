"""Shared plumbing for the git services."""

import git
from contextlib import contextmanager
from typing import Optional

from gitgum.exceptions import GitOperationError, NotInRepositoryError
from gitgum.logging_config import get_logger

logger = get_logger(__name__)

_STDERR_PREFIX = "stderr: '"


def stderr_text(error: git.exc.CommandError) -> str:
    """Return the plain stderr text of a failed git command.

    GitPython decorates stderr as ``\\n  stderr: '<text>'``; the decoration is
    removed so callers can match git's own diagnostics.
    """
    stderr = (error.stderr if hasattr(error, "stderr") else str(error)).strip()
    if stderr.startswith(_STDERR_PREFIX) and stderr.endswith("'"):
        stderr = stderr[len(_STDERR_PREFIX):-1]
    stderr = stderr.strip()
    if not stderr:
        status = error.status if hasattr(error, "status") else "unknown"
        stderr = f"exit status {status}"
    return stderr


class GitBase:
    """Base for services that shell out to git through GitPython."""

    def __init__(self, repo_path: str):
        """Initialize the service.

        Args:
            repo_path: Path inside the git working tree
        """
        self.repo_path = repo_path

    def _get_repo(self, path: Optional[str] = None) -> git.Repo:
        """Get a thread-safe git.Repo instance.

        Creates a new repo instance for each call so the enumerator's worker
        threads never share one. GitPython repos are lightweight - they just
        open the existing repository.

        Returns:
            git.Repo: A fresh repository instance
        """
        return git.Repo(path or self.repo_path, search_parent_directories=True)

    @contextmanager
    def _git_errors(self, operation: str, branch: Optional[str] = None):
        """Translate GitPython failures into gitgum exceptions."""
        try:
            yield
        except (git.exc.InvalidGitRepositoryError, git.exc.NoSuchPathError) as e:
            raise NotInRepositoryError() from e
        except git.exc.GitCommandNotFound as e:
            raise GitOperationError(operation, branch, "git executable not found in PATH") from e
        except git.exc.GitCommandError as e:
            message = stderr_text(e)
            logger.debug(f"git {operation} failed (exit {e.status}): {message}")
            raise GitOperationError(operation, branch, message, status=e.status) from e

    @property
    def working_dir(self) -> str:
        """Top-level directory of the working tree."""
        with self._git_errors("working_dir"):
            return self._get_repo().working_tree_dir
