"""Git mutations for gitgum.

Every method runs exactly one git command and returns its captured output.
Failures surface as GitOperationError carrying git's stderr.
"""

from typing import Optional, Tuple

from gitgum.services.git.base import GitBase
from gitgum.logging_config import get_logger

logger = get_logger(__name__)


class GitOperations(GitBase):
    """Service for Git operations that change the repository."""

    def _run_verbose(self, operation: str, verb: str, *args: str, branch: Optional[str] = None) -> str:
        """Run a command and return stdout and stderr joined.

        Commands such as push report progress on stderr, which the user wants
        to see even on success.
        """
        with self._git_errors(operation, branch):
            _, stdout, stderr = getattr(self._get_repo().git, verb)(
                *args, with_extended_output=True
            )
        return "\n".join(part for part in (stdout.strip(), stderr.strip()) if part)

    def checkout(self, branch: str) -> None:
        """Check out an existing local branch."""
        logger.info(f"Checking out {branch}")
        with self._git_errors("checkout", branch):
            self._get_repo().git.checkout("--quiet", branch)

    def checkout_new(self, branch: str, start: str) -> None:
        """Create ``branch`` at ``start`` and check it out."""
        logger.info(f"Creating {branch} from {start}")
        with self._git_errors("checkout -b", branch):
            self._get_repo().git.checkout("--quiet", "-b", branch, start)

    def set_upstream(self, branch: str, upstream: str) -> None:
        """Make ``branch`` track ``upstream`` (``<remote>/<branch>``)."""
        logger.info(f"Setting upstream of {branch} to {upstream}")
        with self._git_errors("set-upstream", branch):
            self._get_repo().git.branch(f"--set-upstream-to={upstream}", branch)

    def reset_hard(self, ref: Optional[str] = None) -> str:
        """Hard-reset the current branch (to ``ref`` when given)."""
        args = ["--hard", ref] if ref else ["--hard"]
        logger.info(f"Resetting {' '.join(args)}")
        with self._git_errors("reset --hard", ref):
            return self._get_repo().git.reset(*args)

    def commit_empty(self, message: str) -> str:
        """Record an empty commit on the current branch."""
        logger.info(f"Creating empty commit: {message}")
        with self._git_errors("commit --allow-empty"):
            return self._get_repo().git.commit("--allow-empty", "-m", message)

    def push(self) -> str:
        """Push the current branch to its upstream."""
        logger.info("Pushing to upstream")
        return self._run_verbose("push", "push")

    def push_to(self, remote: str, branch: str) -> str:
        """Push ``branch`` to an existing branch of the same name on ``remote``."""
        logger.info(f"Pushing {branch} to {remote}")
        return self._run_verbose("push", "push", remote, branch, branch=branch)

    def push_set_upstream(self, remote: str, branch: str) -> str:
        """Push ``branch`` to ``remote`` and track the result."""
        logger.info(f"Pushing {branch} to {remote} with upstream")
        return self._run_verbose("push -u", "push", "-u", remote, branch, branch=branch)

    def push_delete(self, remote: str, branch: str) -> str:
        """Delete ``branch`` on ``remote``."""
        logger.info(f"Deleting {remote}/{branch}")
        return self._run_verbose("push --delete", "push", "--delete", remote, branch, branch=branch)

    def branch_delete(self, name: str, force: bool = False) -> str:
        """Delete a local branch; ``-d`` refuses unmerged branches, ``-D`` does not."""
        logger.info(f"Deleting local branch {name} (force={force})")
        with self._git_errors("branch -D" if force else "branch -d", name):
            return self._get_repo().git.branch("-D" if force else "-d", name)

    def fetch(self, remote: str, ref: str) -> str:
        """Fetch ``ref`` from ``remote`` into FETCH_HEAD."""
        logger.info(f"Fetching {ref} from {remote}")
        return self._run_verbose("fetch", "fetch", remote, ref)

    def clean(self, ignored: bool = False) -> str:
        """Remove untracked files and directories (and ignored ones with ``ignored``)."""
        args = ["-fd", "-x"] if ignored else ["-fd"]
        logger.info(f"Running git clean {' '.join(args)}")
        with self._git_errors("clean"):
            return self._get_repo().git.clean(*args)

    def checkout_path_from_head(self, path: str) -> None:
        """Restore ``path`` in both index and working tree from HEAD."""
        with self._git_errors("checkout HEAD --", path):
            self._get_repo().git.checkout("HEAD", "--", path)

    def restore_index_entry(self, path: str, entry: Tuple[str, str]) -> None:
        """Put a previously captured ``(mode, blob_sha)`` back into the index."""
        mode, sha = entry
        with self._git_errors("update-index --cacheinfo", path):
            self._get_repo().git.update_index("--add", "--cacheinfo", f"{mode},{sha},{path}")

    def remove_from_index(self, path: str) -> None:
        """Drop ``path`` from the index without touching the working tree."""
        with self._git_errors("update-index --force-remove", path):
            self._get_repo().git.update_index("--force-remove", "--", path)
