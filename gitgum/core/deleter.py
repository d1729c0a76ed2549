"""Interactive branch deletion"""
from typing import TYPE_CHECKING, Tuple

from rich.console import Console
from rich.markup import escape

from gitgum.exceptions import GitOperationError, PreconditionError, UserCancelledError
from gitgum.logging_config import get_logger

if TYPE_CHECKING:
    from gitgum.config import Config
    from gitgum.services.git_service import GitService
    from gitgum.ui.picker import FuzzyPicker

console = Console(highlight=False, soft_wrap=True)
err_console = Console(stderr=True, highlight=False, soft_wrap=True)
logger = get_logger(__name__)

ABORT_MESSAGE = "Aborting delete."


class BranchDeleter:
    """Deletes a local branch and, optionally, the remote branch it tracks."""

    def __init__(self, git_service: "GitService", picker: "FuzzyPicker", config: "Config"):
        self.git_service = git_service
        self.picker = picker
        self.config = config

    def run(self) -> None:
        self.git_service.ensure_repo()
        branches = self.git_service.local_branches()
        if not branches:
            raise PreconditionError("No local branches found.")

        branch = self.picker.select("Select a branch to delete", branches)

        if branch in self.config.protected_branches:
            if not self.picker.confirm(
                f"You are about to delete the '{branch}' branch. This is usually the main branch "
                "of the repository. Are you sure you want to proceed?",
                default=False,
            ):
                console.print(ABORT_MESSAGE)
                return

        if branch == self.git_service.current_branch():
            if not self._switch_away(branch, branches):
                console.print(ABORT_MESSAGE)
                return

        remote, remote_branch = self._upstream_of(branch)
        delete_remote = False
        if remote:
            delete_remote = self.picker.confirm(
                f"Branch '{branch}' is tracking remote branch '{remote}/{remote_branch}'. "
                "Do you want to delete the remote branch as well?",
                default=False,
            )

        if not self._delete_local(branch, delete_remote):
            console.print(ABORT_MESSAGE)
            return

        if delete_remote:
            self._delete_remote(remote, remote_branch)

    def _switch_away(self, branch: str, branches: list) -> bool:
        """Offer to leave ``branch`` before deleting it. Returns False if declined."""
        if not self.picker.confirm(
            f"You are currently on branch '{branch}'. "
            "Do you want to switch to another branch before deleting it?",
            default=True,
        ):
            return False

        others = [b for b in branches if b != branch]
        if not others:
            err_console.print(f"No other branches found to switch to. {ABORT_MESSAGE}")
            raise PreconditionError("no other branches")

        try:
            target = self.picker.select("Select a branch to switch to", others)
        except UserCancelledError:
            raise UserCancelledError(f"No branch selected. {ABORT_MESSAGE}") from None

        self.git_service.checkout(target)
        console.print(f"Switched to branch '{escape(target)}'.")
        return True

    def _upstream_of(self, branch: str) -> Tuple[str, str]:
        """Split the upstream of ``branch`` into (remote, branch), or ("", "")."""
        try:
            upstream = self.git_service.upstream_short(branch)
        except GitOperationError as e:
            logger.debug(f"Could not read upstream of {branch}: {e}")
            return "", ""

        remote, sep, remote_branch = upstream.partition("/")
        if not sep or not remote or not remote_branch:
            return "", ""
        return remote, remote_branch

    def _delete_local(self, branch: str, delete_remote: bool) -> bool:
        """Safe-delete ``branch``, offering a force delete if it is unmerged."""
        try:
            self.git_service.branch_delete(branch, force=False)
            console.print(f"Deleted local branch '{escape(branch)}'.")
            return True
        except GitOperationError as e:
            logger.debug(f"Safe delete of {branch} failed: {e}")
            err_console.print(
                f"Could not delete branch '{escape(branch)}'. It may not be fully merged."
            )

        if delete_remote:
            prompt = (
                f"Branch '{branch}' is not fully merged. "
                "Do you want to force delete the local branch and the remote branch?"
            )
        else:
            prompt = f"Branch '{branch}' is not fully merged. Do you want to force delete the local branch?"

        if not self.picker.confirm(prompt, default=False):
            return False

        self.git_service.branch_delete(branch, force=True)
        console.print(f"Force deleted local branch '{escape(branch)}'.")
        return True

    def _delete_remote(self, remote: str, remote_branch: str) -> None:
        upstream = escape(f"{remote}/{remote_branch}")
        try:
            output = self.git_service.push_delete(remote, remote_branch)
        except GitOperationError as e:
            # The local branch is already gone; report and carry on
            err_console.print(f"[red]Error: Could not delete remote branch '{upstream}'.[/red]")
            err_console.print(escape(e.stderr))
            return

        if output:
            console.print(escape(output))
        console.print(f"Deleted remote branch '{upstream}'.")
