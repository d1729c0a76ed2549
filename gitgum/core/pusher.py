"""Interactive push"""
from typing import TYPE_CHECKING

from rich.console import Console
from rich.markup import escape

from gitgum.exceptions import PreconditionError
from gitgum.logging_config import get_logger

if TYPE_CHECKING:
    from gitgum.config import Config
    from gitgum.services.git_service import GitService
    from gitgum.ui.picker import FuzzyPicker

console = Console(highlight=False, soft_wrap=True)
logger = get_logger(__name__)


class BranchPusher:
    """Pushes the current branch to its upstream or to a remote the user picks."""

    def __init__(self, git_service: "GitService", picker: "FuzzyPicker", config: "Config"):
        self.git_service = git_service
        self.picker = picker
        self.config = config

    def run(self) -> None:
        self.git_service.ensure_repo()

        upstream = self.git_service.current_upstream()
        if upstream:
            console.print(f"Current branch already has a remote tracking branch: {escape(upstream)}")
            if self.picker.confirm("Do you want to push to the remote tracking branch?", default=True):
                self._report(self.git_service.push())
                console.print(f"Pushed to remote tracking branch '{escape(upstream)}'.")
                return
            console.print("Not pushing to remote tracking branch")

        branch = self.git_service.current_branch()
        remotes = self.git_service.remotes()
        if not remotes:
            raise PreconditionError("no remotes")

        remote = self.picker.select(f"Push '{branch}' to", remotes)
        self.push_to_remote(branch, remote)

    def push_to_remote(self, branch: str, remote: str) -> None:
        remote_branch = f"{remote}/{branch}"

        if self.git_service.remote_has_branch(remote, branch):
            if self.git_service.commit_of(branch) == self.git_service.commit_of(remote_branch):
                console.print(
                    f"No changes to push. Local branch '{escape(branch)}' is up to date "
                    f"with remote branch '{escape(remote_branch)}'."
                )
                self.git_service.set_upstream(branch, remote_branch)
                console.print(f"Updated upstream to '{escape(remote_branch)}'.")
                return

            if not self.picker.confirm(
                f"Remote branch '{remote_branch}' already exists. Do you want to push to it?",
                default=True,
            ):
                return
            self._report(self.git_service.push_to(remote, branch))
            return

        if not self.picker.confirm(
            f"No remote branch '{remote_branch}' found. Do you want to create it?",
            default=False,
        ):
            return

        self._report(self.git_service.push_set_upstream(remote, branch))
        console.print(
            f"Created and set tracking reference for '{escape(branch)}' to '{escape(remote_branch)}'."
        )

    def _report(self, output: str) -> None:
        if output:
            console.print(escape(output))
