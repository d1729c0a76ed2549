"""Empty commit helper"""
from typing import TYPE_CHECKING

from rich.console import Console
from rich.markup import escape

from gitgum.constants import EMPTY_COMMIT_MESSAGE
from gitgum.exceptions import PreconditionError

if TYPE_CHECKING:
    from gitgum.config import Config
    from gitgum.services.git_service import GitService
    from gitgum.ui.picker import FuzzyPicker

console = Console(highlight=False, soft_wrap=True)


class EmptyCommit:
    """Records an empty commit to re-trigger CI, then offers to push it.

    Only allowed when the current branch has an upstream and has nothing
    unpushed, so the push that follows carries the empty commit alone.
    """

    def __init__(self, git_service: "GitService", picker: "FuzzyPicker", config: "Config"):
        self.git_service = git_service
        self.picker = picker
        self.config = config

    def run(self) -> None:
        self.git_service.ensure_repo()
        branch = self.git_service.current_branch()

        upstream = self.git_service.current_upstream()
        if not upstream:
            raise PreconditionError(
                f"current branch '{branch}' has no upstream remote tracking branch"
            )

        if self.git_service.ahead_of(branch, upstream):
            raise PreconditionError(
                f"refusing to create empty commit: branch '{branch}' is ahead of remote '{upstream}'"
            )

        self.git_service.commit_empty(EMPTY_COMMIT_MESSAGE)
        console.print(f"Created empty commit on branch '{escape(branch)}'.")

        if self.picker.confirm("Do you want to push this commit to the remote?", default=True):
            output = self.git_service.push()
            if output:
                console.print(escape(output))
            console.print("Pushed to remote.")
        else:
            console.print("Not pushing.")
