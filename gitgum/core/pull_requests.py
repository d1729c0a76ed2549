"""Pull request checkout"""
import re
from typing import TYPE_CHECKING, Dict, List

from rich.console import Console
from rich.markup import escape

from gitgum.constants import PR_REF_PATTERN
from gitgum.exceptions import LocalChangesError, PreconditionError
from gitgum.models.pull_request import PullRequestRef
from gitgum.logging_config import get_logger

if TYPE_CHECKING:
    from gitgum.config import Config
    from gitgum.services.git_service import GitService
    from gitgum.ui.picker import FuzzyPicker

console = Console(highlight=False, soft_wrap=True)
err_console = Console(stderr=True, highlight=False, soft_wrap=True)
logger = get_logger(__name__)

_PR_REF_RE = re.compile(PR_REF_PATTERN)


def parse_pull_request_refs(ls_remote_output: str) -> List[PullRequestRef]:
    """Extract pull request refs from `git ls-remote` output.

    A pull request advertised as both ``head`` and ``merge`` is listed once,
    as ``head``. The result is ordered by descending number.
    """
    by_number: Dict[int, PullRequestRef] = {}
    for line in ls_remote_output.splitlines():
        match = _PR_REF_RE.match(line.strip())
        if not match:
            continue
        ref = PullRequestRef(int(match.group(1)), match.group(2))
        existing = by_number.get(ref.number)
        if existing is None or (existing.ref_type != "head" and ref.ref_type == "head"):
            by_number[ref.number] = ref

    return sorted(by_number.values(), key=lambda r: r.number, reverse=True)


class PullRequestCheckout:
    """Checks out a pull request of a chosen remote as local branch ``pr-<n>``."""

    def __init__(self, git_service: "GitService", picker: "FuzzyPicker", config: "Config"):
        self.git_service = git_service
        self.picker = picker
        self.config = config

    def run(self) -> None:
        self.git_service.ensure_repo()
        remotes = self.git_service.remotes()
        if not remotes:
            raise PreconditionError("no remotes")

        remote = self.picker.select("Select a remote to fetch PR from", remotes)

        console.print(f"Fetching pull request references from remote: {escape(remote)}")
        pull_requests = parse_pull_request_refs(self.git_service.ls_remote(remote))
        if not pull_requests:
            raise PreconditionError("no pull requests found")

        selected = self.picker.select(
            "Select a pull request to checkout", [pr.label for pr in pull_requests]
        )
        self.checkout(remote, PullRequestRef.from_label(selected))

    def checkout(self, remote: str, pr: PullRequestRef) -> None:
        branch = pr.branch_name

        if self.git_service.branch_exists(branch):
            if not self.picker.confirm(
                f"Branch '{branch}' already exists. Reset it to the latest PR state?",
                default=False,
            ):
                self.git_service.checkout(branch)
                console.print(f"Switched to existing branch '{branch}'.")
                return

            self._fetch(remote, pr)
            self.git_service.checkout(branch)
            self.git_service.reset_hard("FETCH_HEAD")
            console.print(f"Reset branch '{branch}' to PR #{pr.number} ({pr.ref_type}).")
            return

        if self.git_service.dirty():
            err_console.print(
                "You have local changes that would be overwritten. "
                "Please commit or stash them before checking out a PR."
            )
            raise LocalChangesError()

        self._fetch(remote, pr)
        self.git_service.checkout_new(branch, "FETCH_HEAD")
        console.print(f"Checked out PR #{pr.number} ({pr.ref_type}) as branch '{branch}'.")

    def _fetch(self, remote: str, pr: PullRequestRef) -> None:
        console.print(f"Fetching PR #{pr.number} from {escape(remote)}...")
        output = self.git_service.fetch(remote, pr.ref)
        if output:
            console.print(escape(output))
