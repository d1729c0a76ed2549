"""Interactive branch switching"""
import threading
from typing import TYPE_CHECKING

from rich.console import Console
from rich.markup import escape

from gitgum.exceptions import LocalChangesError, UserCancelledError
from gitgum.formatters import format_current_branch
from gitgum.models.branch import BranchRef, SelectionItem
from gitgum.services.branch_enumerator import BranchEnumerator
from gitgum.logging_config import get_logger

if TYPE_CHECKING:
    from gitgum.config import Config
    from gitgum.services.git_service import GitService
    from gitgum.ui.picker import FuzzyPicker

console = Console(highlight=False, soft_wrap=True)
err_console = Console(stderr=True, highlight=False, soft_wrap=True)
logger = get_logger(__name__)

LOCAL_CHANGES_MESSAGE = (
    "You have local changes that would be overwritten by switching branches. "
    "Please commit or stash them before switching."
)


class BranchSwitcher:
    """Lets the user pick a local or remote branch and switches to it.

    Local selections are checked out directly. A remote selection creates a
    tracking branch when no local branch of that name exists, otherwise the
    existing local branch is reconciled with the chosen remote.
    """

    def __init__(self, git_service: "GitService", picker: "FuzzyPicker", config: "Config"):
        self.git_service = git_service
        self.picker = picker
        self.config = config

    def run(self) -> None:
        self.git_service.ensure_repo()
        current = self.git_service.current_branch()
        tracking = self.git_service.tracking_remote(current)
        console.print(f"Current branch is: {escape(format_current_branch(current, tracking))}")

        if self.git_service.dirty():
            err_console.print(LOCAL_CHANGES_MESSAGE, markup=False)
            raise LocalChangesError()

        selection = self._select_branch(current, tracking)
        self.switch_to(selection)

    def _select_branch(self, current: str, tracking: str) -> SelectionItem:
        """Stream candidates into the picker and parse the user's choice."""
        cancel = threading.Event()
        enumerator = BranchEnumerator(self.git_service, self.config, cancel=cancel)
        enumerator.start(current, tracking)
        try:
            choice = self.picker.select(
                "Select a branch to switch to",
                enumerator.store.items,
                lock=enumerator.store.lock,
                cancel=cancel,
            )
        except UserCancelledError:
            raise UserCancelledError("No branch selected. Aborting switch.") from None
        finally:
            # Producers must be gone before anything is mutated
            enumerator.stop()

        return SelectionItem.parse(choice)

    def switch_to(self, selection: SelectionItem) -> None:
        """Resolve a picker selection into the matching checkout path."""
        ref = selection.to_branch()
        logger.debug(f"Switching to {ref.full_name} ({ref.kind.value})")

        if ref.kind.is_local:
            self._plain_checkout(ref.name)
        elif self.git_service.branch_exists(ref.name):
            self._reconcile(ref)
        else:
            self._checkout_new_tracking(ref)

    def _plain_checkout(self, branch: str) -> None:
        self.git_service.checkout(branch)
        console.print(f"Switched to branch '{escape(branch)}'.")

    def _reconcile(self, ref: BranchRef) -> None:
        """Bring an existing local branch in line with the chosen remote branch."""
        branch = escape(ref.name)
        remote_branch = escape(ref.full_name)
        console.print(f"Branch '{branch}' is already tracked locally as '{branch}'.")

        tracking = self.git_service.tracking_remote(ref.name)
        if tracking:
            console.print(f"Tracking reference for local branch '{branch}': '{escape(tracking)}'")

        if tracking != ref.remote:
            console.print(f"Local branch '{branch}' is not tracking remote branch '{remote_branch}'.")
            if not self.picker.confirm(
                f"Set '{ref.full_name}' as the tracking reference for local branch '{ref.name}'?",
                default=False,
            ):
                raise UserCancelledError("Not setting tracking reference. Aborting switch.")

            self.git_service.set_upstream(ref.name, ref.full_name)
            console.print(
                f"Set tracking reference for local branch '{branch}' to remote branch '{remote_branch}'."
            )

        self.git_service.checkout(ref.name)

        if self.git_service.commit_of(ref.name) == self.git_service.commit_of(ref.full_name):
            console.print(f"Local branch '{branch}' is up to date with remote branch '{remote_branch}'.")
            console.print(f"Switched to branch '{branch}' tracking remote branch '{remote_branch}'.")
            return

        if self.picker.confirm(
            f"Local branch '{ref.name}' is not up to date with remote branch '{ref.full_name}'. "
            "Reset the local branch to the remote branch?",
            default=False,
        ):
            self.git_service.reset_hard(ref.full_name)
            console.print(f"Reset local branch '{branch}' to remote branch '{remote_branch}'.")
        else:
            err_console.print("Not resetting local branch.")

    def _checkout_new_tracking(self, ref: BranchRef) -> None:
        if not self.picker.confirm(
            f"Branch '{ref.name}' is not tracked locally. Create a local tracking branch?",
            default=True,
        ):
            raise UserCancelledError("Not creating a local tracking branch. Aborting switch.")

        self.git_service.checkout_new(ref.name, ref.full_name)
        console.print(
            f"Created and switched to local branch '{escape(ref.name)}' "
            f"tracking remote branch '{escape(ref.full_name)}'."
        )
