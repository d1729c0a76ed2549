"""Commits to replay from one branch onto another"""
import sys
from typing import TYPE_CHECKING, List

from gitgum.exceptions import GitOperationError, PreconditionError

if TYPE_CHECKING:
    from gitgum.services.git_service import GitService


def replay_list(git_service: "GitService", branch_a: str, branch_b: str) -> List[str]:
    """Commits on ``branch_a`` since its merge base with ``branch_b``, oldest first."""
    git_service.ensure_repo()
    try:
        merge_base = git_service.merge_base(branch_a, branch_b)
    except GitOperationError as e:
        raise PreconditionError(
            f"failed to find merge base between '{branch_a}' and '{branch_b}': {e.stderr}"
        ) from e
    if not merge_base:
        raise PreconditionError(f"no merge base found between '{branch_a}' and '{branch_b}'")

    return git_service.rev_list_reverse(f"{merge_base}..{branch_a}")


def print_replay_list(git_service: "GitService", branch_a: str, branch_b: str) -> None:
    for commit in replay_list(git_service, branch_a, branch_b):
        sys.stdout.write(f"{commit}\n")
