"""Read-only git queries for gitgum."""

import git
from typing import List, Optional, Tuple

from gitgum.constants import (
    BRANCH_MARKER_CURRENT,
    BRANCH_MARKER_WORKTREE,
    CLEAN_PREVIEW_PREFIX,
    LS_REMOTE_NO_MATCH,
    NO_UPSTREAM_PATTERN,
)
from gitgum.exceptions import (
    DetachedHeadError,
    GitOperationError,
    NotInRepositoryError,
    ParseError,
)
from gitgum.models.status import FileStatus
from gitgum.services.git.base import GitBase
from gitgum.logging_config import get_logger

logger = get_logger(__name__)


def split_lines(output: str) -> List[str]:
    """Split command output into stripped, non-empty lines."""
    return [line.strip() for line in output.splitlines() if line.strip()]


class BranchQueries(GitBase):
    """Service for querying branches, remotes and working tree state."""

    def in_repo(self) -> bool:
        """True iff the repository path resolves inside a working tree."""
        try:
            repo = self._get_repo()
            return repo.git.rev_parse("--is-inside-work-tree") == "true"
        except (git.exc.InvalidGitRepositoryError, git.exc.NoSuchPathError):
            return False
        except git.exc.GitCommandError as e:
            logger.debug(f"rev-parse --is-inside-work-tree failed: {e}")
            return False

    def ensure_repo(self) -> None:
        """Raise NotInRepositoryError unless inside a working tree."""
        if not self.in_repo():
            raise NotInRepositoryError()

    def current_branch(self) -> str:
        """Short symbolic name of HEAD.

        Raises:
            DetachedHeadError: if HEAD does not point at a branch
        """
        with self._git_errors("current_branch"):
            name = self._get_repo().git.rev_parse("--abbrev-ref", "HEAD")
        if name == "HEAD":
            raise DetachedHeadError()
        return name

    def local_branches(self) -> List[str]:
        """Local branch names with the `*` and `+` markers stripped."""
        with self._git_errors("local_branches"):
            output = self._get_repo().git.branch()

        branches = []
        for line in split_lines(output):
            for marker in (BRANCH_MARKER_CURRENT, BRANCH_MARKER_WORKTREE):
                if line.startswith(marker):
                    line = line[len(marker):].strip()
            # "(HEAD detached at ...)" is not a branch
            if line and not line.startswith("("):
                branches.append(line)
        return branches

    def remotes(self) -> List[str]:
        """Names of the configured remotes."""
        with self._git_errors("remotes"):
            return split_lines(self._get_repo().git.remote())

    def remote_branches(self, remote: str) -> List[str]:
        """Branches of ``remote`` without the ``<remote>/`` prefix.

        Symbolic aliases such as ``origin/HEAD -> origin/main`` are excluded.
        """
        with self._git_errors("remote_branches"):
            output = self._get_repo().git.branch("-r")

        prefix = f"{remote}/"
        return [
            line[len(prefix):]
            for line in split_lines(output)
            if line.startswith(prefix) and "HEAD ->" not in line
        ]

    def tracking_remote(self, branch: str) -> str:
        """Remote that ``branch`` tracks, or an empty string if it tracks nothing."""
        try:
            with self._git_errors("tracking_remote", branch):
                upstream = self._get_repo().git.rev_parse("--abbrev-ref", f"{branch}@{{u}}")
        except GitOperationError as e:
            if NO_UPSTREAM_PATTERN in e.stderr:
                return ""
            raise

        remote, sep, _ = upstream.partition("/")
        if not sep or not remote:
            raise ParseError(f"unexpected upstream format: {upstream}")
        return remote

    def upstream_short(self, branch: str) -> str:
        """``<remote>/<branch>`` that ``branch`` tracks, or an empty string."""
        with self._git_errors("upstream_short", branch):
            return self._get_repo().git.for_each_ref(
                "--format=%(upstream:short)", f"refs/heads/{branch}"
            ).strip()

    def current_upstream(self) -> str:
        """Upstream of the current branch, or an empty string if none is configured."""
        try:
            with self._git_errors("current_upstream"):
                return self._get_repo().git.rev_parse(
                    "--abbrev-ref", "--symbolic-full-name", "@{u}"
                ).strip()
        except GitOperationError as e:
            if NO_UPSTREAM_PATTERN in e.stderr:
                return ""
            raise

    def commit_of(self, ref: str) -> str:
        """Commit id ``ref`` resolves to."""
        with self._git_errors("commit_of", ref):
            return self._get_repo().git.rev_parse(ref).strip()

    def remote_has_branch(self, remote: str, branch: str) -> bool:
        """Ask the remote itself whether it has ``branch``.

        Raises:
            GitOperationError: if the remote cannot be queried (network, auth, ...)
        """
        try:
            with self._git_errors("ls-remote", branch):
                self._get_repo().git.ls_remote("--exit-code", "--heads", remote, branch)
            return True
        except GitOperationError as e:
            if e.status != LS_REMOTE_NO_MATCH:
                raise
            logger.debug(f"Remote {remote} has no branch {branch}")
            return False

    def branch_exists(self, name: str) -> bool:
        """True iff a local branch called ``name`` exists."""
        try:
            with self._git_errors("branch_exists", name):
                output = self._get_repo().git.branch(
                    "--list", name, "--format=%(refname:short)"
                )
        except GitOperationError as e:
            logger.debug(f"Could not list branch {name}: {e}")
            return False
        return output.strip() != ""

    def ahead_of(self, local: str, remote_ref: str) -> bool:
        """True iff ``remote_ref..local`` contains any commit."""
        with self._git_errors("ahead_of", local):
            output = self._get_repo().git.log("--oneline", f"{remote_ref}..{local}")
        return output.strip() != ""

    def dirty(self, directory: Optional[str] = None) -> bool:
        """True iff the working tree has tracked-file changes.

        Untracked files alone do not make a tree dirty.
        """
        with self._git_errors("status"):
            output = self._get_repo(directory).git.status("--porcelain=v1")

        for line in output.splitlines():
            if line.startswith("??"):
                continue
            if line.strip():
                return True
        return False

    def file_status(self, path: str) -> FileStatus:
        """Status of a single path relative to the top of the working tree."""
        with self._git_errors("file_status", path):
            # No stripping: the leading space of " M" is significant
            output = self._get_repo().git.status("--porcelain", "--", path)
        if not output:
            return FileStatus.UNKNOWN
        return FileStatus.from_porcelain(output.splitlines()[0])

    def merge_base(self, first: str, second: str) -> str:
        """Best common ancestor of two refs."""
        with self._git_errors("merge-base"):
            return self._get_repo().git.merge_base(first, second).strip()

    def rev_list_reverse(self, rev_range: str) -> List[str]:
        """Commit ids in ``rev_range``, oldest first."""
        with self._git_errors("rev-list"):
            return split_lines(self._get_repo().git.rev_list(rev_range, "--reverse"))

    def ls_remote(self, remote: str) -> str:
        """Raw `git ls-remote <remote>` output."""
        with self._git_errors("ls-remote"):
            return self._get_repo().git.ls_remote(remote)

    def remote_verbose(self) -> str:
        """Raw `git remote -v` output."""
        with self._git_errors("remote -v"):
            return self._get_repo().git.remote("-v")

    def branch_verbose(self) -> str:
        """Raw `git branch -vv` output."""
        with self._git_errors("branch -vv"):
            return self._get_repo().git.branch("-vv")

    def status_short(self) -> str:
        """`git status --short` output."""
        with self._git_errors("status --short"):
            return self._get_repo().git.status("--short")

    def status_short_branch(self) -> str:
        """`git status --short --branch` output."""
        with self._git_errors("status --short --branch"):
            return self._get_repo().git.status("--short", "--branch")

    def diff_names(self, cached: bool = False) -> List[str]:
        """Paths with unstaged changes, or staged changes when ``cached``."""
        args = ["--cached", "--name-only"] if cached else ["--name-only"]
        with self._git_errors("diff --name-only"):
            return split_lines(self._get_repo().git.diff(*args))

    def clean_preview(self, ignored: bool = False) -> List[str]:
        """Paths `git clean -fd` would remove (including ignored ones with ``ignored``)."""
        args = ["-fdn", "-x"] if ignored else ["-fdn"]
        with self._git_errors("clean -n"):
            output = self._get_repo().git.clean(*args)
        return [
            line[len(CLEAN_PREVIEW_PREFIX):]
            for line in split_lines(output)
            if line.startswith(CLEAN_PREVIEW_PREFIX)
        ]

    def index_entry(self, path: str) -> Optional[Tuple[str, str]]:
        """``(mode, blob_sha)`` of the stage-0 index entry for ``path``, if any."""
        with self._git_errors("ls-files", path):
            output = self._get_repo().git.ls_files("-s", "--", path)
        for line in output.splitlines():
            meta, _, _ = line.partition("\t")
            fields = meta.split()
            if len(fields) == 3 and fields[2] == "0":
                return fields[0], fields[1]
        return None
