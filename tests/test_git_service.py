"""Tests for GitService against real repositories"""
import os
from pathlib import Path
import pytest
import git

from gitgum.exceptions import (
    DetachedHeadError,
    GitOperationError,
    NotInRepositoryError,
)
from gitgum.models.status import FileStatus
from gitgum.services.git_service import GitService
from gitgum.services.git.base import stderr_text

from conftest import commit_file


class TestRepositoryDetection:
    """Test in_repo / ensure_repo."""

    def test_in_repo(self, git_service):
        assert git_service.in_repo() is True
        git_service.ensure_repo()

    def test_in_subdirectory(self, git_repo):
        subdir = Path(git_repo.working_dir) / "sub"
        subdir.mkdir()
        assert GitService(str(subdir)).in_repo() is True

    def test_outside_repo(self, temp_dir):
        outside = temp_dir / "plain"
        outside.mkdir()
        service = GitService(str(outside))
        assert service.in_repo() is False
        with pytest.raises(NotInRepositoryError):
            service.ensure_repo()

    def test_queries_outside_repo_raise(self, temp_dir):
        with pytest.raises(NotInRepositoryError):
            GitService(str(temp_dir)).local_branches()


class TestBranchQueries:
    """Test branch listing and lookups."""

    def test_current_branch(self, git_service):
        assert git_service.current_branch() == "main"

    def test_current_branch_detached(self, git_repo, git_service):
        git_repo.git.checkout(git_repo.head.commit.hexsha)
        with pytest.raises(DetachedHeadError):
            git_service.current_branch()

    def test_local_branches_strip_markers(self, git_repo, git_service, temp_dir):
        git_repo.git.branch("feature")
        git_repo.git.branch("attached")
        git_repo.git.worktree("add", str(temp_dir / "wt"), "attached")

        assert sorted(git_service.local_branches()) == ["attached", "feature", "main"]

    def test_local_branches_skip_detached_line(self, git_repo, git_service):
        git_repo.git.branch("feature")
        git_repo.git.checkout(git_repo.head.commit.hexsha)
        assert sorted(git_service.local_branches()) == ["feature", "main"]

    def test_remotes_and_remote_branches(self, repo_with_remote, git_service):
        repo_with_remote.git.push("origin", "main:topic")
        repo_with_remote.git.fetch("origin")
        repo_with_remote.git.remote("set-head", "origin", "main")

        assert git_service.remotes() == ["origin"]
        assert sorted(git_service.remote_branches("origin")) == ["main", "topic"]
        assert git_service.remote_branches("upstream") == []

    def test_tracking_remote(self, repo_with_remote, git_service):
        repo_with_remote.git.branch("feature")
        assert git_service.tracking_remote("main") == "origin"
        assert git_service.tracking_remote("feature") == ""

    def test_upstream_short(self, repo_with_remote, git_service):
        repo_with_remote.git.branch("feature")
        assert git_service.upstream_short("main") == "origin/main"
        assert git_service.upstream_short("feature") == ""

    def test_current_upstream(self, repo_with_remote, git_service):
        assert git_service.current_upstream() == "origin/main"
        repo_with_remote.git.checkout("-b", "feature")
        assert git_service.current_upstream() == ""

    def test_commit_of(self, git_repo, git_service):
        assert git_service.commit_of("main") == git_repo.head.commit.hexsha

    def test_commit_of_unknown_ref(self, git_service):
        with pytest.raises(GitOperationError) as exc_info:
            git_service.commit_of("does-not-exist")
        assert exc_info.value.stderr

    def test_remote_has_branch(self, repo_with_remote, git_service):
        assert git_service.remote_has_branch("origin", "main") is True
        assert git_service.remote_has_branch("origin", "nope") is False

    def test_remote_has_branch_unreachable_remote(self, repo_with_remote, git_service, temp_dir):
        repo_with_remote.git.remote("add", "gone", str(temp_dir / "missing.git"))

        with pytest.raises(GitOperationError) as exc_info:
            git_service.remote_has_branch("gone", "main")

        assert exc_info.value.status not in (None, 2)

    def test_branch_exists(self, git_repo, git_service):
        git_repo.git.branch("feature")
        assert git_service.branch_exists("feature") is True
        assert git_service.branch_exists("missing") is False

    def test_ahead_of(self, repo_with_remote, git_service):
        assert git_service.ahead_of("main", "origin/main") is False
        commit_file(repo_with_remote, "new.txt", "x\n", "Local work")
        assert git_service.ahead_of("main", "origin/main") is True

    def test_merge_base_and_rev_list(self, git_repo, git_service):
        base = git_repo.head.commit.hexsha
        git_repo.git.checkout("-b", "feature")
        first = commit_file(git_repo, "a.txt", "a\n", "A")
        second = commit_file(git_repo, "b.txt", "b\n", "B")

        assert git_service.merge_base("feature", "main") == base
        assert git_service.rev_list_reverse(f"{base}..feature") == [first, second]


class TestWorktrees:
    """Test worktree lookups."""

    def test_worktree_for(self, git_repo, git_service, temp_dir):
        git_repo.git.branch("feature")
        worktree = temp_dir / "feature-wt"
        git_repo.git.worktree("add", str(worktree), "feature")

        attached, path = git_service.worktree_for("feature")
        assert attached is True
        assert os.path.realpath(path) == os.path.realpath(str(worktree))
        assert git_service.worktree_for("other") == (False, "")

    def test_find_worktree_records_commit(self, git_repo, git_service, temp_dir):
        git_repo.git.branch("feature")
        git_repo.git.worktree("add", str(temp_dir / "feature-wt"), "feature")

        info = git_service.find_worktree("feature")

        assert info.branch_name == "feature"
        assert git_repo.head.commit.hexsha.startswith(info.commit_sha)
        assert git_service.find_worktree("missing") is None

    def test_is_attached_elsewhere(self, git_repo, git_service, temp_dir):
        git_repo.git.branch("feature")
        git_repo.git.worktree("add", str(temp_dir / "feature-wt"), "feature")

        assert git_service.is_attached_elsewhere("feature") is True
        # The branch checked out right here is not "elsewhere"
        assert git_service.is_attached_elsewhere("main") is False


class TestWorkingTreeState:
    """Test dirtiness and file status."""

    def test_clean_tree(self, git_service):
        assert git_service.dirty() is False

    def test_untracked_files_do_not_make_dirty(self, git_repo, git_service):
        (Path(git_repo.working_dir) / "scratch.txt").write_text("tmp\n")
        assert git_service.dirty() is False

    def test_modified_file_makes_dirty(self, git_repo, git_service):
        (Path(git_repo.working_dir) / "README.md").write_text("changed\n")
        assert git_service.dirty() is True

    def test_staged_file_makes_dirty(self, git_repo, git_service):
        (Path(git_repo.working_dir) / "new.txt").write_text("new\n")
        git_repo.git.add("new.txt")
        assert git_service.dirty() is True

    def test_file_status(self, git_repo, git_service):
        root = Path(git_repo.working_dir)
        commit_file(git_repo, "gone.txt", "x\n", "Add gone")
        (root / "README.md").write_text("changed\n")
        (root / "new.txt").write_text("new\n")
        (root / "staged.txt").write_text("staged\n")
        git_repo.git.add("staged.txt")
        git_repo.git.rm("gone.txt")

        assert git_service.file_status("README.md") is FileStatus.MODIFIED
        assert git_service.file_status("new.txt") is FileStatus.UNTRACKED
        assert git_service.file_status("staged.txt") is FileStatus.STAGED
        assert git_service.file_status("gone.txt") is FileStatus.DELETED

    def test_file_status_is_stable(self, git_repo, git_service):
        (Path(git_repo.working_dir) / "README.md").write_text("changed\n")
        first = git_service.file_status("README.md")
        assert git_service.file_status("README.md") is first

    def test_file_status_of_clean_file(self, git_service):
        assert git_service.file_status("README.md") is FileStatus.UNKNOWN

    def test_diff_names_and_clean_preview(self, git_repo, git_service):
        root = Path(git_repo.working_dir)
        commit_file(git_repo, ".gitignore", "*.log\n", "Ignore logs")
        (root / "README.md").write_text("changed\n")
        (root / "staged.txt").write_text("staged\n")
        git_repo.git.add("staged.txt")
        (root / "b.txt").write_text("b\n")
        (root / "a.log").write_text("log\n")

        assert git_service.diff_names() == ["README.md"]
        assert git_service.diff_names(cached=True) == ["staged.txt"]
        assert git_service.clean_preview() == ["b.txt"]
        assert sorted(git_service.clean_preview(ignored=True)) == ["a.log", "b.txt"]

    def test_index_entry(self, git_repo, git_service):
        entry = git_service.index_entry("README.md")
        assert entry is not None
        mode, sha = entry
        assert mode == "100644"
        assert sha == git_repo.git.rev_parse("HEAD:README.md")
        assert git_service.index_entry("missing.txt") is None


class TestGitOperations:
    """Test mutations."""

    def test_checkout(self, git_repo, git_service):
        git_repo.git.branch("feature")
        git_service.checkout("feature")
        assert git_repo.active_branch.name == "feature"

    def test_checkout_unknown_branch(self, git_service):
        with pytest.raises(GitOperationError) as exc_info:
            git_service.checkout("missing")
        assert exc_info.value.branch == "missing"
        assert "missing" in exc_info.value.stderr

    def test_checkout_new_tracks_remote_branch(self, repo_with_remote, git_service):
        repo_with_remote.git.push("origin", "main:topic")
        repo_with_remote.git.fetch("origin")

        git_service.checkout_new("topic", "origin/topic")

        assert repo_with_remote.active_branch.name == "topic"
        assert git_service.upstream_short("topic") == "origin/topic"

    def test_set_upstream(self, repo_with_remote, git_service):
        repo_with_remote.git.branch("feature")
        git_service.set_upstream("feature", "origin/main")
        assert git_service.tracking_remote("feature") == "origin"

    def test_reset_hard(self, git_repo, git_service):
        first = git_repo.head.commit.hexsha
        commit_file(git_repo, "x.txt", "x\n", "X")
        git_service.reset_hard(first)
        assert git_repo.head.commit.hexsha == first

    def test_commit_empty(self, git_repo, git_service):
        before = git_repo.head.commit
        git_service.commit_empty("chore: empty commit")
        after = git_repo.head.commit
        assert after.parents[0] == before
        assert after.message.strip() == "chore: empty commit"
        assert after.tree == before.tree

    def test_branch_delete_unmerged_needs_force(self, git_repo, git_service):
        git_repo.git.checkout("-b", "feature")
        commit_file(git_repo, "f.txt", "f\n", "Feature")
        git_repo.git.checkout("main")

        with pytest.raises(GitOperationError):
            git_service.branch_delete("feature")
        git_service.branch_delete("feature", force=True)
        assert git_service.branch_exists("feature") is False

    def test_push_set_upstream_and_delete(self, repo_with_remote, remote_repo, git_service):
        repo_with_remote.git.checkout("-b", "feature")

        git_service.push_set_upstream("origin", "feature")
        assert "feature" in [head.name for head in remote_repo.heads]
        assert git_service.upstream_short("feature") == "origin/feature"

        git_service.push_delete("origin", "feature")
        assert "feature" not in [head.name for head in remote_repo.heads]

    def test_fetch_into_fetch_head(self, repo_with_remote, remote_repo, git_service):
        sha = repo_with_remote.head.commit.hexsha
        remote_repo.git.update_ref("refs/pull/1/head", sha)

        git_service.fetch("origin", "refs/pull/1/head")
        assert git_service.commit_of("FETCH_HEAD") == sha

    def test_restore_and_remove_index_entry(self, git_repo, git_service):
        entry = git_service.index_entry("README.md")
        git_service.remove_from_index("README.md")
        assert git_service.index_entry("README.md") is None

        git_service.restore_index_entry("README.md", entry)
        assert git_service.index_entry("README.md") == entry


def test_stderr_text_strips_gitpython_decoration():
    error = git.exc.GitCommandError(["git", "checkout", "x"], 1, stderr="error: pathspec 'x' did not match")
    assert stderr_text(error) == "error: pathspec 'x' did not match"


def test_stderr_text_falls_back_to_status():
    error = git.exc.GitCommandError(["git", "status"], 128, stderr="")
    assert stderr_text(error) == "exit status 128"
