"""Tests for interactive branch switching"""
from pathlib import Path
import pytest

from gitgum.core.switcher import BranchSwitcher
from gitgum.exceptions import LocalChangesError, UserCancelledError

from conftest import commit_file


class TestSwitchToLocal:
    """Switching to local branches."""

    def test_switch_to_local_branch(self, git_repo, git_service, config, make_picker, capsys):
        git_repo.git.branch("feature")
        picker = make_picker("local: feature")

        BranchSwitcher(git_service, picker, config).run()

        assert git_repo.active_branch.name == "feature"
        out = capsys.readouterr().out
        assert "Current branch is: main" in out
        assert "Switched to branch 'feature'." in out

    def test_current_branch_shows_remote(self, repo_with_remote, git_service, config, make_picker, capsys):
        repo_with_remote.git.branch("feature")
        picker = make_picker("local: feature")

        BranchSwitcher(git_service, picker, config).run()

        assert "Current branch is: origin/main" in capsys.readouterr().out

    def test_dirty_tree_aborts_before_listing(self, git_repo, git_service, config, make_picker, capsys):
        git_repo.git.branch("feature")
        (Path(git_repo.working_dir) / "README.md").write_text("changed\n")
        picker = make_picker()

        with pytest.raises(LocalChangesError):
            BranchSwitcher(git_service, picker, config).run()

        assert picker.prompts == []
        assert git_repo.active_branch.name == "main"
        assert "Please commit or stash them before switching." in capsys.readouterr().err

    def test_untracked_files_do_not_block(self, git_repo, git_service, config, make_picker):
        git_repo.git.branch("feature")
        (Path(git_repo.working_dir) / "scratch.txt").write_text("tmp\n")

        BranchSwitcher(git_service, make_picker("local: feature"), config).run()

        assert git_repo.active_branch.name == "feature"

    def test_cancelled_selection(self, git_repo, git_service, config, make_picker):
        git_repo.git.branch("feature")
        picker = make_picker(UserCancelledError())

        with pytest.raises(UserCancelledError, match="No branch selected"):
            BranchSwitcher(git_service, picker, config).run()

        assert git_repo.active_branch.name == "main"


class TestSwitchToRemote:
    """Switching to remote branches."""

    def test_creates_tracking_branch(self, repo_with_remote, git_service, config, make_picker, capsys):
        repo_with_remote.git.push("origin", "main:topic")
        repo_with_remote.git.fetch("origin")
        picker = make_picker("remote: origin/topic", True)

        BranchSwitcher(git_service, picker, config).run()

        assert repo_with_remote.active_branch.name == "topic"
        assert git_service.upstream_short("topic") == "origin/topic"
        assert picker.confirm_defaults == [True]
        assert (
            "Created and switched to local branch 'topic' tracking remote branch 'origin/topic'."
            in capsys.readouterr().out
        )

    def test_branch_named_after_its_remote(self, repo_with_remote, git_service, config, make_picker):
        repo_with_remote.git.push("origin", "main:origin/foo")
        repo_with_remote.git.fetch("origin")
        picker = make_picker("remote: origin/origin/foo", True)

        BranchSwitcher(git_service, picker, config).run()

        assert "remote: origin/origin/foo" in picker.offered[0]
        assert repo_with_remote.active_branch.name == "origin/foo"
        assert git_service.upstream_short("origin/foo") == "origin/origin/foo"

    def test_declining_tracking_branch_aborts(self, repo_with_remote, git_service, config, make_picker):
        repo_with_remote.git.push("origin", "main:topic")
        repo_with_remote.git.fetch("origin")
        picker = make_picker("remote: origin/topic", False)

        with pytest.raises(UserCancelledError, match="Not creating a local tracking branch"):
            BranchSwitcher(git_service, picker, config).run()

        assert git_service.branch_exists("topic") is False

    def _diverged_topic(self, repo):
        """Local topic one commit behind origin/topic, tracking origin."""
        repo.git.checkout("-b", "topic")
        remote_sha = commit_file(repo, "topic.txt", "remote\n", "Remote work")
        repo.git.push("-u", "origin", "topic")
        repo.git.reset("--hard", "HEAD~1")
        local_sha = repo.head.commit.hexsha
        repo.git.checkout("main")
        return local_sha, remote_sha

    def test_reconcile_resets_diverged_branch(self, repo_with_remote, git_service, config, make_picker, capsys):
        local_sha, remote_sha = self._diverged_topic(repo_with_remote)
        assert local_sha != remote_sha
        picker = make_picker("remote: origin/topic", True)

        BranchSwitcher(git_service, picker, config).run()

        assert repo_with_remote.active_branch.name == "topic"
        assert git_service.commit_of("topic") == remote_sha
        assert picker.confirm_defaults == [False]
        assert "Reset local branch 'topic' to remote branch 'origin/topic'." in capsys.readouterr().out

    def test_reconcile_declined_reset_still_switches(self, repo_with_remote, git_service, config, make_picker, capsys):
        local_sha, _ = self._diverged_topic(repo_with_remote)
        picker = make_picker("remote: origin/topic", False)

        BranchSwitcher(git_service, picker, config).run()

        assert repo_with_remote.active_branch.name == "topic"
        assert git_service.commit_of("topic") == local_sha
        assert "Not resetting local branch." in capsys.readouterr().err

    def test_reconcile_up_to_date(self, repo_with_remote, git_service, config, make_picker, capsys):
        repo_with_remote.git.checkout("-b", "topic")
        repo_with_remote.git.push("-u", "origin", "topic")
        repo_with_remote.git.checkout("main")
        picker = make_picker("remote: origin/topic")

        BranchSwitcher(git_service, picker, config).run()

        assert repo_with_remote.active_branch.name == "topic"
        out = capsys.readouterr().out
        assert "is up to date with remote branch 'origin/topic'" in out
        assert "Switched to branch 'topic' tracking remote branch 'origin/topic'." in out

    def test_reconcile_sets_upstream_when_accepted(self, repo_with_remote, git_service, config, make_picker):
        repo_with_remote.git.push("origin", "main:topic")
        repo_with_remote.git.fetch("origin")
        repo_with_remote.git.branch("--no-track", "topic", "main")
        picker = make_picker("remote: origin/topic", True)

        BranchSwitcher(git_service, picker, config).run()

        assert git_service.tracking_remote("topic") == "origin"
        assert repo_with_remote.active_branch.name == "topic"
        assert picker.confirm_defaults == [False]

    def test_reconcile_declined_upstream_aborts(self, repo_with_remote, git_service, config, make_picker):
        repo_with_remote.git.push("origin", "main:topic")
        repo_with_remote.git.fetch("origin")
        repo_with_remote.git.branch("--no-track", "topic", "main")
        picker = make_picker("remote: origin/topic", False)

        with pytest.raises(UserCancelledError, match="Not setting tracking reference"):
            BranchSwitcher(git_service, picker, config).run()

        assert repo_with_remote.active_branch.name == "main"
        assert git_service.tracking_remote("topic") == ""
