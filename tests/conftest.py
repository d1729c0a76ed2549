"""Pytest fixtures for gitgum tests"""
import logging
import tempfile
import time
from pathlib import Path
import pytest
import git

from gitgum.config import Config
from gitgum.logging_config import ColoredFormatter, NOISY_LOGGERS
from gitgum.services.git_service import GitService


def commit_file(repo: git.Repo, name: str, content: str, message: str) -> str:
    """Write ``name`` in the working tree, commit it and return the new commit id."""
    path = Path(repo.working_dir) / name
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)
    repo.git.add(name)
    repo.git.commit("-m", message)
    return repo.head.commit.hexsha


class ScriptedPicker:
    """Picker fake that replays queued answers.

    Answers are consumed in order by ``select`` and ``confirm``. An exception
    instance is raised instead of answered. For a live (locked) option list,
    ``select`` waits until its answer has been streamed in.
    """

    def __init__(self, *answers, timeout: float = 5.0):
        self.answers = list(answers)
        self.timeout = timeout
        self.prompts = []
        self.confirm_defaults = []
        self.offered = []

    def _next(self):
        if not self.answers:
            raise AssertionError(f"no scripted answer left (prompts so far: {self.prompts})")
        answer = self.answers.pop(0)
        if isinstance(answer, BaseException):
            raise answer
        return answer

    def select(self, prompt, options, lock=None, cancel=None):
        self.prompts.append(prompt)
        try:
            answer = self._next()
            if lock is None:
                snapshot = list(options)
            else:
                deadline = time.monotonic() + self.timeout
                while True:
                    with lock:
                        snapshot = list(options)
                    if answer in snapshot or time.monotonic() > deadline:
                        break
                    time.sleep(0.01)
            self.offered.append(snapshot)
            assert answer in snapshot, f"{answer!r} was never offered: {snapshot}"
            return answer
        finally:
            if cancel is not None:
                cancel.set()

    def confirm(self, prompt, default):
        self.prompts.append(prompt)
        self.confirm_defaults.append(default)
        return self._next()


@pytest.fixture
def temp_dir():
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def git_repo(temp_dir):
    """Create a real Git repository with one commit on ``main``."""
    repo_path = temp_dir / "test_repo"
    repo_path.mkdir()

    repo = git.Repo.init(repo_path)

    # Configure git user for commits
    repo.config_writer().set_value("user", "name", "Test User").release()
    repo.config_writer().set_value("user", "email", "test@example.com").release()

    commit_file(repo, "README.md", "# test repo\n", "Initial commit")
    repo.git.branch("-M", "main")

    yield repo

    repo.close()


@pytest.fixture
def remote_repo(temp_dir, git_repo):
    """Bare repository registered as ``origin`` with ``main`` pushed and tracked."""
    bare_path = temp_dir / "origin.git"
    bare = git.Repo.init(bare_path, bare=True)
    git_repo.create_remote("origin", str(bare_path))
    git_repo.git.push("-u", "origin", "main")

    yield bare

    bare.close()


@pytest.fixture
def repo_with_remote(git_repo, remote_repo):
    """The working repository of ``remote_repo``."""
    return git_repo


@pytest.fixture
def config(git_repo):
    """Configuration pointing at ``git_repo`` without pacing delays."""
    return Config(repo_path=git_repo.working_dir, stream_delay=0)


@pytest.fixture
def git_service(git_repo):
    return GitService(git_repo.working_dir)


@pytest.fixture
def make_picker():
    """Factory for ScriptedPicker instances."""
    return ScriptedPicker


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop the handlers setup_logging attaches so later tests keep pytest's capture."""
    root = logging.getLogger()
    level = root.level
    yield
    for handler in root.handlers[:]:
        if isinstance(handler, logging.FileHandler) or isinstance(handler.formatter, ColoredFormatter):
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.NOTSET)
