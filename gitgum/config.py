"""Configuration handling for gitgum"""

import os
from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class Config:
    """Configuration for gitgum with validation."""

    repo_path: str = field(default_factory=os.getcwd)

    # Output
    verbose: bool = False
    debug: bool = False

    # Branch enumeration
    stream_delay: float = 0.003  # Pause between appends to the live picker list (seconds)
    queue_size: int = 1000

    # Prompts
    protected_branches: List[str] = field(default_factory=lambda: ["main", "master"])
    max_display: int = 20  # Files listed before "... and N more files"

    def __post_init__(self):
        """Validate configuration after initialization."""
        self._validate_repo_path()
        self._validate_stream_delay()
        self._validate_queue_size()
        self._validate_max_display()
        self._validate_protected_branches()

    def _validate_repo_path(self):
        """Validate repo_path is not empty."""
        if not self.repo_path or not str(self.repo_path).strip():
            raise ValueError("repo_path cannot be empty")
        self.repo_path = str(self.repo_path)

    def _validate_stream_delay(self):
        """Validate stream_delay is not negative."""
        if self.stream_delay < 0:
            raise ValueError(f"stream_delay must not be negative, got {self.stream_delay}")

    def _validate_queue_size(self):
        """Validate queue_size is positive."""
        if self.queue_size <= 0:
            raise ValueError(f"queue_size must be positive, got {self.queue_size}")

    def _validate_max_display(self):
        """Validate max_display is positive."""
        if self.max_display <= 0:
            raise ValueError(f"max_display must be positive, got {self.max_display}")

    def _validate_protected_branches(self):
        """Validate protected_branches list."""
        if not isinstance(self.protected_branches, list):
            raise ValueError("protected_branches must be a list")

    def to_dict(self) -> dict:
        """Convert config to dictionary."""
        return {
            "repo_path": self.repo_path,
            "verbose": self.verbose,
            "debug": self.debug,
            "stream_delay": self.stream_delay,
            "queue_size": self.queue_size,
            "protected_branches": self.protected_branches,
            "max_display": self.max_display,
        }

    def get(self, key: str, default=None):
        """Get config value by key."""
        return getattr(self, key, default)

    @classmethod
    def from_dict(cls, config_dict: dict) -> "Config":
        """Create Config from dictionary."""
        known_fields = {
            "repo_path",
            "verbose",
            "debug",
            "stream_delay",
            "queue_size",
            "protected_branches",
            "max_display",
        }

        filtered = {k: v for k, v in config_dict.items() if k in known_fields}
        return cls(**filtered)


@dataclass
class CleanOptions:
    """Resolved options for the clean command.

    ``None`` means "not given on the command line" so the defaults
    (changes and untracked on, ignored off) can be told apart from an
    explicit ``--changes=false``.
    """

    changes: Optional[bool] = None
    untracked: Optional[bool] = None
    ignored: Optional[bool] = None
    all: bool = False
    yes: bool = False

    def __post_init__(self):
        if self.changes is None:
            self.changes = True
        if self.untracked is None:
            self.untracked = True
        if self.ignored is None:
            self.ignored = False

        if self.all:
            self.changes = True
            self.untracked = True
            self.ignored = True

        # Removing ignored files only makes sense together with untracked ones
        if self.ignored:
            self.untracked = True

    @property
    def is_noop(self) -> bool:
        """True when neither tracked changes nor untracked files are targeted."""
        return not self.changes and not self.untracked
