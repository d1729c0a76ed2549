"""File status model"""
from enum import Enum


class FileStatus(Enum):
    """Status of a single path as reported by `git status --porcelain`."""
    UNTRACKED = "untracked"
    MODIFIED = "modified"
    STAGED = "staged"
    DELETED = "deleted"
    UNKNOWN = "unknown"

    @classmethod
    def from_porcelain(cls, line: str) -> "FileStatus":
        """Classify a porcelain line by its two-character ``XY`` prefix.

        ``??`` is untracked. A non-blank index column means staged, or
        deleted when it is ``D``. Otherwise a non-blank work tree column
        means modified. Anything else, including an empty line, is unknown.
        """
        if len(line) < 2:
            return cls.UNKNOWN

        index_status, worktree_status = line[0], line[1]

        if index_status == "?" and worktree_status == "?":
            return cls.UNTRACKED

        if index_status not in (" ", "?"):
            if index_status == "D":
                return cls.DELETED
            return cls.STAGED

        if worktree_status not in (" ", "?"):
            return cls.MODIFIED

        return cls.UNKNOWN
