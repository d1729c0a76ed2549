"""Custom exceptions for gitgum"""

from typing import Optional


class GitgumError(Exception):
    """Base exception for all gitgum errors."""
    pass


class GitOperationError(GitgumError):
    """Exception raised when an underlying git invocation fails.

    The stderr text reported by git is kept on ``stderr`` so callers can
    recognise specific diagnostics.
    """

    def __init__(self, operation: str, branch: Optional[str] = None, message: Optional[str] = None,
                 status: Optional[int] = None):
        self.operation = operation
        self.branch = branch
        self.message = message
        self.stderr = message or ""
        self.status = status  # git exit code, when git itself failed

        error_msg = f"Git operation '{operation}' failed"
        if branch:
            error_msg += f" for branch '{branch}'"
        if message:
            error_msg += f": {message}"

        super().__init__(error_msg)


class NotInRepositoryError(GitgumError):
    """Exception raised when the working directory is not inside a work tree."""

    def __init__(self):
        super().__init__("not inside a git repository")


class DetachedHeadError(GitOperationError):
    """Exception raised when repository is in detached HEAD state."""

    def __init__(self):
        super().__init__("current_branch", message="Repository is in detached HEAD state")


class PreconditionError(GitgumError):
    """Exception raised when a command cannot start (no remotes, no branches, ...)."""
    pass


class LocalChangesError(PreconditionError):
    """Exception raised when tracked changes would be overwritten by a checkout."""

    def __init__(self):
        super().__init__("local changes would be overwritten")


class UserCancelledError(GitgumError):
    """Exception raised when the user cancels a picker or declines a required prompt."""

    def __init__(self, message: str = "Aborting."):
        super().__init__(message)


class InvalidInputError(GitgumError):
    """Exception raised for malformed selections (PR labels, remote/branch pairs)."""
    pass


class ParseError(GitgumError):
    """Exception raised when git output does not have the expected shape."""
    pass
