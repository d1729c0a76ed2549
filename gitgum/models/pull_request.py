"""Pull request reference model"""
import re
from dataclasses import dataclass

from gitgum.constants import PR_BRANCH_PREFIX, PR_LABEL_PATTERN
from gitgum.exceptions import InvalidInputError

_LABEL_RE = re.compile(PR_LABEL_PATTERN)


@dataclass(frozen=True)
class PullRequestRef:
    """A ``refs/pull/<number>/<head|merge>`` ref advertised by a remote."""
    number: int
    ref_type: str  # "head" or "merge"

    @property
    def ref(self) -> str:
        return f"refs/pull/{self.number}/{self.ref_type}"

    @property
    def branch_name(self) -> str:
        """Local branch the pull request is checked out as."""
        return f"{PR_BRANCH_PREFIX}{self.number}"

    @property
    def label(self) -> str:
        """Picker line, e.g. ``PR #42 (head)``."""
        return f"PR #{self.number} ({self.ref_type})"

    @classmethod
    def from_label(cls, label: str) -> "PullRequestRef":
        """Parse a picker line back into a reference.

        Raises:
            InvalidInputError: if the label is not of the form ``PR #<n> (<type>)``
        """
        match = _LABEL_RE.match(label)
        if not match:
            raise InvalidInputError(f"invalid PR selection format: {label}")
        return cls(int(match.group(1)), match.group(2))
