"""Branch model and the selection items exchanged with the picker"""
from enum import Enum
from dataclasses import dataclass
from typing import Optional

from gitgum.exceptions import InvalidInputError


class BranchKind(Enum):
    """Classification of a switch candidate. Values are the picker tags."""
    LOCAL_ONLY = "local"
    LOCAL_TRACKING_REMOTE = "local/remote"
    REMOTE_ONLY = "remote"

    @property
    def is_local(self) -> bool:
        return self is not BranchKind.REMOTE_ONLY


@dataclass(frozen=True)
class BranchRef:
    """A branch name with its classification.

    Remote-only references keep the branch name in ``name`` and the owning
    remote in ``remote``. The name is whatever follows the first ``/`` of
    ``<remote>/<branch>``, so a branch called ``origin/foo`` on ``origin`` is
    stored as ``name="origin/foo", remote="origin"``.
    """
    name: str
    kind: BranchKind
    remote: Optional[str] = None

    def __post_init__(self):
        if self.kind is BranchKind.REMOTE_ONLY and not self.remote:
            raise ValueError(f"remote branch '{self.name}' needs a remote")

    @property
    def full_name(self) -> str:
        """``<remote>/<branch>`` for remote references, the plain name otherwise."""
        if self.remote:
            return f"{self.remote}/{self.name}"
        return self.name


@dataclass(frozen=True)
class SelectionItem:
    """A ``(tag, payload)`` pair rendered as ``"<tag>: <payload>"`` in the picker."""
    kind: BranchKind
    payload: str

    SEPARATOR = ": "

    def __str__(self) -> str:
        return f"{self.kind.value}{self.SEPARATOR}{self.payload}"

    @classmethod
    def from_branch(cls, ref: BranchRef) -> "SelectionItem":
        return cls(ref.kind, ref.full_name)

    @classmethod
    def parse(cls, text: str) -> "SelectionItem":
        """Parse a picker line back into a selection item.

        Raises:
            InvalidInputError: if the line has no tag or the tag is unknown
        """
        tag, sep, payload = text.partition(cls.SEPARATOR)
        if not sep or not payload:
            raise InvalidInputError(f"invalid selection: {text}")
        try:
            kind = BranchKind(tag)
        except ValueError:
            raise InvalidInputError(f"unknown branch type: {tag}") from None
        return cls(kind, payload)

    def to_branch(self) -> BranchRef:
        """Resolve the payload into a BranchRef, splitting ``<remote>/<branch>``."""
        if self.kind.is_local:
            return BranchRef(self.payload, self.kind)
        remote, sep, branch = self.payload.partition("/")
        if not sep or not remote or not branch:
            raise InvalidInputError(f"invalid remote branch format: {self.payload}")
        return BranchRef(branch, self.kind, remote)
