"""Repository status overview"""
import sys
from typing import TYPE_CHECKING, Optional, TextIO

from gitgum.constants import HEADER_BRANCHES, HEADER_CHANGES, HEADER_REMOTES, HEADER_STATUS
from gitgum.formatters import format_header
from gitgum.models.remote import parse_remotes

if TYPE_CHECKING:
    from gitgum.services.git_service import GitService


class StatusReport:
    """Prints branches, remotes, changes and the tracking summary line.

    Output is written verbatim: git's own text and the raw ANSI headers must
    reach the terminal unchanged.
    """

    def __init__(self, git_service: "GitService", out: Optional[TextIO] = None):
        self.git_service = git_service
        self.out = out

    def _print(self, text: str) -> None:
        print(text, file=self.out or sys.stdout)

    def run(self) -> None:
        self.git_service.ensure_repo()

        self._print(format_header(HEADER_BRANCHES))
        self._print(self.git_service.branch_verbose())

        remotes = parse_remotes(self.git_service.remote_verbose())
        if remotes:
            self._print(format_header(HEADER_REMOTES))
            for remote in remotes:
                self._print(str(remote))

        changes = self.git_service.status_short()
        if changes.strip():
            self._print(format_header(HEADER_CHANGES))
            self._print(changes)

        self._print(format_header(HEADER_STATUS))
        lines = self.git_service.status_short_branch().splitlines()
        if lines:
            self._print(lines[0])
