"""Remote model"""
from dataclasses import dataclass
from typing import List


@dataclass(frozen=True)
class Remote:
    """A named remote and its URL."""
    name: str
    url: str

    def __str__(self) -> str:
        return f"{self.name} {self.url}"


def parse_remotes(remote_output: str) -> List[Remote]:
    """Parse `git remote -v` output into unique name/URL pairs.

    The fetch and push lines of a remote collapse into one entry; order of
    first appearance is kept.
    """
    remotes: List[Remote] = []
    seen = set()
    for line in remote_output.splitlines():
        fields = line.split()
        if len(fields) < 2:
            continue
        remote = Remote(fields[0], fields[1])
        if remote not in seen:
            seen.add(remote)
            remotes.append(remote)
    return remotes
