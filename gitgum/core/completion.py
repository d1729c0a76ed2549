"""Shell completion scripts"""
import os
import sys
from importlib import resources

from gitgum.constants import COMPLETION_PLACEHOLDER, COMPLETION_SHELLS
from gitgum.exceptions import InvalidInputError


def command_name(argv0: str) -> str:
    """Name the completion is registered for: how the program was invoked."""
    return os.path.basename(argv0) or "gitgum"


def render_completion(shell: str, program: str) -> str:
    """Return the completion script for ``shell`` bound to ``program``.

    Raises:
        InvalidInputError: if ``shell`` is not supported
    """
    if shell not in COMPLETION_SHELLS:
        raise InvalidInputError(
            f"invalid shell type '{shell}'. Must be one of: {', '.join(COMPLETION_SHELLS)}"
        )

    template = resources.files("gitgum").joinpath("completions").joinpath(f"gitgum.{shell}")
    return template.read_text(encoding="utf-8").replace(COMPLETION_PLACEHOLDER, program)


def print_completion(shell: str, program: str) -> None:
    sys.stdout.write(render_completion(shell, program))
