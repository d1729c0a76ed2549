"""Plain-text formatting for command output."""

from typing import List

from gitgum.constants import ANSI_HEADER, ANSI_RESET


def format_header(title: str) -> str:
    """
    Wrap a section header in its ANSI colour.

    Args:
        title: Header text, e.g. "--- BRANCHES ---..."

    Returns:
        Header surrounded by the raw SGR start and reset sequences
    """
    return f"{ANSI_HEADER}{title}{ANSI_RESET}"


def format_file_list(paths: List[str], max_display: int) -> List[str]:
    """
    Format affected paths as indented lines, capped at ``max_display``.

    Args:
        paths: Paths in display order
        max_display: Maximum number of paths listed individually

    Returns:
        One line per listed path, followed by a summary line when paths were
        left out.

    Example:
        ["  a.txt", "  b.txt", "  ... and 3 more files"]
    """
    lines = [f"  {path}" for path in paths[:max_display]]
    if len(paths) > max_display:
        lines.append(f"  ... and {len(paths) - max_display} more files")
    return lines


def format_current_branch(branch: str, tracking_remote: str) -> str:
    """Render the current branch as ``<remote>/<branch>``, or just ``<branch>`` if untracked."""
    if tracking_remote:
        return f"{tracking_remote}/{branch}"
    return branch
