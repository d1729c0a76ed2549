"""Formatting utilities for gitgum.

This package provides formatting functions for command output:
- text: section headers, file listings, branch labels
"""

from .text import format_header, format_file_list, format_current_branch

__all__ = [
    "format_header",
    "format_file_list",
    "format_current_branch",
]
