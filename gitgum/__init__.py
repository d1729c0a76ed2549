"""gitgum - interactive helpers for everyday git work."""

from gitgum.__version__ import __version__
from gitgum.cli.main import main

__all__ = ["__version__", "main"]
