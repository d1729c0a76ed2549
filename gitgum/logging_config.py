"""Logging configuration for gitgum"""
import logging
import sys
from pathlib import Path

LOG_DIR = Path.home() / '.gitgum'
LOG_FILE = LOG_DIR / 'gitgum.log'

# Only quieted outside --debug. "git" must stay out: gitgum's git.* loggers live under it
NOISY_LOGGERS = ('asyncio',)


class ColoredFormatter(logging.Formatter):
    """Formatter that colours the level name when stderr is a terminal."""

    LEVEL_COLORS = {
        logging.DEBUG: '\033[36m',
        logging.INFO: '\033[32m',
        logging.WARNING: '\033[33m',
        logging.ERROR: '\033[31m',
        logging.CRITICAL: '\033[35m',
    }
    RESET = '\033[0m'

    def format(self, record):
        color = self.LEVEL_COLORS.get(record.levelno)
        if color is None or not sys.stderr.isatty():
            return super().format(record)

        # Colour a copy so other handlers (the log file) see the plain name
        colored = logging.makeLogRecord(record.__dict__)
        colored.levelname = f"{color}{record.levelname}{self.RESET}"
        return super().format(colored)


def _level_for(verbose: bool, debug: bool) -> int:
    if debug:
        return logging.DEBUG
    if verbose:
        return logging.INFO
    return logging.WARNING


def _file_handler() -> logging.Handler:
    LOG_DIR.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(LOG_FILE, mode='w')  # One run per file
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter(
        fmt='%(asctime)s - %(threadName)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    ))
    return handler


def _console_handler(level: int, debug: bool) -> logging.Handler:
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    if debug:
        handler.setFormatter(ColoredFormatter(
            fmt='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%H:%M:%S'
        ))
    else:
        handler.setFormatter(ColoredFormatter(fmt='%(levelname)s [%(name)s] %(message)s'))
    return handler


def setup_logging(verbose: bool = False, debug: bool = False) -> None:
    """
    Configure logging for a gitgum run.

    Log records go to stderr so they never mix with command output on stdout.

    Args:
        verbose: Show INFO messages (the git mutations gitgum performs)
        debug: Show DEBUG messages and also write them to ~/.gitgum/gitgum.log
    """
    level = _level_for(verbose, debug)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.DEBUG if debug else logging.WARNING)

    if debug:
        root_logger.addHandler(_file_handler())
    root_logger.addHandler(_console_handler(level, debug))


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger for a gitgum module.

    ``gitgum.services.git.operations`` becomes ``git.operations`` and
    ``gitgum.core.switcher`` becomes ``core.switcher``.

    Args:
        name: Name of the module (typically __name__)
    """
    for prefix in ('gitgum.', 'services.'):
        if name.startswith(prefix):
            name = name[len(prefix):]
    return logging.getLogger(name)
