"""Working tree cleanup"""
import os
from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable, List, Optional, Tuple

from rich.console import Console
from rich.markup import escape

from gitgum.config import CleanOptions
from gitgum.constants import IGNORE_FILE_NAME
from gitgum.exceptions import GitOperationError
from gitgum.formatters import format_file_list
from gitgum.models.status import FileStatus
from gitgum.logging_config import get_logger

if TYPE_CHECKING:
    from gitgum.config import Config
    from gitgum.services.git_service import GitService
    from gitgum.ui.picker import FuzzyPicker

console = Console(highlight=False, soft_wrap=True)
logger = get_logger(__name__)


def is_ignore_file(path: str) -> bool:
    return path == IGNORE_FILE_NAME or path.endswith(f"/{IGNORE_FILE_NAME}")


def unique(paths: Iterable[str]) -> List[str]:
    """Drop repeated paths, keeping first-seen order."""
    seen = set()
    result = []
    for path in paths:
        if path not in seen:
            seen.add(path)
            result.append(path)
    return result


@dataclass
class IgnoreFileBackup:
    """Original state of an ignore file, captured before the preview touches it."""

    path: str  # Relative to the top of the working tree
    status: FileStatus
    content: Optional[bytes]  # None when the file is absent from the working tree
    index_entry: Optional[Tuple[str, str]]  # (mode, blob sha), None when not in the index


class TreeCleaner:
    """Discards tracked changes and removes untracked (and ignored) files.

    Which untracked files count as ignored depends on the ignore files, which
    may themselves be among the changes being discarded. Those are cleaned up
    first so the preview matches what the real cleanup will remove, then put
    back while the user decides.
    """

    def __init__(
        self,
        git_service: "GitService",
        picker: "FuzzyPicker",
        config: "Config",
        options: CleanOptions,
    ):
        self.git_service = git_service
        self.picker = picker
        self.config = config
        self.options = options

    def run(self) -> None:
        self.git_service.ensure_repo()

        if self.options.is_noop:
            console.print("Nothing to clean (all options disabled)")
            return

        affected = self.affected_files()
        if not affected:
            console.print("Nothing to clean (working tree is clean)")
            return

        backups: List[IgnoreFileBackup] = []
        ignore_files = [path for path in affected if is_ignore_file(path)]
        if ignore_files:
            console.print(
                "Detected changes to .gitignore files. "
                "Applying .gitignore changes first to get accurate cleanup preview..."
            )
            backups = [self._backup(path) for path in ignore_files]
            self._apply_ignore_cleanup(backups)
            try:
                affected = unique(ignore_files + self.affected_files())
            finally:
                console.print("Restoring .gitignore files for confirmation...")
                self._restore(backups)

        self._show_preview(affected)

        if not self.options.yes:
            if not self.picker.confirm("Proceed with cleanup? This cannot be undone", default=False):
                console.print("Cleanup cancelled")
                return

        if backups:
            console.print("Re-applying .gitignore cleanup...")
            self._apply_ignore_cleanup(backups)

        if self.options.changes:
            console.print("Discarding changes...")
            output = self.git_service.reset_hard()
            if output:
                console.print(escape(output))

        if self.options.untracked:
            console.print("Removing untracked files...")
            output = self.git_service.clean(ignored=self.options.ignored)
            if output:
                console.print(escape(output))

        console.print("Clean complete")

    def affected_files(self) -> List[str]:
        """Paths the cleanup would touch, relative to the top of the working tree."""
        paths: List[str] = []
        if self.options.changes:
            paths.extend(self.git_service.diff_names())
            paths.extend(self.git_service.diff_names(cached=True))
        if self.options.untracked:
            paths.extend(self.git_service.clean_preview(ignored=self.options.ignored))
        return unique(paths)

    def _show_preview(self, affected: List[str]) -> None:
        console.print(f"Files to be discarded ({len(affected)}):")
        for line in format_file_list(affected, self.config.max_display):
            console.print(escape(line))
        console.print()

    def _full_path(self, path: str) -> str:
        return os.path.join(self.git_service.working_dir, path)

    def _backup(self, path: str) -> IgnoreFileBackup:
        full_path = self._full_path(path)
        content = None
        if os.path.isfile(full_path):
            with open(full_path, "rb") as f:
                content = f.read()

        backup = IgnoreFileBackup(
            path=path,
            status=self.git_service.file_status(path),
            content=content,
            index_entry=self.git_service.index_entry(path),
        )
        logger.debug(f"Backed up {path} ({backup.status.value})")
        return backup

    def _apply_ignore_cleanup(self, backups: List[IgnoreFileBackup]) -> None:
        """Put each ignore file in the state the cleanup would leave it in."""
        for backup in backups:
            if backup.status is FileStatus.UNTRACKED:
                self._remove_file(backup.path)
                continue

            try:
                self.git_service.checkout_path_from_head(backup.path)
            except GitOperationError as e:
                # Added to the index but never committed: a hard reset drops it
                logger.debug(f"{backup.path} is not in HEAD: {e}")
                if backup.index_entry is not None:
                    self.git_service.remove_from_index(backup.path)
                self._remove_file(backup.path)

    def _restore(self, backups: List[IgnoreFileBackup]) -> None:
        for backup in backups:
            if backup.index_entry is not None:
                self.git_service.restore_index_entry(backup.path, backup.index_entry)
            elif self.git_service.index_entry(backup.path) is not None:
                self.git_service.remove_from_index(backup.path)

            if backup.content is None:
                self._remove_file(backup.path)
            else:
                full_path = self._full_path(backup.path)
                os.makedirs(os.path.dirname(full_path), exist_ok=True)
                with open(full_path, "wb") as f:
                    f.write(backup.content)
            logger.debug(f"Restored {backup.path}")

    def _remove_file(self, path: str) -> None:
        full_path = self._full_path(path)
        if os.path.isfile(full_path):
            os.remove(full_path)
