"""Concurrent enumeration of switch candidates"""
import queue
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import TYPE_CHECKING, Callable, List, Optional

from gitgum.exceptions import GitgumError
from gitgum.models.branch import BranchKind, SelectionItem
from gitgum.logging_config import get_logger

if TYPE_CHECKING:
    from gitgum.config import Config
    from gitgum.services.git_service import GitService

logger = get_logger(__name__)

# Put on the queue by every producer when it is finished
_PRODUCER_DONE = object()

_QUEUE_POLL_INTERVAL = 0.05


class OptionStore:
    """Deduplicated, append-only option list shared with the picker.

    The list and the seen-set are guarded by a single lock. Appenders take it
    for check-and-insert; readers take it to snapshot.
    """

    def __init__(self):
        self._items: List[str] = []
        self._seen = set()
        self._lock = threading.Lock()

    @property
    def lock(self) -> threading.Lock:
        return self._lock

    @property
    def items(self) -> List[str]:
        """The live backing list. Only read it while holding ``lock``."""
        return self._items

    def add(self, item: str) -> bool:
        """Append ``item`` unless it was seen before. Returns True if appended."""
        with self._lock:
            if item in self._seen:
                return False
            self._seen.add(item)
            self._items.append(item)
            return True

    def snapshot(self) -> List[str]:
        with self._lock:
            return list(self._items)

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)


class BranchEnumerator:
    """Streams local and remote branch candidates into an OptionStore.

    One producer lists local branches and one producer per remote lists that
    remote's branches. Producers feed a bounded queue; a single consumer
    thread deduplicates into the store, pausing briefly between appends so a
    live picker can keep up.
    """

    def __init__(
        self,
        git_service: "GitService",
        config: "Config",
        store: Optional[OptionStore] = None,
        cancel: Optional[threading.Event] = None,
    ):
        self.git_service = git_service
        self.config = config
        self.store = store if store is not None else OptionStore()
        self.cancel = cancel if cancel is not None else threading.Event()
        self._queue: "queue.Queue" = queue.Queue(maxsize=config.queue_size)
        self._executor: Optional[ThreadPoolExecutor] = None
        self._consumer: Optional[threading.Thread] = None
        self._current_path = ""

    def start(self, current_branch: str, tracking_remote: str) -> None:
        """Launch the producers and the consumer and return immediately.

        Args:
            current_branch: Branch checked out in this worktree, never listed as local
            tracking_remote: Remote the current branch tracks ("" if none)
        """
        self._current_path = self.git_service.working_dir
        remotes = self.git_service.remotes()
        producers: List[tuple] = [("local", self._produce_local, (current_branch,))]
        for remote in remotes:
            producers.append(
                (remote, self._produce_remote, (remote, current_branch, tracking_remote))
            )
        logger.debug(f"Starting {len(producers)} branch producers")

        self._executor = ThreadPoolExecutor(
            max_workers=len(producers), thread_name_prefix="gitgum-producer"
        )
        for name, target, args in producers:
            self._executor.submit(self._run_producer, name, target, *args)

        self._consumer = threading.Thread(
            target=self._consume,
            args=(len(producers),),
            name="gitgum-consumer",
            daemon=True,
        )
        self._consumer.start()

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until the consumer has drained every producer (or was cancelled).

        Returns:
            True if the consumer finished within ``timeout``
        """
        if self._consumer is None:
            return True
        self._consumer.join(timeout)
        return not self._consumer.is_alive()

    def stop(self) -> None:
        """Cancel all producers and the consumer and wait for them to exit."""
        self.cancel.set()
        if self._executor is not None:
            self._executor.shutdown(wait=True)
        if self._consumer is not None:
            self._consumer.join()
        logger.debug(f"Enumerator stopped with {len(self.store)} candidates")

    def enumerate_all(self, current_branch: str, tracking_remote: str) -> List[str]:
        """Run the enumeration to completion and return the candidate lines."""
        self.start(current_branch, tracking_remote)
        try:
            self.wait()
        finally:
            self.stop()
        return self.store.snapshot()

    def _emit(self, item: object) -> bool:
        """Put ``item`` on the queue, giving up once cancelled."""
        while not self.cancel.is_set():
            try:
                self._queue.put(item, timeout=_QUEUE_POLL_INTERVAL)
                return True
            except queue.Full:
                continue
        return False

    def _run_producer(self, name: str, target: Callable, *args) -> None:
        try:
            target(*args)
        except Exception as e:
            # A failing remote must not take the other producers down
            logger.error(f"Failed to list {name} branches: {e}")
        finally:
            self._emit(_PRODUCER_DONE)

    def _produce_local(self, current_branch: str) -> None:
        for branch in self.git_service.local_branches():
            if self.cancel.is_set():
                return
            if branch == current_branch:
                continue
            if self.git_service.is_attached_elsewhere(branch, self._current_path):
                logger.debug(f"Skipping {branch}: checked out in another worktree")
                continue

            try:
                remote = self.git_service.tracking_remote(branch)
            except GitgumError as e:
                logger.debug(f"Could not read upstream of {branch}: {e}")
                remote = ""

            kind = BranchKind.LOCAL_TRACKING_REMOTE if remote else BranchKind.LOCAL_ONLY
            if not self._emit(SelectionItem(kind, branch)):
                return

    def _produce_remote(self, remote: str, current_branch: str, tracking_remote: str) -> None:
        for branch in self.git_service.remote_branches(remote):
            if self.cancel.is_set():
                return
            if remote == tracking_remote and branch == current_branch:
                continue
            # Any worktree counts here, including this one
            if self.git_service.worktree_for(branch)[0]:
                logger.debug(f"Skipping {remote}/{branch}: {branch} is checked out in a worktree")
                continue

            if not self._emit(SelectionItem(BranchKind.REMOTE_ONLY, f"{remote}/{branch}")):
                return

    def _consume(self, producer_count: int) -> None:
        remaining = producer_count
        while remaining and not self.cancel.is_set():
            try:
                item = self._queue.get(timeout=_QUEUE_POLL_INTERVAL)
            except queue.Empty:
                continue

            if item is _PRODUCER_DONE:
                remaining -= 1
                continue

            if self.store.add(str(item)) and self.config.stream_delay:
                self.cancel.wait(self.config.stream_delay)
