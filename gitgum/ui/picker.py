"""Inline fuzzy picker built on textual."""

import threading
from typing import List, Optional, Sequence

from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal
from textual.widgets import Input, OptionList, Static
from textual.widgets.option_list import Option

from gitgum.constants import NO, YES
from gitgum.exceptions import UserCancelledError
from gitgum.logging_config import get_logger

logger = get_logger(__name__)

# How often a picker over a growing list re-reads it (seconds)
POLL_INTERVAL = 0.05


def matches(query: str, item: str) -> bool:
    """True iff every whitespace-separated token of ``query`` occurs in ``item``.

    Matching is case-insensitive. The empty query matches everything.
    """
    haystack = item.lower()
    return all(token in haystack for token in query.lower().split())


class PickerApp(App[Optional[str]]):
    """Single-choice picker with a filter line on top of the option list.

    With a ``lock`` the option sequence may grow while the picker is open;
    it is re-read under the lock every ``poll_interval`` seconds. Setting
    ``cancel`` from outside closes the picker without a choice.
    """

    CSS = """
    Screen {
        layout: vertical;
    }

    Screen:inline {
        height: 40vh;
    }

    #prompt-row {
        height: 1;
    }

    #prompt {
        width: auto;
        color: $accent;
    }

    #query {
        border: none;
        height: 1;
        padding: 0;
    }

    #counter {
        height: 1;
        color: $text-muted;
    }

    #options {
        border: none;
        height: 1fr;
    }
    """

    BINDINGS = [
        Binding("escape", "cancel", "Cancel", priority=True),
        Binding("ctrl+c", "cancel", "Cancel", show=False, priority=True),
        Binding("up", "cursor_up", show=False, priority=True),
        Binding("down", "cursor_down", show=False, priority=True),
        Binding("ctrl+p", "cursor_up", show=False),
        Binding("ctrl+n", "cursor_down", show=False),
    ]

    def __init__(
        self,
        prompt: str,
        options: Sequence[str],
        lock: Optional[threading.Lock] = None,
        cancel: Optional[threading.Event] = None,
        poll_interval: float = POLL_INTERVAL,
    ):
        super().__init__()
        self.prompt = prompt
        self._source = options
        self._lock = lock
        self._cancel = cancel
        self._poll_interval = poll_interval
        self._items: List[str] = [] if lock is not None else list(options)
        self._visible: List[str] = []

    def compose(self) -> ComposeResult:
        with Horizontal(id="prompt-row"):
            yield Static(f"{self.prompt}: ", id="prompt", markup=False)
            yield Input(id="query")
        yield Static("", id="counter")
        yield OptionList(id="options")

    def on_mount(self) -> None:
        self.query_one("#query", Input).focus()
        if self._lock is not None:
            self._poll_source()
            self.set_interval(self._poll_interval, self._poll_source)
        else:
            self._refresh_options()

    @property
    def visible(self) -> List[str]:
        """Items currently shown, in order."""
        return list(self._visible)

    def _poll_source(self) -> None:
        if self._cancel is not None and self._cancel.is_set():
            self.exit(None)
            return

        with self._lock:
            # The shared list only ever grows
            if len(self._source) == len(self._items):
                return
            snapshot = list(self._source)

        self._items = snapshot
        self._refresh_options()

    def _refresh_options(self) -> None:
        option_list = self.query_one("#options", OptionList)
        query = self.query_one("#query", Input).value

        previous = None
        highlighted = option_list.highlighted
        if highlighted is not None and highlighted < len(self._visible):
            previous = self._visible[highlighted]

        self._visible = [item for item in self._items if matches(query, item)]
        option_list.clear_options()
        option_list.add_options([Option(Text(item)) for item in self._visible])
        if self._visible:
            option_list.highlighted = (
                self._visible.index(previous) if previous in self._visible else 0
            )

        self.query_one("#counter", Static).update(f"  {len(self._visible)}/{len(self._items)}")

    def _choose(self, index: Optional[int]) -> None:
        if index is None or index >= len(self._visible):
            return
        self.exit(self._visible[index])

    def on_input_changed(self, event: Input.Changed) -> None:
        # Typing restarts the selection at the best match
        self.query_one("#options", OptionList).highlighted = None
        self._refresh_options()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        self._choose(self.query_one("#options", OptionList).highlighted)

    def on_option_list_option_selected(self, event: OptionList.OptionSelected) -> None:
        self._choose(event.option_index)

    def action_cursor_up(self) -> None:
        self.query_one("#options", OptionList).action_cursor_up()

    def action_cursor_down(self) -> None:
        self.query_one("#options", OptionList).action_cursor_down()

    def action_cancel(self) -> None:
        self.exit(None)


class FuzzyPicker:
    """Select and confirm prompts backed by PickerApp."""

    def __init__(self, poll_interval: float = POLL_INTERVAL):
        self.poll_interval = poll_interval

    def select(
        self,
        prompt: str,
        options: Sequence[str],
        lock: Optional[threading.Lock] = None,
        cancel: Optional[threading.Event] = None,
    ) -> str:
        """Let the user pick one of ``options``.

        Args:
            prompt: Text shown before the filter line
            options: Choices; when ``lock`` is given this is a live list that
                other threads append to while holding ``lock``
            lock: Lock guarding ``options`` for hot reload
            cancel: Set when the picker closes, and closes the picker when set

        Raises:
            ValueError: if a static option list is empty
            UserCancelledError: if the user escaped without choosing
        """
        if lock is None and not options:
            raise ValueError("no options to select from")

        app = PickerApp(prompt, options, lock=lock, cancel=cancel, poll_interval=self.poll_interval)
        try:
            choice = app.run(inline=True)
        finally:
            if cancel is not None:
                cancel.set()

        if choice is None:
            raise UserCancelledError()
        logger.debug(f"Picked {choice!r} for {prompt!r}")
        return choice

    def confirm(self, prompt: str, default: bool) -> bool:
        """Yes/no question; the default answer is listed (and highlighted) first.

        Raises:
            UserCancelledError: if the user escaped, whatever the default
        """
        options = [YES, NO] if default else [NO, YES]
        return self.select(prompt, options) == YES
