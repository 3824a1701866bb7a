"""Status bar widget showing the state of the current search."""

from typing import Any

from textual.app import ComposeResult
from textual.containers import Container, Horizontal
from textual.widgets import Label, LoadingIndicator

from ...common.pydantic import RunState


class StatusBar(Horizontal):
    """A thin bottom status bar with a busy indicator and the result count."""

    def __init__(self, *args: Any, **kwargs: Any):
        """Initialize the status bar."""
        super().__init__(*args, **kwargs)
        self.busy_indicator = LoadingIndicator(id="status_busy")
        self.spacer = Container(id="status_spacer")
        self.status_text = Label("", id="status_text")

    def compose(self) -> ComposeResult:
        """Create child widgets."""
        yield self.busy_indicator
        yield self.spacer
        yield self.status_text

    def on_mount(self) -> None:
        """Start idle."""
        self.show(RunState.IDLE, 0)

    def show(self, state: RunState, count: int) -> None:
        """Display the state of the current run."""
        running = state == RunState.RUNNING
        self.busy_indicator.display = running
        self.spacer.display = not running
        if state == RunState.IDLE:
            self.status_text.update("Ready")
        elif state == RunState.FAILED:
            self.status_text.update("Search failed")
        elif running:
            self.status_text.update(f"Searching… {count}")
        else:
            self.status_text.update(f"{count} message{'s' if count != 1 else ''}")
