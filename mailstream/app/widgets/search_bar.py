"""Search bar widget that triggers debounced searches through the app."""

from typing import Any

from textual.app import ComposeResult
from textual.message import Message
from textual.widgets import Input, Static


class SearchBar(Static):
    """A search bar widget that emits search events as the user types."""

    class SearchTriggered(Message):
        """Message emitted when the search input changes."""

        def __init__(self, query: str) -> None:
            """Initialize the search triggered message."""
            super().__init__()
            self.query = query

    def __init__(
        self,
        value: str = "",
        placeholder: str = "Search mail...",
        **kwargs: Any,
    ):
        """Initialize the search bar."""
        super().__init__(**kwargs)
        self.input = Input(value=value, placeholder=placeholder, classes="search-input", id="search_input")

    @property
    def value(self) -> str:
        """Current input text."""
        return self.input.value

    def compose(self) -> ComposeResult:
        """Compose the search bar."""
        yield self.input

    def on_mount(self) -> None:
        """Mount the search bar."""
        self.input.focus()

    def on_input_changed(self, message: Input.Changed) -> None:
        """Handle input changed event."""
        if message.input.id != "search_input":
            return
        self.post_message(self.SearchTriggered(message.value))
