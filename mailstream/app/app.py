"""Interactive chooser: search bar, live results and status."""

from typing import ClassVar

from loguru import logger
from textual import on
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.message import Message
from textual.widgets import Header, Input

from ..common.debounce import AsyncDebouncedRunner
from ..common.pydantic import RunState
from ..events.search import CandidatesPublished
from ..search.errors import ToolNotFound
from ..search.session import SearchSession
from .app_config import AppConfig
from .widgets.results_table import ResultsTable
from .widgets.search_bar import SearchBar
from .widgets.status_bar import StatusBar


class _CandidatesPublished(Message):
    def __init__(self, event: CandidatesPublished) -> None:
        super().__init__()
        self.event = event


class MailstreamApp(App[str]):
    """Incremental mail search. Exits with the chosen message-id."""

    TITLE = "mailstream"
    BINDINGS: ClassVar = [
        Binding("ctrl+c", "close_app", "Close application", priority=True),
        Binding("escape", "close_app", "Close application"),
        Binding("down", "cursor_down", "Next result", show=False),
        Binding("up", "cursor_up", "Previous result", show=False),
    ]

    CSS = """
    SearchBar {
        dock: top;
        height: 3;
        margin: 1;
    }

    SearchBar > Input {
        height: 1fr;
        width: 1fr;
    }

    DataTable {
        height: 1fr;
        width: 1fr;
        margin: 0 1;
    }

    .search-input {
        border: solid $accent;
    }

    StatusBar {
        dock: bottom;
        height: 1;
        padding: 0 1;
    }

    #status_busy {
        width: 1fr;
        height: 1;
    }

    #status_spacer {
        width: 1fr;
    }

    #status_text {
        width: 25;
        content-align: right middle;
        min-width: 25;
    }
    """

    def __init__(self, config: AppConfig, initial_query: str = ""):
        """Initialize the app."""
        super().__init__()
        self._config = config
        self._initial_query = initial_query
        self._shown_query: str | None = None
        self._search_debounced = AsyncDebouncedRunner(config.debounce_delay)
        self.session = SearchSession(config.search, self._on_candidates_published)

    def compose(self) -> ComposeResult:
        """Create child widgets for the app."""
        yield Header()
        yield SearchBar(value=self._initial_query)
        yield ResultsTable(self.session.display)
        yield StatusBar()

    def on_mount(self) -> None:
        """Search for the initial query, if any."""
        if self._initial_query:
            self._collect(self._initial_query)

    def on_unmount(self) -> None:
        """Stop any running search."""
        self._search_debounced.cancel()
        self.session.close()

    def _show(self, query: str, candidates: list[str], state: RunState) -> None:
        same_input = query == self._shown_query
        self._shown_query = query
        with self.batch_update():
            self.query_one(ResultsTable).update_candidates(candidates, same_input)
            self.query_one(StatusBar).show(state, len(candidates))

    def _collect(self, query: str) -> None:
        try:
            candidates = self.session.collect(query)
        except ToolNotFound as e:
            logger.error(str(e))
            self.notify(str(e), severity="error")
            candidates = [str(e)]
        self._show(query, candidates, self.session.state)

    def _on_candidates_published(self, event: CandidatesPublished) -> None:
        self.post_message(_CandidatesPublished(event))

    @on(_CandidatesPublished)
    def _on_published(self, message: _CandidatesPublished) -> None:
        event = message.event
        if event.generation != self.session.generation:
            return
        self._show(event.query, event.candidates, event.state)

    def on_search_bar_search_triggered(self, message: SearchBar.SearchTriggered) -> None:
        """Handle search requests from the search bar."""
        query = message.query
        self._search_debounced.submit(lambda: self._collect(query))

    def on_input_submitted(self, _: Input.Submitted) -> None:
        """Choose the highlighted result."""
        table = self.query_one(ResultsTable)
        if table.row_count:
            table.action_select_cursor()

    def on_results_table_candidate_chosen(self, message: ResultsTable.CandidateChosen) -> None:
        """Exit with the identifier of the chosen message."""
        try:
            identifier = self.session.select(message.candidate)
        except ValueError:
            # notices are not selectable
            return
        self.exit(identifier)

    def action_cursor_down(self) -> None:
        """Move to the next result."""
        self.query_one(ResultsTable).action_cursor_down()

    def action_cursor_up(self) -> None:
        """Move to the previous result."""
        self.query_one(ResultsTable).action_cursor_up()

    def action_close_app(self) -> None:
        """Close the application."""
        self.exit()
