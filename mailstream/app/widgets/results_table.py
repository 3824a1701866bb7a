"""Results table widget."""

from collections.abc import Callable
from typing import Any

from rich.text import Text
from textual.coordinate import Coordinate
from textual.message import Message
from textual.widgets import DataTable

from ...search.selection import preserve_selection

NOTICE_STYLE = "italic dim"


class ResultsTable(DataTable):
    """Candidate list with in-place row updates."""

    class CandidateChosen(Message):
        """Message emitted when the user picks a candidate."""

        def __init__(self, candidate: str) -> None:
            """Initialize the candidate chosen message."""
            super().__init__()
            self.candidate = candidate

    def __init__(self, render_candidate: Callable[[str], Text | None], **kwargs: Any):
        """Initialize the table with the candidate display transform."""
        super().__init__(**kwargs)
        self._render = render_candidate
        self.candidates: list[str] = []

    def on_mount(self) -> None:
        """Set up the table when mounted."""
        self.add_column("Message")
        self.cursor_type = "row"
        self.show_header = False

    def _styled(self, candidate: str) -> Text:
        rendered = self._render(candidate)
        if rendered is None:
            return Text(candidate, style=NOTICE_STYLE)
        return rendered

    def update_candidates(self, candidates: list[str], same_input: bool) -> None:
        """Show a new candidate list, keeping the selection where possible."""
        old_candidates = self.candidates
        old_index = self.cursor_row if self.row_count else None
        for i, candidate in enumerate(candidates):
            if i < self.row_count:
                # highlighting depends on the query
                if same_input and i < len(old_candidates) and old_candidates[i] == candidate:
                    continue
                self.update_cell_at(Coordinate(row=i, column=0), self._styled(candidate))
            else:
                self.add_row(self._styled(candidate))
        if self.row_count > len(candidates):
            keys_to_remove = [
                self.coordinate_to_cell_key(Coordinate(row=row_index, column=0))[0]
                for row_index in range(len(candidates), self.row_count)
            ]
            for row_key in keys_to_remove:
                self.remove_row(row_key)
        self.candidates = list(candidates)

        index = preserve_selection(old_candidates, self.candidates, old_index, same_input)
        if index is not None:
            self.move_cursor(row=index)

    def on_data_table_row_selected(self, event: DataTable.RowSelected) -> None:
        """Forward the chosen candidate."""
        event.stop()
        if 0 <= event.cursor_row < len(self.candidates):
            self.post_message(self.CandidateChosen(self.candidates[event.cursor_row]))
