"""Search events."""

from ..common.pydantic import RunState
from . import Event


class CandidatesPublished(Event):
    """The candidate list of a run was pushed to the UI."""

    generation: int
    query: str
    candidates: list[str]
    count: int
    state: RunState
    final: bool
