"""Candidate store and rate-limited publication to the UI."""

from collections.abc import Callable, Iterable

from ..common.clock import Clock
from ..common.pydantic import Record, RunState
from ..events.search import CandidatesPublished


class CandidateStore:
    """Ordered candidates of one run.

    The list only grows until it is replaced wholesale by a final notice.
    """

    def __init__(self) -> None:
        """Initialize an empty store."""
        self._records: list[Record] = []
        self._candidates: list[str] = []

    def __len__(self) -> int:
        """Number of candidates."""
        return len(self._candidates)

    @property
    def records(self) -> list[Record]:
        """Records decoded so far."""
        return list(self._records)

    @property
    def candidates(self) -> list[str]:
        """Snapshot of the candidate strings."""
        return list(self._candidates)

    def extend(self, records: Iterable[Record]) -> int:
        """Append records, returning how many were added."""
        added = 0
        for record in records:
            self._records.append(record)
            self._candidates.append(record.line)
            added += 1
        return added

    def replace(self, candidates: list[str]) -> None:
        """Replace the whole list, e.g. with an error notice."""
        self._records = []
        self._candidates = list(candidates)


class ThrottledPublisher:
    """Pushes a run's candidates to the UI at a bounded rate.

    Live updates are spaced at least ``interval`` seconds apart, counted from
    the start of the run. The final update is never throttled and happens
    exactly once.
    """

    def __init__(
        self,
        sink: Callable[[CandidatesPublished], None],
        interval: float,
        clock: Clock,
        generation: int,
        query: str,
    ):
        """Initialize the publisher for one run."""
        self._sink = sink
        self._interval = interval
        self._clock = clock
        self._generation = generation
        self._query = query
        self._last_publish = clock.now()
        self._last_count = 0
        self._finalized = False

    @property
    def finalized(self) -> bool:
        """Whether the final update has been published."""
        return self._finalized

    def _emit(self, store: CandidateStore, state: RunState, final: bool) -> None:
        candidates = store.candidates
        self._last_count = len(candidates)
        self._sink(
            CandidatesPublished(
                generation=self._generation,
                query=self._query,
                candidates=candidates,
                count=len(candidates),
                state=state,
                final=final,
            )
        )

    def maybe_publish(self, store: CandidateStore, state: RunState = RunState.RUNNING) -> bool:
        """Publish a live update if the throttle interval has passed."""
        if self._finalized or len(store) == self._last_count:
            return False
        now = self._clock.now()
        if now - self._last_publish < self._interval:
            return False
        self._last_publish = now
        self._emit(store, state, final=False)
        return True

    def publish_final(self, store: CandidateStore, state: RunState) -> bool:
        """Publish the final result of the run."""
        if self._finalized:
            return False
        self._finalized = True
        self._emit(store, state, final=True)
        return True
