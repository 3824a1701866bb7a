"""Search session: one chooser invocation's live search state."""

from collections.abc import Callable
from typing import Any, Self

from loguru import logger
from rich.text import Text

from ..common.clock import Clock, MonotonicClock
from ..common.pydantic import Record, RunState
from ..events.process import OutputReceived, ProcessEvent, ProcessExited, ProcessFailed
from ..events.search import CandidatesPublished
from .command import SearchConfig, build_command
from .highlight import DEFAULT_PALETTE, format_candidate
from .parser import RecordParser, StreamBuffer
from .process import SearchProcess
from .publisher import CandidateStore, ThrottledPublisher
from .selection import resolve_identifier

ProcessFactory = Callable[[str, int, Callable[[ProcessEvent], None], float | None], SearchProcess]


def exit_message(returncode: int, messages: dict[int, str]) -> str:
    """Human-readable message for a non-zero exit code."""
    return messages.get(returncode, f"error code {returncode}")


def short_query_notice(min_length: int) -> str:
    """Placeholder shown while the query is too short to search."""
    return f"Type at least {min_length} characters to search"


class SearchRun:
    """Output, records and state of one search invocation."""

    def __init__(
        self,
        generation: int,
        query: str,
        config: SearchConfig,
        sink: Callable[[CandidatesPublished], None],
        clock: Clock,
    ):
        """Initialize an idle run."""
        self.generation = generation
        self.query = query
        self.state = RunState.IDLE
        self.returncode: int | None = None
        self.exit_messages = dict(config.exit_messages)
        self.buffer = StreamBuffer()
        self.parser = RecordParser(config.fields, config.delimiter)
        self.store = CandidateStore()
        self.publisher = ThrottledPublisher(sink, config.throttle_interval, clock, generation, query)

    @property
    def records(self) -> list[Record]:
        """Records decoded so far."""
        return self.store.records

    def feed(self, data: bytes) -> int:
        """Consume an output chunk, returning the number of new records."""
        self.buffer.append(data)
        added = self.store.extend(self.parser.parse(self.buffer))
        self.publisher.maybe_publish(self.store, self.state)
        return added

    def finish(self, returncode: int) -> None:
        """Finalize the run after the process exited."""
        self.returncode = returncode
        if returncode != 0:
            logger.warning("Search #{} exited with code {}", self.generation, returncode)
            self.fail(exit_message(returncode, self.exit_messages))
            return
        self.buffer.finish()
        self.store.extend(self.parser.parse(self.buffer))
        if self.buffer.tail.strip():
            logger.debug("Search #{} left {} unparsed characters", self.generation, len(self.buffer.tail))
        self.state = RunState.FINISHED
        self.publisher.publish_final(self.store, self.state)

    def fail(self, message: str) -> None:
        """Replace the candidates with a single error notice."""
        self.state = RunState.FAILED
        self.store.replace([message])
        self.publisher.publish_final(self.store, self.state)


class SearchSession:
    """Live search state owned by one chooser invocation.

    The chooser drives it through ``collect`` (input changed), ``display``
    (render a candidate), ``select`` (candidate chosen) and ``close`` (session
    ends). Updates are pushed to ``sink`` as ``CandidatesPublished`` events.
    """

    def __init__(
        self,
        config: SearchConfig,
        sink: Callable[[CandidatesPublished], None],
        clock: Clock | None = None,
        process_factory: ProcessFactory = SearchProcess,
        palette: tuple[str, ...] = DEFAULT_PALETTE,
    ):
        """Initialize an idle session."""
        self.config = config
        self.palette = palette
        self._sink = sink
        self._clock = clock or MonotonicClock()
        self._process_factory = process_factory
        self._generation = 0
        self._query = ""
        self._run: SearchRun | None = None
        self._process: SearchProcess | None = None
        self._closed = False

    def __enter__(self) -> Self:
        """Enter the session."""
        return self

    def __exit__(self, exc_type: Any, exc_value: Any, traceback: Any) -> None:
        """Tear the session down."""
        self.close()

    @property
    def generation(self) -> int:
        """Generation of the current run."""
        return self._generation

    @property
    def query(self) -> str:
        """Query of the current run."""
        return self._query

    @property
    def run(self) -> SearchRun | None:
        """Current run, if a search has been started."""
        return self._run

    @property
    def state(self) -> RunState:
        """State of the current run."""
        return self._run.state if self._run else RunState.IDLE

    def cancel(self) -> None:
        """Stop the current run; its late output is discarded."""
        if self._process is not None:
            self._process.cancel()
            self._process = None
        self._run = None
        self._generation += 1

    def collect(self, query: str) -> list[str]:
        """Start searching for ``query`` and return the transient candidate list.

        Raises:
            ToolNotFound: The search executable cannot be found.
        """
        if self._closed:
            raise RuntimeError("Search session is closed")
        if self._run is not None and query == self._query:
            return self._run.store.candidates
        self.cancel()
        self._query = query
        if len(query) < self.config.min_query_length:
            return [short_query_notice(self.config.min_query_length)]

        command = build_command(query, self.config)
        run = SearchRun(self._generation, query, self.config, self._sink, self._clock)
        self._process = self._process_factory(command, run.generation, self._on_process_event, self.config.timeout)
        self._run = run
        run.state = RunState.RUNNING
        logger.debug("Starting search #{} for {!r}", run.generation, query)
        self._process.start()
        return []

    def display(self, candidate: str) -> Text | None:
        """Render a candidate with the current query highlighted."""
        return format_candidate(candidate, self._query, self.config.delimiter, self.palette)

    def select(self, candidate: str) -> str:
        """Return the identifier to hand to the viewer."""
        return resolve_identifier(candidate, self.config.delimiter)

    def close(self) -> None:
        """End the session, stopping any running search."""
        if not self._closed:
            self.cancel()
            self._closed = True

    def _on_process_event(self, event: ProcessEvent) -> None:
        run = self._run
        if run is None or event.generation != run.generation:
            logger.trace("Discarding {} from stale search #{}", type(event).__name__, event.generation)
            return
        if isinstance(event, OutputReceived):
            run.feed(event.data)
        elif isinstance(event, ProcessExited):
            self._process = None
            run.finish(event.returncode)
        elif isinstance(event, ProcessFailed):
            self._process = None
            run.fail(event.message)
