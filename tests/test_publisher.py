"""Test suite for the candidate store and throttled publisher."""

import pytest

from mailstream.common.pydantic import Record, RunState
from mailstream.search.publisher import CandidateStore, ThrottledPublisher
from tests.test_utils import FakeClock, PublishedEvents, line


def make_record(i: int) -> Record:
    """Record number ``i``."""
    return Record(identifier=f"id{i}", fields={}, line=line(f"id{i}", f"Subject {i}"))


class TestCandidateStore:
    """Candidate store behaviour."""

    def test_extend_keeps_order(self):
        """Records are appended in order."""
        store = CandidateStore()
        assert store.extend([make_record(1), make_record(2)]) == 2
        assert store.extend([make_record(3)]) == 1
        assert store.candidates == [make_record(i).line for i in (1, 2, 3)]
        assert len(store) == 3

    def test_replace(self):
        """A notice replaces everything."""
        store = CandidateStore()
        store.extend([make_record(1)])
        store.replace(["error code 2"])
        assert store.candidates == ["error code 2"]
        assert store.records == []

    def test_snapshots_are_copies(self):
        """Published snapshots do not change as the store grows."""
        store = CandidateStore()
        store.extend([make_record(1)])
        snapshot = store.candidates
        store.extend([make_record(2)])
        assert snapshot == [make_record(1).line]


class TestThrottledPublisher:
    """Rate limiting of UI updates."""

    @pytest.fixture
    def clock(self) -> FakeClock:
        """Fake clock."""
        return FakeClock()

    @pytest.fixture
    def events(self) -> PublishedEvents:
        """Published events."""
        return PublishedEvents()

    @pytest.fixture
    def publisher(self, clock: FakeClock, events: PublishedEvents) -> ThrottledPublisher:
        """Publisher with a one second interval."""
        return ThrottledPublisher(events, interval=1.0, clock=clock, generation=5, query="hello")

    def test_many_updates_within_one_interval(self, publisher, clock, events):
        """1000 tiny updates inside one interval: at most one live publish, one final."""
        store = CandidateStore()
        for i in range(1000):
            store.extend([make_record(i)])
            publisher.maybe_publish(store)
            clock.advance(0.0009)
        publisher.publish_final(store, RunState.FINISHED)

        live = [event for event in events if not event.final]
        assert len(live) <= 1
        assert len(events.final) == 1
        assert events.final[0].count == 1000
        assert events.final[0].state == RunState.FINISHED

    def test_publishes_after_interval(self, publisher, clock, events):
        """A live update goes out once the interval has passed."""
        store = CandidateStore()
        store.extend([make_record(1)])
        assert not publisher.maybe_publish(store)
        clock.advance(1.0)
        assert publisher.maybe_publish(store)
        assert events[-1].candidates == [make_record(1).line]
        assert events[-1].generation == 5
        assert events[-1].query == "hello"
        assert not events[-1].final

        store.extend([make_record(2)])
        clock.advance(0.5)
        assert not publisher.maybe_publish(store)
        clock.advance(0.5)
        assert publisher.maybe_publish(store)
        assert events[-1].count == 2

    def test_unchanged_store_is_not_republished(self, publisher, clock, events):
        """Nothing new, nothing published."""
        store = CandidateStore()
        clock.advance(5)
        assert not publisher.maybe_publish(store)
        assert events == []

    def test_final_is_not_throttled_and_happens_once(self, publisher, events):
        """The final publish ignores the interval and cannot repeat."""
        store = CandidateStore()
        store.extend([make_record(1)])
        assert publisher.publish_final(store, RunState.FINISHED)
        assert not publisher.publish_final(store, RunState.FINISHED)
        assert not publisher.maybe_publish(store)
        assert len(events) == 1
        assert events[0].final
        assert publisher.finalized
