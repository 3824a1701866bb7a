"""Clock interface for dependency injection."""

import time
from abc import ABC, abstractmethod


class Clock(ABC):
    """Monotonic time source."""

    @abstractmethod
    def now(self) -> float:
        """Return the current time in seconds."""


class MonotonicClock(Clock):
    """Real clock backed by ``time.monotonic``."""

    def now(self) -> float:
        """Return the current monotonic time in seconds."""
        return time.monotonic()
