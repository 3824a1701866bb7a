"""Events."""

import time

from pydantic import Field

from ..common.pydantic import FrozenBaseModel


class Event(FrozenBaseModel):
    """Base class for all events, stamped with their creation time."""

    event_t: int = Field(default_factory=time.time_ns)
