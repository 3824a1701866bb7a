"""Pydantic base model."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict


class FrozenBaseModel(BaseModel):
    """Pydantic frozen base model."""

    model_config = ConfigDict(frozen=True, strict=True)


class Record(FrozenBaseModel):
    """A decoded search result.

    ``line`` holds the rendered field values in ``--fields`` order, identifier
    first, joined by the reserved delimiter.
    """

    identifier: str
    fields: dict[str, Any]
    line: str

    def __eq__(self, other: object) -> bool:
        """Records are equal when their identifiers are."""
        if not isinstance(other, Record):
            return NotImplemented
        return self.identifier == other.identifier

    def __hash__(self) -> int:
        """Hash by identifier."""
        return hash(self.identifier)


class RunState(Enum):
    """Lifecycle of one search run."""

    IDLE = "idle"
    RUNNING = "running"
    FINISHED = "finished"
    FAILED = "failed"
