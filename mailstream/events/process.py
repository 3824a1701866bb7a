"""Process events."""

from . import Event


class ProcessEvent(Event):
    """Event emitted by a search process, stamped with its run generation."""

    generation: int


class OutputReceived(ProcessEvent):
    """A chunk of standard output arrived."""

    data: bytes


class ProcessExited(ProcessEvent):
    """The process terminated."""

    returncode: int


class ProcessFailed(ProcessEvent):
    """The process could not be spawned or ran out of time."""

    message: str
