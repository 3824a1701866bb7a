"""Search errors."""


class MailstreamError(Exception):
    """Base class for mailstream errors."""


class ToolNotFound(MailstreamError):
    """The search executable cannot be resolved on the execution path."""

    def __init__(self, executable: str) -> None:
        """Initialize with the executable that could not be found."""
        super().__init__(f"Search tool not found: {executable}")
        self.executable = executable


class RecordError(MailstreamError):
    """A record could not be read at the current position."""

    def __init__(self, message: str, pos: int) -> None:
        """Initialize with the buffer position the error refers to."""
        super().__init__(f"{message} at offset {pos}")
        self.pos = pos


class IncompleteRecord(RecordError):
    """The buffer ends before the record does."""


class MalformedRecord(RecordError):
    """The text at the current position is not valid record syntax."""
