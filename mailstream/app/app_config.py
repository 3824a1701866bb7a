"""App configuration."""

from pydantic import BaseModel, Field

from ..search.command import SearchConfig


class AppConfig(BaseModel):
    """Persisted app configuration."""

    search: SearchConfig = Field(default_factory=SearchConfig)
    viewer_command: str | None = Field(
        default=None,
        description="Shell command opening a message; `{id}` is replaced by the quoted message-id.",
    )
    debounce_delay: float = Field(default=0.1, ge=0, description="Seconds of idle typing before a search starts.")
