"""Search command construction."""

import shlex
import shutil

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .errors import ToolNotFound
from .fields import FIELD_KEYS, IDENTIFIER_FIELD

DEFAULT_DELIMITER = "␟␟"
DEFAULT_EXIT_MESSAGES = {
    1: "mu failed to run the search",
    4: "No matches found",
    19: "The mu database is locked by another process",
}


class SearchConfig(BaseModel):
    """Configuration of one search run."""

    model_config = ConfigDict(frozen=True)

    executable: str = Field(default="mu", description="Search tool, resolved on PATH.")
    flags: str = Field(
        default="--format=sexp --maxnum=500 --skip-dups --sortfield=date --reverse",
        description="Fixed flags passed to `find`.",
    )
    fields: str = Field(default="is", description="mu field letters, identifier first.")
    delimiter: str = Field(default=DEFAULT_DELIMITER, min_length=1, description="Reserved field separator.")
    min_query_length: int = Field(default=3, ge=0, description="Shortest query that starts a search.")
    throttle_interval: float = Field(default=0.25, ge=0, description="Minimum seconds between live updates.")
    timeout: float | None = Field(default=None, gt=0, description="Seconds before a search is stopped.")
    exit_messages: dict[int, str] = Field(
        default_factory=lambda: dict(DEFAULT_EXIT_MESSAGES),
        description="Messages shown for non-zero exit codes.",
    )

    @field_validator("fields")
    @classmethod
    def _check_fields(cls, value: str) -> str:
        if len(value) < 2:
            raise ValueError("at least two fields are required")
        if value[0] != IDENTIFIER_FIELD:
            raise ValueError(f"the first field must be {IDENTIFIER_FIELD!r}")
        unknown = sorted(set(value) - FIELD_KEYS.keys())
        if unknown:
            raise ValueError(f"unknown fields: {''.join(unknown)}")
        return value


def build_command(query: str, config: SearchConfig) -> str:
    """Build the shell command line searching for ``query``.

    Raises:
        ToolNotFound: ``config.executable`` is not on the execution path.
    """
    executable = shutil.which(config.executable)
    if executable is None:
        raise ToolNotFound(config.executable)
    parts = [
        shlex.quote(executable),
        "find",
        config.flags.strip(),
        "--fields",
        shlex.quote(config.delimiter.join(config.fields)),
        "--nocolor",
        shlex.quote(query),
    ]
    return " ".join(part for part in parts if part)
