"""Pytest configuration and fixtures for the test suite."""

import json
import sys
import tempfile
from collections.abc import Callable, Generator
from pathlib import Path

import pytest

from mailstream.search.command import SearchConfig

FAKE_MU = """#!{python}
import json
import sys
import time
from pathlib import Path

here = Path(__file__)
behaviour = json.loads(here.with_suffix(".json").read_text())
here.with_suffix(".args").write_text(json.dumps(sys.argv[1:]))
out = sys.stdout.buffer
for chunk in behaviour["chunks"]:
    out.write(chunk.encode("utf-8"))
    out.flush()
    time.sleep(behaviour["delay"])
if behaviour["hang"]:
    time.sleep(60)
sys.exit(behaviour["exit"])
"""


@pytest.fixture
def temp_workspace() -> Generator[Path, None, None]:
    """Create a temporary workspace for file operations."""
    with tempfile.TemporaryDirectory() as temp_dir:
        yield Path(temp_dir)


@pytest.fixture
def fake_mu(temp_workspace: Path) -> Callable[..., Path]:
    """Write an executable standing in for mu.

    The returned function configures what it prints and how it exits, and
    returns the executable's path. The arguments of the last invocation are
    written next to it with an ``.args`` suffix.
    """
    script = temp_workspace / "mu"
    script.write_text(FAKE_MU.format(python=sys.executable))
    script.chmod(0o755)

    def configure(chunks: list[str] | None = None, exit: int = 0, delay: float = 0.0, hang: bool = False) -> Path:
        behaviour = {"chunks": chunks or [], "exit": exit, "delay": delay, "hang": hang}
        script.with_suffix(".json").write_text(json.dumps(behaviour))
        return script

    configure()
    return configure


@pytest.fixture
def search_config(fake_mu: Callable[..., Path]) -> SearchConfig:
    """Search config pointing at the fake mu, with throttling disabled."""
    return SearchConfig(executable=str(fake_mu()), throttle_interval=0.0)
