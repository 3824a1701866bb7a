"""Hand-off of a selected message to an external viewer."""

import shlex
import subprocess

from loguru import logger


def viewer_command(identifier: str, template: str) -> str:
    """Substitute the quoted message identifier into a viewer command template."""
    return template.format(id=shlex.quote(identifier))


def open_in_viewer(identifier: str, template: str | None) -> int | None:
    """Open the message ``identifier``.

    Without a viewer template the identifier is printed to standard output,
    so the selection can be piped elsewhere. Returns the viewer's exit code.
    """
    if template is None:
        print(identifier)
        return None
    command = viewer_command(identifier, template)
    logger.debug("Opening viewer: {}", command)
    returncode = subprocess.run(command, shell=True, check=False).returncode
    if returncode != 0:
        logger.warning("Viewer exited with code {}", returncode)
    return returncode
