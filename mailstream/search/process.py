"""External search process lifecycle."""

import asyncio
import os
import signal
from collections.abc import Callable
from contextlib import suppress

from loguru import logger

from ..events.process import OutputReceived, ProcessEvent, ProcessExited, ProcessFailed

CHUNK_SIZE = 64 * 1024
KILL_TIMEOUT = 1.0


class SearchProcess:
    """Runs one search command and reports its output as ordered events.

    A single reader task delivers ``OutputReceived`` events in arrival order,
    followed by exactly one ``ProcessExited`` or ``ProcessFailed``. A
    cancelled process reports nothing further.
    """

    def __init__(
        self,
        command: str,
        generation: int,
        on_event: Callable[[ProcessEvent], None],
        timeout: float | None = None,
    ):
        """Initialize the process; nothing is spawned until ``start``."""
        self.command = command
        self.generation = generation
        self._on_event = on_event
        self._timeout = timeout
        self._proc: asyncio.subprocess.Process | None = None
        self._task: asyncio.Task[None] | None = None

    @property
    def running(self) -> bool:
        """Whether the reader task is still active."""
        return self._task is not None and not self._task.done()

    @property
    def returncode(self) -> int | None:
        """Exit code once the process has been reaped."""
        return self._proc.returncode if self._proc else None

    def start(self) -> asyncio.Task[None]:
        """Spawn the process and start streaming its output."""
        self._task = asyncio.create_task(self._run())
        return self._task

    def cancel(self) -> None:
        """Stop the process; it is terminated and reaped in the background."""
        if self.running:
            logger.debug("Cancelling search #{}", self.generation)
            assert self._task is not None
            self._task.cancel()

    async def wait(self) -> None:
        """Wait until the reader task has ended."""
        if self._task is not None:
            with suppress(asyncio.CancelledError):
                await self._task

    async def _spawn(self) -> asyncio.subprocess.Process:
        return await asyncio.create_subprocess_shell(
            self.command,
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.DEVNULL,
            start_new_session=True,
        )

    async def _stream(self, proc: asyncio.subprocess.Process) -> int:
        assert proc.stdout is not None
        while chunk := await proc.stdout.read(CHUNK_SIZE):
            self._on_event(OutputReceived(generation=self.generation, data=chunk))
        return await proc.wait()

    async def _run(self) -> None:
        try:
            try:
                self._proc = await self._spawn()
            except OSError as e:
                logger.warning("Could not start search #{}: {}", self.generation, e)
                self._on_event(ProcessFailed(generation=self.generation, message=str(e)))
                return
            logger.debug("Search #{} started (pid {}): {}", self.generation, self._proc.pid, self.command)
            try:
                returncode = await asyncio.wait_for(self._stream(self._proc), self._timeout)
            except TimeoutError:
                await self._terminate()
                logger.warning("Search #{} timed out after {}s", self.generation, self._timeout)
                self._on_event(
                    ProcessFailed(generation=self.generation, message=f"Search timed out after {self._timeout:g}s")
                )
                return
        except asyncio.CancelledError:
            await self._terminate()
            raise
        except Exception as e:
            logger.exception("Search #{} failed", self.generation)
            await self._terminate()
            self._on_event(ProcessFailed(generation=self.generation, message=str(e)))
            return
        logger.debug("Search #{} exited with code {}", self.generation, returncode)
        self._on_event(ProcessExited(generation=self.generation, returncode=returncode))

    def _signal(self, sig: int) -> None:
        assert self._proc is not None
        # The shell and the search tool share a process group.
        with suppress(ProcessLookupError, PermissionError):
            os.killpg(self._proc.pid, sig)

    async def _terminate(self) -> None:
        proc = self._proc
        if proc is None or proc.returncode is not None:
            return
        self._signal(signal.SIGTERM)
        try:
            await asyncio.wait_for(proc.wait(), KILL_TIMEOUT)
        except TimeoutError:
            self._signal(signal.SIGKILL)
            await proc.wait()
