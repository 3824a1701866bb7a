"""Debounced runner."""

import asyncio
from collections.abc import Awaitable, Callable
from typing import Any


class AsyncDebouncedRunner:
    """Run only the last function submitted within ``delay`` seconds."""

    def __init__(self, delay: float):
        """Initialize the debounced runner."""
        self._delay = delay
        self._task: asyncio.Task | None = None

    def cancel(self) -> None:
        """Drop the pending function, if any."""
        if self._task:
            self._task.cancel()
        self._task = None

    async def _run_func(self, func: Callable[[], Any | Awaitable[Any]]) -> Any:
        await asyncio.sleep(self._delay)
        result = func()
        if isinstance(result, Awaitable):
            return await result
        return result

    def submit(self, func: Callable[[], Any | Awaitable[Any]]) -> asyncio.Task[Any]:
        """Schedule ``func``, replacing any pending one."""
        self.cancel()
        self._task = asyncio.create_task(self._run_func(func))
        return self._task
