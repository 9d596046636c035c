"""
Debounce module: coalesces rapid triggers into one delayed call.
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable, Coroutine, Optional

logger = logging.getLogger(__name__)

DEFAULT_DELAY = 0.25


class Debouncer:
    """
    Delays a coroutine callback until triggers stop for *delay* seconds.

    Each trigger cancels the pending, not yet started call and schedules a
    new one. A callback that has already started is left to finish.
    """

    def __init__(self, callback: Callable[..., Awaitable[Any]], delay: float = DEFAULT_DELAY,
                 create_task: Optional[Callable[[Coroutine], asyncio.Task]] = None):
        self.callback = callback
        self.delay = delay
        # Defaults to the running loop; a bot passes its application.create_task
        self._create_task = create_task
        self._task: Optional[asyncio.Task] = None
        self._started = False

    @property
    def pending(self) -> bool:
        """True while a call is scheduled but has not started yet."""
        return self._task is not None and not self._task.done() and not self._started

    @property
    def idle(self) -> bool:
        """True when nothing is scheduled or running."""
        return self._task is None or self._task.done()

    def trigger(self, *args, **kwargs) -> asyncio.Task:
        """Schedule the callback, replacing any pending call."""
        self.cancel()
        self._started = False
        create_task = self._create_task or asyncio.get_running_loop().create_task
        self._task = create_task(self._delayed(*args, **kwargs))
        return self._task

    def cancel(self) -> None:
        """Drop the pending call, if it has not started."""
        if self.pending:
            self._task.cancel()

    async def _delayed(self, *args, **kwargs):
        await asyncio.sleep(self.delay)
        self._started = True
        logger.debug("Debounced call starting")
        return await self.callback(*args, **kwargs)
