"""
Utility helpers used across the session, CLI and translation service.

Functions / classes:
    Debouncer: coalesce rapid triggers into one delayed call
    RequestPacer: keep a minimum interval between remote requests

Example:
    >>> debouncer = Debouncer(1.5, run_analysis)
    >>> debouncer.trigger(text)   # rescheduled on every call
"""

from __future__ import annotations

import asyncio
import inspect
import logging
import time
from typing import Any, Awaitable, Callable, Optional

logger = logging.getLogger(__name__)

SleepFunc = Callable[[float], Awaitable[Any]]


class Debouncer:
    """Run ``callback`` once, ``delay`` seconds after the last trigger.

    Each ``trigger`` cancels the pending call (if any) and schedules a new
    one with the latest arguments. Must be used from a running event loop.
    """

    def __init__(
        self,
        delay: float,
        callback: Callable[..., Any],
        sleep: SleepFunc = asyncio.sleep,
    ):
        self.delay = delay
        self.callback = callback
        self.sleep = sleep
        self._task: Optional[asyncio.Task] = None

    @property
    def pending(self) -> bool:
        return self._task is not None and not self._task.done()

    def trigger(self, *args: Any, **kwargs: Any) -> asyncio.Task:
        self.cancel()
        self._task = asyncio.get_running_loop().create_task(self._run(args, kwargs))
        return self._task

    def cancel(self) -> None:
        if self.pending:
            self._task.cancel()
        self._task = None

    async def _run(self, args: tuple, kwargs: dict) -> Any:
        await self.sleep(self.delay)
        try:
            result = self.callback(*args, **kwargs)
            if inspect.isawaitable(result):
                result = await result
        except Exception:
            logger.exception("Debounced call to %s failed", getattr(self.callback, "__name__", self.callback))
            raise
        return result


class RequestPacer:
    """Enforce a minimum interval between consecutive requests.

    ``clock`` is a monotonic time source and ``sleep`` an awaitable sleep;
    both are injectable so tests can run without real delays. Concurrent
    waiters are served one at a time, each ``interval`` after the last.
    """

    def __init__(
        self,
        interval: float,
        clock: Callable[[], float] = time.monotonic,
        sleep: SleepFunc = asyncio.sleep,
    ):
        self.interval = interval
        self.clock = clock
        self.sleep = sleep
        self._last: Optional[float] = None
        self._lock = asyncio.Lock()

    async def wait(self) -> None:
        """Sleep until ``interval`` has passed since the previous request."""
        async with self._lock:
            if self._last is not None:
                remaining = self.interval - (self.clock() - self._last)
                if remaining > 0:
                    await self.sleep(remaining)
            self._last = self.clock()
