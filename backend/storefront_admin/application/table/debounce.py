"""Keyed trailing-edge debouncer on the running asyncio loop."""

import asyncio
import logging
from collections.abc import Awaitable, Callable, Hashable

logger = logging.getLogger(__name__)


class Debouncer:
    """Collapse bursts of calls per key into one call after ``delay`` seconds.

    Each ``schedule`` replaces the pending timer for its key. Only the timer
    is cancelled; an action that already started always runs to completion.
    """

    def __init__(self, delay: float):
        self._delay = max(delay, 0.0)
        self._timers: dict[Hashable, asyncio.TimerHandle] = {}
        self._actions: dict[Hashable, Callable[[], Awaitable[None]]] = {}
        self._running: set[asyncio.Task[None]] = set()

    @property
    def delay(self) -> float:
        return self._delay

    @property
    def pending(self) -> int:
        return len(self._timers)

    def schedule(self, key: Hashable, action: Callable[[], Awaitable[None]]) -> None:
        loop = asyncio.get_running_loop()
        previous = self._timers.pop(key, None)
        if previous is not None:
            previous.cancel()
        self._actions[key] = action
        self._timers[key] = loop.call_later(self._delay, self._fire, key)

    def _fire(self, key: Hashable) -> None:
        self._timers.pop(key, None)
        action = self._actions.pop(key)
        task = asyncio.ensure_future(action())
        self._running.add(task)
        task.add_done_callback(self._finished)

    def _finished(self, task: asyncio.Task[None]) -> None:
        self._running.discard(task)
        if not task.cancelled() and task.exception() is not None:
            logger.error("Debounced action failed", exc_info=task.exception())

    async def flush(self) -> None:
        """Fire every pending timer now and wait for all actions to finish."""
        for key, handle in list(self._timers.items()):
            handle.cancel()
            self._fire(key)
        await self.wait_idle()

    async def wait_idle(self) -> None:
        """Wait until no timer is pending and no action is running."""
        while self._timers or self._running:
            if self._running:
                await asyncio.gather(*list(self._running), return_exceptions=True)
            else:
                await asyncio.sleep(self._delay / 4 or 0.001)

    def cancel(self) -> None:
        """Drop pending timers; running actions are left alone."""
        for handle in self._timers.values():
            handle.cancel()
        self._timers.clear()
        self._actions.clear()
