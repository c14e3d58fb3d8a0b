"""Registry that shares one running lookup per key."""

from __future__ import annotations

import asyncio
from logging import getLogger
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable, Coroutine

log = getLogger(__name__)


class InFlightRegistry[T]:
    """Map normalized lookup keys to the task currently computing them.

    A second caller for a key that is still running gets the very same task.
    The entry is dropped once the task settles, whatever the outcome, so the
    next call after completion starts fresh.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        self._tasks: dict[str, asyncio.Task[T]] = {}

    def __len__(self) -> int:
        return len(self._tasks)

    def pending(self, key: str) -> asyncio.Task[T] | None:
        return self._tasks.get(key)

    def submit(self, key: str, factory: Callable[[], Coroutine[object, object, T]]) -> asyncio.Task[T]:
        task = self._tasks.get(key)
        if task is not None:
            log.debug("Joining in-flight %s lookup for %r", self.name, key)
            return task
        task = asyncio.ensure_future(factory())
        self._tasks[key] = task
        task.add_done_callback(lambda done: self._settle(key, done))
        return task

    async def run(self, key: str, factory: Callable[[], Coroutine[object, object, T]]) -> T:
        # shielded so one impatient waiter cannot cancel the shared lookup
        return await asyncio.shield(self.submit(key, factory))

    def _settle(self, key: str, task: asyncio.Task[T]) -> None:
        if self._tasks.get(key) is task:
            del self._tasks[key]
        if not task.cancelled() and task.exception() is not None:
            log.debug("%s lookup for %r failed: %s", self.name, key, task.exception())
