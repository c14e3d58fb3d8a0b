"""Bounded-concurrency gate for outbound requests."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from types import TracebackType


class RequestGovernor:
    """Counting semaphore that admits waiters in arrival order.

    Holders beyond ``capacity`` queue until a running call releases its slot.
    There is no timeout; a queued call waits for as long as it takes.
    """

    def __init__(self, capacity: int) -> None:
        if capacity < 1:
            raise ValueError("Governor capacity must be at least 1")
        self.capacity = capacity
        self._semaphore = asyncio.Semaphore(capacity)
        self._active = 0
        self._waiting = 0

    @property
    def active(self) -> int:
        return self._active

    @property
    def waiting(self) -> int:
        return self._waiting

    async def acquire(self) -> None:
        self._waiting += 1
        try:
            await self._semaphore.acquire()
        finally:
            self._waiting -= 1
        self._active += 1

    def release(self) -> None:
        if self._active == 0:
            raise RuntimeError("RequestGovernor released more times than acquired")
        self._active -= 1
        self._semaphore.release()

    async def __aenter__(self) -> RequestGovernor:
        await self.acquire()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.release()
