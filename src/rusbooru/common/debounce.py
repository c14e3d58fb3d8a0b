"""Single-slot deferred call."""

from __future__ import annotations

import asyncio
from logging import getLogger
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable

log = getLogger(__name__)


class DebouncedCall:
    """Run ``callback`` once the schedule has been quiet for ``delay`` seconds.

    At most one invocation is ever pending: ``schedule()`` cancels the pending
    timer and starts a new one. Timers live on the running asyncio loop; with no
    loop running (plain synchronous use) the callback runs immediately.
    """

    def __init__(self, callback: Callable[[], None], *, delay: float) -> None:
        if delay < 0:
            raise ValueError("Debounce delay must be non-negative")
        self._callback = callback
        self._delay = delay
        self._handle: asyncio.TimerHandle | None = None

    @property
    def delay(self) -> float:
        return self._delay

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def schedule(self) -> None:
        self.cancel()
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            self._callback()
            return
        self._handle = loop.call_later(self._delay, self._fire)

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def flush(self) -> bool:
        """Run the pending call now. Returns whether one was pending."""

        if self._handle is None:
            return False
        self.cancel()
        self._callback()
        return True

    def _fire(self) -> None:
        self._handle = None
        try:
            self._callback()
        except Exception:
            # loop callbacks have nobody to raise to
            log.exception("Deferred call failed")
