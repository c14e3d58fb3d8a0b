"""Concurrency primitives shared by the cache, the engine and the HTTP layer."""

from __future__ import annotations

from .debounce import DebouncedCall
from .governor import RequestGovernor
from .inflight import InFlightRegistry

__all__ = ["DebouncedCall", "InFlightRegistry", "RequestGovernor"]
