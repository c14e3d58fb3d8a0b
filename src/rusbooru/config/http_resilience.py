"""Configuration types for resilient HTTP clients."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import httpx

if TYPE_CHECKING:
    from collections.abc import Mapping


@dataclass(slots=True, frozen=True)
class RetryPolicy:
    """Fixed-delay retry budget applied below the response cache.

    ``total`` counts retries, so the default makes five attempts in all. Every
    retry waits ``delay_seconds``; the final attempt's failure is not suppressed.
    """

    total: int = 4
    delay_seconds: float = 5.0
    status_forcelist: frozenset[int] = field(
        default_factory=lambda: frozenset(range(500, 600))
    )
    retry_on_exceptions: tuple[type[httpx.HTTPError], ...] = (httpx.TransportError,)

    @property
    def attempts(self) -> int:
        return self.total + 1


@dataclass(slots=True, frozen=True)
class RateLimit:
    max_calls: int
    per_seconds: float


@dataclass(slots=True, frozen=True)
class DedupConfig:
    enabled: bool = True
    window_seconds: float = 300.0


@dataclass(slots=True, frozen=True)
class ResilienceConfig:
    name: str
    base_url: str | None = None
    timeout_seconds: float = 30.0
    retry: RetryPolicy = field(default_factory=RetryPolicy)
    ratelimit: RateLimit | None = None
    max_concurrency: int | None = None
    dedup: DedupConfig = field(default_factory=DedupConfig)
    default_headers: Mapping[str, str] | None = None
