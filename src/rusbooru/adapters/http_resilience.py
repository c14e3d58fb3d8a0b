from __future__ import annotations

import asyncio
import json
import logging
import time
from dataclasses import dataclass
from typing import TYPE_CHECKING

import httpx
from aiolimiter import AsyncLimiter
from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
    wait_fixed,
)

from rusbooru.common.governor import RequestGovernor

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Mapping
    from types import TracebackType

    from rusbooru.config.http_resilience import ResilienceConfig

log = logging.getLogger(__name__)


class SourceRequestError(RuntimeError):
    """Raised when a tag source could not deliver a usable response."""

    def __init__(self, message: str, *, url: str) -> None:
        super().__init__(message)
        self.url = url


class TransientTransportError(SourceRequestError):
    """Network failure or 5xx response that outlasted the retry budget."""


class ResponseParseError(SourceRequestError):
    """A successful response whose body is not JSON; never retried."""


@dataclass(slots=True)
class _CachedResponse:
    task: asyncio.Task[object]
    expires_at: float


class ResponseCache:
    """Share responses by request identity for a rolling quiescence window.

    Callers asking for the same URL while a request is running get the same
    task. Every read pushes the entry's expiry ``window`` seconds into the
    future, so an entry disappears only once nobody asked for it for that long.
    Failed responses are dropped as soon as they settle.
    """

    def __init__(self, *, window: float, clock: Callable[[], float] = time.monotonic) -> None:
        self._window = window
        self._clock = clock
        self._entries: dict[str, _CachedResponse] = {}

    def __len__(self) -> int:
        self._purge()
        return len(self._entries)

    def __contains__(self, key: str) -> bool:
        self._purge()
        return key in self._entries

    def get_or_fetch(self, key: str, fetch: Callable[[], Awaitable[object]]) -> asyncio.Task[object]:
        self._purge()
        now = self._clock()
        entry = self._entries.get(key)
        if entry is not None:
            entry.expires_at = now + self._window
            return entry.task

        async def run() -> object:
            return await fetch()

        task = asyncio.ensure_future(run())
        self._entries[key] = _CachedResponse(task=task, expires_at=now + self._window)
        task.add_done_callback(lambda done: self._settle(key, done))
        return task

    def clear(self) -> None:
        self._entries.clear()

    def _settle(self, key: str, task: asyncio.Task[object]) -> None:
        entry = self._entries.get(key)
        if entry is None or entry.task is not task:
            return
        if task.cancelled() or task.exception() is not None:
            del self._entries[key]

    def _purge(self) -> None:
        now = self._clock()
        expired = [
            key
            for key, entry in self._entries.items()
            if entry.task.done() and entry.expires_at <= now
        ]
        for key in expired:
            del self._entries[key]


class ResilientClient:
    """JSON GET client guarded by a governor, a response cache, a rate limit and retries.

    A call passes through, in order: the concurrency governor, the response
    cache, the rate limiter and finally the fixed-delay retry loop.
    """

    def __init__(
        self,
        config: ResilienceConfig,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.config = config
        self._governor: RequestGovernor | None = (
            RequestGovernor(config.max_concurrency) if config.max_concurrency else None
        )
        self._limiter: AsyncLimiter | None = (
            AsyncLimiter(config.ratelimit.max_calls, config.ratelimit.per_seconds)
            if config.ratelimit
            else None
        )
        self._responses: ResponseCache | None = (
            ResponseCache(window=config.dedup.window_seconds, clock=clock)
            if config.dedup.enabled
            else None
        )

        headers = dict(config.default_headers) if config.default_headers else None
        if config.base_url is not None:
            self._client = httpx.AsyncClient(
                base_url=config.base_url,
                timeout=config.timeout_seconds,
                headers=headers,
                transport=transport,
            )
        else:
            self._client = httpx.AsyncClient(
                timeout=config.timeout_seconds,
                headers=headers,
                transport=transport,
            )

    @property
    def governor(self) -> RequestGovernor | None:
        return self._governor

    @property
    def responses(self) -> ResponseCache | None:
        return self._responses

    async def __aenter__(self) -> ResilientClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    def request_key(self, url: str, params: Mapping[str, str | int] | None = None) -> str:
        """Identity of a GET request: the absolute URL with its encoded query."""

        return str(self._client.build_request("GET", url, params=params).url)

    async def get_json(self, url: str, *, params: Mapping[str, str | int] | None = None) -> object:
        if self._governor is None:
            return await self._get_cached(url, params)
        async with self._governor:
            return await self._get_cached(url, params)

    async def _get_cached(self, url: str, params: Mapping[str, str | int] | None) -> object:
        if self._responses is None:
            return await self._fetch_json(url, params)
        key = self.request_key(url, params)
        task = self._responses.get_or_fetch(key, lambda: self._fetch_json(url, params))
        return await asyncio.shield(task)

    async def _fetch_json(self, url: str, params: Mapping[str, str | int] | None) -> object:
        if self._limiter is None:
            response = await self._send(url, params)
        else:
            async with self._limiter:
                response = await self._send(url, params)
        return _decode_json(response)

    async def _send(self, url: str, params: Mapping[str, str | int] | None) -> httpx.Response:
        target = self.request_key(url, params)
        policy = self.config.retry
        retrying = AsyncRetrying(
            stop=stop_after_attempt(policy.attempts),
            wait=wait_fixed(policy.delay_seconds),
            retry=retry_if_exception_type(TransientTransportError),
            before_sleep=before_sleep_log(log, logging.WARNING),
            reraise=True,
        )
        try:
            return await retrying(self._send_once, url, params, target)
        except TransientTransportError:
            log.warning(
                "%s: giving up on %s after %s attempts", self.config.name, target, policy.attempts
            )
            raise

    async def _send_once(
        self, url: str, params: Mapping[str, str | int] | None, target: str
    ) -> httpx.Response:
        policy = self.config.retry
        try:
            response = await self._client.get(url, params=params)
        except policy.retry_on_exceptions as exc:
            raise TransientTransportError(
                f"{self.config.name} request failed: {exc}", url=target
            ) from exc

        if response.status_code in policy.status_forcelist:
            raise TransientTransportError(
                f"{self.config.name} responded with {response.status_code}",
                url=str(response.url),
            )
        return response


def _decode_json(response: httpx.Response) -> object:
    response.raise_for_status()
    content_type = response.headers.get("content-type", "")
    if "json" not in content_type:
        log.warning("Non-JSON response from %s: %.200s", response.url, response.text)
        raise ResponseParseError(
            f"Expected JSON from {response.url}, got {content_type or 'no content type'}",
            url=str(response.url),
        )
    try:
        return response.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise ResponseParseError(f"Malformed JSON from {response.url}", url=str(response.url)) from exc
