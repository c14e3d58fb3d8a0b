"""Danbooru configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from .env import optional_env_var, require_env_vars
from .http_resilience import RateLimit, ResilienceConfig

DEFAULT_DANBOORU_BASE_URL = "https://danbooru.donmai.us"
DANBOORU_TIMEOUT_SECONDS = 10.0


@dataclass(frozen=True, slots=True)
class DanbooruCredentials:
    login: str
    api_key: str


@dataclass(frozen=True, slots=True)
class DanbooruConfig:
    """Holds Danbooru API configuration values.

    Any Danbooru-compatible site works; point ``DANBOORU_BASE_URL`` at it.
    """

    resilience: ResilienceConfig
    credentials: DanbooruCredentials | None = None


def _credentials_from_environment() -> DanbooruCredentials | None:
    login = optional_env_var("DANBOORU_LOGIN")
    api_key = optional_env_var("DANBOORU_API_KEY")
    if login is None and api_key is None:
        return None
    values = require_env_vars(("DANBOORU_LOGIN", "DANBOORU_API_KEY"))
    return DanbooruCredentials(login=values["DANBOORU_LOGIN"], api_key=values["DANBOORU_API_KEY"])


def get_danbooru_config(*, resilience: ResilienceConfig | None = None) -> DanbooruConfig:
    base_url = optional_env_var("DANBOORU_BASE_URL") or DEFAULT_DANBOORU_BASE_URL
    return DanbooruConfig(
        resilience=resilience
        or ResilienceConfig(
            name="danbooru",
            base_url=base_url.rstrip("/"),
            timeout_seconds=DANBOORU_TIMEOUT_SECONDS,
            ratelimit=RateLimit(max_calls=10, per_seconds=1.0),
        ),
        credentials=_credentials_from_environment(),
    )
