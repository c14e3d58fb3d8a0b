"""Anime-Pictures configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from .env import optional_env_var
from .http_resilience import ResilienceConfig

DEFAULT_ANIME_PICTURES_BASE_URL = "https://anime-pictures.net/api/v3"
ANIME_PICTURES_TIMEOUT_SECONDS = 10.0
# Anime-Pictures throttles aggressively, so calls are capped in flight
ANIME_PICTURES_MAX_CONCURRENCY = 7


@dataclass(frozen=True, slots=True)
class AnimePicturesConfig:
    resilience: ResilienceConfig


def get_anime_pictures_config(*, resilience: ResilienceConfig | None = None) -> AnimePicturesConfig:
    base_url = optional_env_var("ANIME_PICTURES_BASE_URL") or DEFAULT_ANIME_PICTURES_BASE_URL
    return AnimePicturesConfig(
        resilience=resilience
        or ResilienceConfig(
            name="anime-pictures",
            base_url=base_url.rstrip("/"),
            timeout_seconds=ANIME_PICTURES_TIMEOUT_SECONDS,
            max_concurrency=ANIME_PICTURES_MAX_CONCURRENCY,
        )
    )
