"""Application configuration helpers."""

from __future__ import annotations

from .anime_pictures import AnimePicturesConfig, get_anime_pictures_config
from .danbooru import DanbooruConfig, DanbooruCredentials, get_danbooru_config
from .env import optional_env_var, positive_int_env_var, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .http_resilience import DedupConfig, RateLimit, ResilienceConfig, RetryPolicy
from .logging import configure_logging
from .storage import (
    DatabaseConfig,
    StorageConfig,
    TagCacheConfig,
    get_database_config,
    get_storage_config,
    get_tag_cache_config,
)

__all__ = [
    "AnimePicturesConfig",
    "ConfigurationError",
    "DanbooruConfig",
    "DanbooruCredentials",
    "DatabaseConfig",
    "DedupConfig",
    "MissingConfigurationError",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "StorageConfig",
    "TagCacheConfig",
    "configure_logging",
    "get_anime_pictures_config",
    "get_danbooru_config",
    "get_database_config",
    "get_storage_config",
    "get_tag_cache_config",
    "optional_env_var",
    "positive_int_env_var",
    "require_env_vars",
]
