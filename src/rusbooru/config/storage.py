"""Data storage configuration helpers."""

from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import timedelta
from pathlib import Path
from typing import Final

from .env import positive_int_env_var

APP_DIR_NAME: Final[str] = "rusbooru"
DEFAULT_DB_FILENAME: Final[str] = "rusbooru.db"
DEFAULT_TAG_CACHE_NAME: Final[str] = "rusbooru_tag-cache"
DEFAULT_TAG_CACHE_LIFETIME_DAYS: Final[int] = 30
DEFAULT_FLUSH_DELAY_SECONDS: Final[float] = 1.0


@dataclass(frozen=True, slots=True)
class StorageConfig:
    data_dir: Path
    database_filename: str = DEFAULT_DB_FILENAME

    def resolve_data_dir(self) -> Path:
        return self.data_dir.expanduser().resolve()

    def ensure_data_dir(self) -> Path:
        data_dir = self.resolve_data_dir()
        data_dir.mkdir(parents=True, exist_ok=True)
        return data_dir

    def database_path(self, *, ensure: bool = True) -> Path:
        base = self.ensure_data_dir() if ensure else self.resolve_data_dir()
        return base / self.database_filename

    def database_uri(self) -> str:
        return f"sqlite+pysqlite:///{self.database_path()}"


@dataclass(frozen=True, slots=True)
class DatabaseConfig:
    uri: str


@dataclass(frozen=True, slots=True)
class TagCacheConfig:
    """Settings of the generational tag cache.

    Entries survive between one and two ``lifetime`` periods depending on when
    they were last touched relative to the rotation.
    """

    name: str = DEFAULT_TAG_CACHE_NAME
    lifetime: timedelta = timedelta(days=DEFAULT_TAG_CACHE_LIFETIME_DAYS)
    flush_delay_seconds: float = DEFAULT_FLUSH_DELAY_SECONDS

    @property
    def lifetime_ms(self) -> int:
        return int(self.lifetime.total_seconds() * 1000)


def _default_data_dir() -> Path:
    if os.name == "nt":
        base = os.getenv("LOCALAPPDATA")
        base_path = Path(base) if base else (Path.home() / "AppData" / "Local")
    else:
        base = os.getenv("XDG_DATA_HOME")
        base_path = Path(base) if base else (Path.home() / ".local" / "share")
    return (base_path / APP_DIR_NAME).expanduser().resolve()


def get_storage_config() -> StorageConfig:
    env_dir = os.getenv("RUSBOORU_DATA_DIR")
    data_dir = Path(env_dir) if env_dir else _default_data_dir()
    return StorageConfig(data_dir=data_dir)


def get_database_config(*, storage: StorageConfig | None = None) -> DatabaseConfig:
    env_uri = os.getenv("DATABASE_URI")
    if env_uri:
        return DatabaseConfig(uri=env_uri)
    storage_config = storage or get_storage_config()
    return DatabaseConfig(uri=storage_config.database_uri())


def get_tag_cache_config() -> TagCacheConfig:
    days = positive_int_env_var(
        "RUSBOORU_CACHE_LIFETIME_DAYS", default=DEFAULT_TAG_CACHE_LIFETIME_DAYS
    )
    return TagCacheConfig(lifetime=timedelta(days=days))
