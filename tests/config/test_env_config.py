from __future__ import annotations

import logging
from datetime import timedelta
from pathlib import Path

import pytest

from rusbooru.config import (
    ConfigurationError,
    MissingConfigurationError,
    RetryPolicy,
    configure_logging,
    get_anime_pictures_config,
    get_danbooru_config,
    get_database_config,
    get_storage_config,
    get_tag_cache_config,
    optional_env_var,
    positive_int_env_var,
    require_env_vars,
)
from rusbooru.config.anime_pictures import (
    ANIME_PICTURES_MAX_CONCURRENCY,
    DEFAULT_ANIME_PICTURES_BASE_URL,
)
from rusbooru.config.danbooru import DEFAULT_DANBOORU_BASE_URL


def test_require_env_vars_returns_values(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_VAR", "value")

    assert require_env_vars(["EXAMPLE_VAR"]) == {"EXAMPLE_VAR": "value"}


def test_require_env_vars_lists_every_missing_name(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("MISSING_B", raising=False)
    monkeypatch.setenv("MISSING_A", "   ")

    with pytest.raises(MissingConfigurationError) as exc:
        require_env_vars(["MISSING_B", "MISSING_A"])

    assert "MISSING_A, MISSING_B" in str(exc.value)


def test_optional_env_var_treats_blank_as_unset(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("BLANK_VAR", "  ")

    assert optional_env_var("BLANK_VAR") is None


@pytest.mark.parametrize("raw", ["abc", "0", "-3"])
def test_positive_int_env_var_rejects_bad_values(
    monkeypatch: pytest.MonkeyPatch, raw: str
) -> None:
    monkeypatch.setenv("SOME_DAYS", raw)

    with pytest.raises(ConfigurationError, match="SOME_DAYS"):
        positive_int_env_var("SOME_DAYS", default=1)


def test_retry_policy_defaults_to_five_attempts_five_seconds_apart() -> None:
    policy = RetryPolicy()

    assert policy.attempts == 5
    assert policy.delay_seconds == 5.0
    assert 503 in policy.status_forcelist
    assert 404 not in policy.status_forcelist


def test_anime_pictures_config_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("ANIME_PICTURES_BASE_URL", raising=False)

    config = get_anime_pictures_config()

    assert config.resilience.base_url == DEFAULT_ANIME_PICTURES_BASE_URL
    assert config.resilience.max_concurrency == ANIME_PICTURES_MAX_CONCURRENCY == 7
    assert config.resilience.dedup.window_seconds == 300.0


def test_anime_pictures_base_url_override(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ANIME_PICTURES_BASE_URL", "http://localhost:8000/api/v3/")

    assert get_anime_pictures_config().resilience.base_url == "http://localhost:8000/api/v3"


def test_danbooru_config_without_credentials(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("DANBOORU_BASE_URL", "DANBOORU_LOGIN", "DANBOORU_API_KEY"):
        monkeypatch.delenv(name, raising=False)

    config = get_danbooru_config()

    assert config.credentials is None
    assert config.resilience.base_url == DEFAULT_DANBOORU_BASE_URL
    assert config.resilience.ratelimit is not None


def test_danbooru_credentials_need_both_values(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DANBOORU_LOGIN", "someone")
    monkeypatch.delenv("DANBOORU_API_KEY", raising=False)

    with pytest.raises(MissingConfigurationError, match="DANBOORU_API_KEY"):
        get_danbooru_config()


def test_danbooru_credentials_loaded(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DANBOORU_LOGIN", "someone")
    monkeypatch.setenv("DANBOORU_API_KEY", "secret")

    credentials = get_danbooru_config().credentials

    assert credentials is not None
    assert (credentials.login, credentials.api_key) == ("someone", "secret")


def test_storage_and_database_config(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("RUSBOORU_DATA_DIR", str(tmp_path / "data"))
    monkeypatch.delenv("DATABASE_URI", raising=False)

    storage = get_storage_config()
    database = get_database_config()

    assert storage.resolve_data_dir() == (tmp_path / "data").resolve()
    assert database.uri.startswith("sqlite+pysqlite:///")
    assert database.uri.endswith("rusbooru.db")
    assert (tmp_path / "data").is_dir()


def test_database_uri_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DATABASE_URI", "sqlite+pysqlite:///:memory:")

    assert get_database_config().uri == "sqlite+pysqlite:///:memory:"


def test_tag_cache_lifetime(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("RUSBOORU_CACHE_LIFETIME_DAYS", raising=False)
    default = get_tag_cache_config()
    monkeypatch.setenv("RUSBOORU_CACHE_LIFETIME_DAYS", "2")
    custom = get_tag_cache_config()

    assert default.lifetime == timedelta(days=30)
    assert default.lifetime_ms == 30 * 24 * 60 * 60 * 1000
    assert custom.lifetime_ms == 2 * 24 * 60 * 60 * 1000


def test_configure_logging_quiets_httpx() -> None:
    configure_logging(level=logging.INFO)

    assert logging.getLogger("httpx").level == logging.WARNING
