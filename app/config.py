"""
app/config.py

Application-level configuration helpers.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

from db.config import database_url_from_env, load_env_files


@lru_cache(maxsize=1)
def _load_env_once() -> None:
    """
    Ensure project `.env` files are loaded once before reading app settings.
    """

    load_env_files()


def _get_bool_env(name: str, default: bool) -> bool:
    """
    Read a boolean from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    return raw_value.strip().lower() in {"1", "true", "yes", "on"}


def _get_int_env(name: str, default: int) -> int:
    """
    Read an integer from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    try:
        return int(raw_value)
    except ValueError:
        return default


def _get_str_env(name: str, default: str) -> str:
    _load_env_once()
    value = os.getenv(name)
    if value is None:
        return default
    stripped = value.strip()
    return stripped if stripped else default


def _get_optional_str_env(name: str) -> str | None:
    _load_env_once()
    value = os.getenv(name)
    if value is None:
        return None
    stripped = value.strip()
    return stripped if stripped else None


@dataclass(frozen=True)
class BatchImportSettings:
    """
    Runtime settings for CSV batch imports.

    ``timezone`` is the IANA zone whose calendar date counts as "today"
    when rejecting future-dated rows.
    """

    max_records: int = 1000
    log_validation_errors: bool = True
    timezone: str = "UTC"


@dataclass(frozen=True)
class DatabaseSettings:
    """
    Engine and pool options for the single PostgreSQL database.
    """

    url: str
    echo: bool = False
    pool_size: int = 5
    max_overflow: int = 10
    pool_recycle: int = 1800


@dataclass(frozen=True)
class AuthSettings:
    """
    Identity fallback used when a request carries no user header.
    """

    default_user_id: str | None = None


@lru_cache(maxsize=1)
def get_batch_import_settings() -> BatchImportSettings:
    """
    Return cached batch import settings from environment variables.
    """

    return BatchImportSettings(
        max_records=max(1, _get_int_env("BATCH_IMPORT_MAX_RECORDS", 1000)),
        log_validation_errors=_get_bool_env("BATCH_IMPORT_LOG_VALIDATION_ERRORS", True),
        timezone=_get_str_env("BATCH_IMPORT_TIMEZONE", "UTC"),
    )


@lru_cache(maxsize=1)
def get_auth_settings() -> AuthSettings:
    return AuthSettings(default_user_id=_get_optional_str_env("DEFAULT_USER_ID"))


@lru_cache(maxsize=1)
def get_database_settings() -> DatabaseSettings:
    """
    Return cached database settings. Raises RuntimeError when DATABASE_URL is
    missing or not a PostgreSQL URL.
    """

    return DatabaseSettings(
        url=database_url_from_env(),
        echo=_get_bool_env("SQL_ECHO", False),
        pool_size=max(1, _get_int_env("DB_POOL_SIZE", 5)),
        max_overflow=max(0, _get_int_env("DB_MAX_OVERFLOW", 10)),
        pool_recycle=_get_int_env("DB_POOL_RECYCLE", 1800),
    )
