"""
app/config.py

Application-level configuration helpers.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

from db.config import load_env_files


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


def _get_optional_str_env(name: str) -> str | None:
    """
    Read an optional string value from environment variables.
    """

    _load_env_once()
    value = os.getenv(name)
    if value is None:
        return None
    stripped = value.strip()
    return stripped if stripped else None


@dataclass(frozen=True)
class BulkImportSettings:
    """
    Runtime settings for session bulk uploads.
    """

    rate_limit_max_requests: int = 5
    rate_limit_window_ms: int = 60_000
    rate_limit_max_keys: int = 10_000
    max_upload_bytes: int = 10 * 1024 * 1024
    log_row_errors: bool = True


@dataclass(frozen=True)
class SecuritySettings:
    """
    Anti-forgery token settings.
    """

    csrf_secret: str | None = None
    csrf_token_ttl_seconds: int = 3600


@lru_cache(maxsize=1)
def get_bulk_import_settings() -> BulkImportSettings:
    """
    Return cached bulk import settings from environment variables.
    """

    return BulkImportSettings(
        rate_limit_max_requests=max(1, _get_int_env("BULK_UPLOAD_RATE_LIMIT_MAX_REQUESTS", 5)),
        rate_limit_window_ms=max(1, _get_int_env("BULK_UPLOAD_RATE_LIMIT_WINDOW_MS", 60_000)),
        rate_limit_max_keys=max(1, _get_int_env("BULK_UPLOAD_RATE_LIMIT_MAX_KEYS", 10_000)),
        max_upload_bytes=max(1, _get_int_env("BULK_UPLOAD_MAX_BYTES", 10 * 1024 * 1024)),
        log_row_errors=_get_bool_env("BULK_UPLOAD_LOG_ROW_ERRORS", True),
    )


@lru_cache(maxsize=1)
def get_security_settings() -> SecuritySettings:
    """
    Return cached CSRF settings. CSRF_SECRET is checked at startup.
    """

    return SecuritySettings(
        csrf_secret=_get_optional_str_env("CSRF_SECRET"),
        csrf_token_ttl_seconds=max(1, _get_int_env("CSRF_TOKEN_TTL_SECONDS", 3600)),
    )
