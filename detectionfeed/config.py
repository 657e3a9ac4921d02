"""Configuration loading from environment variables."""

from __future__ import annotations

import os

from detectionfeed.models.config import DetectionFeedConfig, LogConfig, ServiceConfig


def _env(key: str, default: str = "") -> str:
    return os.environ.get(f"DETECTIONFEED_{key}", default)


def _env_int(key: str, default: int, min_val: int | None = None, max_val: int | None = None) -> int:
    val = int(_env(key, str(default)))
    if min_val is not None:
        val = max(val, min_val)
    if max_val is not None:
        val = min(val, max_val)
    return val


def validate_base_url(value: str) -> str:
    """Return *value* without a trailing slash; raise ValueError unless http(s)."""
    if not value.startswith(("http://", "https://")):
        raise ValueError(f"Invalid service base URL: {value!r}")
    return value.rstrip("/")


def _validate_sort(value: str) -> str:
    field_name, _, direction = value.partition("|")
    if not field_name or direction not in ("asc", "desc"):
        raise ValueError(f"Invalid query sort: {value}. Expected '<field>|asc' or '<field>|desc'")
    return value


def _validate_log_level(value: str) -> str:
    valid = {"debug", "info", "warning", "error"}
    if value.lower() not in valid:
        raise ValueError(f"Invalid log level: {value}. Must be one of {valid}")
    return value.lower()


def _validate_log_format(value: str) -> str:
    valid = {"json", "console"}
    if value.lower() not in valid:
        raise ValueError(f"Invalid log format: {value}. Must be one of {valid}")
    return value.lower()


def load_config() -> DetectionFeedConfig:
    """Load configuration from DETECTIONFEED_* environment variables."""
    return DetectionFeedConfig(
        service=ServiceConfig(
            base_url=validate_base_url(_env("SERVICE_BASE_URL", "https://api.crowdstrike.com")),
            token_ref=_env("SERVICE_TOKEN_REF", ""),
            timeout_seconds=_env_int("SERVICE_TIMEOUT", 30, min_val=1, max_val=120),
            query_limit=_env_int("QUERY_LIMIT", 100, min_val=1, max_val=10000),
            query_sort=_validate_sort(_env("QUERY_SORT", "timestamp|desc")),
        ),
        log=LogConfig(
            level=_validate_log_level(_env("LOG_LEVEL", "info")),
            format=_validate_log_format(_env("LOG_FORMAT", "json")),
        ),
    )
