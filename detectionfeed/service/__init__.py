"""Alert service boundary for detectionfeed.

Exports:
    AlertService         -- Abstract two-stage service (query ids, hydrate).
    FalconAlertService   -- httpx adapter for the Falcon Alerts API.
    AlertServiceError    -- Base of the service error taxonomy.
    QueryFailure / HydrationFailure / MalformedResponseError
    build_alert_service  -- Factory used by the application bootstrap.
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

import httpx
import structlog

from detectionfeed.service.base import AlertService
from detectionfeed.service.errors import (
    AlertServiceError,
    HydrationFailure,
    MalformedResponseError,
    QueryFailure,
)
from detectionfeed.service.falcon import FalconAlertService, parse_alert

if TYPE_CHECKING:
    from detectionfeed.models.config import ServiceConfig

_log = structlog.get_logger(component="service")

__all__ = [
    "AlertService",
    "AlertServiceError",
    "FalconAlertService",
    "HydrationFailure",
    "MalformedResponseError",
    "QueryFailure",
    "build_alert_service",
    "parse_alert",
]


def build_alert_service(config: ServiceConfig) -> FalconAlertService:
    """Build a FalconAlertService that owns its HTTP client.

    ``config.token_ref`` names an environment variable holding an already
    issued bearer token. When the ref is unset or the variable is empty the
    client is built without an Authorization header.
    """
    headers = {"Accept": "application/json"}
    if config.token_ref:
        token = os.environ.get(config.token_ref, "")
        if token:
            headers["Authorization"] = f"Bearer {token}"
        else:
            _log.warning("service_token_missing", token_ref=config.token_ref)

    http = httpx.AsyncClient(
        base_url=config.base_url,
        headers=headers,
        timeout=float(config.timeout_seconds),
    )
    _log.debug("alert_service_built", base_url=config.base_url, limit=config.query_limit)
    return FalconAlertService(
        http,
        limit=config.query_limit,
        sort=config.query_sort,
        owns_client=True,
    )
