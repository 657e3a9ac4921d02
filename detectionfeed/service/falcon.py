"""Falcon Alerts REST API adapter.

Implements the two alert service stages against the Alerts API:

    query_ids -- GET  /alerts/queries/alerts/v1   (FQL filter -> composite ids)
    hydrate   -- POST /alerts/entities/alerts/v2  (composite ids -> alert entities)

Authentication is the caller's concern: the injected ``httpx.AsyncClient``
must already carry its base URL and authorization headers.
"""

from __future__ import annotations

import time
from collections.abc import Sequence
from datetime import UTC, datetime
from typing import Any

import httpx
import structlog

from detectionfeed.models.alerts import AlertRecord, ProcessInfo
from detectionfeed.observability.metrics import service_request_seconds
from detectionfeed.service.base import AlertService
from detectionfeed.service.errors import (
    AlertServiceError,
    HydrationFailure,
    MalformedResponseError,
    QueryFailure,
)

_log = structlog.get_logger(component="service.falcon")

_QUERY_PATH = "/alerts/queries/alerts/v1"
_ENTITIES_PATH = "/alerts/entities/alerts/v2"


class FalconAlertService(AlertService):
    """Alert service backed by the Falcon Alerts API.

    Args:
        http:  Pre-configured client (base URL, auth headers, timeout).
        limit: Maximum ids returned by the query stage.
        sort:  FQL sort expression for the query stage.
        owns_client: Close *http* in ``aclose()``.
    """

    def __init__(
        self,
        http: httpx.AsyncClient,
        limit: int = 100,
        sort: str = "timestamp|desc",
        owns_client: bool = False,
    ) -> None:
        self._http = http
        self._limit = limit
        self._sort = sort
        self._owns_client = owns_client

    async def query_ids(self, filter_expression: str) -> list[str]:
        params = {
            "offset": 0,
            "limit": self._limit,
            "sort": self._sort,
            "filter": filter_expression,
        }
        payload = await self._request(QueryFailure, "query", "GET", _QUERY_PATH, params=params)
        resources = payload.get("resources") or []
        if not isinstance(resources, list) or not all(isinstance(r, str) for r in resources):
            raise MalformedResponseError("Alert query returned a malformed id list")
        return resources

    async def hydrate(self, composite_ids: Sequence[str]) -> list[AlertRecord]:
        body = {"composite_ids": list(composite_ids)}
        payload = await self._request(HydrationFailure, "hydrate", "POST", _ENTITIES_PATH, json=body)
        resources = payload.get("resources") or []
        if not isinstance(resources, list):
            raise MalformedResponseError("Alert hydration returned a malformed entity list")
        try:
            return [parse_alert(raw) for raw in resources]
        except (KeyError, TypeError, ValueError) as exc:
            raise MalformedResponseError(f"Alert entity could not be decoded: {exc}") from exc

    async def aclose(self) -> None:
        if self._owns_client:
            await self._http.aclose()

    async def __aenter__(self) -> FalconAlertService:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def _request(
        self,
        failure: type[AlertServiceError],
        stage: str,
        method: str,
        path: str,
        **kwargs: Any,
    ) -> dict[str, Any]:
        """Issue one API call and return the decoded JSON envelope.

        Raises *failure* on transport errors, non-2xx responses and
        service-reported errors.
        """
        t_start = time.monotonic()
        try:
            response = await self._http.request(method, path, **kwargs)
        except httpx.TimeoutException as exc:
            _log.warning("alerts_api_timeout", stage=stage, path=path)
            raise failure(f"Alerts API request timed out ({stage})") from exc
        except httpx.HTTPError as exc:
            _log.warning("alerts_api_http_error", stage=stage, path=path, error=str(exc))
            raise failure(f"Alerts API request failed ({stage}): {exc}") from exc
        finally:
            service_request_seconds.labels(stage=stage).observe(time.monotonic() - t_start)

        try:
            payload = response.json()
        except ValueError:
            payload = None

        if not isinstance(payload, dict):
            if not response.is_success:
                raise failure(
                    f"Alerts API returned HTTP {response.status_code} ({stage})",
                    status_code=response.status_code,
                )
            raise MalformedResponseError(
                f"Alerts API returned a non-JSON body ({stage})",
                status_code=response.status_code,
            )

        errors = _service_errors(payload)
        if not response.is_success or errors:
            _log.warning(
                "alerts_api_error_response",
                stage=stage,
                status_code=response.status_code,
                errors=errors,
            )
            raise failure(
                f"Alerts API returned HTTP {response.status_code} ({stage})",
                status_code=response.status_code,
                service_errors=errors,
            )
        return payload


def _service_errors(payload: dict[str, Any]) -> list[str]:
    """Extract messages from the envelope's ``errors`` array."""
    raw_errors = payload.get("errors") or []
    if not isinstance(raw_errors, list):
        return [str(raw_errors)]
    messages = []
    for item in raw_errors:
        if isinstance(item, dict) and item.get("message"):
            messages.append(str(item["message"]))
        else:
            messages.append(str(item))
    return messages


def parse_alert(raw: dict[str, Any]) -> AlertRecord:
    """Decode one Alerts API entity into an AlertRecord.

    Raises:
        KeyError:  ``composite_id`` or ``timestamp`` is missing.
        ValueError: the timestamp is not ISO-8601.
    """
    return AlertRecord(
        composite_id=str(raw["composite_id"]),
        description=str(raw.get("description") or ""),
        tactic=str(raw.get("tactic") or ""),
        technique=str(raw.get("technique") or ""),
        severity_name=str(raw.get("severity_name") or ""),
        timestamp=_parse_timestamp(raw["timestamp"]),
        pattern_disposition_description=str(raw.get("pattern_disposition_description") or ""),
        details_link=raw.get("falcon_host_link") or None,
        process=_parse_process(raw),
        parent=_parse_process(raw.get("parent_details")),
        grandparent=_parse_process(raw.get("grandparent_details")),
    )


def _parse_timestamp(value: object) -> datetime:
    if not isinstance(value, str):
        raise ValueError(f"timestamp must be a string, got {type(value).__name__}")
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def _parse_process(details: object) -> ProcessInfo | None:
    if not isinstance(details, dict):
        return None
    info = ProcessInfo(
        filename=str(details.get("filename") or ""),
        filepath=str(details.get("filepath") or ""),
        cmdline=str(details.get("cmdline") or ""),
        sha256=str(details.get("sha256") or ""),
        user_name=str(details.get("user_name") or ""),
    )
    return None if info.is_empty else info
