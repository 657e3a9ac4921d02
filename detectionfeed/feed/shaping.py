"""Data-shaping helpers shared by the controller and the view."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import UTC, datetime
from email.utils import format_datetime

from detectionfeed.models.alerts import AlertRecord
from detectionfeed.service.errors import AlertServiceError


@dataclass(frozen=True)
class Empty:
    """No detections to show."""


@dataclass(frozen=True)
class Populated:
    """At least one detection (or an error) to show."""

    records: tuple[AlertRecord, ...]


FeedContent = Empty | Populated


def format_timestamp(t: datetime) -> str:
    """Render *t* as RFC 1123 GMT text, e.g. ``Tue, 15 Oct 2024 10:30:00 GMT``.

    Naive datetimes are taken to be UTC. Output is locale independent and
    meant for display only.
    """
    if t.tzinfo is None:
        t = t.replace(tzinfo=UTC)
    return format_datetime(t.astimezone(UTC), usegmt=True)


def empty_or_populated(
    records: Sequence[AlertRecord],
    error_message: str | None = None,
) -> FeedContent:
    """Classify a feed as Empty (no records and no error) or Populated."""
    if len(records) == 0 and not error_message:
        return Empty()
    return Populated(tuple(records))


def describe_failure(exc: BaseException) -> str:
    """Convert a load failure into the single user-facing message.

    Service-reported messages win over the generic exception text; the
    HTTP status is appended when the service answered.
    """
    if isinstance(exc, AlertServiceError) and exc.service_errors:
        message = "; ".join(exc.service_errors)
        if exc.status_code is not None:
            message = f"{message} (HTTP {exc.status_code})"
        return message
    text = str(exc).strip()
    return text or type(exc).__name__


def device_filter(device_id: str) -> str:
    """Build the FQL equality filter selecting alerts for one device."""
    escaped = device_id.replace("\\", "\\\\").replace("'", "\\'")
    return f"device.device_id:'{escaped}'"
