"""Shared fixtures for detectionfeed tests.

Provides alert factories (both AlertRecord and raw Alerts API entities)
and AsyncMock-backed alert service doubles, so tests can exercise the
controller and view without touching a real Alerts API.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest
import structlog

from detectionfeed.models.alerts import AlertRecord, ProcessInfo

# ---------------------------------------------------------------------------
# Timestamp helpers
# ---------------------------------------------------------------------------

T1 = datetime(2024, 1, 15, 10, 30, tzinfo=UTC)
T2 = T1 - timedelta(hours=1)


# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _quiet_logging(monkeypatch: pytest.MonkeyPatch):
    """Route structlog output nowhere and keep the bootstrap from reconfiguring it."""
    structlog.configure(
        processors=[structlog.processors.KeyValueRenderer()],
        logger_factory=structlog.ReturnLoggerFactory(),
        cache_logger_on_first_use=False,
    )
    monkeypatch.setattr("detectionfeed.app.setup_logging", lambda *args, **kwargs: None)
    yield
    structlog.reset_defaults()


# ---------------------------------------------------------------------------
# Alert factories
# ---------------------------------------------------------------------------


def make_alert(
    composite_id: str = "cid:ind:A1",
    description: str = "A process attempted credential dumping",
    tactic: str = "Credential Access",
    technique: str = "OS Credential Dumping",
    severity_name: str = "High",
    timestamp: datetime | None = None,
    disposition: str = "Prevention, process killed.",
    details_link: str | None = "https://falcon.crowdstrike.com/activity-v2/detections/A1",
    with_ancestry: bool = True,
) -> AlertRecord:
    """Create an AlertRecord with sensible defaults for testing."""
    process = parent = grandparent = None
    if with_ancestry:
        process = ProcessInfo(filename="mimikatz.exe", cmdline="mimikatz.exe sekurlsa::logonpasswords")
        parent = ProcessInfo(filename="cmd.exe", cmdline="cmd.exe /c mimikatz.exe")
        grandparent = ProcessInfo(filename="explorer.exe", cmdline="C:\\Windows\\Explorer.EXE")
    return AlertRecord(
        composite_id=composite_id,
        description=description,
        tactic=tactic,
        technique=technique,
        severity_name=severity_name,
        timestamp=timestamp or T1,
        pattern_disposition_description=disposition,
        details_link=details_link,
        process=process,
        parent=parent,
        grandparent=grandparent,
    )


def make_raw_alert(composite_id: str = "cid:ind:A1", **overrides: Any) -> dict[str, Any]:
    """Create an Alerts API v2 entity as the service returns it."""
    raw: dict[str, Any] = {
        "composite_id": composite_id,
        "description": "A process attempted credential dumping",
        "tactic": "Credential Access",
        "technique": "OS Credential Dumping",
        "severity_name": "High",
        "timestamp": "2024-01-15T10:30:00.123Z",
        "pattern_disposition_description": "Prevention, process killed.",
        "falcon_host_link": f"https://falcon.crowdstrike.com/activity-v2/detections/{composite_id}",
        "filename": "mimikatz.exe",
        "filepath": "\\Device\\HarddiskVolume3\\Tools\\mimikatz.exe",
        "cmdline": "mimikatz.exe sekurlsa::logonpasswords",
        "sha256": "a" * 64,
        "user_name": "alice",
        "parent_details": {
            "filename": "cmd.exe",
            "filepath": "\\Device\\HarddiskVolume3\\Windows\\System32\\cmd.exe",
            "cmdline": "cmd.exe /c mimikatz.exe",
        },
        "grandparent_details": {
            "filename": "explorer.exe",
            "cmdline": "C:\\Windows\\Explorer.EXE",
        },
    }
    raw.update(overrides)
    return raw


# ---------------------------------------------------------------------------
# Alert service doubles
# ---------------------------------------------------------------------------


def make_client(
    ids: list[str] | Exception | None = None,
    records: list[AlertRecord] | Exception | None = None,
) -> MagicMock:
    """Alert service double. Exceptions are raised by the matching stage."""
    client = MagicMock()
    if isinstance(ids, Exception):
        client.query_ids = AsyncMock(side_effect=ids)
    else:
        client.query_ids = AsyncMock(return_value=ids if ids is not None else [])
    if isinstance(records, Exception):
        client.hydrate = AsyncMock(side_effect=records)
    else:
        client.hydrate = AsyncMock(return_value=records if records is not None else [])
    client.__aenter__.return_value = client
    return client


@pytest.fixture()
def two_alert_client() -> MagicMock:
    """Service returning A1 (newest, HIGH) then A2 (older)."""
    return make_client(
        ids=["A1", "A2"],
        records=[
            make_alert("A1", severity_name="HIGH", timestamp=T1),
            make_alert("A2", severity_name="Low", timestamp=T2),
        ],
    )
