"""Hydrated alert data structures."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class ProcessInfo:
    """One process in an alert's ancestry (offending process, parent or grandparent)."""

    filename: str = ""
    filepath: str = ""
    cmdline: str = ""
    sha256: str = ""
    user_name: str = ""

    @property
    def is_empty(self) -> bool:
        return not (self.filename or self.filepath or self.cmdline)


@dataclass(frozen=True)
class AlertRecord:
    """A detection hydrated from its composite identifier.

    Produced by the alert service's hydration stage, consumed by the feed
    controller and view. Immutable: a new fetch replaces the whole feed
    rather than mutating individual records.
    """

    composite_id: str
    description: str
    tactic: str
    technique: str
    severity_name: str
    timestamp: datetime
    pattern_disposition_description: str = ""
    details_link: str | None = None
    process: ProcessInfo | None = None
    parent: ProcessInfo | None = None
    grandparent: ProcessInfo | None = None
