"""Fetch lifecycle state for a detection feed."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from detectionfeed.models.alerts import AlertRecord


class FetchPhase(StrEnum):
    """Phase of a feed load."""

    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"


@dataclass(frozen=True)
class FetchState:
    """Snapshot of one feed load.

    ``records`` is empty until the phase is READY. ``error_message`` is set
    only in the FAILED phase.
    """

    phase: FetchPhase = FetchPhase.LOADING
    records: tuple[AlertRecord, ...] = ()
    error_message: str | None = None

    @property
    def is_loading(self) -> bool:
        return self.phase == FetchPhase.LOADING

    @property
    def is_ready(self) -> bool:
        return self.phase == FetchPhase.READY

    @property
    def is_failed(self) -> bool:
        return self.phase == FetchPhase.FAILED
