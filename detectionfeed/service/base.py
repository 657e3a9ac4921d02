"""Abstract alert service consumed by the feed controller."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence

from detectionfeed.models.alerts import AlertRecord


class AlertService(ABC):
    """Two-stage alert lookup: resolve identifiers, then hydrate them.

    Implementations raise (ideally an ``AlertServiceError`` subclass) on
    failure; the controller converts any exception into a failed state.
    """

    @abstractmethod
    async def query_ids(self, filter_expression: str) -> list[str]:
        """Return composite alert ids matching *filter_expression*, newest first."""

    @abstractmethod
    async def hydrate(self, composite_ids: Sequence[str]) -> list[AlertRecord]:
        """Expand *composite_ids* (never empty) into full records."""
