"""Alert service error taxonomy."""

from __future__ import annotations


class AlertServiceError(Exception):
    """Raised when an alert service call fails.

    Args:
        message:        Human-readable summary of the failure.
        status_code:    HTTP status when the service answered, else None.
        service_errors: Error messages reported in the service payload.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        service_errors: list[str] | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.service_errors = service_errors or []


class QueryFailure(AlertServiceError):
    """The identifier-resolution stage failed."""


class HydrationFailure(AlertServiceError):
    """The batch-hydration stage failed after identifiers were resolved."""


class MalformedResponseError(AlertServiceError):
    """A service payload could not be decoded into identifiers or records."""
