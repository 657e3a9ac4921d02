"""Core data structures for detectionfeed."""

from detectionfeed.models.alerts import AlertRecord, ProcessInfo
from detectionfeed.models.config import DetectionFeedConfig, LogConfig, ServiceConfig
from detectionfeed.models.state import FetchPhase, FetchState

__all__ = [
    "AlertRecord",
    "DetectionFeedConfig",
    "FetchPhase",
    "FetchState",
    "LogConfig",
    "ProcessInfo",
    "ServiceConfig",
]
