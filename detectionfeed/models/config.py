"""Configuration data structures."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class ServiceConfig:
    """Alerts API connection configuration."""

    base_url: str = "https://api.crowdstrike.com"
    token_ref: str = ""  # name of the env var holding the bearer token
    timeout_seconds: int = 30
    query_limit: int = 100
    query_sort: str = "timestamp|desc"


@dataclass
class LogConfig:
    """Logging configuration."""

    level: str = "info"
    format: str = "json"


@dataclass
class DetectionFeedConfig:
    """Top-level detectionfeed configuration."""

    service: ServiceConfig = field(default_factory=ServiceConfig)
    log: LogConfig = field(default_factory=LogConfig)
