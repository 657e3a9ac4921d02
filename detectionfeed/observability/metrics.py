"""Prometheus metrics for feed loads and alert service calls."""

from __future__ import annotations

from prometheus_client import Counter, Histogram

feed_loads_total = Counter(
    "detectionfeed_loads_total",
    "Completed feed loads by outcome.",
    ["outcome"],  # ready | empty | failed | stale
)

service_request_seconds = Histogram(
    "detectionfeed_service_request_seconds",
    "Latency of alert service calls by stage.",
    ["stage"],  # query | hydrate
    buckets=(0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0),
)
