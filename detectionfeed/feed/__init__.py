"""Detection feed: fetch orchestration, expansion state and view model."""

from detectionfeed.feed.controller import FetchController
from detectionfeed.feed.expansion import ExpansionSet
from detectionfeed.feed.shaping import (
    Empty,
    Populated,
    describe_failure,
    device_filter,
    empty_or_populated,
    format_timestamp,
)
from detectionfeed.feed.view import FeedView, build_feed_view, render_text

__all__ = [
    "Empty",
    "ExpansionSet",
    "FeedView",
    "FetchController",
    "Populated",
    "build_feed_view",
    "describe_failure",
    "device_filter",
    "empty_or_populated",
    "format_timestamp",
    "render_text",
]
