"""Fetch, normalize, merge and gate the event feed."""

from .fetcher import PAGE_SIZE, StreamFetcher, event_filters, fetch_streams
from .formatting import format_address, format_price, format_timestamp
from .merger import merge_results, merge_streams
from .normalizer import build_feed_item, display_fields, normalize_event, normalize_stream
from .readiness import is_ready, resolve_view

__all__ = [
    "PAGE_SIZE",
    "StreamFetcher",
    "build_feed_item",
    "display_fields",
    "event_filters",
    "fetch_streams",
    "format_address",
    "format_price",
    "format_timestamp",
    "is_ready",
    "merge_results",
    "merge_streams",
    "normalize_event",
    "normalize_stream",
    "resolve_view",
]
