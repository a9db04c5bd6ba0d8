"""Union and ordering of the per-category event streams."""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from herofeed.domain.models import CATEGORY_SPECS, EventCategory, NormalizedEvent, StreamResult
from herofeed.pipeline.normalizer import DropHandler, normalize_stream


def merge_streams(streams: Iterable[Iterable[NormalizedEvent]]) -> list[NormalizedEvent]:
    """Concatenate streams and order them newest first.

    The sort is stable, so equal timestamps keep stream order, then arrival order.
    """
    merged = [event for stream in streams for event in stream]
    merged.sort(key=lambda event: event.timestamp_value, reverse=True)
    return merged


def merge_results(
    results: Mapping[EventCategory, StreamResult],
    on_drop: DropHandler | None = None,
) -> list[NormalizedEvent]:
    """Normalize every settled stream in category order and merge them."""
    streams = [
        normalize_stream(results[spec.category], on_drop=on_drop)
        for spec in CATEGORY_SPECS
        if spec.category in results
    ]
    return merge_streams(streams)
