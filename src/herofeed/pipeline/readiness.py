"""Readiness gate and tri-state view model resolution."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import UTC, tzinfo

from herofeed.domain.models import (
    CATEGORY_SPECS,
    EventCategory,
    FeedState,
    FeedView,
    StreamResult,
)
from herofeed.pipeline.merger import merge_results
from herofeed.pipeline.normalizer import DropHandler, build_feed_item


def is_ready(results: Mapping[EventCategory, StreamResult]) -> bool:
    """Return true only when every category stream has settled."""
    for spec in CATEGORY_SPECS:
        result = results.get(spec.category)
        if result is None or not result.is_ready:
            return False
    return True


def resolve_view(
    results: Mapping[EventCategory, StreamResult],
    tz: tzinfo = UTC,
    on_drop: DropHandler | None = None,
) -> FeedView:
    """Gate on readiness, then merge and format the whole feed."""
    if not is_ready(results):
        return FeedView(state=FeedState.LOADING)
    merged = merge_results(results, on_drop=on_drop)
    if not merged:
        return FeedView(state=FeedState.EMPTY)
    items = tuple(build_feed_item(event, position, tz) for position, event in enumerate(merged))
    return FeedView(state=FeedState.FEED, items=items)
