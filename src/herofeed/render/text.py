"""Plain-text rendering of the feed view model."""

from __future__ import annotations

from herofeed.domain.models import FeedItem, FeedState, FeedView

LOADING_TEXT = "Loading events history..."
EMPTY_TEXT = "No events found"


def render_item(item: FeedItem) -> list[str]:
    fields = " | ".join(f"{label}: {value}" for label, value in item.display_fields.items())
    return [f"[{item.label}] {item.display_timestamp}", f"    {fields}"]


def render_text(view: FeedView) -> list[str]:
    """Render the view model as console lines."""
    if view.state == FeedState.LOADING:
        return [LOADING_TEXT]
    lines = [f"Recent Events ({view.count})"]
    if view.state == FeedState.EMPTY:
        lines.append(EMPTY_TEXT)
        return lines
    for item in view.items:
        lines.extend(render_item(item))
    return lines
