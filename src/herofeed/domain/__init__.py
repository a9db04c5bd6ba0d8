"""Domain models for the event feed."""

from .models import (
    CATEGORY_SPECS,
    NOT_AVAILABLE,
    ZERO_ADDRESS,
    BadgeColor,
    CategorySpec,
    EventCategory,
    EventId,
    EventPayload,
    FeedItem,
    FeedState,
    FeedView,
    NormalizedEvent,
    RawEvent,
    StreamResult,
    StreamStatus,
    category_spec,
)

__all__ = [
    "CATEGORY_SPECS",
    "NOT_AVAILABLE",
    "ZERO_ADDRESS",
    "BadgeColor",
    "CategorySpec",
    "EventCategory",
    "EventId",
    "EventPayload",
    "FeedItem",
    "FeedState",
    "FeedView",
    "NormalizedEvent",
    "RawEvent",
    "StreamResult",
    "StreamStatus",
    "category_spec",
]
