"""Core event feed domain models."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from enum import StrEnum
from typing import Any, Self

from herofeed.errors import MalformedEventError

NOT_AVAILABLE = "N/A"
ZERO_ADDRESS = "0x" + "0" * 64


class EventCategory(StrEnum):
    """Event kinds emitted by the marketplace and arena modules."""

    LISTED = "listed"
    BOUGHT = "bought"
    ARENA_CREATED = "battle_created"
    ARENA_COMPLETED = "battle_completed"
    AUCTION_CREATED = "auction_created"
    BID_PLACED = "bid_placed"
    AUCTION_ENDED = "auction_ended"


class BadgeColor(StrEnum):
    """Badge colors understood by the rendering layer."""

    BLUE = "blue"
    GREEN = "green"
    ORANGE = "orange"
    RED = "red"
    PURPLE = "purple"
    YELLOW = "yellow"
    INDIGO = "indigo"


@dataclass(frozen=True)
class CategorySpec:
    """Static query and presentation settings for one event category."""

    category: EventCategory
    module: str
    event_name: str
    label: str
    badge_color: BadgeColor

    def event_type(self, deployment_id: str) -> str:
        """Return the fully-qualified Move event type for a deployment."""
        return f"{deployment_id}::{self.module}::{self.event_name}"


CATEGORY_SPECS: tuple[CategorySpec, ...] = (
    CategorySpec(EventCategory.LISTED, "marketplace", "HeroListed", "Hero Listed", BadgeColor.BLUE),
    CategorySpec(EventCategory.BOUGHT, "marketplace", "HeroBought", "Hero Bought", BadgeColor.GREEN),
    CategorySpec(
        EventCategory.ARENA_CREATED, "arena", "ArenaCreated", "Arena Created", BadgeColor.ORANGE
    ),
    CategorySpec(
        EventCategory.ARENA_COMPLETED, "arena", "ArenaCompleted", "Battle Completed", BadgeColor.RED
    ),
    CategorySpec(
        EventCategory.AUCTION_CREATED,
        "marketplace",
        "AuctionCreated",
        "Auction Created",
        BadgeColor.PURPLE,
    ),
    CategorySpec(
        EventCategory.BID_PLACED, "marketplace", "BidPlaced", "Bid Placed", BadgeColor.YELLOW
    ),
    CategorySpec(
        EventCategory.AUCTION_ENDED, "marketplace", "AuctionEnded", "Auction Ended", BadgeColor.INDIGO
    ),
)

_SPECS_BY_CATEGORY = {spec.category: spec for spec in CATEGORY_SPECS}


def category_spec(category: EventCategory) -> CategorySpec:
    """Look up the static settings for a category."""
    return _SPECS_BY_CATEGORY[category]


@dataclass(frozen=True)
class EventId:
    """Ledger identifier of an emitted event."""

    tx_digest: str
    event_seq: str

    def __str__(self) -> str:
        return f"{self.tx_digest}:{self.event_seq}"


@dataclass(frozen=True)
class RawEvent:
    """Event record exactly as returned by the query service."""

    id: EventId
    timestamp_ms: str | None
    parsed_json: dict[str, Any] = field(default_factory=dict)
    event_type: str = ""
    sender: str = ""

    @classmethod
    def from_rpc(cls, record: Mapping[str, Any]) -> Self:
        """Build a raw event from a `suix_queryEvents` result record."""
        raw_id = record.get("id")
        if not isinstance(raw_id, Mapping) or not raw_id.get("txDigest"):
            raise MalformedEventError("event record is missing id.txDigest")
        timestamp = record.get("timestampMs")
        parsed = record.get("parsedJson")
        return cls(
            id=EventId(
                tx_digest=str(raw_id["txDigest"]),
                event_seq=str(raw_id.get("eventSeq", "0")),
            ),
            timestamp_ms=None if timestamp is None else str(timestamp),
            parsed_json=dict(parsed) if isinstance(parsed, Mapping) else {},
            event_type=str(record.get("type", "")),
            sender=str(record.get("sender", "")),
        )


def _coerce_field(value: Any) -> str | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (str, int, float)):
        text = str(value)
        return text if text else None
    return None


@dataclass(frozen=True)
class EventPayload:
    """Typed view of an event's untyped payload.

    Every field is optional; a key that is absent, empty or not a scalar is
    stored as None and later rendered as the "N/A" placeholder.
    """

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> Self:
        values = {item.name: _coerce_field(payload.get(item.name)) for item in fields(cls)}
        return cls(**values)


@dataclass(frozen=True)
class ListedPayload(EventPayload):
    id: str | None = None
    price: str | None = None
    seller: str | None = None


@dataclass(frozen=True)
class BoughtPayload(EventPayload):
    id: str | None = None
    price: str | None = None
    buyer: str | None = None
    seller: str | None = None


@dataclass(frozen=True)
class ArenaCreatedPayload(EventPayload):
    id: str | None = None


@dataclass(frozen=True)
class ArenaCompletedPayload(EventPayload):
    winner: str | None = None
    loser: str | None = None


@dataclass(frozen=True)
class AuctionCreatedPayload(EventPayload):
    auction_id: str | None = None
    starting_price: str | None = None
    seller: str | None = None
    end_time: str | None = None


@dataclass(frozen=True)
class BidPlacedPayload(EventPayload):
    auction_id: str | None = None
    amount: str | None = None
    bidder: str | None = None


@dataclass(frozen=True)
class AuctionEndedPayload(EventPayload):
    auction_id: str | None = None
    final_price: str | None = None
    winner: str | None = None
    seller: str | None = None

    @property
    def has_winner(self) -> bool:
        return self.winner is not None and self.winner.lower() != ZERO_ADDRESS


PAYLOAD_TYPES: dict[EventCategory, type[EventPayload]] = {
    EventCategory.LISTED: ListedPayload,
    EventCategory.BOUGHT: BoughtPayload,
    EventCategory.ARENA_CREATED: ArenaCreatedPayload,
    EventCategory.ARENA_COMPLETED: ArenaCompletedPayload,
    EventCategory.AUCTION_CREATED: AuctionCreatedPayload,
    EventCategory.BID_PLACED: BidPlacedPayload,
    EventCategory.AUCTION_ENDED: AuctionEndedPayload,
}


@dataclass(frozen=True)
class NormalizedEvent:
    """Raw event tagged with the category of the stream that produced it."""

    category: EventCategory
    id: str
    timestamp_ms: str
    payload: Mapping[str, Any]
    details: EventPayload
    tx_digest: str = ""

    @property
    def timestamp_value(self) -> int:
        return int(self.timestamp_ms)


class StreamStatus(StrEnum):
    """Settlement state of one category fetch."""

    PENDING = "pending"
    READY = "ready"


@dataclass(frozen=True)
class StreamResult:
    """Outcome of one category fetch."""

    category: EventCategory
    status: StreamStatus
    events: tuple[RawEvent, ...] = ()

    @classmethod
    def pending(cls, category: EventCategory) -> Self:
        return cls(category=category, status=StreamStatus.PENDING)

    @classmethod
    def ready(cls, category: EventCategory, events: list[RawEvent] | tuple[RawEvent, ...]) -> Self:
        return cls(category=category, status=StreamStatus.READY, events=tuple(events))

    @property
    def is_ready(self) -> bool:
        return self.status == StreamStatus.READY


class FeedState(StrEnum):
    """Tri-state of the produced view model."""

    LOADING = "loading"
    EMPTY = "empty"
    FEED = "feed"


@dataclass(frozen=True)
class FeedItem:
    """Display-ready card for one event."""

    key: str
    category: EventCategory
    label: str
    badge_color: BadgeColor
    timestamp_ms: str
    display_timestamp: str
    display_fields: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class FeedView:
    """View model handed to the rendering layer."""

    state: FeedState
    items: tuple[FeedItem, ...] = ()

    @property
    def count(self) -> int:
        return len(self.items)
