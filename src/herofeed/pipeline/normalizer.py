"""Event tagging, payload typing and display-field derivation."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import UTC, tzinfo
from types import MappingProxyType

from herofeed.domain.models import (
    NOT_AVAILABLE,
    PAYLOAD_TYPES,
    ArenaCompletedPayload,
    ArenaCreatedPayload,
    AuctionCreatedPayload,
    AuctionEndedPayload,
    BidPlacedPayload,
    BoughtPayload,
    EventCategory,
    EventPayload,
    FeedItem,
    ListedPayload,
    NormalizedEvent,
    RawEvent,
    StreamResult,
    category_spec,
)
from herofeed.errors import MalformedEventError
from herofeed.pipeline.formatting import (
    format_address,
    format_identifier,
    format_price,
    format_tail,
    format_timestamp,
    parse_timestamp_ms,
)

logger = logging.getLogger(__name__)

DropHandler = Callable[[EventCategory, RawEvent, str], None]

ARENA_CREATED_HEADLINE = "⚔️ Battle Arena Created"
NO_BIDS_PLACED = "No bids placed"


def normalize_event(raw: RawEvent, category: EventCategory) -> NormalizedEvent:
    """Tag a raw event with the category of the stream that fetched it."""
    if raw.timestamp_ms is None:
        raise MalformedEventError("timestampMs is missing")
    timestamp = parse_timestamp_ms(raw.timestamp_ms, field_name="timestampMs")
    payload_type = PAYLOAD_TYPES[category]
    return NormalizedEvent(
        category=category,
        id=str(raw.id),
        timestamp_ms=str(timestamp),
        payload=MappingProxyType(dict(raw.parsed_json)),
        details=payload_type.from_payload(raw.parsed_json),
        tx_digest=raw.id.tx_digest,
    )


def normalize_stream(
    result: StreamResult,
    on_drop: DropHandler | None = None,
) -> list[NormalizedEvent]:
    """Normalize one settled stream, skipping events without a usable timestamp."""
    normalized: list[NormalizedEvent] = []
    for raw in result.events:
        try:
            normalized.append(normalize_event(raw, result.category))
        except MalformedEventError as exc:
            logger.debug("dropping %s event %s: %s", result.category, raw.id, exc)
            if on_drop is not None:
                on_drop(result.category, raw, str(exc))
    return normalized


def _display(value: str | None, formatter: Callable[[str], str]) -> str:
    if value is None:
        return NOT_AVAILABLE
    try:
        return formatter(value)
    except MalformedEventError as exc:
        logger.debug("rendering placeholder for malformed field: %s", exc)
        return NOT_AVAILABLE


def _sui(value: str) -> str:
    return f"{format_price(value)} SUI"


def _listed_fields(details: ListedPayload, tz: tzinfo) -> dict[str, str]:
    return {
        "Price": _display(details.price, _sui),
        "Seller": _display(details.seller, format_address),
        "ID": _display(details.id, format_identifier),
    }


def _bought_fields(details: BoughtPayload, tz: tzinfo) -> dict[str, str]:
    return {
        "Price": _display(details.price, _sui),
        "Buyer": _display(details.buyer, format_address),
        "Seller": _display(details.seller, format_address),
        "ID": _display(details.id, format_identifier),
    }


def _arena_created_fields(details: ArenaCreatedPayload, tz: tzinfo) -> dict[str, str]:
    return {
        "Event": ARENA_CREATED_HEADLINE,
        "ID": _display(details.id, format_identifier),
    }


def _arena_completed_fields(details: ArenaCompletedPayload, tz: tzinfo) -> dict[str, str]:
    return {
        "Winner": _display(details.winner, format_tail),
        "Loser": _display(details.loser, format_tail),
    }


def _auction_created_fields(details: AuctionCreatedPayload, tz: tzinfo) -> dict[str, str]:
    return {
        "Starting Price": _display(details.starting_price, _sui),
        "Seller": _display(details.seller, format_address),
        "End Time": _display(details.end_time, lambda value: format_timestamp(value, tz)),
        "Auction ID": _display(details.auction_id, format_identifier),
    }


def _bid_placed_fields(details: BidPlacedPayload, tz: tzinfo) -> dict[str, str]:
    return {
        "Bid Amount": _display(details.amount, _sui),
        "Bidder": _display(details.bidder, format_address),
        "Auction ID": _display(details.auction_id, format_identifier),
    }


def _auction_ended_fields(details: AuctionEndedPayload, tz: tzinfo) -> dict[str, str]:
    fields = {"Final Price": _display(details.final_price, _sui)}
    if details.has_winner:
        fields["Winner"] = _display(details.winner, format_address)
    else:
        fields["Result"] = NO_BIDS_PLACED
    fields["Seller"] = _display(details.seller, format_address)
    fields["Auction ID"] = _display(details.auction_id, format_identifier)
    return fields


_FIELD_BUILDERS: dict[EventCategory, Callable[[EventPayload, tzinfo], dict[str, str]]] = {
    EventCategory.LISTED: _listed_fields,
    EventCategory.BOUGHT: _bought_fields,
    EventCategory.ARENA_CREATED: _arena_created_fields,
    EventCategory.ARENA_COMPLETED: _arena_completed_fields,
    EventCategory.AUCTION_CREATED: _auction_created_fields,
    EventCategory.BID_PLACED: _bid_placed_fields,
    EventCategory.AUCTION_ENDED: _auction_ended_fields,
}


def display_fields(event: NormalizedEvent, tz: tzinfo = UTC) -> dict[str, str]:
    """Return the label -> formatted value pairs shown on an event card."""
    return _FIELD_BUILDERS[event.category](event.details, tz)


def build_feed_item(event: NormalizedEvent, position: int, tz: tzinfo = UTC) -> FeedItem:
    """Build the display-ready card for an event at a feed position."""
    spec = category_spec(event.category)
    return FeedItem(
        key=f"{event.tx_digest}-{position}",
        category=event.category,
        label=spec.label,
        badge_color=spec.badge_color,
        timestamp_ms=event.timestamp_ms,
        display_timestamp=_display(event.timestamp_ms, lambda value: format_timestamp(value, tz)),
        display_fields=display_fields(event, tz),
    )
