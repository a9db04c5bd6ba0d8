from __future__ import annotations

from typing import Any

import pytest

from herofeed.domain.models import (
    CATEGORY_SPECS,
    ZERO_ADDRESS,
    BadgeColor,
    EventCategory,
    EventId,
    ListedPayload,
    RawEvent,
    StreamResult,
)
from herofeed.errors import MalformedEventError
from herofeed.pipeline.normalizer import (
    build_feed_item,
    display_fields,
    normalize_event,
    normalize_stream,
)
from herofeed.pipeline.readiness import resolve_view

SELLER = "0x1234567890abcdef"
BUYER = "0xfedcba0987654321"


def _raw(tx: str, timestamp: str | None, payload: dict[str, Any] | None = None) -> RawEvent:
    return RawEvent(
        id=EventId(tx_digest=tx, event_seq="0"),
        timestamp_ms=timestamp,
        parsed_json=payload or {},
    )


def test_normalize_event_tags_category_from_caller() -> None:
    raw = _raw("tx1", "1000", {"id": "0xabcdef123456", "price": "1000000000", "seller": SELLER})

    event = normalize_event(raw, EventCategory.LISTED)

    assert event.category == EventCategory.LISTED
    assert event.id == "tx1:0"
    assert event.timestamp_ms == "1000"
    assert event.timestamp_value == 1000
    assert event.payload["price"] == "1000000000"
    assert event.details == ListedPayload(id="0xabcdef123456", price="1000000000", seller=SELLER)


def test_normalize_event_rejects_missing_or_malformed_timestamp() -> None:
    with pytest.raises(MalformedEventError, match="timestampMs"):
        normalize_event(_raw("tx1", None), EventCategory.LISTED)
    with pytest.raises(MalformedEventError):
        normalize_event(_raw("tx1", "soon"), EventCategory.LISTED)


def test_normalize_stream_drops_only_malformed_events() -> None:
    dropped: list[tuple[EventCategory, str, str]] = []
    result = StreamResult.ready(
        EventCategory.BOUGHT,
        [_raw("good", "2000"), _raw("bad", "not-a-number"), _raw("also-good", "1000")],
    )

    events = normalize_stream(
        result,
        on_drop=lambda category, raw, reason: dropped.append((category, str(raw.id), reason)),
    )

    assert [event.id for event in events] == ["good:0", "also-good:0"]
    assert len(dropped) == 1
    assert dropped[0][0] == EventCategory.BOUGHT
    assert dropped[0][1] == "bad:0"


def test_listed_fields_format_price_address_and_id() -> None:
    event = normalize_event(
        _raw("tx1", "1000", {"id": "0xabcdef123456", "price": "1000000000", "seller": SELLER}),
        EventCategory.LISTED,
    )

    assert display_fields(event) == {
        "Price": "1.00 SUI",
        "Seller": "0x1234...cdef",
        "ID": "0xabcdef...",
    }


def test_bought_fields_accept_integer_amounts() -> None:
    event = normalize_event(
        _raw("tx1", "1000", {"price": 2500000000, "buyer": BUYER, "seller": SELLER}),
        EventCategory.BOUGHT,
    )

    fields = display_fields(event)

    assert fields["Price"] == "2.50 SUI"
    assert fields["Buyer"] == "0xfedc...4321"
    assert fields["Seller"] == "0x1234...cdef"
    assert fields["ID"] == "N/A"


def test_missing_payload_fields_render_placeholder() -> None:
    event = normalize_event(_raw("tx1", "1000"), EventCategory.BID_PLACED)

    assert display_fields(event) == {
        "Bid Amount": "N/A",
        "Bidder": "N/A",
        "Auction ID": "N/A",
    }


def test_malformed_amount_renders_placeholder_without_dropping_event() -> None:
    event = normalize_event(
        _raw("tx1", "1000", {"price": "lots", "seller": SELLER}), EventCategory.LISTED
    )

    assert display_fields(event)["Price"] == "N/A"
    assert display_fields(event)["Seller"] == "0x1234...cdef"


def test_arena_events_show_headline_and_address_tails() -> None:
    created = normalize_event(_raw("tx1", "1000", {"id": "0x99887766aa"}), EventCategory.ARENA_CREATED)
    completed = normalize_event(
        _raw("tx2", "2000", {"winner": "0x" + "a" * 56 + "11112222", "loser": "0x" + "b" * 64}),
        EventCategory.ARENA_COMPLETED,
    )

    assert display_fields(created) == {"Event": "⚔️ Battle Arena Created", "ID": "0x998877..."}
    assert display_fields(completed) == {"Winner": "...11112222", "Loser": "...bbbbbbbb"}


def test_auction_created_formats_end_time() -> None:
    event = normalize_event(
        _raw(
            "tx1",
            "1000",
            {
                "auction_id": "0xauction123",
                "starting_price": "500000000",
                "seller": SELLER,
                "end_time": "1700000000000",
            },
        ),
        EventCategory.AUCTION_CREATED,
    )

    assert display_fields(event) == {
        "Starting Price": "0.50 SUI",
        "Seller": "0x1234...cdef",
        "End Time": "11/14/2023, 10:13:20 PM",
        "Auction ID": "0xauctio...",
    }


def test_auction_ended_with_zero_winner_reports_no_bids() -> None:
    event = normalize_event(
        _raw("tx1", "1000", {"final_price": "0", "winner": ZERO_ADDRESS, "seller": SELLER}),
        EventCategory.AUCTION_ENDED,
    )

    fields = display_fields(event)

    assert fields["Result"] == "No bids placed"
    assert "Winner" not in fields
    assert fields["Final Price"] == "0.00 SUI"


def test_auction_ended_without_winner_field_reports_no_bids() -> None:
    event = normalize_event(_raw("tx1", "1000", {"seller": SELLER}), EventCategory.AUCTION_ENDED)

    assert display_fields(event)["Result"] == "No bids placed"


def test_auction_ended_with_winner_formats_address() -> None:
    event = normalize_event(
        _raw("tx1", "1000", {"final_price": "3000000000", "winner": BUYER}),
        EventCategory.AUCTION_ENDED,
    )

    fields = display_fields(event)

    assert fields["Winner"] == "0xfedc...4321"
    assert "Result" not in fields


def test_build_feed_item_uses_category_badge_and_label() -> None:
    event = normalize_event(_raw("digest9", "0", {"price": "1000000000"}), EventCategory.AUCTION_ENDED)

    item = build_feed_item(event, position=3)

    assert item.key == "digest9-3"
    assert item.label == "Auction Ended"
    assert item.badge_color == BadgeColor.INDIGO
    assert item.display_timestamp == "1/1/1970, 12:00:00 AM"

def test_out_of_range_amount_renders_placeholder_and_keeps_feed() -> None:

    results = {spec.category: StreamResult.ready(spec.category, []) for spec in CATEGORY_SPECS}
    results[EventCategory.LISTED] = StreamResult.ready(
        EventCategory.LISTED,
        [
            _raw("good", "2000", {"price": "1000000000", "seller": SELLER}),
            _raw("huge", "1000", {"price": "1e40", "seller": SELLER}),
        ],
    )

    view = resolve_view(results)

    assert view.count == 2
    assert view.items[0].display_fields["Price"] == "1.00 SUI"
    assert view.items[1].display_fields["Price"] == "N/A"
    assert view.items[1].display_fields["Seller"] == "0x1234...cdef"


def test_timestamp_with_huge_exponent_is_dropped() -> None:
    dropped: list[str] = []
    result = StreamResult.ready(
        EventCategory.BID_PLACED,
        [_raw("ok", "1000"), _raw("wide", "1e999999999")],
    )

    events = normalize_stream(
        result, on_drop=lambda category, raw, reason: dropped.append(raw.id.tx_digest)
    )

    assert [event.id for event in events] == ["ok:0"]
    assert dropped == ["wide"]


def test_end_time_with_huge_exponent_renders_placeholder() -> None:
    event = normalize_event(
        _raw("tx1", "1000", {"end_time": "1e999999999", "starting_price": "1e999999999"}),
        EventCategory.AUCTION_CREATED,
    )

    fields = display_fields(event)

    assert fields["End Time"] == "N/A"
    assert fields["Starting Price"] == "N/A"
