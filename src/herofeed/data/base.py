"""Event query service contract."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any, Literal, Protocol

from herofeed.domain.models import RawEvent
from herofeed.errors import MalformedEventError

logger = logging.getLogger(__name__)

QueryOrder = Literal["ascending", "descending"]


class EventQueryClient(Protocol):
    """Interface for event retrieval by type filter."""

    def query_events(self, event_type: str, limit: int, order: QueryOrder) -> list[RawEvent]:
        """Return at most `limit` events of `event_type` in the requested order."""


def events_from_records(records: Iterable[Any], event_type: str = "") -> list[RawEvent]:
    """Parse query result records, skipping ones without a usable event id."""
    events: list[RawEvent] = []
    for record in records:
        if not isinstance(record, dict):
            logger.warning("skipping non-object %s record", event_type or "event")
            continue
        try:
            events.append(RawEvent.from_rpc(record))
        except MalformedEventError as exc:
            logger.warning("skipping %s record: %s", event_type or "event", exc)
    return events
