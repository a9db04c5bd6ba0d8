"""JSON-file-backed event client for offline runs."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from herofeed.data.base import QueryOrder, events_from_records
from herofeed.domain.models import RawEvent


class JsonFixtureEventClient:
    """Serve recorded `suix_queryEvents` records from a local JSON file.

    The file holds either a list of event records or an object with a `data`
    list, the same shape the RPC returns for one page.
    """

    def __init__(self, path: str) -> None:
        self.path = Path(path)
        self._records: list[dict[str, Any]] | None = None

    def query_events(self, event_type: str, limit: int, order: QueryOrder) -> list[RawEvent]:
        matching = [record for record in self._load_records() if record.get("type") == event_type]
        matching.sort(
            key=lambda record: self._sort_value(record.get("timestampMs")),
            reverse=order == "descending",
        )
        return events_from_records(matching[: max(0, limit)], event_type)

    def _load_records(self) -> list[dict[str, Any]]:
        if self._records is not None:
            return self._records
        if not self.path.exists():
            raise ValueError(f"No fixture file found at {self.path}")
        with self.path.open("r", encoding="utf-8") as handle:
            loaded = json.load(handle)
        if isinstance(loaded, dict):
            loaded = loaded.get("data", [])
        if not isinstance(loaded, list):
            raise ValueError(f"{self.path}: expected a list of event records")
        self._records = [record for record in loaded if isinstance(record, dict)]
        return self._records

    @staticmethod
    def _sort_value(value: Any) -> int:
        try:
            return int(str(value))
        except ValueError:
            return 0
