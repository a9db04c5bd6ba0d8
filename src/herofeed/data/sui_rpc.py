"""Sui full-node JSON-RPC event client."""

from __future__ import annotations

import logging
from time import sleep
from typing import Any

import requests

from herofeed.data.base import QueryOrder, events_from_records
from herofeed.domain.models import RawEvent
from herofeed.errors import QueryServiceError

logger = logging.getLogger(__name__)


class SuiRpcEventClient:
    """Query Move events through `suix_queryEvents`."""

    def __init__(
        self,
        rpc_url: str,
        timeout: float = 20,
        max_retries: int = 3,
    ) -> None:
        self.rpc_url = rpc_url.rstrip("/")
        self.timeout = timeout
        self.max_retries = max(1, max_retries)
        self.session = requests.Session()
        self.session.headers.update({"Content-Type": "application/json"})

    def query_events(self, event_type: str, limit: int, order: QueryOrder) -> list[RawEvent]:
        result = self._request_with_retry(
            method="suix_queryEvents",
            params=[{"MoveEventType": event_type}, None, int(limit), order == "descending"],
        )
        records = result.get("data", []) if isinstance(result, dict) else []
        if not isinstance(records, list):
            raise QueryServiceError(f"Unexpected queryEvents result for {event_type}")
        events = events_from_records(records, event_type)
        logger.debug("queryEvents %s returned %d events", event_type, len(events))
        return events

    def _request_with_retry(self, method: str, params: list[Any]) -> Any:
        body = {"jsonrpc": "2.0", "id": 1, "method": method, "params": params}
        for attempt in range(1, self.max_retries + 1):
            try:
                response = self.session.post(self.rpc_url, json=body, timeout=self.timeout)
            except requests.RequestException as exc:
                if attempt == self.max_retries:
                    raise QueryServiceError(f"Sui RPC request failed: {exc}") from exc
                sleep(float(attempt))
                continue
            if response.status_code == 429:
                if attempt == self.max_retries:
                    raise QueryServiceError("Sui RPC rate limit exceeded")
                sleep(float(attempt))
                continue
            if response.status_code >= 500:
                if attempt == self.max_retries:
                    raise QueryServiceError(f"Sui RPC server error: {response.status_code}")
                sleep(float(attempt))
                continue
            if response.status_code >= 400:
                detail = response.text.strip() or "No response body"
                raise QueryServiceError(f"Sui RPC error {response.status_code}: {detail}")
            try:
                payload = response.json()
            except ValueError as exc:
                raise QueryServiceError("Sui RPC returned a non-JSON body") from exc
            error = payload.get("error") if isinstance(payload, dict) else None
            if error:
                message = error.get("message", error) if isinstance(error, dict) else error
                raise QueryServiceError(f"Sui RPC {method} failed: {message}")
            return payload.get("result", {}) if isinstance(payload, dict) else {}
        raise QueryServiceError("Sui RPC request exhausted retries")
