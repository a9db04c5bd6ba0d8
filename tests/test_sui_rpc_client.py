from __future__ import annotations

from typing import Any

import pytest
import requests

from herofeed.data.sui_rpc import SuiRpcEventClient
from herofeed.errors import QueryServiceError


class FakeResponse:
    def __init__(self, status_code: int, payload: Any = None, text: str = "") -> None:
        self.status_code = status_code
        self._payload = payload
        self.text = text

    def json(self) -> Any:
        if self._payload is None:
            raise ValueError("no json")
        return self._payload


def _record(tx: str, timestamp: str, **parsed: Any) -> dict[str, Any]:
    return {
        "id": {"txDigest": tx, "eventSeq": "1"},
        "packageId": "0xpkg",
        "transactionModule": "marketplace",
        "sender": "0xsender",
        "type": "0xpkg::marketplace::HeroListed",
        "parsedJson": parsed,
        "timestampMs": timestamp,
    }


def _client_with(monkeypatch: pytest.MonkeyPatch, responses: list[Any]) -> tuple[SuiRpcEventClient, list[dict]]:
    client = SuiRpcEventClient("https://rpc.example/", max_retries=3)
    sent: list[dict] = []

    def fake_post(url: str, json: dict, timeout: float) -> FakeResponse:
        sent.append({"url": url, "json": json, "timeout": timeout})
        outcome = responses.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    monkeypatch.setattr(client.session, "post", fake_post)
    monkeypatch.setattr("herofeed.data.sui_rpc.sleep", lambda _seconds: None)
    return client, sent


def test_query_events_posts_query_events_request(monkeypatch: pytest.MonkeyPatch) -> None:
    page = {"data": [_record("tx1", "2000", price="1000000000")], "hasNextPage": False}
    client, sent = _client_with(monkeypatch, [FakeResponse(200, {"jsonrpc": "2.0", "result": page})])

    events = client.query_events("0xpkg::marketplace::HeroListed", 20, "descending")

    assert sent[0]["url"] == "https://rpc.example"
    assert sent[0]["json"]["method"] == "suix_queryEvents"
    assert sent[0]["json"]["params"] == [
        {"MoveEventType": "0xpkg::marketplace::HeroListed"},
        None,
        20,
        True,
    ]
    assert len(events) == 1
    assert str(events[0].id) == "tx1:1"
    assert events[0].timestamp_ms == "2000"
    assert events[0].parsed_json == {"price": "1000000000"}
    assert events[0].sender == "0xsender"


def test_ascending_order_clears_descending_flag(monkeypatch: pytest.MonkeyPatch) -> None:
    client, sent = _client_with(monkeypatch, [FakeResponse(200, {"result": {"data": []}})])

    assert client.query_events("0xpkg::arena::ArenaCreated", 5, "ascending") == []
    assert sent[0]["json"]["params"][3] is False


def test_server_errors_are_retried(monkeypatch: pytest.MonkeyPatch) -> None:
    client, sent = _client_with(
        monkeypatch,
        [
            FakeResponse(503),
            requests.ConnectionError("reset"),
            FakeResponse(200, {"result": {"data": [_record("tx2", "10")]}}),
        ],
    )

    events = client.query_events("0xpkg::marketplace::HeroListed", 20, "descending")

    assert len(sent) == 3
    assert [event.id.tx_digest for event in events] == ["tx2"]


def test_exhausted_retries_raise_query_service_error(monkeypatch: pytest.MonkeyPatch) -> None:
    client, _ = _client_with(monkeypatch, [FakeResponse(429), FakeResponse(429), FakeResponse(429)])

    with pytest.raises(QueryServiceError, match="rate limit"):
        client.query_events("0xpkg::marketplace::HeroListed", 20, "descending")


def test_client_errors_are_not_retried(monkeypatch: pytest.MonkeyPatch) -> None:
    client, sent = _client_with(monkeypatch, [FakeResponse(400, text="bad request")])

    with pytest.raises(QueryServiceError, match="400: bad request"):
        client.query_events("0xpkg::marketplace::HeroListed", 20, "descending")
    assert len(sent) == 1


def test_json_rpc_error_object_raises(monkeypatch: pytest.MonkeyPatch) -> None:
    client, _ = _client_with(
        monkeypatch,
        [FakeResponse(200, {"error": {"code": -32602, "message": "Invalid params"}})],
    )

    with pytest.raises(QueryServiceError, match="Invalid params"):
        client.query_events("bogus", 20, "descending")


def test_records_without_id_are_skipped(monkeypatch: pytest.MonkeyPatch) -> None:
    page = {
        "data": [
            _record("ok", "20"),
            {"timestampMs": "10", "parsedJson": {}},
            {"id": {"eventSeq": "0"}, "timestampMs": "5"},
            "not-an-object",
        ]
    }
    client, _ = _client_with(monkeypatch, [FakeResponse(200, {"result": page})])

    events = client.query_events("0xpkg::marketplace::HeroListed", 20, "descending")

    assert [event.id.tx_digest for event in events] == ["ok"]
