"""Concise human-readable run logger."""

from __future__ import annotations

import logging


class HumanLogger:
    """Console logger with fixed line types."""

    def __init__(self, level: str = "INFO") -> None:
        self._logger = logging.getLogger("herofeed")
        self._logger.setLevel(getattr(logging, level.upper(), logging.INFO))
        self._logger.propagate = False
        if not self._logger.handlers:
            handler = logging.StreamHandler()
            formatter = logging.Formatter("%(asctime)s | %(message)s", "%Y-%m-%d %H:%M:%S")
            handler.setFormatter(formatter)
            self._logger.addHandler(handler)

    def fetch_started(self, deployment_id: str, stream_count: int) -> None:
        self._logger.info(
            "fetch | package %s | streams %d", self._short_id(deployment_id), stream_count
        )

    def fetch_skipped(self, reason: str) -> None:
        self._logger.info("fetch | skipped | %s", reason)

    def stream_settled(self, category: str, count: int) -> None:
        self._logger.info("stream | %s | events %d", category, count)

    def event_dropped(self, category: str, event_id: str, reason: str) -> None:
        self._logger.warning(
            "dropped | %s | %s | %s", category, self._short_id(event_id), reason
        )

    def feed_resolved(self, state: str, count: int) -> None:
        self._logger.info("feed | %s | items %d", state, count)

    def error(self, message: str) -> None:
        self._logger.error("error | %s", message)

    @staticmethod
    def _short_id(value: str | None, head: int = 10, tail: int = 6) -> str:
        if not value:
            return ""
        text = str(value)
        if len(text) <= head + tail + 1:
            return text
        return f"{text[:head]}...{text[-tail:]}"
