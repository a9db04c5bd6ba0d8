"""Concurrent per-category event stream fetching."""

from __future__ import annotations

import asyncio

from herofeed.data.base import EventQueryClient, QueryOrder
from herofeed.domain.models import CATEGORY_SPECS, CategorySpec, EventCategory, StreamResult
from herofeed.logging.logger import HumanLogger

PAGE_SIZE = 20
QUERY_ORDER: QueryOrder = "descending"


def event_filters(deployment_id: str) -> list[tuple[EventCategory, str]]:
    """Return the (category, Move event type) pair queried for each stream."""
    return [(spec.category, spec.event_type(deployment_id)) for spec in CATEGORY_SPECS]


def pending_results() -> dict[EventCategory, StreamResult]:
    return {spec.category: StreamResult.pending(spec.category) for spec in CATEGORY_SPECS}


class StreamFetcher:
    """Issue one bounded, newest-first query per event category.

    All queries run concurrently and are joined before returning. The first
    upstream failure cancels the remaining queries and is re-raised as is.
    """

    def __init__(
        self,
        client: EventQueryClient,
        page_size: int = PAGE_SIZE,
        human_logger: HumanLogger | None = None,
    ) -> None:
        self.client = client
        self.page_size = page_size
        self.human_logger = human_logger

    async def fetch_all(self, deployment_id: str | None) -> dict[EventCategory, StreamResult]:
        if deployment_id is None or not deployment_id.strip():
            if self.human_logger is not None:
                self.human_logger.fetch_skipped("package id not configured")
            return pending_results()

        package_id = deployment_id.strip()
        if self.human_logger is not None:
            self.human_logger.fetch_started(package_id, len(CATEGORY_SPECS))
        tasks: dict[EventCategory, asyncio.Task[StreamResult]] = {}
        try:
            async with asyncio.TaskGroup() as group:
                for spec in CATEGORY_SPECS:
                    tasks[spec.category] = group.create_task(self._fetch_stream(spec, package_id))
        except ExceptionGroup as failures:
            raise failures.exceptions[0] from None
        return {category: task.result() for category, task in tasks.items()}

    async def _fetch_stream(self, spec: CategorySpec, deployment_id: str) -> StreamResult:
        events = await asyncio.to_thread(
            self.client.query_events,
            spec.event_type(deployment_id),
            self.page_size,
            QUERY_ORDER,
        )
        if self.human_logger is not None:
            self.human_logger.stream_settled(spec.category.value, len(events))
        return StreamResult.ready(spec.category, events)


def fetch_streams(
    client: EventQueryClient,
    deployment_id: str | None,
    human_logger: HumanLogger | None = None,
) -> dict[EventCategory, StreamResult]:
    """Run one complete fetch cycle from synchronous code."""
    fetcher = StreamFetcher(client, human_logger=human_logger)
    return asyncio.run(fetcher.fetch_all(deployment_id))
