"""Runtime wiring for one fetch cycle."""

from __future__ import annotations

from herofeed.config import Settings
from herofeed.data.base import EventQueryClient
from herofeed.data.fixture_data import JsonFixtureEventClient
from herofeed.data.sui_rpc import SuiRpcEventClient
from herofeed.domain.models import EventCategory, FeedView, RawEvent
from herofeed.logging.logger import HumanLogger
from herofeed.pipeline.fetcher import fetch_streams
from herofeed.pipeline.formatting import resolve_timezone
from herofeed.pipeline.readiness import resolve_view
from herofeed.render.report import generate_feed_report
from herofeed.render.text import render_text


def build_client(settings: Settings) -> EventQueryClient:
    if settings.data_source == "fixture":
        return JsonFixtureEventClient(settings.fixture_path)
    return SuiRpcEventClient(
        settings.effective_rpc_url(),
        timeout=settings.request_timeout_seconds,
        max_retries=settings.max_retries,
    )


def build_view(
    settings: Settings,
    client: EventQueryClient,
    human_logger: HumanLogger,
) -> FeedView:
    """Fetch every stream and resolve the view model."""

    def log_drop(category: EventCategory, raw: RawEvent, reason: str) -> None:
        human_logger.event_dropped(category.value, str(raw.id), reason)

    results = fetch_streams(client, settings.effective_package_id(), human_logger=human_logger)
    view = resolve_view(
        results,
        tz=resolve_timezone(settings.display_timezone),
        on_drop=log_drop,
    )
    human_logger.feed_resolved(view.state.value, view.count)
    return view


def run(settings: Settings, client: EventQueryClient | None = None) -> int:
    """Fetch, print and optionally report the merged event feed."""
    human_logger = HumanLogger(level=settings.log_level)
    try:
        view = build_view(settings, client or build_client(settings), human_logger)
    except KeyboardInterrupt:
        return 0
    except Exception as exc:
        human_logger.error(str(exc))
        return 1

    for line in render_text(view):
        print(line)
    if settings.report_path:
        generate_feed_report(view, settings.report_path)
    return 0
