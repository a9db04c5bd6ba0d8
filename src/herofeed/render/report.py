"""Per-run Plotly report of the merged feed."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pandas as pd
import plotly.express as px

from herofeed.domain.models import CATEGORY_SPECS, FeedView


def feed_frame(view: FeedView) -> pd.DataFrame:
    """Flatten feed items into one row per event."""
    rows: list[dict[str, Any]] = []
    for item in view.items:
        rows.append(
            {
                "ts": item.timestamp_ms,
                "event_type": item.label,
                "details": ", ".join(
                    f"{label}: {value}" for label, value in item.display_fields.items()
                ),
            }
        )
    frame = pd.DataFrame(rows, columns=["ts", "event_type", "details"])
    frame["ts"] = pd.to_datetime(
        pd.to_numeric(frame["ts"], errors="coerce"), unit="ms", utc=True, errors="coerce"
    )
    return frame


def generate_feed_report(view: FeedView, output_html_path: str) -> None:
    """Render an interactive event timeline and per-category counts."""
    output = Path(output_html_path)
    output.parent.mkdir(parents=True, exist_ok=True)
    color_map = {spec.label: spec.badge_color.value for spec in CATEGORY_SPECS}
    if not view.items:
        empty_df = pd.DataFrame(
            {
                "event_type": [view.state.value],
                "count": [0],
            }
        )
        figure = px.bar(empty_df, x="event_type", y="count", title="Recent Events (0)")
        figure.write_html(str(output), include_plotlyjs="cdn")
        return

    frame = feed_frame(view)
    summary = frame.groupby("event_type", dropna=False).size().reset_index(name="count")
    timeline = px.scatter(
        frame,
        x="ts",
        y="event_type",
        color="event_type",
        color_discrete_map=color_map,
        title=f"Recent Events ({view.count})",
        hover_data=["details"],
    )
    bars = px.bar(
        summary,
        x="event_type",
        y="count",
        color="event_type",
        color_discrete_map=color_map,
        title="Events per Category",
    )
    html_parts = [
        "<html><head><meta charset='utf-8'><title>herofeed events report</title></head><body>",
        timeline.to_html(full_html=False, include_plotlyjs="cdn"),
        bars.to_html(full_html=False, include_plotlyjs=False),
        "</body></html>",
    ]
    output.write_text("".join(html_parts), encoding="utf-8")
