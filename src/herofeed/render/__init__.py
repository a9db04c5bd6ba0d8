"""Text and HTML renderers for the feed view model."""

from .report import generate_feed_report
from .text import render_text

__all__ = ["generate_feed_report", "render_text"]
