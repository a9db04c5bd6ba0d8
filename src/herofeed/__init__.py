"""Merged event history feed for the hero marketplace and arena."""

__version__ = "0.1.0"
