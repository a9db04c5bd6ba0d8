"""Event query service clients."""

from .base import EventQueryClient
from .fixture_data import JsonFixtureEventClient
from .sui_rpc import SuiRpcEventClient

__all__ = [
    "EventQueryClient",
    "JsonFixtureEventClient",
    "SuiRpcEventClient",
]
