"""Custom exceptions for clearer error handling across the feed pipeline."""


class HeroFeedError(Exception):
    """Base exception for all feed-specific errors."""


class QueryServiceError(HeroFeedError):
    """Raised when the event query service fails to answer a request."""


class MalformedEventError(HeroFeedError, ValueError):
    """Raised when an event record or numeric field cannot be interpreted."""
