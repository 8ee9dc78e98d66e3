"""Errors raised while fetching and reading the SWPC feeds."""


class FeedError(Exception):
    """Raised when a forecast feed cannot be used."""
    pass


class FeedUnavailableError(FeedError):
    """Raised when a feed is unreachable or answers with a non-success status."""
    pass


class FeedFormatError(FeedError):
    """Raised when a feed payload does not have the expected shape."""
    pass
