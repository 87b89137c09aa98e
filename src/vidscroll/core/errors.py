"""Exceptions raised while talking to the search API."""


class SearchError(Exception):
    """Base class for search and thumbnail failures."""


class TransportError(SearchError):
    """Network unreachable, timed out, or a non-2xx response."""


class DecodeError(SearchError):
    """Response body is not JSON or does not match the expected schema."""
