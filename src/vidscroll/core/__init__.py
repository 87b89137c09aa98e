"""Core functionality for VidScroll."""

from .errors import SearchError, TransportError, DecodeError
from .models import (
    Thumbnail,
    NoThumbnail,
    NO_THUMBNAIL,
    ThumbnailVariant,
    ResultItem,
    SearchResultPage,
)
from .search_client import SearchClient
from .pagination import SearchViewModel, pages_to_render
from .thumbnails import CancelToken, ThumbnailLoader, ThumbnailSlot

__all__ = [
    "SearchError",
    "TransportError",
    "DecodeError",
    "Thumbnail",
    "NoThumbnail",
    "NO_THUMBNAIL",
    "ThumbnailVariant",
    "ResultItem",
    "SearchResultPage",
    "SearchClient",
    "SearchViewModel",
    "pages_to_render",
    "CancelToken",
    "ThumbnailLoader",
    "ThumbnailSlot",
]
