"""Data models for search result pages."""

from dataclasses import dataclass
from typing import Any, Dict, Tuple, Union

from .errors import DecodeError


@dataclass(frozen=True)
class Thumbnail:
    """One resolution option of a result's preview image."""
    url: str
    width: int
    height: int


@dataclass(frozen=True)
class NoThumbnail:
    """Marker for a thumbnail variant the API did not return."""


NO_THUMBNAIL = NoThumbnail()

ThumbnailVariant = Union[Thumbnail, NoThumbnail]


def _require(data: Dict[str, Any], key: str, kind: type, where: str) -> Any:
    if not isinstance(data, dict):
        raise DecodeError(f"{where}: expected an object, got {type(data).__name__}")
    if key not in data:
        raise DecodeError(f"{where}: missing '{key}'")
    value = data[key]
    # bool is an int subclass; reject it for numeric fields
    if not isinstance(value, kind) or (kind is int and isinstance(value, bool)):
        raise DecodeError(f"{where}.{key}: expected {kind.__name__}, got {type(value).__name__}")
    return value


def _optional_str(data: Dict[str, Any], key: str, where: str) -> str:
    if data.get(key) is None:
        return ""
    return _require(data, key, str, where)


def _decode_variant(thumbnails: Dict[str, Any], name: str) -> ThumbnailVariant:
    raw = thumbnails.get(name)
    if raw is None:
        return NO_THUMBNAIL
    where = f"thumbnails.{name}"
    return Thumbnail(
        url=_require(raw, "url", str, where),
        width=_require(raw, "width", int, where),
        height=_require(raw, "height", int, where),
    )


@dataclass(frozen=True)
class ResultItem:
    """A single video returned by a search."""
    video_id: str
    kind: str
    title: str
    description: str
    default_thumbnail: ThumbnailVariant = NO_THUMBNAIL
    high_thumbnail: ThumbnailVariant = NO_THUMBNAIL

    @classmethod
    def from_dict(cls, item: Dict[str, Any]) -> "ResultItem":
        """Decode one entry of the ``items`` array."""
        ident = _require(item, "id", dict, "item")
        snippet = _require(item, "snippet", dict, "item")
        thumbnails = _require(snippet, "thumbnails", dict, "snippet")
        return cls(
            video_id=_require(ident, "videoId", str, "id"),
            kind=_require(ident, "kind", str, "id"),
            title=_require(snippet, "title", str, "snippet"),
            description=_require(snippet, "description", str, "snippet"),
            default_thumbnail=_decode_variant(thumbnails, "default"),
            high_thumbnail=_decode_variant(thumbnails, "high"),
        )


@dataclass(frozen=True)
class SearchResultPage:
    """One API response: its items plus the token for the next page."""
    kind: str
    etag: str
    next_page_token: str
    region_code: str
    items: Tuple[ResultItem, ...]
    query: str = ""

    @property
    def has_next_page(self) -> bool:
        return bool(self.next_page_token)

    @classmethod
    def from_dict(cls, data: Dict[str, Any], query: str = "") -> "SearchResultPage":
        """Decode a search response envelope.

        Raises DecodeError when a required field is missing or has the wrong type.
        """
        items = _require(data, "items", list, "response")
        return cls(
            kind=_optional_str(data, "kind", "response"),
            etag=_optional_str(data, "etag", "response"),
            next_page_token=_optional_str(data, "nextPageToken", "response"),
            region_code=_optional_str(data, "regionCode", "response"),
            items=tuple(ResultItem.from_dict(item) for item in items),
            query=query,
        )
