"""
Google Custom Search payload model.

Parses the provider's loosely-shaped JSON into explicit dataclasses once, so
normalization never has to guess at nested optional fields.
"""

from dataclasses import dataclass, field
from typing import Any
from urllib.parse import urlparse

from ...errors import UpstreamError

# Metatag keys checked, in order, for a publication date
PUBLISHED_DATE_KEYS = ("article:published_time", "og:updated_time", "datePublished")


@dataclass(frozen=True)
class CsePagemap:
    """The subset of a result's `pagemap` the pipeline reads."""

    cse_image: str | None = None
    cse_thumbnail: str | None = None
    metatags: dict[str, Any] = field(default_factory=dict)
    has_video_object: bool = False
    video_thumbnail: str | None = None
    video_duration: str | None = None

    @property
    def published_date(self) -> str | None:
        for key in PUBLISHED_DATE_KEYS:
            value = self.metatags.get(key)
            if isinstance(value, str) and value:
                return value
        return None


@dataclass(frozen=True)
class CseImageInfo:
    """The `image` block present on image-search results."""

    thumbnail_link: str | None = None
    context_link: str | None = None


@dataclass(frozen=True)
class CseItem:
    """One entry of the provider's `items` array."""

    title: str | None = None
    link: str | None = None
    snippet: str | None = None
    display_link: str | None = None
    image: CseImageInfo | None = None
    pagemap: CsePagemap = field(default_factory=CsePagemap)


def _str(value: Any) -> str | None:
    return value if isinstance(value, str) and value else None


def _first(entries: Any) -> dict[str, Any]:
    if isinstance(entries, list) and entries and isinstance(entries[0], dict):
        return entries[0]
    return {}


def parse_pagemap(raw: Any) -> CsePagemap:
    if not isinstance(raw, dict):
        return CsePagemap()

    video_object = _first(raw.get("videoobject"))
    return CsePagemap(
        cse_image=_str(_first(raw.get("cse_image")).get("src")),
        cse_thumbnail=_str(_first(raw.get("cse_thumbnail")).get("src")),
        metatags=_first(raw.get("metatags")),
        has_video_object=bool(raw.get("videoobject")),
        video_thumbnail=_str(video_object.get("thumbnailurl")),
        video_duration=_str(video_object.get("duration")),
    )


def parse_item(raw: dict[str, Any]) -> CseItem:
    image = raw.get("image")
    return CseItem(
        title=_str(raw.get("title")),
        link=_str(raw.get("link")),
        snippet=_str(raw.get("snippet")),
        display_link=_str(raw.get("displayLink")),
        image=CseImageInfo(
            thumbnail_link=_str(image.get("thumbnailLink")),
            context_link=_str(image.get("contextLink")),
        )
        if isinstance(image, dict)
        else None,
        pagemap=parse_pagemap(raw.get("pagemap")),
    )


def parse_search_response(data: Any) -> list[CseItem]:
    """
    Parse a Custom Search response body into items.

    Args:
        data: Decoded JSON body

    Returns:
        Parsed items in provider rank order; empty when `items` is absent

    Raises:
        UpstreamError: If the body is not a JSON object
    """
    if not isinstance(data, dict):
        raise UpstreamError("Search failed: malformed response from search provider")

    items = data.get("items")
    if not isinstance(items, list):
        return []
    return [parse_item(item) for item in items if isinstance(item, dict)]


def hostname(url: str | None) -> str:
    """Get the host part of a URL, or an empty string."""
    if not url:
        return ""
    try:
        return urlparse(url).hostname or ""
    except ValueError:
        return ""
