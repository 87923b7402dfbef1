"""
Result Source Adapter

Fans one query out to the web, image and video variants of the search
provider and normalizes every response into ResultRecord / MediaRecord.
Only the web branch is allowed to fail the caller.
"""

import asyncio
import logging
import re
from collections.abc import Callable
from typing import TypeVar

from ...errors import UpstreamError
from ...types import MediaRecord, ResultRecord
from .cache import SearchCache
from .google import GoogleSearchClient
from .payloads import CseItem, hostname, parse_search_response

logger = logging.getLogger("search.sources")

T = TypeVar("T")

MAX_WEB_RESULTS = 10
MAX_IMAGE_RESULTS = 8
MAX_VIDEO_RESULTS = 6

VIDEO_HOST_MARKERS = ("youtube.com", "youtu.be", "vimeo.com", "dailymotion.com")
VIDEO_PLACEHOLDER_THUMBNAIL = "https://via.placeholder.com/320x180?text=Video"

YOUTUBE_ID_PATTERN = re.compile(
    r"(?:youtube\.com/(?:[^/]+/.+/|(?:v|e(?:mbed)?)/|.*[?&]v=)|youtu\.be/)"
    r"([^\"&?/\s]{11})"
)


def youtube_thumbnail(url: str) -> str:
    """
    Derive a thumbnail URL from a YouTube-style link.

    Args:
        url: Video page URL

    Returns:
        The medium-quality thumbnail URL for the extracted 11-character
        video id, or an empty string when the link is not a YouTube link
    """
    match = YOUTUBE_ID_PATTERN.search(url or "")
    if match:
        return f"https://img.youtube.com/vi/{match.group(1)}/mqdefault.jpg"
    return ""


def is_video_item(item: CseItem) -> bool:
    link = (item.link or "").lower()
    return (
        any(marker in link for marker in VIDEO_HOST_MARKERS)
        or item.pagemap.has_video_object
    )


def normalize_web_item(item: CseItem) -> ResultRecord:
    link = item.link or "#"
    return ResultRecord(
        title=item.title or "Untitled",
        link=link,
        snippet=item.snippet or "No description available",
        display_link=item.display_link or hostname(item.link),
        image=item.pagemap.cse_image or item.pagemap.cse_thumbnail,
        thumbnail=item.pagemap.cse_thumbnail,
        published_date=item.pagemap.published_date,
    )


def normalize_image_item(item: CseItem) -> MediaRecord:
    link = item.link or ""
    thumbnail = item.image.thumbnail_link if item.image else None
    return MediaRecord(
        link=link,
        thumbnail=thumbnail or link,
        title=item.title or "Image",
        source=item.display_link or "Unknown source",
    )


def normalize_video_item(item: CseItem) -> MediaRecord:
    link = item.link or ""
    thumbnail = (
        item.pagemap.cse_thumbnail
        or item.pagemap.video_thumbnail
        or item.pagemap.cse_image
        or youtube_thumbnail(link)
    )
    return MediaRecord(
        link=link,
        thumbnail=thumbnail or VIDEO_PLACEHOLDER_THUMBNAIL,
        title=item.title or "Video",
        source=item.display_link or "Unknown source",
        duration=item.pagemap.video_duration,
    )


def _media_from_dict(record: dict) -> MediaRecord:
    return MediaRecord(**record)


class ResultSourceAdapter:
    """Fetches and normalizes web, image and video results for a query."""

    def __init__(
        self, search_client: GoogleSearchClient, cache: SearchCache | None = None
    ):
        self.search_client = search_client
        self.cache = cache

    def _load_cached(
        self, query: str, kind: str, factory: Callable[[dict], T]
    ) -> list[T] | None:
        if self.cache is None:
            return None
        cached = self.cache.get(query, kind)
        if cached is None:
            return None
        try:
            return [factory(record) for record in cached]
        except (KeyError, TypeError) as e:
            # Stale schema in the cache file, treat as a miss
            logger.warning(
                f"Ignoring unreadable cached {kind} records for '{query}': {e}"
            )
            return None

    async def fetch_web_results(self, query: str) -> list[ResultRecord]:
        """
        Fetch up to 10 web results.

        Raises:
            RateLimitError: If the provider rate limits the request
            UpstreamError: On any other provider failure
        """
        cached = self._load_cached(query, "web", ResultRecord.from_dict)
        if cached is not None:
            return cached

        data = await self.search_client.search(query)
        results = [
            normalize_web_item(item)
            for item in parse_search_response(data)[:MAX_WEB_RESULTS]
        ]

        if self.cache is not None and results:
            self.cache.set(query, "web", [result.to_dict() for result in results])
        return results

    async def fetch_images(self, query: str) -> list[MediaRecord]:
        """Fetch up to 8 images. Failures yield an empty list."""
        cached = self._load_cached(query, "images", _media_from_dict)
        if cached is not None:
            return cached

        try:
            data = await self.search_client.search(
                query, search_type="image", num=MAX_IMAGE_RESULTS
            )
            images = [
                normalize_image_item(item)
                for item in parse_search_response(data)[:MAX_IMAGE_RESULTS]
            ]
        except Exception as e:
            logger.warning(f"Image search failed for '{query}': {e}")
            return []

        if self.cache is not None and images:
            self.cache.set(query, "images", [image.to_dict() for image in images])
        return images

    async def fetch_videos(self, query: str) -> list[MediaRecord]:
        """Fetch up to 6 results from known video hosts. Failures yield []."""
        cached = self._load_cached(query, "videos", _media_from_dict)
        if cached is not None:
            return cached

        try:
            data = await self.search_client.search(
                f"{query} video", num=MAX_VIDEO_RESULTS
            )
            videos = [
                normalize_video_item(item)
                for item in parse_search_response(data)
                if is_video_item(item)
            ][:MAX_VIDEO_RESULTS]
        except Exception as e:
            logger.warning(f"Video search failed for '{query}': {e}")
            return []

        if self.cache is not None and videos:
            self.cache.set(query, "videos", [video.to_dict() for video in videos])
        return videos

    async def fetch_all(
        self, query: str
    ) -> tuple[list[ResultRecord], list[MediaRecord], list[MediaRecord]]:
        """
        Run the three fetches concurrently and wait for all of them to settle.

        A web failure does not cancel the image and video requests; it is
        re-raised once they have finished.

        Returns:
            Tuple of (web results, images, videos)
        """
        web, images, videos = await asyncio.gather(
            self.fetch_web_results(query),
            self.fetch_images(query),
            self.fetch_videos(query),
            return_exceptions=True,
        )

        if isinstance(web, BaseException):
            if isinstance(web, UpstreamError):
                raise web
            if isinstance(web, Exception):
                raise UpstreamError(f"Search failed: {web}") from web
            raise web

        # The media branches absorb their own errors; anything left is a bug
        # or a cancellation and must not be mistaken for a result list.
        for branch in (images, videos):
            if isinstance(branch, BaseException) and not isinstance(branch, Exception):
                raise branch

        return (
            web,
            images if isinstance(images, list) else [],
            videos if isinstance(videos, list) else [],
        )
