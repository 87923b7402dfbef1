"""
Search and Caching Package

Provides web, image and video search with optional caching.
"""

from .cache import SearchCache
from .google import GoogleSearchClient
from .sources import ResultSourceAdapter, youtube_thumbnail

__all__ = [
    "GoogleSearchClient",
    "ResultSourceAdapter",
    "SearchCache",
    "youtube_thumbnail",
]
