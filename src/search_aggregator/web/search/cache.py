"""
Search Result Caching Module
Provides a thin file-based key-value cache for normalized search records
"""

import hashlib
import json
import logging
from datetime import datetime, timedelta
from pathlib import Path
from typing import Any

logger = logging.getLogger("search.cache")


class SearchCache:
    """
    Simple file-based cache for normalized search records, keyed by query and
    search kind ("web", "images" or "videos")
    """

    def __init__(self, cache_dir: str = "cache", cache_ttl_hours: float = 24):
        """
        Initialize the search cache

        Args:
            cache_dir: Directory to store cache files
            cache_ttl_hours: How many hours to keep cached records (default: 24)
        """
        self.cache_dir = Path(cache_dir)
        self.cache_ttl = timedelta(hours=cache_ttl_hours)

        # Create cache directory if it doesn't exist
        self.cache_dir.mkdir(parents=True, exist_ok=True)

        # Create cache metadata file if it doesn't exist
        self.metadata_file = self.cache_dir / "cache_metadata.json"
        if not self.metadata_file.exists():
            self._save_metadata({})

    def _generate_cache_key(self, query: str, kind: str) -> str:
        """Generate a unique cache key for a query and search kind"""
        key_data = f"{query.lower().strip()}_{kind}"
        return hashlib.md5(key_data.encode()).hexdigest()

    def _get_cache_filepath(self, cache_key: str) -> Path:
        return self.cache_dir / f"{cache_key}.json"

    def _load_metadata(self) -> dict[str, Any]:
        try:
            with self.metadata_file.open(encoding="utf-8") as f:
                return json.load(f)
        except (FileNotFoundError, json.JSONDecodeError):
            return {}

    def _save_metadata(self, metadata: dict[str, Any]) -> None:
        try:
            with self.metadata_file.open("w", encoding="utf-8") as f:
                json.dump(metadata, f, indent=2, ensure_ascii=False)
        except OSError as e:
            logger.warning(f"Failed to save cache metadata: {e}")

    def _is_cache_expired(self, cached_time: str) -> bool:
        try:
            cached_datetime = datetime.fromisoformat(cached_time)
            return datetime.now() - cached_datetime > self.cache_ttl
        except (ValueError, TypeError):
            return True  # If we can't parse the time, consider it expired

    def get(self, query: str, kind: str = "web") -> list[dict[str, Any]] | None:
        """
        Get cached records if available and not expired

        Args:
            query: Search query
            kind: Search kind the records belong to

        Returns:
            Cached records or None if not found/expired
        """
        cache_key = self._generate_cache_key(query, kind)
        cache_filepath = self._get_cache_filepath(cache_key)

        if not cache_filepath.exists():
            return None

        metadata = self._load_metadata()
        if cache_key not in metadata:
            return None

        if self._is_cache_expired(metadata[cache_key].get("cached_at", "")):
            self._remove_expired_entry(cache_key)
            return None

        try:
            with cache_filepath.open(encoding="utf-8") as f:
                cached_records = json.load(f)
        except (FileNotFoundError, json.JSONDecodeError) as e:
            logger.warning(f"Failed to load cached {kind} records for {query}: {e}")
            return None

        if not isinstance(cached_records, list):
            return None

        logger.debug(f"Using cached {kind} records for: {query}")
        return cached_records

    def set(self, query: str, kind: str, records: list[dict[str, Any]]) -> None:
        """
        Cache normalized records

        Args:
            query: Search query
            kind: Search kind the records belong to
            records: Records to cache, as plain dictionaries
        """
        cache_key = self._generate_cache_key(query, kind)
        cache_filepath = self._get_cache_filepath(cache_key)

        try:
            with cache_filepath.open("w", encoding="utf-8") as f:
                json.dump(records, f, indent=2, ensure_ascii=False)

            metadata = self._load_metadata()
            metadata[cache_key] = {
                "query": query,
                "kind": kind,
                "cached_at": datetime.now().isoformat(),
                "results_count": len(records),
            }
            self._save_metadata(metadata)

            logger.debug(f"Cached {len(records)} {kind} records for: {query}")

        except (OSError, TypeError) as e:
            logger.warning(f"Failed to cache {kind} records for {query}: {e}")

    def _remove_expired_entry(self, cache_key: str) -> None:
        try:
            cache_filepath = self._get_cache_filepath(cache_key)
            if cache_filepath.exists():
                cache_filepath.unlink()

            metadata = self._load_metadata()
            if cache_key in metadata:
                del metadata[cache_key]
                self._save_metadata(metadata)

        except OSError as e:
            logger.warning(f"Failed to remove expired cache entry: {e}")

    def cleanup_expired(self) -> int:
        """Remove all expired cache entries and return how many were removed"""
        metadata = self._load_metadata()
        expired_keys = [
            cache_key
            for cache_key, entry in metadata.items()
            if self._is_cache_expired(entry.get("cached_at", ""))
        ]

        for cache_key in expired_keys:
            self._remove_expired_entry(cache_key)

        if expired_keys:
            logger.info(f"Cleaned up {len(expired_keys)} expired cache entries")
        return len(expired_keys)

    def clear_all(self) -> None:
        """Clear all cached records"""
        try:
            for filepath in self.cache_dir.iterdir():
                if filepath.suffix == ".json":
                    filepath.unlink()

            self._save_metadata({})
            logger.info("Cleared all cached search records")

        except OSError as e:
            logger.warning(f"Failed to clear cache: {e}")
