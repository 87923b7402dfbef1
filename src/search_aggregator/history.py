"""
Search History Module

Keeps a small JSON-file record of recent queries and a running count of
completed searches.
"""

import json
import logging
import time
from pathlib import Path
from typing import Any, TypedDict

logger = logging.getLogger("search.history")


class HistoryItem(TypedDict):
    query: str
    timestamp: int  # milliseconds since the epoch


class SearchHistory:
    """
    File-backed list of recent searches, newest first
    """

    def __init__(self, history_file: str = "search_history.json", limit: int = 20):
        """
        Initialize the search history

        Args:
            history_file: JSON file holding the history
            limit: Maximum number of queries kept (default: 20)
        """
        self.history_file = Path(history_file)
        self.limit = limit

    def _load(self) -> dict[str, Any]:
        try:
            with self.history_file.open(encoding="utf-8") as f:
                data = json.load(f)
        except (FileNotFoundError, json.JSONDecodeError):
            return {"history": [], "total_searches": 0}

        if not isinstance(data, dict):
            return {"history": [], "total_searches": 0}

        history = [
            item
            for item in data.get("history", [])
            if isinstance(item, dict) and isinstance(item.get("query"), str)
        ]
        total = data.get("total_searches", 0)
        return {
            "history": history,
            "total_searches": total if isinstance(total, int) else 0,
        }

    def _save(self, data: dict[str, Any]) -> None:
        try:
            self.history_file.parent.mkdir(parents=True, exist_ok=True)
            with self.history_file.open("w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
        except OSError as e:
            logger.warning(f"Failed to save search history: {e}")

    def record(self, query: str) -> None:
        """
        Add a query to the front of the history and bump the search counter.

        An existing entry with the same query (case-insensitive) is replaced.
        """
        data = self._load()
        history = [
            item for item in data["history"] if item["query"].lower() != query.lower()
        ]
        history.insert(0, HistoryItem(query=query, timestamp=int(time.time() * 1000)))
        data["history"] = history[: self.limit]
        data["total_searches"] += 1
        self._save(data)

    def entries(self, limit: int | None = None) -> list[HistoryItem]:
        """Get recent searches, newest first."""
        history = self._load()["history"]
        return history if limit is None else history[:limit]

    def remove(self, index: int) -> None:
        """Remove the entry at a position in the newest-first list."""
        data = self._load()
        if 0 <= index < len(data["history"]):
            del data["history"][index]
            self._save(data)

    def clear(self) -> None:
        """Forget all recent searches. The search counter is kept."""
        data = self._load()
        data["history"] = []
        self._save(data)

    @property
    def total_searches(self) -> int:
        return self._load()["total_searches"]

    def __len__(self) -> int:
        return len(self._load()["history"])
