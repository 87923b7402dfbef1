"""
Unit tests for SearchHistory.
"""

import json
import tempfile
from pathlib import Path

import pytest

from search_aggregator.history import SearchHistory


class TestSearchHistory:
    """Test suite for SearchHistory."""

    @pytest.fixture
    def history_file(self):
        with tempfile.TemporaryDirectory() as temp_dir:
            yield Path(temp_dir) / "history.json"

    @pytest.fixture
    def history(self, history_file):
        return SearchHistory(str(history_file))

    def test_empty_history(self, history):
        assert history.entries() == []
        assert history.total_searches == 0
        assert len(history) == 0

    def test_record_newest_first(self, history):
        history.record("first query")
        history.record("second query")

        assert [item["query"] for item in history.entries()] == [
            "second query",
            "first query",
        ]
        assert all(isinstance(item["timestamp"], int) for item in history.entries())

    def test_duplicates_replaced_case_insensitively(self, history):
        history.record("Solar Power")
        history.record("wind power")
        history.record("solar power")

        assert [item["query"] for item in history.entries()] == [
            "solar power",
            "wind power",
        ]
        assert history.total_searches == 3

    def test_limit(self, history_file):
        history = SearchHistory(str(history_file), limit=3)
        for i in range(5):
            history.record(f"query {i}")

        assert [item["query"] for item in history.entries()] == [
            "query 4",
            "query 3",
            "query 2",
        ]
        assert history.total_searches == 5

    def test_entries_limit(self, history):
        for i in range(4):
            history.record(f"query {i}")

        assert len(history.entries(limit=2)) == 2

    def test_remove(self, history):
        history.record("first query")
        history.record("second query")

        history.remove(0)
        history.remove(7)

        assert [item["query"] for item in history.entries()] == ["first query"]

    def test_clear_keeps_counter(self, history):
        history.record("first query")
        history.clear()

        assert history.entries() == []
        assert history.total_searches == 1

    def test_persists_across_instances(self, history_file):
        SearchHistory(str(history_file)).record("solar power")

        assert SearchHistory(str(history_file)).entries()[0]["query"] == "solar power"

    def test_corrupted_file(self, history_file, history):
        history_file.write_text("not json", encoding="utf-8")

        assert history.entries() == []

        history.record("solar power")
        assert history.total_searches == 1

    def test_malformed_entries_skipped(self, history_file, history):
        history_file.write_text(
            json.dumps(
                {
                    "history": [{"query": "kept", "timestamp": 1}, {"nope": 1}, "x"],
                    "total_searches": "many",
                }
            ),
            encoding="utf-8",
        )

        assert [item["query"] for item in history.entries()] == ["kept"]
        assert history.total_searches == 0
