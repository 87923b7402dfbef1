"""
Tests for the MCP tool functions.
"""

import pytest

import search_aggregator.orchestrator as orchestrator_module
from mcp_server.server import search_web
from search_aggregator.settings import Settings


class TestSearchWebTool:
    """Error reporting of the search_web tool."""

    @pytest.fixture(autouse=True)
    def unconfigured(self, monkeypatch):
        settings = Settings(_env_file=None, google_search_api_key="", gemini_api_key="")
        monkeypatch.setattr(orchestrator_module, "get_settings", lambda: settings)

    @pytest.mark.asyncio
    async def test_blank_query_reported_before_configuration(self):
        result = await search_web("   ")
        assert result == "Search failed: Please enter a search query"

    @pytest.mark.asyncio
    async def test_missing_keys_reported(self):
        result = await search_web("solar power")

        assert result.startswith("Search failed:")
        assert "GOOGLE_SEARCH_API_KEY" in result
        assert "GEMINI_API_KEY" in result
