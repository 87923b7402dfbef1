"""
Search MCP Server Implementation

Exposes the search pipeline as MCP tools.
"""

from mcp.server.fastmcp import FastMCP

from search_aggregator import SearchError, perform_search
from search_aggregator.history import SearchHistory
from search_aggregator.processing import ResultFormatter
from search_aggregator.settings import get_settings

# Create the FastMCP server instance
mcp = FastMCP("AI Search")

formatter = ResultFormatter()


@mcp.tool()
async def search_web(query: str) -> str:
    """
    <tool_description>
    Search the web for a query and return an AI summary, ranked sources with
    credibility scores, related images and videos, and follow-up questions.
    </tool_description>

    <tool_usage_guidelines>
    Use this tool for current information, facts that need sources, or when
    the user asks to look something up. Cite sources by their [n] numbers.
    Related questions are good candidates for a follow-up search.
    </tool_usage_guidelines>

    Args:
        query: The search query, as the user would type it into a search box

    Returns:
        Markdown report of the search
    """
    try:
        response = await perform_search(query)
        return formatter.format_response(response)

    except SearchError as e:
        return f"Search failed: {e}"


@mcp.tool()
async def recent_searches(limit: int = 10) -> str:
    """
    <tool_description>
    List the most recent search queries, newest first.
    </tool_description>

    Args:
        limit: Maximum number of queries to list (default: 10)

    Returns:
        Markdown list of recent searches
    """
    settings = get_settings()
    history = SearchHistory(settings.history_file, limit=settings.history_limit)
    entries = history.entries(limit=max(0, limit))
    return (
        formatter.format_history(entries)
        + f"\n\nTotal searches: {history.total_searches}"
    )


def main() -> None:
    mcp.run()


if __name__ == "__main__":
    main()
