"""
Search Aggregator Package

Fans a query out to web, image and video search, enriches the results with
credibility scores, an AI summary and related questions, and returns one
immutable response.
"""

from search_aggregator.errors import (
    ConfigurationError,
    InvalidQueryError,
    RateLimitError,
    SearchError,
    UpstreamError,
)
from search_aggregator.logger import setup_logging
from search_aggregator.orchestrator import (
    SearchOrchestrator,
    SearchSession,
    create_orchestrator,
    perform_search,
)
from search_aggregator.types import MediaRecord, ResultRecord, SearchResponse

__version__ = "1.0.0"
__all__ = [
    "ConfigurationError",
    "InvalidQueryError",
    "MediaRecord",
    "RateLimitError",
    "ResultRecord",
    "SearchError",
    "SearchOrchestrator",
    "SearchResponse",
    "SearchSession",
    "UpstreamError",
    "create_orchestrator",
    "perform_search",
    "setup_logging",
]
