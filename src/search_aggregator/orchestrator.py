"""
Search Orchestration Logic

Sequences the source adapter, summary and related-question generators and
the credibility scorer into one SearchResponse per query.
"""

import asyncio
import logging
import time
import uuid

import httpx

from .errors import SearchError
from .generation import GeminiClient
from .history import SearchHistory
from .logger import setup_logging
from .processing import (
    RelatedQuestionGenerator,
    SummaryGenerator,
    score_results,
)
from .settings import Settings, get_settings
from .types import SearchResponse, normalize_query
from .web.search import GoogleSearchClient, ResultSourceAdapter, SearchCache

NO_RESULTS_FOUND_SUMMARY = "No results found for your query. Try different keywords."


def _elapsed_ms(start: float) -> int:
    return max(0, int((time.perf_counter() - start) * 1000))


class SearchOrchestrator:
    """
    Runs the full search pipeline for a query.
    Collaborators are injected so each call stays independent of the others.
    """

    def __init__(
        self,
        search_client: GoogleSearchClient,
        generative_client: GeminiClient,
        *,
        cache: SearchCache | None = None,
        history: SearchHistory | None = None,
        logger: logging.Logger | None = None,
    ):
        self.source_adapter = ResultSourceAdapter(search_client, cache=cache)
        self.summary_generator = SummaryGenerator(generative_client)
        self.question_generator = RelatedQuestionGenerator(generative_client)
        self.history = history

        # Set up logging
        self.search_logger = logger or setup_logging()

    async def perform_search(self, query: str) -> SearchResponse:
        """
        Search, summarize and score results for a query.

        Args:
            query: Raw query string

        Returns:
            The assembled SearchResponse

        Raises:
            InvalidQueryError: If the query is empty, before any request is made
            RateLimitError: If the web-result provider rate limits the search
            UpstreamError: If the web-result provider fails
        """
        query = normalize_query(query)

        search_id = uuid.uuid4().hex[:8]
        start = time.perf_counter()
        self.search_logger.info(f"🔍 [{search_id}] Starting search for: {query}")

        try:
            results, images, videos = await self.source_adapter.fetch_all(query)
        except SearchError as e:
            self.search_logger.error(
                f"❌ [{search_id}] Search failed for '{query}' after "
                f"{_elapsed_ms(start)} ms: {e}"
            )
            raise

        self.search_logger.info(
            f"📥 [{search_id}] Fetched {len(results)} results, {len(images)} images, "
            f"{len(videos)} videos in {_elapsed_ms(start)} ms"
        )

        if not results:
            self._record(query)
            response = SearchResponse(
                query=query,
                results=(),
                ai_summary=NO_RESULTS_FOUND_SUMMARY,
                images=images,
                videos=videos,
                related_questions=(),
                search_time=_elapsed_ms(start),
            )
            self.search_logger.info(
                f"⚠️ [{search_id}] No web results for '{query}', "
                "skipped AI enrichment"
            )
            return response

        # Both generators work from the unscored results
        ai_summary, related_questions = await asyncio.gather(
            self.summary_generator.generate(query, results),
            self.question_generator.generate(query),
        )

        scored_results = score_results(results)
        self._record(query)

        response = SearchResponse(
            query=query,
            results=scored_results,
            ai_summary=ai_summary,
            images=images,
            videos=videos,
            related_questions=related_questions,
            search_time=_elapsed_ms(start),
        )

        self.search_logger.info(
            f"✅ [{search_id}] Search for '{query}' completed in "
            f"{response.search_time} ms ({response.total_results} results, "
            f"{len(response.related_questions)} related questions)"
        )
        return response

    def _record(self, query: str) -> None:
        if self.history is not None:
            self.history.record(query)


class SearchSession:
    """
    Last-write-wins wrapper around an orchestrator.

    Submitting a new query cancels the search still in flight, whose caller
    then receives asyncio.CancelledError.
    """

    def __init__(self, orchestrator: SearchOrchestrator):
        self.orchestrator = orchestrator
        self._current: asyncio.Task[SearchResponse] | None = None

    @property
    def in_flight(self) -> bool:
        return self._current is not None and not self._current.done()

    def cancel(self) -> bool:
        """Cancel the in-flight search, if any. Returns True if one was cancelled."""
        task = self._current
        if task is None or task.done():
            return False
        return task.cancel()

    async def search(self, query: str) -> SearchResponse:
        # Invalid input must not disturb the search already running
        query = normalize_query(query)

        self.cancel()
        task = asyncio.create_task(self.orchestrator.perform_search(query))
        self._current = task
        try:
            return await task
        finally:
            if self._current is task:
                self._current = None


def create_orchestrator(
    settings: Settings,
    http_client: httpx.AsyncClient,
    logger: logging.Logger | None = None,
) -> SearchOrchestrator:
    """
    Build an orchestrator with clients, cache and history from settings.

    Raises:
        ConfigurationError: If an API key is missing
    """
    settings.require_api_keys()
    cache = (
        SearchCache(settings.cache_dir, cache_ttl_hours=settings.cache_ttl_hours)
        if settings.enable_cache
        else None
    )
    return SearchOrchestrator(
        GoogleSearchClient.from_settings(settings, http_client),
        GeminiClient.from_settings(settings, http_client),
        cache=cache,
        history=SearchHistory(settings.history_file, limit=settings.history_limit),
        logger=logger,
    )


async def perform_search(
    query: str, settings: Settings | None = None
) -> SearchResponse:
    """
    Run one search with clients built from settings.

    Validates the query and the API keys before any network request is made.

    Raises:
        InvalidQueryError: If the query is empty
        ConfigurationError: If an API key is missing
        UpstreamError: If the web-result provider fails
    """
    query = normalize_query(query)
    settings = settings or get_settings()

    async with httpx.AsyncClient(timeout=settings.http_timeout) as http_client:
        orchestrator = create_orchestrator(settings, http_client)
        return await orchestrator.perform_search(query)
