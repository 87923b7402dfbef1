"""
Google Custom Search Client

Thin async wrapper over the Custom Search JSON API. One request per call,
no retries.
"""

import logging
from typing import Any

import httpx

from ...errors import RateLimitError, UpstreamError
from ...settings import Settings

logger = logging.getLogger("search.google")


class GoogleSearchClient:
    """Issues Custom Search requests over an injected httpx client."""

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        api_key: str,
        search_engine_id: str,
        base_url: str = "https://www.googleapis.com/customsearch/v1",
    ):
        self.http_client = http_client
        self.api_key = api_key
        self.search_engine_id = search_engine_id
        self.base_url = base_url

    @classmethod
    def from_settings(
        cls, settings: Settings, http_client: httpx.AsyncClient
    ) -> "GoogleSearchClient":
        return cls(
            http_client,
            api_key=settings.google_search_api_key,
            search_engine_id=settings.search_engine_id,
            base_url=settings.google_search_url,
        )

    async def search(
        self,
        query: str,
        *,
        search_type: str | None = None,
        num: int | None = None,
    ) -> dict[str, Any]:
        """
        Run one Custom Search request.

        Args:
            query: The search query string
            search_type: Provider search type flag, e.g. "image"
            num: Result-count cap (provider maximum is 10)

        Returns:
            The decoded JSON response body

        Raises:
            RateLimitError: If the provider answers with HTTP 429
            UpstreamError: On any other non-2xx status, transport failure or
                undecodable body
        """
        params: dict[str, str] = {
            "key": self.api_key,
            "cx": self.search_engine_id,
            "q": query,
        }
        if search_type:
            params["searchType"] = search_type
        if num is not None:
            params["num"] = str(min(num, 10))

        try:
            response = await self.http_client.get(self.base_url, params=params)
        except httpx.TimeoutException as e:
            raise UpstreamError("Search failed: request timed out") from e
        except httpx.HTTPError as e:
            raise UpstreamError(f"Search failed: {e}") from e

        if response.status_code == 429:
            logger.error(f"Search provider rate limited query '{query}'")
            raise RateLimitError()

        if not response.is_success:
            logger.error(
                f"Search provider returned {response.status_code} for '{query}': "
                f"{response.text[:500]}"
            )
            raise UpstreamError(
                f"Search failed: {response.reason_phrase or response.status_code}",
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as e:
            raise UpstreamError(
                "Search failed: malformed response from search provider"
            ) from e
