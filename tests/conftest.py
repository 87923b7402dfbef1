"""
Shared fixtures for search pipeline tests.

Provides fake Custom Search and Gemini endpoints behind httpx.MockTransport,
so tests exercise the real clients without network access.
"""

from typing import Any

import httpx
import pytest
import pytest_asyncio

SEARCH_URL = "https://search.test/customsearch/v1"
GEMINI_BASE_URL = "https://gemini.test/v1beta"


def cse_web_item(index: int, **overrides: Any) -> dict[str, Any]:
    """Build a Custom Search web item."""
    item: dict[str, Any] = {
        "title": f"Result {index}",
        "link": f"https://site{index}.example.com/page",
        "snippet": f"Snippet for result {index}",
        "displayLink": f"site{index}.example.com",
    }
    item.update(overrides)
    return item


def cse_image_item(index: int) -> dict[str, Any]:
    """Build a Custom Search image item."""
    return {
        "title": f"Image {index}",
        "link": f"https://images.example.com/{index}.jpg",
        "displayLink": "images.example.com",
        "image": {"thumbnailLink": f"https://thumbs.example.com/{index}.jpg"},
    }


def gemini_body(text: str) -> dict[str, Any]:
    """Build a generateContent response body."""
    return {"candidates": [{"content": {"parts": [{"text": text}]}}]}


class FakeProviders:
    """
    Routes requests to canned Custom Search and Gemini responses and records
    every request it sees.
    """

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.web: httpx.Response | dict[str, Any] = {"items": []}
        self.images: httpx.Response | dict[str, Any] = {"items": []}
        self.videos: httpx.Response | dict[str, Any] = {"items": []}
        self.summary: httpx.Response | dict[str, Any] = gemini_body("AI summary")
        self.questions: httpx.Response | dict[str, Any] = gemini_body(
            "What are the main drivers behind this?\n"
            "How has this changed over the last decade?"
        )

    @staticmethod
    def _respond(canned: httpx.Response | dict[str, Any]) -> httpx.Response:
        if isinstance(canned, httpx.Response):
            return canned
        return httpx.Response(200, json=canned)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)

        if request.url.host == "search.test":
            params = request.url.params
            if params.get("searchType") == "image":
                return self._respond(self.images)
            if params.get("q", "").endswith(" video"):
                return self._respond(self.videos)
            return self._respond(self.web)

        if request.url.host == "gemini.test":
            if b"related follow-up questions" in request.content:
                return self._respond(self.questions)
            return self._respond(self.summary)

        return httpx.Response(404)

    @property
    def search_requests(self) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.host == "search.test"]

    @property
    def gemini_requests(self) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.host == "gemini.test"]


@pytest.fixture
def providers() -> FakeProviders:
    return FakeProviders()


@pytest_asyncio.fixture
async def http_client(providers):
    async with httpx.AsyncClient(
        transport=httpx.MockTransport(providers.handler)
    ) as client:
        yield client
