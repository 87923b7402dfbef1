"""
Common type definitions for the search pipeline.

Immutable records shared by the source adapter, the processing components
and the orchestrator.
"""

from dataclasses import dataclass, field
from typing import Any

from .errors import InvalidQueryError


def normalize_query(query: str) -> str:
    """
    Validate and trim a raw query string.

    Raises:
        InvalidQueryError: If the query is empty or whitespace only
    """
    if not isinstance(query, str) or not query.strip():
        raise InvalidQueryError("Please enter a search query")
    return query.strip()


@dataclass(frozen=True)
class ResultRecord:
    """One web search hit."""

    title: str
    link: str
    snippet: str
    display_link: str
    image: str | None = None
    thumbnail: str | None = None
    published_date: str | None = None
    credibility_score: int | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "title": self.title,
            "link": self.link,
            "snippet": self.snippet,
            "displayLink": self.display_link,
        }
        if self.image:
            data["image"] = self.image
        if self.thumbnail:
            data["thumbnail"] = self.thumbnail
        if self.published_date:
            data["publishedDate"] = self.published_date
        if self.credibility_score is not None:
            data["credibilityScore"] = self.credibility_score
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ResultRecord":
        return cls(
            title=data["title"],
            link=data["link"],
            snippet=data["snippet"],
            display_link=data["displayLink"],
            image=data.get("image"),
            thumbnail=data.get("thumbnail"),
            published_date=data.get("publishedDate"),
            credibility_score=data.get("credibilityScore"),
        )


@dataclass(frozen=True)
class MediaRecord:
    """An image or video hit. Only videos carry a duration."""

    link: str
    thumbnail: str
    title: str
    source: str
    duration: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "link": self.link,
            "thumbnail": self.thumbnail,
            "title": self.title,
            "source": self.source,
        }
        if self.duration:
            data["duration"] = self.duration
        return data


@dataclass(frozen=True)
class SearchResponse:
    """
    Aggregate result of one orchestration pass.

    Results keep provider rank order. The total result count is derived from
    the results and must always equal their length.
    """

    query: str
    results: tuple[ResultRecord, ...]
    ai_summary: str
    search_time: int
    images: tuple[MediaRecord, ...] = ()
    videos: tuple[MediaRecord, ...] = ()
    related_questions: tuple[str, ...] = ()
    total_results: int = field(default=-1)

    def __post_init__(self):
        # Accept any sequence but store tuples so the response stays immutable
        for name in ("results", "images", "videos", "related_questions"):
            object.__setattr__(self, name, tuple(getattr(self, name)))

        if self.total_results == -1:
            object.__setattr__(self, "total_results", len(self.results))
        elif self.total_results != len(self.results):
            raise ValueError(
                f"total_results ({self.total_results}) must equal the number "
                f"of results ({len(self.results)})"
            )

        if len(self.related_questions) > 5:
            raise ValueError("At most 5 related questions are allowed")

    def to_dict(self) -> dict[str, Any]:
        """Render the camelCase shape consumed by the UI layer."""
        return {
            "results": [result.to_dict() for result in self.results],
            "aiSummary": self.ai_summary,
            "query": self.query,
            "totalResults": self.total_results,
            "images": [image.to_dict() for image in self.images],
            "videos": [video.to_dict() for video in self.videos],
            "relatedQuestions": list(self.related_questions),
            "searchTime": self.search_time,
        }
