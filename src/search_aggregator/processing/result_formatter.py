"""
Result formatting and output processing.

Renders a SearchResponse and the search history as Markdown for text
front ends (the CLI and the MCP tool server).
"""

from datetime import datetime

from ..history import HistoryItem
from ..types import SearchResponse


class ResultFormatter:
    """Formats search responses for text output."""

    def __init__(self, snippet_length: int = 200):
        self.snippet_length = snippet_length

    def _truncate(self, text: str) -> str:
        if len(text) <= self.snippet_length:
            return text
        return text[: self.snippet_length].rstrip() + "..."

    def format_response(self, response: SearchResponse) -> str:
        """
        Render a complete response.

        Args:
            response: The response to render

        Returns:
            Markdown with the summary, numbered sources with credibility
            scores, media links and related questions
        """
        sections = [f"# Search: {response.query}", "## Summary", response.ai_summary]

        if response.results:
            lines = []
            for i, result in enumerate(response.results, 1):
                score = (
                    f" (credibility {result.credibility_score}/100)"
                    if result.credibility_score is not None
                    else ""
                )
                lines.append(
                    f"[{i}] {result.title} - {result.display_link}{score}\n"
                    f"    {result.link}\n"
                    f"    {self._truncate(result.snippet)}"
                )
            sections += ["## Sources", "\n".join(lines)]

        if response.images:
            sections += [
                "## Images",
                "\n".join(
                    f"- {image.title}: {image.link}" for image in response.images
                ),
            ]

        if response.videos:
            sections += [
                "## Videos",
                "\n".join(
                    f"- {video.title}: {video.link}"
                    + (f" ({video.duration})" if video.duration else "")
                    for video in response.videos
                ),
            ]

        if response.related_questions:
            sections += [
                "## Related Questions",
                "\n".join(f"- {question}" for question in response.related_questions),
            ]

        sections.append(
            f"{response.total_results} results in {response.search_time} ms"
        )
        return "\n\n".join(sections)

    def format_history(self, entries: list[HistoryItem]) -> str:
        if not entries:
            return "No recent searches."

        lines = []
        for item in entries:
            when = datetime.fromtimestamp(item["timestamp"] / 1000)
            lines.append(f"- {item['query']} ({when:%Y-%m-%d %H:%M})")
        return "Recent searches:\n\n" + "\n".join(lines)
