"""
AI summary generation.

Asks the generative endpoint for a structured answer built from the top
search results, and falls back to a locally assembled digest of the top
three results when the call fails for any reason.
"""

import logging

from ..generation import GeminiClient
from ..types import ResultRecord

logger = logging.getLogger("search.summary")

NO_RESULTS_SUMMARY = "No search results found to summarize."

CONTEXT_RESULTS = 8
FALLBACK_RESULTS = 3

SUMMARY_TEMPERATURE = 0.7
SUMMARY_MAX_OUTPUT_TOKENS = 600
SUMMARY_TOP_P = 0.95


def build_summary_context(results: list[ResultRecord]) -> str:
    return "\n\n".join(
        f"Source {i}: {result.title}\n{result.snippet}\nURL: {result.display_link}"
        for i, result in enumerate(results[:CONTEXT_RESULTS], 1)
    )


def build_summary_prompt(query: str, results: list[ResultRecord]) -> str:
    context = build_summary_context(results)
    return f"""You are an expert research assistant. Analyze these search results for "{query}" and provide a comprehensive, well-structured answer.

{context}

Provide:
1. A clear, direct answer (2-3 sentences)
2. Key points (3-4 bullet points with • prefix)
3. Important context or nuances

Format your response clearly with proper spacing and cite sources when relevant using [Source X] notation."""


def create_fallback_summary(query: str, results: list[ResultRecord]) -> str:
    """
    Build a summary from the top three results without any network call.

    Args:
        query: The search query
        results: Web results in rank order

    Returns:
        Summary text headed by the query, listing title, domain and snippet
        of each of the top three results
    """
    if not results:
        return NO_RESULTS_SUMMARY

    entries = "\n\n".join(
        f"{i}. {result.title} ({result.display_link})\n   {result.snippet}"
        for i, result in enumerate(results[:FALLBACK_RESULTS], 1)
    )
    return f'Based on the search results for "{query}":\n\n{entries}'


class SummaryGenerator:
    """Produces the AI summary for a set of web results."""

    def __init__(self, generative_client: GeminiClient):
        self.generative_client = generative_client

    async def generate(self, query: str, results: list[ResultRecord]) -> str:
        """
        Summarize results for a query. Never raises.

        Args:
            query: The search query
            results: Web results in rank order

        Returns:
            The generated summary, or the fallback summary on failure
        """
        if not results:
            return NO_RESULTS_SUMMARY

        prompt = build_summary_prompt(query, results)
        try:
            return await self.generative_client.generate(
                prompt,
                temperature=SUMMARY_TEMPERATURE,
                max_output_tokens=SUMMARY_MAX_OUTPUT_TOKENS,
                top_p=SUMMARY_TOP_P,
            )
        except Exception as e:
            logger.warning(
                f"AI summary failed for '{query}', using fallback summary: {e}"
            )
            return create_fallback_summary(query, results)
