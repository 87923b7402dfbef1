"""
Related question generation.

Requests follow-up questions for a query and parses them out of the
generator's free text.
"""

import logging
import re

from ..generation import GeminiClient

logger = logging.getLogger("search.related")

MAX_QUESTIONS = 5
MIN_QUESTION_LENGTH = 10

QUESTIONS_TEMPERATURE = 0.9
QUESTIONS_MAX_OUTPUT_TOKENS = 200

ORDINAL_PREFIX = re.compile(r"^\d+\.\s*")
BULLET_PREFIX = re.compile(r"^[-•*]\s*")


def build_related_questions_prompt(query: str) -> str:
    return f"""Based on the search query "{query}", generate 5 related follow-up questions that users might want to explore.

Make them:
- Specific and actionable
- Naturally flowing from the original query
- Diverse in perspective

Return ONLY the questions, one per line, without numbering."""


def parse_related_questions(text: str) -> list[str]:
    """
    Parse generator output into at most five questions.

    Each non-blank line has one leading ordinal ("3.") and then one leading
    bullet ("-", "•", "*") stripped. Lines shorter than ten characters after
    stripping are dropped.
    """
    questions = []
    for line in text.splitlines():
        line = line.strip()
        if not line:
            continue
        line = ORDINAL_PREFIX.sub("", line)
        line = BULLET_PREFIX.sub("", line).strip()
        if len(line) >= MIN_QUESTION_LENGTH:
            questions.append(line)
    return questions[:MAX_QUESTIONS]


class RelatedQuestionGenerator:
    """Produces follow-up questions for a query."""

    def __init__(self, generative_client: GeminiClient):
        self.generative_client = generative_client

    async def generate(self, query: str) -> list[str]:
        """Generate up to five follow-up questions. Any failure yields []."""
        try:
            text = await self.generative_client.generate(
                build_related_questions_prompt(query),
                temperature=QUESTIONS_TEMPERATURE,
                max_output_tokens=QUESTIONS_MAX_OUTPUT_TOKENS,
            )
        except Exception as e:
            logger.warning(f"Related questions failed for '{query}': {e}")
            return []
        return parse_related_questions(text)
