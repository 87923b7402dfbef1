"""
Search result processing components.

This package contains the components that enrich fetched results:
credibility scoring, AI summaries and related questions.
"""

from .credibility import calculate_credibility_score, score_results
from .result_formatter import ResultFormatter
from .related_questions import RelatedQuestionGenerator, parse_related_questions
from .summary import NO_RESULTS_SUMMARY, SummaryGenerator, create_fallback_summary

__all__ = [
    "NO_RESULTS_SUMMARY",
    "RelatedQuestionGenerator",
    "ResultFormatter",
    "SummaryGenerator",
    "calculate_credibility_score",
    "create_fallback_summary",
    "parse_related_questions",
    "score_results",
]
