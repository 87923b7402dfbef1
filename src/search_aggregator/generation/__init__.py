"""
Generative Text Package

Client for the generative-language endpoint used for summaries and
follow-up questions.
"""

from .gemini import GeminiClient, extract_candidate_text

__all__ = ["GeminiClient", "extract_candidate_text"]
