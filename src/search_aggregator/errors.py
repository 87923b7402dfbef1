"""
Search Error Types

Exception hierarchy for the search pipeline. Only input, configuration and
web-result provider failures are ever raised to callers; everything else is
absorbed by the component that hit it.
"""


class SearchError(Exception):
    """Base class for errors surfaced by the search pipeline."""


class InvalidQueryError(SearchError, ValueError):
    """Raised when the query is empty or whitespace only."""


class ConfigurationError(SearchError):
    """Raised when a required API key or setting is missing."""


class UpstreamError(SearchError):
    """Raised when the web-result provider fails or returns a bad payload."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class RateLimitError(UpstreamError):
    """Raised when the web-result provider answers with HTTP 429."""

    def __init__(self, message: str = "Search failed: Rate limit exceeded"):
        super().__init__(message, status_code=429)


class GenerationError(Exception):
    """
    Raised by the generative client on transport errors, non-2xx responses
    or responses without a text candidate.

    Never escapes the summary or related-question generators.
    """

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code
