"""
Gemini Client

Sends single-turn prompts to the Gemini `generateContent` endpoint and
returns the first candidate's text.
"""

import logging
from typing import Any

import httpx

from ..errors import GenerationError
from ..settings import Settings

logger = logging.getLogger("search.gemini")


def extract_candidate_text(data: Any) -> str:
    """
    Extract the text of the first candidate from a generateContent response.

    Args:
        data: Decoded JSON response body

    Returns:
        The candidate text

    Raises:
        GenerationError: If the response carries no non-empty text candidate
    """
    try:
        text = data["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError) as e:
        raise GenerationError("Generative response is missing candidate text") from e

    if not isinstance(text, str) or not text.strip():
        raise GenerationError("Generative response is missing candidate text")
    return text


class GeminiClient:
    """Issues generateContent requests over an injected httpx client."""

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        api_key: str,
        model: str = "gemini-2.0-flash",
        base_url: str = "https://generativelanguage.googleapis.com/v1beta",
    ):
        self.http_client = http_client
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")

    @classmethod
    def from_settings(
        cls, settings: Settings, http_client: httpx.AsyncClient
    ) -> "GeminiClient":
        return cls(
            http_client,
            api_key=settings.gemini_api_key,
            model=settings.gemini_model,
            base_url=settings.gemini_base_url,
        )

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}/models/{self.model}:generateContent"

    async def generate(
        self,
        prompt: str,
        *,
        temperature: float,
        max_output_tokens: int,
        top_p: float | None = None,
    ) -> str:
        """
        Generate text for a prompt.

        Args:
            prompt: Full prompt text
            temperature: Sampling temperature
            max_output_tokens: Output length cap
            top_p: Optional nucleus-sampling parameter

        Returns:
            The first candidate's text, verbatim

        Raises:
            GenerationError: On transport errors, non-2xx responses or
                responses without candidate text
        """
        generation_config: dict[str, Any] = {
            "temperature": temperature,
            "maxOutputTokens": max_output_tokens,
        }
        if top_p is not None:
            generation_config["topP"] = top_p

        payload = {
            "contents": [{"parts": [{"text": prompt}]}],
            "generationConfig": generation_config,
        }

        try:
            response = await self.http_client.post(
                self.endpoint,
                params={"key": self.api_key},
                headers={"Content-Type": "application/json"},
                json=payload,
            )
        except httpx.HTTPError as e:
            raise GenerationError(f"Generative request failed: {e}") from e

        if not response.is_success:
            logger.warning(
                f"Gemini API returned {response.status_code}: {response.text[:500]}"
            )
            raise GenerationError(
                f"Generative API returned status {response.status_code}",
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise GenerationError("Generative response is not valid JSON") from e

        return extract_candidate_text(data)
