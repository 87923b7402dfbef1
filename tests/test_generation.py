"""
Tests for the Gemini client, the summary generator and the related-question
generator.
"""

import json
from unittest.mock import AsyncMock

import httpx
import pytest
from conftest import GEMINI_BASE_URL, gemini_body

from search_aggregator.errors import GenerationError
from search_aggregator.generation import GeminiClient, extract_candidate_text
from search_aggregator.processing import (
    NO_RESULTS_SUMMARY,
    RelatedQuestionGenerator,
    SummaryGenerator,
    create_fallback_summary,
    parse_related_questions,
)
from search_aggregator.processing.summary import build_summary_prompt
from search_aggregator.types import ResultRecord


def make_results(count: int) -> list[ResultRecord]:
    return [
        ResultRecord(
            title=f"Title {i}",
            link=f"https://site{i}.example.com",
            snippet=f"Snippet {i}",
            display_link=f"site{i}.example.com",
        )
        for i in range(1, count + 1)
    ]


@pytest.fixture
def gemini(http_client):
    return GeminiClient(http_client, api_key="gemini-key", base_url=GEMINI_BASE_URL)


class TestExtractCandidateText:
    """Candidate text extraction."""

    def test_extracts_text(self):
        assert extract_candidate_text(gemini_body("hello")) == "hello"

    @pytest.mark.parametrize(
        "body",
        [
            {},
            {"candidates": []},
            {"candidates": [{"content": {"parts": []}}]},
            {"candidates": [{"content": {"parts": [{"text": "   "}]}}]},
            {"candidates": [{"finishReason": "SAFETY"}]},
            None,
        ],
    )
    def test_missing_text(self, body):
        with pytest.raises(GenerationError):
            extract_candidate_text(body)


class TestGeminiClient:
    """Request construction and error mapping."""

    @pytest.mark.asyncio
    async def test_request_payload(self, gemini, providers):
        providers.summary = gemini_body("generated")

        text = await gemini.generate(
            "a prompt", temperature=0.7, max_output_tokens=600, top_p=0.95
        )

        assert text == "generated"
        request = providers.requests[0]
        assert request.method == "POST"
        assert request.url.path == "/v1beta/models/gemini-2.0-flash:generateContent"
        assert request.url.params["key"] == "gemini-key"
        payload = json.loads(request.content)
        assert payload["contents"][0]["parts"][0]["text"] == "a prompt"
        assert payload["generationConfig"] == {
            "temperature": 0.7,
            "maxOutputTokens": 600,
            "topP": 0.95,
        }

    @pytest.mark.asyncio
    async def test_top_p_omitted_when_unset(self, gemini, providers):
        await gemini.generate("a prompt", temperature=0.9, max_output_tokens=200)

        payload = json.loads(providers.requests[0].content)
        assert "topP" not in payload["generationConfig"]

    @pytest.mark.asyncio
    async def test_non_2xx(self, gemini, providers):
        providers.summary = httpx.Response(400, json={"error": {"message": "bad"}})

        with pytest.raises(GenerationError) as exc_info:
            await gemini.generate("a prompt", temperature=0.7, max_output_tokens=10)

        assert exc_info.value.status_code == 400


class TestSummaryGenerator:
    """AI summary and fallback policy."""

    @pytest.mark.asyncio
    async def test_returns_generated_text_verbatim(self):
        client = AsyncMock()
        client.generate.return_value = "  The answer.\n• Point  "
        generator = SummaryGenerator(client)

        summary = await generator.generate("solar power", make_results(3))

        assert summary == "  The answer.\n• Point  "
        kwargs = client.generate.call_args.kwargs
        assert kwargs["temperature"] == 0.7
        assert kwargs["max_output_tokens"] == 600

    @pytest.mark.asyncio
    async def test_no_results_skips_generator(self):
        client = AsyncMock()
        generator = SummaryGenerator(client)

        assert await generator.generate("solar power", []) == NO_RESULTS_SUMMARY
        client.generate.assert_not_called()

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "error",
        [
            GenerationError("boom", status_code=500),
            httpx.ConnectError("down"),
            ValueError(),
        ],
    )
    async def test_failure_uses_fallback(self, error):
        client = AsyncMock()
        client.generate.side_effect = error
        generator = SummaryGenerator(client)
        results = make_results(5)

        summary = await generator.generate("solar power", results)

        assert summary == create_fallback_summary("solar power", results)

    def test_prompt_uses_top_eight_results(self):
        prompt = build_summary_prompt("solar power", make_results(10))

        assert '"solar power"' in prompt
        assert "Source 8: Title 8\nSnippet 8\nURL: site8.example.com" in prompt
        assert "Title 9" not in prompt
        assert "[Source X]" in prompt


class TestFallbackSummary:
    """Locally assembled summary."""

    def test_contains_query_and_top_three(self):
        summary = create_fallback_summary("solar power", make_results(5))

        assert summary.startswith('Based on the search results for "solar power":')
        assert "1. Title 1 (site1.example.com)\n   Snippet 1" in summary
        assert "3. Title 3 (site3.example.com)" in summary
        assert "Title 4" not in summary

    def test_single_result(self):
        summary = create_fallback_summary("solar power", make_results(1))
        assert "Title 1" in summary

    def test_no_results(self):
        assert create_fallback_summary("solar power", []) == NO_RESULTS_SUMMARY


class TestParseRelatedQuestions:
    """Free-text question parsing."""

    def test_strips_ordinals_and_bullets(self):
        text = (
            "1. What is the history of solar power?\n"
            "- How efficient are modern panels?\n"
            "• Which countries lead in adoption?\n"
            "\n"
            "   Are there subsidies for home installs?   \n"
        )
        assert parse_related_questions(text) == [
            "What is the history of solar power?",
            "How efficient are modern panels?",
            "Which countries lead in adoption?",
            "Are there subsidies for home installs?",
        ]

    def test_drops_short_lines(self):
        assert parse_related_questions("Why?\n1. Short ones\n2. tiny") == ["Short ones"]

    def test_ten_characters_is_kept(self):
        assert parse_related_questions("abcdefghij\nabcdefghi") == ["abcdefghij"]

    def test_caps_at_five(self):
        text = "\n".join(f"Question number {i} about things?" for i in range(8))
        questions = parse_related_questions(text)
        assert len(questions) == 5
        assert questions[0] == "Question number 0 about things?"

    def test_embedded_numbers_are_kept(self):
        assert parse_related_questions("What happened in 2024. and why?") == [
            "What happened in 2024. and why?"
        ]


class TestRelatedQuestionGenerator:
    """Follow-up question generation."""

    @pytest.mark.asyncio
    async def test_generates_questions(self):
        client = AsyncMock()
        client.generate.return_value = (
            "1. How does solar storage work?\n2. Is solar power cheap?"
        )
        generator = RelatedQuestionGenerator(client)

        questions = await generator.generate("solar power")

        assert questions == ["How does solar storage work?", "Is solar power cheap?"]
        prompt = client.generate.call_args.args[0]
        assert '"solar power"' in prompt
        assert client.generate.call_args.kwargs["temperature"] == 0.9

    @pytest.mark.asyncio
    async def test_failure_yields_empty_list(self):
        client = AsyncMock()
        client.generate.side_effect = GenerationError("boom")
        generator = RelatedQuestionGenerator(client)

        assert await generator.generate("solar power") == []
