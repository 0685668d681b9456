"""Tests for the AI content assistant service."""

from unittest.mock import AsyncMock

import pytest

from app.clients.ai_client import AiClient
from app.services.content_assistant import (
    ANALYSIS_SYSTEM,
    EXCERPT_SYSTEM,
    TAGS_SYSTEM,
    ContentAssistant,
    content_metrics,
    parse_tags,
)


@pytest.fixture
def ai() -> AsyncMock:
    return AsyncMock(spec=AiClient)


@pytest.fixture
def assistant(ai: AsyncMock) -> ContentAssistant:
    return ContentAssistant(ai)


class TestContentMetrics:
    """Tests for locally computed reading metrics."""

    def test_counts(self) -> None:
        metrics = content_metrics("Hello world. This is a test! Is it?")
        assert metrics.word_count == 8
        assert metrics.sentences == 3
        assert metrics.avg_words_per_sentence == 3
        assert metrics.reading_time == 1

    def test_average_rounds_half_up(self) -> None:
        # 5 words over 2 sentences is 2.5
        assert content_metrics("One two three. Four five.").avg_words_per_sentence == 3

    def test_no_sentence_terminator(self) -> None:
        metrics = content_metrics("just some words")
        assert metrics.sentences == 0
        assert metrics.avg_words_per_sentence == 0

    def test_reading_time_rounds_up(self) -> None:
        assert content_metrics(" ".join(["word"] * 201)).reading_time == 2
        assert content_metrics("").reading_time == 0

    def test_serialized_names(self) -> None:
        dumped = content_metrics("One. Two.").model_dump(by_alias=True)
        assert set(dumped) == {"wordCount", "readingTime", "sentences", "avgWordsPerSentence"}


@pytest.mark.parametrize(
    ("reply", "expected"),
    [
        ("Python, FastAPI, Web", ["python", "fastapi", "web"]),
        (" a , , b ,", ["a", "b"]),
        ("one, two, three, four, five, six, seven", ["one", "two", "three", "four", "five"]),
        ("", []),
    ],
)
def test_parse_tags(reply: str, expected: list[str]) -> None:
    assert parse_tags(reply) == expected


class TestContentAssistant:
    """Tests for prompt building and reply shaping."""

    async def test_excerpt_prompt_is_sanitized_and_truncated(
        self,
        assistant: ContentAssistant,
        ai: AsyncMock,
    ) -> None:
        ai.generate_text.return_value = "  A short teaser.  "
        content = "<script>evil()</script>" + "x" * 3000

        result = await assistant.generate_excerpt(content)

        assert result.excerpt == "A short teaser."
        prompt, system = ai.generate_text.await_args.args
        assert system == EXCERPT_SYSTEM
        assert "<script>" not in prompt
        assert prompt.endswith("x" * 2000)
        assert "x" * 2001 not in prompt

    async def test_tags_from_title_and_content(
        self,
        assistant: ContentAssistant,
        ai: AsyncMock,
    ) -> None:
        ai.generate_text.return_value = "Python, Async, Testing"

        result = await assistant.generate_tags("Async Python", "Body " * 1000)

        assert result.tags == ["python", "async", "testing"]
        prompt, system = ai.generate_text.await_args.args
        assert system == TAGS_SYSTEM
        assert "Async Python" in prompt
        assert len(prompt.split("\n\n", 1)[1]) <= 1500

    async def test_analysis_metrics_use_raw_content(
        self,
        assistant: ContentAssistant,
        ai: AsyncMock,
    ) -> None:
        ai.generate_text.return_value = "Readable. Add headings."
        content = "Intro here. <script>x()</script> More text!"

        result = await assistant.analyze(content)

        assert result.analysis == "Readable. Add headings."
        assert result.metrics.word_count == len(content.split())
        assert ai.generate_text.await_args.args[1] == ANALYSIS_SYSTEM
