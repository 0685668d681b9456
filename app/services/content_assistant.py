"""
AI content assistant service.

Builds prompts for the excerpt, tagging and analysis helpers, sends them to
the inference client and shapes the replies. Reading metrics are computed
locally and never depend on the model.
"""

from logging import getLogger
from math import ceil, floor
from re import compile as re_compile
from time import perf_counter

from app.clients.ai_client import AiClient
from app.configs import file_logger
from app.configs.settings import (
    AI_EXCERPT_INPUT_CHARS,
    AI_MAX_TAGS,
    AI_TAGS_INPUT_CHARS,
    WORDS_PER_MINUTE,
)
from app.errors import AiError
from app.monitoring.prometheus import metrics
from app.schemas.ai import AnalysisData, ContentMetrics, ExcerptData, TagsData
from app.utils.helpers import sanitize_input

logger = file_logger(getLogger(__name__))

SENTENCE_BREAK = re_compile(r"[.!?]+")

EXCERPT_SYSTEM = (
    "You are a professional content editor. Generate concise, engaging excerpts for blog posts."
)
TAGS_SYSTEM = (
    "You are a content categorization expert. Generate relevant, concise tags for blog posts."
)
ANALYSIS_SYSTEM = (
    "You are a content quality analyst. Provide constructive feedback on blog posts."
)


def content_metrics(content: str) -> ContentMetrics:
    """
    Word, sentence and reading-time counts for a piece of text.

    Examples:
        >>> content_metrics("One two. Three four!").model_dump()
        {'word_count': 4, 'reading_time': 1, 'sentences': 2, 'avg_words_per_sentence': 2}
    """
    word_count = len(content.split())
    sentences = len(SENTENCE_BREAK.split(content)) - 1
    avg = floor(word_count / sentences + 0.5) if sentences > 0 else 0
    return ContentMetrics(
        word_count=word_count,
        reading_time=ceil(word_count / WORDS_PER_MINUTE),
        sentences=sentences,
        avg_words_per_sentence=avg,
    )


def parse_tags(reply: str) -> list[str]:
    """Split a comma separated model reply into at most five lower-cased tags."""
    tags = [tag.strip().lower() for tag in reply.split(",")]
    return [tag for tag in tags if tag][:AI_MAX_TAGS]


class ContentAssistant:
    """Generates excerpts, tags and quality feedback for post content."""

    def __init__(self, ai_client: AiClient) -> None:
        self.ai_client = ai_client

    async def _ask(self, request_type: str, prompt: str, system_instruction: str) -> str:
        start = perf_counter()
        try:
            reply = await self.ai_client.generate_text(prompt, system_instruction)
        except AiError:
            metrics.record_ai_request(request_type, perf_counter() - start, success=False)
            raise
        metrics.record_ai_request(request_type, perf_counter() - start, success=True)
        return reply

    async def generate_excerpt(self, content: str) -> ExcerptData:
        text = sanitize_input(content)[:AI_EXCERPT_INPUT_CHARS]
        prompt = (
            "Generate a compelling excerpt (2-3 sentences, max 150 characters) "
            f"for this blog post content:\n\n{text}"
        )
        reply = await self._ask("excerpt", prompt, EXCERPT_SYSTEM)
        return ExcerptData(excerpt=reply.strip())

    async def generate_tags(self, title: str | None, content: str | None) -> TagsData:
        text = f"{title or ''}\n\n{content or ''}"[:AI_TAGS_INPUT_CHARS]
        prompt = (
            "Analyze this blog post and suggest 3-5 relevant tags "
            f"(single words or short phrases, separated by commas):\n\n{text}"
        )
        reply = await self._ask("tags", prompt, TAGS_SYSTEM)
        tags = parse_tags(reply)
        logger.info(f"Generated {len(tags)} tags")
        return TagsData(tags=tags)

    async def analyze(self, content: str) -> AnalysisData:
        """
        Ask the model for readability and SEO feedback.

        The metrics are computed from the submitted text as-is, before the
        script-stripping applied to the prompt.
        """
        text = sanitize_input(content)[:AI_EXCERPT_INPUT_CHARS]
        prompt = (
            "Analyze this blog post content for readability, engagement, and SEO "
            f"potential. Provide a brief analysis with suggestions:\n\n{text}"
        )
        reply = await self._ask("analysis", prompt, ANALYSIS_SYSTEM)
        return AnalysisData(analysis=reply.strip(), metrics=content_metrics(content))
