"""Tests for the Gemini client wrapper."""

from collections.abc import Iterator
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from httpx import ConnectTimeout

from app.clients.ai_client import AiClient
from app.errors import (
    AiAuthenticationError,
    AiError,
    AIGenerationError,
    AiNetworkError,
    AiQuotaExceededError,
)


@pytest.fixture
def genai() -> Iterator[MagicMock]:
    with patch("app.clients.ai_client.Client") as client_cls:
        yield client_cls


@pytest.fixture
def ai_client(genai: MagicMock) -> AiClient:
    client = AiClient("test-key", model="gemini-test")
    client._client.models.generate_content = AsyncMock()
    return client


def test_builds_async_client(genai: MagicMock) -> None:
    client = AiClient("test-key")
    genai.assert_called_once()
    assert genai.call_args.kwargs["api_key"] == "test-key"
    assert client.client is genai.return_value.aio


async def test_generate_text_returns_stripped_text(ai_client: AiClient) -> None:
    ai_client._client.models.generate_content.return_value = MagicMock(text="  Hello there  ")

    assert await ai_client.generate_text("prompt", "system") == "Hello there"

    kwargs = ai_client._client.models.generate_content.await_args.kwargs
    assert kwargs["model"] == "gemini-test"
    assert kwargs["contents"] == "prompt"
    assert kwargs["config"].system_instruction == "system"


async def test_empty_reply_is_generation_error(ai_client: AiClient) -> None:
    ai_client._client.models.generate_content.return_value = MagicMock(text=None)
    with pytest.raises(AIGenerationError):
        await ai_client.generate_text("prompt", "system")


async def test_timeout_is_network_error(ai_client: AiClient) -> None:
    ai_client._client.models.generate_content.side_effect = ConnectTimeout("timed out")
    with pytest.raises(AiNetworkError) as exc_info:
        await ai_client.generate_text("prompt", "system")
    assert exc_info.value.status_code == 503


@pytest.mark.parametrize(
    ("message", "error_type", "detail"),
    [
        ("401 UNAUTHENTICATED key=AIza-secret", AiAuthenticationError, "AI authentication failed"),
        ("429 RESOURCE_EXHAUSTED quota for project-1234", AiQuotaExceededError, "AI quota exceeded"),
        ("connection reset by 10.0.0.7", AiNetworkError, "AI service temporarily unavailable"),
        ("500 INTERNAL at shard-9", AiError, "AI client error"),
    ],
)
async def test_upstream_errors_are_mapped(
    ai_client: AiClient,
    message: str,
    error_type: type[AiError],
    detail: str,
) -> None:
    ai_client._client.models.generate_content.side_effect = ValueError(message)
    with pytest.raises(error_type) as exc_info:
        await ai_client.generate_text("prompt", "system")
    assert exc_info.value.detail == detail


async def test_network_error_detail_hides_upstream_text(ai_client: AiClient) -> None:
    ai_client._client.models.generate_content.side_effect = ConnectionError("connect to internal-gw:8443 refused")
    with pytest.raises(AiNetworkError) as exc_info:
        await ai_client.generate_text("prompt", "system")
    assert exc_info.value.detail == "AI service temporarily unavailable"


async def test_close_swallows_errors(ai_client: AiClient) -> None:
    ai_client._client.aclose = AsyncMock(side_effect=RuntimeError("already closed"))
    await ai_client.close()
    ai_client._client.aclose.assert_awaited_once()
