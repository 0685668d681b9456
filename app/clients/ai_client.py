# app/clients/ai_client.py

from logging import getLogger
from typing import NoReturn

from google.genai import Client
from google.genai.client import AsyncClient
from google.genai.types import GenerateContentConfig, HttpOptions
from httpx import RemoteProtocolError, TimeoutException

from app.configs import file_logger, settings
from app.errors import (
    AiAuthenticationError,
    AiError,
    AIGenerationError,
    AiNetworkError,
    AiQuotaExceededError,
)

logger = file_logger(getLogger(__name__))

# Network-related exceptions that should be caught and converted
NETWORK_EXCEPTIONS = (
    RemoteProtocolError,
    TimeoutException,
    ConnectionError,
    OSError,
)


class AiClient:
    """
    Async client for Google's Gemini API.

    A single attempt is made per call; failures are mapped onto the AiError
    hierarchy so routes can turn them into one generic message.

    Attributes:
        client: The Google GenAI AsyncClient instance.
    """

    def __init__(
        self,
        api_key: str,
        model: str = settings.GEMINI_MODEL,
        timeout: int = settings.AI_REQUEST_TIMEOUT,
        temperature: float = settings.AI_TEMPERATURE,
        max_output_tokens: int = settings.AI_MAX_OUTPUT_TOKENS,
    ) -> None:
        self._model = model
        self._temperature = temperature
        self._max_output_tokens = max_output_tokens

        try:
            self._client = Client(
                api_key=api_key,
                http_options=HttpOptions(timeout=timeout * 1000),
            ).aio
        except Exception as e:  # noqa: BLE001
            logger.exception("Failed to initialize Gemini client, missing or invalid API key?")
            self._handle_exception(e)

        logger.info(f"AiClient initialized with model: {self._model}")

    @property
    def client(self) -> AsyncClient:
        """Get the AI client instance."""
        return self._client

    async def generate_text(self, prompt: str, system_instruction: str) -> str:
        """
        Run one prompt against the model and return the plain text answer.

        Args:
            prompt: The user content sent to the model.
            system_instruction: The role the model should play.

        Returns:
            The stripped response text.

        Raises:
            AIGenerationError: If the model returns no text.
            AiNetworkError: If the endpoint cannot be reached.
            AiError: For any other upstream failure.
        """
        config = GenerateContentConfig(
            system_instruction=system_instruction,
            temperature=self._temperature,
            max_output_tokens=self._max_output_tokens,
        )
        try:
            response = await self._client.models.generate_content(
                model=self._model,
                contents=prompt,
                config=config,
            )
        except NETWORK_EXCEPTIONS as e:
            logger.exception("Gemini API unreachable")
            raise AiNetworkError from e
        except Exception as e:  # noqa: BLE001
            self._handle_exception(e)

        text = (response.text or "").strip() if response else ""
        if not text:
            mssg = "Empty response from Gemini API"
            raise AIGenerationError(detail=mssg)
        return text

    def _handle_exception(self, e: Exception) -> NoReturn:
        """
        Map generic exceptions to specific AiError.

        The upstream message is logged only; the raised errors carry their
        fixed default details since they reach the client.
        """
        error_msg = str(e)
        logger.error(f"AI Error: {error_msg}")

        if "401" in error_msg or "unauthenticated" in error_msg.lower():
            raise AiAuthenticationError from e
        if "429" in error_msg or "quota" in error_msg.lower():
            raise AiQuotaExceededError from e
        if "connection" in error_msg.lower():
            raise AiNetworkError from e
        raise AiError from e

    async def close(self) -> None:
        try:
            logger.info("Closing AI client")
            await self.client.aclose()
        except Exception:
            logger.exception("Failed to close AI client")
        else:
            logger.info("AI client closed successfully")
