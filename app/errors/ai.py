from logging import getLogger

from starlette.status import (
    HTTP_401_UNAUTHORIZED,
    HTTP_429_TOO_MANY_REQUESTS,
    HTTP_500_INTERNAL_SERVER_ERROR,
    HTTP_502_BAD_GATEWAY,
    HTTP_503_SERVICE_UNAVAILABLE,
)

from app.configs import file_logger
from app.errors.base import BaseAppError, create_exception_handler

logger = file_logger(getLogger(__name__))


class AiError(BaseAppError):
    """Base exception for AI client errors."""

    def __init__(
        self,
        detail: str = "AI client error",
        status_code: int = HTTP_500_INTERNAL_SERVER_ERROR,
    ) -> None:
        super().__init__(detail=detail, status_code=status_code)


class AiAuthenticationError(AiError):
    """Authentication failed."""

    def __init__(self, detail: str = "AI authentication failed") -> None:
        super().__init__(detail, HTTP_401_UNAUTHORIZED)


class AiQuotaExceededError(AiError):
    """Quota exceeded."""

    def __init__(self, detail: str = "AI quota exceeded") -> None:
        super().__init__(detail, HTTP_429_TOO_MANY_REQUESTS)


class AiNetworkError(AiError):
    """Network connectivity issues."""

    def __init__(self, detail: str = "AI service temporarily unavailable") -> None:
        super().__init__(detail, HTTP_503_SERVICE_UNAVAILABLE)


class AIGenerationError(AiError):
    """Raised when the model returns no usable text."""

    def __init__(self, detail: str = "AI content generation failed") -> None:
        super().__init__(detail, HTTP_502_BAD_GATEWAY)


class AiNotConfiguredError(AiError):
    """Raised when an AI route is called but no inference client was set up."""

    def __init__(self, detail: str = "AI service is not configured") -> None:
        super().__init__(detail, HTTP_503_SERVICE_UNAVAILABLE)


ai_exception_handler = create_exception_handler(logger)
