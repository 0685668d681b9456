"""Rate limiting errors."""

from logging import getLogger

from starlette.status import HTTP_429_TOO_MANY_REQUESTS

from app.configs import file_logger
from app.configs.settings import RATE_LIMIT_MESSAGE
from app.errors.base import BaseAppError, create_exception_handler

logger = file_logger(getLogger(__name__))


class RateLimitExceededError(BaseAppError):
    """Raised when a client has used up its bucket for the current window."""

    def __init__(self, bucket: str, limit: int, retry_after: int) -> None:
        super().__init__(
            RATE_LIMIT_MESSAGE,
            HTTP_429_TOO_MANY_REQUESTS,
            headers={
                "Retry-After": str(retry_after),
                "X-RateLimit-Limit": str(limit),
                "X-RateLimit-Remaining": "0",
            },
        )
        self.bucket = bucket
        self.limit = limit
        self.retry_after = retry_after


rate_limit_exception_handler = create_exception_handler(logger)
