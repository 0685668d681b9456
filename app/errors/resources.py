"""Errors raised by the resource handlers."""

from logging import getLogger

from starlette.status import (
    HTTP_400_BAD_REQUEST,
    HTTP_404_NOT_FOUND,
    HTTP_500_INTERNAL_SERVER_ERROR,
)

from app.configs import file_logger
from app.errors.base import BaseAppError, create_exception_handler

logger = file_logger(getLogger(__name__))


class BadRequestError(BaseAppError):
    """Raised for presence/format problems detected by a handler."""

    def __init__(self, detail: str = "Bad request") -> None:
        super().__init__(detail, HTTP_400_BAD_REQUEST)


class ResourceNotFoundError(BaseAppError):
    """Raised when the addressed resource does not exist."""

    def __init__(self, detail: str = "Not found") -> None:
        super().__init__(detail, HTTP_404_NOT_FOUND)


class OperationFailedError(BaseAppError):
    """Raised when an external call made by a handler fails."""

    def __init__(self, detail: str = "Operation failed") -> None:
        super().__init__(detail, HTTP_500_INTERNAL_SERVER_ERROR)


resource_exception_handler = create_exception_handler(logger)
