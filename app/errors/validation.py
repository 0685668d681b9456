"""Request validation, routing and fallback error handling for FastAPI."""

from logging import getLogger
from typing import Any, cast

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import ORJSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.status import (
    HTTP_400_BAD_REQUEST,
    HTTP_404_NOT_FOUND,
    HTTP_500_INTERNAL_SERVER_ERROR,
)

from app.configs import file_logger
from app.configs.settings import DEFAULT_ERROR_MESSAGE
from app.errors.base import error_body
from app.utils.helpers import host

logger = file_logger(getLogger(__name__))

# pydantic's EmailStr reports "value is not a valid email address: <reason>"
EMAIL_ERROR_PREFIX = "value is not a valid email address"


def format_validation_error(error: dict[str, Any]) -> str:
    """
    Turn one pydantic error entry into a client-facing sentence.

    Errors raised by our own validators carry the original exception in
    ``ctx["error"]`` and are returned verbatim. ``EmailStr`` failures collapse
    to one message without the validator's reason. Everything else is
    prefixed with the offending field name.
    """
    ctx = error.get("ctx") or {}
    if isinstance(ctx.get("error"), Exception):
        return str(ctx["error"])
    if error.get("type") == "json_invalid":
        return "Invalid JSON body"
    if error.get("type") == "value_error" and str(error.get("msg", "")).startswith(EMAIL_ERROR_PREFIX):
        return "Invalid email address"
    field = ".".join(str(loc) for loc in error.get("loc", ())[1:])
    message = error.get("msg", "Invalid value")
    return f"{field}: {message}" if field else message


async def validation_exception_handler(
    request: Request,
    exc: Exception,
) -> ORJSONResponse:
    """
    Handle request validation errors with the standard failure envelope.

    Args:
        request: The incoming request.
        exc: The RequestValidationError exception.

    Returns:
        ORJSONResponse with a 400 status and the first error message.
    """
    errors = cast(RequestValidationError, exc).errors()
    messages = [format_validation_error(error) for error in errors]
    detail = messages[0] if messages else "Validation failed"

    logger.warning(
        f"Validation error for ip: {host(request)} at endpoint {request.url.path}: {messages}",
    )

    return ORJSONResponse(status_code=HTTP_400_BAD_REQUEST, content=error_body(detail))


async def http_exception_handler(request: Request, exc: Exception) -> ORJSONResponse:
    """Wrap framework HTTP errors (unknown route, wrong method) in the envelope."""
    http_exc = cast(StarletteHTTPException, exc)
    detail = "Endpoint not found" if http_exc.status_code == HTTP_404_NOT_FOUND else http_exc.detail
    return ORJSONResponse(
        status_code=http_exc.status_code,
        content=error_body(str(detail)),
        headers=http_exc.headers,
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> ORJSONResponse:
    """Log unexpected failures and hide their details from the client."""
    logger.error(
        f"Unhandled error for ip: {host(request)} at endpoint {request.url.path}",
        exc_info=exc,
    )
    return ORJSONResponse(
        status_code=HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body(DEFAULT_ERROR_MESSAGE),
    )
