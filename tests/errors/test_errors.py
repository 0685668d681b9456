"""Tests for the error hierarchy and the failure envelope."""

from logging import getLogger

import pytest
from fastapi.responses import ORJSONResponse
from orjson import loads
from pydantic import EmailStr, TypeAdapter, ValidationError
from starlette.requests import Request

from app.errors import (
    AiNotConfiguredError,
    BadRequestError,
    BaseAppError,
    DuplicateEntryError,
    FileTooLargeError,
    RateLimitExceededError,
    ResourceNotFoundError,
    UnsupportedFileTypeError,
    UserAlreadyExistsError,
    create_exception_handler,
    error_body,
)
from app.errors.validation import format_validation_error


def make_request(path: str = "/api/posts") -> Request:
    scope = {"type": "http", "method": "GET", "path": path, "headers": [], "client": ("1.2.3.4", 1)}
    return Request(scope)


def test_error_body_shape() -> None:
    assert error_body("Post not found") == {"success": False, "error": "Post not found"}


def test_status_codes() -> None:
    assert BaseAppError().status_code == 500
    assert BadRequestError("No fields to update").status_code == 400
    assert ResourceNotFoundError("Post not found").status_code == 404
    assert UserAlreadyExistsError().status_code == 409
    assert DuplicateEntryError().status_code == 409
    assert AiNotConfiguredError().status_code == 503


def test_upload_error_messages() -> None:
    assert FileTooLargeError(max_size_mb=5).detail == "File too large. Maximum size is 5MB"
    assert UnsupportedFileTypeError("text/plain").detail == (
        "Invalid file type. Only JPEG, PNG, GIF, and WebP are allowed"
    )


def test_rate_limit_error_headers() -> None:
    error = RateLimitExceededError("posts", limit=100, retry_after=42)
    assert error.status_code == 429
    assert error.detail == "Rate limit exceeded"
    assert error.headers == {
        "Retry-After": "42",
        "X-RateLimit-Limit": "100",
        "X-RateLimit-Remaining": "0",
    }


async def test_exception_handler_renders_envelope() -> None:
    handler = create_exception_handler(getLogger("test"))
    response = await handler(make_request(), RateLimitExceededError("auth", 5, 900))

    assert isinstance(response, ORJSONResponse)
    assert response.status_code == 429
    assert response.headers["Retry-After"] == "900"
    assert loads(response.body) == {"success": False, "error": "Rate limit exceeded"}


class TestFormatValidationError:
    """Tests for turning pydantic errors into client messages."""

    def test_own_validator_message_is_verbatim(self) -> None:
        error = {
            "type": "value_error",
            "loc": ("body",),
            "msg": "Value error, Title and content are required",
            "ctx": {"error": ValueError("Title and content are required")},
        }
        assert format_validation_error(error) == "Title and content are required"

    def test_invalid_json(self) -> None:
        assert format_validation_error({"type": "json_invalid", "loc": ("body", 0)}) == "Invalid JSON body"

    def test_field_is_prefixed(self) -> None:
        error = {"type": "int_parsing", "loc": ("query", "page"), "msg": "Input should be a valid integer"}
        assert format_validation_error(error) == "page: Input should be a valid integer"

    def test_email_error_drops_reason(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            TypeAdapter(EmailStr).validate_python("reader@example")
        error = exc_info.value.errors()[0]
        assert format_validation_error({**error, "loc": ("body", "author_email")}) == "Invalid email address"
