from collections.abc import MutableMapping
from datetime import UTC, datetime
from math import ceil
from re import IGNORECASE
from re import compile as re_compile
from typing import Any

from fastapi import FastAPI, Request
from fastapi.routing import APIRoute
from pydantic import EmailStr, TypeAdapter, ValidationError
from starlette.routing import BaseRoute, Match, Route

SCRIPT_TAG = re_compile(r"<script\b[^<]*(?:(?!</script>)<[^<]*)*</script>", IGNORECASE)
NON_SLUG_CHARS = re_compile(r"[^a-z0-9\s-]")
WHITESPACE = re_compile(r"\s+")
REPEATED_DASHES = re_compile(r"-+")
EMAIL_ADAPTER = TypeAdapter(EmailStr)


def host(request: Request) -> str:
    """Return the host IP address."""
    return request.client.host if request.client else "unknown"


def utcnow() -> datetime:
    """Return the current time as an aware UTC datetime."""
    return datetime.now(tz=UTC)


def today_str() -> str:
    """Return the current UTC time as an ISO 8601 string."""
    return utcnow().isoformat()


def generate_slug(text: str) -> str:
    """
    Build a URL slug from free text.

    Lower-cases, drops anything that is not a letter, digit, space or dash,
    turns whitespace runs into single dashes and trims stray dashes.

    Examples:
        >>> generate_slug("Hello, World!  Again")
        'hello-world-again'
    """
    slug = NON_SLUG_CHARS.sub("", text.lower())
    slug = WHITESPACE.sub("-", slug)
    slug = REPEATED_DASHES.sub("-", slug)
    return slug.strip("-")


def sanitize_input(text: str) -> str:
    """Strip <script> blocks from user supplied markup."""
    return SCRIPT_TAG.sub("", text)


def is_valid_email(email: str) -> bool:
    """Return True when pydantic's ``EmailStr`` accepts the string."""
    try:
        EMAIL_ADAPTER.validate_python(email)
    except ValidationError:
        return False
    return True


def total_pages(total: int, limit: int) -> int:
    """Number of pages needed to show `total` items `limit` at a time."""
    return ceil(total / limit) if limit else 0


def get_summary(request: Request) -> str | None:
    """Extract route summary from request."""

    scope: MutableMapping[str, Any] = request.scope
    app: FastAPI = scope["app"]
    routes: list[BaseRoute] = app.routes

    summary = None
    for route in routes:
        is_api_route = type(route) is APIRoute
        is_route = type(route) is Route
        if is_api_route and route.matches(scope)[0] == Match.FULL:
            summary = route.summary
            break
        if is_route and route.matches(scope)[0] == Match.FULL:
            summary = route.name
            break

    return summary
