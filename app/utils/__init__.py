"""Utility helper functions."""

from app.utils.helpers import (
    generate_slug,
    get_summary,
    host,
    is_valid_email,
    sanitize_input,
    today_str,
    total_pages,
    utcnow,
)

__all__ = [
    "generate_slug",
    "get_summary",
    "host",
    "is_valid_email",
    "sanitize_input",
    "today_str",
    "total_pages",
    "utcnow",
]
