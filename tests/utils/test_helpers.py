"""Tests for app/utils helpers, cache keys and the response envelope."""

from datetime import UTC, datetime

import pytest

from app.schemas.envelope import Pagination, envelope
from app.utils.cache_keys import (
    authors_list_key,
    categories_list_key,
    post_slug_key,
    posts_list_key,
    search_key,
)
from app.utils.helpers import generate_slug, is_valid_email, sanitize_input, total_pages


class TestGenerateSlug:
    """Tests for generate_slug."""

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("Hello World", "hello-world"),
            ("Hello, World!  Again", "hello-world-again"),
            ("  Leading and trailing  ", "leading-and-trailing"),
            ("Already-slugged--title", "already-slugged-title"),
            ("Café & Crème 2024", "caf-crme-2024"),
            ("!!!", ""),
        ],
    )
    def test_slugs(self, text: str, expected: str) -> None:
        assert generate_slug(text) == expected


class TestSanitizeInput:
    """Tests for sanitize_input."""

    def test_strips_script_blocks(self) -> None:
        html = "<p>Hi</p><script>alert(1)</script><p>Bye</p>"
        assert sanitize_input(html) == "<p>Hi</p><p>Bye</p>"

    def test_case_insensitive_and_attributes(self) -> None:
        html = '<SCRIPT type="text/javascript">steal()</SCRIPT>ok'
        assert sanitize_input(html) == "ok"

    def test_leaves_other_markup(self) -> None:
        assert sanitize_input("<b>bold</b>") == "<b>bold</b>"


@pytest.mark.parametrize(
    ("email", "valid"),
    [
        ("jane@example.com", True),
        ("a.b+c@sub.example.org", True),
        ("no-at-sign", False),
        ("two@@example.com", False),
        ("space in@example.com", False),
        ("missing@tld", False),
    ],
)
def test_is_valid_email(email: str, valid: bool) -> None:
    assert is_valid_email(email) is valid


def test_total_pages() -> None:
    assert total_pages(0, 10) == 0
    assert total_pages(10, 10) == 1
    assert total_pages(11, 10) == 2


class TestCacheKeys:
    """Tests for cache key builders."""

    def test_default_listing_key(self) -> None:
        assert posts_list_key(1, 10) == "posts:1:10:::"

    def test_listing_key_with_filters(self) -> None:
        assert posts_list_key(2, 20, "python", "tech", 3) == "posts:2:20:python:tech:3"

    def test_other_keys(self) -> None:
        assert post_slug_key("hello-world") == "post:hello-world"
        assert categories_list_key() == "categories:all"
        assert authors_list_key() == "authors:all"
        assert search_key("fastapi", 1, 10) == "search:fastapi:1:10::"


class TestEnvelope:
    """Tests for the success envelope."""

    def test_message_only(self) -> None:
        assert envelope(message="Post deleted successfully") == {
            "success": True,
            "message": "Post deleted successfully",
        }

    def test_pagination_uses_camel_case(self) -> None:
        body = envelope(data=[], pagination=Pagination.build(page=2, limit=10, total=25))
        assert body["pagination"] == {"page": 2, "limit": 10, "total": 25, "totalPages": 3}

    def test_data_is_json_ready(self) -> None:
        stamp = datetime(2024, 1, 2, 3, 4, 5, tzinfo=UTC)
        body = envelope(data={"created_at": stamp})
        assert body["data"]["created_at"] == "2024-01-02T03:04:05Z"
