"""Tests for the comment endpoints."""

from collections.abc import Awaitable, Callable

import pytest
from httpx import AsyncClient

from app.models import CommentDB, PostDB
from app.routes.comments import is_spam

PostFactory = Callable[..., Awaitable[PostDB]]
CommentFactory = Callable[..., Awaitable[CommentDB]]

VALID_COMMENT = {
    "author_name": "Reader",
    "author_email": "reader@example.com",
    "content": "Thanks for writing this.",
}


@pytest.mark.parametrize(
    ("content", "expected"),
    [
        ("Buy SPAM now", True),
        ("see HTTPS://example.com", True),
        ("plain http://link", True),
        ("A thoughtful reply", False),
    ],
)
def test_is_spam(content: str, expected: bool) -> None:
    assert is_spam(content) is expected


async def test_lists_only_approved(
    client: AsyncClient,
    make_post: PostFactory,
    make_comment: CommentFactory,
) -> None:
    post = await make_post()
    await make_comment(post.id, content="visible")
    await make_comment(post.id, status="pending", content="waiting")
    await make_comment(post.id, status="spam", content="junk")

    response = await client.get(f"/api/posts/{post.id}/comments")

    assert response.status_code == 200
    body = response.json()
    assert [c["content"] for c in body["data"]] == ["visible"]
    assert body["pagination"] == {"page": 1, "limit": 20, "total": 1, "totalPages": 1}


async def test_comment_limit_capped(client: AsyncClient, make_post: PostFactory) -> None:
    post = await make_post()
    response = await client.get(f"/api/posts/{post.id}/comments", params={"limit": 1000})
    assert response.json()["pagination"]["limit"] == 100


class TestSubmitComment:
    """Tests for POST /api/posts/{id}/comments."""

    async def test_new_comment_is_pending(self, client: AsyncClient, make_post: PostFactory) -> None:
        post = await make_post()

        response = await client.post(f"/api/posts/{post.id}/comments", json=VALID_COMMENT)

        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "Comment submitted for review"
        assert body["data"]["status"] == "pending"
        assert body["data"]["post_id"] == post.id

        listing = (await client.get(f"/api/posts/{post.id}/comments")).json()
        assert listing["data"] == []

    async def test_link_marks_spam(self, client: AsyncClient, make_post: PostFactory) -> None:
        post = await make_post()

        response = await client.post(
            f"/api/posts/{post.id}/comments",
            json={**VALID_COMMENT, "content": "Great deals at https://cheap.example"},
        )

        assert response.status_code == 201
        assert response.json()["data"]["status"] == "spam"

    async def test_script_is_stripped(self, client: AsyncClient, make_post: PostFactory) -> None:
        post = await make_post()
        response = await client.post(
            f"/api/posts/{post.id}/comments",
            json={**VALID_COMMENT, "content": "Nice<script>steal()</script>"},
        )
        assert response.json()["data"]["content"] == "Nice"

    async def test_unknown_post(self, client: AsyncClient) -> None:
        response = await client.post("/api/posts/999/comments", json=VALID_COMMENT)
        assert response.status_code == 404
        assert response.json()["error"] == "Post not found"

    @pytest.mark.parametrize(
        ("body", "error"),
        [
            ({"author_name": "Reader", "content": "Hi"}, "Name, email, and content are required"),
            ({**VALID_COMMENT, "author_email": "not-an-email"}, "Invalid email address"),
        ],
    )
    async def test_validation(
        self,
        client: AsyncClient,
        make_post: PostFactory,
        body: dict[str, str],
        error: str,
    ) -> None:
        post = await make_post()
        response = await client.post(f"/api/posts/{post.id}/comments", json=body)
        assert response.status_code == 400
        assert response.json() == {"success": False, "error": error}


class TestModeration:
    """Tests for the admin comment endpoints."""

    async def test_approve(
        self,
        client: AsyncClient,
        admin_headers: dict[str, str],
        make_post: PostFactory,
        make_comment: CommentFactory,
    ) -> None:
        post = await make_post()
        comment = await make_comment(post.id, status="pending")

        response = await client.put(
            f"/api/comments/{comment.id}/status",
            json={"status": "approved"},
            headers=admin_headers,
        )

        assert response.status_code == 200
        assert response.json()["message"] == "Comment status updated"
        listing = (await client.get(f"/api/posts/{post.id}/comments")).json()
        assert [c["id"] for c in listing["data"]] == [comment.id]

    async def test_invalid_status(
        self,
        client: AsyncClient,
        admin_headers: dict[str, str],
        make_post: PostFactory,
        make_comment: CommentFactory,
    ) -> None:
        post = await make_post()
        comment = await make_comment(post.id)
        response = await client.put(
            f"/api/comments/{comment.id}/status",
            json={"status": "deleted"},
            headers=admin_headers,
        )
        assert response.status_code == 400
        assert response.json()["error"] == "Invalid status"

    async def test_status_requires_admin(self, client: AsyncClient) -> None:
        response = await client.put("/api/comments/1/status", json={"status": "approved"})
        assert response.status_code == 401

    async def test_status_on_missing_comment(self, client: AsyncClient, admin_headers: dict[str, str]) -> None:
        response = await client.put(
            "/api/comments/77/status",
            json={"status": "approved"},
            headers=admin_headers,
        )
        assert response.status_code == 404
        assert response.json()["error"] == "Comment not found"

    async def test_delete(
        self,
        client: AsyncClient,
        admin_headers: dict[str, str],
        make_post: PostFactory,
        make_comment: CommentFactory,
    ) -> None:
        post = await make_post()
        comment = await make_comment(post.id)

        response = await client.delete(f"/api/comments/{comment.id}", headers=admin_headers)
        again = await client.delete(f"/api/comments/{comment.id}", headers=admin_headers)

        assert response.json() == {"success": True, "message": "Comment deleted successfully"}
        assert again.status_code == 404
