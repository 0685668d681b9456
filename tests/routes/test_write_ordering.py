"""Mutations commit before their cache keys are busted and the response is sent."""

from collections.abc import Awaitable, Callable
from typing import Any

import pytest
from httpx import AsyncClient
from sqlalchemy.exc import OperationalError
from sqlmodel.ext.asyncio.session import AsyncSession as SQLModelAsyncSession

from app.managers import cache_manager
from app.models import PostDB


@pytest.fixture
def events(monkeypatch: pytest.MonkeyPatch) -> list[str]:
    """Record session commits and cache deletions in the order they happen."""
    recorded: list[str] = []
    original_commit = SQLModelAsyncSession.commit
    original_delete = cache_manager.delete

    async def recording_commit(self: SQLModelAsyncSession) -> None:
        recorded.append("commit")
        await original_commit(self)

    async def recording_delete(*keys: str, **kwargs: Any) -> int:  # noqa: ANN401
        recorded.append("bust")
        return await original_delete(*keys, **kwargs)

    monkeypatch.setattr(SQLModelAsyncSession, "commit", recording_commit)
    monkeypatch.setattr(cache_manager, "delete", recording_delete)
    return recorded


def assert_committed_before_bust(events: list[str]) -> None:
    assert "bust" in events
    assert "commit" in events
    assert events.index("commit") < events.index("bust") < events.index("response")


async def test_create_post(client: AsyncClient, admin_headers: dict[str, str], events: list[str]) -> None:
    response = await client.post(
        "/api/posts",
        json={"title": "Hello World", "content": "Body", "status": "published"},
        headers=admin_headers,
    )
    events.append("response")

    assert response.status_code == 201
    assert_committed_before_bust(events)


async def test_update_post(
    client: AsyncClient,
    admin_headers: dict[str, str],
    make_post: Callable[..., Awaitable[PostDB]],
    events: list[str],
) -> None:
    post = await make_post()
    events.clear()

    response = await client.put(f"/api/posts/{post.id}", json={"content": "After"}, headers=admin_headers)
    events.append("response")

    assert response.status_code == 200
    assert_committed_before_bust(events)


async def test_delete_post(
    client: AsyncClient,
    admin_headers: dict[str, str],
    make_post: Callable[..., Awaitable[PostDB]],
    events: list[str],
) -> None:
    post = await make_post()
    events.clear()

    response = await client.delete(f"/api/posts/{post.id}", headers=admin_headers)
    events.append("response")

    assert response.status_code == 200
    assert_committed_before_bust(events)


async def test_create_category(client: AsyncClient, admin_headers: dict[str, str], events: list[str]) -> None:
    response = await client.post("/api/categories", json={"name": "Tech"}, headers=admin_headers)
    events.append("response")

    assert response.status_code == 201
    assert_committed_before_bust(events)


async def test_failed_commit_skips_bust(
    client: AsyncClient,
    admin_headers: dict[str, str],
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    busted: list[tuple[str, ...]] = []

    async def failing_commit(self: SQLModelAsyncSession) -> None:
        raise OperationalError("COMMIT", None, Exception("disk I/O error"))

    async def recording_delete(*keys: str, **kwargs: Any) -> int:  # noqa: ANN401
        busted.append(keys)
        return 0

    monkeypatch.setattr(SQLModelAsyncSession, "commit", failing_commit)
    monkeypatch.setattr(cache_manager, "delete", recording_delete)

    response = await client.post("/api/categories", json={"name": "Tech"}, headers=admin_headers)

    assert response.status_code == 500
    assert response.json() == {"success": False, "error": "Failed to save record"}
    assert busted == []
