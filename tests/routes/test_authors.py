"""Tests for the author endpoints."""

from collections.abc import Awaitable, Callable

from httpx import AsyncClient

from app.models import AuthorDB, PostDB

AuthorFactory = Callable[..., Awaitable[AuthorDB]]
PostFactory = Callable[..., Awaitable[PostDB]]


async def test_list_authors_with_counts(
    client: AsyncClient,
    make_author: AuthorFactory,
    make_post: PostFactory,
) -> None:
    jane = await make_author()
    await make_author(name="Adam Smith", email="adam@example.com")
    await make_post("Published One", author_id=jane.id)
    await make_post("Hidden", author_id=jane.id, status="draft")

    response = await client.get("/api/authors")

    assert response.status_code == 200
    data = response.json()["data"]
    assert [(a["name"], a["post_count"]) for a in data] == [("Adam Smith", 0), ("Jane Doe", 1)]


async def test_get_author(client: AsyncClient, make_author: AuthorFactory) -> None:
    author = await make_author(social_links={"twitter": "@jane"})

    response = await client.get(f"/api/authors/{author.id}")

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["email"] == "jane@example.com"
    assert data["social_links"] == {"twitter": "@jane"}
    assert data["post_count"] == 0


async def test_get_missing_author(client: AsyncClient) -> None:
    response = await client.get("/api/authors/404")
    assert response.status_code == 404
    assert response.json() == {"success": False, "error": "Author not found"}


async def test_author_posts(
    client: AsyncClient,
    make_author: AuthorFactory,
    make_post: PostFactory,
) -> None:
    author = await make_author()
    await make_post("Mine", author_id=author.id)
    await make_post("Not Mine")

    body = (await client.get(f"/api/authors/{author.id}/posts", params={"limit": 5})).json()

    assert [p["slug"] for p in body["data"]] == ["mine"]
    assert body["data"][0]["author_name"] == "Jane Doe"
    assert body["pagination"]["limit"] == 5
