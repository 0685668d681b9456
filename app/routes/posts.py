# app/routes/posts.py

"""
Post Routes.

Provides the public post listing and detail endpoints, admin CRUD and the
view counter, with rate limiting and cache-aside on the read paths.

Summary
-------
Endpoints include:
  - List published posts (paginated, filterable)
  - Get published post by slug
  - Create post (admin)
  - Update post (admin)
  - Delete post (admin)
  - Increment view count

Caching
-------
Listings are cached for ``CACHE_TTL_POSTS_LIST`` seconds under
``posts:<page>:<limit>:<search>:<category>:<author>`` and single posts for
``CACHE_TTL_POST`` seconds under ``post:<slug>``. Mutations delete the
configured listing keys plus the affected ``post:<slug>`` entries.
"""

from logging import getLogger
from typing import Annotated, Any

from fastapi import APIRouter, BackgroundTasks, Body, Depends, Request
from fastapi.responses import ORJSONResponse
from starlette.status import HTTP_201_CREATED

from app.auth import AdminDep
from app.configs import file_logger, settings
from app.db import transaction
from app.decorators import cache_busting, cached
from app.dependencies import PostListQueryDep, PostRepoDep, rate_limit
from app.errors import BadRequestError, ResourceNotFoundError
from app.managers import cache_manager
from app.repositories import PostRepository
from app.schemas import Pagination, PostCreate, PostUpdate, envelope
from app.utils.cache_keys import post_slug_key, posts_list_key

router = APIRouter(
    prefix="/api/posts",
    tags=["📝 Posts"],
    dependencies=[Depends(rate_limit("posts"))],
)

logger = file_logger(getLogger(__name__))

POST_NOT_FOUND = "Post not found"


def stale_post_keys(request: Request, **_: Any) -> list[str]:  # noqa: ANN401
    """Per-post keys a mutation marked stale on ``request.state``."""
    return [post_slug_key(slug) for slug in getattr(request.state, "stale_slugs", ())]


async def increment_post_views(post_id: int) -> None:
    """Bump the view counter in its own transaction after the response is sent."""
    try:
        async with transaction() as session:
            await PostRepository(session).increment_views(post_id)
    except Exception:
        logger.exception(f"Failed to increment views for post {post_id}")


@router.get(
    "",
    response_class=ORJSONResponse,
    summary="List published posts",
    description="Published posts, newest first, with optional text, category and author filters.",
    responses={
        200: {
            "content": {
                "application/json": {
                    "example": {
                        "success": True,
                        "data": [{"id": 1, "title": "Hello World", "slug": "hello-world"}],
                        "pagination": {"page": 1, "limit": 10, "total": 1, "totalPages": 1},
                    },
                },
            },
        },
        429: {
            "description": "Rate limit exceeded",
            "content": {
                "application/json": {"example": {"success": False, "error": "Rate limit exceeded"}},
            },
        },
    },
    operation_id="posts_list",
)
@cached(
    cache_manager,
    ttl=settings.CACHE_TTL_POSTS_LIST,
    key_builder=lambda query, **_: posts_list_key(
        query.page,
        query.limit,
        query.search,
        query.category,
        query.author,
    ),
)
async def list_posts(query: PostListQueryDep, repo: PostRepoDep) -> dict[str, Any]:
    """
    List published posts.

    Parameters
    ----------
    query : PostListQuery
        Page, clamped limit and filters.
    repo : PostRepository
        Repository dependency.

    Returns
    -------
    dict[str, Any]
        Envelope with the page of posts and pagination metadata.
    """
    posts, total = await repo.list_published(
        query.page,
        query.limit,
        search=query.search,
        category=query.category,
        author=query.author,
    )
    return envelope(data=posts, pagination=Pagination.build(query.page, query.limit, total))


@router.get(
    "/{slug}",
    response_class=ORJSONResponse,
    summary="Get published post by slug",
    responses={
        404: {
            "description": "Not found",
            "content": {"application/json": {"example": {"success": False, "error": POST_NOT_FOUND}}},
        },
    },
    operation_id="posts_get_by_slug",
)
@cached(
    cache_manager,
    ttl=settings.CACHE_TTL_POST,
    key_builder=lambda slug, **_: post_slug_key(slug),
)
async def get_post(slug: str, repo: PostRepoDep) -> dict[str, Any]:
    """
    Get one published post with its category and author details.

    Raises
    ------
    ResourceNotFoundError
        If no published post has this slug.
    """
    post = await repo.get_published_by_slug(slug)
    if post is None:
        raise ResourceNotFoundError(POST_NOT_FOUND)
    return envelope(data=post)


@router.post(
    "",
    response_class=ORJSONResponse,
    status_code=HTTP_201_CREATED,
    summary="Create a new post",
    description="Slug is derived from the title. Status defaults to draft.",
    responses={
        400: {
            "description": "Bad request",
            "content": {
                "application/json": {
                    "example": {"success": False, "error": "Title and content are required"},
                },
            },
        },
        401: {
            "description": "Unauthorized",
            "content": {
                "application/json": {
                    "example": {"success": False, "error": "Authorization token required"},
                },
            },
        },
        409: {
            "description": "Conflict",
            "content": {
                "application/json": {"example": {"success": False, "error": "Resource already exists"}},
            },
        },
    },
    operation_id="posts_create",
)
@cache_busting(cache_manager, keys=settings.POSTS_INVALIDATION_KEYS)
async def create_post(
    _admin: AdminDep,
    post: Annotated[PostCreate, Body()],
    repo: PostRepoDep,
) -> dict[str, Any]:
    """
    Create a new post.

    Parameters
    ----------
    post : PostCreate
        Post input payload.
    repo : PostRepository
        Repository dependency.

    Returns
    -------
    dict[str, Any]
        Envelope with the created post.
    """
    created = await repo.create_post(post.to_row())
    logger.info(f"Created post {created.id} ({created.slug})")
    return envelope(data=created, message="Post created successfully")


@router.put(
    "/{post_id}",
    response_class=ORJSONResponse,
    summary="Update a post",
    description="Partial update. A new title regenerates the slug.",
    operation_id="posts_update",
)
@cache_busting(
    cache_manager,
    keys=settings.POSTS_INVALIDATION_KEYS,
    key_builder=stale_post_keys,
)
async def update_post(
    request: Request,
    post_id: int,
    _admin: AdminDep,
    changes: Annotated[PostUpdate, Body()],
    repo: PostRepoDep,
) -> dict[str, Any]:
    """
    Update a post.

    Raises
    ------
    BadRequestError
        If the body carries no applicable field.
    ResourceNotFoundError
        If the post does not exist.
    """
    values = changes.changes()
    if not values:
        mssg = "No fields to update"
        raise BadRequestError(mssg)

    existing = await repo.get_by_id(post_id)
    if existing is None:
        raise ResourceNotFoundError(POST_NOT_FOUND)
    old_slug = existing.slug

    updated = await repo.update_post(post_id, values)
    if updated is None:
        raise ResourceNotFoundError(POST_NOT_FOUND)

    request.state.stale_slugs = {old_slug, updated.slug}
    return envelope(data=updated, message="Post updated successfully")


@router.delete(
    "/{post_id}",
    response_class=ORJSONResponse,
    summary="Delete a post",
    description="Deletes the post and its comments.",
    operation_id="posts_delete",
)
@cache_busting(
    cache_manager,
    keys=settings.POSTS_INVALIDATION_KEYS,
    key_builder=stale_post_keys,
)
async def delete_post(
    request: Request,
    post_id: int,
    _admin: AdminDep,
    repo: PostRepoDep,
) -> dict[str, Any]:
    deleted = await repo.delete_post(post_id)
    if deleted is None:
        raise ResourceNotFoundError(POST_NOT_FOUND)
    request.state.stale_slugs = {deleted.slug}
    logger.info(f"Deleted post {post_id}")
    return envelope(message="Post deleted successfully")


@router.post(
    "/{post_id}/views",
    response_class=ORJSONResponse,
    summary="Increment view count",
    description="Fire-and-forget: the counter is updated after the response is sent.",
    operation_id="posts_increment_views",
)
async def increment_views(post_id: int, background_tasks: BackgroundTasks) -> dict[str, Any]:
    background_tasks.add_task(increment_post_views, post_id)
    return envelope(message="View count incremented")
