# app/dependencies/dependencies.py

"""Request-scoped dependencies: repositories, services, query containers and rate limits."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends, Query, Request, Response
from sqlalchemy.ext.asyncio import AsyncSession

from app.clients.ai_client import AiClient
from app.configs.settings import (
    DEFAULT_COMMENT_PAGE_SIZE,
    DEFAULT_PAGE_SIZE,
    MAX_COMMENT_PAGE_SIZE,
    MAX_PAGE_SIZE,
)
from app.db import get_session
from app.errors.ai import AiNotConfiguredError
from app.errors.rate_limit import RateLimitExceededError
from app.managers import rate_limiter
from app.managers.rate_limiter import get_client_ip
from app.repositories import (
    AdminUserRepository,
    AuthorRepository,
    CategoryRepository,
    CommentRepository,
    PostRepository,
)
from app.services import AuthService, ContentAssistant, MediaService
from app.services.storage import BlobStorage, get_storage_service

SessionDep = Annotated[AsyncSession, Depends(get_session)]


def rate_limit(bucket: str) -> Callable[[Request, Response], Awaitable[None]]:
    """
    Build a dependency that counts the request against ``bucket``.

    Parameters
    ----------
    bucket : str
        Rate limit bucket name, looked up in the limiter's rule table.

    Returns
    -------
    Callable
        Dependency that sets ``X-RateLimit-*`` headers and raises
        ``RateLimitExceededError`` once the bucket is exhausted.

    Notes
    -----
    FastAPI parses the request body before it resolves dependencies, so a
    body it cannot parse (malformed JSON) is answered with 400 before the
    limiter runs and does not count against the bucket.
    """

    async def dependency(request: Request, response: Response) -> None:
        result = await rate_limiter.hit(bucket, get_client_ip(request))
        if not result.allowed:
            raise RateLimitExceededError(bucket, result.limit, result.retry_after)
        response.headers["X-RateLimit-Limit"] = str(result.limit)
        response.headers["X-RateLimit-Remaining"] = str(result.remaining)

    return dependency


def get_post_repository(session: SessionDep) -> PostRepository:
    return PostRepository(session)


def get_category_repository(session: SessionDep) -> CategoryRepository:
    return CategoryRepository(session)


def get_author_repository(session: SessionDep) -> AuthorRepository:
    return AuthorRepository(session)


def get_comment_repository(session: SessionDep) -> CommentRepository:
    return CommentRepository(session)


def get_admin_user_repository(session: SessionDep) -> AdminUserRepository:
    return AdminUserRepository(session)


PostRepoDep = Annotated[PostRepository, Depends(get_post_repository)]
CategoryRepoDep = Annotated[CategoryRepository, Depends(get_category_repository)]
AuthorRepoDep = Annotated[AuthorRepository, Depends(get_author_repository)]
CommentRepoDep = Annotated[CommentRepository, Depends(get_comment_repository)]
AdminUserRepoDep = Annotated[AdminUserRepository, Depends(get_admin_user_repository)]


def get_auth_service(user_repo: AdminUserRepoDep) -> AuthService:
    return AuthService(user_repo)


AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]


@dataclass(frozen=True)
class PostListQuery:
    """
    Query container for post listings and filters.

    Parameters
    ----------
    page : int
        1-based page number.
    limit : int
        Page size, already clamped to the maximum.
    search : str | None
        Optional substring matched against title, content and excerpt.
    category : str | None
        Optional category slug filter.
    author : int | None
        Optional author ID filter.
    """

    page: int = 1
    limit: int = DEFAULT_PAGE_SIZE
    search: str | None = None
    category: str | None = None
    author: int | None = None


def get_post_list_query(
    page: Annotated[int, Query(ge=1, description="Page number")] = 1,
    limit: Annotated[
        int,
        Query(ge=1, description=f"Page size, capped at {MAX_PAGE_SIZE}"),
    ] = DEFAULT_PAGE_SIZE,
    search: Annotated[str | None, Query(description="Optional text filter")] = None,
    category: Annotated[str | None, Query(description="Optional category slug")] = None,
    author: Annotated[int | None, Query(description="Optional author ID")] = None,
) -> PostListQuery:
    """
    Dependency to construct `PostListQuery` from query parameters.

    Returns
    -------
    PostListQuery
        Aggregated query parameters object.
    """
    return PostListQuery(
        page=page,
        limit=min(limit, MAX_PAGE_SIZE),
        search=search or None,
        category=category or None,
        author=author,
    )


PostListQueryDep = Annotated[PostListQuery, Depends(get_post_list_query)]


@dataclass(frozen=True)
class PageQuery:
    page: int = 1
    limit: int = DEFAULT_PAGE_SIZE


def get_comment_page_query(
    page: Annotated[int, Query(ge=1, description="Page number")] = 1,
    limit: Annotated[
        int,
        Query(ge=1, description=f"Page size, capped at {MAX_COMMENT_PAGE_SIZE}"),
    ] = DEFAULT_COMMENT_PAGE_SIZE,
) -> PageQuery:
    return PageQuery(page=page, limit=min(limit, MAX_COMMENT_PAGE_SIZE))


CommentPageQueryDep = Annotated[PageQuery, Depends(get_comment_page_query)]


def get_post_page_query(
    page: Annotated[int, Query(ge=1, description="Page number")] = 1,
    limit: Annotated[
        int,
        Query(ge=1, description=f"Page size, capped at {MAX_PAGE_SIZE}"),
    ] = DEFAULT_PAGE_SIZE,
) -> PageQuery:
    return PageQuery(page=page, limit=min(limit, MAX_PAGE_SIZE))


PostPageQueryDep = Annotated[PageQuery, Depends(get_post_page_query)]


def get_storage() -> BlobStorage:
    return get_storage_service()


StorageDep = Annotated[BlobStorage, Depends(get_storage)]


def get_media_service(storage: StorageDep) -> MediaService:
    return MediaService(storage)


MediaServiceDep = Annotated[MediaService, Depends(get_media_service)]


def get_ai_client(request: Request) -> AiClient:
    """
    Resolve the inference client created at startup.

    Raises
    ------
    AiNotConfiguredError
        When no ``GEMINI_API_KEY`` was configured.
    """
    client: AiClient | None = getattr(request.app.state, "ai_client", None)
    if client is None:
        raise AiNotConfiguredError
    return client


AiDep = Annotated[AiClient, Depends(get_ai_client)]


def get_content_assistant(ai_client: AiDep) -> ContentAssistant:
    return ContentAssistant(ai_client)


ContentAssistantDep = Annotated[ContentAssistant, Depends(get_content_assistant)]
