# app/routes/search.py

"""
Search Route.

Relevance-ranked search over published posts. A title match outranks an
excerpt match, which outranks a content match; tag-only matches come last.
Results are cached under ``search:<q>:<page>:<limit>:<category>:<author>``.
"""

from typing import Annotated, Any

from fastapi import APIRouter, Depends, Query
from fastapi.responses import ORJSONResponse

from app.configs import settings
from app.decorators import cached
from app.dependencies import PostListQueryDep, PostRepoDep, rate_limit
from app.errors import BadRequestError
from app.managers import cache_manager
from app.schemas import Pagination, envelope
from app.utils.cache_keys import search_key

router = APIRouter(
    prefix="/api/search",
    tags=["🔎 Search"],
    dependencies=[Depends(rate_limit("search"))],
)


def require_query(
    q: Annotated[str | None, Query(description="Search text")] = None,
) -> str:
    if not q:
        mssg = "Search query is required"
        raise BadRequestError(mssg)
    return q


@router.get(
    "",
    response_class=ORJSONResponse,
    summary="Search published posts",
    responses={
        400: {
            "description": "Bad request",
            "content": {
                "application/json": {"example": {"success": False, "error": "Search query is required"}},
            },
        },
    },
    operation_id="search_posts",
)
@cached(
    cache_manager,
    ttl=settings.CACHE_TTL_SEARCH,
    key_builder=lambda q, query, **_: search_key(
        q,
        query.page,
        query.limit,
        query.category,
        query.author,
    ),
)
async def search_posts(
    q: Annotated[str, Depends(require_query)],
    query: PostListQueryDep,
    repo: PostRepoDep,
) -> dict[str, Any]:
    """
    Search published posts.

    Parameters
    ----------
    q : str
        Required search text.
    query : PostListQuery
        Page, clamped limit and category/author filters. ``search`` is unused.
    repo : PostRepository
        Repository dependency.
    """
    posts, total = await repo.search(
        q,
        query.page,
        query.limit,
        category=query.category,
        author=query.author,
    )
    return envelope(data=posts, pagination=Pagination.build(query.page, query.limit, total))
