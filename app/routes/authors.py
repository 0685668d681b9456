# app/routes/authors.py

"""
Author Routes.

Read-only author endpoints: the cached author list with published post
counts, a single author and that author's published posts.
"""

from typing import Any

from fastapi import APIRouter, Depends
from fastapi.responses import ORJSONResponse

from app.configs import settings
from app.decorators import cached
from app.dependencies import AuthorRepoDep, PostPageQueryDep, PostRepoDep, rate_limit
from app.errors import ResourceNotFoundError
from app.managers import cache_manager
from app.schemas import Pagination, envelope
from app.utils.cache_keys import authors_list_key

router = APIRouter(
    prefix="/api/authors",
    tags=["✍️ Authors"],
    dependencies=[Depends(rate_limit("authors"))],
)


@router.get(
    "",
    response_class=ORJSONResponse,
    summary="List authors",
    operation_id="authors_list",
)
@cached(
    cache_manager,
    ttl=settings.CACHE_TTL_AUTHORS,
    key_builder=lambda **_: authors_list_key(),
)
async def list_authors(repo: AuthorRepoDep) -> dict[str, Any]:
    return envelope(data=await repo.list_with_counts())


@router.get(
    "/{author_id}",
    response_class=ORJSONResponse,
    summary="Get author by ID",
    responses={
        404: {
            "description": "Not found",
            "content": {"application/json": {"example": {"success": False, "error": "Author not found"}}},
        },
    },
    operation_id="authors_get",
)
async def get_author(author_id: int, repo: AuthorRepoDep) -> dict[str, Any]:
    author = await repo.get_with_count(author_id)
    if author is None:
        mssg = "Author not found"
        raise ResourceNotFoundError(mssg)
    return envelope(data=author)


@router.get(
    "/{author_id}/posts",
    response_class=ORJSONResponse,
    summary="List posts by author",
    operation_id="authors_posts",
)
async def list_author_posts(
    author_id: int,
    query: PostPageQueryDep,
    repo: PostRepoDep,
) -> dict[str, Any]:
    posts, total = await repo.list_published(query.page, query.limit, author=author_id)
    return envelope(data=posts, pagination=Pagination.build(query.page, query.limit, total))
