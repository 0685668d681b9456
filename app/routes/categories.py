# app/routes/categories.py

"""
Category Routes.

Public category listing (with published post counts) and per-category post
pages, plus admin CRUD. The listing is cached under ``categories:all`` and
every mutation deletes it.
"""

from logging import getLogger
from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends
from fastapi.responses import ORJSONResponse
from starlette.status import HTTP_201_CREATED

from app.auth import AdminDep
from app.configs import file_logger, settings
from app.decorators import cache_busting, cached
from app.dependencies import CategoryRepoDep, PostPageQueryDep, PostRepoDep, rate_limit
from app.errors import BadRequestError, ResourceNotFoundError
from app.managers import cache_manager
from app.schemas import CategoryCreate, CategoryRead, CategoryUpdate, Pagination, envelope
from app.utils.cache_keys import categories_list_key

router = APIRouter(
    prefix="/api/categories",
    tags=["🗂️ Categories"],
    dependencies=[Depends(rate_limit("categories"))],
)

logger = file_logger(getLogger(__name__))

CATEGORY_NOT_FOUND = "Category not found"


@router.get(
    "",
    response_class=ORJSONResponse,
    summary="List categories",
    description="All categories ordered by name, each with its published post count.",
    operation_id="categories_list",
)
@cached(
    cache_manager,
    ttl=settings.CACHE_TTL_CATEGORIES,
    key_builder=lambda **_: categories_list_key(),
)
async def list_categories(repo: CategoryRepoDep) -> dict[str, Any]:
    return envelope(data=await repo.list_with_counts())


@router.get(
    "/{slug}/posts",
    response_class=ORJSONResponse,
    summary="List posts in a category",
    operation_id="categories_posts",
)
async def list_category_posts(
    slug: str,
    query: PostPageQueryDep,
    repo: PostRepoDep,
) -> dict[str, Any]:
    """
    Published posts of one category, newest first.

    An unknown slug yields an empty page rather than 404.
    """
    posts, total = await repo.list_published(query.page, query.limit, category=slug)
    return envelope(data=posts, pagination=Pagination.build(query.page, query.limit, total))


@router.post(
    "",
    response_class=ORJSONResponse,
    status_code=HTTP_201_CREATED,
    summary="Create a category",
    responses={
        400: {
            "description": "Bad request",
            "content": {"application/json": {"example": {"success": False, "error": "Name is required"}}},
        },
    },
    operation_id="categories_create",
)
@cache_busting(cache_manager, keys=settings.CATEGORIES_INVALIDATION_KEYS)
async def create_category(
    _admin: AdminDep,
    category: Annotated[CategoryCreate, Body()],
    repo: CategoryRepoDep,
) -> dict[str, Any]:
    created = await repo.create(category.to_row())
    logger.info(f"Created category {created.id} ({created.slug})")
    return envelope(
        data=CategoryRead.model_validate(created),
        message="Category created successfully",
    )


@router.put(
    "/{category_id}",
    response_class=ORJSONResponse,
    summary="Update a category",
    description="Name (which regenerates the slug) and/or description.",
    operation_id="categories_update",
)
@cache_busting(cache_manager, keys=settings.CATEGORIES_INVALIDATION_KEYS)
async def update_category(
    category_id: int,
    _admin: AdminDep,
    changes: Annotated[CategoryUpdate, Body()],
    repo: CategoryRepoDep,
) -> dict[str, Any]:
    """
    Update a category.

    Raises
    ------
    BadRequestError
        If neither name nor description was sent.
    ResourceNotFoundError
        If the category does not exist.
    """
    values = changes.changes()
    if not values:
        mssg = "No fields to update"
        raise BadRequestError(mssg)

    updated = await repo.update(category_id, values)
    if updated is None:
        raise ResourceNotFoundError(CATEGORY_NOT_FOUND)
    return envelope(
        data=CategoryRead.model_validate(updated),
        message="Category updated successfully",
    )


@router.delete(
    "/{category_id}",
    response_class=ORJSONResponse,
    summary="Delete a category",
    description="Posts in the category keep existing with no category.",
    operation_id="categories_delete",
)
@cache_busting(cache_manager, keys=settings.CATEGORIES_INVALIDATION_KEYS)
async def delete_category(
    category_id: int,
    _admin: AdminDep,
    repo: CategoryRepoDep,
) -> dict[str, Any]:
    if not await repo.delete(category_id):
        raise ResourceNotFoundError(CATEGORY_NOT_FOUND)
    logger.info(f"Deleted category {category_id}")
    return envelope(message="Category deleted successfully")
