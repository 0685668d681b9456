# app/routes/comments.py

"""
Comment Routes.

Readers list approved comments and submit new ones, which land in moderation
as ``pending`` (or ``spam`` when they trip the spam markers). Admins change
a comment's status or delete it.
"""

from logging import getLogger
from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends
from fastapi.responses import ORJSONResponse
from starlette.status import HTTP_201_CREATED

from app.auth import AdminDep
from app.configs import file_logger, settings
from app.dependencies import CommentPageQueryDep, CommentRepoDep, PostRepoDep, rate_limit
from app.errors import ResourceNotFoundError
from app.schemas import CommentCreate, CommentRead, CommentStatusUpdate, Pagination, envelope
from app.utils.helpers import sanitize_input

router = APIRouter(
    prefix="/api",
    tags=["💬 Comments"],
    dependencies=[Depends(rate_limit("comments"))],
)

logger = file_logger(getLogger(__name__))

COMMENT_NOT_FOUND = "Comment not found"


def is_spam(content: str, markers: list[str] | None = None) -> bool:
    """
    Flag content containing any spam marker, case-insensitively.

    Examples:
        >>> is_spam("Visit https://example.com", ["http://", "https://"])
        True
        >>> is_spam("Lovely post", ["spam"])
        False
    """
    lowered = content.lower()
    return any(marker.lower() in lowered for marker in markers or settings.SPAM_MARKERS)


@router.get(
    "/posts/{post_id}/comments",
    response_class=ORJSONResponse,
    summary="List approved comments of a post",
    operation_id="comments_list",
)
async def list_comments(
    post_id: int,
    query: CommentPageQueryDep,
    repo: CommentRepoDep,
) -> dict[str, Any]:
    comments, total = await repo.list_approved(post_id, query.page, query.limit)
    return envelope(data=comments, pagination=Pagination.build(query.page, query.limit, total))


@router.post(
    "/posts/{post_id}/comments",
    response_class=ORJSONResponse,
    status_code=HTTP_201_CREATED,
    summary="Submit a comment",
    description="New comments wait for moderation. Links and spam markers mark them as spam.",
    responses={
        400: {
            "description": "Bad request",
            "content": {
                "application/json": {
                    "example": {"success": False, "error": "Name, email, and content are required"},
                },
            },
        },
        404: {
            "description": "Not found",
            "content": {"application/json": {"example": {"success": False, "error": "Post not found"}}},
        },
    },
    operation_id="comments_create",
)
async def create_comment(
    post_id: int,
    comment: Annotated[CommentCreate, Body()],
    repo: CommentRepoDep,
    posts: PostRepoDep,
) -> dict[str, Any]:
    """
    Submit a comment on a post.

    Raises
    ------
    ResourceNotFoundError
        If the post does not exist.
    """
    if not await posts.exists(post_id):
        mssg = "Post not found"
        raise ResourceNotFoundError(mssg)

    content = comment.content or ""
    status = "spam" if is_spam(content) else "pending"
    created = await repo.create(
        {
            "post_id": post_id,
            "author_name": comment.author_name,
            "author_email": comment.author_email,
            "content": sanitize_input(content),
            "status": status,
        },
    )
    logger.info(f"Comment {created.id} on post {post_id} stored as {status}")
    return envelope(data=CommentRead.model_validate(created), message="Comment submitted for review")


@router.put(
    "/comments/{comment_id}/status",
    response_class=ORJSONResponse,
    summary="Moderate a comment",
    responses={
        400: {
            "description": "Bad request",
            "content": {"application/json": {"example": {"success": False, "error": "Invalid status"}}},
        },
    },
    operation_id="comments_update_status",
)
async def update_comment_status(
    comment_id: int,
    _admin: AdminDep,
    payload: Annotated[CommentStatusUpdate, Body()],
    repo: CommentRepoDep,
) -> dict[str, Any]:
    updated = await repo.update(comment_id, {"status": payload.status})
    if updated is None:
        raise ResourceNotFoundError(COMMENT_NOT_FOUND)
    return envelope(data=CommentRead.model_validate(updated), message="Comment status updated")


@router.delete(
    "/comments/{comment_id}",
    response_class=ORJSONResponse,
    summary="Delete a comment",
    operation_id="comments_delete",
)
async def delete_comment(
    comment_id: int,
    _admin: AdminDep,
    repo: CommentRepoDep,
) -> dict[str, Any]:
    if not await repo.delete(comment_id):
        raise ResourceNotFoundError(COMMENT_NOT_FOUND)
    return envelope(message="Comment deleted successfully")
