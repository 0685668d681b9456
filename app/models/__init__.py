"""Database models for the application."""

from app.models.admin_user import AdminUserDB
from app.models.author import AuthorDB
from app.models.category import CategoryDB
from app.models.comment import COMMENT_STATUSES, CommentDB
from app.models.post import POST_STATUSES, PostDB

__all__ = [
    "COMMENT_STATUSES",
    "POST_STATUSES",
    "AdminUserDB",
    "AuthorDB",
    "CategoryDB",
    "CommentDB",
    "PostDB",
]
