"""Repository layer for database operations."""

from app.repositories.admin_user import AdminUserRepository
from app.repositories.author import AuthorRepository
from app.repositories.category import CategoryRepository
from app.repositories.comment import CommentRepository
from app.repositories.post import PostRepository

__all__ = [
    "AdminUserRepository",
    "AuthorRepository",
    "CategoryRepository",
    "CommentRepository",
    "PostRepository",
]
