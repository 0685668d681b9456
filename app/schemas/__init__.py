from app.schemas.ai import (
    AnalysisData,
    ContentMetrics,
    ContentRequest,
    ExcerptData,
    TagsData,
    TagsRequest,
)
from app.schemas.auth import (
    AuthUser,
    LoginData,
    LoginRequest,
    Principal,
    RegisterData,
    RegisteredUser,
    RegisterRequest,
)
from app.schemas.author import AuthorRead
from app.schemas.category import CategoryCreate, CategoryRead, CategoryUpdate
from app.schemas.comment import CommentCreate, CommentRead, CommentStatusUpdate
from app.schemas.envelope import Pagination, envelope
from app.schemas.media import MediaUploadData
from app.schemas.post import PostCreate, PostRead, PostUpdate

__all__ = [
    "AnalysisData",
    "AuthUser",
    "AuthorRead",
    "CategoryCreate",
    "CategoryRead",
    "CategoryUpdate",
    "CommentCreate",
    "CommentRead",
    "CommentStatusUpdate",
    "ContentMetrics",
    "ContentRequest",
    "ExcerptData",
    "LoginData",
    "LoginRequest",
    "MediaUploadData",
    "Pagination",
    "PostCreate",
    "PostRead",
    "PostUpdate",
    "Principal",
    "RegisterData",
    "RegisterRequest",
    "RegisteredUser",
    "TagsData",
    "TagsRequest",
    "envelope",
]
