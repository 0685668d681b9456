# app/dependencies/__init__.py

from app.dependencies.dependencies import (
    AdminUserRepoDep,
    AiDep,
    AuthorRepoDep,
    AuthServiceDep,
    CategoryRepoDep,
    CommentPageQueryDep,
    CommentRepoDep,
    ContentAssistantDep,
    MediaServiceDep,
    PageQuery,
    PostListQuery,
    PostListQueryDep,
    PostPageQueryDep,
    PostRepoDep,
    SessionDep,
    StorageDep,
    get_ai_client,
    get_storage,
    rate_limit,
)

__all__ = [
    "AdminUserRepoDep",
    "AiDep",
    "AuthServiceDep",
    "AuthorRepoDep",
    "CategoryRepoDep",
    "CommentPageQueryDep",
    "CommentRepoDep",
    "ContentAssistantDep",
    "MediaServiceDep",
    "PageQuery",
    "PostListQuery",
    "PostListQueryDep",
    "PostPageQueryDep",
    "PostRepoDep",
    "SessionDep",
    "StorageDep",
    "get_ai_client",
    "get_storage",
    "rate_limit",
]
