from app.routes.ai import router as ai_router
from app.routes.auth import router as auth_router
from app.routes.authors import router as authors_router
from app.routes.catalog import router as catalog_router
from app.routes.categories import router as categories_router
from app.routes.comments import router as comments_router
from app.routes.media import router as media_router
from app.routes.posts import router as posts_router
from app.routes.search import router as search_router

__all__ = [
    "ai_router",
    "auth_router",
    "authors_router",
    "catalog_router",
    "categories_router",
    "comments_router",
    "media_router",
    "posts_router",
    "search_router",
]
