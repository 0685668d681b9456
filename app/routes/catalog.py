# app/routes/catalog.py

"""Service health and the machine-readable endpoint catalog."""

from typing import Any

from fastapi import APIRouter
from fastapi.responses import ORJSONResponse

from app.configs import settings
from app.managers import cache_manager
from app.utils.helpers import today_str

router = APIRouter(tags=["🩺 Service"])

ENDPOINTS: dict[str, dict[str, str]] = {
    "posts": {
        "GET /api/posts": "List all published posts",
        "GET /api/posts/:slug": "Get post by slug",
        "POST /api/posts": "Create new post (admin)",
        "PUT /api/posts/:id": "Update post (admin)",
        "DELETE /api/posts/:id": "Delete post (admin)",
        "POST /api/posts/:id/views": "Increment view count",
    },
    "categories": {
        "GET /api/categories": "List all categories",
        "GET /api/categories/:slug/posts": "Get posts by category",
        "POST /api/categories": "Create category (admin)",
        "PUT /api/categories/:id": "Update category (admin)",
        "DELETE /api/categories/:id": "Delete category (admin)",
    },
    "authors": {
        "GET /api/authors": "List all authors",
        "GET /api/authors/:id": "Get author details",
        "GET /api/authors/:id/posts": "Get posts by author",
    },
    "comments": {
        "GET /api/posts/:id/comments": "Get comments for post",
        "POST /api/posts/:id/comments": "Add new comment",
        "PUT /api/comments/:id/status": "Update comment status (admin)",
        "DELETE /api/comments/:id": "Delete comment (admin)",
    },
    "media": {
        "POST /api/media/upload": "Upload media file (admin)",
        "GET /api/media/:key": "Get media file",
        "DELETE /api/media/:key": "Delete media file (admin)",
    },
    "search": {
        "GET /api/search": "Search posts",
    },
    "ai": {
        "POST /api/ai/generate-excerpt": "Generate post excerpt (admin)",
        "POST /api/ai/generate-tags": "Generate post tags (admin)",
        "POST /api/ai/content-analysis": "Analyze content quality (admin)",
    },
    "auth": {
        "POST /api/auth/login": "Admin login",
        "POST /api/auth/register": "Admin registration",
    },
}


@router.get(
    "/health",
    response_class=ORJSONResponse,
    summary="Health check",
    operation_id="health",
)
async def health_check() -> dict[str, Any]:
    """Liveness plus the state of the cache backend. Never rate limited."""
    return {
        "status": "healthy",
        "timestamp": today_str(),
        "version": settings.APP_VERSION,
        "cache": await cache_manager.health_check(),
    }


@router.get(
    "/api",
    response_class=ORJSONResponse,
    summary="Endpoint catalog",
    operation_id="catalog",
)
@router.get("/api/", include_in_schema=False)
async def catalog() -> dict[str, Any]:
    return {"name": settings.APP_NAME, "version": settings.APP_VERSION, "endpoints": ENDPOINTS}
