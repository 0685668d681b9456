# tests/conftest.py
"""Root pytest configuration and shared fixtures."""

import os
from tempfile import mkdtemp

# Settings are read when app modules are first imported, so the test
# environment must be in place before anything from app is imported.
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["REDIS_ENABLED"] = "false"
os.environ["RATE_LIMIT_ENABLED"] = "true"
os.environ["JWT_SECRET"] = "test-jwt-secret"
os.environ["ADMIN_API_KEY"] = "test-admin-key"
os.environ["LOG_TO_FILE"] = "false"
os.environ["PASSWORD_SECURITY_LEVEL"] = "low"
os.environ["ENVIRONMENT"] = "testing"
os.environ["GEMINI_API_KEY"] = ""
os.environ["UPLOADS_DIR"] = mkdtemp(prefix="blog-uploads-")

from collections.abc import AsyncGenerator, Awaitable, Callable  # noqa: E402
from io import BytesIO  # noqa: E402
from pathlib import Path  # noqa: E402
from typing import Any  # noqa: E402
from unittest.mock import AsyncMock  # noqa: E402

from httpx import ASGITransport, AsyncClient  # noqa: E402
from PIL import Image  # noqa: E402
from pytest import fixture  # noqa: E402

from app.clients.ai_client import AiClient  # noqa: E402
from app.db import drop_db, engine, init_db, transaction  # noqa: E402
from app.dependencies import get_storage  # noqa: E402
from app.main import app  # noqa: E402
from app.managers import cache_manager, rate_limiter  # noqa: E402
from app.managers.token_manager import issue_token  # noqa: E402
from app.models import AuthorDB, CategoryDB, CommentDB, PostDB  # noqa: E402
from app.repositories import (  # noqa: E402
    AuthorRepository,
    CategoryRepository,
    CommentRepository,
    PostRepository,
)
from app.services.storage import LocalStorage  # noqa: E402
from app.utils.helpers import utcnow  # noqa: E402

ADMIN_KEY = "test-admin-key"
JWT_SECRET = "test-jwt-secret"


@fixture(autouse=True)
async def reset_store() -> AsyncGenerator[None]:
    """Start every test with an empty cache and fresh rate limit counters."""
    await cache_manager.memory_client.flush_all()
    rate_limiter.enabled = True
    yield
    await cache_manager.memory_client.flush_all()


@fixture
async def db() -> AsyncGenerator[None]:
    """Create the schema on the in-memory database and drop it afterwards."""
    await init_db()
    yield
    await drop_db()
    await engine.dispose()


@fixture
def storage(tmp_path: Path) -> LocalStorage:
    return LocalStorage(tmp_path / "media")


@fixture
def ai_client() -> AsyncMock:
    """Inference client double; set ``generate_text`` return values per test."""
    client = AsyncMock(spec=AiClient)
    client.generate_text.return_value = "stub reply"
    return client


@fixture
async def client(
    db: None,
    storage: LocalStorage,
    ai_client: AsyncMock,
) -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client for testing FastAPI endpoints."""
    app.dependency_overrides[get_storage] = lambda: storage
    app.state.ai_client = ai_client
    async with AsyncClient(
        base_url="http://test",
        transport=ASGITransport(app=app),
    ) as ac:
        yield ac
    app.dependency_overrides.clear()
    app.state.ai_client = None


@fixture
def admin_headers() -> dict[str, str]:
    return {"X-API-Key": ADMIN_KEY}


@fixture
def bearer() -> Callable[..., dict[str, str]]:
    """Build an ``Authorization`` header for a token with the given role."""

    def build(role: str | None = "admin", user_id: int = 1) -> dict[str, str]:
        token = issue_token({"userId": user_id, "email": "admin@example.com", "role": role}, JWT_SECRET)
        return {"Authorization": f"Bearer {token}"}

    return build


@fixture
def make_author(db: None) -> Callable[..., Awaitable[AuthorDB]]:
    async def create(**overrides: Any) -> AuthorDB:  # noqa: ANN401
        data = {"name": "Jane Doe", "email": "jane@example.com", "bio": "Writes things"}
        async with transaction() as session:
            return await AuthorRepository(session).create({**data, **overrides})

    return create


@fixture
def make_category(db: None) -> Callable[..., Awaitable[CategoryDB]]:
    async def create(name: str = "Tech", slug: str | None = None, **overrides: Any) -> CategoryDB:  # noqa: ANN401
        data = {"name": name, "slug": slug or name.lower().replace(" ", "-")}
        async with transaction() as session:
            return await CategoryRepository(session).create({**data, **overrides})

    return create


@fixture
def make_post(db: None) -> Callable[..., Awaitable[PostDB]]:
    """Insert a post row directly. Published posts get ``published_at`` stamped."""

    async def create(
        title: str = "Hello World",
        status: str = "published",
        **overrides: Any,  # noqa: ANN401
    ) -> PostDB:
        data: dict[str, Any] = {
            "title": title,
            "slug": title.lower().replace(" ", "-"),
            "content": f"Body of {title}.",
            "status": status,
            "tags": [],
            "published_at": utcnow() if status == "published" else None,
        }
        async with transaction() as session:
            return await PostRepository(session).create({**data, **overrides})

    return create


@fixture
def make_comment(db: None) -> Callable[..., Awaitable[CommentDB]]:
    async def create(post_id: int, status: str = "approved", **overrides: Any) -> CommentDB:  # noqa: ANN401
        data = {
            "post_id": post_id,
            "author_name": "Reader",
            "author_email": "reader@example.com",
            "content": "Nice post",
            "status": status,
        }
        async with transaction() as session:
            return await CommentRepository(session).create({**data, **overrides})

    return create


@fixture
def make_image() -> Callable[..., bytes]:
    """Encode a small solid image with Pillow."""

    def encode(fmt: str = "PNG", size: tuple[int, int] = (4, 4)) -> bytes:
        buffer = BytesIO()
        Image.new("RGB", size, color=(200, 30, 30)).save(buffer, format=fmt)
        return buffer.getvalue()

    return encode


@fixture
def png_bytes(make_image: Callable[..., bytes]) -> bytes:
    return make_image()
