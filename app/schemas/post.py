"""Post request and response schemas."""

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from app.utils.helpers import generate_slug, sanitize_input, utcnow

PostStatus = Literal["draft", "published", "archived"]


class PostCreate(BaseModel):
    """Body of ``POST /api/posts``."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "title": "Hello World",
                "content": "<p>First post.</p>",
                "excerpt": "A short intro",
                "category_id": 1,
                "author_id": 1,
                "tags": ["intro"],
                "status": "published",
            },
        },
    )

    title: str | None = None
    content: str | None = None
    excerpt: str | None = None
    featured_image: str | None = None
    category_id: int | None = None
    author_id: int | None = None
    tags: list[str] | None = None
    meta_description: str | None = None
    meta_keywords: str | None = None
    status: PostStatus = "draft"

    @model_validator(mode="after")
    def require_title_and_content(self) -> "PostCreate":
        if not self.title or not self.content:
            mssg = "Title and content are required"
            raise ValueError(mssg)
        return self

    def to_row(self) -> dict[str, Any]:
        """Column values for the new post: slug derived, markup sanitized."""
        data = self.model_dump()
        data["slug"] = generate_slug(data["title"])
        data["content"] = sanitize_input(data["content"])
        data["excerpt"] = sanitize_input(self.excerpt) if self.excerpt else None
        data["tags"] = self.tags or []
        data["published_at"] = utcnow() if self.status == "published" else None
        return data


class PostUpdate(BaseModel):
    """Body of ``PUT /api/posts/{id}``. Every field is optional."""

    title: str | None = None
    content: str | None = None
    excerpt: str | None = None
    featured_image: str | None = None
    category_id: int | None = None
    author_id: int | None = None
    tags: list[str] | None = None
    meta_description: str | None = None
    meta_keywords: str | None = None
    status: PostStatus | None = None

    def changes(self) -> dict[str, Any]:
        """
        Column updates implied by the body, without ``updated_at``.

        Empty title, content and status are ignored. A new title also
        replaces the slug and publishing stamps ``published_at``.
        """
        sent = self.model_dump(exclude_unset=True)
        changes: dict[str, Any] = {}
        if self.title:
            changes["title"] = self.title
            changes["slug"] = generate_slug(self.title)
        if self.content:
            changes["content"] = sanitize_input(self.content)
        if "excerpt" in sent:
            changes["excerpt"] = sanitize_input(self.excerpt) if self.excerpt else None
        for name in ("featured_image", "category_id", "author_id", "meta_description", "meta_keywords"):
            if name in sent:
                changes[name] = sent[name]
        if "tags" in sent:
            changes["tags"] = self.tags or []
        if self.status:
            changes["status"] = self.status
            if self.status == "published":
                changes["published_at"] = utcnow()
        return changes


class PostRead(BaseModel):
    """Post as returned by the API, with joined author and category names."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    slug: str
    content: str
    excerpt: str | None = None
    featured_image: str | None = None
    status: str
    author_id: int | None = None
    category_id: int | None = None
    tags: list[str] = Field(default_factory=list)
    meta_description: str | None = None
    meta_keywords: str | None = None
    view_count: int = 0
    created_at: datetime
    updated_at: datetime
    published_at: datetime | None = None
    category_name: str | None = None
    category_slug: str | None = None
    author_name: str | None = None
    author_avatar: str | None = None
    author_bio: str | None = None
