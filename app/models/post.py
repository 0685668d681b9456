"""Post database model using SQLModel."""

from datetime import datetime
from typing import cast

from pydantic import ConfigDict
from sqlalchemy import DateTime, Index, Text
from sqlalchemy.orm import declared_attr
from sqlmodel import Column, Field, ForeignKey, Integer, SQLModel, String

from app.models._types import JSONType
from app.utils.helpers import utcnow

POST_STATUSES = ("draft", "published", "archived")


class PostDB(SQLModel, table=True):
    """
    Blog post row.

    Only ``published`` posts are visible on the public read endpoints.
    ``published_at`` is stamped whenever a post is created or updated with
    that status.
    """

    __tablename__ = cast("declared_attr[str]", "posts")

    __table_args__ = (
        Index("ix_posts_status_published", "status", "published_at"),
    )

    id: int | None = Field(default=None, primary_key=True)

    title: str = Field(sa_column=Column(String(255), nullable=False))
    slug: str = Field(
        sa_column=Column(String(255), unique=True, nullable=False, index=True),
        description="URL-friendly slug (unique)",
    )
    content: str = Field(sa_column=Column(Text, nullable=False))
    excerpt: str | None = Field(default=None, sa_column=Column(Text))
    featured_image: str | None = Field(default=None, sa_column=Column(String(1024)))
    status: str = Field(
        default="draft",
        sa_column=Column(String(20), nullable=False, index=True, default="draft"),
        description="Post status (draft, published, archived)",
    )

    author_id: int | None = Field(
        default=None,
        sa_column=Column(
            "author_id",
            Integer,
            ForeignKey("authors.id", ondelete="SET NULL"),
            index=True,
        ),
    )
    category_id: int | None = Field(
        default=None,
        sa_column=Column(
            "category_id",
            Integer,
            ForeignKey("categories.id", ondelete="SET NULL"),
            index=True,
        ),
    )

    tags: list[str] = Field(default_factory=list, sa_column=Column(JSONType, nullable=False))
    meta_description: str | None = Field(default=None, sa_column=Column(Text))
    meta_keywords: str | None = Field(default=None, sa_column=Column(Text))
    view_count: int = Field(default=0, nullable=False)

    created_at: datetime = Field(
        default_factory=utcnow,
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )
    updated_at: datetime = Field(
        default_factory=utcnow,
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )
    published_at: datetime | None = Field(
        default=None,
        sa_column=Column(DateTime(timezone=True), index=True),
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": 1,
                "title": "Hello World",
                "slug": "hello-world",
                "content": "First post.",
                "status": "published",
                "tags": ["intro"],
                "view_count": 0,
            },
        },
    )
