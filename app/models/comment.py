"""Comment database model."""

from datetime import datetime
from typing import cast

from sqlalchemy import DateTime, Index, Text
from sqlalchemy.orm import declared_attr
from sqlmodel import Column, Field, ForeignKey, Integer, SQLModel, String

from app.utils.helpers import utcnow

COMMENT_STATUSES = ("pending", "approved", "spam")


class CommentDB(SQLModel, table=True):
    """Reader comment. New comments wait in ``pending`` (or ``spam``) for moderation."""

    __tablename__ = cast("declared_attr[str]", "comments")

    __table_args__ = (Index("ix_comments_post_status", "post_id", "status"),)

    id: int | None = Field(default=None, primary_key=True)
    post_id: int = Field(
        sa_column=Column(
            "post_id",
            Integer,
            ForeignKey("posts.id", ondelete="CASCADE"),
            nullable=False,
        ),
    )
    author_name: str = Field(sa_column=Column(String(255), nullable=False))
    author_email: str = Field(sa_column=Column(String(255), nullable=False))
    content: str = Field(sa_column=Column(Text, nullable=False))
    status: str = Field(
        default="pending",
        sa_column=Column(String(20), nullable=False, default="pending"),
    )
    created_at: datetime = Field(
        default_factory=utcnow,
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )
