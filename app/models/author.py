"""Author database model."""

from datetime import datetime
from typing import cast

from sqlalchemy import DateTime, Text
from sqlalchemy.orm import declared_attr
from sqlmodel import Column, Field, SQLModel, String

from app.models._types import JSONType
from app.utils.helpers import utcnow


class AuthorDB(SQLModel, table=True):
    """Post author. Authors are managed outside the API and only read here."""

    __tablename__ = cast("declared_attr[str]", "authors")

    id: int | None = Field(default=None, primary_key=True)
    name: str = Field(sa_column=Column(String(255), nullable=False))
    email: str = Field(sa_column=Column(String(255), unique=True, nullable=False))
    bio: str | None = Field(default=None, sa_column=Column(Text))
    avatar_url: str | None = Field(default=None, sa_column=Column(String(1024)))
    social_links: dict[str, str] = Field(
        default_factory=dict,
        sa_column=Column(JSONType, nullable=False),
    )
    created_at: datetime = Field(
        default_factory=utcnow,
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )
