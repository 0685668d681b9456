"""Admin user database model."""

from datetime import datetime
from typing import cast

from sqlalchemy import DateTime
from sqlalchemy.orm import declared_attr
from sqlmodel import Column, Field, SQLModel, String

from app.configs import ADMIN_ROLE
from app.utils.helpers import utcnow


class AdminUserDB(SQLModel, table=True):
    """Account allowed to log in and receive bearer tokens."""

    __tablename__ = cast("declared_attr[str]", "admin_users")

    id: int | None = Field(default=None, primary_key=True)
    email: str = Field(sa_column=Column(String(255), unique=True, nullable=False, index=True))
    password_hash: str = Field(sa_column=Column(String(255), nullable=False))
    api_key: str | None = Field(default=None, sa_column=Column(String(64), unique=True))
    role: str = Field(
        default=ADMIN_ROLE,
        sa_column=Column(String(20), nullable=False, default=ADMIN_ROLE),
    )
    created_at: datetime = Field(
        default_factory=utcnow,
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )
