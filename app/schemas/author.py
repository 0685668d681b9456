"""Author response schema."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class AuthorRead(BaseModel):
    """Author with the number of published posts."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    bio: str | None = None
    avatar_url: str | None = None
    social_links: dict[str, str] = Field(default_factory=dict)
    created_at: datetime
    post_count: int = 0
