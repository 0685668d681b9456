"""Comment request and response schemas."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, EmailStr, model_validator

from app.models.comment import COMMENT_STATUSES


class CommentCreate(BaseModel):
    """Body of ``POST /api/posts/{id}/comments``."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "author_name": "Jane",
                "author_email": "jane@example.com",
                "content": "Great read!",
            },
        },
    )

    author_name: str | None = None
    author_email: EmailStr | None = None
    content: str | None = None

    @model_validator(mode="before")
    @classmethod
    def check_fields(cls, data: Any) -> Any:  # noqa: ANN401
        if isinstance(data, dict) and not all(
            data.get(field) for field in ("author_name", "author_email", "content")
        ):
            mssg = "Name, email, and content are required"
            raise ValueError(mssg)
        return data


class CommentStatusUpdate(BaseModel):
    """Body of ``PUT /api/comments/{id}/status``."""

    status: str | None = None

    @model_validator(mode="after")
    def check_status(self) -> "CommentStatusUpdate":
        if self.status not in COMMENT_STATUSES:
            mssg = "Invalid status"
            raise ValueError(mssg)
        return self


class CommentRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    post_id: int
    author_name: str
    author_email: str
    content: str
    status: str
    created_at: datetime
