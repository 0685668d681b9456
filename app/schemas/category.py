"""Category request and response schemas."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, model_validator

from app.utils.helpers import generate_slug


class CategoryCreate(BaseModel):
    """Body of ``POST /api/categories``."""

    name: str | None = None
    description: str | None = None

    @model_validator(mode="after")
    def require_name(self) -> "CategoryCreate":
        if not self.name:
            mssg = "Name is required"
            raise ValueError(mssg)
        return self

    def to_row(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "slug": generate_slug(self.name or ""),
            "description": self.description,
        }


class CategoryUpdate(BaseModel):
    """Body of ``PUT /api/categories/{id}``."""

    name: str | None = None
    description: str | None = None

    def changes(self) -> dict[str, Any]:
        changes: dict[str, Any] = {}
        if self.name:
            changes["name"] = self.name
            changes["slug"] = generate_slug(self.name)
        if "description" in self.model_fields_set:
            changes["description"] = self.description
        return changes


class CategoryRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    slug: str
    description: str | None = None
    created_at: datetime
    post_count: int | None = None
