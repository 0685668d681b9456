"""Response envelope shared by every JSON endpoint."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic_core import to_jsonable_python

from app.utils.helpers import total_pages


class Pagination(BaseModel):
    """Page metadata returned with list responses."""

    model_config = ConfigDict(populate_by_name=True)

    page: int
    limit: int
    total: int
    total_pages: int = Field(serialization_alias="totalPages")

    @classmethod
    def build(cls, page: int, limit: int, total: int) -> "Pagination":
        return cls(page=page, limit=limit, total=total, total_pages=total_pages(total, limit))


def envelope(
    data: Any = None,  # noqa: ANN401
    message: str | None = None,
    pagination: Pagination | None = None,
) -> dict[str, Any]:
    """
    Build a success envelope ``{success, data?, message?, pagination?}``.

    The result is reduced to plain JSON types so it can be cached and
    replayed byte for byte.

    Examples:
        >>> envelope(message="Post deleted successfully")
        {'success': True, 'message': 'Post deleted successfully'}
    """
    body: dict[str, Any] = {"success": True}
    if data is not None:
        body["data"] = data
    if message is not None:
        body["message"] = message
    if pagination is not None:
        body["pagination"] = pagination
    return to_jsonable_python(body, by_alias=True)
