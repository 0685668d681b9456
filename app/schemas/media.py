"""Media upload response schema."""

from pydantic import BaseModel


class MediaUploadData(BaseModel):
    """Where an uploaded file was stored and how to fetch it."""

    key: str
    url: str
    filename: str
    size: int
    type: str
