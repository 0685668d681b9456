"""
Upload-related error classes.

This module defines custom exceptions for media upload operations,
including file validation and storage errors.
"""

from starlette.status import (
    HTTP_400_BAD_REQUEST,
    HTTP_404_NOT_FOUND,
    HTTP_500_INTERNAL_SERVER_ERROR,
)

from app.errors.base import BaseAppError, create_exception_handler
from app.monitoring import get_logger

logger = get_logger(__name__)


class UploadError(BaseAppError):
    """Base exception for upload-related errors."""

    def __init__(
        self,
        detail: str = "Failed to upload file",
        status_code: int = HTTP_500_INTERNAL_SERVER_ERROR,
    ) -> None:
        super().__init__(detail=detail, status_code=status_code)


class NoFileProvidedError(UploadError):
    """Exception raised when the multipart body has no file part."""

    def __init__(self) -> None:
        super().__init__(detail="No file provided", status_code=HTTP_400_BAD_REQUEST)


class FileTooLargeError(UploadError):
    """Exception raised when an uploaded file exceeds the size limit."""

    def __init__(
        self,
        max_size_mb: int = 5,
        actual_size_mb: float | None = None,
    ) -> None:
        super().__init__(
            detail=f"File too large. Maximum size is {max_size_mb}MB",
            status_code=HTTP_400_BAD_REQUEST,
        )
        self.max_size_mb = max_size_mb
        self.actual_size_mb = actual_size_mb


class UnsupportedFileTypeError(UploadError):
    """Exception raised when an uploaded file type is not allowed."""

    def __init__(
        self,
        content_type: str,
        allowed_types: list[str] | None = None,
    ) -> None:
        super().__init__(
            detail="Invalid file type. Only JPEG, PNG, GIF, and WebP are allowed",
            status_code=HTTP_400_BAD_REQUEST,
        )
        self.content_type = content_type
        self.allowed_types = allowed_types or []


class InvalidImageError(UploadError):
    """Exception raised when uploaded bytes do not decode as an image."""

    def __init__(
        self,
        detail: str = "File is not a valid image",
    ) -> None:
        super().__init__(detail=detail, status_code=HTTP_400_BAD_REQUEST)


class MediaNotFoundError(UploadError):
    """Exception raised when no stored object exists under a key."""

    def __init__(self) -> None:
        super().__init__(detail="File not found", status_code=HTTP_404_NOT_FOUND)


class StorageError(UploadError):
    """Exception raised when the blob store rejects an operation."""

    def __init__(self, detail: str = "Storage operation failed") -> None:
        super().__init__(detail=detail, status_code=HTTP_500_INTERNAL_SERVER_ERROR)


upload_exception_handler = create_exception_handler(logger)
