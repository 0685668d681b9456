"""
Media upload service.

This module provides the service behind the media endpoints: it validates
uploaded images, stores them in the configured blob storage and serves
them back by key.
"""

from io import BytesIO
from logging import getLogger
from secrets import token_hex
from time import time

from fastapi import UploadFile
from PIL import Image, UnidentifiedImageError

from app.configs import file_logger, settings
from app.errors.upload import (
    FileTooLargeError,
    InvalidImageError,
    MediaNotFoundError,
    NoFileProvidedError,
    UnsupportedFileTypeError,
)
from app.schemas.media import MediaUploadData
from app.services.storage import BlobStorage, StoredObject, get_storage_service

logger = file_logger(getLogger(__name__))

EXTENSIONS = {
    "image/jpeg": "jpg",
    "image/png": "png",
    "image/gif": "gif",
    "image/webp": "webp",
}
BYTES_PER_MB = 1024 * 1024


def build_media_key(content_type: str, now: float | None = None) -> str:
    """
    Build a unique storage key for an upload.

    Examples:
        >>> build_media_key("image/png", now=1700000000.123)[:28]
        'uploads/1700000000123-'
    """
    timestamp = int((time() if now is None else now) * 1000)
    extension = EXTENSIONS.get(content_type, "bin")
    return f"uploads/{timestamp}-{token_hex(6)}.{extension}"


class MediaService:
    """
    Service for managing media uploads.

    Handles image validation and storage operations. Type and size are
    checked before the body is read so oversized uploads never reach
    the storage backend.
    """

    def __init__(self, storage: BlobStorage | None = None) -> None:
        """
        Initialize the media service.

        Args:
            storage: Optional storage service instance. If not provided,
                    the default storage service will be used.
        """
        self.storage = storage or get_storage_service()
        self.max_size_bytes = settings.MEDIA_MAX_SIZE_MB * BYTES_PER_MB
        self.allowed_types = settings.MEDIA_ALLOWED_TYPES

    def _validate_type(self, content_type: str | None) -> str:
        if not content_type or content_type not in self.allowed_types:
            raise UnsupportedFileTypeError(
                content_type=content_type or "unknown",
                allowed_types=self.allowed_types,
            )
        return content_type

    def _validate_size(self, size: int | None) -> None:
        if size is not None and size > self.max_size_bytes:
            raise FileTooLargeError(
                max_size_mb=settings.MEDIA_MAX_SIZE_MB,
                actual_size_mb=size / BYTES_PER_MB,
            )

    @staticmethod
    def _validate_image_content(file_data: bytes) -> None:
        try:
            with Image.open(BytesIO(file_data)) as img:
                img.verify()
        except (UnidentifiedImageError, OSError, SyntaxError, ValueError) as e:
            mssg = "File is not a valid image"
            raise InvalidImageError(mssg) from e

    def public_url(self, key: str) -> str:
        """Public URL a stored key is served from."""
        return f"{settings.MEDIA_PUBLIC_BASE_URL.rstrip('/')}/{key}"

    async def upload(self, file: UploadFile | None) -> MediaUploadData:
        """
        Validate and store an uploaded image.

        Args:
            file: The multipart ``file`` part, or None when it was omitted

        Returns:
            MediaUploadData: Key, URL and metadata of the stored file

        Raises:
            NoFileProvidedError: No file part was sent
            UnsupportedFileTypeError: Content type is not an allowed image type
            FileTooLargeError: File exceeds the configured maximum size
            InvalidImageError: Bytes do not decode as an image
        """
        if file is None or not file.filename:
            raise NoFileProvidedError

        content_type = self._validate_type(file.content_type)
        self._validate_size(file.size)

        file_data = await file.read()
        self._validate_size(len(file_data))
        self._validate_image_content(file_data)

        key = build_media_key(content_type)
        await self.storage.put(key, file_data, content_type)
        logger.info(f"Uploaded {file.filename} as {key}")

        return MediaUploadData(
            key=key,
            url=self.public_url(key),
            filename=file.filename,
            size=len(file_data),
            type=content_type,
        )

    async def get(self, key: str) -> StoredObject:
        """Fetch a stored file or raise MediaNotFoundError."""
        stored = await self.storage.get(key)
        if stored is None:
            raise MediaNotFoundError
        return stored

    async def delete(self, key: str) -> None:
        """Delete a stored file. Missing keys are not an error."""
        deleted = await self.storage.delete(key)
        if not deleted:
            logger.info(f"Delete requested for missing key {key}")
