"""
Local filesystem storage implementation.

This module provides a local storage backend for development
and testing purposes. Files are stored in the local filesystem.
"""

from logging import getLogger
from mimetypes import guess_type
from pathlib import Path

import aiofiles
import aiofiles.os

from app.configs import file_logger, settings
from app.errors.upload import StorageError
from app.services.storage.base import StoredObject, compute_etag

logger = file_logger(getLogger(__name__))

CONTENT_TYPE_SUFFIX = ".content-type"


class LocalStorage:
    """
    Local filesystem storage implementation.

    Stores blobs under the configured uploads directory, using the object
    key as a relative path. The content type is kept in a sidecar file.
    """

    def __init__(self, root: Path | None = None) -> None:
        self.root = (root or settings.UPLOADS_DIR).resolve()
        self.root.mkdir(parents=True, exist_ok=True)

    def _path(self, key: str) -> Path:
        path = (self.root / key.lstrip("/")).resolve()
        if not path.is_relative_to(self.root) or path == self.root:
            mssg = f"Invalid storage key: {key}"
            raise StorageError(mssg)
        return path

    @staticmethod
    def _meta_path(path: Path) -> Path:
        return path.with_name(path.name + CONTENT_TYPE_SUFFIX)

    async def put(self, key: str, body: bytes, content_type: str) -> None:
        path = self._path(key)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            async with aiofiles.open(path, "wb") as f:
                await f.write(body)
            async with aiofiles.open(self._meta_path(path), "w") as f:
                await f.write(content_type)
        except OSError as e:
            logger.exception(f"Failed to write {key}")
            raise StorageError from e
        logger.info(f"Stored {key} ({len(body)} bytes)")

    async def get(self, key: str) -> StoredObject | None:
        path = self._path(key)
        if not path.is_file():
            return None
        try:
            async with aiofiles.open(path, "rb") as f:
                body = await f.read()
            meta = self._meta_path(path)
            if meta.is_file():
                async with aiofiles.open(meta) as f:
                    content_type = (await f.read()).strip()
            else:
                content_type = guess_type(path.name)[0] or "application/octet-stream"
        except OSError as e:
            logger.exception(f"Failed to read {key}")
            raise StorageError from e
        return StoredObject(
            key=key,
            body=body,
            content_type=content_type,
            etag=compute_etag(body),
            size=len(body),
        )

    async def delete(self, key: str) -> bool:
        path = self._path(key)
        if not path.is_file():
            return False
        try:
            await aiofiles.os.remove(path)
            meta = self._meta_path(path)
            if meta.is_file():
                await aiofiles.os.remove(meta)
        except OSError as e:
            logger.exception(f"Failed to delete {key}")
            raise StorageError from e
        logger.info(f"Deleted {key}")
        return True
