"""
Storage services package.

This package provides storage backends for media blobs,
with support for the local filesystem and S3-compatible object stores.
"""

from functools import lru_cache

from app.configs.settings import settings
from app.services.storage.base import BlobStorage, StoredObject, compute_etag
from app.services.storage.local import LocalStorage
from app.services.storage.s3 import S3Storage


@lru_cache(maxsize=1)
def get_storage_service() -> BlobStorage:
    """
    Get the configured storage service.

    Returns the appropriate storage implementation based on
    the STORAGE_PROVIDER setting.

    Returns:
        BlobStorage: Configured storage service instance
    """
    if settings.STORAGE_PROVIDER == "s3":
        return S3Storage()
    return LocalStorage()


__all__ = [
    "BlobStorage",
    "LocalStorage",
    "S3Storage",
    "StoredObject",
    "compute_etag",
    "get_storage_service",
]
