"""
Base storage protocol for media blob operations.

This module defines the abstract interface for storage backends,
allowing for different implementations (local filesystem, S3-compatible).
"""

from abc import abstractmethod
from dataclasses import dataclass
from hashlib import md5
from typing import Protocol


@dataclass(frozen=True, slots=True)
class StoredObject:
    """A blob read back from storage together with its metadata."""

    key: str
    body: bytes
    content_type: str
    etag: str
    size: int


def compute_etag(body: bytes) -> str:
    """Quoted hex digest used as the HTTP entity tag of a blob."""
    return f'"{md5(body, usedforsecurity=False).hexdigest()}"'


class BlobStorage(Protocol):
    """
    Protocol defining the interface for blob storage services.

    All storage implementations must implement these methods
    to ensure consistent behavior across different backends.
    """

    @abstractmethod
    async def put(self, key: str, body: bytes, content_type: str) -> None:
        """
        Store a blob under a key, overwriting any previous value.

        Args:
            key: Object key (e.g. ``uploads/1700000000000-ab12cd.png``)
            body: Raw bytes
            content_type: MIME type recorded with the object
        """
        ...

    @abstractmethod
    async def get(self, key: str) -> StoredObject | None:
        """
        Fetch a blob.

        Args:
            key: Object key

        Returns:
            StoredObject | None: The blob, or None if nothing is stored under the key
        """
        ...

    @abstractmethod
    async def delete(self, key: str) -> bool:
        """
        Delete a blob.

        Args:
            key: Object key

        Returns:
            bool: True if an object was removed, False if it did not exist
        """
        ...
