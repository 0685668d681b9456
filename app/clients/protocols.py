"""Protocol definitions for key-value store clients."""

from collections.abc import Awaitable
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class CacheClientProtocol(Protocol):
    """
    Operations the cache manager and the rate limiter need from a store.

    RedisClient and MemoryClient both conform. Every entry may carry its own
    expiry; ``ttl`` follows the Redis convention (-2 missing, -1 no expiry).
    """

    def get(self, key: str) -> Awaitable[str | None]:
        """Get a value from the store."""
        ...

    def set(self, key: str, value: str, ex: int | None = None) -> Awaitable[bool]:
        """Set a value, replacing any previous expiry with ``ex`` seconds."""
        ...

    def delete(self, *keys: str) -> Awaitable[int]:
        """Delete keys and return how many existed."""
        ...

    def exists(self, *keys: str) -> Awaitable[int]:
        """Count how many of the keys exist."""
        ...

    def ttl(self, key: str) -> Awaitable[int]:
        """Remaining lifetime of a key in seconds."""
        ...

    def ping(self) -> Awaitable[bool]:
        """Check the store is reachable."""
        ...

    def info(self) -> Awaitable[dict[str, Any]]:
        """Backend description for health and statistics output."""
        ...
