# app/managers/cache_manager.py
"""Cache manager over Redis with an in-memory fallback."""

from logging import DEBUG, getLogger
from typing import Any

from redis.exceptions import ConnectionError as RedisConnectionError

from app.clients.memory_client import MemoryClient
from app.clients.protocols import CacheClientProtocol
from app.clients.redis_client import RedisClient
from app.configs import CacheConfig, RedisCacheConfig, file_logger, settings
from app.errors import (
    BASE_EXCEPTION,
    CacheDecompressionError,
    CacheDeserializationError,
    CacheKeyError,
    CacheSerializationError,
)
from app.monitoring.prometheus import metrics
from app.utils.cache_serializer import (
    compress,
    decompress,
    deserialize,
    do_compress,
    serialize,
)

logger = file_logger(getLogger(__name__))

STORE_ERRORS = (RedisConnectionError, *BASE_EXCEPTION)


class CacheManager:
    """
    Cache-aside storage for response envelopes.

    Values are serialized with orjson, gzip-compressed above a size
    threshold and stored under ``<key_prefix>:<key>`` with a TTL capped by
    ``CacheConfig.max_ttl``. The in-memory client is used until
    :meth:`initialize` succeeds in reaching Redis, so the manager works in
    tests and scripts without a lifespan.
    """

    def __init__(
        self,
        cache_config: CacheConfig | None = None,
        redis_config: RedisCacheConfig | None = None,
        *,
        redis_enabled: bool = settings.REDIS_ENABLED,
    ) -> None:
        self.cache_config = cache_config or CacheConfig()
        self.redis_client = RedisClient(redis_config)
        self.memory_client = MemoryClient()
        self._client: CacheClientProtocol = self.memory_client
        self._redis_enabled = redis_enabled
        self.is_redis_available = False

    @property
    def client(self) -> CacheClientProtocol:
        """The active key-value store, shared with the rate limiter."""
        return self._client

    async def initialize(self) -> None:
        """Connect to Redis when enabled, otherwise stay on the memory client."""
        if not self._redis_enabled:
            logger.info("Redis disabled. Using in-memory cache.")
            return
        try:
            await self.redis_client.connect()
        except RedisConnectionError as e:
            logger.warning(f"Redis connection failed: {e}. Falling back to in-memory cache.")
            return
        self._client = self.redis_client
        self.is_redis_available = True
        logger.info("Cache manager initialized with Redis.")

    async def shutdown(self) -> None:
        if self.is_redis_available:
            await self.redis_client.disconnect()
            self._client = self.memory_client
            self.is_redis_available = False
        await self.memory_client.close()
        logger.info("Cache manager shutdown successfully.")

    def _build_key(self, key: str) -> str:
        return f"{self.cache_config.key_prefix}:{key}"

    async def get(self, key: str) -> Any | None:  # noqa: ANN401
        """
        Get a cached value.

        Returns:
            The deserialized value, or None on a miss.

        Raises:
            CacheKeyError: If the store or the stored payload is unusable.
        """
        full_key = self._build_key(key)
        try:
            if logger.isEnabledFor(DEBUG):
                logger.debug(f"Getting from cache: {full_key}")
            cached_value = await self._client.get(full_key)
            if cached_value is None:
                metrics.record_cache_miss()
                return None
            value = deserialize(decompress(cached_value))
        except (*STORE_ERRORS, CacheDecompressionError, CacheDeserializationError) as e:
            metrics.record_cache_error("get")
            mssg = f"Cache get failed for key {full_key}"
            raise CacheKeyError(mssg) from e
        metrics.record_cache_hit()
        return value

    async def set(
        self,
        key: str,
        value: object,
        ttl: int | None = None,
    ) -> bool:
        """
        Store a value, overwriting any previous entry.

        Raises:
            CacheKeyError: If the value cannot be serialized or stored.
        """
        full_key = self._build_key(key)
        try:
            serialized = serialize(value)
            if self.cache_config.compression_enabled and do_compress(
                serialized,
                self.cache_config.compression_threshold,
            ):
                serialized = compress(serialized)

            ex = ttl if ttl is not None else self.cache_config.default_ttl
            ex = min(ex, self.cache_config.max_ttl)

            success = await self._client.set(full_key, serialized, ex=ex)
        except (*STORE_ERRORS, CacheSerializationError) as e:
            metrics.record_cache_error("set")
            mssg = f"Cache set failed for key {full_key}"
            raise CacheKeyError(mssg) from e
        return success

    async def delete(self, *keys: str) -> int:
        """Delete keys and return how many were present."""
        if not keys:
            return 0
        full_keys = [self._build_key(key) for key in keys]
        try:
            deleted_count = await self._client.delete(*full_keys)
        except STORE_ERRORS as e:
            metrics.record_cache_error("delete")
            mssg = f"Cache delete failed for keys {full_keys}"
            raise CacheKeyError(mssg) from e
        return deleted_count

    async def ping(self) -> bool:
        try:
            return await self._client.ping()
        except STORE_ERRORS:
            logger.exception("Cache ping failed")
            return False

    async def health_check(self) -> dict[str, Any]:
        """Backend name and status for the ``/health`` payload."""
        result: dict[str, Any] = {"backend": "redis" if self.is_redis_available else "in-memory"}
        if self.is_redis_available:
            healthy = await self.redis_client.health_check()
        else:
            healthy = await self.ping()
        result["status"] = "healthy" if healthy else "unhealthy"
        result["statistics"] = self.get_statistics()
        return result

    def get_statistics(self) -> dict[str, int | str]:
        return metrics.cache_statistics()
