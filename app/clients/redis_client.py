"""Redis client module for cache and rate limit counters."""

from collections.abc import Awaitable, Callable
from logging import getLogger
from typing import Any

from redis.asyncio import ConnectionPool, Redis
from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import RedisError
from redis.exceptions import TimeoutError as RedisTimeoutError

from app.configs import RedisCacheConfig, file_logger

logger = file_logger(getLogger(__name__))


class RedisClient:
    """Async Redis client wrapper with connection pooling."""

    def __init__(self, config: RedisCacheConfig | None = None) -> None:
        self.config = config or RedisCacheConfig()
        self._pool: ConnectionPool | None = None
        self._redis: Redis | None = None

    async def connect(self) -> None:
        """
        Create the connection pool and verify the server answers.

        Raises:
            RedisConnectionError: If the server cannot be reached.
        """
        try:
            self._pool = ConnectionPool(**self.config.model_dump())
            self._redis = Redis(connection_pool=self._pool)
            if not await self._await(self._redis.ping()):
                mssg = "Redis ping returned False"
                raise RedisConnectionError(mssg)
            logger.info("Redis connection successful. Cache is using Redis.")
        except (ConnectionError, RedisTimeoutError, RedisError) as e:
            logger.exception("Failed to connect to Redis")
            mssg = f"Cannot connect to Redis at {self.config.host}:{self.config.port}"
            raise RedisConnectionError(mssg) from e

    async def disconnect(self) -> None:
        if self._redis is not None:
            await self._redis.aclose()
            self._redis = None
            logger.info("Redis connection closed.")

    @property
    def client(self) -> Redis:
        if self._redis is None:
            mssg = "Redis client not initialized. Call connect() first."
            raise RuntimeError(mssg)
        return self._redis

    @staticmethod
    async def _await(result: Any) -> Any:
        # redis-py types some commands as sync-or-async
        return await result if isinstance(result, Awaitable) else result

    async def _run(self, operation: str, call: Callable[[], Any]) -> Any:
        """Run one command, re-raising failures as RedisConnectionError."""
        try:
            return await self._await(call())
        except RedisError as e:
            logger.exception(f"Redis {operation} failed")
            mssg = f"Cache {operation} operation failed: {e}"
            raise RedisConnectionError(mssg) from e

    async def get(self, key: str) -> str | None:
        return await self._run("get", lambda: self.client.get(key))

    async def set(self, key: str, value: str, ex: int | None = None) -> bool:
        return bool(await self._run("set", lambda: self.client.set(key, value, ex=ex)))

    async def delete(self, *keys: str) -> int:
        if not keys:
            return 0
        return await self._run("delete", lambda: self.client.delete(*keys))

    async def exists(self, *keys: str) -> int:
        return await self._run("exists", lambda: self.client.exists(*keys))

    async def ttl(self, key: str) -> int:
        return await self._run("ttl", lambda: self.client.ttl(key))

    async def ping(self) -> bool:
        return bool(await self._run("ping", self.client.ping))

    async def info(self) -> dict[str, Any]:
        info = await self._run("info", self.client.info)
        return info if isinstance(info, dict) else {}

    async def health_check(self) -> bool:
        """Return False instead of raising when the server is unreachable."""
        try:
            return await self.ping()
        except (RedisConnectionError, RuntimeError):
            return False
