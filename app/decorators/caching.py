# app/decorators/caching.py
"""Cache-aside decorators for FastAPI endpoints."""

from collections.abc import Callable
from functools import wraps
from logging import getLogger
from typing import TYPE_CHECKING, Any

from redis.exceptions import RedisError

from app.configs import file_logger
from app.errors import BASE_EXCEPTION, CacheKeyError

if TYPE_CHECKING:
    from app.managers.cache_manager import CacheManager

logger = file_logger(getLogger(__name__))

exceptions = (
    RedisError,
    CacheKeyError,
    *BASE_EXCEPTION,
    TypeError,
)


def cached(
    cache_manager: "CacheManager",
    ttl: int | None = None,
    *,
    key_builder: Callable[..., str],
) -> Callable:
    """
    Serve an endpoint's result from the cache, filling it on a miss.

    The endpoint must return JSON-ready data (see ``envelope``). A hit returns
    the stored value unchanged, so the response body is byte-identical to the
    one that filled the cache. Store failures count as misses and a failed
    write is logged and ignored.

    Args:
        cache_manager: Cache manager instance.
        ttl: Time to live in seconds.
        key_builder: Builds the key from the endpoint's keyword arguments.

    Returns:
        Decorated function.

    Example:
        @router.get("/categories")
        @cached(cache_manager, ttl=1800, key_builder=lambda **_: "categories:all")
        async def list_categories(repo: CategoryRepoDep) -> dict[str, Any]:
            ...
    """

    def decorator(func: Callable) -> Callable:
        @wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> object:  # noqa: ANN401
            cache_key = key_builder(*args, **kwargs)

            try:
                if (cached_value := await cache_manager.get(cache_key)) is not None:
                    logger.debug(f"Cache hit for key: {cache_key}")
                    return cached_value
            except exceptions as e:
                logger.warning(f"Cache retrieval failed: {e}")

            result = await func(*args, **kwargs)

            try:
                await cache_manager.set(cache_key, result, ttl=ttl)
                logger.debug(f"Cached result for key: {cache_key}")
            except exceptions as e:
                logger.warning(f"Cache write failed: {e}")

            return result

        return wrapper

    return decorator


def cache_busting(
    cache_manager: "CacheManager",
    keys: list[str] | None = None,
    key_builder: Callable[..., list[str]] | None = None,
) -> Callable:
    """
    Delete cache keys after a successful mutation (POST, PUT, DELETE).

    Nothing is deleted when the endpoint raises.

    Args:
        cache_manager: Cache manager instance.
        keys: Fixed list of cache keys to bust.
        key_builder: Builds extra keys from the endpoint's arguments.

    Returns:
        Decorated function.
    """

    def decorator(func: Callable) -> Callable:
        @wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> object:  # noqa: ANN401
            result = await func(*args, **kwargs)

            keys_to_bust = list(keys or [])
            if key_builder:
                keys_to_bust.extend(key_builder(*args, **kwargs))

            if keys_to_bust:
                try:
                    deleted = await cache_manager.delete(*keys_to_bust)
                    logger.debug(f"Cache busted {deleted} keys: {keys_to_bust}")
                except exceptions as e:
                    logger.warning(f"Cache busting failed: {e}")

            return result

        return wrapper

    return decorator
