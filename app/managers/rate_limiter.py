# app/managers/rate_limiter.py

"""Fixed-window request limiter over the shared key-value store."""

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from logging import getLogger

from fastapi import Request
from redis.exceptions import RedisError

from app.clients.protocols import CacheClientProtocol
from app.configs import RateLimitRule, file_logger, settings
from app.errors import BASE_EXCEPTION
from app.monitoring.prometheus import metrics

logger = file_logger(getLogger(__name__))

DEFAULT_BUCKET = "general"


@dataclass(frozen=True, slots=True)
class RateLimitResult:
    """Outcome of one limiter check."""

    allowed: bool
    limit: int
    remaining: int
    retry_after: int = 0


def get_client_ip(request: Request, header: str = settings.CLIENT_IP_HEADER) -> str:
    """
    Client identity for rate limiting.

    Only the configured edge header is trusted; requests without it share
    the ``"unknown"`` identity.
    """
    return request.headers.get(header) or "unknown"


class RateLimiter:
    """
    Count requests per ``(bucket, client)`` in fixed windows.

    The counter lives at ``rate_limit:<bucket>:<client>``. An accepted request
    rewrites it as ``count + 1`` with a fresh expiry of ``window`` seconds, so
    the window restarts on every accepted hit. A rejected request leaves the
    counter untouched.

    The read and the write are separate commands. Concurrent requests from
    the same client may both read the same count, letting a burst overshoot
    the limit by the number of in-flight requests.

    Args:
        store: Returns the active key-value client. Resolved on each call so
            the limiter follows the cache manager when it switches backends.
        rules: Bucket name to limit/window table.
        enabled: When False every request is allowed without touching the store.
    """

    def __init__(
        self,
        store: Callable[[], CacheClientProtocol],
        rules: Mapping[str, RateLimitRule],
        *,
        enabled: bool = True,
    ) -> None:
        self._store = store
        self.rules = dict(rules)
        self.enabled = enabled

    @staticmethod
    def key(bucket: str, client: str) -> str:
        return f"rate_limit:{bucket}:{client}"

    def rule_for(self, bucket: str) -> RateLimitRule:
        return self.rules.get(bucket) or self.rules[DEFAULT_BUCKET]

    async def check(self, bucket: str, client: str, limit: int, window: int) -> RateLimitResult:
        """
        Count one request against the bucket.

        Store failures are logged and the request is allowed.
        """
        if not self.enabled:
            return RateLimitResult(allowed=True, limit=limit, remaining=limit)

        key = self.key(bucket, client)
        store = self._store()
        try:
            current = await store.get(key)
            count = int(current) if current else 0
            if count >= limit:
                ttl = await store.ttl(key)
                retry_after = ttl if ttl > 0 else window
                logger.warning(f"Rate limit exceeded for {client} on bucket {bucket}")
                metrics.record_rate_limit_hit(bucket)
                return RateLimitResult(
                    allowed=False,
                    limit=limit,
                    remaining=0,
                    retry_after=retry_after,
                )
            await store.set(key, str(count + 1), ex=window)
        except (RedisError, ValueError, *BASE_EXCEPTION):
            logger.exception(f"Rate limit store unavailable for {key}, allowing request")
            return RateLimitResult(allowed=True, limit=limit, remaining=limit)

        return RateLimitResult(allowed=True, limit=limit, remaining=max(limit - count - 1, 0))

    async def hit(self, bucket: str, client: str) -> RateLimitResult:
        """Check a request against the configured rule for ``bucket``."""
        rule = self.rule_for(bucket)
        return await self.check(bucket, client, rule.limit, rule.window)
