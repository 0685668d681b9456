"""Tests for the fixed-window rate limiter."""

from unittest.mock import AsyncMock, patch

import pytest
from redis.exceptions import RedisError
from starlette.requests import Request

from app.clients.memory_client import MemoryClient
from app.configs import RateLimitRule
from app.managers.rate_limiter import RateLimiter, get_client_ip

RULES = {
    "general": RateLimitRule(limit=100, window=3600),
    "auth": RateLimitRule(limit=3, window=900),
}


@pytest.fixture
def store() -> MemoryClient:
    return MemoryClient()


@pytest.fixture
def limiter(store: MemoryClient) -> RateLimiter:
    return RateLimiter(lambda: store, RULES)


def make_request(headers: dict[str, str] | None = None) -> Request:
    raw = [(k.lower().encode(), v.encode()) for k, v in (headers or {}).items()]
    return Request({"type": "http", "method": "GET", "path": "/", "headers": raw})


class TestRateLimiter:
    """Test cases for RateLimiter.hit and RateLimiter.check."""

    async def test_limit_th_request_accepted_next_rejected(self, limiter: RateLimiter) -> None:
        results = [await limiter.hit("auth", "1.2.3.4") for _ in range(4)]

        assert [r.allowed for r in results] == [True, True, True, False]
        assert [r.remaining for r in results] == [2, 1, 0, 0]
        assert results[-1].limit == 3
        assert 0 < results[-1].retry_after <= 900

    async def test_rejected_request_leaves_counter(
        self,
        limiter: RateLimiter,
        store: MemoryClient,
    ) -> None:
        for _ in range(5):
            await limiter.hit("auth", "1.2.3.4")
        assert await store.get("rate_limit:auth:1.2.3.4") == "3"

    async def test_clients_and_buckets_are_independent(self, limiter: RateLimiter) -> None:
        for _ in range(3):
            await limiter.hit("auth", "1.2.3.4")

        assert (await limiter.hit("auth", "5.6.7.8")).allowed
        assert (await limiter.hit("general", "1.2.3.4")).allowed

    async def test_unknown_bucket_uses_general_rule(self, limiter: RateLimiter) -> None:
        result = await limiter.hit("unlisted", "1.2.3.4")
        assert result.limit == 100
        assert result.remaining == 99

    async def test_window_expiry_resets_counter(self, limiter: RateLimiter) -> None:
        for _ in range(3):
            await limiter.hit("auth", "1.2.3.4")
        assert not (await limiter.hit("auth", "1.2.3.4")).allowed

        with patch("app.clients.memory_client.time", return_value=10**12):
            result = await limiter.hit("auth", "1.2.3.4")

        assert result.allowed
        assert result.remaining == 2

    async def test_store_failure_allows_request(self) -> None:
        broken = AsyncMock()
        broken.get.side_effect = RedisError("down")
        limiter = RateLimiter(lambda: broken, RULES)

        result = await limiter.hit("auth", "1.2.3.4")

        assert result.allowed
        assert result.remaining == 3

    async def test_disabled_limiter_skips_store(self) -> None:
        store = AsyncMock()
        limiter = RateLimiter(lambda: store, RULES, enabled=False)

        for _ in range(10):
            assert (await limiter.hit("auth", "1.2.3.4")).allowed
        store.get.assert_not_awaited()


class TestGetClientIp:
    """Test cases for client identity resolution."""

    def test_reads_edge_header(self) -> None:
        request = make_request({"CF-Connecting-IP": "203.0.113.9"})
        assert get_client_ip(request) == "203.0.113.9"

    def test_missing_header_is_unknown(self) -> None:
        request = make_request({"X-Forwarded-For": "203.0.113.9"})
        assert get_client_ip(request) == "unknown"
