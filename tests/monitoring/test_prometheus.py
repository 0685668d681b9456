"""Tests for the Prometheus metrics and the /metrics endpoint."""

from unittest.mock import AsyncMock

from httpx import AsyncClient
from prometheus_client import REGISTRY

from app.errors import AiError
from app.monitoring.prometheus import MetricsCollector


def sample(name: str, **labels: str) -> float:
    return REGISTRY.get_sample_value(name, labels) or 0.0


class TestLabelValues:
    """Tests for label value sanitization."""

    def test_empty_value_returns_unknown(self) -> None:
        assert MetricsCollector._validate_label_value("") == "unknown"

    def test_normal_value_unchanged(self) -> None:
        assert MetricsCollector._validate_label_value("auth") == "auth"

    def test_long_value_truncated(self) -> None:
        assert len(MetricsCollector._validate_label_value("a" * 500)) == 128


async def test_metrics_endpoint(client: AsyncClient) -> None:
    await client.get("/api/posts")

    response = await client.get("/metrics")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/plain")
    assert 'handler="/api/posts"' in response.text
    assert "blog_cache_misses_total" in response.text
    assert "X-RateLimit-Limit" not in response.headers


async def test_cache_hits_and_misses_are_counted(client: AsyncClient) -> None:
    hits = sample("blog_cache_hits_total")
    misses = sample("blog_cache_misses_total")

    await client.get("/api/categories")
    await client.get("/api/categories")

    assert sample("blog_cache_misses_total") == misses + 1
    assert sample("blog_cache_hits_total") == hits + 1


async def test_rejected_requests_are_counted_per_bucket(client: AsyncClient) -> None:
    before = sample("blog_rate_limit_hits_total", bucket="auth")
    wrong = {"email": "admin@example.com", "password": "wrong-password"}

    for _ in range(6):
        await client.post("/api/auth/login", json=wrong)

    assert sample("blog_rate_limit_hits_total", bucket="auth") == before + 1


async def test_ai_requests_are_counted(
    client: AsyncClient,
    admin_headers: dict[str, str],
    ai_client: AsyncMock,
) -> None:
    succeeded = sample("blog_ai_requests_total", request_type="tags", outcome="success")
    failed = sample("blog_ai_requests_total", request_type="tags", outcome="error")

    await client.post("/api/ai/generate-tags", json={"title": "x"}, headers=admin_headers)
    ai_client.generate_text.side_effect = AiError()
    await client.post("/api/ai/generate-tags", json={"title": "x"}, headers=admin_headers)

    assert sample("blog_ai_requests_total", request_type="tags", outcome="success") == succeeded + 1
    assert sample("blog_ai_requests_total", request_type="tags", outcome="error") == failed + 1
