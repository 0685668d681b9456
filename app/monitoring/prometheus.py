"""
Prometheus metrics for the Blog API.

HTTP request counts and latencies come from prometheus-fastapi-instrumentator.
On top of those the app records:
- cache hits, misses and failed store operations
- rate limit rejections per bucket
- AI helper calls and their latency

Client IPs, emails, slugs and media keys are never used as labels. Rate limit
rejections are labelled by bucket name, which is a fixed set.

Examples
--------
>>> from app.monitoring import metrics
>>> metrics.record_cache_hit()
>>> metrics.record_rate_limit_hit("auth")
"""

from fastapi import FastAPI
from prometheus_client import REGISTRY, Counter, Histogram
from prometheus_fastapi_instrumentator import Instrumentator

from app.configs import settings

MAX_LABEL_VALUE_LENGTH: int = 128

# AI calls are slower than regular requests
AI_LATENCY_BUCKETS: tuple[float, ...] = (
    0.1,
    0.5,
    1.0,
    2.5,
    5.0,
    10.0,
    30.0,
)


class MetricsCollector:
    """
    Custom Prometheus metrics with bounded label values.

    Attributes
    ----------
    cache_hits_total : Counter
        Reads answered from the cache.
    cache_misses_total : Counter
        Reads that fell through to the database.
    cache_errors_total : Counter
        Store operations that failed, by operation.
    rate_limit_hits_total : Counter
        Requests rejected with 429, by bucket.
    ai_requests_total : Counter
        AI helper calls, by request type and outcome.
    ai_request_duration_seconds : Histogram
        AI helper latency, by request type.
    """

    def __init__(self) -> None:
        self.cache_hits_total = Counter(
            "blog_cache_hits_total",
            "Total number of cache hits",
        )
        self.cache_misses_total = Counter(
            "blog_cache_misses_total",
            "Total number of cache misses",
        )
        self.cache_errors_total = Counter(
            "blog_cache_errors_total",
            "Total number of failed cache store operations",
            ["operation"],  # get, set, delete
        )

        self.rate_limit_hits_total = Counter(
            "blog_rate_limit_hits_total",
            "Total number of requests rejected by the rate limiter",
            ["bucket"],
        )

        self.ai_requests_total = Counter(
            "blog_ai_requests_total",
            "Total number of AI helper requests",
            ["request_type", "outcome"],  # excerpt, tags, analysis / success, error
        )
        self.ai_request_duration_seconds = Histogram(
            "blog_ai_request_duration_seconds",
            "AI helper request duration in seconds",
            ["request_type"],
            buckets=AI_LATENCY_BUCKETS,
        )

    @staticmethod
    def _validate_label_value(value: str) -> str:
        """Fall back to ``unknown`` for empty values and truncate long ones."""
        if not value:
            return "unknown"
        return value[:MAX_LABEL_VALUE_LENGTH]

    def record_cache_hit(self) -> None:
        self.cache_hits_total.inc()

    def record_cache_miss(self) -> None:
        self.cache_misses_total.inc()

    def record_cache_error(self, operation: str) -> None:
        self.cache_errors_total.labels(operation=self._validate_label_value(operation)).inc()

    def record_rate_limit_hit(self, bucket: str) -> None:
        """
        Record a rejected request.

        Args:
            bucket: The rate limit bucket that was exhausted.
        """
        self.rate_limit_hits_total.labels(bucket=self._validate_label_value(bucket)).inc()

    def record_ai_request(self, request_type: str, duration: float, *, success: bool) -> None:
        """
        Record one AI helper call.

        Args:
            request_type: ``excerpt``, ``tags`` or ``analysis``.
            duration: Wall time spent waiting on the model, in seconds.
            success: Whether the model returned usable text.
        """
        request_type = self._validate_label_value(request_type)
        outcome = "success" if success else "error"
        self.ai_requests_total.labels(request_type=request_type, outcome=outcome).inc()
        self.ai_request_duration_seconds.labels(request_type=request_type).observe(duration)

    def cache_statistics(self) -> dict[str, int | str]:
        """Hit and miss totals for the ``/health`` payload."""
        hits = int(REGISTRY.get_sample_value("blog_cache_hits_total") or 0)
        misses = int(REGISTRY.get_sample_value("blog_cache_misses_total") or 0)
        total = hits + misses
        hit_rate = (hits / total * 100) if total > 0 else 0.0
        return {"hits": hits, "misses": misses, "hit_rate": f"{hit_rate:.2f}%"}


metrics = MetricsCollector()


def setup_prometheus(app: FastAPI) -> Instrumentator:
    """
    Instrument the app and expose ``/metrics`` when ``ENABLE_METRICS`` is set.

    Args:
        app: The FastAPI application instance.

    Returns:
        The configured Instrumentator, instrumented or not.
    """
    instrumentator = Instrumentator(
        should_group_status_codes=True,
        should_ignore_untemplated=True,
        should_respect_env_var=False,
        should_instrument_requests_inprogress=True,
        excluded_handlers=["/metrics", "/health.*"],
        inprogress_name="blog_http_requests_inprogress",
        inprogress_labels=True,
    )

    if settings.ENABLE_METRICS:
        instrumentator.instrument(app)
        instrumentator.expose(
            app,
            endpoint="/metrics",
            include_in_schema=False,
            tags=["Monitoring"],
        )

    return instrumentator
