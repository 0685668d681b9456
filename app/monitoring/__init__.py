"""Structured logging and Prometheus metrics for the Blog API."""

from app.monitoring.logging import (
    bind_request_context,
    clear_request_context,
    configure_logging,
    get_logger,
    redact_pii,
    sanitize_headers,
    sanitize_log_message,
)
from app.monitoring.prometheus import MetricsCollector, metrics, setup_prometheus

__all__ = [
    "MetricsCollector",
    "bind_request_context",
    "clear_request_context",
    "configure_logging",
    "get_logger",
    "metrics",
    "redact_pii",
    "sanitize_headers",
    "sanitize_log_message",
    "setup_prometheus",
]
