from app.middleware.middleware import (
    LoggingMiddleware,
    PreflightMiddleware,
    SecurityHeadersMiddleware,
    configure_cors,
    lifespan,
)

__all__ = [
    "LoggingMiddleware",
    "PreflightMiddleware",
    "SecurityHeadersMiddleware",
    "configure_cors",
    "lifespan",
]
