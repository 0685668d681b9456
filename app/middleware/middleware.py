# app/middleware/middleware.py
"""
Middleware components for the Blog API.

This module contains middleware for CORS preflight short-circuiting,
security headers and request logging, plus the lifespan event handler
for service initialization and cleanup.
"""

from asyncio import get_event_loop
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from logging import getLogger
from time import perf_counter
from uuid import uuid4

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.status import HTTP_204_NO_CONTENT
from uvloop import Loop

from app.clients.ai_client import AiClient
from app.configs import file_logger, settings
from app.configs.settings import CORS_HEADERS
from app.db import close_db, init_db
from app.managers import cache_manager
from app.managers.rate_limiter import get_client_ip
from app.monitoring import bind_request_context, clear_request_context, configure_logging
from app.utils.helpers import get_summary

logger = file_logger(getLogger(__name__))


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """Manage application startup and shutdown events with service initialization."""
    configure_logging()
    logger.info(f"Starting {app.title} {app.version} ({settings.ENVIRONMENT})...")

    app.state.ai_client = None
    try:
        await init_db()
        await cache_manager.initialize()

        logger.info(f"is uvloop: {type(get_event_loop()) is Loop}")

        if settings.GEMINI_API_KEY:
            app.state.ai_client = AiClient(settings.GEMINI_API_KEY)
            logger.info("AI client initialized successfully.")
        else:
            logger.warning("GEMINI_API_KEY not set, AI endpoints will answer 503")

        logger.info("Services initialized successfully")

    except Exception:
        logger.exception("Failed to initialize services")
        raise

    yield

    logger.info(f"Shutting down {app.title}...")

    try:
        if ai_client := app.state.ai_client:
            await ai_client.close()
        await cache_manager.shutdown()
        await close_db()
        logger.info("Services cleaned up successfully")

    except Exception:
        logger.exception("Error during service cleanup")


def configure_cors(app: FastAPI) -> None:
    """Configure allow-all CORS for browser clients on any origin."""
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "X-API-Key"],
        expose_headers=["X-Request-ID", "X-RateLimit-Limit", "X-RateLimit-Remaining", "ETag"],
        max_age=86400,
    )


class PreflightMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        """Answer every OPTIONS request with 204 before routing or rate limiting."""

        if request.method == "OPTIONS":
            return Response(status_code=HTTP_204_NO_CONTENT, headers=CORS_HEADERS)
        return await call_next(request)


class LoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        """Log request summary and timing information."""

        start_time = perf_counter()
        request_id = request.headers.get("X-Request-ID") or uuid4().hex
        client_ip = get_client_ip(request)
        bind_request_context(request_id, client_ip)

        summary = get_summary(request)
        route_info = summary or f"{request.method} {request.url.path}"
        logger.info(f"Request: {route_info}, from ip: {client_ip}")

        try:
            response = await call_next(request)
            duration = perf_counter() - start_time
            logger.info(
                f"Response: {response.status_code} for {request.method} {request.url.path} "
                f"in {duration:.3f}s",
            )
        finally:
            clear_request_context()

        response.headers["X-Request-ID"] = request_id
        return response


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        """Add security headers to all responses."""

        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["X-XSS-Protection"] = "1; mode=block"
        response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        return response
