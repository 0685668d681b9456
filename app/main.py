# app/main.py

"""Blog API - posts, categories, authors, comments, media, search and AI helpers on FastAPI."""

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import ORJSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from uvicorn.middleware.proxy_headers import ProxyHeadersMiddleware

from app.configs import settings
from app.errors import (
    AiError,
    BaseAppError,
    CacheExceptionError,
    DatabaseError,
    PasswordHashingError,
    RateLimitExceededError,
    UploadError,
    UserAuthenticationError,
    ai_exception_handler,
    auth_exception_handler,
    cache_exception_handler,
    database_exception_handler,
    http_exception_handler,
    password_hashing_exception_handler,
    rate_limit_exception_handler,
    resource_exception_handler,
    unhandled_exception_handler,
    upload_exception_handler,
    validation_exception_handler,
)
from app.middleware import (
    LoggingMiddleware,
    PreflightMiddleware,
    SecurityHeadersMiddleware,
    configure_cors,
    lifespan,
)
from app.monitoring import setup_prometheus
from app.routes import (
    ai_router,
    auth_router,
    authors_router,
    catalog_router,
    categories_router,
    comments_router,
    media_router,
    posts_router,
    search_router,
)

app = FastAPI(
    title=settings.APP_NAME,
    description="REST API backend for a blog platform",
    version=settings.APP_VERSION,
    lifespan=lifespan,
    default_response_class=ORJSONResponse,
    swagger_ui_parameters={
        "docExpansion": "none",
        "operationsSorter": "method",
    },
)

configure_cors(app)

app.add_middleware(GZipMiddleware, minimum_size=1000)
app.add_middleware(PreflightMiddleware)
app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(LoggingMiddleware)
app.add_middleware(ProxyHeadersMiddleware, trusted_hosts="*")

setup_prometheus(app)


routes = [
    catalog_router,
    posts_router,
    comments_router,
    categories_router,
    authors_router,
    media_router,
    search_router,
    ai_router,
    auth_router,
]

_ = [app.include_router(router) for router in routes]

errors = [
    (CacheExceptionError, cache_exception_handler),
    (RateLimitExceededError, rate_limit_exception_handler),
    (UserAuthenticationError, auth_exception_handler),
    (PasswordHashingError, password_hashing_exception_handler),
    (DatabaseError, database_exception_handler),
    (UploadError, upload_exception_handler),
    (AiError, ai_exception_handler),
    (BaseAppError, resource_exception_handler),
    (RequestValidationError, validation_exception_handler),
    (StarletteHTTPException, http_exception_handler),
    (Exception, unhandled_exception_handler),
]

_ = [app.add_exception_handler(exc_type, handler) for exc_type, handler in errors]
