"""Application settings and configuration constants.

This module contains application settings, constants, and configuration
values for the Blog API backend.
"""

from pathlib import Path
from typing import Literal, NamedTuple

from pydantic import BaseModel, SecretStr
from pydantic_settings.main import BaseSettings, SettingsConfigDict

ENV_FILE = Path(__file__).parent.parent.parent / ".env"

# --- Constants ---
TOKEN_TTL_SECONDS = 24 * 60 * 60
ADMIN_ROLE = "admin"

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 50
DEFAULT_COMMENT_PAGE_SIZE = 20
MAX_COMMENT_PAGE_SIZE = 100
MIN_PASSWORD_LENGTH = 8

AI_EXCERPT_INPUT_CHARS = 2000
AI_TAGS_INPUT_CHARS = 1500
AI_MAX_TAGS = 5
WORDS_PER_MINUTE = 200

# Response constants
DEFAULT_ERROR_MESSAGE = "Internal server error"
RATE_LIMIT_MESSAGE = "Rate limit exceeded"

# CORS preflight response headers
CORS_HEADERS: dict[str, str] = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, PUT, DELETE, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, Authorization, X-API-Key",
    "Access-Control-Max-Age": "86400",
}


class RateLimitRule(BaseModel):
    """Limit and window (seconds) for one rate limit bucket."""

    limit: int
    window: int


DEFAULT_RATE_LIMITS: dict[str, RateLimitRule] = {
    "general": RateLimitRule(limit=100, window=3600),
    "posts": RateLimitRule(limit=100, window=3600),
    "auth": RateLimitRule(limit=5, window=900),
    "ai": RateLimitRule(limit=10, window=3600),
    "media": RateLimitRule(limit=20, window=3600),
    "search": RateLimitRule(limit=50, window=3600),
    "categories": RateLimitRule(limit=50, window=3600),
    "authors": RateLimitRule(limit=50, window=3600),
    "comments": RateLimitRule(limit=30, window=3600),
}


class ArgonParams(NamedTuple):
    """Argon2id cost parameters for one security level."""

    memory_cost: int
    time_cost: int
    parallelism: int


CONFIG_MAP: dict[str, ArgonParams] = {
    "low": ArgonParams(memory_cost=8192, time_cost=1, parallelism=1),
    "medium": ArgonParams(memory_cost=65536, time_cost=3, parallelism=4),
    "high": ArgonParams(memory_cost=262144, time_cost=4, parallelism=4),
}


class Settings(BaseSettings):
    """Application settings with validation and default values."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE,
        env_file_encoding="utf-8",
        extra="ignore",
    )

    APP_NAME: str = "Blog API"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    HOST: str = "127.0.0.1"
    PORT: int = 8000

    # Environment
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"
    LOG_TO_FILE: bool = False
    LOG_FILE: str = "logs/app.log"

    # Metrics
    ENABLE_METRICS: bool = True

    # Security
    JWT_SECRET: SecretStr = SecretStr("change-me-in-production")
    ADMIN_API_KEY: SecretStr = SecretStr("change-me-in-production-too")
    REGISTRATION_ROLE: str = ADMIN_ROLE
    PASSWORD_SECURITY_LEVEL: Literal["low", "medium", "high"] = "medium"

    # Database Configuration
    DATABASE_URL: str = "sqlite+aiosqlite:///./blog.db"
    DATABASE_ECHO: bool = False
    POOL_SIZE: int = 5
    MAX_OVERFLOW: int = 10
    POOL_TIMEOUT: int = 30
    POOL_RECYCLE: int = 1800

    # Redis Configuration (optional)
    REDIS_ENABLED: bool = False
    REDIS_HOST: str = "localhost"
    REDIS_PORT: int = 6379
    REDIS_DB: int = 0
    REDIS_PASSWORD: str | None = None

    # Response caching
    CACHE_TTL_POSTS_LIST: int = 300  # 5 minutes
    CACHE_TTL_POST: int = 600  # 10 minutes
    CACHE_TTL_CATEGORIES: int = 1800  # 30 minutes
    CACHE_TTL_AUTHORS: int = 1800  # 30 minutes
    CACHE_TTL_SEARCH: int = 300  # 5 minutes
    POSTS_INVALIDATION_KEYS: list[str] = ["posts:1:10:::", "posts:1:20:::", "posts:2:10:::"]
    CATEGORIES_INVALIDATION_KEYS: list[str] = ["categories:all"]

    # Rate limiting
    RATE_LIMIT_ENABLED: bool = True
    RATE_LIMITS: dict[str, RateLimitRule] = DEFAULT_RATE_LIMITS
    CLIENT_IP_HEADER: str = "CF-Connecting-IP"

    # Comment moderation
    SPAM_MARKERS: list[str] = ["spam", "http://", "https://"]

    # Media storage
    STORAGE_PROVIDER: Literal["local", "s3"] = "local"
    UPLOADS_DIR: Path = Path("uploads")
    MEDIA_PUBLIC_BASE_URL: str = "/api/media"
    MEDIA_MAX_SIZE_MB: int = 5
    MEDIA_ALLOWED_TYPES: list[str] = ["image/jpeg", "image/png", "image/gif", "image/webp"]
    MEDIA_CACHE_CONTROL: str = "public, max-age=31536000"
    S3_BUCKET: str = "blog-media"
    S3_ENDPOINT_URL: str | None = None
    S3_REGION: str = "auto"
    S3_ACCESS_KEY_ID: str | None = None
    S3_SECRET_ACCESS_KEY: SecretStr | None = None

    # AI Configuration
    GEMINI_API_KEY: str | None = None
    GEMINI_MODEL: str = "gemini-2.0-flash"
    AI_REQUEST_TIMEOUT: int = 60  # seconds
    AI_TEMPERATURE: float = 0.7
    AI_MAX_OUTPUT_TOKENS: int = 512


settings = Settings()


class RedisCacheConfig(BaseSettings):
    """Redis connection pool configuration."""

    model_config = SettingsConfigDict(env_prefix="REDIS_", case_sensitive=False, extra="ignore")

    host: str = settings.REDIS_HOST
    port: int = settings.REDIS_PORT
    db: int = settings.REDIS_DB
    password: str | None = settings.REDIS_PASSWORD
    socket_timeout: float = 5.0
    socket_connect_timeout: float = 5.0
    socket_keepalive: bool = True
    health_check_interval: int = 30
    max_connections: int = 50
    decode_responses: bool = True
    encoding: str = "utf-8"


class CacheConfig(BaseSettings):
    """Cache configuration."""

    model_config = SettingsConfigDict(env_prefix="CACHE_", case_sensitive=False, extra="ignore")

    default_ttl: int = 3600  # 1 hour
    max_ttl: int = 86400  # 24 hours
    key_prefix: str = "cache"
    compression_enabled: bool = True
    compression_threshold: int = 1024  # bytes
