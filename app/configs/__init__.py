from app.configs.logger import file_logger
from app.configs.settings import (
    ADMIN_ROLE,
    CONFIG_MAP,
    CacheConfig,
    RateLimitRule,
    RedisCacheConfig,
    settings,
)

__all__ = [
    "ADMIN_ROLE",
    "CONFIG_MAP",
    "CacheConfig",
    "RateLimitRule",
    "RedisCacheConfig",
    "file_logger",
    "settings",
]
