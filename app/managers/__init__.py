from app.configs import settings
from app.managers.cache_manager import CacheManager
from app.managers.rate_limiter import RateLimiter

cache_manager = CacheManager()
rate_limiter = RateLimiter(
    lambda: cache_manager.client,
    settings.RATE_LIMITS,
    enabled=settings.RATE_LIMIT_ENABLED,
)

__all__ = ["cache_manager", "rate_limiter"]
