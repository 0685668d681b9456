from app.decorators.caching import cache_busting, cached

__all__ = ["cache_busting", "cached"]
