"""Cache store errors. Routes treat them as misses; only the cache manager raises them."""

from logging import getLogger

from starlette.status import HTTP_500_INTERNAL_SERVER_ERROR

from app.configs import file_logger
from app.errors.base import BaseAppError, create_exception_handler

logger = file_logger(getLogger(__name__))


class CacheExceptionError(BaseAppError):
    def __init__(self, detail: str = "Cache operation failed") -> None:
        super().__init__(detail=detail, status_code=HTTP_500_INTERNAL_SERVER_ERROR)


class CacheKeyError(CacheExceptionError):
    """A stored entry could not be read back under its key."""

    def __init__(self, detail: str = "Cache key error") -> None:
        super().__init__(detail)


class CacheSerializationError(CacheExceptionError):
    def __init__(self, detail: str = "Cannot serialize response for the cache") -> None:
        super().__init__(detail)


class CacheDeserializationError(CacheExceptionError):
    def __init__(self, detail: str = "Cannot deserialize cached response") -> None:
        super().__init__(detail)


class CacheCompressionError(CacheExceptionError):
    def __init__(self, detail: str = "Cannot gzip cache entry") -> None:
        super().__init__(detail)


class CacheDecompressionError(CacheExceptionError):
    def __init__(self, detail: str = "Cannot gunzip cache entry") -> None:
        super().__init__(detail)


cache_exception_handler = create_exception_handler(logger)
