from app.errors.ai import (
    AiAuthenticationError,
    AiError,
    AIGenerationError,
    AiNetworkError,
    AiNotConfiguredError,
    AiQuotaExceededError,
    ai_exception_handler,
)
from app.errors.auth import (
    AuthorizationRequiredError,
    InsufficientPermissionsError,
    InvalidCredentialsError,
    InvalidTokenError,
    UserAlreadyExistsError,
    UserAuthenticationError,
    auth_exception_handler,
)
from app.errors.base import BASE_EXCEPTION, BaseAppError, create_exception_handler, error_body
from app.errors.cache import (
    CacheCompressionError,
    CacheDecompressionError,
    CacheDeserializationError,
    CacheExceptionError,
    CacheKeyError,
    CacheSerializationError,
    cache_exception_handler,
)
from app.errors.database import (
    DatabaseConnectionError,
    DatabaseError,
    DuplicateEntryError,
    database_exception_handler,
)
from app.errors.password_hasher import (
    PasswordHashingError,
    PasswordRehashError,
    password_hashing_exception_handler,
)
from app.errors.rate_limit import RateLimitExceededError, rate_limit_exception_handler
from app.errors.resources import (
    BadRequestError,
    OperationFailedError,
    ResourceNotFoundError,
    resource_exception_handler,
)
from app.errors.upload import (
    FileTooLargeError,
    InvalidImageError,
    MediaNotFoundError,
    NoFileProvidedError,
    StorageError,
    UnsupportedFileTypeError,
    UploadError,
    upload_exception_handler,
)
from app.errors.validation import (
    http_exception_handler,
    unhandled_exception_handler,
    validation_exception_handler,
)

__all__ = [
    "AIGenerationError",
    "AiAuthenticationError",
    "AiError",
    "AiNetworkError",
    "AiNotConfiguredError",
    "AiQuotaExceededError",
    "AuthorizationRequiredError",
    "BASE_EXCEPTION",
    "BadRequestError",
    "BaseAppError",
    "CacheCompressionError",
    "CacheDecompressionError",
    "CacheDeserializationError",
    "CacheExceptionError",
    "CacheKeyError",
    "CacheSerializationError",
    "DatabaseConnectionError",
    "DatabaseError",
    "DuplicateEntryError",
    "FileTooLargeError",
    "InsufficientPermissionsError",
    "InvalidCredentialsError",
    "InvalidImageError",
    "InvalidTokenError",
    "MediaNotFoundError",
    "NoFileProvidedError",
    "OperationFailedError",
    "PasswordHashingError",
    "PasswordRehashError",
    "RateLimitExceededError",
    "ResourceNotFoundError",
    "StorageError",
    "UnsupportedFileTypeError",
    "UploadError",
    "UserAlreadyExistsError",
    "UserAuthenticationError",
    "ai_exception_handler",
    "auth_exception_handler",
    "cache_exception_handler",
    "create_exception_handler",
    "database_exception_handler",
    "error_body",
    "http_exception_handler",
    "password_hashing_exception_handler",
    "rate_limit_exception_handler",
    "resource_exception_handler",
    "unhandled_exception_handler",
    "upload_exception_handler",
    "validation_exception_handler",
]
