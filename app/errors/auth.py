"""Authentication and authorization errors."""

from logging import getLogger

from starlette.status import (
    HTTP_401_UNAUTHORIZED,
    HTTP_403_FORBIDDEN,
    HTTP_409_CONFLICT,
)

from app.configs import file_logger
from app.errors.base import BaseAppError, create_exception_handler

logger = file_logger(getLogger(__name__))


class UserAuthenticationError(BaseAppError):
    """Base class for authentication errors."""

    def __init__(
        self,
        detail: str = "Authentication failed",
        status_code: int = HTTP_401_UNAUTHORIZED,
    ) -> None:
        super().__init__(detail, status_code)


class AuthorizationRequiredError(UserAuthenticationError):
    """Raised when a protected route is called without a bearer token."""

    def __init__(self) -> None:
        super().__init__("Authorization token required")


class InvalidTokenError(UserAuthenticationError):
    """Raised when the bearer token fails verification."""

    def __init__(self) -> None:
        super().__init__("Invalid or expired token")


class InvalidCredentialsError(UserAuthenticationError):
    """Raised when credentials are invalid."""

    def __init__(self) -> None:
        super().__init__("Invalid credentials")


class InsufficientPermissionsError(UserAuthenticationError):
    """Raised when an authenticated principal lacks the required role."""

    def __init__(self, detail: str = "Admin access required") -> None:
        super().__init__(detail, HTTP_403_FORBIDDEN)


class UserAlreadyExistsError(UserAuthenticationError):
    """Raised when registering an email that is already taken."""

    def __init__(self) -> None:
        super().__init__("User already exists", HTTP_409_CONFLICT)


auth_exception_handler = create_exception_handler(logger)
