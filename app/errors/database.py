"""Persistence errors raised by the repositories."""

from logging import getLogger

from starlette.status import HTTP_409_CONFLICT, HTTP_500_INTERNAL_SERVER_ERROR

from app.configs import file_logger
from app.errors.base import BaseAppError, create_exception_handler

logger = file_logger(getLogger(__name__))


class DatabaseError(BaseAppError):
    """A write or query the database refused."""

    def __init__(
        self,
        detail: str = "Database error",
        status_code: int = HTTP_500_INTERNAL_SERVER_ERROR,
    ) -> None:
        super().__init__(detail, status_code)


class DatabaseConnectionError(DatabaseError):
    """The driver failed: connection lost, timeout or schema missing."""

    def __init__(self, detail: str = "Failed to connect to the database") -> None:
        super().__init__(detail)


class DuplicateEntryError(DatabaseError):
    """
    A unique column already holds the value.

    Post slugs, category names and slugs, author emails and admin emails
    are unique, so a second insert with the same value lands here as 409.
    """

    def __init__(self, detail: str = "A record with this value already exists") -> None:
        super().__init__(detail, HTTP_409_CONFLICT)


database_exception_handler = create_exception_handler(logger)
