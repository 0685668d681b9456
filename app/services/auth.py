"""Authentication service for admin login and registration."""

from logging import getLogger
from uuid import uuid4

from app.configs import file_logger, settings
from app.errors.auth import InvalidCredentialsError, UserAlreadyExistsError
from app.managers.password_manager import hash_password, verify_and_update_password
from app.managers.token_manager import issue_token
from app.models import AdminUserDB
from app.repositories import AdminUserRepository
from app.schemas.auth import (
    AuthUser,
    LoginData,
    LoginRequest,
    RegisterData,
    RegisteredUser,
    RegisterRequest,
)

logger = file_logger(getLogger(__name__))


class AuthService:
    """Service for issuing bearer tokens to admin users."""

    def __init__(self, user_repo: AdminUserRepository, secret: str | None = None) -> None:
        """
        Initialize the auth service.

        Args:
            user_repo: Admin user repository for database operations
            secret: Token signing secret, defaults to ``JWT_SECRET``
        """
        self.user_repo = user_repo
        self._secret = secret or settings.JWT_SECRET.get_secret_value()

    def _issue(self, user: AdminUserDB) -> str:
        return issue_token(
            {"userId": user.id, "email": user.email, "role": user.role},
            self._secret,
        )

    async def login(self, credentials: LoginRequest) -> LoginData:
        """
        Verify credentials and issue a token.

        A password stored under a deprecated scheme is re-hashed with the
        current one once it verifies.

        Raises:
            InvalidCredentialsError: Unknown email or wrong password
        """
        email = credentials.email or ""
        user = await self.user_repo.get_by_email(email)
        valid, new_hash = await verify_and_update_password(
            credentials.password or "",
            user.password_hash if user else None,
        )
        if user is None or not valid:
            logger.warning(f"Failed login attempt for {email}")
            raise InvalidCredentialsError

        if new_hash:
            user = await self.user_repo.set_password_hash(user, new_hash)
            logger.info(f"Upgraded password hash for user {user.id}")

        return LoginData(token=self._issue(user), user=AuthUser(id=user.id, email=user.email))

    async def register(self, payload: RegisterRequest) -> RegisterData:
        """
        Create an admin user and issue a token.

        Raises:
            UserAlreadyExistsError: Email is already registered
        """
        email = payload.email or ""
        if await self.user_repo.get_by_email(email):
            raise UserAlreadyExistsError

        user = await self.user_repo.create(
            {
                "email": email,
                "password_hash": await hash_password(payload.password or ""),
                "api_key": str(uuid4()),
                "role": settings.REGISTRATION_ROLE,
            },
        )
        logger.info(f"Registered user {user.id}")

        return RegisterData(
            token=self._issue(user),
            user=RegisteredUser(id=user.id, email=user.email, api_key=user.api_key),
        )
