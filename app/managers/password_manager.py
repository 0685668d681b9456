"""
Password hashing with passlib's CryptContext.

New digests are Argon2id. Digests created by the first release of the blog
(unsalted SHA-256 hex) still verify under the deprecated ``hex_sha256``
scheme and are replaced with Argon2id on the next successful login.
"""

from asyncio import get_event_loop
from concurrent.futures import ThreadPoolExecutor
from hashlib import sha256

from passlib.context import CryptContext
from passlib.exc import InternalBackendError, UnknownHashError

from app.configs import CONFIG_MAP, settings
from app.errors import PasswordHashingError, PasswordRehashError
from app.monitoring import get_logger

executor = ThreadPoolExecutor(max_workers=4)
logger = get_logger(__name__)


def legacy_digest(password: str) -> str:
    """Hex SHA-256 digest used for passwords stored before Argon2id."""
    return sha256(password.encode("utf-8")).hexdigest()


class PasswordHasher:
    """
    Argon2id hashing and verification with transparent legacy upgrade.

    Args:
        level: Key of ``CONFIG_MAP`` selecting the Argon2 cost parameters.
    """

    def __init__(self, level: str = settings.PASSWORD_SECURITY_LEVEL) -> None:
        self.level = level
        params = CONFIG_MAP[level]
        self.pwd_context = CryptContext(
            schemes=["argon2", "hex_sha256"],
            deprecated=["hex_sha256"],
            argon2__memory_cost=params.memory_cost,
            argon2__time_cost=params.time_cost,
            argon2__parallelism=params.parallelism,
        )
        logger.info(f"PasswordHasher initialized with Argon2id on level {self.level}")

    def hash(self, password: str) -> str:
        """
        Hash a plaintext password using Argon2id.

        Raises:
            ValueError: If password is empty.
            PasswordHashingError: If the backend fails.
        """
        if not password:
            mssg = "Password cannot be empty"
            raise ValueError(mssg)
        try:
            return self.pwd_context.hash(password)
        except (ValueError, InternalBackendError, UnicodeError) as e:
            logger.exception("Error hashing password")
            mssg = "Failed to hash password"
            raise PasswordHashingError(mssg) from e

    def verify(self, password: str, hashed_password: str) -> bool:
        """
        Check a password against a stored digest.

        Malformed or unrecognised digests verify as False instead of raising.

        Example:
            >>> hasher = PasswordHasher("low")
            >>> hasher.verify("secret123", legacy_digest("secret123"))
            True
        """
        if not isinstance(hashed_password, str) or not hashed_password.strip():
            logger.warning("Invalid hash format provided")
            return False
        try:
            return self.pwd_context.verify(password, hashed_password)
        except (ValueError, TypeError, UnknownHashError):
            logger.warning("Stored hash is corrupted or in an unknown format")
            return False

    def verify_and_update(
        self,
        password: str,
        hashed_password: str | None,
    ) -> tuple[bool, str | None]:
        """
        Verify a password and return a replacement digest if one is due.

        Returns:
            tuple[bool, str | None]: Whether the password matched, and a new
            Argon2id digest when the stored one uses a deprecated scheme or
            outdated parameters.
        """
        if hashed_password is None:
            # keeps timing similar for unknown users
            self.pwd_context.dummy_verify()
            return False, None

        if not self.verify(password, hashed_password):
            return False, None

        try:
            needs_update = self.pwd_context.needs_update(hashed_password)
        except (ValueError, UnknownHashError):
            return True, None
        if not needs_update:
            return True, None

        try:
            new_hash = self.hash(password)
        except PasswordHashingError as e:
            mssg = "Failed to rehash password"
            raise PasswordRehashError(mssg) from e
        logger.info(f"Password digest upgraded to Argon2id on level {self.level}")
        return True, new_hash


_default_hasher = PasswordHasher()


def get_password_hasher() -> PasswordHasher:
    return _default_hasher


async def hash_password(password: str) -> str:
    """Hash off the event loop with the default hasher."""
    return await get_event_loop().run_in_executor(
        executor,
        get_password_hasher().hash,
        password,
    )


async def verify_password(password: str, hashed_password: str) -> bool:
    return await get_event_loop().run_in_executor(
        executor,
        get_password_hasher().verify,
        password,
        hashed_password,
    )


async def verify_and_update_password(
    password: str,
    hashed_password: str | None,
) -> tuple[bool, str | None]:
    """Verify off the event loop and return a new digest if one is due."""
    return await get_event_loop().run_in_executor(
        executor,
        get_password_hasher().verify_and_update,
        password,
        hashed_password,
    )
