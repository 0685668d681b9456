"""Bearer token and master key access control dependencies."""

from secrets import compare_digest
from typing import Annotated

from fastapi import Depends, Header

from app.configs import ADMIN_ROLE, settings
from app.errors import AuthorizationRequiredError, InsufficientPermissionsError, InvalidTokenError
from app.managers.token_manager import verify_token
from app.schemas.auth import Principal

BEARER_PREFIX = "Bearer "


class AccessControl:
    """
    Derive the caller's identity from request headers.

    Three levels are distinguished:

    - public routes use no dependency
    - ``require_authenticated`` needs a valid ``Authorization: Bearer <token>``
    - ``require_admin`` accepts the master ``X-API-Key`` (no principal) or a
      token whose ``role`` claim is ``admin``

    Args:
        secret: Token signing secret.
        master_key: Value of ``X-API-Key`` that bypasses token checks.
    """

    def __init__(self, secret: str, master_key: str, admin_role: str = ADMIN_ROLE) -> None:
        self._secret = secret
        self._master_key = master_key
        self._admin_role = admin_role

    def authenticate(self, authorization: str | None) -> Principal:
        """
        Verify a raw ``Authorization`` header value.

        Raises:
            AuthorizationRequiredError: Header missing or not ``Bearer `` prefixed.
            InvalidTokenError: Token fails verification or lacks principal claims.
        """
        if not authorization or not authorization.startswith(BEARER_PREFIX):
            raise AuthorizationRequiredError
        claims = verify_token(authorization[len(BEARER_PREFIX) :], self._secret)
        if claims is None:
            raise InvalidTokenError
        try:
            return Principal.model_validate(claims)
        except ValueError as e:
            raise InvalidTokenError from e

    def is_master_key(self, api_key: str | None) -> bool:
        if not api_key or not self._master_key:
            return False
        return compare_digest(api_key.encode(), self._master_key.encode())

    async def require_authenticated(
        self,
        authorization: Annotated[str | None, Header()] = None,
    ) -> Principal:
        return self.authenticate(authorization)

    async def require_admin(
        self,
        authorization: Annotated[str | None, Header()] = None,
        x_api_key: Annotated[str | None, Header(alias="X-API-Key")] = None,
    ) -> Principal | None:
        """
        Allow the master key or an admin token.

        Returns:
            Principal | None: None when the master key was used.

        Raises:
            InsufficientPermissionsError: The token is valid but not an admin's.
        """
        if self.is_master_key(x_api_key):
            return None
        principal = self.authenticate(authorization)
        if principal.role != self._admin_role:
            raise InsufficientPermissionsError
        return principal


access_control = AccessControl(
    secret=settings.JWT_SECRET.get_secret_value(),
    master_key=settings.ADMIN_API_KEY.get_secret_value(),
)

AuthenticatedDep = Annotated[Principal, Depends(access_control.require_authenticated)]
AdminDep = Annotated[Principal | None, Depends(access_control.require_admin)]
