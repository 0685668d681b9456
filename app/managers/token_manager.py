"""Bearer token issuance and verification (HS256 JWT)."""

from time import time
from typing import Any

from jose import JWTError, jwt
from jose.utils import base64url_decode, base64url_encode

from app.configs.settings import TOKEN_TTL_SECONDS

ALGORITHM = "HS256"


def _now(now: int | None) -> int:
    return int(time()) if now is None else now


def issue_token(claims: dict[str, Any], secret: str, now: int | None = None) -> str:
    """
    Sign claims into a compact JWT that expires 24 hours from now.

    Args:
        claims: Principal claims, e.g. ``{"userId": 1, "email": ..., "role": ...}``.
        secret: The shared signing secret.
        now: Unix time to issue at, defaults to the current time.

    Returns:
        str: ``header.payload.signature`` in base64url.
    """
    payload = {**claims, "exp": _now(now) + TOKEN_TTL_SECONDS}
    return jwt.encode(payload, secret, algorithm=ALGORITHM)


def _canonical_signature(token: str) -> bool:
    """
    Reject signature segments that only decode to the right bytes.

    base64url has spare bits in its last character, so a flipped character
    can still decode to the original signature. Re-encoding must reproduce
    the segment exactly.
    """
    segment = token.rsplit(".", 1)[-1].encode("ascii")
    try:
        return base64url_encode(base64url_decode(segment)) == segment
    except (ValueError, TypeError):
        return False


def verify_token(token: str, secret: str, now: int | None = None) -> dict[str, Any] | None:
    """
    Decode a token and check its signature and expiry.

    Never raises: a malformed token, a bad signature, a missing ``exp`` or an
    ``exp`` at or before ``now`` all return None. There is no clock leeway.

    Args:
        token: The compact JWT.
        secret: The shared signing secret.
        now: Unix time to check expiry against, defaults to the current time.

    Returns:
        dict | None: The claims, or None when the token is not valid.
    """
    if not isinstance(token, str) or token.count(".") != 2:
        return None
    try:
        if not _canonical_signature(token):
            return None
        claims = jwt.decode(token, secret, algorithms=[ALGORITHM], options={"verify_exp": False})
    except (JWTError, ValueError, TypeError, UnicodeError):
        return None

    exp = claims.get("exp")
    if not isinstance(exp, int) or isinstance(exp, bool) or exp <= _now(now):
        return None
    return claims
