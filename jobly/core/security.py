"""
Bearer tokens.

Tokens are HS256 JWTs carrying a username (``sub``) and an ``is_admin`` flag.
Issuing them to end users happens outside this service; here they are signed
for tooling and tests, and verified on every write request.
"""
from datetime import datetime, timedelta, timezone
from typing import Optional, Any
from jose import JWTError, jwt

from jobly.core.config import settings

TOKEN_TYPE = "access"


def create_access_token(
    data: dict[str, Any],
    expires_delta: Optional[timedelta] = None,
) -> str:
    """
    Sign ``data`` (e.g. ``{"sub": "admin", "is_admin": True}``) as an access token.

    Expires after ``expires_delta``, or ``access_token_expire_minutes`` by default.
    """
    expires_delta = expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    claims = {
        **data,
        "exp": datetime.now(timezone.utc) + expires_delta,
        "type": TOKEN_TYPE,
    }
    return jwt.encode(claims, settings.secret_key, algorithm=settings.algorithm)


def create_admin_token(username: str = "admin") -> str:
    return create_access_token({"sub": username, "is_admin": True})


def decode_token(token: str) -> Optional[dict[str, Any]]:
    """
    Claims of a valid access token.

    Expired, tampered, malformed and non-access tokens all give None.
    """
    try:
        claims = jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
    except JWTError:
        return None
    if claims.get("type") != TOKEN_TYPE:
        return None
    return claims


def is_admin(claims: Optional[dict[str, Any]]) -> bool:
    return bool(claims) and claims.get("is_admin") is True
