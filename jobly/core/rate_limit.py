"""
slowapi limiter for the write endpoints (POST, PATCH, DELETE).

Reads are not limited. Counters are keyed per token subject once the auth
dependency has run, and per client address otherwise.
"""
from slowapi import Limiter
from slowapi.util import get_remote_address
from starlette.requests import Request

from jobly.core.config import settings


def rate_limit_key(request: Request) -> str:
    claims = getattr(request.state, "token_claims", None)
    if claims and claims.get("sub"):
        return f"sub:{claims['sub']}"
    return get_remote_address(request)


limiter = Limiter(
    key_func=rate_limit_key,
    storage_uri=settings.rate_limit_storage_uri,
    strategy="fixed-window",
    enabled=settings.rate_limit_enabled,
)

RATE_WRITE = settings.rate_limit_write
