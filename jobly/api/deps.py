"""
API dependencies for dependency injection.
"""
from typing import Any, Optional
from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from jobly.core.database import Database, get_db
from jobly.core.security import decode_token, is_admin
from jobly.core.exceptions import BadRequestException, UnauthorizedException, InvalidTokenException
from jobly.repositories.company_repository import CompanyRepository
from jobly.repositories.job_repository import JobRepository
from jobly.schemas.company import CompanyFilters
from jobly.schemas.job import JobFilters


# Security scheme
security = HTTPBearer(auto_error=False)


async def get_current_claims(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Optional[dict[str, Any]]:
    """
    Claims of the bearer token, or None when no token was sent.

    Raises:
        InvalidTokenException: If a token was sent but is invalid or expired
    """
    if not credentials:
        return None

    claims = decode_token(credentials.credentials)
    if claims is None:
        raise InvalidTokenException()

    request.state.token_claims = claims
    return claims


async def get_admin_claims(
    claims: Optional[dict[str, Any]] = Depends(get_current_claims),
) -> dict[str, Any]:
    """
    Claims of an admin token.

    Raises:
        UnauthorizedException: If no token was sent or it is not an admin's
    """
    if not is_admin(claims):
        raise UnauthorizedException("Admin access required")
    return claims


def get_company_repository(db: Database = Depends(get_db)) -> CompanyRepository:
    return CompanyRepository(db)


def get_job_repository(db: Database = Depends(get_db)) -> JobRepository:
    return JobRepository(db)


def single_valued_query(request: Request) -> dict[str, str]:
    """
    The query string as a plain dict.

    Raises:
        BadRequestException: If any parameter is given more than once
    """
    params: dict[str, str] = {}
    repeated = []
    for key, value in request.query_params.multi_items():
        if key in params and key not in repeated:
            repeated.append(key)
        params[key] = value
    if repeated:
        raise BadRequestException(
            f"Repeated query parameter(s): {', '.join(repeated)}",
            details={"repeated": repeated},
        )
    return params


def company_filters(request: Request) -> CompanyFilters:
    """Validate the query string of GET /companies (unknown keys are rejected)."""
    return CompanyFilters.coerce(single_valued_query(request))


def job_filters(request: Request) -> JobFilters:
    """Validate the query string of GET /jobs (unknown keys are rejected)."""
    return JobFilters.coerce(single_valued_query(request))
