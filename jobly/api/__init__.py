"""
API package.
"""
from jobly.api.routes import api_router
from jobly.api.deps import (
    get_current_claims,
    get_admin_claims,
    get_company_repository,
    get_job_repository,
)

__all__ = [
    "api_router",
    "get_current_claims",
    "get_admin_claims",
    "get_company_repository",
    "get_job_repository",
]
