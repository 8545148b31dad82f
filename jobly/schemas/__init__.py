"""
Pydantic schemas for API validation and serialization.
"""
from jobly.schemas.base import (
    BaseSchema,
    InputSchema,
    DeletedResponse,
    ErrorResponse,
)
from jobly.schemas.company import (
    CompanyNew,
    CompanyUpdate,
    CompanyFilters,
    CompanyRead,
    CompanyJob,
    CompanyDetail,
    CompanyResponse,
    CompanyDetailResponse,
    CompanyListResponse,
)
from jobly.schemas.job import (
    JobNew,
    JobUpdate,
    JobFilters,
    JobRead,
    JobListItem,
    JobDetail,
    JobResponse,
    JobDetailResponse,
    JobListResponse,
)

__all__ = [
    # Base
    "BaseSchema",
    "InputSchema",
    "DeletedResponse",
    "ErrorResponse",
    # Company
    "CompanyNew",
    "CompanyUpdate",
    "CompanyFilters",
    "CompanyRead",
    "CompanyJob",
    "CompanyDetail",
    "CompanyResponse",
    "CompanyDetailResponse",
    "CompanyListResponse",
    # Job
    "JobNew",
    "JobUpdate",
    "JobFilters",
    "JobRead",
    "JobListItem",
    "JobDetail",
    "JobResponse",
    "JobDetailResponse",
    "JobListResponse",
]
