"""
Company routes.

Thin controllers: validation lives in the schemas, SQL in CompanyRepository.
Reads are public; writes need an admin token.
"""
from typing import Any

from fastapi import APIRouter, Depends, Request

from jobly.api.deps import company_filters, get_admin_claims, get_company_repository
from jobly.core.rate_limit import RATE_WRITE, limiter
from jobly.repositories.company_repository import CompanyRepository
from jobly.schemas.base import DeletedResponse
from jobly.schemas.company import (
    CompanyDetailResponse,
    CompanyFilters,
    CompanyListResponse,
    CompanyNew,
    CompanyResponse,
    CompanyUpdate,
)

router = APIRouter(prefix="/companies", tags=["companies"])


@router.post("", response_model=CompanyResponse, status_code=201)
@limiter.limit(RATE_WRITE)
async def create_company(
    request: Request,
    data: CompanyNew,
    admin: dict[str, Any] = Depends(get_admin_claims),
    companies: CompanyRepository = Depends(get_company_repository),
):
    """Create a company."""
    company = await companies.create(data.to_payload())
    return {"company": company}


@router.get("", response_model=CompanyListResponse)
async def list_companies(
    filters: CompanyFilters = Depends(company_filters),
    companies: CompanyRepository = Depends(get_company_repository),
):
    """List companies, optionally filtered by name and headcount."""
    return {"companies": await companies.find_all(filters)}


@router.get("/{handle}", response_model=CompanyDetailResponse)
async def get_company(
    handle: str,
    companies: CompanyRepository = Depends(get_company_repository),
):
    """Get a company and its jobs."""
    return {"company": await companies.get(handle)}


@router.patch("/{handle}", response_model=CompanyResponse)
@limiter.limit(RATE_WRITE)
async def update_company(
    request: Request,
    handle: str,
    data: CompanyUpdate,
    admin: dict[str, Any] = Depends(get_admin_claims),
    companies: CompanyRepository = Depends(get_company_repository),
):
    """Update some of a company's fields."""
    company = await companies.update(handle, data.to_payload())
    return {"company": company}


@router.delete("/{handle}", response_model=DeletedResponse)
@limiter.limit(RATE_WRITE)
async def delete_company(
    request: Request,
    handle: str,
    admin: dict[str, Any] = Depends(get_admin_claims),
    companies: CompanyRepository = Depends(get_company_repository),
):
    """Delete a company and its jobs."""
    await companies.remove(handle)
    return {"deleted": handle}
