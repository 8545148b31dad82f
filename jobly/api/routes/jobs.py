"""
Job routes.
"""
from typing import Annotated, Any

from fastapi import APIRouter, Depends, Path, Request

from jobly.api.deps import get_admin_claims, get_job_repository, job_filters
from jobly.core.rate_limit import RATE_WRITE, limiter
from jobly.repositories.job_repository import JobRepository
from jobly.schemas.base import INT32_MAX, DeletedResponse
from jobly.schemas.job import (
    JobDetailResponse,
    JobFilters,
    JobListResponse,
    JobNew,
    JobResponse,
    JobUpdate,
)

router = APIRouter(prefix="/jobs", tags=["jobs"])

# Ids are SERIAL: anything outside INTEGER range cannot exist
JobId = Annotated[int, Path(ge=0, le=INT32_MAX)]


@router.post("", response_model=JobResponse, status_code=201)
@limiter.limit(RATE_WRITE)
async def create_job(
    request: Request,
    data: JobNew,
    admin: dict[str, Any] = Depends(get_admin_claims),
    jobs: JobRepository = Depends(get_job_repository),
):
    """Post a job for an existing company."""
    return {"job": await jobs.create(data.to_payload())}


@router.get("", response_model=JobListResponse)
async def list_jobs(
    filters: JobFilters = Depends(job_filters),
    jobs: JobRepository = Depends(get_job_repository),
):
    """
    List jobs with optional filters.

    hasEquity=true keeps only jobs offering equity; hasEquity=false lists everything.
    """
    return {"jobs": await jobs.find_all(filters)}


@router.get("/{job_id}", response_model=JobDetailResponse)
async def get_job(
    job_id: JobId,
    jobs: JobRepository = Depends(get_job_repository),
):
    """Get a job and the company that posted it."""
    return {"job": await jobs.get(job_id)}


@router.patch("/{job_id}", response_model=JobResponse)
@limiter.limit(RATE_WRITE)
async def update_job(
    request: Request,
    job_id: JobId,
    data: JobUpdate,
    admin: dict[str, Any] = Depends(get_admin_claims),
    jobs: JobRepository = Depends(get_job_repository),
):
    """Update a job's title, salary or equity."""
    return {"job": await jobs.update(job_id, data.to_payload())}


@router.delete("/{job_id}", response_model=DeletedResponse)
@limiter.limit(RATE_WRITE)
async def delete_job(
    request: Request,
    job_id: JobId,
    admin: dict[str, Any] = Depends(get_admin_claims),
    jobs: JobRepository = Depends(get_job_repository),
):
    """Delete a job."""
    await jobs.remove(job_id)
    return {"deleted": job_id}
