"""
Job schemas.
"""
from decimal import Decimal
from typing import List, Optional
from pydantic import Field, field_validator

from jobly.schemas.base import INT32_MAX, BaseSchema, InputSchema
from jobly.schemas.company import CompanyRead

# A fraction between 0 and 1 inclusive, written as text: "0", "0.25", "1.0"
EQUITY_PATTERN = r"^(0(\.\d+)?|1(\.0+)?)$"


class JobNew(InputSchema):
    """Job creation schema."""

    title: str = Field(min_length=1)
    salary: Optional[int] = Field(default=None, ge=0, le=INT32_MAX)
    equity: Optional[str] = Field(default=None, pattern=EQUITY_PATTERN)
    company_handle: str = Field(min_length=1, max_length=25)


class JobUpdate(InputSchema):
    """
    Job update schema.

    A job's id and company cannot be changed.
    """

    title: Optional[str] = Field(default=None, min_length=1)
    salary: Optional[int] = Field(default=None, ge=0, le=INT32_MAX)
    equity: Optional[str] = Field(default=None, pattern=EQUITY_PATTERN)

    @field_validator("title")
    @classmethod
    def _not_null(cls, value: Optional[str]) -> str:
        if value is None:
            raise ValueError("may be omitted but not set to null")
        return value


class JobFilters(InputSchema):
    """Optional search criteria for listing jobs."""

    title: Optional[str] = None
    min_salary: Optional[int] = Field(default=None, ge=0, le=INT32_MAX)
    has_equity: Optional[bool] = None


class _JobFields(BaseSchema):
    id: int
    title: str
    salary: Optional[int] = None
    equity: Optional[str] = None

    @field_validator("equity", mode="before")
    @classmethod
    def _equity_as_text(cls, value):
        return str(value) if isinstance(value, Decimal) else value


class JobRead(_JobFields):
    """A job as returned by create and update."""

    company_handle: str


class JobListItem(JobRead):
    """A job in a listing, with its company's name."""

    company_name: Optional[str] = None


class JobDetail(_JobFields):
    """A job with its full company record."""

    company: Optional[CompanyRead] = None


class JobResponse(BaseSchema):
    job: JobRead


class JobDetailResponse(BaseSchema):
    job: JobDetail


class JobListResponse(BaseSchema):
    jobs: List[JobListItem]
