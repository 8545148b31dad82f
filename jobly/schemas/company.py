"""
Company schemas.
"""
from decimal import Decimal
from typing import List, Optional
from pydantic import Field, field_validator

from jobly.schemas.base import INT32_MAX, BaseSchema, InputSchema

# Lowercase letters, digits and dashes: "anderson-arias-morrow"
HANDLE_PATTERN = r"^[a-z0-9-]+$"


class CompanyNew(InputSchema):
    """Company creation schema."""

    handle: str = Field(min_length=1, max_length=25, pattern=HANDLE_PATTERN)
    name: str = Field(min_length=1)
    description: str
    num_employees: Optional[int] = Field(default=None, ge=0, le=INT32_MAX)
    logo_url: Optional[str] = None


class CompanyUpdate(InputSchema):
    """
    Company update schema.

    The handle is the company's identity and cannot be changed.
    """

    name: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    num_employees: Optional[int] = Field(default=None, ge=0, le=INT32_MAX)
    logo_url: Optional[str] = None

    @field_validator("name", "description")
    @classmethod
    def _not_null(cls, value: Optional[str]) -> str:
        if value is None:
            raise ValueError("may be omitted but not set to null")
        return value


class CompanyFilters(InputSchema):
    """Optional search criteria for listing companies."""

    name: Optional[str] = None
    min_employees: Optional[int] = Field(default=None, ge=0, le=INT32_MAX)
    max_employees: Optional[int] = Field(default=None, ge=0, le=INT32_MAX)


class CompanyRead(BaseSchema):
    """A company as returned by the API."""

    handle: str
    name: str
    description: str
    num_employees: Optional[int] = None
    logo_url: Optional[str] = None


class CompanyJob(BaseSchema):
    """A job nested under its company (the handle is implied by the parent)."""

    id: int
    title: str
    salary: Optional[int] = None
    equity: Optional[str] = None

    @field_validator("equity", mode="before")
    @classmethod
    def _equity_as_text(cls, value):
        return str(value) if isinstance(value, Decimal) else value


class CompanyDetail(CompanyRead):
    """A company with its jobs, ordered by id."""

    jobs: List[CompanyJob] = []


class CompanyResponse(BaseSchema):
    company: CompanyRead


class CompanyDetailResponse(BaseSchema):
    company: CompanyDetail


class CompanyListResponse(BaseSchema):
    companies: List[CompanyRead]
