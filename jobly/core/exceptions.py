"""
Error types raised by the repositories, SQL helpers and auth dependencies.

Every error a client can cause is an APIException; the handler in
``jobly.main`` renders it as ``{"error": code, "message": ..., "details": ...}``
with the exception's status code.
"""
from typing import Optional, Any


class APIException(Exception):
    """Base for all client-visible errors."""

    status_code = 500
    default_code = "INTERNAL_ERROR"

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Any] = None,
    ):
        self.code = code or self.default_code
        self.message = message
        self.details = details
        super().__init__(message)


class BadRequestException(APIException):
    """400: the request itself is wrong (bad data, bad filters, conflicts)."""

    status_code = 400
    default_code = "BAD_REQUEST"

    def __init__(
        self,
        message: str = "Bad request",
        code: Optional[str] = None,
        details: Optional[Any] = None,
    ):
        super().__init__(message, code, details)


class UnauthorizedException(APIException):
    """401: missing, invalid or insufficient credentials."""

    status_code = 401
    default_code = "UNAUTHORIZED"

    def __init__(self, message: str = "Unauthorized", code: Optional[str] = None):
        super().__init__(message, code)


class NotFoundException(APIException):
    """404"""

    status_code = 404
    default_code = "NOT_FOUND"

    def __init__(self, message: str = "Resource not found", code: Optional[str] = None):
        super().__init__(message, code)


class InvalidTokenException(UnauthorizedException):
    def __init__(self):
        super().__init__("Invalid token", code="INVALID_TOKEN")


# Lookups by key
class CompanyNotFoundException(NotFoundException):
    def __init__(self, handle: str):
        self.handle = handle
        super().__init__(f"No company: {handle}", code="COMPANY_NOT_FOUND")


class JobNotFoundException(NotFoundException):
    def __init__(self, job_id: int):
        self.job_id = job_id
        super().__init__(f"Job {job_id} does not exist", code="JOB_NOT_FOUND")


# Write conflicts, reported as 400s
class DuplicateCompanyException(BadRequestException):
    def __init__(self, handle: str):
        super().__init__(f"Duplicate company: {handle}", code="DUPLICATE_COMPANY")


class DuplicateCompanyNameException(BadRequestException):
    """Company names are unique too, not just handles."""

    def __init__(self, name: str):
        super().__init__(f"Duplicate company name: {name}", code="DUPLICATE_COMPANY_NAME")


class DuplicateJobException(BadRequestException):
    def __init__(self, title: str):
        super().__init__(f"Duplicate job: {title}", code="DUPLICATE_JOB")


class UnknownCompanyException(BadRequestException):
    """A job names a company that does not exist."""

    def __init__(self, handle: str):
        super().__init__(f"Company {handle} does not exist.", code="COMPANY_NOT_FOUND")


class MissingFieldsException(BadRequestException):
    def __init__(self, fields):
        self.fields = list(fields)
        super().__init__(
            f"Missing required field(s): {', '.join(self.fields)}",
            code="MISSING_FIELDS",
        )
