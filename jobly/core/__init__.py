"""Core module exports."""
from jobly.core.config import settings, get_settings
from jobly.core.database import Base, Database, get_db, connect, init_db, close_db, engine
from jobly.core.security import create_access_token, create_admin_token, decode_token, is_admin
from jobly.core.exceptions import (
    APIException,
    BadRequestException,
    UnauthorizedException,
    NotFoundException,
    InvalidTokenException,
    CompanyNotFoundException,
    JobNotFoundException,
    DuplicateCompanyException,
    DuplicateCompanyNameException,
    DuplicateJobException,
    UnknownCompanyException,
    MissingFieldsException,
)

__all__ = [
    # Config
    "settings",
    "get_settings",
    # Database
    "Base",
    "Database",
    "get_db",
    "connect",
    "init_db",
    "close_db",
    "engine",
    # Security
    "create_access_token",
    "decode_token",
    "create_admin_token",
    "is_admin",
    # Exceptions
    "APIException",
    "BadRequestException",
    "UnauthorizedException",
    "NotFoundException",
    "InvalidTokenException",
    "CompanyNotFoundException",
    "JobNotFoundException",
    "DuplicateCompanyException",
    "DuplicateCompanyNameException",
    "DuplicateJobException",
    "UnknownCompanyException",
    "MissingFieldsException",
]
