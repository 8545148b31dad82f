"""
Base schemas and common response models.

Python attributes are snake_case; JSON bodies and query strings use the
camelCase aliases (``numEmployees``, ``companyHandle``, ...).
"""
from typing import Any, Optional, Union
from pydantic import BaseModel, ConfigDict, ValidationError
from pydantic.alias_generators import to_camel

from jobly.core.exceptions import BadRequestException

# Upper bound of a PostgreSQL INTEGER column
INT32_MAX = 2_147_483_647


class BaseSchema(BaseModel):
    """Base schema with common configuration."""

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        alias_generator=to_camel,
    )


class InputSchema(BaseSchema):
    """Request bodies and query strings: unknown keys are rejected."""

    model_config = ConfigDict(extra="forbid")

    @classmethod
    def coerce(cls, value: Any) -> Optional["InputSchema"]:
        """
        Accept an instance, a plain mapping, or None.

        Mappings are validated here, so malformed criteria surface as a
        BadRequestException rather than a pydantic error.
        """
        if value is None or isinstance(value, cls):
            return value
        try:
            return cls.model_validate(value)
        except ValidationError as exc:
            raise BadRequestException(
                "Invalid request data",
                details=exc.errors(include_url=False, include_context=False),
            ) from exc

    def to_payload(self) -> dict[str, Any]:
        """Fields the client actually sent, keyed by their camelCase names."""
        return self.model_dump(exclude_unset=True, by_alias=True)


class DeletedResponse(BaseSchema):
    """Body returned by DELETE endpoints."""

    deleted: Union[str, int]


class ErrorResponse(BaseSchema):
    """Error response format (see the handlers in ``jobly.main``)."""

    error: str
    message: str
    details: Optional[Any] = None
