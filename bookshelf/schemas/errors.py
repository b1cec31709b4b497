"""
Error envelope models for HTTP responses.

Every error produced by the API shares one shape:

    {
        "error": "Bad Request",
        "message": "Author is invalid",
        "validation": {"source": "payload", "keys": ["author"]},
        "statusCode": 400
    }

`validation` is present for client errors that point at a specific part of
the request and omitted for internal errors.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError


class ErrorSource(str, Enum):
    """Part of the request an error refers to."""

    QUERY = "query"
    PARAMS = "params"
    PAYLOAD = "payload"


class ValidationDetail(BaseModel):
    """Which request source and keys failed validation."""

    source: ErrorSource
    keys: list[str] = Field(default_factory=list)


class ErrorResponse(BaseModel):
    """
    HTTP error response body.

    Attributes:
        error: HTTP reason phrase (e.g. "Not Found").
        message: Human-readable description of the failure.
        validation: Offending request source and keys, if any.
        status_code: HTTP status code, serialized as ``statusCode``.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    error: str
    message: str
    validation: ValidationDetail | None = None
    status_code: int

    def to_content(self) -> dict:
        """Serialize for a JSON response body."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


def missing_fields_error(model: type[BaseModel]) -> PydanticCustomError:
    """
    Error for a partial update that supplies none of ``model``'s fields.

    The accepted JSON keys are carried in the error context under ``keys``
    so the 400 response can list them.
    """
    keys = [to_camel(name) for name in model.model_fields]
    return PydanticCustomError(
        "missing_fields",
        "at least one of {fields} is required",
        {"fields": ", ".join(keys), "keys": keys},
    )
