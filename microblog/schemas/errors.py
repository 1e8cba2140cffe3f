"""Error response schemas."""

from pydantic import BaseModel


class FieldErrorResponse(BaseModel):
    """One failing field."""

    field: str
    message: str


class ValidationErrorResponse(BaseModel):
    """Body returned when a create or update is rejected."""

    detail: str = "Validation failed"
    errors: list[FieldErrorResponse]
