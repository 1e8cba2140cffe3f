"""Domain exceptions raised by the service layer."""

from dataclasses import dataclass


@dataclass(frozen=True)
class FieldError:
    """A single validation failure for one field."""

    field: str
    message: str


class ValidationFailed(Exception):
    """A create or update was rejected; nothing was written."""

    def __init__(self, errors: list[FieldError]):
        self.errors = list(errors)
        summary = ", ".join(f"{e.field} {e.message}" for e in self.errors)
        super().__init__(f"Validation failed: {summary}")

    def fields(self) -> set[str]:
        """Names of the fields that failed."""
        return {e.field for e in self.errors}

    def messages_for(self, field: str) -> list[str]:
        """Messages reported for one field."""
        return [e.message for e in self.errors if e.field == field]


class PermissionDenied(Exception):
    """The acting user may not perform the operation."""
