"""Custom exceptions for the application."""
from datetime import datetime, UTC
from enum import StrEnum
from typing import Any


class ErrorKind(StrEnum):
    """Classification a boundary layer switches on to pick a status code."""
    BAD_REQUEST = "BAD_REQUEST"
    NOT_FOUND = "NOT_FOUND"


class AppError(Exception):
    """Base class for domain errors carrying a machine readable code."""

    kind: ErrorKind
    http_status: int

    def __init__(self, message: str, error_code: str | None = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.kind.value
        self.timestamp = datetime.now(UTC)

    def to_dict(self) -> dict[str, Any]:
        return {
            "message": self.message,
            "kind": self.kind.value,
            "error_code": self.error_code,
            "http_status": self.http_status,
            "timestamp": self.timestamp.isoformat(),
        }


class BadRequestError(AppError):
    kind = ErrorKind.BAD_REQUEST
    http_status = 400


class NotFoundError(AppError):
    kind = ErrorKind.NOT_FOUND
    http_status = 404


class EntityNotFound(NotFoundError):
    """Raised when an entity is not found in the database."""

    def __init__(self, entity_name: str, entity_id: Any):
        """
        Initialize the exception.

        Args:
            entity_name: Name of the entity that was not found
            entity_id: ID of the entity that was not found
        """
        super().__init__(f"{entity_name} with ID {entity_id} not found")
        self.entity_name = entity_name
        self.entity_id = entity_id


class ConflictingEntityFound(BadRequestError):
    """Raised when an entity with a conflicting unique field already exists."""

    def __init__(self, entity_name: str, field_name: str, field_value: Any, error_code: str):
        """
        Initialize the exception.

        Args:
            entity_name: Name of the entity
            field_name: Name of the conflicting field
            field_value: Value of the conflicting field
            error_code: Machine readable code, e.g. EMAIL_ALREADY_EXISTS
        """
        super().__init__(
            f"{entity_name} with {field_name} '{field_value}' already exists",
            error_code,
        )
        self.entity_name = entity_name
        self.field_name = field_name
        self.field_value = field_value
