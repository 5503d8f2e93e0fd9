"""Custom exceptions for the application."""
from typing import Any


class DomainError(Exception):
    """
    Base class for rejected operations.

    Every error carries a stable machine-readable ``code`` next to the
    human-readable message, so the HTTP layer can decide on a status without
    parsing text.
    """

    def __init__(self, code: str, message: str):
        super().__init__(message)
        self.code = code
        self.message = message


class EntityNotFound(DomainError):
    """Raised when an entity is not found in the database."""

    def __init__(self, entity_name: str, entity_id: Any, field_name: str = "ID"):
        """
        Initialize the exception.

        Args:
            entity_name: Name of the entity that was not found
            entity_id: ID (or other lookup value) of the entity that was not found
            field_name: Name of the field the lookup used
        """
        super().__init__(
            f"{entity_name.upper()}_NOT_FOUND",
            f"{entity_name} with {field_name} {entity_id} not found",
        )
        self.entity_name = entity_name
        self.entity_id = entity_id
        self.field_name = field_name


class ConflictingEntityFound(DomainError):
    """Raised when an entity with a conflicting field already exists."""

    def __init__(self, entity_name: str, field_name: str, field_value: Any):
        """
        Initialize the exception.

        Args:
            entity_name: Name of the entity
            field_name: Name of the conflicting field
            field_value: Value of the conflicting field
        """
        super().__init__(
            f"DUPLICATE_{field_name.upper()}",
            f"{entity_name} with {field_name} '{field_value}' already exists",
        )
        self.entity_name = entity_name
        self.field_name = field_name
        self.field_value = field_value
