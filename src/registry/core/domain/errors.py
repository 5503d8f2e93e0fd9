"""Rule identifiers and the domain errors that carry them."""
from enum import StrEnum
from uuid import UUID

from src.shared.exceptions import DomainError


class ErrorCode(StrEnum):
    """Stable identifiers for every rule the registry can reject an operation with."""

    # Animal validation, in evaluation order
    NAME_REQUIRED = "NAME_REQUIRED"
    BREED_REQUIRED = "BREED_REQUIRED"
    NEGATIVE_AGE = "NEGATIVE_AGE"
    NON_POSITIVE_WEIGHT = "NON_POSITIVE_WEIGHT"
    INVALID_SIZE = "INVALID_SIZE"

    # Owner validation, in evaluation order
    FIRST_NAME_REQUIRED = "FIRST_NAME_REQUIRED"
    LAST_NAME_REQUIRED = "LAST_NAME_REQUIRED"
    EMAIL_REQUIRED = "EMAIL_REQUIRED"
    PHONE_REQUIRED = "PHONE_REQUIRED"
    ADDRESS_REQUIRED = "ADDRESS_REQUIRED"
    CITY_REQUIRED = "CITY_REQUIRED"
    POSTAL_CODE_REQUIRED = "POSTAL_CODE_REQUIRED"
    UNDERAGE = "UNDERAGE"
    AGE_TOO_HIGH = "AGE_TOO_HIGH"
    INVALID_EMAIL_FORMAT = "INVALID_EMAIL_FORMAT"
    INVALID_PHONE_FORMAT = "INVALID_PHONE_FORMAT"
    INVALID_POSTAL_CODE = "INVALID_POSTAL_CODE"

    # Lookups and relationship state
    ANIMAL_NOT_FOUND = "ANIMAL_NOT_FOUND"
    OWNER_NOT_FOUND = "OWNER_NOT_FOUND"
    OWNER_HAS_ANIMALS = "OWNER_HAS_ANIMALS"

    # Uniqueness
    DUPLICATE_NAME = "DUPLICATE_NAME"
    DUPLICATE_EMAIL = "DUPLICATE_EMAIL"
    DUPLICATE_PHONE = "DUPLICATE_PHONE"


class RuleViolation(DomainError):
    """Raised when a candidate record breaks a field-level or cross-field rule."""

    def __init__(self, code: ErrorCode, message: str):
        super().__init__(code, message)


class OwnerHasAnimals(DomainError):
    """Raised when deleting an owner that still has animals assigned."""

    def __init__(self, owner_id: UUID, animal_count: int):
        super().__init__(
            ErrorCode.OWNER_HAS_ANIMALS,
            f"Owner with ID {owner_id} cannot be deleted while it has {animal_count} animal(s) assigned",
        )
        self.owner_id = owner_id
        self.animal_count = animal_count
