"""
Registry rules: record validation and derived state.

Everything here is pure: no I/O and no clock reads unless a ``today`` is
passed in. Validators raise ``RuleViolation`` for the first rule that fails,
checking rules in a fixed order so callers always see the same identifier for
the same input.
"""
import re
from datetime import date

from src.registry.core.domain.errors import ErrorCode, RuleViolation
from src.registry.core.domain.models import AnimalCandidate, AnimalSize, OwnerCandidate

SMALL_MAX_WEIGHT_KG = 10.0
MEDIUM_MAX_WEIGHT_KG = 25.0

MIN_OWNER_AGE = 18
MAX_OWNER_AGE = 120

EMAIL_PATTERN = re.compile(r"^[A-Za-z0-9+_.-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}$")
PHONE_PATTERN = re.compile(r"^[+]?[0-9]{8,15}$")
POSTAL_CODE_PATTERN = re.compile(r"^[0-9]{5}$")

_VALID_SIZES = {size.value for size in AnimalSize}


def _is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


def validate_animal(candidate: AnimalCandidate) -> None:
    """
    Check an animal candidate before it is persisted.

    Raises:
        RuleViolation: NAME_REQUIRED, BREED_REQUIRED, NEGATIVE_AGE,
            NON_POSITIVE_WEIGHT or INVALID_SIZE, whichever fails first.
    """
    if _is_blank(candidate.name):
        raise RuleViolation(ErrorCode.NAME_REQUIRED, "Animal name is required")
    if _is_blank(candidate.breed):
        raise RuleViolation(ErrorCode.BREED_REQUIRED, "Animal breed is required")
    if candidate.age is not None and candidate.age < 0:
        raise RuleViolation(ErrorCode.NEGATIVE_AGE, "Animal age cannot be negative")
    if candidate.weight is not None and candidate.weight <= 0:
        raise RuleViolation(ErrorCode.NON_POSITIVE_WEIGHT, "Animal weight must be greater than 0")
    if candidate.size is not None and candidate.size not in _VALID_SIZES:
        raise RuleViolation(
            ErrorCode.INVALID_SIZE,
            f"Animal size must be one of {', '.join(size.value for size in AnimalSize)}",
        )


def validate_owner(candidate: OwnerCandidate) -> None:
    """
    Check an owner candidate before it is persisted.

    Presence rules come first, then the age range, then the formats of email,
    phone and postal code.

    Raises:
        RuleViolation: the identifier of the first rule that fails.
    """
    required = (
        (candidate.first_name, ErrorCode.FIRST_NAME_REQUIRED, "Owner first name is required"),
        (candidate.last_name, ErrorCode.LAST_NAME_REQUIRED, "Owner last name is required"),
        (candidate.email, ErrorCode.EMAIL_REQUIRED, "Owner email is required"),
        (candidate.phone, ErrorCode.PHONE_REQUIRED, "Owner phone is required"),
        (candidate.address, ErrorCode.ADDRESS_REQUIRED, "Owner address is required"),
        (candidate.city, ErrorCode.CITY_REQUIRED, "Owner city is required"),
        (candidate.postal_code, ErrorCode.POSTAL_CODE_REQUIRED, "Owner postal code is required"),
    )
    for value, code, message in required:
        if _is_blank(value):
            raise RuleViolation(code, message)

    if candidate.age < MIN_OWNER_AGE:
        raise RuleViolation(ErrorCode.UNDERAGE, f"Owner must be at least {MIN_OWNER_AGE} years old")
    if candidate.age > MAX_OWNER_AGE:
        raise RuleViolation(ErrorCode.AGE_TOO_HIGH, f"Owner age cannot be greater than {MAX_OWNER_AGE}")

    if not EMAIL_PATTERN.match(candidate.email):
        raise RuleViolation(ErrorCode.INVALID_EMAIL_FORMAT, "Owner email format is not valid")
    if not PHONE_PATTERN.match(candidate.phone):
        raise RuleViolation(ErrorCode.INVALID_PHONE_FORMAT, "Owner phone must have between 8 and 15 digits")
    if not POSTAL_CODE_PATTERN.match(candidate.postal_code):
        raise RuleViolation(ErrorCode.INVALID_POSTAL_CODE, "Owner postal code must have exactly 5 digits")


def size_from_weight(weight: float) -> AnimalSize:
    """Classify by weight; each band includes its upper bound."""
    if weight <= SMALL_MAX_WEIGHT_KG:
        return AnimalSize.SMALL
    if weight <= MEDIUM_MAX_WEIGHT_KG:
        return AnimalSize.MEDIUM
    return AnimalSize.LARGE


def age_from_birth_date(birth_date: date, today: date | None = None) -> int:
    """
    Age in whole calendar years: ``today.year - birth_date.year``.

    This ignores whether the birthday has passed this year, so it can be one
    higher than the elapsed age.
    """
    today = today or date.today()
    return today.year - birth_date.year


def is_puppy(birth_date: date, today: date | None = None) -> bool:
    return age_from_birth_date(birth_date, today) < 1


def puppy_cutoff(today: date | None = None) -> date:
    """Earliest birth date that still counts as a puppy (January 1st of the current year)."""
    today = today or date.today()
    return date(today.year, 1, 1)
