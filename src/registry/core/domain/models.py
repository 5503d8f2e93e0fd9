"""Domain models used in business logic."""
import uuid
from datetime import UTC, date, datetime
from enum import StrEnum
from uuid import UUID

from pydantic import BaseModel, Field, field_validator


def utc_now() -> datetime:
    return datetime.now(UTC)


def as_utc(value: datetime) -> datetime:
    """Attach UTC to naive timestamps (SQLite drops the offset on read)."""
    return value if value.tzinfo else value.replace(tzinfo=UTC)


class AnimalSize(StrEnum):
    """Size category of an animal, derived from weight when not given."""
    SMALL = "SMALL"
    MEDIUM = "MEDIUM"
    LARGE = "LARGE"


class Owner(BaseModel):
    """Domain model for Owner used in business logic."""
    id: UUID = Field(default_factory=uuid.uuid4, description="Unique owner ID")
    first_name: str
    last_name: str
    email: str
    phone: str
    address: str
    city: str
    postal_code: str
    age: int
    observations: str | None = None
    is_active: bool = True
    animal_count: int = Field(
        default=0,
        ge=0,
        description="Number of animals referencing this owner; computed on read, never stored",
    )
    created_at: datetime = Field(default_factory=utc_now, description="Creation timestamp")
    updated_at: datetime = Field(default_factory=utc_now, description="Last modification timestamp")

    model_config = {"from_attributes": True}

    @field_validator("created_at", "updated_at")
    @classmethod
    def ensure_utc(cls, value: datetime) -> datetime:
        return as_utc(value)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @property
    def has_animals(self) -> bool:
        return self.animal_count > 0

    def activate(self) -> None:
        self.is_active = True

    def deactivate(self) -> None:
        self.is_active = False


class Animal(BaseModel):
    """Domain model for Animal used in business logic."""
    id: UUID = Field(default_factory=uuid.uuid4, description="Unique animal ID")
    name: str
    breed: str
    age: int
    color: str
    weight: float = Field(..., description="Weight in kilograms")
    birth_date: date
    description: str | None = None
    is_vaccinated: bool
    size: AnimalSize | None = None
    is_available: bool = True
    owner_id: UUID | None = Field(default=None, description="ID of the owning Owner, if any")
    created_at: datetime = Field(default_factory=utc_now, description="Creation timestamp")
    updated_at: datetime = Field(default_factory=utc_now, description="Last modification timestamp")

    model_config = {"from_attributes": True}

    @field_validator("created_at", "updated_at")
    @classmethod
    def ensure_utc(cls, value: datetime) -> datetime:
        return as_utc(value)

    @property
    def has_owner(self) -> bool:
        return self.owner_id is not None

    def assign_owner(self, owner: Owner) -> None:
        """Link this animal to ``owner``; an owned animal is no longer available."""
        self.owner_id = owner.id
        self.is_available = False

    def release_owner(self) -> None:
        """Drop the owner link; the animal becomes available again."""
        self.owner_id = None
        self.is_available = True


class AnimalCandidate(BaseModel):
    """
    Unvalidated animal data as submitted for a create or update.

    Carries no range constraints: the registry rules in ``rules.py`` decide
    what is acceptable and report which rule failed.
    """
    name: str | None = None
    breed: str | None = None
    age: int | None = None
    color: str
    weight: float
    birth_date: date
    description: str | None = None
    is_vaccinated: bool
    size: str | None = None
    is_available: bool | None = None


class OwnerCandidate(BaseModel):
    """Unvalidated owner data as submitted for a create or update."""
    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    phone: str | None = None
    address: str | None = None
    city: str | None = None
    postal_code: str | None = None
    age: int
    observations: str | None = None
    is_active: bool = True


class AnimalFilter(BaseModel):
    """Optional criteria for the multi-criteria animal query; unset fields do not filter."""
    breed: str | None = None
    color: str | None = None
    min_age: int | None = None
    max_age: int | None = None


class OwnerFilter(BaseModel):
    """Optional criteria for the multi-criteria owner query; unset fields do not filter."""
    city: str | None = None
    min_age: int | None = None
    max_age: int | None = None
    is_active: bool | None = None


class BreedStatistic(BaseModel):
    breed: str
    count: int


class CityStatistic(BaseModel):
    city: str
    count: int


class OwnershipStatistic(BaseModel):
    """How many owners hold exactly ``animal_count`` animals."""
    animal_count: int
    owner_count: int
