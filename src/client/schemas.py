"""API schemas for animal and owner requests and responses."""
from datetime import date, datetime
from uuid import UUID
from enum import Enum
from pydantic import BaseModel, EmailStr, Field, field_validator


def _strip_not_blank(v: str) -> str:
    if not v or not v.strip():
        raise ValueError("Field cannot be blank or only whitespace")
    return v.strip()


class AnimalSizeEnum(str, Enum):
    """Animal size category for API."""
    SMALL = "SMALL"
    MEDIUM = "MEDIUM"
    LARGE = "LARGE"


class Link(BaseModel):
    """A single hypermedia link."""
    href: str


class AnimalRequest(BaseModel):
    """
    Request schema for creating or replacing an animal.

    ``size`` is accepted as free text; an unknown category is rejected by the
    registry rules with INVALID_SIZE rather than by schema validation.
    """
    name: str = Field(..., min_length=2, max_length=50, description="Unique name (any case)")
    breed: str = Field(..., min_length=3, max_length=100)
    age: int | None = Field(default=None, ge=0, le=30, description="Derived from birth_date when omitted")
    color: str = Field(..., min_length=3, max_length=50)
    weight: float = Field(..., ge=0.1, le=200.0, description="Weight in kilograms")
    birth_date: date
    description: str | None = Field(default=None, max_length=500)
    is_vaccinated: bool
    size: str | None = Field(default=None, description="SMALL, MEDIUM or LARGE; derived from weight when omitted")
    is_available: bool | None = Field(default=None, description="True on create and unchanged on update when omitted")

    @field_validator("name", "breed", "color")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        """Ensure text fields are not just whitespace."""
        return _strip_not_blank(v)

    @field_validator("birth_date")
    @classmethod
    def validate_not_in_future(cls, v: date) -> date:
        if v > date.today():
            raise ValueError("Birth date cannot be in the future")
        return v


class OwnerRequest(BaseModel):
    """Request schema for creating or replacing an owner."""
    first_name: str = Field(..., min_length=2, max_length=100)
    last_name: str = Field(..., min_length=2, max_length=100)
    email: EmailStr = Field(..., description="Email address, unique ignoring case")
    phone: str = Field(..., pattern=r"^[+]?[0-9]{8,15}$", description="8 to 15 digits, optional leading +")
    address: str = Field(..., min_length=10, max_length=200)
    city: str = Field(..., min_length=2, max_length=100)
    postal_code: str = Field(..., pattern=r"^[0-9]{5}$")
    age: int = Field(..., ge=18, le=120)
    observations: str | None = Field(default=None, max_length=500)
    is_active: bool = True

    @field_validator("first_name", "last_name", "address", "city")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        """Ensure text fields are not just whitespace."""
        return _strip_not_blank(v)


class AnimalResponse(BaseModel):
    """Response schema for animal data returned by the API."""
    id: UUID
    name: str
    breed: str
    age: int
    color: str
    weight: float
    birth_date: date
    description: str | None = None
    is_vaccinated: bool
    size: AnimalSizeEnum | None = None
    is_available: bool
    owner_id: UUID | None = None
    created_at: datetime
    updated_at: datetime
    links: dict[str, Link] = Field(default_factory=dict)

    model_config = {"from_attributes": True}


class OwnerResponse(BaseModel):
    """Response schema for owner data returned by the API."""
    id: UUID
    first_name: str
    last_name: str
    full_name: str
    email: str
    phone: str
    address: str
    city: str
    postal_code: str
    age: int
    observations: str | None = None
    is_active: bool
    animal_count: int = Field(..., description="Number of animals currently assigned")
    created_at: datetime
    updated_at: datetime
    links: dict[str, Link] = Field(default_factory=dict)

    model_config = {"from_attributes": True}


class AnimalCollectionResponse(BaseModel):
    items: list[AnimalResponse]
    links: dict[str, Link] = Field(default_factory=dict)


class OwnerCollectionResponse(BaseModel):
    items: list[OwnerResponse]
    links: dict[str, Link] = Field(default_factory=dict)


class BreedStatisticResponse(BaseModel):
    breed: str
    count: int


class CityStatisticResponse(BaseModel):
    city: str
    count: int


class OwnershipStatisticResponse(BaseModel):
    """Number of owners holding exactly ``animal_count`` animals."""
    animal_count: int
    owner_count: int


class ErrorDetail(BaseModel):
    """Body of a rejected request: ``{"detail": {"code": ..., "message": ...}}``."""
    code: str
    message: str
