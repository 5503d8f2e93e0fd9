"""Mappers for converting between domain models and API schemas."""
from fastapi import Request

from src.registry.api.links import (
    animal_collection_links,
    animal_links,
    owner_collection_links,
    owner_links,
)
from src.shared.exceptions import DomainError
from src.registry.core.domain.models import (
    Animal,
    AnimalCandidate,
    BreedStatistic,
    CityStatistic,
    Owner,
    OwnerCandidate,
    OwnershipStatistic,
)
from src.client.schemas import (
    AnimalCollectionResponse,
    AnimalRequest,
    AnimalResponse,
    AnimalSizeEnum,
    BreedStatisticResponse,
    CityStatisticResponse,
    ErrorDetail,
    OwnerCollectionResponse,
    OwnerRequest,
    OwnerResponse,
    OwnershipStatisticResponse,
)


def to_animal_candidate(request: AnimalRequest) -> AnimalCandidate:
    """
    Convert an AnimalRequest API schema to the candidate the registry rules check.

    Size is passed through as submitted (upper-cased) so an unknown category
    reaches the rules.
    """
    return AnimalCandidate(
        name=request.name,
        breed=request.breed,
        age=request.age,
        color=request.color,
        weight=request.weight,
        birth_date=request.birth_date,
        description=request.description,
        is_vaccinated=request.is_vaccinated,
        size=request.size.strip().upper() if request.size else None,
        is_available=request.is_available,
    )


def to_owner_candidate(request: OwnerRequest) -> OwnerCandidate:
    return OwnerCandidate(
        first_name=request.first_name,
        last_name=request.last_name,
        email=str(request.email),
        phone=request.phone,
        address=request.address,
        city=request.city,
        postal_code=request.postal_code,
        age=request.age,
        observations=request.observations,
        is_active=request.is_active,
    )


def to_animal_response(request: Request, animal: Animal) -> AnimalResponse:
    """
    Convert an Animal domain model to AnimalResponse API schema.

    Args:
        request: Incoming request, used to resolve link URLs
        animal: Domain model

    Returns:
        API response schema
    """
    return AnimalResponse(
        id=animal.id,
        name=animal.name,
        breed=animal.breed,
        age=animal.age,
        color=animal.color,
        weight=animal.weight,
        birth_date=animal.birth_date,
        description=animal.description,
        is_vaccinated=animal.is_vaccinated,
        size=AnimalSizeEnum(animal.size.value) if animal.size else None,
        is_available=animal.is_available,
        owner_id=animal.owner_id,
        created_at=animal.created_at,
        updated_at=animal.updated_at,
        links=animal_links(request, animal),
    )


def to_owner_response(request: Request, owner: Owner) -> OwnerResponse:
    """
    Convert an Owner domain model to OwnerResponse API schema.

    Args:
        request: Incoming request, used to resolve link URLs
        owner: Domain model

    Returns:
        API response schema
    """
    return OwnerResponse(
        id=owner.id,
        first_name=owner.first_name,
        last_name=owner.last_name,
        full_name=owner.full_name,
        email=owner.email,
        phone=owner.phone,
        address=owner.address,
        city=owner.city,
        postal_code=owner.postal_code,
        age=owner.age,
        observations=owner.observations,
        is_active=owner.is_active,
        animal_count=owner.animal_count,
        created_at=owner.created_at,
        updated_at=owner.updated_at,
        links=owner_links(request, owner),
    )


def to_animal_collection(request: Request, animals: list[Animal], root: bool = False) -> AnimalCollectionResponse:
    return AnimalCollectionResponse(
        items=[to_animal_response(request, animal) for animal in animals],
        links=animal_collection_links(request, root=root),
    )


def to_owner_collection(request: Request, owners: list[Owner], root: bool = False) -> OwnerCollectionResponse:
    return OwnerCollectionResponse(
        items=[to_owner_response(request, owner) for owner in owners],
        links=owner_collection_links(request, root=root),
    )


def to_breed_statistics(rows: list[BreedStatistic]) -> list[BreedStatisticResponse]:
    return [BreedStatisticResponse(breed=row.breed, count=row.count) for row in rows]


def to_city_statistics(rows: list[CityStatistic]) -> list[CityStatisticResponse]:
    return [CityStatisticResponse(city=row.city, count=row.count) for row in rows]


def to_ownership_statistics(rows: list[OwnershipStatistic]) -> list[OwnershipStatisticResponse]:
    return [
        OwnershipStatisticResponse(animal_count=row.animal_count, owner_count=row.owner_count)
        for row in rows
    ]


def to_error_detail(error: DomainError) -> dict[str, str]:
    """Body of an HTTPException raised for a rejected domain operation."""
    return ErrorDetail(code=str(error.code), message=error.message).model_dump()
