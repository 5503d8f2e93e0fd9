from uuid import UUID
from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response, status
from dependency_injector.wiring import Provide, inject

from src.registry.containers import Container
from src.registry.core.domain.errors import RuleViolation
from src.registry.core.domain.models import AnimalFilter
from src.registry.core.services.animal_service import AnimalService
from src.registry.core.services.ownership_service import OwnershipService
from src.client.schemas import (
    AnimalCollectionResponse,
    AnimalRequest,
    AnimalResponse,
    BreedStatisticResponse,
)
from src.registry.api.mappers import (
    to_animal_candidate,
    to_animal_collection,
    to_animal_response,
    to_breed_statistics,
    to_error_detail,
)
from src.shared.exceptions import ConflictingEntityFound, EntityNotFound
from src.registry.logging import get_logger

router = APIRouter(prefix="/animals", tags=["animals"])
logger = get_logger(__name__)


@router.get("", response_model=AnimalCollectionResponse)
@inject
async def list_animals(
    request: Request,
    service: AnimalService = Depends(Provide[Container.animal_service]),
) -> AnimalCollectionResponse:
    """List every animal, ordered by name."""
    animals = await service.list_animals()
    return to_animal_collection(request, animals, root=True)


@router.post("", response_model=AnimalResponse, status_code=status.HTTP_201_CREATED)
@inject
async def create_animal(
    request: Request,
    payload: AnimalRequest,
    service: AnimalService = Depends(Provide[Container.animal_service]),
) -> AnimalResponse:
    """
    Register a new animal.

    Age is derived from the birth date and size from the weight when they are omitted.

    Raises:
        HTTPException 400: If a registry rule rejects the animal
        HTTPException 409: If another animal already has the name
    """
    try:
        animal = await service.create_animal(to_animal_candidate(payload))
    except RuleViolation as e:
        logger.error(f"Failed to create animal: {e}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=to_error_detail(e))
    except ConflictingEntityFound as e:
        logger.error(f"Failed to create animal: {e}")
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=to_error_detail(e))
    return to_animal_response(request, animal)


@router.get("/search", response_model=AnimalCollectionResponse)
@inject
async def search_animals(
    request: Request,
    name: str = Query(..., min_length=1, description="Fragment of the name, any case"),
    service: AnimalService = Depends(Provide[Container.animal_service]),
) -> AnimalCollectionResponse:
    animals = await service.search_by_name(name)
    return to_animal_collection(request, animals)


@router.get("/breed/{breed}", response_model=AnimalCollectionResponse)
@inject
async def animals_by_breed(
    request: Request,
    breed: str,
    service: AnimalService = Depends(Provide[Container.animal_service]),
) -> AnimalCollectionResponse:
    animals = await service.search_by_breed(breed)
    return to_animal_collection(request, animals)


@router.get("/available-for-adoption", response_model=AnimalCollectionResponse)
@inject
async def available_for_adoption(
    request: Request,
    service: AnimalService = Depends(Provide[Container.animal_service]),
) -> AnimalCollectionResponse:
    """Animals without an owner that are marked available."""
    animals = await service.list_available_for_adoption()
    return to_animal_collection(request, animals)


@router.get("/puppies", response_model=AnimalCollectionResponse)
@inject
async def puppies(
    request: Request,
    service: AnimalService = Depends(Provide[Container.animal_service]),
) -> AnimalCollectionResponse:
    animals = await service.list_puppies()
    return to_animal_collection(request, animals)


@router.get("/filter", response_model=AnimalCollectionResponse)
@inject
async def filter_animals(
    request: Request,
    breed: str | None = None,
    color: str | None = None,
    min_age: int | None = Query(default=None, ge=0),
    max_age: int | None = Query(default=None, ge=0),
    service: AnimalService = Depends(Provide[Container.animal_service]),
) -> AnimalCollectionResponse:
    """Multi-criteria search; omitted criteria do not filter."""
    criteria = AnimalFilter(breed=breed, color=color, min_age=min_age, max_age=max_age)
    animals = await service.filter_animals(criteria)
    return to_animal_collection(request, animals)


@router.get("/statistics/breed", response_model=list[BreedStatisticResponse])
@inject
async def breed_statistics(
    service: AnimalService = Depends(Provide[Container.animal_service]),
) -> list[BreedStatisticResponse]:
    """Number of animals per breed, most common first."""
    return to_breed_statistics(await service.breed_statistics())


@router.get("/{animal_id}", response_model=AnimalResponse)
@inject
async def get_animal(
    request: Request,
    animal_id: UUID,
    service: AnimalService = Depends(Provide[Container.animal_service]),
) -> AnimalResponse:
    """Get an animal by ID."""
    try:
        animal = await service.get_animal(animal_id)
    except EntityNotFound as e:
        logger.error(f"Animal not found: {e}")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=to_error_detail(e))
    return to_animal_response(request, animal)


@router.put("/{animal_id}", response_model=AnimalResponse)
@inject
async def update_animal(
    request: Request,
    animal_id: UUID,
    payload: AnimalRequest,
    service: AnimalService = Depends(Provide[Container.animal_service]),
) -> AnimalResponse:
    """Replace every field of an animal except its owner link."""
    try:
        animal = await service.update_animal(animal_id, to_animal_candidate(payload))
    except EntityNotFound as e:
        logger.error(f"Failed to update animal, not found: {e}")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=to_error_detail(e))
    except RuleViolation as e:
        logger.error(f"Failed to update animal: {e}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=to_error_detail(e))
    except ConflictingEntityFound as e:
        logger.error(f"Failed to update animal: {e}")
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=to_error_detail(e))
    return to_animal_response(request, animal)


@router.delete("/{animal_id}", status_code=status.HTTP_204_NO_CONTENT)
@inject
async def delete_animal(
    animal_id: UUID,
    service: AnimalService = Depends(Provide[Container.animal_service]),
) -> Response:
    try:
        await service.delete_animal(animal_id)
    except EntityNotFound as e:
        logger.error(f"Failed to delete animal, not found: {e}")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=to_error_detail(e))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.put("/{animal_id}/assign-owner/{owner_id}", response_model=AnimalResponse)
@inject
async def assign_owner(
    request: Request,
    animal_id: UUID,
    owner_id: UUID,
    service: OwnershipService = Depends(Provide[Container.ownership_service]),
) -> AnimalResponse:
    """
    Assign an owner to an animal.

    The animal is no longer available for adoption afterwards.

    Raises:
        HTTPException 404: If the animal or the owner does not exist
    """
    try:
        animal = await service.assign_owner(animal_id, owner_id)
    except EntityNotFound as e:
        logger.error(f"Failed to assign owner: {e}")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=to_error_detail(e))
    return to_animal_response(request, animal)


@router.put("/{animal_id}/remove-owner", response_model=AnimalResponse)
@inject
async def remove_owner(
    request: Request,
    animal_id: UUID,
    service: OwnershipService = Depends(Provide[Container.ownership_service]),
) -> AnimalResponse:
    try:
        animal = await service.remove_owner(animal_id)
    except EntityNotFound as e:
        logger.error(f"Failed to remove owner: {e}")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=to_error_detail(e))
    return to_animal_response(request, animal)
