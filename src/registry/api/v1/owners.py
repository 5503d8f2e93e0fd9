from uuid import UUID
from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response, status
from dependency_injector.wiring import Provide, inject

from src.registry.containers import Container
from src.registry.core.domain.errors import OwnerHasAnimals, RuleViolation
from src.registry.core.domain.models import OwnerFilter
from src.registry.core.services.owner_service import OwnerService
from src.registry.core.services.ownership_service import OwnershipService
from src.client.schemas import (
    AnimalCollectionResponse,
    CityStatisticResponse,
    OwnerCollectionResponse,
    OwnerRequest,
    OwnerResponse,
    OwnershipStatisticResponse,
)
from src.registry.api.mappers import (
    to_animal_collection,
    to_city_statistics,
    to_error_detail,
    to_owner_candidate,
    to_owner_collection,
    to_owner_response,
    to_ownership_statistics,
)
from src.shared.exceptions import ConflictingEntityFound, EntityNotFound
from src.registry.logging import get_logger

router = APIRouter(prefix="/owners", tags=["owners"])
logger = get_logger(__name__)


@router.get("", response_model=OwnerCollectionResponse)
@inject
async def list_owners(
    request: Request,
    service: OwnerService = Depends(Provide[Container.owner_service]),
) -> OwnerCollectionResponse:
    owners = await service.list_owners()
    return to_owner_collection(request, owners, root=True)


@router.post("", response_model=OwnerResponse, status_code=status.HTTP_201_CREATED)
@inject
async def create_owner(
    request: Request,
    payload: OwnerRequest,
    service: OwnerService = Depends(Provide[Container.owner_service]),
) -> OwnerResponse:
    """
    Register a new owner.

    Raises:
        HTTPException 400: If a registry rule rejects the owner
        HTTPException 409: If the email or phone is already registered
    """
    try:
        owner = await service.create_owner(to_owner_candidate(payload))
    except RuleViolation as e:
        logger.error(f"Failed to create owner: {e}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=to_error_detail(e))
    except ConflictingEntityFound as e:
        logger.error(f"Failed to create owner: {e}")
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=to_error_detail(e))
    return to_owner_response(request, owner)


@router.get("/search", response_model=OwnerCollectionResponse)
@inject
async def search_owners(
    request: Request,
    name: str = Query(..., min_length=1, description="Fragment of the first or last name"),
    service: OwnerService = Depends(Provide[Container.owner_service]),
) -> OwnerCollectionResponse:
    owners = await service.search_by_name(name)
    return to_owner_collection(request, owners)


@router.get("/by-email", response_model=OwnerResponse)
@inject
async def get_owner_by_email(
    request: Request,
    email: str = Query(..., min_length=1),
    service: OwnerService = Depends(Provide[Container.owner_service]),
) -> OwnerResponse:
    """Get an owner by email, ignoring case."""
    try:
        owner = await service.get_owner_by_email(email)
    except EntityNotFound as e:
        logger.error(f"Owner not found: {e}")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=to_error_detail(e))
    return to_owner_response(request, owner)


@router.get("/city/{city}", response_model=OwnerCollectionResponse)
@inject
async def owners_by_city(
    request: Request,
    city: str,
    service: OwnerService = Depends(Provide[Container.owner_service]),
) -> OwnerCollectionResponse:
    owners = await service.search_by_city(city)
    return to_owner_collection(request, owners)


@router.get("/with-animals", response_model=OwnerCollectionResponse)
@inject
async def owners_with_animals(
    request: Request,
    service: OwnerService = Depends(Provide[Container.owner_service]),
) -> OwnerCollectionResponse:
    owners = await service.list_with_animals()
    return to_owner_collection(request, owners)


@router.get("/without-animals", response_model=OwnerCollectionResponse)
@inject
async def owners_without_animals(
    request: Request,
    service: OwnerService = Depends(Provide[Container.owner_service]),
) -> OwnerCollectionResponse:
    owners = await service.list_without_animals()
    return to_owner_collection(request, owners)


@router.get("/active", response_model=OwnerCollectionResponse)
@inject
async def active_owners(
    request: Request,
    service: OwnerService = Depends(Provide[Container.owner_service]),
) -> OwnerCollectionResponse:
    owners = await service.list_active()
    return to_owner_collection(request, owners)


@router.get("/filter", response_model=OwnerCollectionResponse)
@inject
async def filter_owners(
    request: Request,
    city: str | None = None,
    min_age: int | None = Query(default=None, ge=0),
    max_age: int | None = Query(default=None, ge=0),
    is_active: bool | None = None,
    service: OwnerService = Depends(Provide[Container.owner_service]),
) -> OwnerCollectionResponse:
    """Multi-criteria search; omitted criteria do not filter."""
    criteria = OwnerFilter(city=city, min_age=min_age, max_age=max_age, is_active=is_active)
    owners = await service.filter_owners(criteria)
    return to_owner_collection(request, owners)


@router.get("/breed/{breed}", response_model=OwnerCollectionResponse)
@inject
async def owners_by_animal_breed(
    request: Request,
    breed: str,
    service: OwnerService = Depends(Provide[Container.owner_service]),
) -> OwnerCollectionResponse:
    """Owners holding at least one animal of the breed."""
    owners = await service.owners_by_animal_breed(breed)
    return to_owner_collection(request, owners)


@router.get("/statistics/city", response_model=list[CityStatisticResponse])
@inject
async def city_statistics(
    service: OwnerService = Depends(Provide[Container.owner_service]),
) -> list[CityStatisticResponse]:
    return to_city_statistics(await service.city_statistics())


@router.get("/statistics/animal-ownership", response_model=list[OwnershipStatisticResponse])
@inject
async def ownership_statistics(
    service: OwnerService = Depends(Provide[Container.owner_service]),
) -> list[OwnershipStatisticResponse]:
    """How many owners hold 0, 1, 2... animals."""
    return to_ownership_statistics(await service.ownership_statistics())


@router.get("/{owner_id}", response_model=OwnerResponse)
@inject
async def get_owner(
    request: Request,
    owner_id: UUID,
    service: OwnerService = Depends(Provide[Container.owner_service]),
) -> OwnerResponse:
    """Get an owner by ID."""
    try:
        owner = await service.get_owner(owner_id)
    except EntityNotFound as e:
        logger.error(f"Owner not found: {e}")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=to_error_detail(e))
    return to_owner_response(request, owner)


@router.put("/{owner_id}", response_model=OwnerResponse)
@inject
async def update_owner(
    request: Request,
    owner_id: UUID,
    payload: OwnerRequest,
    service: OwnerService = Depends(Provide[Container.owner_service]),
) -> OwnerResponse:
    try:
        owner = await service.update_owner(owner_id, to_owner_candidate(payload))
    except EntityNotFound as e:
        logger.error(f"Failed to update owner, not found: {e}")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=to_error_detail(e))
    except RuleViolation as e:
        logger.error(f"Failed to update owner: {e}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=to_error_detail(e))
    except ConflictingEntityFound as e:
        logger.error(f"Failed to update owner: {e}")
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=to_error_detail(e))
    return to_owner_response(request, owner)


@router.delete("/{owner_id}", status_code=status.HTTP_204_NO_CONTENT)
@inject
async def delete_owner(
    owner_id: UUID,
    service: OwnerService = Depends(Provide[Container.owner_service]),
) -> Response:
    """
    Delete an owner.

    Raises:
        HTTPException 404: If the owner does not exist
        HTTPException 409: If animals are still assigned to the owner
    """
    try:
        await service.delete_owner(owner_id)
    except EntityNotFound as e:
        logger.error(f"Failed to delete owner, not found: {e}")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=to_error_detail(e))
    except OwnerHasAnimals as e:
        logger.error(f"Failed to delete owner: {e}")
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=to_error_detail(e))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.put("/{owner_id}/activate", response_model=OwnerResponse)
@inject
async def activate_owner(
    request: Request,
    owner_id: UUID,
    service: OwnerService = Depends(Provide[Container.owner_service]),
) -> OwnerResponse:
    try:
        owner = await service.activate_owner(owner_id)
    except EntityNotFound as e:
        logger.error(f"Failed to activate owner: {e}")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=to_error_detail(e))
    return to_owner_response(request, owner)


@router.put("/{owner_id}/deactivate", response_model=OwnerResponse)
@inject
async def deactivate_owner(
    request: Request,
    owner_id: UUID,
    service: OwnerService = Depends(Provide[Container.owner_service]),
) -> OwnerResponse:
    try:
        owner = await service.deactivate_owner(owner_id)
    except EntityNotFound as e:
        logger.error(f"Failed to deactivate owner: {e}")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=to_error_detail(e))
    return to_owner_response(request, owner)


@router.get("/{owner_id}/animals", response_model=AnimalCollectionResponse)
@inject
async def owner_animals(
    request: Request,
    owner_id: UUID,
    service: OwnershipService = Depends(Provide[Container.ownership_service]),
) -> AnimalCollectionResponse:
    """Animals currently assigned to the owner."""
    try:
        animals = await service.animals_of(owner_id)
    except EntityNotFound as e:
        logger.error(f"Owner not found: {e}")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=to_error_detail(e))
    return to_animal_collection(request, animals)
