import logging
from uuid import UUID, uuid4

from sqlalchemy.exc import IntegrityError

from src.registry.core.domain.errors import OwnerHasAnimals
from src.registry.core.domain.models import (
    CityStatistic,
    Owner,
    OwnerCandidate,
    OwnerFilter,
    OwnershipStatistic,
    utc_now,
)
from src.registry.core.domain.rules import validate_owner
from src.registry.infrastructure.animal_repository import AnimalRepository
from src.registry.infrastructure.owner_repository import OwnerRepository
from src.shared.database.unit_of_work import UnitOfWork
from src.shared.exceptions import ConflictingEntityFound, EntityNotFound

logger = logging.getLogger(__name__)


class OwnerService:
    """Service for handling Owner business logic."""

    def __init__(
        self,
        repository: OwnerRepository,
        animal_repository: AnimalRepository,
        unit_of_work: UnitOfWork,
    ):
        self.repository = repository
        self.animal_repository = animal_repository
        self.unit_of_work = unit_of_work

    async def create_owner(self, candidate: OwnerCandidate) -> Owner:
        """
        Validate and persist a new owner.

        Raises:
            RuleViolation: If the candidate breaks a validation rule
            ConflictingEntityFound: If the email (any case) or phone is taken
        """
        logger.info("Creating owner with email '%s'", candidate.email)
        validate_owner(candidate)

        if await self.repository.exists_by_email(candidate.email):
            raise ConflictingEntityFound("Owner", "email", candidate.email)
        if await self.repository.exists_by_phone(candidate.phone):
            raise ConflictingEntityFound("Owner", "phone", candidate.phone)

        now = utc_now()
        owner = Owner(
            id=uuid4(),
            first_name=candidate.first_name,
            last_name=candidate.last_name,
            email=candidate.email,
            phone=candidate.phone,
            address=candidate.address,
            city=candidate.city,
            postal_code=candidate.postal_code,
            age=candidate.age,
            observations=candidate.observations,
            is_active=candidate.is_active,
            created_at=now,
            updated_at=now,
        )

        # The email constraint still guards against a concurrent insert
        try:
            async with self.unit_of_work:
                self.unit_of_work.add(owner)
        except IntegrityError as e:
            raise ConflictingEntityFound("Owner", "email", candidate.email) from e

        logger.info("Owner %s created", owner.id)
        return owner

    async def update_owner(self, owner_id: UUID, candidate: OwnerCandidate) -> Owner:
        """
        Replace every field of an owner except its id and creation time.

        Uniqueness is only checked for values that actually change.
        """
        logger.info("Updating owner %s", owner_id)
        existing = await self.get_owner(owner_id)
        validate_owner(candidate)

        email_changed = existing.email.lower() != candidate.email.lower()
        if email_changed and await self.repository.exists_by_email(candidate.email):
            raise ConflictingEntityFound("Owner", "email", candidate.email)
        if existing.phone != candidate.phone and await self.repository.exists_by_phone(candidate.phone):
            raise ConflictingEntityFound("Owner", "phone", candidate.phone)

        updated = existing.model_copy(
            update={
                "first_name": candidate.first_name,
                "last_name": candidate.last_name,
                "email": candidate.email,
                "phone": candidate.phone,
                "address": candidate.address,
                "city": candidate.city,
                "postal_code": candidate.postal_code,
                "age": candidate.age,
                "observations": candidate.observations,
                "is_active": candidate.is_active,
                "updated_at": utc_now(),
            }
        )

        try:
            async with self.unit_of_work:
                await self.unit_of_work.update(updated)
        except IntegrityError as e:
            raise ConflictingEntityFound("Owner", "email", candidate.email) from e

        return updated

    async def delete_owner(self, owner_id: UUID) -> None:
        """
        Delete an owner that holds no animals.

        Raises:
            EntityNotFound: If the owner does not exist
            OwnerHasAnimals: If any animal still references the owner
        """
        logger.info("Deleting owner %s", owner_id)
        owner = await self.get_owner(owner_id)

        animal_count = await self.animal_repository.count_by_owner(owner_id)
        if animal_count > 0:
            raise OwnerHasAnimals(owner_id, animal_count)

        # An animal assigned after the count still trips the foreign key
        try:
            async with self.unit_of_work:
                await self.unit_of_work.delete(owner)
        except IntegrityError as e:
            animal_count = await self.animal_repository.count_by_owner(owner_id)
            raise OwnerHasAnimals(owner_id, max(animal_count, 1)) from e

    async def activate_owner(self, owner_id: UUID) -> Owner:
        logger.info("Activating owner %s", owner_id)
        return await self._set_active(owner_id, True)

    async def deactivate_owner(self, owner_id: UUID) -> Owner:
        logger.info("Deactivating owner %s", owner_id)
        return await self._set_active(owner_id, False)

    async def _set_active(self, owner_id: UUID, active: bool) -> Owner:
        owner = await self.get_owner(owner_id)
        if active:
            owner.activate()
        else:
            owner.deactivate()
        owner.updated_at = utc_now()

        async with self.unit_of_work:
            await self.unit_of_work.update(owner)
        return owner

    async def get_owner(self, owner_id: UUID) -> Owner:
        """Get an owner by ID."""
        owner = await self.repository.get_by_id(owner_id)
        if not owner:
            raise EntityNotFound("Owner", owner_id)
        return owner

    async def get_owner_by_email(self, email: str) -> Owner:
        """Get an owner by email."""
        owner = await self.repository.get_by_email(email)
        if not owner:
            raise EntityNotFound("Owner", email, field_name="email")
        return owner

    async def list_owners(self) -> list[Owner]:
        return await self.repository.list_all()

    async def search_by_name(self, fragment: str) -> list[Owner]:
        logger.info("Searching owners by name '%s'", fragment)
        return await self.repository.search_by_name(fragment)

    async def search_by_city(self, city: str) -> list[Owner]:
        logger.info("Searching owners by city '%s'", city)
        return await self.repository.find_by_city(city)

    async def list_with_animals(self) -> list[Owner]:
        return await self.repository.find_with_animals()

    async def list_without_animals(self) -> list[Owner]:
        return await self.repository.find_without_animals()

    async def list_active(self) -> list[Owner]:
        return await self.repository.find_by_active(True)

    async def filter_owners(self, criteria: OwnerFilter) -> list[Owner]:
        logger.info("Filtering owners by %s", criteria.model_dump(exclude_none=True))
        return await self.repository.find_by_criteria(criteria)

    async def owners_by_animal_breed(self, breed: str) -> list[Owner]:
        return await self.repository.find_by_animal_breed(breed)

    async def city_statistics(self) -> list[CityStatistic]:
        return await self.repository.city_statistics()

    async def ownership_statistics(self) -> list[OwnershipStatistic]:
        return await self.repository.ownership_statistics()
