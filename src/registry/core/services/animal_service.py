"""Animal service: create, update, delete and query animals."""
import logging
from datetime import date
from typing import Callable
from uuid import UUID, uuid4

from src.registry.core.domain.models import (
    Animal,
    AnimalCandidate,
    AnimalFilter,
    AnimalSize,
    BreedStatistic,
    utc_now,
)
from src.registry.core.domain.rules import (
    age_from_birth_date,
    puppy_cutoff,
    size_from_weight,
    validate_animal,
)
from src.registry.infrastructure.animal_repository import AnimalRepository
from src.shared.database.unit_of_work import UnitOfWork
from src.shared.exceptions import ConflictingEntityFound, EntityNotFound

logger = logging.getLogger(__name__)


class AnimalService:
    """Service for handling Animal business logic."""

    def __init__(
        self,
        repository: AnimalRepository,
        unit_of_work: UnitOfWork,
        today: Callable[[], date] = date.today,
    ):
        """
        Initialize the animal service.

        Args:
            repository: Repository for animal reads
            unit_of_work: Unit of work for database transactions
            today: Clock used to derive ages and the puppy cutoff
        """
        self.repository = repository
        self.unit_of_work = unit_of_work
        self.today = today

    async def create_animal(self, candidate: AnimalCandidate) -> Animal:
        """
        Validate, complete derived fields and persist a new animal.

        Raises:
            RuleViolation: If the candidate breaks a validation rule
            ConflictingEntityFound: If another animal already has this name (any case)
        """
        logger.info("Creating animal '%s'", candidate.name)
        validate_animal(candidate)

        if await self.repository.exists_by_name(candidate.name):
            raise ConflictingEntityFound("Animal", "name", candidate.name)

        now = utc_now()
        animal = Animal(
            id=uuid4(),
            name=candidate.name,
            breed=candidate.breed,
            age=self._resolve_age(candidate),
            color=candidate.color,
            weight=candidate.weight,
            birth_date=candidate.birth_date,
            description=candidate.description,
            is_vaccinated=candidate.is_vaccinated,
            size=AnimalSize(candidate.size) if candidate.size else size_from_weight(candidate.weight),
            is_available=True if candidate.is_available is None else candidate.is_available,
            owner_id=None,
            created_at=now,
            updated_at=now,
        )

        async with self.unit_of_work:
            self.unit_of_work.add(animal)

        logger.info("Animal %s created with size %s", animal.id, animal.size)
        return animal

    async def update_animal(self, animal_id: UUID, candidate: AnimalCandidate) -> Animal:
        """
        Replace every field of an animal except its id, owner link and creation time.

        An omitted size keeps the stored one; it is derived from weight only
        when the animal had none. An omitted availability flag is kept as well.

        Raises:
            EntityNotFound: If the animal does not exist
            RuleViolation: If the candidate breaks a validation rule
            ConflictingEntityFound: If the new name belongs to another animal
        """
        logger.info("Updating animal %s", animal_id)
        existing = await self.get_animal(animal_id)
        validate_animal(candidate)

        renamed = existing.name.lower() != candidate.name.lower()
        if renamed and await self.repository.exists_by_name(candidate.name):
            raise ConflictingEntityFound("Animal", "name", candidate.name)

        if candidate.size:
            size = AnimalSize(candidate.size)
        elif existing.size is not None:
            size = existing.size
        else:
            size = size_from_weight(candidate.weight)

        updated = existing.model_copy(
            update={
                "name": candidate.name,
                "breed": candidate.breed,
                "age": self._resolve_age(candidate),
                "color": candidate.color,
                "weight": candidate.weight,
                "birth_date": candidate.birth_date,
                "description": candidate.description,
                "is_vaccinated": candidate.is_vaccinated,
                "size": size,
                "is_available": existing.is_available if candidate.is_available is None else candidate.is_available,
                "updated_at": utc_now(),
            }
        )

        async with self.unit_of_work:
            await self.unit_of_work.update(updated)

        return updated

    async def delete_animal(self, animal_id: UUID) -> None:
        """Delete an animal. There are no dependency checks beyond existence."""
        logger.info("Deleting animal %s", animal_id)
        animal = await self.get_animal(animal_id)
        async with self.unit_of_work:
            await self.unit_of_work.delete(animal)

    async def get_animal(self, animal_id: UUID) -> Animal:
        """Get an animal by ID."""
        animal = await self.repository.get_by_id(animal_id)
        if not animal:
            raise EntityNotFound("Animal", animal_id)
        return animal

    async def list_animals(self) -> list[Animal]:
        return await self.repository.list_all()

    async def search_by_name(self, fragment: str) -> list[Animal]:
        logger.info("Searching animals by name '%s'", fragment)
        return await self.repository.search_by_name(fragment)

    async def search_by_breed(self, breed: str) -> list[Animal]:
        logger.info("Searching animals by breed '%s'", breed)
        return await self.repository.find_by_breed(breed)

    async def list_available_for_adoption(self) -> list[Animal]:
        return await self.repository.find_available_for_adoption()

    async def list_puppies(self) -> list[Animal]:
        """Animals whose calendar-year age is below one."""
        return await self.repository.find_born_since(puppy_cutoff(self.today()))

    async def filter_animals(self, criteria: AnimalFilter) -> list[Animal]:
        logger.info("Filtering animals by %s", criteria.model_dump(exclude_none=True))
        return await self.repository.find_by_criteria(criteria)

    async def breed_statistics(self) -> list[BreedStatistic]:
        return await self.repository.breed_statistics()

    def _resolve_age(self, candidate: AnimalCandidate) -> int:
        if candidate.age is not None:
            return candidate.age
        return age_from_birth_date(candidate.birth_date, self.today())
