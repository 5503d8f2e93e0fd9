"""Maintains the link between an animal and its owner."""
import logging
from uuid import UUID

from src.registry.core.domain.models import Animal
from src.registry.infrastructure.animal_repository import AnimalRepository
from src.registry.infrastructure.owner_repository import OwnerRepository
from src.shared.database.unit_of_work import UnitOfWork
from src.shared.exceptions import EntityNotFound

logger = logging.getLogger(__name__)


class OwnershipService:
    """
    Assign and remove owners.

    The link lives on the animal (``owner_id``). Owners see their animals
    through a query, never through a stored list. Assigning marks the animal
    unavailable and removing marks it available again. Both overwrite the two
    fields whatever the previous state was.
    """

    def __init__(
        self,
        animal_repository: AnimalRepository,
        owner_repository: OwnerRepository,
        unit_of_work: UnitOfWork,
    ):
        self.animal_repository = animal_repository
        self.owner_repository = owner_repository
        self.unit_of_work = unit_of_work

    async def assign_owner(self, animal_id: UUID, owner_id: UUID) -> Animal:
        """
        Link an animal to an owner.

        The animal is looked up first; when it is missing the owner is never queried.

        Raises:
            EntityNotFound: ANIMAL_NOT_FOUND or OWNER_NOT_FOUND
        """
        logger.info("Assigning owner %s to animal %s", owner_id, animal_id)
        animal = await self.animal_repository.get_by_id(animal_id)
        if not animal:
            raise EntityNotFound("Animal", animal_id)

        owner = await self.owner_repository.get_by_id(owner_id)
        if not owner:
            raise EntityNotFound("Owner", owner_id)

        animal.assign_owner(owner)
        async with self.unit_of_work:
            await self.unit_of_work.update(animal)

        return animal

    async def remove_owner(self, animal_id: UUID) -> Animal:
        """Clear the owner link of an animal and make it available again."""
        logger.info("Removing owner from animal %s", animal_id)
        animal = await self.animal_repository.get_by_id(animal_id)
        if not animal:
            raise EntityNotFound("Animal", animal_id)

        animal.release_owner()
        async with self.unit_of_work:
            await self.unit_of_work.update(animal)

        return animal

    async def animals_of(self, owner_id: UUID) -> list[Animal]:
        """List the animals of an owner."""
        owner = await self.owner_repository.get_by_id(owner_id)
        if not owner:
            raise EntityNotFound("Owner", owner_id)
        return await self.animal_repository.find_by_owner(owner_id)
