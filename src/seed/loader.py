"""Loads a seed data set, either through the HTTP API or in-process."""
import logging
from dataclasses import dataclass, field
from uuid import UUID

from src.client.registry_client import RegistryClient
from src.registry.api.mappers import to_animal_candidate, to_owner_candidate
from src.registry.core.services.animal_service import AnimalService
from src.registry.core.services.owner_service import OwnerService
from src.registry.core.services.ownership_service import OwnershipService
from src.seed.schema import AnimalRecord, DataSet

logger = logging.getLogger(__name__)


@dataclass
class SeedSummary:
    """What a seeding run created, keyed the way the data set refers to it."""

    owner_ids: dict[str, UUID] = field(default_factory=dict)
    animal_ids: dict[str, UUID] = field(default_factory=dict)
    assignments: int = 0

    @property
    def owners_created(self) -> int:
        return len(self.owner_ids)

    @property
    def animals_created(self) -> int:
        return len(self.animal_ids)


def _owner_key(email: str) -> str:
    return email.lower()


def _check_references(data: DataSet) -> None:
    known = data.owner_emails()
    missing = sorted(
        {a.owner_email for a in data.animals if a.owner_email and _owner_key(a.owner_email) not in known}
    )
    if missing:
        raise ValueError(f"Animals reference unknown owner emails: {', '.join(missing)}")


def _animal_request(record: AnimalRecord):
    return record.model_copy(update={"owner_email": None})


class RegistrySeeder:
    """
    Seeds a running registry through its HTTP API.

    Responsible for:
    - Creating owners
    - Creating animals
    - Assigning each animal to the owner its record references
    """

    def __init__(self, client: RegistryClient):
        self.client = client

    async def seed(self, data: DataSet) -> SeedSummary:
        """
        Load every owner, then every animal, then the owner assignments.

        Raises:
            ValueError: If an animal references an owner that is not in the data set
            httpx.HTTPStatusError: If the API rejects a record
        """
        _check_references(data)
        summary = SeedSummary()

        for owner in data.owners:
            created = await self.client.create_owner(owner)
            summary.owner_ids[_owner_key(created.email)] = created.id
            logger.info("Created owner %s (%s)", created.full_name, created.id)

        for record in data.animals:
            created = await self.client.create_animal(_animal_request(record))
            summary.animal_ids[created.name] = created.id
            logger.info("Created animal %s (%s)", created.name, created.id)

            if record.owner_email:
                owner_id = summary.owner_ids[_owner_key(record.owner_email)]
                await self.client.assign_owner(created.id, owner_id)
                summary.assignments += 1

        return summary


async def seed_services(
    data: DataSet,
    owner_service: OwnerService,
    animal_service: AnimalService,
    ownership_service: OwnershipService,
) -> SeedSummary:
    """Same as ``RegistrySeeder.seed`` but calls the services directly."""
    _check_references(data)
    summary = SeedSummary()

    for owner_request in data.owners:
        owner = await owner_service.create_owner(to_owner_candidate(owner_request))
        summary.owner_ids[_owner_key(owner.email)] = owner.id

    for record in data.animals:
        animal = await animal_service.create_animal(to_animal_candidate(record))
        summary.animal_ids[animal.name] = animal.id
        if record.owner_email:
            await ownership_service.assign_owner(animal.id, summary.owner_ids[_owner_key(record.owner_email)])
            summary.assignments += 1

    logger.info(
        "Seeded %d owners and %d animals (%d assigned)",
        summary.owners_created,
        summary.animals_created,
        summary.assignments,
    )
    return summary
