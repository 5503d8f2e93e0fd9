from uuid import UUID
from typing import Optional
from sqlalchemy import Select, exists, func, or_, select

from src.registry.core.domain.models import CityStatistic, Owner, OwnerFilter, OwnershipStatistic
from src.shared.database.base_repo import BaseRepository
from src.shared.database.database import Database

from src.registry.infrastructure.entities.animal_entity import AnimalEntity
from src.registry.infrastructure.entities.owner_entity import OwnerEntity
from src.registry.infrastructure.mappers.owner_mapper import OwnerMapper


def _animal_count():
    """Correlated count of the animals that reference the outer owner row."""
    return (
        select(func.count(AnimalEntity.id))
        .where(AnimalEntity.owner_id == OwnerEntity.id)
        .correlate(OwnerEntity)
        .scalar_subquery()
    )


class OwnerRepository(BaseRepository[OwnerEntity, Owner]):
    """
    Repository for Owner operations.

    Owners never store their animals. Every read computes ``animal_count``
    from the animals table, so the count is always current.
    """

    def __init__(self, db: Database, mapper: OwnerMapper):
        super().__init__(db, mapper)

    @staticmethod
    def _select() -> Select:
        return select(OwnerEntity, _animal_count().label("animal_count"))

    async def _find_owners(self, statement: Select) -> list[Owner]:
        rows = await self._find_with_extra(statement)
        return [owner.model_copy(update={"animal_count": count or 0}) for owner, count in rows]

    async def _find_owner(self, statement: Select) -> Optional[Owner]:
        owners = await self._find_owners(statement)
        return owners[0] if owners else None

    async def get_by_id(self, owner_id: UUID) -> Optional[Owner]:
        """Get an owner by ID."""
        return await self._find_owner(self._select().where(OwnerEntity.id == owner_id))

    async def get_by_email(self, email: str) -> Optional[Owner]:
        """Get an owner by email, ignoring case."""
        return await self._find_owner(
            self._select().where(func.lower(OwnerEntity.email) == func.lower(email))
        )

    async def list_all(self) -> list[Owner]:
        return await self._find_owners(
            self._select().order_by(OwnerEntity.last_name, OwnerEntity.first_name)
        )

    async def exists_by_email(self, email: str) -> bool:
        return await self.exists(
            select(OwnerEntity.id).where(func.lower(OwnerEntity.email) == func.lower(email))
        )

    async def exists_by_phone(self, phone: str) -> bool:
        """Exact (case-sensitive) phone match."""
        return await self.exists(select(OwnerEntity.id).where(OwnerEntity.phone == phone))

    async def search_by_name(self, fragment: str) -> list[Owner]:
        """Owners whose first or last name contains ``fragment``, ignoring case."""
        needle = fragment.lower()
        return await self._find_owners(
            self._select()
            .where(
                or_(
                    func.lower(OwnerEntity.first_name).contains(needle, autoescape=True),
                    func.lower(OwnerEntity.last_name).contains(needle, autoescape=True),
                )
            )
            .order_by(OwnerEntity.last_name, OwnerEntity.first_name)
        )

    async def find_by_city(self, city: str) -> list[Owner]:
        return await self._find_owners(
            self._select()
            .where(func.lower(OwnerEntity.city) == func.lower(city))
            .order_by(OwnerEntity.last_name, OwnerEntity.first_name)
        )

    async def find_with_animals(self) -> list[Owner]:
        return await self._find_owners(
            self._select()
            .where(_animal_count() > 0)
            .order_by(OwnerEntity.last_name, OwnerEntity.first_name)
        )

    async def find_without_animals(self) -> list[Owner]:
        return await self._find_owners(
            self._select()
            .where(_animal_count() == 0)
            .order_by(OwnerEntity.last_name, OwnerEntity.first_name)
        )

    async def find_by_active(self, is_active: bool) -> list[Owner]:
        return await self._find_owners(
            self._select()
            .where(OwnerEntity.is_active.is_(is_active))
            .order_by(OwnerEntity.last_name, OwnerEntity.first_name)
        )

    async def find_by_criteria(self, criteria: OwnerFilter) -> list[Owner]:
        """Multi-criteria search; every unset criterion is ignored."""
        stmt = self._select()
        if criteria.city is not None:
            stmt = stmt.where(func.lower(OwnerEntity.city) == func.lower(criteria.city))
        if criteria.min_age is not None:
            stmt = stmt.where(OwnerEntity.age >= criteria.min_age)
        if criteria.max_age is not None:
            stmt = stmt.where(OwnerEntity.age <= criteria.max_age)
        if criteria.is_active is not None:
            stmt = stmt.where(OwnerEntity.is_active.is_(criteria.is_active))
        return await self._find_owners(
            stmt.order_by(OwnerEntity.last_name, OwnerEntity.first_name)
        )

    async def find_by_animal_breed(self, breed: str) -> list[Owner]:
        """Owners holding at least one animal of ``breed`` (case-insensitive)."""
        has_breed = exists().where(
            AnimalEntity.owner_id == OwnerEntity.id,
            func.lower(AnimalEntity.breed) == func.lower(breed),
        )
        return await self._find_owners(
            self._select()
            .where(has_breed)
            .order_by(OwnerEntity.last_name, OwnerEntity.first_name)
        )

    async def city_statistics(self) -> list[CityStatistic]:
        """Number of owners per city, most populated city first."""
        count = func.count(OwnerEntity.id)
        rows = await self.fetch_rows(
            select(OwnerEntity.city, count)
            .group_by(OwnerEntity.city)
            .order_by(count.desc(), OwnerEntity.city)
        )
        return [CityStatistic(city=city, count=total) for city, total in rows]

    async def ownership_statistics(self) -> list[OwnershipStatistic]:
        """
        Histogram of owners by how many animals they hold.

        Owners without animals fall in the ``animal_count == 0`` bucket.
        """
        per_owner = (
            select(
                OwnerEntity.id.label("owner_id"),
                func.count(AnimalEntity.id).label("animal_count"),
            )
            .select_from(OwnerEntity)
            .outerjoin(AnimalEntity, AnimalEntity.owner_id == OwnerEntity.id)
            .group_by(OwnerEntity.id)
            .subquery()
        )
        rows = await self.fetch_rows(
            select(per_owner.c.animal_count, func.count(per_owner.c.owner_id))
            .group_by(per_owner.c.animal_count)
            .order_by(per_owner.c.animal_count)
        )
        return [
            OwnershipStatistic(animal_count=animal_count, owner_count=owner_count)
            for animal_count, owner_count in rows
        ]
