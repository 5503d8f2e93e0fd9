from datetime import date
from uuid import UUID
from typing import Optional
from sqlalchemy import func, select

from src.registry.core.domain.models import Animal, AnimalFilter, BreedStatistic
from src.shared.database.base_repo import BaseRepository
from src.shared.database.database import Database

from src.registry.infrastructure.entities.animal_entity import AnimalEntity
from src.registry.infrastructure.mappers.animal_mapper import AnimalMapper


class AnimalRepository(BaseRepository[AnimalEntity, Animal]):
    """Repository for Animal operations."""

    def __init__(self, db: Database, mapper: AnimalMapper):
        super().__init__(db, mapper)

    async def get_by_id(self, animal_id: UUID) -> Optional[Animal]:
        """Get an animal by ID."""
        return await self.find_one(
            select(AnimalEntity).where(AnimalEntity.id == animal_id)
        )

    async def list_all(self) -> list[Animal]:
        return await self.find_all(select(AnimalEntity).order_by(AnimalEntity.name))

    async def exists_by_id(self, animal_id: UUID) -> bool:
        return await self.exists(
            select(AnimalEntity.id).where(AnimalEntity.id == animal_id)
        )

    async def exists_by_name(self, name: str) -> bool:
        """Case-insensitive check for an animal with exactly this name."""
        return await self.exists(
            select(AnimalEntity.id).where(func.lower(AnimalEntity.name) == func.lower(name))
        )

    async def search_by_name(self, fragment: str) -> list[Animal]:
        """Animals whose name contains ``fragment``, ignoring case."""
        return await self.find_all(
            select(AnimalEntity)
            .where(func.lower(AnimalEntity.name).contains(fragment.lower(), autoescape=True))
            .order_by(AnimalEntity.name)
        )

    async def find_by_breed(self, breed: str) -> list[Animal]:
        return await self.find_all(
            select(AnimalEntity)
            .where(func.lower(AnimalEntity.breed) == func.lower(breed))
            .order_by(AnimalEntity.name)
        )

    async def find_available_for_adoption(self) -> list[Animal]:
        """Animals without an owner that are flagged available."""
        return await self.find_all(
            select(AnimalEntity)
            .where(AnimalEntity.owner_id.is_(None), AnimalEntity.is_available.is_(True))
            .order_by(AnimalEntity.name)
        )

    async def find_born_since(self, cutoff: date) -> list[Animal]:
        """Animals born on or after ``cutoff``; used for the puppies listing."""
        return await self.find_all(
            select(AnimalEntity)
            .where(AnimalEntity.birth_date >= cutoff)
            .order_by(AnimalEntity.name)
        )

    async def find_by_criteria(self, criteria: AnimalFilter) -> list[Animal]:
        """Multi-criteria search; every unset criterion is ignored."""
        stmt = select(AnimalEntity)
        if criteria.breed is not None:
            stmt = stmt.where(func.lower(AnimalEntity.breed) == func.lower(criteria.breed))
        if criteria.color is not None:
            stmt = stmt.where(func.lower(AnimalEntity.color) == func.lower(criteria.color))
        if criteria.min_age is not None:
            stmt = stmt.where(AnimalEntity.age >= criteria.min_age)
        if criteria.max_age is not None:
            stmt = stmt.where(AnimalEntity.age <= criteria.max_age)
        return await self.find_all(stmt.order_by(AnimalEntity.name))

    async def find_by_owner(self, owner_id: UUID) -> list[Animal]:
        return await self.find_all(
            select(AnimalEntity)
            .where(AnimalEntity.owner_id == owner_id)
            .order_by(AnimalEntity.name)
        )

    async def count_by_owner(self, owner_id: UUID) -> int:
        return await self.scalar(
            select(func.count(AnimalEntity.id)).where(AnimalEntity.owner_id == owner_id)
        )

    async def breed_statistics(self) -> list[BreedStatistic]:
        """Number of animals per breed, most common breed first."""
        count = func.count(AnimalEntity.id)
        rows = await self.fetch_rows(
            select(AnimalEntity.breed, count)
            .group_by(AnimalEntity.breed)
            .order_by(count.desc(), AnimalEntity.breed)
        )
        return [BreedStatistic(breed=breed, count=total) for breed, total in rows]
