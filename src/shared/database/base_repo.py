import abc
from typing import Any, Generic, Optional, Sequence, TypeVar

from sqlalchemy import Executable, Select

from src.shared.database.base_mapper import BaseEntityMapper
from src.shared.database.database import Database


TEntity = TypeVar("TEntity")
TModel = TypeVar("TModel")


class BaseRepository(abc.ABC, Generic[TEntity, TModel]):
    def __init__(self, db: Database, mapper: BaseEntityMapper[TModel, TEntity]):
        self.db = db
        self.mapper = mapper

    async def find_one(self, statement: Executable) -> Optional[TModel]:
        async with self.db.session_maker() as session:
            result = await session.execute(statement)
            entity = result.scalar_one_or_none()
            if entity is None:
                return None
            return self.mapper.to_model(entity)

    async def find_all(self, statement: Executable) -> list[TModel]:
        async with self.db.session_maker() as session:
            result = await session.execute(statement)
            entities = list(result.scalars().all())
            return [self.mapper.to_model(entity) for entity in entities]

    async def exists(self, statement: Select) -> bool:
        """Return True when the statement yields at least one row."""
        async with self.db.session_maker() as session:
            result = await session.execute(statement.limit(1))
            return result.first() is not None

    async def scalar(self, statement: Executable) -> Any:
        async with self.db.session_maker() as session:
            result = await session.execute(statement)
            return result.scalar_one()

    async def fetch_rows(self, statement: Executable) -> Sequence[Any]:
        """
        Execute a query returning plain rows (aggregates, grouped counts).

        Use this for statistics queries whose columns are not a mapped entity.
        """
        async with self.db.session_maker() as session:
            result = await session.execute(statement)
            return result.all()

    async def _find_with_extra(
        self, statement: Executable
    ) -> list[tuple[TModel, Any]]:
        """
        Execute a query returning (entity, value) tuples and map entities to models.

        Use this for queries that compute a column alongside each entity, such as a
        correlated count.

        Args:
            statement: SQLAlchemy select statement returning (Entity, value) tuples

        Returns:
            List of (model, value) tuples
        """
        async with self.db.session_maker() as session:
            result = await session.execute(statement)
            rows = result.all()

        return [(self.mapper.to_model(entity), value) for entity, value in rows]
