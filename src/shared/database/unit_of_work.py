from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from src.shared.database.database import Database
from src.shared.database.entity_mapper import EntityMapper


class UnitOfWork:
    """
    One transaction spanning every write registered inside the ``async with`` block.

    Commits on a clean exit and rolls back when the block raises.
    """

    def __init__(
        self,
        db: Database,
        entity_mapper: EntityMapper,
    ) -> None:
        self.db = db
        self.session: AsyncSession
        self.entity_mapper = entity_mapper

    async def __aenter__(self):
        self.session = self.db.session_maker()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        try:
            if exc_type is None:
                await self.commit()
            else:
                await self.rollback()
        finally:
            await self.session.close()

    def _map_to_entity(self, model_instance: Any):
        return self.entity_mapper.map_to_entity(model_instance)

    def add(self, model_instance: Any):
        entity = self._map_to_entity(model_instance)
        self.session.add(entity)

    async def update(self, model_instance: Any):
        entity = self._map_to_entity(model_instance)
        await self.session.merge(entity)

    async def delete(self, model_instance: Any):
        # merge() attaches the persistent row so the session can delete it
        entity = await self.session.merge(self._map_to_entity(model_instance))
        await self.session.delete(entity)

    async def commit(self):
        try:
            await self.session.commit()
        except Exception:
            await self.rollback()
            raise

    async def rollback(self):
        await self.session.rollback()
