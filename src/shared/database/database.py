import logging

from pydantic import BaseModel
from sqlalchemy import event
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.orm import declarative_base

logger = logging.getLogger(__name__)

Base = declarative_base()


class DatabaseSettings(BaseModel):
    db_url: str
    echo: bool = False
    pool_pre_ping: bool = True


def _unicode_lower(value):
    return value.lower() if value is not None else None


def _register_sqlite_functions(dbapi_connection, connection_record) -> None:
    # SQLite's built-in lower() only folds ASCII
    dbapi_connection.create_function("lower", 1, _unicode_lower)


class Database:
    def __init__(self, db_settings: DatabaseSettings) -> None:
        self._engine = create_async_engine(
            db_settings.db_url,
            echo=db_settings.echo,
            pool_pre_ping=db_settings.pool_pre_ping,
        )
        if self._engine.dialect.name == "sqlite":
            event.listen(self._engine.sync_engine, "connect", _register_sqlite_functions)
        self.session_maker: async_sessionmaker[AsyncSession] = async_sessionmaker(self._engine, expire_on_commit=False)

    async def create_schema(self) -> None:
        """Create every table registered on the declarative Base."""
        async with self._engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database schema ensured")

    async def drop_schema(self) -> None:
        async with self._engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)

    async def dispose(self) -> None:
        await self._engine.dispose()
