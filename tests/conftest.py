"""Shared test fixtures and utilities for all tests."""
import asyncio
import os

import pytest
import pytest_asyncio
from dependency_injector import providers
from httpx import ASGITransport, AsyncClient
from testcontainers.postgres import PostgresContainer

from src.registry.containers import Container
from src.client.registry_client import RegistryClient
from src.shared.database.database import Database, DatabaseSettings
from src.shared.database.unit_of_work import UnitOfWork


@pytest.fixture(scope="session")
def postgres_container():
    """Start a PostgreSQL container for testing. Session-scoped for reuse."""
    with PostgresContainer("postgres:16-alpine") as postgres:
        yield postgres


@pytest.fixture(scope="function")
def async_db_url(request, tmp_path):
    """
    Get the async database URL for the current test.

    Defaults to a fresh SQLite file per test. TEST_DATABASE_URL points the
    tests at an existing database, TEST_POSTGRES_CONTAINER=1 starts one.
    """
    if os.environ.get("TEST_DATABASE_URL"):
        return os.environ["TEST_DATABASE_URL"]
    if os.environ.get("TEST_POSTGRES_CONTAINER") == "1":
        postgres = request.getfixturevalue("postgres_container")
        connection_url = postgres.get_connection_url()
        return connection_url.replace("postgresql+psycopg2://", "postgresql+asyncpg://")
    return f"sqlite+aiosqlite:///{tmp_path / 'registry.db'}"


@pytest.fixture(scope="function")
def test_settings_override(async_db_url, monkeypatch):
    """
    Centralized settings override for all test configurations.

    Points the application settings at the test database and keeps the
    sample data out of it.
    """
    monkeypatch.setenv("DATABASE_URL", async_db_url)
    monkeypatch.setenv("SEED__ENABLED", "false")

    # Clear settings cache to force reload with new env vars
    from src.registry.config import get_settings
    get_settings.cache_clear()

    yield

    get_settings.cache_clear()


async def wait_till_db_ready(db: Database, max_attempts: int = 20):
    """
    Wait for database to be ready.

    Raises:
        Exception: If database is not ready after max_attempts
    """
    for attempt in range(max_attempts):
        try:
            async with db._engine.begin():
                return
        except Exception:
            await asyncio.sleep(0.2)
    raise Exception(f"Database not ready after {max_attempts} attempts")


@pytest_asyncio.fixture(scope="function")
async def db(async_db_url):
    """
    Create database instance with test database.
    Function-scoped for test isolation.
    """
    db = Database(DatabaseSettings(db_url=async_db_url))
    await wait_till_db_ready(db)
    yield db
    await db.dispose()


@pytest_asyncio.fixture(scope="function")
async def clean_database(db):
    """
    Clean the database before each test.
    Drops and recreates all tables.
    """
    await db.drop_schema()
    await db.create_schema()
    yield db


@pytest.fixture(scope="function")
def test_container(test_settings_override, clean_database):
    """
    Create a test container with database override for proper test isolation.

    Overrides the container's database singleton with the test database.
    """
    container = Container()
    container.database.override(providers.Object(clean_database))

    container.wire(modules=[
        "src.registry.api.v1.animals",
        "src.registry.api.v1.owners",
    ])
    yield container
    container.database.reset_override()
    container.unwire()


@pytest_asyncio.fixture(scope="function")
async def test_app(test_container):
    """
    Create test application with container.

    ASGITransport does not run the lifespan; tables already exist from clean_database.
    """
    from src.registry.main import create_app

    yield create_app(test_container)


@pytest_asyncio.fixture
async def registry_client(test_app):
    """Create a registry client talking to the test application in-process."""
    transport = ASGITransport(app=test_app)
    http_client = AsyncClient(transport=transport, base_url="http://test")
    client = RegistryClient(base_url="http://test", client=http_client)

    async with client:
        yield client
    await http_client.aclose()


@pytest_asyncio.fixture(scope="function")
async def unit_of_work(clean_database, test_container):
    """
    Fixture for a UnitOfWork instance with a clean database.
    Uses the container's entity_mapper singleton.
    """
    entity_mapper = test_container.entity_mapper()
    yield UnitOfWork(clean_database, entity_mapper)


# =========================================================================
# Common repository fixtures (available to all test directories)
# =========================================================================

@pytest.fixture
def animal_repository(test_container):
    """Get animal repository from container."""
    return test_container.animal_repository()


@pytest.fixture
def owner_repository(test_container):
    """Get owner repository from container."""
    return test_container.owner_repository()


# =========================================================================
# Common service fixtures (available to all test directories)
# =========================================================================

@pytest.fixture
def animal_service(test_container):
    """Get animal service from container."""
    return test_container.animal_service()


@pytest.fixture
def owner_service(test_container):
    """Get owner service from container."""
    return test_container.owner_service()


@pytest.fixture
def ownership_service(test_container):
    """Get ownership service from container."""
    return test_container.ownership_service()
