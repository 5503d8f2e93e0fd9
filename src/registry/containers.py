"""Dependency injection container using dependency-injector library."""
from dependency_injector import containers, providers

from src.registry.config import Settings
from src.shared.database.database import Database, DatabaseSettings
from src.shared.database.unit_of_work import UnitOfWork
from src.shared.database.entity_mapper import EntityMapper

from src.registry.infrastructure.mappers.animal_mapper import AnimalMapper
from src.registry.infrastructure.mappers.owner_mapper import OwnerMapper

from src.registry.infrastructure.animal_repository import AnimalRepository
from src.registry.infrastructure.owner_repository import OwnerRepository

from src.registry.core.services.animal_service import AnimalService
from src.registry.core.services.owner_service import OwnerService
from src.registry.core.services.ownership_service import OwnershipService

from src.registry.core.domain.models import Animal, Owner


def create_entity_mapper(
    animal_mapper: AnimalMapper,
    owner_mapper: OwnerMapper,
) -> EntityMapper:
    """Factory function to create EntityMapper with proper mappings."""
    return EntityMapper(
        entity_mappings={
            Animal: animal_mapper.to_entity,
            Owner: owner_mapper.to_entity,
        }
    )


class Container(containers.DeclarativeContainer):
    """Main application dependency injection container."""

    wiring_config = containers.WiringConfiguration(
        modules=[
            "src.registry.api.v1.animals",
            "src.registry.api.v1.owners",
        ]
    )

    # =========================================================================
    # CONFIGURATION - Singleton (loaded once, cached)
    # =========================================================================
    config = providers.Singleton(Settings)

    # =========================================================================
    # SINGLETONS - Stateless Mappers (reusable across all requests)
    # =========================================================================
    animal_mapper = providers.Singleton(AnimalMapper)
    owner_mapper = providers.Singleton(OwnerMapper)

    entity_mapper = providers.Singleton(
        create_entity_mapper,
        animal_mapper=animal_mapper,
        owner_mapper=owner_mapper,
    )

    # =========================================================================
    # SINGLETON - Database (shared connection pool)
    # =========================================================================
    database_settings = providers.Singleton(
        DatabaseSettings,
        db_url=config.provided.database_url,
        echo=config.provided.database.echo,
        pool_pre_ping=config.provided.database.pool_pre_ping,
    )

    database = providers.Singleton(
        Database,
        db_settings=database_settings,
    )

    # =========================================================================
    # FACTORIES - Repositories (per-request, share database singleton)
    # =========================================================================
    animal_repository = providers.Factory(
        AnimalRepository,
        db=database,
        mapper=animal_mapper,
    )

    owner_repository = providers.Factory(
        OwnerRepository,
        db=database,
        mapper=owner_mapper,
    )

    # =========================================================================
    # FACTORY - Unit of Work (per-request)
    # =========================================================================
    unit_of_work = providers.Factory(
        UnitOfWork,
        db=database,
        entity_mapper=entity_mapper,
    )

    # =========================================================================
    # FACTORIES - Services
    # =========================================================================
    animal_service = providers.Factory(
        AnimalService,
        repository=animal_repository,
        unit_of_work=unit_of_work,
    )

    owner_service = providers.Factory(
        OwnerService,
        repository=owner_repository,
        animal_repository=animal_repository,
        unit_of_work=unit_of_work,
    )

    ownership_service = providers.Factory(
        OwnershipService,
        animal_repository=animal_repository,
        owner_repository=owner_repository,
        unit_of_work=unit_of_work,
    )
