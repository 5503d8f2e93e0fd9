"""Infrastructure mappers for converting between domain models and database entities."""
from src.registry.infrastructure.mappers.owner_mapper import OwnerMapper
from src.registry.infrastructure.mappers.animal_mapper import AnimalMapper

__all__ = [
    "OwnerMapper",
    "AnimalMapper",
]
