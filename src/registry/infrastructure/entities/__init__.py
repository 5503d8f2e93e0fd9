"""Database entities for the infrastructure layer."""
from src.registry.infrastructure.entities.owner_entity import OwnerEntity
from src.registry.infrastructure.entities.animal_entity import AnimalEntity

__all__ = [
    "OwnerEntity",
    "AnimalEntity",
]
