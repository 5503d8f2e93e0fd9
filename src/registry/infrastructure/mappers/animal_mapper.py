from src.shared.database.base_mapper import BaseEntityMapper
from src.registry.core.domain.models import Animal, AnimalSize
from src.registry.infrastructure.entities.animal_entity import AnimalEntity


class AnimalMapper(BaseEntityMapper[Animal, AnimalEntity]):
    """Mapper for converting between Animal domain model and AnimalEntity."""

    @staticmethod
    def to_entity(model_instance: Animal) -> AnimalEntity:
        """Convert an Animal (domain model) to AnimalEntity (database entity)."""
        return AnimalEntity(
            id=model_instance.id,
            name=model_instance.name,
            breed=model_instance.breed,
            age=model_instance.age,
            color=model_instance.color,
            weight=model_instance.weight,
            birth_date=model_instance.birth_date,
            description=model_instance.description,
            is_vaccinated=model_instance.is_vaccinated,
            size=model_instance.size,
            is_available=model_instance.is_available,
            owner_id=model_instance.owner_id,
            created_at=model_instance.created_at,
            updated_at=model_instance.updated_at,
        )

    @staticmethod
    def to_model(entity: AnimalEntity) -> Animal:
        """Convert an AnimalEntity (database entity) to Animal (domain model)."""
        return Animal(
            id=entity.id,
            name=entity.name,
            breed=entity.breed,
            age=entity.age,
            color=entity.color,
            weight=entity.weight,
            birth_date=entity.birth_date,
            description=entity.description,
            is_vaccinated=entity.is_vaccinated,
            size=AnimalSize(entity.size) if entity.size is not None else None,
            is_available=entity.is_available,
            owner_id=entity.owner_id,
            created_at=entity.created_at,
            updated_at=entity.updated_at or entity.created_at,
        )
