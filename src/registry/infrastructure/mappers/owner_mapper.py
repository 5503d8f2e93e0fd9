from src.shared.database.base_mapper import BaseEntityMapper
from src.registry.core.domain.models import Owner
from src.registry.infrastructure.entities.owner_entity import OwnerEntity


class OwnerMapper(BaseEntityMapper[Owner, OwnerEntity]):
    """Mapper for converting between Owner domain model and OwnerEntity."""

    @staticmethod
    def to_entity(model_instance: Owner) -> OwnerEntity:
        """Convert an Owner (domain model) to OwnerEntity (database entity).

        ``animal_count`` is derived on read and has no column.
        """
        return OwnerEntity(
            id=model_instance.id,
            first_name=model_instance.first_name,
            last_name=model_instance.last_name,
            email=model_instance.email,
            phone=model_instance.phone,
            address=model_instance.address,
            city=model_instance.city,
            postal_code=model_instance.postal_code,
            age=model_instance.age,
            observations=model_instance.observations,
            is_active=model_instance.is_active,
            created_at=model_instance.created_at,
            updated_at=model_instance.updated_at,
        )

    @staticmethod
    def to_model(entity: OwnerEntity) -> Owner:
        """Convert an OwnerEntity (database entity) to Owner (domain model)."""
        return Owner(
            id=entity.id,
            first_name=entity.first_name,
            last_name=entity.last_name,
            email=entity.email,
            phone=entity.phone,
            address=entity.address,
            city=entity.city,
            postal_code=entity.postal_code,
            age=entity.age,
            observations=entity.observations,
            is_active=entity.is_active,
            created_at=entity.created_at,
            updated_at=entity.updated_at or entity.created_at,
        )
