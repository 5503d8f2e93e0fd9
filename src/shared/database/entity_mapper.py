from typing import Any, Callable, Dict, Type


class EntityMapper:
    """Dispatches a domain model to the mapper registered for its type (or a base type)."""

    def __init__(self, entity_mappings: Dict[Type, Callable[[Any], Any]]):
        self.entity_mappings = entity_mappings

    def map_to_entity(self, model_instance: Any):
        for model_type in type(model_instance).__mro__:
            if model_type in self.entity_mappings:
                return self.entity_mappings[model_type](model_instance)
        raise ValueError(f"No entity mapping found for model type: {type(model_instance)}")
