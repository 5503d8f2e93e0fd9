"""
Seed data loading for the Animal Registry.

It can be used in two ways:

1. In-process, on application startup (``SEED__ENABLED=true``):
   ```python
   from src.seed import seed_services, load_data_set
   ```

2. Via command line against a running instance:
   ```bash
   python -m src.seed --url http://localhost:8000 --data registry.json
   ```
"""

from src.seed.schema import AnimalRecord, DataSet, get_default_data_path, load_data_set
from src.seed.loader import RegistrySeeder, SeedSummary, seed_services

__all__ = [
    "AnimalRecord",
    "DataSet",
    "get_default_data_path",
    "load_data_set",
    "RegistrySeeder",
    "SeedSummary",
    "seed_services",
]
