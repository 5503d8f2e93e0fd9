"""Data models for seed data sets."""
import json
from pathlib import Path

from pydantic import BaseModel, Field

from src.client.schemas import AnimalRequest, OwnerRequest


class AnimalRecord(AnimalRequest):
    """Animal record that may reference its owner by email."""

    owner_email: str | None = Field(default=None, description="Email of an owner in the same data set")


class DataSet(BaseModel):
    """Owners and animals to load into an empty registry."""

    owners: list[OwnerRequest] = Field(default_factory=list)
    animals: list[AnimalRecord] = Field(default_factory=list)

    def owner_emails(self) -> set[str]:
        return {str(owner.email).lower() for owner in self.owners}


def get_default_data_path() -> Path:
    """Get the bundled sample data file path."""
    return Path(__file__).parent / "data" / "sample_registry.json"


def load_data_set(file_path: Path) -> DataSet:
    """Load a seed data set from JSON file."""
    with open(file_path, "r", encoding="utf-8") as f:
        data = json.load(f)
    return DataSet(**data)
