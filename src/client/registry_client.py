"""Registry HTTP Client for consuming the Animal Registry API."""
from uuid import UUID
from typing import Any, Optional
from httpx import AsyncClient, Response

from src.client.schemas import (
    AnimalCollectionResponse,
    AnimalRequest,
    AnimalResponse,
    BreedStatisticResponse,
    CityStatisticResponse,
    OwnerCollectionResponse,
    OwnerRequest,
    OwnerResponse,
    OwnershipStatisticResponse,
)


def _without_none(params: dict[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in params.items() if value is not None}


class RegistryClient:
    """HTTP client for interacting with the Animal Registry API."""

    def __init__(
        self,
        base_url: str,
        client: Optional[AsyncClient] = None,
        api_prefix: str = "/api/v1",
    ):
        """
        Initialize the registry client.

        Args:
            base_url: Base URL of the registry API (e.g., "http://localhost:8000")
            client: Optional httpx.AsyncClient instance. If not provided, a new one will be created.
            api_prefix: Path prefix the routers are mounted under
        """
        self.base_url = base_url.rstrip("/")
        self.api_prefix = api_prefix.rstrip("/")
        self._client = client
        self._owns_client = client is None

    async def __aenter__(self):
        """Async context manager entry."""
        if self._owns_client:
            self._client = AsyncClient(base_url=self.base_url)
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        if self._owns_client and self._client:
            await self._client.aclose()

    @property
    def client(self) -> AsyncClient:
        """Get the underlying httpx client."""
        if self._client is None:
            raise RuntimeError("Client not initialized. Use async context manager.")
        return self._client

    def _animals(self, path: str = "") -> str:
        return f"{self.api_prefix}/animals{path}"

    def _owners(self, path: str = "") -> str:
        return f"{self.api_prefix}/owners{path}"

    async def _get_animals(self, url: str, params: dict[str, Any] | None = None) -> AnimalCollectionResponse:
        response: Response = await self.client.get(url, params=params)
        response.raise_for_status()
        return AnimalCollectionResponse(**response.json())

    async def _get_owners(self, url: str, params: dict[str, Any] | None = None) -> OwnerCollectionResponse:
        response: Response = await self.client.get(url, params=params)
        response.raise_for_status()
        return OwnerCollectionResponse(**response.json())

    # =========================================================================
    # Animals
    # =========================================================================

    async def create_animal(self, request: AnimalRequest) -> AnimalResponse:
        """
        Create a new animal.

        Args:
            request: Animal creation request

        Returns:
            Created animal response, including its links

        Raises:
            httpx.HTTPStatusError: If the request fails (400 rule violation, 409 duplicate name)
        """
        response: Response = await self.client.post(
            self._animals(),
            json=request.model_dump(mode="json", exclude_none=True),
        )
        response.raise_for_status()
        return AnimalResponse(**response.json())

    async def get_animal(self, animal_id: UUID) -> AnimalResponse:
        """
        Get an animal by ID.

        Raises:
            httpx.HTTPStatusError: If the request fails (e.g., 404 if not found)
        """
        response: Response = await self.client.get(self._animals(f"/{animal_id}"))
        response.raise_for_status()
        return AnimalResponse(**response.json())

    async def update_animal(self, animal_id: UUID, request: AnimalRequest) -> AnimalResponse:
        """Replace every field of an animal."""
        response: Response = await self.client.put(
            self._animals(f"/{animal_id}"),
            json=request.model_dump(mode="json", exclude_none=True),
        )
        response.raise_for_status()
        return AnimalResponse(**response.json())

    async def delete_animal(self, animal_id: UUID) -> None:
        response: Response = await self.client.delete(self._animals(f"/{animal_id}"))
        response.raise_for_status()

    async def list_animals(self) -> AnimalCollectionResponse:
        return await self._get_animals(self._animals())

    async def search_animals(self, name: str) -> AnimalCollectionResponse:
        """Animals whose name contains ``name``, ignoring case."""
        return await self._get_animals(self._animals("/search"), params={"name": name})

    async def animals_by_breed(self, breed: str) -> AnimalCollectionResponse:
        return await self._get_animals(self._animals(f"/breed/{breed}"))

    async def available_for_adoption(self) -> AnimalCollectionResponse:
        return await self._get_animals(self._animals("/available-for-adoption"))

    async def puppies(self) -> AnimalCollectionResponse:
        return await self._get_animals(self._animals("/puppies"))

    async def filter_animals(
        self,
        breed: str | None = None,
        color: str | None = None,
        min_age: int | None = None,
        max_age: int | None = None,
    ) -> AnimalCollectionResponse:
        """Multi-criteria animal search; omitted criteria do not filter."""
        params = _without_none({"breed": breed, "color": color, "min_age": min_age, "max_age": max_age})
        return await self._get_animals(self._animals("/filter"), params=params)

    async def breed_statistics(self) -> list[BreedStatisticResponse]:
        response: Response = await self.client.get(self._animals("/statistics/breed"))
        response.raise_for_status()
        return [BreedStatisticResponse(**row) for row in response.json()]

    async def assign_owner(self, animal_id: UUID, owner_id: UUID) -> AnimalResponse:
        """
        Assign an owner to an animal; the animal stops being available.

        Raises:
            httpx.HTTPStatusError: 404 if either the animal or the owner is missing
        """
        response: Response = await self.client.put(
            self._animals(f"/{animal_id}/assign-owner/{owner_id}")
        )
        response.raise_for_status()
        return AnimalResponse(**response.json())

    async def remove_owner(self, animal_id: UUID) -> AnimalResponse:
        response: Response = await self.client.put(self._animals(f"/{animal_id}/remove-owner"))
        response.raise_for_status()
        return AnimalResponse(**response.json())

    # =========================================================================
    # Owners
    # =========================================================================

    async def create_owner(self, request: OwnerRequest) -> OwnerResponse:
        """
        Create a new owner.

        Args:
            request: Owner creation request

        Returns:
            Created owner response, including its links

        Raises:
            httpx.HTTPStatusError: If the request fails (400 rule violation, 409 duplicate email or phone)
        """
        response: Response = await self.client.post(
            self._owners(),
            json=request.model_dump(mode="json", exclude_none=True),
        )
        response.raise_for_status()
        return OwnerResponse(**response.json())

    async def get_owner(self, owner_id: UUID) -> OwnerResponse:
        response: Response = await self.client.get(self._owners(f"/{owner_id}"))
        response.raise_for_status()
        return OwnerResponse(**response.json())

    async def get_owner_by_email(self, email: str) -> OwnerResponse:
        response: Response = await self.client.get(self._owners("/by-email"), params={"email": email})
        response.raise_for_status()
        return OwnerResponse(**response.json())

    async def update_owner(self, owner_id: UUID, request: OwnerRequest) -> OwnerResponse:
        response: Response = await self.client.put(
            self._owners(f"/{owner_id}"),
            json=request.model_dump(mode="json", exclude_none=True),
        )
        response.raise_for_status()
        return OwnerResponse(**response.json())

    async def delete_owner(self, owner_id: UUID) -> None:
        """
        Delete an owner.

        Raises:
            httpx.HTTPStatusError: 409 while the owner still has animals
        """
        response: Response = await self.client.delete(self._owners(f"/{owner_id}"))
        response.raise_for_status()

    async def activate_owner(self, owner_id: UUID) -> OwnerResponse:
        response: Response = await self.client.put(self._owners(f"/{owner_id}/activate"))
        response.raise_for_status()
        return OwnerResponse(**response.json())

    async def deactivate_owner(self, owner_id: UUID) -> OwnerResponse:
        response: Response = await self.client.put(self._owners(f"/{owner_id}/deactivate"))
        response.raise_for_status()
        return OwnerResponse(**response.json())

    async def animals_of_owner(self, owner_id: UUID) -> AnimalCollectionResponse:
        return await self._get_animals(self._owners(f"/{owner_id}/animals"))

    async def list_owners(self) -> OwnerCollectionResponse:
        return await self._get_owners(self._owners())

    async def search_owners(self, name: str) -> OwnerCollectionResponse:
        """Owners whose first or last name contains ``name``, ignoring case."""
        return await self._get_owners(self._owners("/search"), params={"name": name})

    async def owners_by_city(self, city: str) -> OwnerCollectionResponse:
        return await self._get_owners(self._owners(f"/city/{city}"))

    async def owners_with_animals(self) -> OwnerCollectionResponse:
        return await self._get_owners(self._owners("/with-animals"))

    async def owners_without_animals(self) -> OwnerCollectionResponse:
        return await self._get_owners(self._owners("/without-animals"))

    async def active_owners(self) -> OwnerCollectionResponse:
        return await self._get_owners(self._owners("/active"))

    async def filter_owners(
        self,
        city: str | None = None,
        min_age: int | None = None,
        max_age: int | None = None,
        is_active: bool | None = None,
    ) -> OwnerCollectionResponse:
        params = _without_none({"city": city, "min_age": min_age, "max_age": max_age})
        if is_active is not None:
            params["is_active"] = str(is_active).lower()
        return await self._get_owners(self._owners("/filter"), params=params)

    async def owners_by_animal_breed(self, breed: str) -> OwnerCollectionResponse:
        return await self._get_owners(self._owners(f"/breed/{breed}"))

    async def city_statistics(self) -> list[CityStatisticResponse]:
        response: Response = await self.client.get(self._owners("/statistics/city"))
        response.raise_for_status()
        return [CityStatisticResponse(**row) for row in response.json()]

    async def ownership_statistics(self) -> list[OwnershipStatisticResponse]:
        response: Response = await self.client.get(self._owners("/statistics/animal-ownership"))
        response.raise_for_status()
        return [OwnershipStatisticResponse(**row) for row in response.json()]
