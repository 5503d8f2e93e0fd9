import pytest


@pytest.mark.asyncio
async def test_root_and_health(registry_client):
    root = await registry_client.client.get("/")
    health = await registry_client.client.get("/health")

    assert root.status_code == 200
    assert "message" in root.json()
    assert health.json() == {"status": "healthy"}


@pytest.mark.asyncio
async def test_api_info(registry_client):
    response = await registry_client.client.get("/api")

    body = response.json()
    assert response.status_code == 200
    assert body["api_prefix"] == "/api/v1"
    assert body["documentation"]["openapi"] == "/openapi.json"
    assert body["resources"] == {"animals": "/api/v1/animals", "owners": "/api/v1/owners"}


@pytest.mark.asyncio
async def test_static_routes_are_not_taken_for_ids(registry_client):
    for path in (
        "/api/v1/animals/puppies",
        "/api/v1/animals/available-for-adoption",
        "/api/v1/animals/statistics/breed",
        "/api/v1/owners/with-animals",
        "/api/v1/owners/without-animals",
        "/api/v1/owners/active",
        "/api/v1/owners/statistics/city",
        "/api/v1/owners/statistics/animal-ownership",
    ):
        response = await registry_client.client.get(path)
        assert response.status_code == 200, path
