import json

import pytest

from src.registry.main import seed_if_empty
from src.seed.loader import RegistrySeeder, seed_services
from src.seed.schema import DataSet, get_default_data_path, load_data_set
from tests.registry.factories import make_animal_request, make_owner_request


def test_bundled_data_set_loads():
    data = load_data_set(get_default_data_path())

    assert len(data.owners) == 10
    assert len(data.animals) == 13
    assert "juan.perez@email.com" in data.owner_emails()
    assert sum(1 for a in data.animals if a.owner_email) == 5


def test_load_data_set_from_file(tmp_path):
    path = tmp_path / "registry.json"
    path.write_text(json.dumps({
        "owners": [make_owner_request().model_dump(mode="json")],
        "animals": [dict(make_animal_request().model_dump(mode="json"), owner_email="ana.lopez@example.com")],
    }))

    data = load_data_set(path)

    assert data.owners[0].email == "ana.lopez@example.com"
    assert data.animals[0].owner_email == "ana.lopez@example.com"


@pytest.mark.asyncio
async def test_seeder_loads_data_through_the_api(registry_client):
    data = load_data_set(get_default_data_path())

    summary = await RegistrySeeder(registry_client).seed(data)

    assert summary.owners_created == 10
    assert summary.animals_created == 13
    assert summary.assignments == 5
    max_ = await registry_client.get_animal(summary.animal_ids["Max"])
    assert max_.owner_id == summary.owner_ids["juan.perez@email.com"]
    assert max_.is_available is False
    assert len((await registry_client.available_for_adoption()).items) == 8
    assert len((await registry_client.owners_with_animals()).items) == 5


@pytest.mark.asyncio
async def test_unknown_owner_reference_is_rejected_before_loading(registry_client):
    record = dict(make_animal_request().model_dump(), owner_email="nobody@example.com")
    data = DataSet(owners=[make_owner_request()], animals=[record])

    with pytest.raises(ValueError, match="nobody@example.com"):
        await RegistrySeeder(registry_client).seed(data)

    assert (await registry_client.list_owners()).items == []


@pytest.mark.asyncio
async def test_seed_services_in_process(owner_service, animal_service, ownership_service):
    record = dict(make_animal_request().model_dump(), owner_email="ANA.LOPEZ@example.com")
    data = DataSet(owners=[make_owner_request()], animals=[record])

    summary = await seed_services(data, owner_service, animal_service, ownership_service)

    assert summary.assignments == 1
    animals = await ownership_service.animals_of(summary.owner_ids["ana.lopez@example.com"])
    assert [a.name for a in animals] == ["Rex"]


@pytest.mark.asyncio
async def test_seed_if_empty_runs_once(test_container):
    await seed_if_empty(test_container)
    await seed_if_empty(test_container)

    owners = await test_container.owner_service().list_owners()
    assert len(owners) == 10
