from uuid import uuid4

import pytest

from src.registry.core.domain.models import Animal, Owner, OwnerFilter
from tests.registry.factories import make_animal_candidate, make_owner_candidate


def _owner(**overrides) -> Owner:
    values = make_owner_candidate().model_dump()
    values.update(overrides)
    return Owner(**values)


def _animal(owner: Owner | None = None, **overrides) -> Animal:
    values = make_animal_candidate().model_dump(exclude={"size", "is_available"})
    values.update(overrides)
    if owner is not None:
        values.update(owner_id=owner.id, is_available=False)
    return Animal(**values)


@pytest.mark.asyncio
async def test_animal_count_is_computed_on_read(unit_of_work, owner_repository):
    # Arrange
    owner = _owner()
    async with unit_of_work:
        unit_of_work.add(owner)
    async with unit_of_work:
        unit_of_work.add(_animal(owner, name="One"))
        unit_of_work.add(_animal(owner, name="Two"))

    # Act
    stored = await owner_repository.get_by_id(owner.id)

    # Assert
    assert stored.animal_count == 2
    assert stored.has_animals


@pytest.mark.asyncio
async def test_get_missing_owner(owner_repository):
    assert await owner_repository.get_by_id(uuid4()) is None
    assert await owner_repository.get_by_email("missing@example.com") is None


@pytest.mark.asyncio
async def test_email_and_phone_checks(unit_of_work, owner_repository):
    async with unit_of_work:
        unit_of_work.add(_owner(email="Case@Example.com", phone="+573001234567"))

    assert await owner_repository.exists_by_email("case@example.COM")
    assert await owner_repository.exists_by_phone("+573001234567")
    assert not await owner_repository.exists_by_phone("573001234567")
    assert (await owner_repository.get_by_email("CASE@example.com")).phone == "+573001234567"


@pytest.mark.asyncio
async def test_owner_queries(unit_of_work, owner_repository):
    # Arrange
    ana = _owner(first_name="Ana", last_name="Martinez", email="ana@example.com", phone="3000000001",
                 city="Barranquilla", age=26)
    pedro = _owner(first_name="Pedro", last_name="Jimenez", email="pedro@example.com", phone="3000000002",
                   city="Cali", age=38, is_active=False)
    laura = _owner(first_name="Laura", last_name="Sanchez", email="laura@example.com", phone="3000000003",
                   city="cali", age=31)
    async with unit_of_work:
        for owner in (ana, pedro, laura):
            unit_of_work.add(owner)
    async with unit_of_work:
        unit_of_work.add(_animal(ana, name="Luna", breed="Husky"))

    # Act & Assert
    assert [o.first_name for o in await owner_repository.list_all()] == ["Pedro", "Ana", "Laura"]
    assert [o.first_name for o in await owner_repository.search_by_name("AR")] == ["Ana"]
    assert [o.first_name for o in await owner_repository.search_by_name("san")] == ["Laura"]
    assert [o.first_name for o in await owner_repository.find_by_city("CALI")] == ["Pedro", "Laura"]
    assert [o.first_name for o in await owner_repository.find_with_animals()] == ["Ana"]
    assert [o.first_name for o in await owner_repository.find_without_animals()] == ["Pedro", "Laura"]
    assert [o.first_name for o in await owner_repository.find_by_active(False)] == ["Pedro"]
    assert [o.first_name for o in await owner_repository.find_by_animal_breed("husky")] == ["Ana"]

    by_criteria = await owner_repository.find_by_criteria(OwnerFilter(city="cali", max_age=35))
    assert [o.first_name for o in by_criteria] == ["Laura"]
    assert len(await owner_repository.find_by_criteria(OwnerFilter())) == 3


@pytest.mark.asyncio
async def test_statistics(unit_of_work, owner_repository):
    first = _owner(email="first@example.com", phone="3000000001", city="Cali")
    second = _owner(email="second@example.com", phone="3000000002", city="Cali")
    third = _owner(email="third@example.com", phone="3000000003", city="Pasto")
    async with unit_of_work:
        for owner in (first, second, third):
            unit_of_work.add(owner)
    async with unit_of_work:
        unit_of_work.add(_animal(first, name="A"))
        unit_of_work.add(_animal(first, name="B"))
        unit_of_work.add(_animal(second, name="C"))

    cities = await owner_repository.city_statistics()
    ownership = await owner_repository.ownership_statistics()

    assert [(c.city, c.count) for c in cities] == [("Cali", 2), ("Pasto", 1)]
    assert [(s.animal_count, s.owner_count) for s in ownership] == [(0, 1), (1, 1), (2, 1)]


@pytest.mark.asyncio
async def test_lookups_fold_accented_letters(unit_of_work, owner_repository):
    owner = _owner(first_name="José", last_name="Pérez", email="JOSÉ@example.com", city="Bogotá")
    async with unit_of_work:
        unit_of_work.add(owner)
    async with unit_of_work:
        unit_of_work.add(_animal(owner, name="Nieve", breed="Samoyedo Ártico"))

    assert [o.id for o in await owner_repository.find_by_city("BOGOTÁ")] == [owner.id]
    assert [o.id for o in await owner_repository.search_by_name("PÉR")] == [owner.id]
    assert [o.id for o in await owner_repository.find_by_criteria(OwnerFilter(city="bogotá"))] == [owner.id]
    assert [o.id for o in await owner_repository.find_by_animal_breed("samoyedo ártico")] == [owner.id]
    assert (await owner_repository.get_by_email("josé@example.com")).id == owner.id
    assert await owner_repository.exists_by_email("josé@EXAMPLE.com")
