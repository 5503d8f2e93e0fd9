from datetime import date
from uuid import uuid4

import pytest

from src.registry.core.domain.models import Animal, AnimalFilter, AnimalSize, Owner
from tests.registry.factories import make_animal_candidate, make_owner_candidate


def _animal(**overrides) -> Animal:
    values = make_animal_candidate().model_dump(exclude={"size", "is_available"})
    values.update(overrides)
    return Animal(**values)


@pytest.mark.asyncio
async def test_round_trip_keeps_every_field(unit_of_work, animal_repository):
    owner = Owner(**make_owner_candidate().model_dump())
    animal = _animal(name="Luna", size=AnimalSize.MEDIUM, owner_id=owner.id, is_available=False)
    async with unit_of_work:
        unit_of_work.add(owner)
    async with unit_of_work:
        unit_of_work.add(animal)

    stored = await animal_repository.get_by_id(animal.id)

    assert stored.model_dump(exclude={"created_at", "updated_at"}) == animal.model_dump(
        exclude={"created_at", "updated_at"}
    )
    assert stored.created_at == animal.created_at


@pytest.mark.asyncio
async def test_get_missing_animal_returns_none(animal_repository):
    assert await animal_repository.get_by_id(uuid4()) is None
    assert not await animal_repository.exists_by_id(uuid4())


@pytest.mark.asyncio
async def test_name_lookups_ignore_case(unit_of_work, animal_repository):
    async with unit_of_work:
        unit_of_work.add(_animal(name="Coco"))
        unit_of_work.add(_animal(name="Chocolate"))

    assert await animal_repository.exists_by_name("COCO")
    assert not await animal_repository.exists_by_name("Coc")
    assert [a.name for a in await animal_repository.search_by_name("co")] == ["Chocolate", "Coco"]


@pytest.mark.asyncio
async def test_search_by_name_escapes_wildcards(unit_of_work, animal_repository):
    async with unit_of_work:
        unit_of_work.add(_animal(name="Max"))

    assert await animal_repository.search_by_name("%") == []


@pytest.mark.asyncio
async def test_available_for_adoption_requires_no_owner_and_flag(unit_of_work, animal_repository):
    owner = Owner(**make_owner_candidate().model_dump())
    async with unit_of_work:
        unit_of_work.add(owner)
    async with unit_of_work:
        unit_of_work.add(_animal(name="Free"))
        unit_of_work.add(_animal(name="Held", is_available=False))
        unit_of_work.add(_animal(name="Owned", owner_id=owner.id, is_available=False))

    available = await animal_repository.find_available_for_adoption()

    assert [a.name for a in available] == ["Free"]
    assert await animal_repository.count_by_owner(owner.id) == 1
    assert [a.name for a in await animal_repository.find_by_owner(owner.id)] == ["Owned"]


@pytest.mark.asyncio
async def test_find_born_since(unit_of_work, animal_repository):
    async with unit_of_work:
        unit_of_work.add(_animal(name="Old", birth_date=date(2023, 12, 31), age=5))
        unit_of_work.add(_animal(name="New", birth_date=date(2024, 1, 1), age=3))

    puppies = await animal_repository.find_born_since(date(2024, 1, 1))

    assert [a.name for a in puppies] == ["New"]


@pytest.mark.asyncio
async def test_find_by_criteria(unit_of_work, animal_repository):
    async with unit_of_work:
        unit_of_work.add(_animal(name="A", breed="Beagle", color="Brown", age=1))
        unit_of_work.add(_animal(name="B", breed="Beagle", color="White", age=5))
        unit_of_work.add(_animal(name="C", breed="Pug", color="Brown", age=9))

    assert [a.name for a in await animal_repository.find_by_criteria(AnimalFilter())] == ["A", "B", "C"]
    assert [a.name for a in await animal_repository.find_by_criteria(AnimalFilter(breed="BEAGLE"))] == ["A", "B"]
    assert [a.name for a in await animal_repository.find_by_criteria(AnimalFilter(color="brown", max_age=5))] == ["A"]
    assert [a.name for a in await animal_repository.find_by_criteria(AnimalFilter(min_age=5, max_age=9))] == ["B", "C"]


@pytest.mark.asyncio
async def test_breed_statistics_ordered_by_count(unit_of_work, animal_repository):
    async with unit_of_work:
        unit_of_work.add(_animal(name="A", breed="Pug"))
        unit_of_work.add(_animal(name="B", breed="Beagle"))
        unit_of_work.add(_animal(name="C", breed="Beagle"))

    stats = await animal_repository.breed_statistics()

    assert [(s.breed, s.count) for s in stats] == [("Beagle", 2), ("Pug", 1)]


@pytest.mark.asyncio
async def test_statistics_on_empty_registry(animal_repository):
    assert await animal_repository.breed_statistics() == []


@pytest.mark.asyncio
async def test_lookups_fold_accented_letters(unit_of_work, animal_repository):
    async with unit_of_work:
        unit_of_work.add(_animal(name="Ñandú", breed="Pastor Alemán"))

    assert await animal_repository.exists_by_name("ñANDÚ")
    assert [a.name for a in await animal_repository.search_by_name("ANDÚ")] == ["Ñandú"]
    assert [a.name for a in await animal_repository.find_by_breed("PASTOR ALEMÁN")] == ["Ñandú"]
    assert [a.name for a in await animal_repository.find_by_criteria(AnimalFilter(breed="pastor alemán"))] == ["Ñandú"]
