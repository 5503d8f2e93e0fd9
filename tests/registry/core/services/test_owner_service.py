from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest
from sqlalchemy.exc import IntegrityError

from src.registry.core.domain.errors import ErrorCode, OwnerHasAnimals, RuleViolation
from src.registry.core.domain.models import Owner, OwnerFilter
from src.registry.core.services.owner_service import OwnerService
from src.shared.exceptions import ConflictingEntityFound, EntityNotFound
from tests.registry.factories import make_animal_candidate, make_owner_candidate


@pytest.mark.asyncio
async def test_create_owner_successfully(owner_service, owner_repository):
    created = await owner_service.create_owner(make_owner_candidate())

    assert created.email == "ana.lopez@example.com"
    assert created.is_active is True
    stored = await owner_repository.get_by_id(created.id)
    assert stored is not None
    assert stored.animal_count == 0
    assert stored.full_name == "Ana Lopez"


@pytest.mark.asyncio
async def test_create_owner_rejects_underage(owner_service, owner_repository):
    with pytest.raises(RuleViolation) as exc_info:
        await owner_service.create_owner(make_owner_candidate(age=16))

    assert exc_info.value.code == ErrorCode.UNDERAGE
    assert await owner_repository.list_all() == []


@pytest.mark.asyncio
async def test_create_owner_rejects_duplicate_email_ignoring_case(owner_service):
    await owner_service.create_owner(make_owner_candidate(email="dup@example.com"))

    with pytest.raises(ConflictingEntityFound) as exc_info:
        await owner_service.create_owner(make_owner_candidate(email="DUP@example.com", phone="3110000000"))

    assert exc_info.value.code == "DUPLICATE_EMAIL"


@pytest.mark.asyncio
async def test_create_owner_rejects_duplicate_phone(owner_service):
    await owner_service.create_owner(make_owner_candidate(phone="3001112222"))

    with pytest.raises(ConflictingEntityFound) as exc_info:
        await owner_service.create_owner(make_owner_candidate(email="other@example.com", phone="3001112222"))

    assert exc_info.value.code == "DUPLICATE_PHONE"


@pytest.mark.asyncio
async def test_update_owner_keeps_own_email_and_phone(owner_service):
    created = await owner_service.create_owner(make_owner_candidate())

    updated = await owner_service.update_owner(
        created.id, make_owner_candidate(email="ANA.LOPEZ@example.com", city="Cali", age=31)
    )

    assert updated.city == "Cali"
    assert updated.age == 31
    assert (await owner_service.get_owner(created.id)).city == "Cali"


@pytest.mark.asyncio
async def test_update_owner_rejects_email_of_another_owner(owner_service):
    await owner_service.create_owner(make_owner_candidate(email="first@example.com", phone="3000000001"))
    second = await owner_service.create_owner(make_owner_candidate(email="second@example.com", phone="3000000002"))

    with pytest.raises(ConflictingEntityFound):
        await owner_service.update_owner(
            second.id, make_owner_candidate(email="first@example.com", phone="3000000002")
        )


@pytest.mark.asyncio
async def test_update_missing_owner(owner_service):
    with pytest.raises(EntityNotFound):
        await owner_service.update_owner(uuid4(), make_owner_candidate())


@pytest.mark.asyncio
async def test_activate_and_deactivate(owner_service):
    created = await owner_service.create_owner(make_owner_candidate())

    deactivated = await owner_service.deactivate_owner(created.id)
    assert deactivated.is_active is False
    assert (await owner_service.get_owner(created.id)).is_active is False
    assert await owner_service.list_active() == []

    activated = await owner_service.activate_owner(created.id)
    assert activated.is_active is True
    assert [o.id for o in await owner_service.list_active()] == [created.id]


@pytest.mark.asyncio
async def test_delete_owner_without_animals(owner_service, owner_repository):
    created = await owner_service.create_owner(make_owner_candidate())

    await owner_service.delete_owner(created.id)

    assert await owner_repository.get_by_id(created.id) is None


@pytest.mark.asyncio
async def test_delete_owner_with_animals_is_rejected(owner_service, animal_service, ownership_service, owner_repository):
    owner = await owner_service.create_owner(make_owner_candidate())
    animal = await animal_service.create_animal(make_animal_candidate())
    await ownership_service.assign_owner(animal.id, owner.id)

    with pytest.raises(OwnerHasAnimals) as exc_info:
        await owner_service.delete_owner(owner.id)

    assert exc_info.value.code == ErrorCode.OWNER_HAS_ANIMALS
    assert exc_info.value.animal_count == 1
    assert await owner_repository.get_by_id(owner.id) is not None


@pytest.mark.asyncio
async def test_delete_missing_owner_checks_existence_first():
    repository = MagicMock()
    repository.get_by_id = AsyncMock(return_value=None)
    animal_repository = MagicMock()
    animal_repository.count_by_owner = AsyncMock()
    service = OwnerService(repository, animal_repository, MagicMock())

    with pytest.raises(EntityNotFound):
        await service.delete_owner(uuid4())

    animal_repository.count_by_owner.assert_not_awaited()


@pytest.mark.asyncio
async def test_get_owner_by_email_ignores_case(owner_service):
    created = await owner_service.create_owner(make_owner_candidate(email="Mixed.Case@example.com"))

    found = await owner_service.get_owner_by_email("mixed.case@EXAMPLE.com")

    assert found.id == created.id


@pytest.mark.asyncio
async def test_get_owner_by_unknown_email(owner_service):
    with pytest.raises(EntityNotFound) as exc_info:
        await owner_service.get_owner_by_email("nobody@example.com")

    assert exc_info.value.code == "OWNER_NOT_FOUND"
    assert exc_info.value.message == "Owner with email nobody@example.com not found"


@pytest.mark.asyncio
async def test_delete_owner_assigned_an_animal_after_the_count():
    owner = Owner(**make_owner_candidate().model_dump())
    repository = MagicMock()
    repository.get_by_id = AsyncMock(return_value=owner)
    animal_repository = MagicMock()
    animal_repository.count_by_owner = AsyncMock(side_effect=[0, 1])
    unit_of_work = MagicMock()
    unit_of_work.delete = AsyncMock()
    unit_of_work.__aexit__ = AsyncMock(
        side_effect=IntegrityError("DELETE FROM owners", {}, Exception("foreign key violation"))
    )
    service = OwnerService(repository, animal_repository, unit_of_work)

    with pytest.raises(OwnerHasAnimals) as exc_info:
        await service.delete_owner(owner.id)

    assert exc_info.value.code == ErrorCode.OWNER_HAS_ANIMALS
    assert exc_info.value.animal_count == 1


@pytest.mark.asyncio
async def test_queries_and_statistics(owner_service, animal_service, ownership_service):
    # Arrange
    ana = await owner_service.create_owner(make_owner_candidate())
    luis = await owner_service.create_owner(
        make_owner_candidate(first_name="Luis", last_name="Hernandez", email="luis@example.com",
                             phone="3145678901", city="Cali", age=45)
    )
    sofia = await owner_service.create_owner(
        make_owner_candidate(first_name="Sofia", last_name="Torres", email="sofia@example.com",
                             phone="3189012345", city="Cali", age=42, is_active=False)
    )
    rex = await animal_service.create_animal(make_animal_candidate(name="Rex", breed="Beagle"))
    max_ = await animal_service.create_animal(make_animal_candidate(name="Max", breed="Labrador"))
    await ownership_service.assign_owner(rex.id, luis.id)
    await ownership_service.assign_owner(max_.id, luis.id)

    # Act & Assert
    assert [o.id for o in await owner_service.search_by_name("LOP")] == [ana.id]
    assert {o.id for o in await owner_service.search_by_city("cali")} == {luis.id, sofia.id}
    with_animals = await owner_service.list_with_animals()
    assert [(o.id, o.animal_count) for o in with_animals] == [(luis.id, 2)]
    assert {o.id for o in await owner_service.list_without_animals()} == {ana.id, sofia.id}
    assert [o.id for o in await owner_service.owners_by_animal_breed("beagle")] == [luis.id]

    filtered = await owner_service.filter_owners(OwnerFilter(city="Cali", min_age=40, is_active=True))
    assert [o.id for o in filtered] == [luis.id]

    cities = await owner_service.city_statistics()
    assert [(c.city, c.count) for c in cities] == [("Cali", 2), ("Bogota", 1)]

    ownership = await owner_service.ownership_statistics()
    assert [(s.animal_count, s.owner_count) for s in ownership] == [(0, 2), (2, 1)]
