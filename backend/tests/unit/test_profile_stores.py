"""Unit tests for the people, pet, household and contact stores."""

import dataclasses
from datetime import datetime, timezone

import pytest

from lifevault.application.services import ContactStore, HouseholdStore, PeopleStore, PetStore
from lifevault.domain.entities import Contact, Household, PersonProfile, PetProfile
from tests.fakes import FakeKeyValueStore


@pytest.fixture
def kv() -> FakeKeyValueStore:
    return FakeKeyValueStore()


@pytest.mark.asyncio
async def test_people_upsert_prepends_and_keeps_created_at(kv: FakeKeyValueStore):
    people = PeopleStore(kv)
    created = datetime(2024, 1, 1, tzinfo=timezone.utc)
    ada = await people.upsert_person(
        PersonProfile(id="p1", first_name="Ada", is_primary=True, created_at=created)
    )
    await people.upsert_person(PersonProfile(id="p2", first_name="Grace"))

    renamed = await people.upsert_person(
        dataclasses.replace(ada, last_name="Lovelace", created_at=datetime.now(timezone.utc))
    )

    assert renamed.created_at == created
    assert renamed.updated_at > created
    assert [p.id for p in await people.list_people()] == ["p2", "p1"]
    assert (await people.get_primary()).id == "p1"


@pytest.mark.asyncio
async def test_reading_never_writes(kv: FakeKeyValueStore):
    kv.seed("pets_v1", [{"id": "pet-1", "petName": "Rex"}, {"id": "bad"}])
    pets = PetStore(kv)

    assert [p.id for p in await pets.list_pets()] == ["pet-1"]
    assert await pets.get_pet("bad") is None
    assert kv.writes == []
    assert len(kv.load("pets_v1")) == 2


@pytest.mark.asyncio
async def test_upsert_rejects_items_missing_required_fields(kv: FakeKeyValueStore):
    with pytest.raises(ValueError):
        await PetStore(kv).upsert_pet(PetProfile(id="pet-1", pet_name="  "))
    assert kv.writes == []


@pytest.mark.asyncio
async def test_delete_missing_id_is_a_noop(kv: FakeKeyValueStore):
    households = HouseholdStore(kv)
    await households.upsert_household(Household(id="h1", name="Home", member_ids=["p1"]))
    writes = len(kv.writes)

    await households.delete_household("h2")
    assert len(kv.writes) == writes

    await households.delete_household("h1")
    assert await households.list_households() == []


@pytest.mark.asyncio
async def test_contacts_round_trip(kv: FakeKeyValueStore):
    contacts = ContactStore(kv)
    saved = await contacts.upsert_contact(
        Contact(id="c1", first_name="Grace", last_name="Hopper", phone="555-0100")
    )
    assert await contacts.get_contact("c1") == saved
    assert saved.name == "Grace Hopper"

    await contacts.delete_contact("c1")
    assert await contacts.list_contacts() == []


@pytest.mark.asyncio
async def test_get_and_delete_by_id(kv: FakeKeyValueStore):
    people = PeopleStore(kv)
    pets = PetStore(kv)
    await people.upsert_person(
        PersonProfile(id="p1", first_name="Margaret", last_name="Hamilton", preferred_name="Maggie")
    )
    await pets.upsert_pet(PetProfile(id="pet-1", pet_name="Rex"))

    person = await people.get_person("p1")
    assert person.display_name == "Maggie Hamilton"
    assert await people.get_person("missing") is None

    await people.delete_person("p1")
    await pets.delete_pet("pet-1")
    assert await people.list_people() == []
    assert await pets.list_pets() == []


@pytest.mark.asyncio
async def test_get_household(kv: FakeKeyValueStore):
    households = HouseholdStore(kv)
    await households.upsert_household(Household(id="h1", name="Home", member_ids=[" p1 ", "p2"]))

    home = await households.get_household("h1")
    assert home.member_ids == ["p1", "p2"]
    assert await households.get_household("h2") is None
