"""Application services for the global profile lists (people, pets, households, contacts)."""

import dataclasses
import logging
from collections.abc import Callable
from typing import Any, Generic, TypeVar

from lifevault.application.interfaces import KeyValueStore
from lifevault.application.normalizers.coerce import now_utc
from lifevault.application.normalizers.contacts import contact_to_json, normalize_contact_list
from lifevault.application.normalizers.households import household_to_json, normalize_household_list
from lifevault.application.normalizers.people import normalize_person_list, person_to_json
from lifevault.application.normalizers.pets import normalize_pet_list, pet_to_json
from lifevault.application.services.json_collection import JsonCollectionStore
from lifevault.application.services.storage_keys import (
    CONTACTS_KEY,
    HOUSEHOLDS_KEY,
    PEOPLE_KEY,
    PETS_KEY,
)
from lifevault.domain.entities import Contact, Household, PersonProfile, PetProfile

logger = logging.getLogger(__name__)

T = TypeVar("T", PersonProfile, PetProfile, Household, Contact)


class ProfileListStore(JsonCollectionStore, Generic[T]):
    """One JSON list under one key, normalized on read and on write.

    Reading never writes back. Upserting an existing id replaces it in
    place and keeps its ``created_at``; a new id is prepended.
    """

    key: str
    label: str

    def __init__(
        self,
        store: KeyValueStore,
        normalize_list: Callable[[Any], list[T]],
        to_json: Callable[[T], dict[str, Any]],
    ):
        super().__init__(store)
        self._normalize_list = normalize_list
        self._to_json = to_json

    async def _list(self) -> list[T]:
        return self._normalize_list(await self._read_json(self.key))

    async def _get(self, item_id: str) -> T | None:
        return next((item for item in await self._list() if item.id == item_id), None)

    async def _upsert(self, item: T) -> T:
        items = await self._list()
        index = next((i for i, existing in enumerate(items) if existing.id == item.id), None)
        created_at = items[index].created_at if index is not None else item.created_at
        candidate = dataclasses.replace(item, created_at=created_at, updated_at=now_utc())

        normalized = self._normalize_list([self._to_json(candidate)])
        if not normalized:
            raise ValueError(f"{self.label} '{item.id}' is missing required fields")
        saved = normalized[0]

        if index is None:
            items.insert(0, saved)
        else:
            items[index] = saved
        await self._write_json(self.key, [self._to_json(i) for i in items])
        logger.info("Saved %s %s", self.label, saved.id)
        return saved

    async def _delete(self, item_id: str) -> None:
        items = await self._list()
        remaining = [i for i in items if i.id != item_id]
        if len(remaining) == len(items):
            return
        await self._write_json(self.key, [self._to_json(i) for i in remaining])
        logger.info("Deleted %s %s", self.label, item_id)


class PeopleStore(ProfileListStore[PersonProfile]):
    key = PEOPLE_KEY
    label = "Person"

    def __init__(self, store: KeyValueStore):
        super().__init__(store, normalize_person_list, person_to_json)

    async def list_people(self) -> list[PersonProfile]:
        return await self._list()

    async def get_person(self, person_id: str) -> PersonProfile | None:
        return await self._get(person_id)

    async def upsert_person(self, person: PersonProfile) -> PersonProfile:
        return await self._upsert(person)

    async def delete_person(self, person_id: str) -> None:
        await self._delete(person_id)

    async def get_primary(self) -> PersonProfile | None:
        return next((p for p in await self._list() if p.is_primary), None)


class PetStore(ProfileListStore[PetProfile]):
    key = PETS_KEY
    label = "Pet"

    def __init__(self, store: KeyValueStore):
        super().__init__(store, normalize_pet_list, pet_to_json)

    async def list_pets(self) -> list[PetProfile]:
        return await self._list()

    async def get_pet(self, pet_id: str) -> PetProfile | None:
        return await self._get(pet_id)

    async def upsert_pet(self, pet: PetProfile) -> PetProfile:
        return await self._upsert(pet)

    async def delete_pet(self, pet_id: str) -> None:
        await self._delete(pet_id)


class HouseholdStore(ProfileListStore[Household]):
    key = HOUSEHOLDS_KEY
    label = "Household"

    def __init__(self, store: KeyValueStore):
        super().__init__(store, normalize_household_list, household_to_json)

    async def list_households(self) -> list[Household]:
        return await self._list()

    async def get_household(self, household_id: str) -> Household | None:
        return await self._get(household_id)

    async def upsert_household(self, household: Household) -> Household:
        return await self._upsert(household)

    async def delete_household(self, household_id: str) -> None:
        await self._delete(household_id)


class ContactStore(ProfileListStore[Contact]):
    key = CONTACTS_KEY
    label = "Contact"

    def __init__(self, store: KeyValueStore):
        super().__init__(store, normalize_contact_list, contact_to_json)

    async def list_contacts(self) -> list[Contact]:
        return await self._list()

    async def get_contact(self, contact_id: str) -> Contact | None:
        return await self._get(contact_id)

    async def upsert_contact(self, contact: Contact) -> Contact:
        return await self._upsert(contact)

    async def delete_contact(self, contact_id: str) -> None:
        await self._delete(contact_id)
