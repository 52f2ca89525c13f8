"""Unit tests for people, pet, household and contact normalization."""

import pytest

from lifevault.application.normalizers.contacts import contact_to_json, normalize_contact_list
from lifevault.application.normalizers.households import household_to_json, normalize_household_list
from lifevault.application.normalizers.people import normalize_person_list, person_to_json
from lifevault.application.normalizers.pets import normalize_pet_list, pet_to_json
from lifevault.domain.entities import ContactCategory


def test_pets_need_id_and_name():
    pets = normalize_pet_list(
        [
            {"id": "pet-1", "petName": "Rex"},
            {"id": "pet-2", "petName": "   "},
            {"petName": "Nameless"},
            42,
        ]
    )
    assert [p.id for p in pets] == ["pet-1"]
    assert pets[0].kind == "Other"
    assert pets[0].breed is None


def test_people_need_id_and_first_name():
    people = normalize_person_list(
        [
            {"id": "p1", "firstName": " Ada ", "isPrimary": True},
            {"id": "p2", "lastName": "NoFirst"},
        ]
    )
    assert len(people) == 1
    assert people[0].first_name == "Ada"
    assert people[0].last_name == ""
    assert people[0].relationship == "Other"
    assert people[0].is_primary is True


def test_household_member_ids_are_trimmed():
    households = normalize_household_list(
        [{"id": "h1", "name": "Home", "memberIds": [" p1 ", "", 7]}, {"id": "h2"}]
    )
    assert len(households) == 1
    assert households[0].member_ids == ["p1", "7"]


def test_legacy_single_name_contacts_are_dropped():
    contacts = normalize_contact_list(
        [
            {"id": "c1", "name": "Dr. Who", "phone": "555"},
            {"id": "c2", "firstName": "Grace", "lastName": "Hopper", "categories": ["Medical", "Bogus"]},
            {"id": "c3", "firstName": "Alan", "lastName": "Turing"},
        ]
    )
    assert [c.id for c in contacts] == ["c2", "c3"]
    assert contacts[0].categories == [ContactCategory.MEDICAL]
    assert contacts[1].categories == [ContactCategory.OTHER]


@pytest.mark.parametrize(
    ("normalize", "to_json", "raw"),
    [
        (normalize_pet_list, pet_to_json, [{"id": "a", "petName": "Rex", "kind": "Dog"}, {"id": "b"}]),
        (normalize_person_list, person_to_json, [{"id": "a", "firstName": "Ada", "dob": "1990-01-01"}]),
        (normalize_household_list, household_to_json, [{"id": "h", "name": "Home", "memberIds": ["a"]}]),
        (
            normalize_contact_list,
            contact_to_json,
            [
                {
                    "id": "c",
                    "firstName": "Grace",
                    "lastName": "Hopper",
                    "linkedProfiles": [{"id": "a", "name": "Ada", "type": "user", "role": "Doctor"}],
                }
            ],
        ),
    ],
)
def test_profile_list_normalization_is_idempotent(normalize, to_json, raw):
    once = normalize(raw)
    assert normalize([to_json(item) for item in once]) == once
