"""Pet profile list normalization."""

from typing import Any

from lifevault.application.normalizers.coerce import (
    as_string,
    format_timestamp,
    parse_timestamp,
    trimmed_or_none,
)
from lifevault.domain.entities import PetProfile


def normalize_pet(raw: Any) -> PetProfile | None:
    """A pet needs an ``id`` and a non-empty ``petName``; anything else defaults."""
    if not isinstance(raw, dict):
        return None
    pet_id = as_string(raw.get("id")).strip()
    pet_name = as_string(raw.get("petName")).strip()
    if not pet_id or not pet_name:
        return None

    created_at = parse_timestamp(raw.get("createdAt"))
    return PetProfile(
        id=pet_id,
        pet_name=pet_name,
        kind=as_string(raw.get("kind")).strip() or "Other",
        kind_other_text=trimmed_or_none(raw.get("kindOtherText")),
        breed=trimmed_or_none(raw.get("breed")),
        breed_other_text=trimmed_or_none(raw.get("breedOtherText")),
        dob=trimmed_or_none(raw.get("dob")),
        gender=trimmed_or_none(raw.get("gender")),
        avatar_uri=trimmed_or_none(raw.get("avatarUri")),
        created_at=created_at,
        updated_at=parse_timestamp(raw.get("updatedAt"), default=created_at),
    )


def normalize_pet_list(raw: Any) -> list[PetProfile]:
    if not isinstance(raw, list):
        return []
    pets = (normalize_pet(item) for item in raw)
    return [pet for pet in pets if pet is not None]


def pet_to_json(pet: PetProfile) -> dict[str, Any]:
    return {
        "id": pet.id,
        "petName": pet.pet_name,
        "kind": pet.kind,
        "kindOtherText": pet.kind_other_text,
        "breed": pet.breed,
        "breedOtherText": pet.breed_other_text,
        "dob": pet.dob,
        "gender": pet.gender,
        "avatarUri": pet.avatar_uri,
        "createdAt": format_timestamp(pet.created_at),
        "updatedAt": format_timestamp(pet.updated_at),
    }
