"""Person profile list normalization."""

from typing import Any

from lifevault.application.normalizers.coerce import (
    as_string,
    format_timestamp,
    parse_timestamp,
    to_bool,
    trimmed_or_none,
)
from lifevault.domain.entities import PersonProfile


def normalize_person(raw: Any) -> PersonProfile | None:
    if not isinstance(raw, dict):
        return None
    person_id = as_string(raw.get("id")).strip()
    first_name = as_string(raw.get("firstName")).strip()
    if not person_id or not first_name:
        return None

    created_at = parse_timestamp(raw.get("createdAt"))
    return PersonProfile(
        id=person_id,
        first_name=first_name,
        last_name=as_string(raw.get("lastName")).strip(),
        preferred_name=trimmed_or_none(raw.get("preferredName")),
        relationship=as_string(raw.get("relationship")).strip() or "Other",
        dob=trimmed_or_none(raw.get("dob")),
        avatar_uri=trimmed_or_none(raw.get("avatarUri")),
        is_primary=to_bool(raw.get("isPrimary")),
        created_at=created_at,
        updated_at=parse_timestamp(raw.get("updatedAt"), default=created_at),
    )


def normalize_person_list(raw: Any) -> list[PersonProfile]:
    if not isinstance(raw, list):
        return []
    people = (normalize_person(item) for item in raw)
    return [person for person in people if person is not None]


def person_to_json(person: PersonProfile) -> dict[str, Any]:
    return {
        "id": person.id,
        "firstName": person.first_name,
        "lastName": person.last_name,
        "preferredName": person.preferred_name,
        "relationship": person.relationship,
        "dob": person.dob,
        "avatarUri": person.avatar_uri,
        "isPrimary": person.is_primary,
        "createdAt": format_timestamp(person.created_at),
        "updatedAt": format_timestamp(person.updated_at),
    }
