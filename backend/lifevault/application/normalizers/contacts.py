"""Contact list normalization.

Older contacts stored a single ``name``; those rows cannot be split reliably
and are dropped.
"""

import logging
from typing import Any

from lifevault.application.normalizers.coerce import (
    as_list,
    as_string,
    format_timestamp,
    parse_timestamp,
    to_bool,
    to_string,
    trimmed_or_none,
)
from lifevault.domain.entities import Contact, ContactCategory, LinkedProfile

logger = logging.getLogger(__name__)


def _normalize_categories(value: Any) -> list[ContactCategory]:
    categories: list[ContactCategory] = []
    for item in as_list(value):
        try:
            category = ContactCategory(to_string(item).strip())
        except ValueError:
            continue
        if category not in categories:
            categories.append(category)
    return categories or [ContactCategory.OTHER]


def _normalize_linked_profiles(value: Any) -> list[LinkedProfile]:
    profiles: list[LinkedProfile] = []
    for item in as_list(value):
        if not isinstance(item, dict):
            continue
        profile_id = as_string(item.get("id")).strip()
        if not profile_id:
            continue
        profile_type = as_string(item.get("type")).strip()
        profiles.append(
            LinkedProfile(
                id=profile_id,
                name=as_string(item.get("name")).strip(),
                type=profile_type if profile_type in ("user", "dependent") else "dependent",
                role=trimmed_or_none(item.get("role")),
            )
        )
    return profiles


def normalize_contact(raw: Any) -> Contact | None:
    if not isinstance(raw, dict):
        return None
    contact_id = to_string(raw.get("id")).strip()
    first_name = as_string(raw.get("firstName")).strip()
    last_name = as_string(raw.get("lastName")).strip()
    if not contact_id or not first_name or not last_name:
        if "name" in raw:
            logger.debug("Dropping legacy single-name contact %s", contact_id or "<no id>")
        return None

    created_at = parse_timestamp(raw.get("createdAt"))
    return Contact(
        id=contact_id,
        first_name=first_name,
        last_name=last_name,
        phone=as_string(raw.get("phone")).strip(),
        email=trimmed_or_none(raw.get("email")),
        photo=trimmed_or_none(raw.get("photo")),
        categories=_normalize_categories(raw.get("categories")),
        relationship=trimmed_or_none(raw.get("relationship")),
        linked_profiles=_normalize_linked_profiles(raw.get("linkedProfiles")),
        is_favorite=to_bool(raw.get("isFavorite")),
        created_at=created_at,
        updated_at=parse_timestamp(raw.get("updatedAt"), default=created_at),
    )


def normalize_contact_list(raw: Any) -> list[Contact]:
    if not isinstance(raw, list):
        return []
    contacts = (normalize_contact(item) for item in raw)
    return [contact for contact in contacts if contact is not None]


def contact_to_json(contact: Contact) -> dict[str, Any]:
    return {
        "id": contact.id,
        "firstName": contact.first_name,
        "lastName": contact.last_name,
        "phone": contact.phone,
        "email": contact.email,
        "photo": contact.photo,
        "categories": [category.value for category in contact.categories],
        "relationship": contact.relationship,
        "linkedProfiles": [
            {"id": p.id, "name": p.name, "type": p.type, "role": p.role}
            for p in contact.linked_profiles
        ],
        "isFavorite": contact.is_favorite,
        "createdAt": format_timestamp(contact.created_at),
        "updatedAt": format_timestamp(contact.updated_at),
    }
