from typing import Any

from lifevault.application.normalizers.coerce import (
    as_list,
    as_string,
    format_timestamp,
    parse_timestamp,
    to_string,
    trimmed_or_none,
)
from lifevault.domain.entities import Household


def normalize_household(raw: Any) -> Household | None:
    if not isinstance(raw, dict):
        return None
    household_id = as_string(raw.get("id")).strip()
    name = as_string(raw.get("name")).strip()
    if not household_id or not name:
        return None

    created_at = parse_timestamp(raw.get("createdAt"))
    member_ids = [text for text in (to_string(m).strip() for m in as_list(raw.get("memberIds"))) if text]
    return Household(
        id=household_id,
        name=name,
        address=trimmed_or_none(raw.get("address")),
        member_ids=member_ids,
        created_at=created_at,
        updated_at=parse_timestamp(raw.get("updatedAt"), default=created_at),
    )


def normalize_household_list(raw: Any) -> list[Household]:
    if not isinstance(raw, list):
        return []
    households = (normalize_household(item) for item in raw)
    return [household for household in households if household is not None]


def household_to_json(household: Household) -> dict[str, Any]:
    return {
        "id": household.id,
        "name": household.name,
        "address": household.address,
        "memberIds": list(household.member_ids),
        "createdAt": format_timestamp(household.created_at),
        "updatedAt": format_timestamp(household.updated_at),
    }
