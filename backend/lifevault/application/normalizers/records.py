"""Record normalization: persisted JSON ↔ ``VaultRecord``.

A record whose payload is unreadable survives with a default payload. A
record that cannot be typed at all (not an object, no id, unknown record
type) is left out of the result. The record store writes such rows back
unchanged, so they are never lost by a rewrite.
"""

import logging
from typing import Any

from lifevault.application.normalizers.attachments import (
    attachment_ref_to_json,
    normalize_attachment_refs,
)
from lifevault.application.normalizers.coerce import (
    format_timestamp,
    parse_timestamp,
    to_bool,
    to_string,
    trimmed_or_none,
)
from lifevault.application.normalizers.payloads import normalize_payload_for_edit
from lifevault.domain.entities import RecordType, VaultRecord
from lifevault.domain.record_registry import get_record_meta

logger = logging.getLogger(__name__)


def normalize_record(raw: Any, entity_id: str) -> VaultRecord | None:
    if not isinstance(raw, dict):
        logger.debug("Dropping non-object record under entity %s", entity_id)
        return None

    record_id = to_string(raw.get("id")).strip()
    if not record_id:
        logger.debug("Dropping record without id under entity %s", entity_id)
        return None

    record_type = RecordType.parse(raw.get("recordType"))
    if record_type is None:
        logger.debug(
            "Dropping record %s with unknown type %r", record_id, raw.get("recordType")
        )
        return None

    raw_payload = raw["payload"] if "payload" in raw else raw.get("data")
    created_at = parse_timestamp(raw.get("createdAt"))

    return VaultRecord(
        id=record_id,
        entity_id=entity_id,
        record_type=record_type,
        payload=normalize_payload_for_edit(record_type, raw_payload),
        title=trimmed_or_none(raw.get("title")),
        attachments=normalize_attachment_refs(raw.get("attachments")),
        is_private=to_bool(raw.get("isPrivate"), fallback=get_record_meta(record_type).is_private),
        created_at=created_at,
        updated_at=parse_timestamp(raw.get("updatedAt"), default=created_at),
    )


def normalize_record_list(raw: Any, entity_id: str) -> list[VaultRecord]:
    """Normalize a persisted record list, keeping input order."""
    if not isinstance(raw, list):
        return []
    records = (normalize_record(item, entity_id) for item in raw)
    return [record for record in records if record is not None]


def record_to_json(record: VaultRecord) -> dict[str, Any]:
    return {
        "id": record.id,
        "entityId": record.entity_id,
        "recordType": record.record_type.value,
        "title": record.title,
        "payload": record.payload,
        "attachments": [attachment_ref_to_json(ref) for ref in record.attachments],
        "isPrivate": record.is_private,
        "createdAt": format_timestamp(record.created_at),
        "updatedAt": format_timestamp(record.updated_at),
    }
