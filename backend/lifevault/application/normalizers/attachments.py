"""Attachment reference normalization and serialization."""

from typing import Any

from lifevault.application.normalizers.coerce import (
    as_string,
    format_timestamp,
    parse_timestamp,
    trimmed_or_none,
)
from lifevault.domain.entities import AttachmentRef, AttachmentRole


def _parse_role(value: Any) -> AttachmentRole | None:
    text = as_string(value).strip().upper()
    try:
        return AttachmentRole(text)
    except ValueError:
        return None


def normalize_attachment_ref(raw: Any) -> AttachmentRef | None:
    if not isinstance(raw, dict):
        return None
    document_id = as_string(raw.get("documentId")).strip()
    if not document_id:
        return None
    return AttachmentRef(
        document_id=document_id,
        role=_parse_role(raw.get("role")),
        label=trimmed_or_none(raw.get("label")),
        added_at=parse_timestamp(raw.get("addedAt")),
    )


def normalize_attachment_refs(raw: Any) -> list[AttachmentRef]:
    """Keep well-formed references, first occurrence per document id."""
    if not isinstance(raw, list):
        return []

    refs: list[AttachmentRef] = []
    seen: set[str] = set()
    for item in raw:
        if isinstance(item, AttachmentRef):
            ref: AttachmentRef | None = item
        else:
            ref = normalize_attachment_ref(item)
        if ref is None or ref.document_id in seen:
            continue
        seen.add(ref.document_id)
        refs.append(ref)
    return refs


def attachment_ref_to_json(ref: AttachmentRef) -> dict[str, Any]:
    data: dict[str, Any] = {"documentId": ref.document_id, "addedAt": format_timestamp(ref.added_at)}
    if ref.role is not None:
        data["role"] = ref.role.value
    if ref.label is not None:
        data["label"] = ref.label
    return data
