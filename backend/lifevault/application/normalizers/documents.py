"""Document list normalization: per-item coercion, dedup, newest first."""

import logging
from typing import Any

from lifevault.application.normalizers.coerce import (
    as_string,
    format_timestamp,
    make_id,
    parse_timestamp,
    to_string,
    trimmed_or_none,
)
from lifevault.domain.entities import (
    DocumentLinkRef,
    DocumentOcrResult,
    OcrEngineTag,
    OcrStatus,
    VaultDocument,
)

logger = logging.getLogger(__name__)

DEFAULT_MIME_TYPE = "application/octet-stream"


def _normalize_tags(value: Any) -> list[str] | None:
    if not isinstance(value, list):
        return None
    tags = [text for text in (to_string(tag).strip() for tag in value) if text]
    return tags or None


def _normalize_links(value: Any) -> list[DocumentLinkRef] | None:
    if not isinstance(value, list):
        return None
    links: list[DocumentLinkRef] = []
    for item in value:
        if not isinstance(item, dict):
            continue
        record_type = as_string(item.get("recordType")).strip()
        record_id = as_string(item.get("recordId")).strip()
        if record_type and record_id:
            links.append(DocumentLinkRef(record_type=record_type, record_id=record_id))
    return links


def normalize_ocr_result(value: Any) -> DocumentOcrResult | None:
    if not isinstance(value, dict):
        return None

    try:
        engine = OcrEngineTag(as_string(value.get("engine")).strip())
    except ValueError:
        engine = OcrEngineTag.OTHER
    try:
        status = OcrStatus(as_string(value.get("status")).strip())
    except ValueError:
        status = OcrStatus.FAILED

    raw_lines = value.get("lines")
    lines = None
    if isinstance(raw_lines, list):
        lines = [text for text in (to_string(line) for line in raw_lines) if text]

    return DocumentOcrResult(
        text=to_string(value.get("text")),
        status=status,
        engine=engine,
        lines=lines,
        error=trimmed_or_none(value.get("error")),
        extracted_at=parse_timestamp(value.get("extractedAt")),
    )


def normalize_document(raw: Any) -> VaultDocument | None:
    """Coerce one persisted document, or None when it has no usable ``uri``."""
    if not isinstance(raw, dict):
        return None
    uri = to_string(raw.get("uri")).strip()
    if not uri:
        return None

    size = raw.get("sizeBytes")
    if isinstance(size, bool) or not isinstance(size, (int, float)):
        size = None

    return VaultDocument(
        id=to_string(raw.get("id")).strip() or make_id("doc"),
        uri=uri,
        mime_type=to_string(raw.get("mimeType")).strip() or DEFAULT_MIME_TYPE,
        file_name=trimmed_or_none(raw.get("fileName")),
        size_bytes=size,
        content_hash=trimmed_or_none(raw.get("contentHash")) or trimmed_or_none(raw.get("sha256")),
        created_at=parse_timestamp(raw.get("createdAt")),
        title=trimmed_or_none(raw.get("title")),
        tags=_normalize_tags(raw.get("tags")),
        note=trimmed_or_none(raw.get("note")),
        linked_to=_normalize_links(raw.get("linkedTo")),
        ocr=normalize_ocr_result(raw.get("ocr")),
    )


def normalize_document_list(raw: Any) -> list[VaultDocument]:
    """Normalize, drop duplicates by ``(content_hash, uri)`` keeping the first, sort newest first."""
    items = raw if isinstance(raw, list) else []

    seen: set[tuple[str, str]] = set()
    documents: list[VaultDocument] = []
    for item in items:
        doc = item if isinstance(item, VaultDocument) else normalize_document(item)
        if doc is None:
            logger.debug("Dropping document without uri")
            continue
        key = (doc.content_hash or "", doc.uri)
        if key in seen:
            logger.debug("Dropping duplicate document %s (%s)", doc.id, doc.uri)
            continue
        seen.add(key)
        documents.append(doc)

    return sorted(documents, key=lambda doc: doc.created_at, reverse=True)


def ocr_result_to_json(result: DocumentOcrResult) -> dict[str, Any]:
    data: dict[str, Any] = {
        "text": result.text,
        "status": result.status.value,
        "engine": result.engine.value,
        "extractedAt": format_timestamp(result.extracted_at),
    }
    if result.lines is not None:
        data["lines"] = list(result.lines)
    if result.error is not None:
        data["error"] = result.error
    return data


def document_to_json(doc: VaultDocument) -> dict[str, Any]:
    data: dict[str, Any] = {
        "id": doc.id,
        "uri": doc.uri,
        "mimeType": doc.mime_type,
        "createdAt": format_timestamp(doc.created_at),
    }
    optional = {
        "fileName": doc.file_name,
        "sizeBytes": doc.size_bytes,
        "contentHash": doc.content_hash,
        "title": doc.title,
        "tags": list(doc.tags) if doc.tags else None,
        "note": doc.note,
    }
    data.update({key: value for key, value in optional.items() if value is not None})
    if doc.linked_to is not None:
        data["linkedTo"] = [
            {"recordType": link.record_type, "recordId": link.record_id} for link in doc.linked_to
        ]
    if doc.ocr is not None:
        data["ocr"] = ocr_result_to_json(doc.ocr)
    return data
