"""Application service — document persistence, legacy migration and OCR."""

import asyncio
import dataclasses
import logging
import re
from typing import Any

from lifevault.application.interfaces import KeyValueStore, OcrEngine, SyncGateway
from lifevault.application.normalizers.attachments import (
    attachment_ref_to_json,
    normalize_attachment_refs,
)
from lifevault.application.normalizers.coerce import (
    as_dict,
    as_list,
    make_id,
    parse_timestamp,
    to_string,
    trimmed_or_none,
)
from lifevault.application.normalizers.documents import (
    DEFAULT_MIME_TYPE,
    document_to_json,
    normalize_document_list,
)
from lifevault.application.schemas.documents import DocumentCreate, PickedFile
from lifevault.application.services.json_collection import JsonCollectionStore
from lifevault.application.services.storage_keys import (
    DOCUMENTS_KEY,
    RECORDS_PREFIX,
    entity_id_from_records_key,
)
from lifevault.domain.entities import (
    AttachmentRef,
    AttachmentRole,
    DataMode,
    DocumentLinkRef,
    DocumentOcrResult,
    LinkedRecordRef,
    OcrEngineTag,
    OcrStatus,
    VaultDocument,
    VaultRecord,
)
from lifevault.domain.exceptions import EntityNotFoundError

logger = logging.getLogger(__name__)

# Payload keys that held file URIs before documents became first-class
_LEGACY_URI_FIELDS: tuple[tuple[str, AttachmentRole, str | None], ...] = (
    ("uri", AttachmentRole.OTHER, None),
    ("fileUri", AttachmentRole.OTHER, None),
    ("documentUri", AttachmentRole.OTHER, None),
    ("imageUri", AttachmentRole.OTHER, None),
    ("frontImageUri", AttachmentRole.FRONT, "Front"),
    ("backImageUri", AttachmentRole.BACK, "Back"),
)

_LINE_SPLIT = re.compile(r"\r?\n")


def _split_lines(text: str) -> list[str]:
    return [line.strip() for line in _LINE_SPLIT.split(text) if line.strip()]


def extract_ocr_text(output: Any) -> tuple[str, list[str]]:
    """Turn whatever an OCR engine returned into ``(text, lines)``.

    Accepts a plain string, ``{"text": ...}``, ``{"lines": [...]}`` or
    ``{"blocks": [{"lines": [{"text": ...}]}]}``.
    """
    if isinstance(output, str):
        return output, _split_lines(output)

    data = as_dict(output)
    text = to_string(data.get("text")).strip()
    if text:
        return text, _split_lines(text)

    raw_lines = as_list(data.get("lines"))
    if raw_lines:
        lines = [to_string(line).strip() for line in raw_lines]
    else:
        lines = [
            to_string(as_dict(line).get("text")).strip()
            for block in as_list(data.get("blocks"))
            for line in as_list(as_dict(block).get("lines"))
        ]
    lines = [line for line in lines if line]
    return "\n".join(lines), lines


def _renormalize(documents: list[VaultDocument]) -> list[VaultDocument]:
    # Normalizing the serialized form makes the result match a fresh read
    return normalize_document_list([document_to_json(d) for d in documents])


class DocumentStore(JsonCollectionStore):
    """Persists documents and resolves the record ↔ document relationship.

    Record attachments are authoritative. ``VaultDocument.linked_to`` is
    only ever recomputed from them (:meth:`refresh_linked_to`).
    """

    def __init__(
        self,
        store: KeyValueStore,
        ocr_engine: OcrEngine | None = None,
        data_mode: DataMode | None = None,
        sync_gateway: SyncGateway | None = None,
    ):
        super().__init__(store)
        self._ocr_engine = ocr_engine
        self._data_mode = data_mode or DataMode()
        self._sync_gateway = sync_gateway
        self._ready = False
        self._ready_lock = asyncio.Lock()

    # ── Startup migration ───────────────────────────────────────────

    async def ensure_ready(self) -> None:
        """Normalize stored documents and move legacy record file URIs into documents.

        Runs once per store instance. A failed run is not remembered, so the
        next call tries again.
        """
        if self._ready:
            return
        async with self._ready_lock:
            if self._ready:
                return
            documents = await self._load()
            await self._save(documents)
            await self._migrate_record_attachments()
            self._ready = True

    async def _migrate_record_attachments(self) -> None:
        record_keys = [k for k in await self._store.get_all_keys() if k.startswith(RECORDS_PREFIX)]
        if not record_keys:
            return

        documents = await self._load()
        created = 0
        for key in record_keys:
            raw = await self._read_json(key)
            if not isinstance(raw, list):
                continue

            changed = False
            migrated: list[Any] = []
            for item in raw:
                if isinstance(item, dict):
                    item, item_changed, item_created = self._migrate_record(item, documents)
                    changed = changed or item_changed
                    created += item_created
                migrated.append(item)

            if changed:
                await self._write_json(key, migrated)
                logger.info("Migrated legacy attachments in '%s'", key)

        await self._save(documents)
        if created:
            logger.info("Created %d documents from legacy record files", created)

    def _migrate_record(
        self, record: dict[str, Any], documents: list[VaultDocument]
    ) -> tuple[dict[str, Any], bool, int]:
        record = dict(record)
        refs = normalize_attachment_refs(record.get("attachments"))
        title = trimmed_or_none(record.get("title"))
        changed = False
        created = 0

        for row in as_list(record.get("attachments")):
            if not isinstance(row, dict) or to_string(row.get("documentId")).strip():
                continue
            uri = to_string(row.get("uri")).strip()
            if not uri:
                continue
            doc, is_new = self._document_for_uri(
                documents,
                uri,
                file_name=trimmed_or_none(row.get("fileName")),
                mime_type=trimmed_or_none(row.get("mimeType")),
                title=title,
            )
            created += is_new
            if not any(ref.document_id == doc.id for ref in refs):
                refs.append(
                    AttachmentRef(
                        document_id=doc.id,
                        label=trimmed_or_none(row.get("label")) or trimmed_or_none(row.get("title")),
                        added_at=parse_timestamp(row.get("createdAt")),
                    )
                )
            changed = True

        payload_key = "payload" if isinstance(record.get("payload"), dict) else "data"
        payload = dict(as_dict(record.get(payload_key)))
        legacy_found = False
        for field_name, role, label in _LEGACY_URI_FIELDS:
            if field_name not in payload:
                continue
            legacy_found = True
            uri = to_string(payload.pop(field_name)).strip()
            if not uri:
                continue
            doc, is_new = self._document_for_uri(documents, uri, title=title)
            created += is_new
            if not any(ref.document_id == doc.id for ref in refs):
                refs.append(AttachmentRef(document_id=doc.id, role=role, label=label))

        if legacy_found:
            record[payload_key] = payload
            changed = True

        if changed:
            record["attachments"] = [attachment_ref_to_json(ref) for ref in refs]
        return record, changed, created

    @staticmethod
    def _document_for_uri(
        documents: list[VaultDocument],
        uri: str,
        *,
        file_name: str | None = None,
        mime_type: str | None = None,
        title: str | None = None,
    ) -> tuple[VaultDocument, bool]:
        for doc in documents:
            if doc.uri == uri:
                return doc, False
        doc = VaultDocument(
            id=make_id("doc"),
            uri=uri,
            mime_type=mime_type or DEFAULT_MIME_TYPE,
            file_name=file_name,
            title=title,
        )
        documents.insert(0, doc)
        return doc, True

    # ── CRUD ────────────────────────────────────────────────────────

    async def list_documents(self) -> list[VaultDocument]:
        """All documents, newest first."""
        await self.ensure_ready()
        return await self._load()

    async def get_document(self, document_id: str) -> VaultDocument | None:
        await self.ensure_ready()
        for doc in await self._load():
            if doc.id == document_id:
                return doc
        return None

    async def require_document(self, document_id: str) -> VaultDocument:
        doc = await self.get_document(document_id)
        if doc is None:
            raise EntityNotFoundError("Document", document_id)
        return doc

    async def resolve_document_uri(self, document_id: str) -> str:
        """The storage locator to share or open for ``document_id``."""
        return (await self.require_document(document_id)).uri

    async def upsert_document(self, document: VaultDocument) -> VaultDocument:
        """Replace the document with the same id, or prepend a new one.

        Raises ``ValueError`` without writing when the document would not
        survive normalization (a blank uri, for instance).
        """
        await self.ensure_ready()
        documents = await self._load()
        index = next((i for i, d in enumerate(documents) if d.id == document.id), None)
        if index is None:
            documents.insert(0, document)
        else:
            documents[index] = document

        normalized = _renormalize(documents)
        saved = next((d for d in normalized if d.id == document.id), None)
        if saved is None:
            raise ValueError(f"Document {document.id!r} cannot be stored")

        await self._write_documents(normalized)
        logger.info("Saved document %s", document.id)
        await self._push(normalized)
        return saved

    async def create_document(self, data: DocumentCreate) -> VaultDocument:
        document = VaultDocument(
            id=make_id("doc"),
            uri=data.uri.strip(),
            mime_type=data.mime_type or DEFAULT_MIME_TYPE,
            file_name=data.file_name,
            size_bytes=data.size_bytes,
            content_hash=data.content_hash,
            title=data.title,
            tags=data.tags or None,
            note=data.note,
        )
        return await self.upsert_document(document)

    async def create_document_from_picker(
        self,
        picked: PickedFile,
        *,
        title: str | None = None,
        tags: list[str] | None = None,
    ) -> VaultDocument:
        """Register a file from the picker; its source becomes a tag."""
        next_tags = [tag for tag in (tags or []) if tag]
        next_tags.append(picked.source.value)
        return await self.create_document(
            DocumentCreate(
                uri=picked.uri,
                mime_type=picked.mime_type or DEFAULT_MIME_TYPE,
                file_name=picked.file_name,
                size_bytes=picked.size_bytes,
                title=title or picked.file_name,
                tags=next_tags,
            )
        )

    async def delete_document(self, document_id: str) -> None:
        """Remove the document. Records that reference it keep a dangling reference."""
        await self.ensure_ready()
        documents = await self._load()
        remaining = [d for d in documents if d.id != document_id]
        if len(remaining) == len(documents):
            return
        saved = await self._save(remaining)
        logger.info("Deleted document %s", document_id)
        await self._push(saved)

    # ── Record links ────────────────────────────────────────────────

    async def list_linked_records_for_document(self, document_id: str) -> list[LinkedRecordRef]:
        """Every record, across all entities, whose attachments reference ``document_id``."""
        await self.ensure_ready()
        links: list[LinkedRecordRef] = []
        for key in await self._store.get_all_keys():
            entity_id = entity_id_from_records_key(key)
            if entity_id is None:
                continue
            raw = await self._read_json(key)
            for row in as_list(raw):
                if not isinstance(row, dict):
                    continue
                refs = normalize_attachment_refs(row.get("attachments"))
                if not any(ref.document_id == document_id for ref in refs):
                    continue
                record_id = to_string(row.get("id")).strip()
                record_type = to_string(row.get("recordType")).strip()
                if not record_id or not record_type:
                    continue
                links.append(
                    LinkedRecordRef(
                        entity_id=entity_id,
                        record_id=record_id,
                        record_type=record_type,
                        title=trimmed_or_none(row.get("title")),
                    )
                )
        return links

    async def refresh_linked_to(self, document_id: str) -> VaultDocument:
        """Recompute ``linked_to`` from record attachments and store it."""
        doc = await self.require_document(document_id)
        links = await self.list_linked_records_for_document(document_id)
        linked_to = [
            DocumentLinkRef(record_type=link.record_type, record_id=link.record_id) for link in links
        ]
        return await self.upsert_document(dataclasses.replace(doc, linked_to=linked_to))

    async def resolve_attachments(
        self, record: VaultRecord
    ) -> list[tuple[AttachmentRef, VaultDocument | None]]:
        """Pair each attachment with its document; missing documents resolve to None."""
        by_id = {doc.id: doc for doc in await self.list_documents()}
        return [(ref, by_id.get(ref.document_id)) for ref in record.attachments]

    # ── OCR ─────────────────────────────────────────────────────────

    async def run_ocr(self, document_id: str) -> VaultDocument:
        """Extract text from an image document and store the outcome on it.

        Unsupported files, a missing engine, and engine errors are all
        recorded as FAILED results rather than raised.
        """
        doc = await self.require_document(document_id)
        result = await self._extract(doc)
        logger.info("OCR for document %s finished with %s", document_id, result.status.value)
        return await self.upsert_document(dataclasses.replace(doc, ocr=result))

    async def clear_ocr(self, document_id: str) -> VaultDocument:
        doc = await self.require_document(document_id)
        return await self.upsert_document(dataclasses.replace(doc, ocr=None))

    async def _extract(self, doc: VaultDocument) -> DocumentOcrResult:
        if not doc.is_image:
            error = (
                "OCR not available for PDFs yet."
                if doc.mime_type == "application/pdf"
                else "OCR only supports images."
            )
            return DocumentOcrResult(text="", status=OcrStatus.FAILED, error=error)

        if self._ocr_engine is None:
            return DocumentOcrResult(
                text="",
                status=OcrStatus.FAILED,
                error="OCR engine is unavailable.",
            )

        engine: OcrEngineTag = self._ocr_engine.tag
        try:
            output = await self._ocr_engine.extract(doc.uri)
        except Exception as exc:
            logger.warning("OCR engine failed for document %s: %s", doc.id, exc)
            return DocumentOcrResult(
                text="",
                status=OcrStatus.FAILED,
                engine=engine,
                error=str(exc) or "OCR failed",
            )

        text, lines = extract_ocr_text(output)
        if lines:
            return DocumentOcrResult(text=text, status=OcrStatus.READY, engine=engine, lines=lines)
        return DocumentOcrResult(
            text=text,
            status=OcrStatus.UNREADABLE,
            engine=engine,
            lines=lines,
            error="No readable text found.",
        )

    # ── Internals ───────────────────────────────────────────────────

    async def _load(self) -> list[VaultDocument]:
        return normalize_document_list(await self._read_json(DOCUMENTS_KEY))

    async def _save(self, documents: list[VaultDocument]) -> list[VaultDocument]:
        normalized = _renormalize(documents)
        await self._write_documents(normalized)
        return normalized

    async def _write_documents(self, documents: list[VaultDocument]) -> None:
        await self._write_json(DOCUMENTS_KEY, [document_to_json(d) for d in documents])

    async def _push(self, documents: list[VaultDocument]) -> None:
        if self._sync_gateway is None or not self._data_mode.is_networked:
            return
        try:
            await self._sync_gateway.push_documents(documents)
        except Exception:
            logger.warning("Document sync failed", exc_info=True)
