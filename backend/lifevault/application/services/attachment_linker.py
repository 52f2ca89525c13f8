"""Record ↔ document linking.

The two pure functions never mutate their input; :class:`AttachmentLinker`
persists their result through the record store.
"""

import dataclasses
import logging

from lifevault.application.normalizers.coerce import now_utc
from lifevault.application.services.record_store import EntityRecordStore
from lifevault.domain.entities import AttachmentRef, AttachmentRole, VaultRecord

logger = logging.getLogger(__name__)


def link_document_to_record(
    record: VaultRecord,
    document_id: str,
    *,
    role: AttachmentRole | None = None,
    label: str | None = None,
) -> VaultRecord:
    """A copy of ``record`` with ``document_id`` attached.

    Unchanged if the id is blank or already attached.
    """
    document_id = document_id.strip()
    if not document_id or record.has_attachment(document_id):
        return dataclasses.replace(record, attachments=list(record.attachments))
    ref = AttachmentRef(
        document_id=document_id,
        role=role,
        label=(label or "").strip() or None,
        added_at=now_utc(),
    )
    return dataclasses.replace(record, attachments=[*record.attachments, ref])


def unlink_document_from_record(record: VaultRecord, document_id: str) -> VaultRecord:
    """A copy of ``record`` without ``document_id``."""
    return dataclasses.replace(
        record,
        attachments=[ref for ref in record.attachments if ref.document_id != document_id],
    )


class AttachmentLinker:
    """Attach and detach documents on stored records."""

    def __init__(self, records: EntityRecordStore):
        self._records = records

    async def attach(
        self,
        entity_id: str,
        record_id: str,
        document_id: str,
        *,
        role: AttachmentRole | None = None,
        label: str | None = None,
    ) -> VaultRecord | None:
        record = await self._records.get_record_by_id(entity_id, record_id)
        if record is None:
            return None
        if record.has_attachment(document_id):
            return record
        linked = link_document_to_record(record, document_id, role=role, label=label)
        logger.debug("Attaching document %s to record %s", document_id, record_id)
        return await self._records.upsert_record_for_entity(entity_id, linked)

    async def detach(self, entity_id: str, record_id: str, document_id: str) -> VaultRecord | None:
        record = await self._records.get_record_by_id(entity_id, record_id)
        if record is None:
            return None
        if not record.has_attachment(document_id):
            return record
        logger.debug("Detaching document %s from record %s", document_id, record_id)
        return await self._records.upsert_record_for_entity(
            entity_id, unlink_document_from_record(record, document_id)
        )
