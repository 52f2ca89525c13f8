"""Unit tests for record ↔ document linking."""

import pytest

from lifevault.application.services import (
    AttachmentLinker,
    EntityRecordStore,
    link_document_to_record,
    unlink_document_from_record,
)
from lifevault.domain.entities import AttachmentRole, RecordType, VaultRecord
from tests.fakes import FakeKeyValueStore


@pytest.fixture
def record() -> VaultRecord:
    return VaultRecord(id="rec-1", entity_id="person-1", record_type=RecordType.DRIVERS_LICENSE)


def test_link_returns_a_new_record(record: VaultRecord):
    linked = link_document_to_record(record, "doc-1", role=AttachmentRole.FRONT, label="Front")
    assert linked is not record
    assert record.attachments == []
    assert [(r.document_id, r.role, r.label) for r in linked.attachments] == [
        ("doc-1", AttachmentRole.FRONT, "Front")
    ]


def test_link_is_idempotent(record: VaultRecord):
    once = link_document_to_record(record, "doc-1")
    twice = link_document_to_record(once, "doc-1", role=AttachmentRole.BACK)
    assert twice.attachments == once.attachments
    assert twice is not once


def test_unlink_removes_and_is_noop_when_absent(record: VaultRecord):
    linked = link_document_to_record(link_document_to_record(record, "doc-1"), "doc-2")
    unlinked = unlink_document_from_record(linked, "doc-1")
    assert [r.document_id for r in unlinked.attachments] == ["doc-2"]
    assert len(linked.attachments) == 2

    again = unlink_document_from_record(unlinked, "doc-1")
    assert again.attachments == unlinked.attachments


@pytest.mark.asyncio
async def test_linker_persists_through_record_store():
    records = EntityRecordStore(FakeKeyValueStore())
    await records.upsert_record_for_entity(
        "person-1", records.new_record("person-1", RecordType.PASSPORT, record_id="rec-1")
    )
    linker = AttachmentLinker(records)

    saved = await linker.attach("person-1", "rec-1", "doc-1", role=AttachmentRole.PAGE)
    assert [r.document_id for r in saved.attachments] == ["doc-1"]
    await linker.attach("person-1", "rec-1", "doc-1")

    stored = await records.get_record_by_id("person-1", "rec-1")
    assert [r.document_id for r in stored.attachments] == ["doc-1"]

    detached = await linker.detach("person-1", "rec-1", "doc-1")
    assert detached.attachments == []
    assert (await records.get_record_by_id("person-1", "rec-1")).attachments == []


@pytest.mark.asyncio
async def test_linker_returns_none_for_missing_record():
    linker = AttachmentLinker(EntityRecordStore(FakeKeyValueStore()))
    assert await linker.attach("person-1", "missing", "doc-1") is None
    assert await linker.detach("person-1", "missing", "doc-1") is None


def test_link_ignores_blank_document_ids(record: VaultRecord):
    assert link_document_to_record(record, "   ").attachments == []
    padded = link_document_to_record(record, " doc-1 ")
    assert [r.document_id for r in padded.attachments] == ["doc-1"]
