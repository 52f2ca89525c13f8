"""End-to-end: open a SQLite-backed vault, write, reopen, bump the schema version."""

import pytest

from lifevault.application.schemas import PickedFile
from lifevault.application.services import AddMode
from lifevault.bootstrap import open_vault
from lifevault.config import Settings
from lifevault.domain.entities import AttachmentRole, DocumentSource, PetProfile, RecordType


def _settings(tmp_path, version: str = "6") -> Settings:
    return Settings(
        _env_file=None,
        database_url=f"sqlite:///{tmp_path / 'vault.db'}",
        storage_schema_version=version,
    )


@pytest.mark.asyncio
async def test_records_documents_and_profiles_survive_reopen(tmp_path):
    vault = await open_vault(_settings(tmp_path))
    try:
        await vault.pets.upsert_pet(PetProfile(id="pet-1", pet_name="Rex", kind="Dog"))
        record = vault.records.new_record(
            "pet-1", RecordType.PET_INSURANCE, payload={"providerName": "Paws Mutual"}, record_id="rec-1"
        )
        await vault.records.upsert_record_for_entity("pet-1", record)

        doc = await vault.documents.create_document_from_picker(
            PickedFile(uri="file:///policy.jpg", mime_type="image/jpeg", source=DocumentSource.LIBRARY)
        )
        await vault.attachments.attach("pet-1", "rec-1", doc.id, role=AttachmentRole.PAGE)
    finally:
        await vault.close()

    reopened = await open_vault(_settings(tmp_path))
    try:
        assert reopened.storage_was_reset is False
        assert [p.pet_name for p in await reopened.pets.list_pets()] == ["Rex"]

        target = await reopened.records.resolve_add_target("pet-1", RecordType.PET_INSURANCE)
        assert target.mode is AddMode.EDIT
        assert target.record.payload["providerName"] == "Paws Mutual"

        resolved = await reopened.documents.resolve_attachments(target.record)
        assert [(ref.role, found.uri) for ref, found in resolved] == [
            (AttachmentRole.PAGE, "file:///policy.jpg")
        ]
        links = await reopened.documents.list_linked_records_for_document(doc.id)
        assert [(link.entity_id, link.record_id) for link in links] == [("pet-1", "rec-1")]
    finally:
        await reopened.close()


@pytest.mark.asyncio
async def test_schema_version_bump_resets_collections(tmp_path):
    vault = await open_vault(_settings(tmp_path))
    try:
        await vault.records.upsert_record_for_entity(
            "person-1", vault.records.new_record("person-1", RecordType.SIZES, record_id="s1")
        )
        await vault.secure_store.set_item("hasOnboarded", "true")
    finally:
        await vault.close()

    bumped = await open_vault(_settings(tmp_path, version="7"))
    try:
        assert bumped.storage_was_reset is True
        assert await bumped.records.list_records_for_entity("person-1") == []
        assert await bumped.secure_store.get_item("hasOnboarded") is None
    finally:
        await bumped.close()
