"""Unit tests for vault assembly over fake backends."""

import pytest

from lifevault.bootstrap import build_vault
from lifevault.config import Settings
from lifevault.domain.entities import RecordType
from tests.fakes import FakeKeyValueStore


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None, storage_schema_version="7")


@pytest.mark.asyncio
async def test_guard_runs_before_stores_read(settings: Settings):
    store = FakeKeyValueStore()
    store.seed("storage_schema_version", "6")
    store.seed("records_v1:person-1", [{"id": "rec-1", "recordType": "PASSPORT", "payload": {}}])
    secure = FakeKeyValueStore()
    secure.seed("hasOnboarded", "true")

    vault = await build_vault(store, secure, settings)

    assert vault.storage_was_reset is True
    assert await vault.records.list_records_for_entity("person-1") == []
    assert "hasOnboarded" not in secure.data
    assert store.data["storage_schema_version"] == "7"


@pytest.mark.asyncio
async def test_reopening_with_same_version_keeps_data(settings: Settings):
    store, secure = FakeKeyValueStore(), FakeKeyValueStore()
    vault = await build_vault(store, secure, settings)
    record = vault.records.new_record("person-1", RecordType.SIZES, record_id="s1")
    await vault.records.upsert_record_for_entity("person-1", record)

    reopened = await build_vault(store, secure, settings)

    assert reopened.storage_was_reset is False
    assert [r.id for r in await reopened.records.list_records_for_entity("person-1")] == ["s1"]
