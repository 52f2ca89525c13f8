"""Integration tests for the SQLAlchemy key-value backend on a temporary SQLite file."""

import pytest
from sqlalchemy.exc import OperationalError

from lifevault.config import Settings
from lifevault.domain.exceptions import StorageBackendError
from lifevault.infrastructure.database import (
    create_engine_from_settings,
    create_schema,
    create_session_factory,
)
from lifevault.infrastructure.database.repositories import SQLAlchemyKeyValueStore


def _settings(tmp_path) -> Settings:
    return Settings(_env_file=None, database_url=f"sqlite:///{tmp_path / 'nested' / 'vault.db'}")


@pytest.mark.asyncio
async def test_set_get_overwrite_and_remove(tmp_path):
    engine = create_engine_from_settings(_settings(tmp_path))
    try:
        await create_schema(engine)
        store = SQLAlchemyKeyValueStore(create_session_factory(engine))

        assert await store.get_item("people_v1") is None
        await store.set_item("people_v1", "[]")
        await store.set_item("people_v1", '[{"id": "p1"}]')
        assert await store.get_item("people_v1") == '[{"id": "p1"}]'

        await store.set_item("records_v1:p1", "[]")
        assert await store.get_all_keys() == ["people_v1", "records_v1:p1"]

        await store.multi_remove(["people_v1", "never-written"])
        await store.remove_item("records_v1:p1")
        assert await store.get_all_keys() == []
    finally:
        await engine.dispose()


@pytest.mark.asyncio
async def test_namespaces_are_isolated(tmp_path):
    engine = create_engine_from_settings(_settings(tmp_path))
    try:
        await create_schema(engine)
        factory = create_session_factory(engine)
        general = SQLAlchemyKeyValueStore(factory)
        secure = SQLAlchemyKeyValueStore(factory, namespace="secure")

        await general.set_item("hasOnboarded", "general")
        await secure.set_item("hasOnboarded", "true")
        await secure.multi_remove(["hasOnboarded"])

        assert await general.get_item("hasOnboarded") == "general"
        assert await secure.get_all_keys() == []
    finally:
        await engine.dispose()


@pytest.mark.asyncio
async def test_backend_failures_surface_as_storage_errors(tmp_path):
    engine = create_engine_from_settings(_settings(tmp_path))
    try:
        # No create_schema: the table does not exist
        store = SQLAlchemyKeyValueStore(create_session_factory(engine))
        with pytest.raises(StorageBackendError) as exc_info:
            await store.set_item("people_v1", "[]")
        assert exc_info.value.operation == "write"
        assert isinstance(exc_info.value.cause, OperationalError)
    finally:
        await engine.dispose()
