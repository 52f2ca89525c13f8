"""Composition root — builds the backend, runs the schema guard, then the stores."""

import logging
from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncEngine

from lifevault.application.interfaces import KeyValueStore, OcrEngine, SyncGateway
from lifevault.application.services import (
    AttachmentLinker,
    ContactStore,
    DocumentStore,
    EntityRecordStore,
    HouseholdStore,
    PeopleStore,
    PetStore,
    StorageSchemaGuard,
)
from lifevault.config import Settings, get_settings
from lifevault.infrastructure.database import (
    create_engine_from_settings,
    create_schema,
    create_session_factory,
)
from lifevault.infrastructure.database.repositories import SQLAlchemyKeyValueStore
from lifevault.infrastructure.logging.log_config import setup_logging

logger = logging.getLogger(__name__)

SECURE_NAMESPACE = "secure"


@dataclass
class Vault:
    """Every store, ready to use."""

    records: EntityRecordStore
    documents: DocumentStore
    attachments: AttachmentLinker
    people: PeopleStore
    pets: PetStore
    households: HouseholdStore
    contacts: ContactStore
    store: KeyValueStore
    secure_store: KeyValueStore
    storage_was_reset: bool = False
    engine: AsyncEngine | None = None

    async def close(self) -> None:
        if self.engine is not None:
            await self.engine.dispose()


async def build_vault(
    store: KeyValueStore,
    secure_store: KeyValueStore,
    settings: Settings,
    *,
    ocr_engine: OcrEngine | None = None,
    sync_gateway: SyncGateway | None = None,
) -> Vault:
    """Run the schema guard and construct the stores over existing backends.

    No store exists until the guard has finished.
    """
    guard = StorageSchemaGuard(store, secure_store, settings.storage_schema_version)
    was_reset = await guard.ensure_current()

    data_mode = settings.data_mode()
    records = EntityRecordStore(
        store,
        data_mode=data_mode,
        sync_gateway=sync_gateway,
        serialize_writes=settings.serialize_entity_writes,
    )
    documents = DocumentStore(
        store,
        ocr_engine=ocr_engine,
        data_mode=data_mode,
        sync_gateway=sync_gateway,
    )
    await documents.ensure_ready()

    logger.info(
        "Vault ready (schema=%s, mode=%s, reset=%s)",
        settings.storage_schema_version,
        "networked" if data_mode.is_networked else "local-only",
        was_reset,
    )
    return Vault(
        records=records,
        documents=documents,
        attachments=AttachmentLinker(records),
        people=PeopleStore(store),
        pets=PetStore(store),
        households=HouseholdStore(store),
        contacts=ContactStore(store),
        store=store,
        secure_store=secure_store,
        storage_was_reset=was_reset,
    )


async def open_vault(
    settings: Settings | None = None,
    *,
    ocr_engine: OcrEngine | None = None,
    sync_gateway: SyncGateway | None = None,
) -> Vault:
    """Open the SQLite-backed vault described by ``settings``."""
    settings = settings or get_settings()
    setup_logging(settings)

    engine = create_engine_from_settings(settings)
    try:
        await create_schema(engine)
        session_factory = create_session_factory(engine)
        vault = await build_vault(
            SQLAlchemyKeyValueStore(session_factory),
            SQLAlchemyKeyValueStore(session_factory, namespace=SECURE_NAMESPACE),
            settings,
            ocr_engine=ocr_engine,
            sync_gateway=sync_gateway,
        )
    except Exception:
        await engine.dispose()
        raise
    vault.engine = engine
    return vault
