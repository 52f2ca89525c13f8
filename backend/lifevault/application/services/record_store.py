"""Application service — per-entity record persistence with cardinality support."""

import asyncio
import contextlib
import dataclasses
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any

from lifevault.application.interfaces import KeyValueStore, SyncGateway
from lifevault.application.normalizers.coerce import make_id, now_utc, to_string
from lifevault.application.normalizers.payloads import (
    default_payload_for,
    normalize_payload_for_edit,
    normalize_payload_for_save,
)
from lifevault.application.normalizers.records import (
    normalize_record,
    normalize_record_list,
    record_to_json,
)
from lifevault.application.services.json_collection import JsonCollectionStore
from lifevault.application.services.storage_keys import records_key
from lifevault.domain.entities import DataMode, RecordType, VaultRecord
from lifevault.domain.record_registry import get_record_meta, is_singleton_type

logger = logging.getLogger(__name__)


class AddMode(str, Enum):
    CREATE = "CREATE"
    EDIT = "EDIT"


@dataclass(frozen=True)
class AddTarget:
    """Where an "add record" action should go.

    For a SINGLE type that already has a record, ``mode`` is EDIT and
    ``record`` is the existing one.
    """

    mode: AddMode
    record: VaultRecord | None = None


def _without_id(rows: list[Any], record_id: str) -> list[Any]:
    """Untyped rows, minus any stored under ``record_id``."""
    return [
        row for row in rows
        if not (isinstance(row, dict) and to_string(row.get("id")).strip() == record_id)
    ]


class EntityRecordStore(JsonCollectionStore):
    """CRUD for records, partitioned by owning entity id.

    Every read and every write passes through the record normalizer, so
    callers only ever see current-shape payloads. Each write rewrites the
    entity's whole list. Stored rows that cannot be typed are hidden from
    reads and written back untouched.

    Writes are unsynchronized unless ``serialize_writes`` is set: two
    concurrent read-modify-write cycles on one entity end with the last
    writer's list. With ``serialize_writes`` each entity's upsert/delete
    runs under its own ``asyncio.Lock``.
    """

    def __init__(
        self,
        store: KeyValueStore,
        data_mode: DataMode | None = None,
        sync_gateway: SyncGateway | None = None,
        serialize_writes: bool = False,
    ):
        super().__init__(store)
        self._data_mode = data_mode or DataMode()
        self._sync_gateway = sync_gateway
        self._serialize_writes = serialize_writes
        self._locks: dict[str, asyncio.Lock] = {}

    # ── Reads ───────────────────────────────────────────────────────

    async def list_records_for_entity(self, entity_id: str) -> list[VaultRecord]:
        """All records of ``entity_id``, most recently updated first."""
        records = await self._load(entity_id)
        return sorted(records, key=lambda r: r.updated_at, reverse=True)

    async def get_record_by_id(self, entity_id: str, record_id: str) -> VaultRecord | None:
        for record in await self._load(entity_id):
            if record.id == record_id:
                return record
        return None

    async def list_records_of_type(
        self, entity_id: str, record_type: RecordType
    ) -> list[VaultRecord]:
        records = await self.list_records_for_entity(entity_id)
        return [r for r in records if r.record_type is record_type]

    async def find_singleton(
        self, entity_id: str, record_type: RecordType
    ) -> VaultRecord | None:
        """The existing record of a SINGLE type, or None (always None for MULTI types)."""
        if not is_singleton_type(record_type):
            return None
        existing = await self.list_records_of_type(entity_id, record_type)
        return existing[0] if existing else None

    async def resolve_add_target(self, entity_id: str, record_type: RecordType) -> AddTarget:
        existing = await self.find_singleton(entity_id, record_type)
        if existing is not None:
            logger.debug(
                "Redirecting add of %s for %s to existing record %s",
                record_type.value,
                entity_id,
                existing.id,
            )
            return AddTarget(mode=AddMode.EDIT, record=existing)
        return AddTarget(mode=AddMode.CREATE)

    def new_record(
        self,
        entity_id: str,
        record_type: RecordType,
        *,
        title: str | None = None,
        payload: dict[str, Any] | None = None,
        record_id: str | None = None,
    ) -> VaultRecord:
        """Build an unsaved record with a default (or normalized) payload."""
        meta = get_record_meta(record_type)
        now = now_utc()
        return VaultRecord(
            id=record_id or make_id("rec"),
            entity_id=entity_id,
            record_type=record_type,
            payload=(
                normalize_payload_for_edit(record_type, payload)
                if payload is not None
                else default_payload_for(record_type)
            ),
            title=title,
            is_private=meta.is_private,
            created_at=now,
            updated_at=now,
        )

    # ── Writes ──────────────────────────────────────────────────────

    async def upsert_record_for_entity(self, entity_id: str, record: VaultRecord) -> VaultRecord:
        """Insert or replace ``record`` in ``entity_id``'s list and return the saved value.

        An existing id keeps its position and original ``created_at``; a new
        id is prepended. The stored payload and the returned payload are the
        same normalized value.
        """
        async with self._entity_lock(entity_id):
            records, untyped = await self._load_rows(entity_id)
            now = now_utc()
            record_id = record.id.strip() or make_id("rec")
            index = next((i for i, r in enumerate(records) if r.id == record_id), None)

            candidate = dataclasses.replace(
                record,
                id=record_id,
                payload=normalize_payload_for_save(record.record_type, record.payload),
                created_at=now if index is None else records[index].created_at,
                updated_at=now,
            )
            # Re-reading the stored JSON yields exactly this value
            saved = normalize_record(record_to_json(candidate), entity_id)
            if saved is None:
                raise ValueError(f"Record {record.id!r} cannot be stored")

            if index is None:
                records.insert(0, saved)
            else:
                records[index] = saved

            await self._save(entity_id, records, _without_id(untyped, record_id))

        logger.info(
            "Saved %s record %s for entity %s", saved.record_type.value, saved.id, entity_id
        )
        await self._push(entity_id, records)
        return saved

    async def delete_record_for_entity(self, entity_id: str, record_id: str) -> None:
        """Remove ``record_id``; a missing id leaves the list untouched."""
        async with self._entity_lock(entity_id):
            records, untyped = await self._load_rows(entity_id)
            remaining = [r for r in records if r.id != record_id]
            kept_untyped = _without_id(untyped, record_id)
            if len(remaining) == len(records) and len(kept_untyped) == len(untyped):
                logger.debug("Record %s not found for entity %s", record_id, entity_id)
                return
            await self._save(entity_id, remaining, kept_untyped)

        logger.info("Deleted record %s for entity %s", record_id, entity_id)
        await self._push(entity_id, remaining)

    # ── Internals ───────────────────────────────────────────────────

    async def _load(self, entity_id: str) -> list[VaultRecord]:
        raw = await self._read_json(records_key(entity_id))
        return normalize_record_list(raw, entity_id)

    async def _load_rows(self, entity_id: str) -> tuple[list[VaultRecord], list[Any]]:
        """Typed records plus the raw rows that could not be typed, both in stored order."""
        raw = await self._read_json(records_key(entity_id))
        records: list[VaultRecord] = []
        untyped: list[Any] = []
        for row in raw if isinstance(raw, list) else []:
            record = normalize_record(row, entity_id)
            if record is None:
                untyped.append(row)
            else:
                records.append(record)
        if untyped:
            logger.debug("Keeping %d untyped rows for entity %s", len(untyped), entity_id)
        return records, untyped

    async def _save(
        self, entity_id: str, records: list[VaultRecord], untyped: list[Any] | None = None
    ) -> None:
        rows = [record_to_json(r) for r in records]
        rows.extend(untyped or [])
        await self._write_json(records_key(entity_id), rows)

    def _entity_lock(self, entity_id: str) -> contextlib.AbstractAsyncContextManager:
        if not self._serialize_writes:
            return contextlib.nullcontext()
        return self._locks.setdefault(entity_id, asyncio.Lock())

    async def _push(self, entity_id: str, records: list[VaultRecord]) -> None:
        if self._sync_gateway is None or not self._data_mode.is_networked:
            return
        try:
            await self._sync_gateway.push_records(entity_id, records)
        except Exception:
            logger.warning("Record sync for entity %s failed", entity_id, exc_info=True)
