"""In-memory fakes of the application ports, shared by unit tests."""

import asyncio
import json
from typing import Any

from lifevault.application.interfaces import KeyValueStore, OcrEngine, SyncGateway
from lifevault.domain.entities import OcrEngineTag, VaultDocument, VaultRecord
from lifevault.domain.exceptions import StorageBackendError


class FakeKeyValueStore(KeyValueStore):
    """Dict-backed store that records every write and removal.

    With ``yield_control`` each call suspends once before touching the
    data, so concurrent read-modify-write cycles interleave.
    """

    def __init__(self, data: dict[str, str] | None = None, *, yield_control: bool = False):
        self.data: dict[str, str] = dict(data or {})
        self.writes: list[str] = []
        self.removed: list[str] = []
        self.fail_writes = False
        self.fail_removes = False
        self._yield_control = yield_control

    async def _pause(self) -> None:
        if self._yield_control:
            await asyncio.sleep(0)

    async def get_item(self, key: str) -> str | None:
        await self._pause()
        return self.data.get(key)

    async def set_item(self, key: str, value: str) -> None:
        await self._pause()
        if self.fail_writes:
            raise StorageBackendError("write", key, OSError("disk full"))
        self.writes.append(key)
        self.data[key] = value

    async def remove_item(self, key: str) -> None:
        await self.multi_remove([key])

    async def multi_remove(self, keys: list[str]) -> None:
        await self._pause()
        if self.fail_removes:
            key = keys[0] if len(keys) == 1 else None
            raise StorageBackendError("delete", key, OSError("keychain locked"))
        for key in keys:
            if key in self.data:
                del self.data[key]
                self.removed.append(key)

    async def get_all_keys(self) -> list[str]:
        await self._pause()
        return list(self.data)

    # ── Test helpers ────────────────────────────────────────────────

    def seed(self, key: str, value: Any) -> None:
        self.data[key] = value if isinstance(value, str) else json.dumps(value)

    def load(self, key: str) -> Any:
        return json.loads(self.data[key])


class FakeOcrEngine(OcrEngine):
    def __init__(self, output: Any = "", *, error: Exception | None = None, tag=OcrEngineTag.VISION):
        self._output = output
        self._error = error
        self._tag = tag
        self.calls: list[str] = []

    @property
    def tag(self) -> OcrEngineTag:
        return self._tag

    async def extract(self, uri: str) -> Any:
        self.calls.append(uri)
        if self._error is not None:
            raise self._error
        return self._output


class FakeSyncGateway(SyncGateway):
    def __init__(self):
        self.record_pushes: list[tuple[str, list[VaultRecord]]] = []
        self.document_pushes: list[list[VaultDocument]] = []

    async def push_records(self, entity_id: str, records: list[VaultRecord]) -> None:
        self.record_pushes.append((entity_id, records))

    async def push_documents(self, documents: list[VaultDocument]) -> None:
        self.document_pushes.append(documents)
