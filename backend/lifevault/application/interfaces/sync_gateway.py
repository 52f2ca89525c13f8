"""Abstract interface (port) for the optional remote sync API."""

from abc import ABC, abstractmethod

from lifevault.domain.entities import VaultDocument, VaultRecord


class SyncGateway(ABC):
    """Receives full collection snapshots after local writes in networked mode.

    The local store stays the source of truth; gateway failures are the
    gateway's concern and never roll back a local write.
    """

    @abstractmethod
    async def push_records(self, entity_id: str, records: list[VaultRecord]) -> None:
        ...

    @abstractmethod
    async def push_documents(self, documents: list[VaultDocument]) -> None:
        ...
