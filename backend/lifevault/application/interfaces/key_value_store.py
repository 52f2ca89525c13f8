"""Abstract interface (port) for the on-device key-value persistence backend."""

from abc import ABC, abstractmethod


class KeyValueStore(ABC):
    """Port for string key → string value persistence — implemented in the infrastructure layer.

    Every write replaces the whole value stored under a key; the core relies
    on single-key writes being atomic.
    """

    @abstractmethod
    async def get_item(self, key: str) -> str | None:
        """Return the raw value under ``key``, or None if absent."""
        ...

    @abstractmethod
    async def set_item(self, key: str, value: str) -> None:
        """Create or replace the value under ``key``."""
        ...

    @abstractmethod
    async def remove_item(self, key: str) -> None:
        """Delete ``key``. Absent keys are ignored."""
        ...

    @abstractmethod
    async def multi_remove(self, keys: list[str]) -> None:
        """Delete several keys in one call. Absent keys are ignored."""
        ...

    @abstractmethod
    async def get_all_keys(self) -> list[str]:
        """Return every key currently stored."""
        ...
