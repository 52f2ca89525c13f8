"""Startup gate that wipes persisted collections written under another schema version."""

import logging

from lifevault.application.interfaces import KeyValueStore
from lifevault.application.services.storage_keys import (
    ONBOARDING_FLAG_KEYS,
    RECORDS_PREFIX,
    RESETTABLE_KEYS,
    SCHEMA_VERSION_KEY,
)
from lifevault.domain.exceptions import StorageBackendError

logger = logging.getLogger(__name__)


class StorageSchemaGuard:
    """Compares the persisted storage version with the expected one.

    On mismatch (or when no version was ever written) every known collection
    and every per-entity record list is deleted and the expected version is
    written. Onboarding flags in the secure store are cleared on a best-effort
    basis. There is no field-level migration path.
    """

    def __init__(
        self,
        store: KeyValueStore,
        secure_store: KeyValueStore,
        expected_version: str,
    ):
        self._store = store
        self._secure_store = secure_store
        self._expected_version = expected_version

    @property
    def expected_version(self) -> str:
        return self._expected_version

    async def ensure_current(self) -> bool:
        """Run the check. Returns True if a reset was performed."""
        current = await self._store.get_item(SCHEMA_VERSION_KEY)
        if current == self._expected_version:
            logger.debug("Storage schema version %s is current", current)
            return False

        all_keys = await self._store.get_all_keys()
        doomed = sorted(
            key for key in all_keys
            if key in RESETTABLE_KEYS or key.startswith(RECORDS_PREFIX)
        )

        logger.warning(
            "Storage schema version changed (%s → %s); resetting %d collections",
            current,
            self._expected_version,
            len(doomed),
        )

        if doomed:
            await self._store.multi_remove(doomed)
        await self._clear_onboarding_flags()
        await self._store.set_item(SCHEMA_VERSION_KEY, self._expected_version)
        return True

    async def _clear_onboarding_flags(self) -> None:
        """Remove each flag independently; a secure-store failure does not stop the reset."""
        failed: list[str] = []
        for key in ONBOARDING_FLAG_KEYS:
            try:
                await self._secure_store.remove_item(key)
            except StorageBackendError as exc:
                logger.warning("Could not clear onboarding flag '%s': %s", key, exc.cause)
                failed.append(key)
        if failed:
            logger.warning("%d onboarding flags left in the secure store", len(failed))
