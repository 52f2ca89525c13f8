"""Shared JSON read/write over the KeyValueStore port."""

import json
import logging
from typing import Any

from lifevault.application.interfaces import KeyValueStore

logger = logging.getLogger(__name__)


class JsonCollectionStore:
    """Base for stores that keep one JSON document per key.

    Corrupt JSON reads as "no data"; backend errors propagate unchanged.
    """

    def __init__(self, store: KeyValueStore):
        self._store = store

    async def _read_json(self, key: str) -> Any:
        raw = await self._store.get_item(key)
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except (TypeError, ValueError):
            logger.warning("Ignoring unreadable JSON under key '%s'", key)
            return None

    async def _write_json(self, key: str, value: Any) -> None:
        await self._store.set_item(key, json.dumps(value, ensure_ascii=False))
