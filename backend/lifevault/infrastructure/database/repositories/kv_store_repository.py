"""Concrete KeyValueStore implementation backed by SQLAlchemy."""

import logging

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from lifevault.application.interfaces import KeyValueStore
from lifevault.domain.exceptions import StorageBackendError
from lifevault.infrastructure.database.models import KeyValueEntryModel

logger = logging.getLogger(__name__)


class SQLAlchemyKeyValueStore(KeyValueStore):
    """Implements the KeyValueStore port over the ``kv_entries`` table.

    Each call runs in its own short transaction, so a single ``set_item``
    is atomic. Backend failures are logged and re-raised as
    :class:`StorageBackendError`; nothing is retried.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        namespace: str = "default",
    ):
        self._session_factory = session_factory
        self._namespace = namespace

    @property
    def namespace(self) -> str:
        return self._namespace

    async def get_item(self, key: str) -> str | None:
        try:
            async with self._session_factory() as session:
                model = await session.get(KeyValueEntryModel, (self._namespace, key))
                return model.value if model else None
        except SQLAlchemyError as exc:
            raise self._failure("read", key, exc) from exc

    async def set_item(self, key: str, value: str) -> None:
        try:
            async with self._session_factory() as session, session.begin():
                model = await session.get(KeyValueEntryModel, (self._namespace, key))
                if model is None:
                    session.add(KeyValueEntryModel(namespace=self._namespace, key=key, value=value))
                else:
                    model.value = value
        except SQLAlchemyError as exc:
            raise self._failure("write", key, exc) from exc

    async def remove_item(self, key: str) -> None:
        await self.multi_remove([key])

    async def multi_remove(self, keys: list[str]) -> None:
        if not keys:
            return
        try:
            async with self._session_factory() as session, session.begin():
                await session.execute(
                    delete(KeyValueEntryModel).where(
                        KeyValueEntryModel.namespace == self._namespace,
                        KeyValueEntryModel.key.in_(keys),
                    )
                )
        except SQLAlchemyError as exc:
            raise self._failure("delete", ", ".join(keys), exc) from exc

    async def get_all_keys(self) -> list[str]:
        try:
            async with self._session_factory() as session:
                result = await session.execute(
                    select(KeyValueEntryModel.key)
                    .where(KeyValueEntryModel.namespace == self._namespace)
                    .order_by(KeyValueEntryModel.key)
                )
                return list(result.scalars().all())
        except SQLAlchemyError as exc:
            raise self._failure("list keys", None, exc) from exc

    def _failure(self, operation: str, key: str | None, exc: SQLAlchemyError) -> StorageBackendError:
        logger.error(
            "Key-value %s failed (namespace=%s, key=%s): %s",
            operation,
            self._namespace,
            key,
            exc,
        )
        return StorageBackendError(operation, key, exc)
