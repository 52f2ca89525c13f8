"""SQLAlchemy ORM model for key-value entries."""

from datetime import datetime, timezone

from sqlalchemy import DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from lifevault.infrastructure.database.base import Base


class KeyValueEntryModel(Base):
    """ORM model — maps to the 'kv_entries' table.

    ``namespace`` separates the general store from the secure-flag store so
    both can share one database file.
    """

    __tablename__ = "kv_entries"

    namespace: Mapped[str] = mapped_column(String(50), primary_key=True, default="default")
    key: Mapped[str] = mapped_column(String(255), primary_key=True)
    value: Mapped[str] = mapped_column(Text, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<KeyValueEntryModel(namespace='{self.namespace}', key='{self.key}')>"
