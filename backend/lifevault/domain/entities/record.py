"""Domain entities for entity-scoped records and their attachment references."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from .record_types import RecordType


class AttachmentRole(str, Enum):
    """Which face or part of a document an attachment reference points at."""

    FRONT = "FRONT"
    BACK = "BACK"
    CARD = "CARD"
    PAGE = "PAGE"
    OTHER = "OTHER"


@dataclass(frozen=True)
class AttachmentRef:
    """A record's pointer to a stored document. Unique by document_id within a record."""

    document_id: str
    role: AttachmentRole | None = None
    label: str | None = None
    added_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


@dataclass
class VaultRecord:
    """Core domain entity: one typed unit of information owned by a person or pet.

    The payload always has the current shape for ``record_type``; the record
    store normalizes it on every read and every write.
    """

    id: str
    entity_id: str
    record_type: RecordType
    payload: dict[str, Any] = field(default_factory=dict)
    title: str | None = None
    attachments: list[AttachmentRef] = field(default_factory=list)
    is_private: bool = False
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def has_attachment(self, document_id: str) -> bool:
        return any(ref.document_id == document_id for ref in self.attachments)
