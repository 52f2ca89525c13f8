"""Domain entities for stored documents (uploaded photos, PDFs, scans)."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum


class OcrStatus(str, Enum):
    """Outcome of a text-extraction run."""

    READY = "READY"
    UNREADABLE = "UNREADABLE"
    FAILED = "FAILED"


class OcrEngineTag(str, Enum):
    """Which engine produced an OCR result."""

    VISION = "VISION"
    MLKIT = "MLKIT"
    OTHER = "OTHER"


class DocumentSource(str, Enum):
    """Where a picked file came from."""

    CAMERA = "camera"
    LIBRARY = "library"
    FILES = "files"


@dataclass(frozen=True)
class DocumentOcrResult:
    """Extracted text attached to a document."""

    text: str
    status: OcrStatus
    engine: OcrEngineTag = OcrEngineTag.OTHER
    lines: list[str] | None = None
    error: str | None = None
    extracted_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


@dataclass(frozen=True)
class DocumentLinkRef:
    """Denormalized pointer from a document back to a record (informational only)."""

    record_type: str
    record_id: str


@dataclass(frozen=True)
class LinkedRecordRef:
    """A record found to reference a document, with its owning entity."""

    entity_id: str
    record_id: str
    record_type: str
    title: str | None = None


@dataclass
class VaultDocument:
    """Core domain entity: a reference to a user-supplied file.

    Two documents with the same ``(content_hash, uri)`` pair are duplicates;
    only the first one survives normalization.
    """

    id: str
    uri: str
    mime_type: str = "application/octet-stream"
    file_name: str | None = None
    size_bytes: int | float | None = None
    content_hash: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    title: str | None = None
    tags: list[str] | None = None
    note: str | None = None
    linked_to: list[DocumentLinkRef] | None = None
    ocr: DocumentOcrResult | None = None

    @property
    def is_image(self) -> bool:
        return self.mime_type.startswith("image/")
