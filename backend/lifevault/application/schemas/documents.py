"""Pydantic DTOs for creating documents."""

from typing import Annotated

from pydantic import BaseModel, Field, StringConstraints

from lifevault.domain.entities import DocumentSource

# Surrounding whitespace is stripped before the emptiness check
Uri = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class DocumentCreate(BaseModel):
    """Schema for registering a file that is already stored at ``uri``."""

    uri: Uri = Field(..., examples=["file:///vault/docs/license-front.jpg"])
    mime_type: str = "application/octet-stream"
    file_name: str | None = None
    size_bytes: int | None = Field(None, ge=0)
    content_hash: str | None = None
    title: str | None = None
    tags: list[str] | None = None
    note: str | None = None


class PickedFile(BaseModel):
    """What the file picker or camera hands back."""

    uri: Uri
    file_name: str | None = None
    mime_type: str | None = None
    size_bytes: int | None = Field(None, ge=0)
    source: DocumentSource = DocumentSource.FILES
