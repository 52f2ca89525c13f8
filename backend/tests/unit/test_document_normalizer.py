"""Unit tests for document list normalization."""

from lifevault.application.normalizers.documents import (
    document_to_json,
    normalize_document_list,
)
from lifevault.domain.entities import OcrEngineTag, OcrStatus


def test_items_without_uri_are_dropped_and_defaults_applied():
    docs = normalize_document_list(
        [
            {"uri": "  "},
            "not a document",
            {"uri": "file:///a.jpg", "tags": [" id ", ""], "sizeBytes": "12"},
        ]
    )
    assert len(docs) == 1
    doc = docs[0]
    assert doc.id.startswith("doc_")
    assert doc.mime_type == "application/octet-stream"
    assert doc.tags == ["id"]
    assert doc.size_bytes is None


def test_duplicates_by_hash_and_uri_keep_first_in_input_order():
    docs = normalize_document_list(
        [
            {"id": "first", "uri": "file:///a.jpg", "contentHash": "abc", "createdAt": "2024-01-01T00:00:00Z"},
            {"id": "second", "uri": "file:///a.jpg", "contentHash": "abc", "createdAt": "2024-06-01T00:00:00Z"},
            {"id": "other-hash", "uri": "file:///a.jpg", "contentHash": "def", "createdAt": "2024-03-01T00:00:00Z"},
        ]
    )
    assert [d.id for d in docs] == ["other-hash", "first"]


def test_legacy_sha256_counts_as_content_hash():
    docs = normalize_document_list(
        [
            {"id": "a", "uri": "file:///a.jpg", "sha256": "abc"},
            {"id": "b", "uri": "file:///a.jpg", "contentHash": "abc"},
        ]
    )
    assert [d.id for d in docs] == ["a"]


def test_sorted_newest_first():
    docs = normalize_document_list(
        [
            {"id": "old", "uri": "file:///1", "createdAt": "2023-01-01T00:00:00Z"},
            {"id": "new", "uri": "file:///2", "createdAt": "2025-01-01T00:00:00Z"},
            {"id": "mid", "uri": "file:///3", "createdAt": "2024-01-01T00:00:00Z"},
        ]
    )
    assert [d.id for d in docs] == ["new", "mid", "old"]


def test_ocr_engine_and_status_fall_back():
    docs = normalize_document_list(
        [
            {
                "id": "a",
                "uri": "file:///a.jpg",
                "ocr": {"text": "hello", "engine": "TESSERACT", "status": "DONE", "lines": ["hello", ""]},
                "linkedTo": [{"recordType": "PASSPORT", "recordId": "rec-1"}, {"recordId": "x"}],
            }
        ]
    )
    ocr = docs[0].ocr
    assert ocr.engine is OcrEngineTag.OTHER
    assert ocr.status is OcrStatus.FAILED
    assert ocr.lines == ["hello"]
    assert [(link.record_type, link.record_id) for link in docs[0].linked_to] == [("PASSPORT", "rec-1")]


def test_document_list_normalization_is_idempotent():
    raw = [
        {"uri": "file:///a.jpg", "tags": ["x"], "ocr": {"text": "a\nb", "status": "READY", "lines": ["a", "b"]}},
        {"id": "b", "uri": "file:///b.pdf", "mimeType": "application/pdf", "sizeBytes": 2048, "linkedTo": []},
        {"id": "dup", "uri": "file:///b.pdf"},
        {"uri": ""},
    ]
    once = normalize_document_list(raw)
    twice = normalize_document_list([document_to_json(d) for d in once])
    assert twice == once
