from .attachment_linker import (
    AttachmentLinker,
    link_document_to_record,
    unlink_document_from_record,
)
from .document_store import DocumentStore
from .profile_stores import ContactStore, HouseholdStore, PeopleStore, PetStore
from .record_store import AddMode, AddTarget, EntityRecordStore
from .storage_schema_guard import StorageSchemaGuard

__all__ = [
    "AttachmentLinker",
    "link_document_to_record",
    "unlink_document_from_record",
    "DocumentStore",
    "ContactStore",
    "HouseholdStore",
    "PeopleStore",
    "PetStore",
    "AddMode",
    "AddTarget",
    "EntityRecordStore",
    "StorageSchemaGuard",
]
