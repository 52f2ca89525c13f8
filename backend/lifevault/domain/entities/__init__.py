from .record_types import Cardinality, RecordCategory, RecordType
from .record import AttachmentRef, AttachmentRole, VaultRecord
from .document import (
    DocumentLinkRef,
    DocumentOcrResult,
    DocumentSource,
    LinkedRecordRef,
    OcrEngineTag,
    OcrStatus,
    VaultDocument,
)
from .person import PersonProfile
from .pet import PetProfile
from .household import Household
from .contact import Contact, ContactCategory, LinkedProfile
from .data_mode import DataMode

__all__ = [
    "Cardinality",
    "RecordCategory",
    "RecordType",
    "AttachmentRef",
    "AttachmentRole",
    "VaultRecord",
    "DocumentLinkRef",
    "DocumentOcrResult",
    "DocumentSource",
    "LinkedRecordRef",
    "OcrEngineTag",
    "OcrStatus",
    "VaultDocument",
    "PersonProfile",
    "PetProfile",
    "Household",
    "Contact",
    "ContactCategory",
    "LinkedProfile",
    "DataMode",
]
