"""Static record type registry — category, label, cardinality and sort order per type.

The registry is read-only and total: every ``RecordType`` member has exactly
one entry. A gap or duplicate is a programming error and fails at import.
"""

from dataclasses import dataclass
from types import MappingProxyType

from lifevault.domain.entities import Cardinality, RecordCategory, RecordType
from lifevault.domain.exceptions import RegistryIntegrityError, UnknownRecordTypeError


@dataclass(frozen=True)
class RecordTypeMeta:
    """Registry entry describing how a record type is offered and stored."""

    type: RecordType
    category: RecordCategory
    label: str
    icon_key: str
    cardinality: Cardinality
    sort_order: int
    is_private: bool = False


_SINGLE = Cardinality.SINGLE
_MULTI = Cardinality.MULTI
_T = RecordType
_C = RecordCategory

RECORD_TYPE_REGISTRY: tuple[RecordTypeMeta, ...] = (
    # ── Identification ──
    RecordTypeMeta(_T.DRIVERS_LICENSE, _C.IDENTIFICATION, "Driver’s License", "drivers-license", _SINGLE, 30),
    RecordTypeMeta(_T.BIRTH_CERTIFICATE, _C.IDENTIFICATION, "Birth Certificate", "certificate", _SINGLE, 40),
    RecordTypeMeta(_T.SOCIAL_SECURITY_CARD, _C.IDENTIFICATION, "Social Security", "ssn", _SINGLE, 50),
    # ── Medical ──
    RecordTypeMeta(_T.INSURANCE_POLICY, _C.MEDICAL, "Insurance Policy", "shield", _SINGLE, 10),
    RecordTypeMeta(_T.MEDICAL_PROFILE, _C.MEDICAL, "Medical Profile", "heart", _SINGLE, 20),
    RecordTypeMeta(_T.MEDICAL_PROCEDURES, _C.MEDICAL, "Procedures", "stethoscope", _SINGLE, 30),
    RecordTypeMeta(_T.PRESCRIPTIONS, _C.MEDICAL, "Prescriptions", "pill", _SINGLE, 40),
    RecordTypeMeta(_T.VACCINATIONS, _C.MEDICAL, "Vaccinations", "syringe", _SINGLE, 50),
    RecordTypeMeta(_T.VISION_PRESCRIPTION, _C.MEDICAL, "Vision Rx", "eye", _SINGLE, 60),
    # ── Private health ──
    RecordTypeMeta(
        _T.PRIVATE_HEALTH_PROFILE, _C.PRIVATE_HEALTH, "Private Health", "lock", _SINGLE, 10,
        is_private=True,
    ),
    # ── School / education ──
    RecordTypeMeta(_T.SCHOOL_INFO, _C.SCHOOL_INFO, "School Info", "school", _SINGLE, 10),
    RecordTypeMeta(_T.AUTHORIZED_PICKUP, _C.SCHOOL_INFO, "Authorized Pickup", "users", _SINGLE, 20),
    RecordTypeMeta(_T.EDUCATION_RECORD, _C.EDUCATION, "Education Record", "graduation-cap", _MULTI, 10),
    # ── Preferences / sizes ──
    RecordTypeMeta(_T.PREFERENCES, _C.PREFERENCES, "Favorites", "star", _SINGLE, 10),
    RecordTypeMeta(_T.SIZES, _C.SIZES, "Sizes", "ruler", _SINGLE, 10),
    # ── Travel ──
    RecordTypeMeta(_T.PASSPORT, _C.TRAVEL, "Passport", "passport", _MULTI, 10),
    RecordTypeMeta(_T.PASSPORT_CARD, _C.TRAVEL, "Passport Card", "id-card", _MULTI, 20),
    RecordTypeMeta(_T.TRAVEL_IDS, _C.TRAVEL, "Travel IDs", "airplane", _SINGLE, 30),
    RecordTypeMeta(_T.LOYALTY_ACCOUNTS, _C.TRAVEL, "Loyalty Accounts", "barcode", _SINGLE, 40),
    # ── Legal / documents ──
    RecordTypeMeta(_T.LEGAL_PROPERTY_DOCUMENT, _C.LEGAL_PROPERTY, "Legal / Property", "scale", _MULTI, 10),
    RecordTypeMeta(_T.OTHER_DOCUMENT, _C.DOCUMENTS, "Other Document", "folder", _MULTI, 10),
    # ── Pets ──
    RecordTypeMeta(_T.PET_PROFILE, _C.PETS, "Pet Profile", "paw", _SINGLE, 10),
    RecordTypeMeta(_T.PET_DOCUMENT, _C.PETS, "Pet Document", "file", _MULTI, 20),
    RecordTypeMeta(_T.PET_INSURANCE, _C.PETS, "Pet Insurance", "shield", _SINGLE, 30),
)


def _index_by_type(entries: tuple[RecordTypeMeta, ...]) -> dict[RecordType, RecordTypeMeta]:
    index: dict[RecordType, RecordTypeMeta] = {}
    for meta in entries:
        if meta.type in index:
            raise RegistryIntegrityError(f"Duplicate registry entry for {meta.type.value}")
        index[meta.type] = meta

    missing = [t.value for t in RecordType if t not in index]
    if missing:
        raise RegistryIntegrityError(f"Record types without registry entry: {', '.join(missing)}")
    return index


def _index_by_category(entries: tuple[RecordTypeMeta, ...]) -> dict[RecordCategory, tuple[RecordType, ...]]:
    grouped: dict[RecordCategory, list[RecordTypeMeta]] = {}
    for meta in entries:
        grouped.setdefault(meta.category, []).append(meta)
    return {
        category: tuple(m.type for m in sorted(metas, key=lambda m: m.sort_order))
        for category, metas in grouped.items()
    }


RECORD_META_BY_TYPE = MappingProxyType(_index_by_type(RECORD_TYPE_REGISTRY))
TYPES_BY_CATEGORY = MappingProxyType(_index_by_category(RECORD_TYPE_REGISTRY))


def get_record_meta(record_type: RecordType | str) -> RecordTypeMeta:
    """Look up the registry entry for a record type.

    Raises:
        UnknownRecordTypeError: If ``record_type`` does not name a record type.
    """
    parsed = RecordType.parse(record_type)
    if parsed is None:
        raise UnknownRecordTypeError(record_type)
    return RECORD_META_BY_TYPE[parsed]


def get_types_for_category(category: RecordCategory) -> tuple[RecordType, ...]:
    """Record types belonging to ``category``, ordered by sort order."""
    return TYPES_BY_CATEGORY.get(category, ())


def is_singleton_type(record_type: RecordType | str) -> bool:
    return get_record_meta(record_type).cardinality is Cardinality.SINGLE
