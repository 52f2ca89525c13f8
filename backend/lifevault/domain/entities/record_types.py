"""Record type, category and cardinality enums."""

from enum import Enum


class RecordType(str, Enum):
    """Tag selecting a record's payload shape, category and cardinality."""

    # Identification
    DRIVERS_LICENSE = "DRIVERS_LICENSE"
    BIRTH_CERTIFICATE = "BIRTH_CERTIFICATE"
    SOCIAL_SECURITY_CARD = "SOCIAL_SECURITY_CARD"
    # Medical
    INSURANCE_POLICY = "INSURANCE_POLICY"
    MEDICAL_PROFILE = "MEDICAL_PROFILE"
    MEDICAL_PROCEDURES = "MEDICAL_PROCEDURES"
    PRESCRIPTIONS = "PRESCRIPTIONS"
    VACCINATIONS = "VACCINATIONS"
    VISION_PRESCRIPTION = "VISION_PRESCRIPTION"
    # Private health
    PRIVATE_HEALTH_PROFILE = "PRIVATE_HEALTH_PROFILE"
    # School / education
    SCHOOL_INFO = "SCHOOL_INFO"
    AUTHORIZED_PICKUP = "AUTHORIZED_PICKUP"
    EDUCATION_RECORD = "EDUCATION_RECORD"
    # Preferences / sizes
    PREFERENCES = "PREFERENCES"
    SIZES = "SIZES"
    # Travel
    PASSPORT = "PASSPORT"
    PASSPORT_CARD = "PASSPORT_CARD"
    TRAVEL_IDS = "TRAVEL_IDS"
    LOYALTY_ACCOUNTS = "LOYALTY_ACCOUNTS"
    # Legal / documents
    LEGAL_PROPERTY_DOCUMENT = "LEGAL_PROPERTY_DOCUMENT"
    OTHER_DOCUMENT = "OTHER_DOCUMENT"
    # Pets
    PET_PROFILE = "PET_PROFILE"
    PET_DOCUMENT = "PET_DOCUMENT"
    PET_INSURANCE = "PET_INSURANCE"

    @classmethod
    def parse(cls, value: object) -> "RecordType | None":
        """Return the matching member for a persisted value, or None."""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        try:
            return cls(value.strip())
        except ValueError:
            return None


class RecordCategory(str, Enum):
    """Grouping under which record types are offered to the user."""

    IDENTIFICATION = "IDENTIFICATION"
    MEDICAL = "MEDICAL"
    PRIVATE_HEALTH = "PRIVATE_HEALTH"
    SCHOOL_INFO = "SCHOOL_INFO"
    EDUCATION = "EDUCATION"
    PREFERENCES = "PREFERENCES"
    SIZES = "SIZES"
    TRAVEL = "TRAVEL"
    LEGAL_PROPERTY = "LEGAL_PROPERTY"
    DOCUMENTS = "DOCUMENTS"
    PETS = "PETS"


class Cardinality(str, Enum):
    """How many records of one type an entity may hold."""

    SINGLE = "SINGLE"
    MULTI = "MULTI"
