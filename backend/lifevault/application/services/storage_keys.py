"""Logical key layout inside the key-value backend."""

SCHEMA_VERSION_KEY = "storage_schema_version"

RECORDS_PREFIX = "records_v1:"
PEOPLE_KEY = "people_v1"
PETS_KEY = "pets_v1"
HOUSEHOLDS_KEY = "households_v1"
CONTACTS_KEY = "contacts_v1"
DOCUMENTS_KEY = "documents_v1"
DOC_LINKS_INDEX_KEY = "doc_links_index"
LEGACY_PROFILES_KEY = "profiles_v2"
CONTACTS_MIGRATED_KEY = "contacts_v1_migrated"

# Collections wiped when the persisted schema version does not match
RESETTABLE_KEYS: tuple[str, ...] = (
    PEOPLE_KEY,
    PETS_KEY,
    HOUSEHOLDS_KEY,
    CONTACTS_KEY,
    DOCUMENTS_KEY,
    DOC_LINKS_INDEX_KEY,
    LEGACY_PROFILES_KEY,
    CONTACTS_MIGRATED_KEY,
)

# Secure-store flags that mark onboarding as done
ONBOARDING_FLAG_KEYS: tuple[str, ...] = (
    "hasOnboarded",
    "primaryProfileCreated",
    "userFirstName",
    "userLastName",
    "userPreferredName",
    "userDob",
    "userPhotoUri",
    "skipOnboarding",
)


def records_key(entity_id: str) -> str:
    return f"{RECORDS_PREFIX}{entity_id}"


def entity_id_from_records_key(key: str) -> str | None:
    if not key.startswith(RECORDS_PREFIX):
        return None
    return key[len(RECORDS_PREFIX):]
