"""Domain-specific exceptions — framework-independent."""


class EntityNotFoundError(Exception):
    """Raised when an operation requires an entity that does not exist."""

    def __init__(self, entity_type: str, entity_id: int | str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} with id '{entity_id}' not found")


class UnknownRecordTypeError(LookupError):
    """Raised when a registry lookup is made with a value that is not a record type."""

    def __init__(self, record_type: object):
        self.record_type = record_type
        super().__init__(f"'{record_type}' is not a registered record type")


class RegistryIntegrityError(RuntimeError):
    """Raised at import time when the record type registry is not total or has duplicates."""


class StorageBackendError(Exception):
    """Raised when the key-value backend fails to read or write.

    The core never retries; the failed operation is surfaced to its caller.
    """

    def __init__(self, operation: str, key: str | None, cause: Exception):
        self.operation = operation
        self.key = key
        self.cause = cause
        target = f" '{key}'" if key else ""
        super().__init__(f"Storage {operation}{target} failed: {cause}")
