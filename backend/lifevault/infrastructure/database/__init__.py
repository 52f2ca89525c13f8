from .base import Base
from .session import create_engine_from_settings, create_schema, create_session_factory
from .models import KeyValueEntryModel

__all__ = [
    "Base",
    "create_engine_from_settings",
    "create_schema",
    "create_session_factory",
    "KeyValueEntryModel",
]
