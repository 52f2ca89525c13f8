from .key_value_store import KeyValueStore
from .ocr_engine import OcrEngine
from .sync_gateway import SyncGateway

__all__ = [
    "KeyValueStore",
    "OcrEngine",
    "SyncGateway",
]
