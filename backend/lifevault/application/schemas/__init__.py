from .documents import DocumentCreate, PickedFile
from .payloads import PAYLOAD_MODELS, ListItem, PayloadModel, payload_model_for

__all__ = [
    "DocumentCreate",
    "PickedFile",
    "PAYLOAD_MODELS",
    "ListItem",
    "PayloadModel",
    "payload_model_for",
]
