"""Record payload normalization — an exhaustive dispatch over ``RecordType``."""

import logging
from typing import Any

from pydantic import ValidationError

from lifevault.application.normalizers.coerce import flatten_dotted
from lifevault.application.schemas.payloads import payload_model_for
from lifevault.domain.entities import RecordType

logger = logging.getLogger(__name__)


def default_payload_for(record_type: RecordType) -> dict[str, Any]:
    """A fresh payload with every field at its default."""
    return payload_model_for(record_type).model_validate({}).model_dump(by_alias=True)


def normalize_payload_for_save(record_type: RecordType, raw: Any) -> dict[str, Any]:
    """Coerce ``raw`` (form values or persisted JSON) into the current payload shape.

    Unknown keys are removed, dotted keys are expanded, list rows are
    filled in or dropped. Anything that cannot be read as a payload becomes
    the default payload.
    """
    model = payload_model_for(record_type)
    try:
        return model.model_validate(raw).model_dump(by_alias=True)
    except ValidationError as exc:
        logger.debug(
            "Resetting unreadable %s payload (%d errors)", record_type.value, exc.error_count()
        )
        return default_payload_for(record_type)


def normalize_payload_for_edit(record_type: RecordType, raw: Any) -> dict[str, Any]:
    """The payload as an edit form should see it.

    Runs the save normalization twice so the result is a fixed point: what
    the form receives is exactly what a save without changes would persist.
    """
    return normalize_payload_for_save(record_type, normalize_payload_for_save(record_type, raw))


def flatten_payload(payload: dict[str, Any]) -> dict[str, Any]:
    """Dotted-key view of a payload for form binding (``address.line1``)."""
    return flatten_dotted(payload)
