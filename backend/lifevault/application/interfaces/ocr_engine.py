"""Abstract interface (port) for on-device text recognition."""

from abc import ABC, abstractmethod
from typing import Any

from lifevault.domain.entities import OcrEngineTag


class OcrEngine(ABC):
    """Port for OCR — the platform engine lives outside this package."""

    @property
    @abstractmethod
    def tag(self) -> OcrEngineTag:
        """Which engine this is (recorded on every result)."""
        ...

    @abstractmethod
    async def extract(self, uri: str) -> Any:
        """Recognise text in the image at ``uri``.

        Returns:
            Either a plain string, ``{"text": ...}``, ``{"lines": [...]}`` or
            ``{"blocks": [{"lines": [{"text": ...}]}]}``.
        """
        ...
