"""OCR engine interface for label code recognition.

An OCR engine accepts an encoded image payload and returns the recognized text
as an ordered list of :class:`RecognizedTextBlock`. By convention the first
block holds the full-page text and the remaining blocks hold individual
regions. Engines raise :class:`OCREngineError` (or :class:`CollaboratorTimeout`)
on any failure; the intake coordinator turns those into per-image errors.

Example:
    >>> from src.ocr import create_engine, get_default_config
    >>> engine = create_engine(get_default_config())
    >>> blocks = await engine.recognize(image_bytes)
    >>> print([b.text for b in blocks])
"""

import logging
from abc import ABC, abstractmethod
from typing import List, Optional, Union

from src.extraction.types import RecognizedTextBlock

from .config_loader import Config, OCRModuleConfig

logger = logging.getLogger(__name__)


class OCREngine(ABC):
    """Abstract OCR collaborator used by the intake coordinator."""

    name: str = "base"

    @abstractmethod
    async def recognize(self, image: bytes) -> List[RecognizedTextBlock]:
        """Recognize text in an encoded image.

        Args:
            image: Encoded image bytes (JPEG, PNG, ...).

        Returns:
            Recognized text blocks in engine order (may be empty).

        Raises:
            OCREngineError: If the engine fails or returns a malformed response.
            CollaboratorTimeout: If the engine call times out.
        """

    def is_available(self) -> bool:
        """Check if the engine can be used.

        Returns:
            True if the engine is configured and its backend is importable.
        """
        return True


def create_engine(
    config: Union[Config, OCRModuleConfig],
    api_key: Optional[str] = None,
) -> OCREngine:
    """Create the OCR engine selected by configuration.

    Args:
        config: Root or module-level OCR configuration.
        api_key: Vision API key override. If None, read from the environment.

    Returns:
        Configured OCREngine instance.
    """
    module_config = config.ocr if isinstance(config, Config) else config
    engine_type = module_config.engine.type

    if engine_type == "rapidocr":
        from .engine_rapidocr import RapidOCREngine

        logger.info("Initialized with RapidOCR engine")
        return RapidOCREngine(config=module_config.rapidocr)

    from .engine_vision import VisionOCREngine

    logger.info("Initialized with Google Cloud Vision engine")
    return VisionOCREngine(config=module_config.vision, api_key=api_key)
