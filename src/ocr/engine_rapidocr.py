"""RapidOCR engine wrapper for offline label code recognition.

This module provides a local alternative to the Vision API using RapidOCR
(PaddleOCR ONNX backend). It handles:

- Lazy engine initialization with custom parameters
- Decoding encoded image bytes with OpenCV
- Text extraction off the event loop
- Reading-order sorting and block assembly (full text first, then regions)

Example:
    >>> from src.ocr import RapidOCREngine, RapidOCRConfig
    >>> engine = RapidOCREngine(RapidOCRConfig())
    >>> blocks = await engine.recognize(jpeg_bytes)
"""

import asyncio
import logging
from typing import List, Optional

import cv2
import numpy as np

from src.common.errors import OCREngineError
from src.extraction.types import RecognizedTextBlock

from .config_loader import RapidOCRConfig
from .engine import OCREngine

logger = logging.getLogger(__name__)


class RapidOCREngine(OCREngine):
    """Wrapper for RapidOCR producing text blocks.

    Args:
        config: RapidOCR engine configuration.

    Attributes:
        config: Engine configuration instance.
        engine: RapidOCR engine instance (lazy-loaded).
    """

    name = "rapidocr"

    def __init__(self, config: RapidOCRConfig):
        """Initialize OCR engine wrapper.

        Args:
            config: RapidOCR engine configuration.

        Note:
            The actual RapidOCR engine is lazy-loaded on first use to
            avoid initialization overhead if not needed.
        """
        self.config = config
        self._engine: Optional[object] = None  # Lazy-loaded

        logger.info(
            f"RapidOCREngine initialized with config: "
            f"use_gpu={config.use_gpu}, text_score={config.text_score}"
        )

    @property
    def engine(self):
        """Lazy-load RapidOCR engine on first access.

        Returns:
            RapidOCR engine instance.

        Raises:
            ImportError: If rapidocr_onnxruntime is not installed.
            RuntimeError: If engine initialization fails.
        """
        if self._engine is None:
            try:
                from rapidocr_onnxruntime import RapidOCR

                self._engine = RapidOCR(
                    use_angle_cls=self.config.use_angle_cls,
                    use_gpu=self.config.use_gpu,
                    text_score=self.config.text_score,
                )
                logger.info("RapidOCR engine loaded successfully")

            except ImportError as e:
                logger.error(
                    "Failed to import rapidocr_onnxruntime. "
                    "Install with: pip install rapidocr-onnxruntime"
                )
                raise ImportError(
                    "rapidocr-onnxruntime not installed. "
                    "Run: pip install rapidocr-onnxruntime"
                ) from e

            except Exception as e:
                logger.error(f"Failed to initialize RapidOCR engine: {e}")
                raise RuntimeError(f"RapidOCR initialization failed: {e}") from e

        return self._engine

    async def recognize(self, image: bytes) -> List[RecognizedTextBlock]:
        """Recognize text in an encoded image.

        Args:
            image: Encoded image bytes.

        Returns:
            Full text block followed by one block per detected region.

        Raises:
            OCREngineError: If decoding or inference fails.
        """
        decoded = cv2.imdecode(np.frombuffer(image, dtype=np.uint8), cv2.IMREAD_COLOR)
        if decoded is None or decoded.size == 0:
            raise OCREngineError("Could not decode image for RapidOCR")

        return await asyncio.to_thread(self._run, decoded)

    def _run(self, image: np.ndarray) -> List[RecognizedTextBlock]:
        """Run inference synchronously and assemble text blocks."""
        try:
            # RapidOCR returns (results_list, timing_info); each entry is
            # [bbox, text, confidence]
            result = self.engine(image)
        except (ImportError, RuntimeError) as e:
            raise OCREngineError(str(e)) from e
        except Exception as e:
            logger.error(f"RapidOCR inference failed: {e}", exc_info=True)
            raise OCREngineError(f"RapidOCR inference failed: {e}") from e

        if result is None or not isinstance(result, tuple) or len(result) < 1:
            logger.warning(f"Unexpected RapidOCR result format: {type(result)}")
            return []

        results_list = result[0]
        if not results_list:
            logger.info("RapidOCR returned no text detections")
            return []

        regions = [
            (item[0], str(item[1]))
            for item in results_list
            if len(item) >= 2 and str(item[1]).strip()
        ]

        # Top-to-bottom, then left-to-right
        regions.sort(key=lambda region: self._reading_order_key(region[0]))
        texts = [text for _, text in regions]

        if not texts:
            return []

        blocks = [RecognizedTextBlock(text="\n".join(texts))]
        blocks.extend(RecognizedTextBlock(text=text) for text in texts)

        logger.debug(f"RapidOCR extracted {len(texts)} regions: {texts}")
        return blocks

    @staticmethod
    def _reading_order_key(bbox) -> tuple:
        """Sort key (min_y, min_x) for a 4-point RapidOCR bbox."""
        points = np.asarray(bbox, dtype=np.float32).reshape(-1, 2)
        return (float(points[:, 1].min()), float(points[:, 0].min()))

    def is_available(self) -> bool:
        """Check if RapidOCR engine is available.

        Returns:
            True if engine can be initialized.
        """
        try:
            _ = self.engine  # Trigger lazy loading
            return True
        except (ImportError, RuntimeError):
            return False
