"""Google Cloud Vision engine for label code recognition.

This module calls the Vision ``images:annotate`` REST endpoint with a
``TEXT_DETECTION`` feature and maps ``textAnnotations`` to text blocks. The
first annotation is the full-page text; the rest are individual words/lines.

The API key is sent in the ``X-Goog-Api-Key`` header so it never appears in
request URLs or logs.
"""

import base64
import logging
from typing import Any, Dict, List, Optional

import httpx

from src.common.errors import CollaboratorTimeout, OCREngineError
from src.extraction.types import RecognizedTextBlock

from .config_loader import VisionConfig, VisionCredentials
from .engine import OCREngine

logger = logging.getLogger(__name__)

_BILLING_HELP = (
    "The billing account is not active or is still propagating. Check that:\n"
    "1. A billing account is linked to the project in Google Cloud Console\n"
    "2. The Cloud Vision API is enabled\n"
    "3. 5-10 minutes have passed since linking the billing account"
)


class VisionOCREngine(OCREngine):
    """Google Cloud Vision TEXT_DETECTION client.

    Args:
        config: Vision engine configuration.
        api_key: API key. If None, read from GOOGLE_CLOUD_VISION_API_KEY.
        client: Optional shared httpx.AsyncClient (used as-is, not closed).

    Example:
        >>> engine = VisionOCREngine(VisionConfig(), api_key="...")
        >>> blocks = await engine.recognize(jpeg_bytes)
    """

    name = "vision"

    def __init__(
        self,
        config: VisionConfig,
        api_key: Optional[str] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.config = config
        self.api_key = (
            api_key
            if api_key is not None
            else VisionCredentials().google_cloud_vision_api_key
        )
        self._client = client

        logger.info(
            f"VisionOCREngine initialized: endpoint={config.endpoint}, "
            f"max_results={config.max_results}, timeout={config.timeout_s}s, "
            f"api_key={'set' if self.api_key else 'missing'}"
        )

    def is_available(self) -> bool:
        """Check if an API key is configured."""
        return bool(self.api_key)

    async def recognize(self, image: bytes) -> List[RecognizedTextBlock]:
        """Run TEXT_DETECTION on one image.

        Args:
            image: Encoded image bytes.

        Returns:
            Text blocks, full-page text first. Empty if Vision found no text.

        Raises:
            OCREngineError: On missing key, transport error, non-2xx status,
                per-image API error or malformed response.
            CollaboratorTimeout: If the request exceeds ``timeout_s``.
        """
        if not self.api_key:
            raise OCREngineError(
                "Google Cloud Vision API key is not configured. "
                "Set the GOOGLE_CLOUD_VISION_API_KEY environment variable."
            )

        logger.debug(f"Vision request: image size {round(len(image) / 1024)}KB")

        body = {
            "requests": [
                {
                    "image": {"content": base64.b64encode(image).decode("ascii")},
                    "features": [
                        {
                            "type": self.config.feature_type,
                            "maxResults": self.config.max_results,
                        }
                    ],
                }
            ]
        }
        headers = {"X-Goog-Api-Key": self.api_key}

        try:
            if self._client is not None:
                response = await self._client.post(
                    self.config.endpoint, json=body, headers=headers
                )
            else:
                timeout = httpx.Timeout(self.config.timeout_s)
                async with httpx.AsyncClient(timeout=timeout) as client:
                    response = await client.post(
                        self.config.endpoint, json=body, headers=headers
                    )
        except httpx.TimeoutException as e:
            raise CollaboratorTimeout(
                f"Vision API request timed out after {self.config.timeout_s}s"
            ) from e
        except httpx.HTTPError as e:
            raise OCREngineError(f"Vision API request failed: {e}") from e

        if response.is_error:
            message = self._describe_error(response)
            logger.error(f"Vision API error (HTTP {response.status_code}): {message}")
            raise OCREngineError(message)

        try:
            payload = response.json()
        except ValueError as e:
            raise OCREngineError("Vision API returned a response that is not JSON") from e

        return self._parse_response(payload)

    def _describe_error(self, response: httpx.Response) -> str:
        """Build a readable message from a non-2xx Vision response."""
        detail = response.text or f"HTTP {response.status_code}"
        try:
            error = response.json().get("error")
            if isinstance(error, dict) and error.get("message"):
                detail = error["message"]
            elif isinstance(error, str):
                detail = error
        except (ValueError, AttributeError):
            pass

        message = f"Vision API request failed (HTTP {response.status_code}): {detail}"
        if "billing" in detail.lower():
            message = f"{message}\n{_BILLING_HELP}"
        return message

    def _parse_response(self, payload: Dict[str, Any]) -> List[RecognizedTextBlock]:
        """Map an annotate response to text blocks.

        Args:
            payload: Decoded JSON body.

        Returns:
            Text blocks in annotation order, empty descriptions dropped.

        Raises:
            OCREngineError: If the structure is unexpected or carries an error.
        """
        responses = payload.get("responses") if isinstance(payload, dict) else None
        if not isinstance(responses, list) or not responses:
            raise OCREngineError("Vision API response has no 'responses' entry")

        first = responses[0]
        if not isinstance(first, dict):
            raise OCREngineError("Vision API response entry is not an object")

        if first.get("error"):
            error = first["error"]
            message = error.get("message", str(error)) if isinstance(error, dict) else str(error)
            raise OCREngineError(f"Vision API could not process image: {message}")

        annotations = first.get("textAnnotations") or []
        blocks = [
            RecognizedTextBlock(text=str(annotation.get("description", "")))
            for annotation in annotations
            if isinstance(annotation, dict) and annotation.get("description")
        ]

        if blocks:
            logger.debug(
                f"Vision returned {len(blocks)} blocks; full text: '{blocks[0].text[:200]}'"
            )
        else:
            logger.info("Vision API found no text in image")

        return blocks
