"""Summary QR code rendering.

The QR code encodes every recognized code of a submission as a JSON payload
``{"barcodes": [...], "count": n, "timestamp": ISO8601}`` so the receiving
side can scan the whole list at once.
"""

import io
import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Sequence

import qrcode
from PIL import Image
from qrcode.exceptions import DataOverflowError

from src.common.errors import QRRenderError

logger = logging.getLogger(__name__)


def build_qr_payload(
    codes: Sequence[str], timestamp: Optional[datetime] = None
) -> Dict[str, Any]:
    """Build the JSON-serializable QR payload.

    Args:
        codes: Recognized codes in list order.
        timestamp: Payload timestamp. Defaults to now (UTC).

    Returns:
        Dictionary with ``barcodes``, ``count`` and ``timestamp`` keys.

    Example:
        >>> build_qr_payload(["1AAAAAAAAAAAAAAAAAAAAA"])["count"]
        1
    """
    if timestamp is None:
        timestamp = datetime.now(timezone.utc)

    return {
        "barcodes": list(codes),
        "count": len(codes),
        "timestamp": timestamp.isoformat(timespec="milliseconds").replace("+00:00", "Z"),
    }


class QRCodeRenderer:
    """Renders the summary payload as a PNG QR code.

    Args:
        width: Output width (and height) in pixels.
        border: Quiet-zone width in modules.
    """

    def __init__(self, width: int = 300, border: int = 2):
        self.width = width
        self.border = border

    def render(self, codes: Sequence[str], timestamp: Optional[datetime] = None) -> bytes:
        """Render the codes into a PNG QR image.

        Args:
            codes: Recognized codes in list order (must not be empty).
            timestamp: Payload timestamp. Defaults to now (UTC).

        Returns:
            PNG-encoded bytes.

        Raises:
            QRRenderError: If there is nothing to encode or rendering fails.
        """
        if not codes:
            raise QRRenderError("No recognized codes to encode in QR code")

        data = json.dumps(build_qr_payload(codes, timestamp), separators=(",", ":"))

        try:
            qr = qrcode.QRCode(
                error_correction=qrcode.constants.ERROR_CORRECT_M,
                border=self.border,
            )
            qr.add_data(data)
            qr.make(fit=True)

            img = qr.make_image(fill_color="black", back_color="white").get_image()
            img = img.convert("RGB").resize((self.width, self.width), Image.Resampling.NEAREST)

            output = io.BytesIO()
            img.save(output, format="PNG")
        except (ValueError, OSError, DataOverflowError) as e:
            raise QRRenderError(f"QR code generation failed: {e}") from e

        logger.debug(f"Rendered QR code for {len(codes)} codes ({len(data)} chars)")
        return output.getvalue()
