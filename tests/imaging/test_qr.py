"""Unit tests for the summary QR code."""

import io
from datetime import datetime, timezone
from unittest.mock import patch

import pytest
import qrcode
from PIL import Image

from src.common.errors import QRRenderError
from src.imaging.qr import QRCodeRenderer, build_qr_payload

CODES = ["1AAAAAAAAAAAAAAAAAAAAA", "2BBBBBBBBBBBBBBBBBBBBB"]


class TestBuildQRPayload:
    """Test the JSON payload encoded in the QR code."""

    def test_payload_fields(self):
        """Test codes, count and ISO 8601 UTC timestamp."""
        timestamp = datetime(2024, 5, 1, 9, 30, 0, 123000, tzinfo=timezone.utc)

        payload = build_qr_payload(CODES, timestamp)

        assert payload == {
            "barcodes": CODES,
            "count": 2,
            "timestamp": "2024-05-01T09:30:00.123Z",
        }

    def test_default_timestamp_is_utc(self):
        """Test the timestamp defaults to now in UTC."""
        assert build_qr_payload(CODES)["timestamp"].endswith("Z")


class TestQRCodeRenderer:
    """Test PNG rendering."""

    def test_png_dimensions(self):
        """Test the QR image is a 300 px square PNG by default."""
        data = QRCodeRenderer().render(CODES)

        with Image.open(io.BytesIO(data)) as img:
            assert img.format == "PNG"
            assert img.size == (300, 300)

    def test_black_on_white(self):
        """Test the quiet zone is white and the image contains black modules."""
        data = QRCodeRenderer(width=200).render(CODES)

        with Image.open(io.BytesIO(data)) as img:
            rgb = img.convert("RGB")
            assert rgb.getpixel((0, 0)) == (255, 255, 255)
            assert (0, 0, 0) in {color for _, color in rgb.getcolors(maxcolors=1024)}

    def test_thirty_codes_fit(self):
        """Test a full list still renders."""
        codes = [f"1{i:021d}" for i in range(30)]
        assert QRCodeRenderer().render(codes).startswith(b"\x89PNG")

    def test_empty_codes(self):
        """Test there must be something to encode."""
        with pytest.raises(QRRenderError):
            QRCodeRenderer().render([])

    def test_library_failure_wrapped(self):
        """Test qrcode errors become QRRenderError."""
        with patch.object(qrcode.QRCode, "make", side_effect=ValueError("boom")):
            with pytest.raises(QRRenderError, match="boom"):
                QRCodeRenderer().render(CODES)
