"""Unit tests for the RapidOCR engine wrapper."""

import asyncio
import sys
from unittest.mock import MagicMock, patch

import pytest

from src.common.errors import OCREngineError
from src.ocr.config_loader import RapidOCRConfig
from src.ocr.engine_rapidocr import RapidOCREngine


def box(x, y, w=100, h=20):
    """Build a 4-point RapidOCR bounding box."""
    return [[x, y], [x + w, y], [x + w, y + h], [x, y + h]]


@pytest.fixture
def engine():
    """Provide a RapidOCREngine with CPU settings."""
    return RapidOCREngine(RapidOCRConfig(use_gpu=False))


class TestEngineLazyLoading:
    """Test lazy loading of RapidOCR."""

    def test_engine_not_loaded_on_init(self, engine):
        """Test RapidOCR is not loaded during initialization."""
        assert engine._engine is None

    def test_engine_loaded_with_config(self, engine):
        """Test RapidOCR is constructed with the configured parameters."""
        fake_module = MagicMock()
        with patch.dict(sys.modules, {"rapidocr_onnxruntime": fake_module}):
            loaded = engine.engine

        fake_module.RapidOCR.assert_called_once_with(
            use_angle_cls=True, use_gpu=False, text_score=0.5
        )
        assert loaded is fake_module.RapidOCR.return_value

    def test_missing_package(self, engine):
        """Test a missing package reports as unavailable."""
        with patch.dict(sys.modules, {"rapidocr_onnxruntime": None}):
            assert engine.is_available() is False


class TestRecognize:
    """Test text block assembly."""

    def test_reading_order_and_full_text(self, engine, make_jpeg):
        """Test regions are sorted top-to-bottom and joined into the first block."""
        engine._engine = MagicMock(
            return_value=(
                [
                    [box(10, 60), "9A1B2C3D4E5F", 0.9],
                    [box(10, 10), "Lot#", 0.95],
                    [box(150, 60), "6G7H8I9J0K", 0.9],
                ],
                [0.1, 0.2, 0.3],
            )
        )

        blocks = asyncio.run(engine.recognize(make_jpeg()))

        assert [b.text for b in blocks] == [
            "Lot#\n9A1B2C3D4E5F\n6G7H8I9J0K",
            "Lot#",
            "9A1B2C3D4E5F",
            "6G7H8I9J0K",
        ]

    def test_no_detections(self, engine, make_jpeg):
        """Test an empty detection list yields no blocks."""
        engine._engine = MagicMock(return_value=(None, None))
        assert asyncio.run(engine.recognize(make_jpeg())) == []

    def test_blank_texts_dropped(self, engine, make_jpeg):
        """Test whitespace-only regions are ignored."""
        engine._engine = MagicMock(return_value=([[box(0, 0), "  ", 0.6]], [0.1]))
        assert asyncio.run(engine.recognize(make_jpeg())) == []

    def test_undecodable_image(self, engine):
        """Test bytes that are not an image are rejected."""
        engine._engine = MagicMock()

        with pytest.raises(OCREngineError, match="decode"):
            asyncio.run(engine.recognize(b"not an image"))
        engine._engine.assert_not_called()

    def test_inference_failure(self, engine, make_jpeg):
        """Test inference exceptions become OCREngineError."""
        engine._engine = MagicMock(side_effect=ValueError("onnx failure"))

        with pytest.raises(OCREngineError, match="onnx failure"):
            asyncio.run(engine.recognize(make_jpeg()))
