"""Unit tests for the OCR engine factory."""

from src.ocr.config_loader import Config, OCREngineConfig, OCRModuleConfig
from src.ocr.engine import OCREngine, create_engine
from src.ocr.engine_rapidocr import RapidOCREngine
from src.ocr.engine_vision import VisionOCREngine


class TestCreateEngine:
    """Test engine selection by configuration."""

    def test_vision_by_default(self):
        """Test the default configuration selects Vision."""
        engine = create_engine(Config(), api_key="k")

        assert isinstance(engine, VisionOCREngine)
        assert isinstance(engine, OCREngine)
        assert engine.api_key == "k"
        assert engine.config.max_results == 10

    def test_rapidocr(self):
        """Test selecting the local engine from a module config."""
        config = OCRModuleConfig(engine=OCREngineConfig(type="rapidocr"))

        engine = create_engine(config)

        assert isinstance(engine, RapidOCREngine)
        assert engine.name == "rapidocr"
        assert engine._engine is None
