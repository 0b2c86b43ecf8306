"""Unit tests for OCR configuration loader."""

from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from src.ocr.config_loader import (
    Config,
    OCREngineConfig,
    RapidOCRConfig,
    VisionConfig,
    VisionCredentials,
    get_default_config,
    load_config,
)


class TestOCREngineConfig:
    """Test OCREngineConfig model."""

    def test_default_values(self):
        """Test Vision is the default engine."""
        assert OCREngineConfig().type == "vision"

    def test_unknown_engine_rejected(self):
        """Test only known engine types are accepted."""
        with pytest.raises(ValidationError):
            OCREngineConfig(type="tesseract")


class TestVisionConfig:
    """Test VisionConfig model."""

    def test_default_values(self):
        """Test TEXT_DETECTION with up to 10 results."""
        config = VisionConfig()
        assert config.feature_type == "TEXT_DETECTION"
        assert config.max_results == 10
        assert config.endpoint.endswith("/v1/images:annotate")

    def test_positive_timeout(self):
        """Test timeout must be positive."""
        with pytest.raises(ValidationError):
            VisionConfig(timeout_s=0)


class TestRapidOCRConfig:
    """Test RapidOCRConfig model."""

    def test_text_score_range(self):
        """Test text_score must be within [0, 1]."""
        with pytest.raises(ValidationError):
            RapidOCRConfig(text_score=1.5)


class TestVisionCredentials:
    """Test credentials loaded from the environment."""

    def test_reads_environment(self, monkeypatch):
        """Test GOOGLE_CLOUD_VISION_API_KEY is picked up."""
        monkeypatch.setenv("GOOGLE_CLOUD_VISION_API_KEY", "abc123")
        assert VisionCredentials().google_cloud_vision_api_key == "abc123"


class TestLoadConfig:
    """Test loading configuration from YAML."""

    def test_default_config_file(self):
        """Test the bundled config.yaml."""
        config = get_default_config()

        assert isinstance(config, Config)
        assert config.ocr.engine.type == "vision"
        assert config.ocr.rapidocr.use_gpu is False

    def test_nested_under_ocr_key(self, tmp_path):
        """Test settings nested under an ``ocr:`` key."""
        path = tmp_path / "config.yaml"
        path.write_text(yaml.safe_dump({"ocr": {"engine": {"type": "rapidocr"}}}))

        assert load_config(path).ocr.engine.type == "rapidocr"

    def test_missing_file(self):
        """Test a missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            load_config(Path("does/not/exist.yaml"))
