"""Unit tests for intake configuration loader."""

from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from src.extraction.types import ExtractionStrategy
from src.intake.config_loader import (
    CapacityConfig,
    Config,
    ExtractionConfig,
    PreprocessingConfig,
    get_default_config,
    load_config,
)


class TestPreprocessingConfig:
    """Test PreprocessingConfig model."""

    def test_default_values(self):
        """Test 1 MiB threshold, 1920 px bounds and quality 70."""
        config = PreprocessingConfig()
        assert config.compress_threshold_bytes == 1024 * 1024
        assert config.max_width == 1920
        assert config.max_height == 1920
        assert config.jpeg_quality == 70

    def test_quality_bounds(self):
        """Test JPEG quality must be in [1, 95]."""
        with pytest.raises(ValidationError):
            PreprocessingConfig(jpeg_quality=0)
        with pytest.raises(ValidationError):
            PreprocessingConfig(jpeg_quality=100)


class TestCapacityConfig:
    """Test CapacityConfig model."""

    def test_default_capacity(self):
        """Test the default ceiling is 30."""
        assert CapacityConfig().max_items == 30

    def test_positive_capacity(self):
        """Test the ceiling must be positive."""
        with pytest.raises(ValidationError):
            CapacityConfig(max_items=0)


class TestExtractionConfig:
    """Test ExtractionConfig model."""

    def test_default_order(self):
        """Test per-block then combined."""
        assert ExtractionConfig().strategies == [
            ExtractionStrategy.PER_BLOCK,
            ExtractionStrategy.COMBINED,
        ]

    def test_parses_strategy_names(self):
        """Test strategies given by value."""
        config = ExtractionConfig(strategies=["combined"])
        assert config.strategies == [ExtractionStrategy.COMBINED]

    def test_rejects_duplicates(self):
        """Test repeated strategies are rejected."""
        with pytest.raises(ValidationError):
            ExtractionConfig(strategies=["per_block", "per_block"])

    def test_rejects_empty(self):
        """Test an empty list is rejected."""
        with pytest.raises(ValidationError):
            ExtractionConfig(strategies=[])


class TestLoadConfig:
    """Test loading configuration from YAML."""

    def test_default_config_file(self):
        """Test the bundled config.yaml loads with the documented defaults."""
        config = get_default_config()

        assert isinstance(config, Config)
        assert config.intake.capacity.max_items == 30
        assert config.intake.ocr_timeout_s == 60.0
        assert config.intake.preprocessing.compress_threshold_bytes == 1048576

    def test_nested_under_intake_key(self, tmp_path):
        """Test settings nested under an ``intake:`` key."""
        path = tmp_path / "config.yaml"
        path.write_text(yaml.safe_dump({"intake": {"capacity": {"max_items": 5}}}))

        config = load_config(path)

        assert config.intake.capacity.max_items == 5
        assert config.intake.preprocessing.max_width == 1920

    def test_empty_file_uses_defaults(self, tmp_path):
        """Test an empty file yields defaults."""
        path = tmp_path / "config.yaml"
        path.write_text("")

        assert load_config(path).intake.ocr_timeout_s == 60.0

    def test_missing_file(self):
        """Test a missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            load_config(Path("does/not/exist.yaml"))

    def test_invalid_values(self, tmp_path):
        """Test invalid values fail validation."""
        path = tmp_path / "config.yaml"
        path.write_text(yaml.safe_dump({"ocr_timeout_s": -1}))

        with pytest.raises(ValidationError):
            load_config(path)
