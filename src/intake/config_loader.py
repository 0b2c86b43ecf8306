"""Configuration loader with Pydantic validation for intake module.

This module provides type-safe configuration loading from YAML files using
Pydantic models for validation and default values.
"""

from pathlib import Path
from typing import List

import yaml
from pydantic import BaseModel, Field, field_validator

from src.common.types import MAX_ITEMS
from src.extraction.types import ExtractionStrategy


class PreprocessingConfig(BaseModel):
    """Pre-OCR compression configuration.

    Attributes:
        compress_threshold_bytes: Payloads larger than this are downscaled
        max_width: Maximum width after downscaling (pixels)
        max_height: Maximum height after downscaling (pixels)
        jpeg_quality: JPEG quality of the re-encoded image (1-95)
    """

    compress_threshold_bytes: int = Field(default=1024 * 1024, gt=0)
    max_width: int = Field(default=1920, gt=0)
    max_height: int = Field(default=1920, gt=0)
    jpeg_quality: int = Field(default=70, ge=1, le=95)


class CapacityConfig(BaseModel):
    """Intake list capacity configuration.

    Attributes:
        max_items: Maximum number of items in one session's list
    """

    max_items: int = Field(default=MAX_ITEMS, gt=0)


class ExtractionConfig(BaseModel):
    """Code extraction configuration.

    Attributes:
        strategies: Ordered extraction strategies (first match wins)
    """

    strategies: List[ExtractionStrategy] = Field(
        default_factory=lambda: [ExtractionStrategy.PER_BLOCK, ExtractionStrategy.COMBINED]
    )

    @field_validator("strategies")
    @classmethod
    def _validate_strategies(cls, v: List[ExtractionStrategy]) -> List[ExtractionStrategy]:
        """Reject empty or repeated strategy lists."""
        if not v:
            raise ValueError("At least one extraction strategy is required")
        if len(set(v)) != len(v):
            raise ValueError(f"Duplicate extraction strategies: {[s.value for s in v]}")
        return v


class IntakeModuleConfig(BaseModel):
    """Complete intake module configuration.

    Attributes:
        preprocessing: Pre-OCR compression settings
        capacity: List capacity settings
        extraction: Extraction strategy settings
        ocr_timeout_s: Upper bound for one OCR call in seconds
    """

    preprocessing: PreprocessingConfig = Field(default_factory=PreprocessingConfig)
    capacity: CapacityConfig = Field(default_factory=CapacityConfig)
    extraction: ExtractionConfig = Field(default_factory=ExtractionConfig)
    ocr_timeout_s: float = Field(default=60.0, gt=0.0)


class Config(BaseModel):
    """Root configuration container.

    Attributes:
        intake: Intake module configuration
    """

    intake: IntakeModuleConfig = Field(default_factory=IntakeModuleConfig)


def load_config(config_path: Path) -> Config:
    """Load and validate configuration from YAML file.

    Args:
        config_path: Path to YAML configuration file

    Returns:
        Validated Config object with all settings

    Raises:
        FileNotFoundError: If config file does not exist
        yaml.YAMLError: If YAML parsing fails
        pydantic.ValidationError: If configuration validation fails

    Example:
        >>> config = load_config(Path("src/intake/config.yaml"))
        >>> print(config.intake.capacity.max_items)
        30
    """
    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path, "r", encoding="utf-8") as f:
        config_dict = yaml.safe_load(f) or {}

    if "intake" in config_dict:
        config_dict = config_dict["intake"] or {}

    return Config(intake=IntakeModuleConfig(**config_dict))


def get_default_config() -> Config:
    """Get default configuration from bundled config.yaml file.

    Returns:
        Config object loaded from src/intake/config.yaml
    """
    default_config_path = Path(__file__).parent / "config.yaml"
    if default_config_path.exists():
        return load_config(default_config_path)
    else:
        # Fallback to hardcoded defaults if config file is missing
        return Config()
