"""Configuration loader with Pydantic validation for OCR module.

This module provides type-safe configuration loading from YAML files using
Pydantic models for validation and default values. Credentials are never
stored in YAML; they are read from the environment.
"""

from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class OCREngineConfig(BaseModel):
    """OCR engine selection.

    Attributes:
        type: Engine type ("vision" for Google Cloud Vision, "rapidocr" for local)
    """

    type: Literal["vision", "rapidocr"] = "vision"


class VisionConfig(BaseModel):
    """Google Cloud Vision engine configuration.

    Attributes:
        endpoint: images:annotate REST endpoint
        feature_type: Vision feature requested for each image
        max_results: Maximum number of annotations requested
        timeout_s: Timeout for one annotate request in seconds
    """

    endpoint: str = "https://vision.googleapis.com/v1/images:annotate"
    feature_type: str = "TEXT_DETECTION"
    max_results: int = Field(default=10, gt=0)
    timeout_s: float = Field(default=30.0, gt=0.0)


class RapidOCRConfig(BaseModel):
    """Local RapidOCR engine configuration.

    Attributes:
        use_angle_cls: Enable angle classification for rotated text
        use_gpu: Use GPU acceleration if available
        text_score: Minimum text detection confidence (0.0-1.0)
    """

    use_angle_cls: bool = True
    use_gpu: bool = False
    text_score: float = Field(default=0.5, ge=0.0, le=1.0)


class OCRModuleConfig(BaseModel):
    """Complete OCR module configuration.

    Attributes:
        engine: Engine selection
        vision: Google Cloud Vision settings (used when engine.type="vision")
        rapidocr: RapidOCR settings (used when engine.type="rapidocr")
    """

    engine: OCREngineConfig = Field(default_factory=OCREngineConfig)
    vision: VisionConfig = Field(default_factory=VisionConfig)
    rapidocr: RapidOCRConfig = Field(default_factory=RapidOCRConfig)


class Config(BaseModel):
    """Root configuration container.

    Attributes:
        ocr: OCR module configuration
    """

    ocr: OCRModuleConfig = Field(default_factory=OCRModuleConfig)


class VisionCredentials(BaseSettings):
    """Google Cloud Vision credentials read from the environment.

    Attributes:
        google_cloud_vision_api_key: API key (env GOOGLE_CLOUD_VISION_API_KEY)
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    google_cloud_vision_api_key: str = ""


def load_config(config_path: Path) -> Config:
    """Load and validate configuration from YAML file.

    The file may either hold the module settings at top level or nest them
    under an ``ocr:`` key.

    Args:
        config_path: Path to YAML configuration file

    Returns:
        Validated Config object with all settings

    Raises:
        FileNotFoundError: If config file does not exist
        yaml.YAMLError: If YAML parsing fails
        pydantic.ValidationError: If configuration validation fails

    Example:
        >>> config = load_config(Path("src/ocr/config.yaml"))
        >>> print(config.ocr.vision.max_results)
        10
    """
    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path, "r", encoding="utf-8") as f:
        config_dict = yaml.safe_load(f) or {}

    if "ocr" in config_dict:
        config_dict = config_dict["ocr"] or {}

    return Config(ocr=OCRModuleConfig(**config_dict))


def get_default_config() -> Config:
    """Get default configuration from bundled config.yaml file.

    Returns:
        Config object loaded from src/ocr/config.yaml

    Example:
        >>> config = get_default_config()
        >>> print(config.ocr.engine.type)
        vision
    """
    default_config_path = Path(__file__).parent / "config.yaml"
    if default_config_path.exists():
        return load_config(default_config_path)
    else:
        # Fallback to hardcoded defaults if config file is missing
        return Config()
