"""OCR collaborators.

This module wraps the OCR services used to read printed labels and exposes
them behind one asynchronous interface that returns text blocks.

Core Components:
    - config_loader: Configuration loading with Pydantic validation
    - engine: OCREngine interface and factory
    - engine_vision: Google Cloud Vision TEXT_DETECTION client (httpx)
    - engine_rapidocr: Local RapidOCR wrapper

Example:
    >>> from src.ocr import create_engine, get_default_config
    >>> engine = create_engine(get_default_config())
    >>> blocks = await engine.recognize(image_bytes)
"""

from .config_loader import (
    Config,
    OCREngineConfig,
    OCRModuleConfig,
    RapidOCRConfig,
    VisionConfig,
    VisionCredentials,
    get_default_config,
    load_config,
)
from .engine import OCREngine, create_engine
from .engine_rapidocr import RapidOCREngine
from .engine_vision import VisionOCREngine

__all__ = [
    # Configuration
    "Config",
    "OCRModuleConfig",
    "OCREngineConfig",
    "VisionConfig",
    "RapidOCRConfig",
    "VisionCredentials",
    "load_config",
    "get_default_config",
    # Engines
    "OCREngine",
    "VisionOCREngine",
    "RapidOCREngine",
    "create_engine",
]
