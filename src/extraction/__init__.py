"""Code extraction from OCR text.

This module turns the noisy text blocks returned by an OCR engine into a
validated 22-character, digit-led label code.

Core Components:
    - types: RecognizedTextBlock, ExtractionResult, ExtractionStrategy
    - validator: Code shape checks and text cleaning
    - extractor: Ordered per-block / combined search strategy

Example:
    >>> from src.extraction import CodeExtractor, RecognizedTextBlock
    >>> blocks = [RecognizedTextBlock("AB"), RecognizedTextBlock("1234567890123456789012")]
    >>> CodeExtractor().extract(blocks)
    '1234567890123456789012'
"""

from .extractor import DEFAULT_STRATEGIES, CodeExtractor, extract_code
from .types import ExtractionResult, ExtractionStrategy, RecognizedTextBlock
from .validator import (
    CODE_SEARCH_PATTERN,
    clean_text,
    find_codes,
    is_valid_code,
    normalize_code,
)

__all__ = [
    # Types
    "RecognizedTextBlock",
    "ExtractionResult",
    "ExtractionStrategy",
    # Extraction
    "CodeExtractor",
    "DEFAULT_STRATEGIES",
    "extract_code",
    # Validation
    "CODE_SEARCH_PATTERN",
    "clean_text",
    "find_codes",
    "is_valid_code",
    "normalize_code",
]
