"""Type definitions for the code extraction module.

This module defines the OCR text block consumed by the extractor and the
detailed extraction result used for logging and debugging.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


@dataclass(frozen=True)
class RecognizedTextBlock:
    """One OCR-detected text region.

    The first block of an OCR response is conventionally the full-page
    concatenation; the remaining blocks are individual regions.

    Attributes:
        text: Recognized text, as returned by the OCR engine.
    """

    text: str


class ExtractionStrategy(Enum):
    """Strategy that produced an extracted code."""

    PER_BLOCK = "per_block"  # Code found inside a single block
    COMBINED = "combined"  # Code found only after joining all blocks


@dataclass
class ExtractionResult:
    """Detailed result of a code extraction attempt.

    Attributes:
        code: Extracted 22-character code, or None if no strategy matched.
        strategy: Strategy that produced the code (None on miss).
        block_index: Index of the block containing the code (PER_BLOCK only).
        blocks_scanned: Number of non-empty blocks examined.
    """

    code: Optional[str]
    strategy: Optional[ExtractionStrategy]
    block_index: Optional[int]
    blocks_scanned: int

    def is_found(self) -> bool:
        """Check if a code was extracted.

        Returns:
            True if a code was found, False otherwise.
        """
        return self.code is not None
