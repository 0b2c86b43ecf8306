"""Layered heuristic for pulling a label code out of OCR text blocks.

OCR frequently splits a printed code across several detected regions (a
hyphen or a line break in the label is enough). The extractor therefore runs an
ordered list of strategies and returns the result of the first one that
matches:

1. **PER_BLOCK**: each block on its own, in the order given by the OCR engine.
   Resolves the common case and keeps false positives low.
2. **COMBINED**: all blocks joined into one string. Recovers split codes at
   the cost of a higher false-positive risk; callers re-validate downstream.

The order is a tie-break policy: a code found inside a single block always
wins over one that only appears when blocks are glued together.

Example:
    >>> extractor = CodeExtractor()
    >>> extractor.extract([RecognizedTextBlock("Lot#: 9A1B2C3D4E5F6G7H8I9J0K  ")])
    '9A1B2C3D4E5F6G7H8I9J0K'
"""

import logging
from typing import List, Optional, Sequence

from src.common.errors import ExtractionMiss

from .types import ExtractionResult, ExtractionStrategy, RecognizedTextBlock
from .validator import clean_text, find_codes

logger = logging.getLogger(__name__)

DEFAULT_STRATEGIES = (ExtractionStrategy.PER_BLOCK, ExtractionStrategy.COMBINED)


class CodeExtractor:
    """Finds the best-matching 22-character code in OCR text blocks.

    Args:
        strategies: Ordered strategies to try. Defaults to per-block, then
            combined.

    Attributes:
        strategies: Strategy order used by :meth:`extract`.
    """

    def __init__(self, strategies: Optional[Sequence[ExtractionStrategy]] = None):
        """Initialize extractor with a strategy order.

        Args:
            strategies: Ordered strategies. If None, uses DEFAULT_STRATEGIES.

        Raises:
            ValueError: If the strategy list is empty or has repeats.
        """
        self.strategies = tuple(strategies) if strategies is not None else DEFAULT_STRATEGIES

        if not self.strategies:
            raise ValueError("At least one extraction strategy is required")
        if len(set(self.strategies)) != len(self.strategies):
            raise ValueError(f"Duplicate extraction strategies: {self.strategies}")

    def extract(self, blocks: Sequence[RecognizedTextBlock]) -> Optional[str]:
        """Extract the first matching code from OCR text blocks.

        Never raises; absence of a match is returned as None.

        Args:
            blocks: OCR text blocks in engine order.

        Returns:
            The 22-character code, or None.
        """
        return self.extract_with_details(blocks).code

    def require(self, blocks: Sequence[RecognizedTextBlock]) -> ExtractionResult:
        """Extract a code, treating a miss as an error.

        Args:
            blocks: OCR text blocks in engine order.

        Returns:
            ExtractionResult carrying a code.

        Raises:
            ExtractionMiss: If no strategy found a code.
        """
        result = self.extract_with_details(blocks)
        if not result.is_found():
            raise ExtractionMiss(
                f"No digit-led 22-character code found in {result.blocks_scanned} text blocks"
            )
        return result

    def extract_with_details(
        self, blocks: Sequence[RecognizedTextBlock]
    ) -> ExtractionResult:
        """Extract a code and report which strategy found it.

        Args:
            blocks: OCR text blocks in engine order.

        Returns:
            ExtractionResult with the code (or None) and match metadata.
        """
        texts = [block.text for block in blocks if block.text]

        for strategy in self.strategies:
            if strategy == ExtractionStrategy.PER_BLOCK:
                code, block_index = self._scan_per_block(texts)
            else:
                code, block_index = self._scan_combined(texts), None

            if code is not None:
                logger.debug(
                    f"Code found via {strategy.value}: '{code}' "
                    f"(block={block_index}, blocks={len(texts)})"
                )
                return ExtractionResult(
                    code=code,
                    strategy=strategy,
                    block_index=block_index,
                    blocks_scanned=len(texts),
                )

        logger.debug(
            f"No code found in {len(texts)} blocks; sample: {[t[:40] for t in texts[:3]]}"
        )
        return ExtractionResult(
            code=None, strategy=None, block_index=None, blocks_scanned=len(texts)
        )

    def _scan_per_block(self, texts: List[str]):
        """Scan each block on its own and return (code, index) of first match."""
        for index, text in enumerate(texts):
            matches = find_codes(clean_text(text))
            if matches:
                return matches[0], index
        return None, None

    def _scan_combined(self, texts: List[str]) -> Optional[str]:
        """Scan all blocks joined together and return the first match."""
        if not texts:
            return None

        matches = find_codes(clean_text(" ".join(texts)))
        return matches[0] if matches else None


def extract_code(blocks: Sequence[RecognizedTextBlock]) -> Optional[str]:
    """Extract a code with the default strategy order.

    Args:
        blocks: OCR text blocks in engine order.

    Returns:
        The 22-character code, or None.
    """
    return CodeExtractor().extract(blocks)
